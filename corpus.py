# corpus.py
# Enumerate a <root>/<category>/<document> corpus and read document paragraphs.
# .docx files are read with python-docx, .txt files as blank-line separated
# paragraphs.

import os
import re
import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import docx

from utils import read_text_file

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".docx", ".txt")

_blank_line_re = re.compile(r"\n\s*\n")


class CorpusError(Exception):
    """raised when the corpus, a document or the stop-word list can't be read"""


@dataclass
class Document:
    doc_id: int
    path: str
    category: str
    word_count: int = 0
    paragraph_count: int = 0

    @property
    def file_name(self) -> str:
        return os.path.basename(self.path)


# ----------------- paragraph readers -----------------

def _read_docx_paragraphs(path) -> List[str]:
    return [p.text for p in docx.Document(str(path)).paragraphs]

def _read_txt_paragraphs(path) -> List[str]:
    raw = read_text_file(path).replace("\r\n", "\n")
    return [" ".join(block.split()) for block in _blank_line_re.split(raw)]

def read_paragraphs(path) -> List[str]:
    """
    Return every paragraph of a document as raw text, in file order.
    Whitespace-only paragraphs are included; use content_paragraphs() for the
    numbering the index works with.
    """
    ext = os.path.splitext(str(path))[1].lower()
    try:
        if ext == ".docx":
            return _read_docx_paragraphs(path)
        if ext == ".txt":
            return _read_txt_paragraphs(path)
    except Exception as e:
        # python-docx raises a mix of OSError, KeyError and zipfile errors
        raise CorpusError(f"Failed to read document {path}: {e}") from e
    raise CorpusError(f"Unsupported document type: {path}")

def content_paragraphs(path) -> List[str]:
    """paragraphs that contain at least one word; paragraph N is item N-1"""
    return [p for p in read_paragraphs(path) if p.split()]


# ----------------- corpus enumeration -----------------

def _visible_entries(folder) -> List[str]:
    try:
        names = os.listdir(folder)
    except OSError as e:
        raise CorpusError(f"Failed to list {folder}: {e}") from e
    return sorted(n for n in names if not n.startswith("."))

def iter_corpus(corpus_root) -> Iterator[Tuple[str, str]]:
    """
    Yield (path, category) for every document under corpus_root.

    The layout is fixed: each sub-directory of the root is a category and holds
    the documents of that category. Entries are visited in sorted order so
    document ids are the same on every run.
    """
    if not os.path.isdir(corpus_root):
        raise CorpusError(f"Folder not found: {corpus_root}")

    for category in _visible_entries(corpus_root):
        group = os.path.join(corpus_root, category)
        if not os.path.isdir(group):
            logger.warning("Skipping %s: not a category directory", group)
            continue
        for fname in _visible_entries(group):
            path = os.path.join(group, fname)
            if not os.path.isfile(path):
                logger.warning("Skipping %s: nested directories are not indexed", path)
                continue
            if not fname.lower().endswith(SUPPORTED_EXTENSIONS):
                logger.warning("Skipping %s: unsupported file type", path)
                continue
            yield path, category
