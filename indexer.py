# indexer.py
# Build the in-memory inverted index (term -> postings) for a category corpus.
# Stop words are removed and the remaining words are Porter-stemmed.

import logging
from bisect import bisect_left
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from corpus import CorpusError, Document, content_paragraphs, iter_corpus
from utils import default_stopwords, load_stopwords, make_stemmer, normalize_word, split_words

logger = logging.getLogger(__name__)

# (absolute word index, word index within paragraph, paragraph index), all 1-based
Position = Tuple[int, int, int]


@dataclass
class Posting:
    doc_id: int
    positions: List[Position] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.positions)

    @property
    def paragraphs(self) -> List[int]:
        return [p for _, _, p in self.positions]


class InvertedIndex:
    """
    Term -> list of Postings, plus the document table.

    Documents are added one at a time in increasing doc_id order, which is
    what makes the per-term active-document marker valid: a term's last
    posting always belongs to the document being scanned or an earlier one.
    Posting lists end up sorted by doc_id.
    """

    def __init__(self, stopwords: FrozenSet[str], stemmer=None):
        self.postings: Dict[str, List[Posting]] = {}
        self.documents: List[Document] = []
        self.stopwords = stopwords
        self.stemmer = stemmer or make_stemmer()
        # term -> posting of the most recently scanned document containing it
        self._active: Dict[str, Posting] = {}

    def __len__(self):
        return len(self.documents)

    def __contains__(self, term):
        return term in self.postings

    @property
    def vocabulary_size(self) -> int:
        return len(self.postings)

    def stem(self, word: str) -> str:
        return self.stemmer.stem(word)

    def is_stopword(self, word: str) -> bool:
        return word in self.stopwords

    # ----- build -----

    def new_document(self, path: str, category: str) -> Document:
        doc = Document(doc_id=len(self.documents), path=path, category=category)
        self.documents.append(doc)
        return doc

    def add_document(self, path: str, category: str, paragraphs: Iterable[str]) -> Document:
        """Scan one document's paragraphs into the index and return its Document."""
        doc = self.new_document(path, category)
        word_index = 0
        para_index = 0

        for paragraph in paragraphs:
            words = split_words(paragraph)
            if not words:
                continue
            para_index += 1
            for para_word_index, word in enumerate(words, start=1):
                word_index += 1
                term = normalize_word(word)
                if not term or self.is_stopword(term):
                    continue
                self._add_occurrence(self.stem(term), doc.doc_id,
                                     (word_index, para_word_index, para_index))

        doc.word_count = word_index
        doc.paragraph_count = para_index
        return doc

    def _add_occurrence(self, term: str, doc_id: int, position: Position):
        plist = self.postings.setdefault(term, [])
        active = self._active.get(term)
        if active is not None and active.doc_id == doc_id:
            active.positions.append(position)
            return
        posting = Posting(doc_id, [position])
        plist.append(posting)
        self._active[term] = posting

    def finish(self) -> "InvertedIndex":
        # markers are only meaningful while documents are being added
        self._active = {}
        return self

    # ----- lookups -----

    def document(self, doc_id: int) -> Document:
        return self.documents[doc_id]

    def get_postings(self, term: str) -> List[Posting]:
        return self.postings.get(term, [])

    def document_frequency(self, term: str) -> int:
        return len(self.postings.get(term, ()))

    def posting_for(self, term: str, doc_id: int) -> Optional[Posting]:
        plist = self.postings.get(term)
        if not plist:
            return None
        i = bisect_left(plist, doc_id, key=lambda p: p.doc_id)
        if i < len(plist) and plist[i].doc_id == doc_id:
            return plist[i]
        return None

    def category_sizes(self) -> Counter:
        return Counter(d.category for d in self.documents)


def build_index(documents: Iterable[Tuple[str, str, Iterable[str]]], stopwords: FrozenSet[str], stemmer=None) -> InvertedIndex:
    """build an index from (path, category, paragraphs) triples"""
    index = InvertedIndex(stopwords, stemmer)
    for path, category, paragraphs in documents:
        index.add_document(path, category, paragraphs)
    return index.finish()


def build_index_from_folder(folder_path, stopwords: Optional[FrozenSet[str]] = None, stopwords_path=None) -> InvertedIndex:
    """
    Index every document under folder_path (<root>/<category>/<document>).

    Stop words come from `stopwords` if given, else from the file at
    `stopwords_path`, else from nltk's English list. Any read failure raises
    CorpusError; there is no partial index.
    """
    if stopwords is None:
        if stopwords_path:
            try:
                stopwords = load_stopwords(stopwords_path)
            except OSError as e:
                raise CorpusError(f"Failed to read stop words from {stopwords_path}: {e}") from e
            logger.info("Loaded %d stop words from %s", len(stopwords), stopwords_path)
        else:
            try:
                stopwords = default_stopwords()
            except LookupError as e:
                raise CorpusError(f"nltk English stop words unavailable and could not be downloaded: {e}") from e
            logger.info("Using nltk English stop words (%d)", len(stopwords))

    logger.info("Indexing files under: %s", folder_path)
    index = InvertedIndex(stopwords)
    per_category = Counter()
    for path, category in iter_corpus(folder_path):
        doc = index.add_document(path, category, content_paragraphs(path))
        per_category[category] += 1
        logger.debug("Indexed [%d] %s (%d words, %d paragraphs)",
                     doc.doc_id, path, doc.word_count, doc.paragraph_count)

    for category, n in sorted(per_category.items()):
        logger.info("  %-20s %d documents", category, n)
    logger.info("Documents indexed: %d", len(index))
    logger.info("Vocabulary size: %d", index.vocabulary_size)
    return index.finish()


if __name__ == "__main__":
    import argparse
    from utils import get_logger

    parser = argparse.ArgumentParser(description="build the index for a corpus and print its statistics")
    parser.add_argument("corpus", help="corpus root (one sub-directory per category)")
    parser.add_argument("--stopwords", help="newline-delimited stop-word file (default: nltk english)")
    args = parser.parse_args()

    get_logger("")
    try:
        index = build_index_from_folder(args.corpus, stopwords_path=args.stopwords)
    except CorpusError as e:
        raise SystemExit(str(e))
    print(f"Documents indexed: {len(index)}")
    print(f"Vocabulary size: {index.vocabulary_size}")
    for category, n in sorted(index.category_sizes().items()):
        print(f"  {category}: {n}")
    print("Done.")
