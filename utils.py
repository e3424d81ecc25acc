# utils.py
# shared text helpers: normalization, stemming, stop words, logging

import re
import logging
from pathlib import Path
from typing import FrozenSet, List, Optional

from nltk.stem import PorterStemmer

_strip_re = re.compile(r"[^a-z0-9]+")
_query_strip_re = re.compile(r"[^a-z0-9\s]+")

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# ----------------- normalization -----------------

def normalize_word(word: str) -> str:
    """lowercase a single word and drop everything outside [a-z0-9]"""
    return _strip_re.sub("", word.lower())

def normalize_query_text(q: str) -> str:
    """Normalize a raw query string.

    Lowercases, then removes every character that is not a letter, digit or
    whitespace. Punctuation is deleted rather than replaced, so "U.S." becomes
    "us" exactly as it does when documents are indexed.
    """
    if not q:
        return ""
    return _query_strip_re.sub("", q.lower())

def tokenize(text: str) -> List[str]:
    """normalized whitespace tokenizer used for queries"""
    return normalize_query_text(text).split()

def split_words(paragraph: str) -> List[str]:
    # raw words, punctuation kept; word positions are counted on this split
    return paragraph.split()

# ----------------- stemming -----------------

def make_stemmer() -> PorterStemmer:
    # classic Porter rules, without nltk's extra irregular-form table
    return PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)

# ----------------- stop words -----------------

def load_stopwords(path) -> FrozenSet[str]:
    """
    read a newline-delimited stop-word file (one word per line).
    blank lines are ignored. raises OSError if the file can't be read.
    """
    with open(path, "r", encoding="utf8") as f:
        return frozenset(w.strip().lower() for w in f if w.strip())

def default_stopwords() -> FrozenSet[str]:
    """nltk english stop words, downloading the list on first use"""
    try:
        from nltk.corpus import stopwords
        return frozenset(stopwords.words("english"))
    except LookupError:
        import nltk
        nltk.download("stopwords", quiet=True)
        from nltk.corpus import stopwords
        return frozenset(stopwords.words("english"))

# ----------------- files -----------------

def read_text_file(path):
    # utf-8 (with or without BOM) first; latin-1 accepts any byte sequence
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except UnicodeDecodeError:
        with open(path, "r", encoding="latin-1") as f:
            return f.read()

def save_text_file(path, text, append=False):
    with open(path, "a" if append else "w", encoding="utf8") as f:
        f.write(text)

# ----------------- logging -----------------

def get_logger(name: str, filename: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Set up a logger that writes to the console and, if `filename` is given,
    to that file as well. A logger that already has handlers is returned as-is
    so repeated calls don't duplicate output.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)
    logger.addHandler(stream_handler)

    if filename:
        log_path = Path(filename)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    return logger
