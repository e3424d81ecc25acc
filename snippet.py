# snippet.py
# Paragraph-level snippets: find the paragraph of a matched document where the
# query terms are densest and cut a bounded excerpt out of it.

import re
from dataclasses import dataclass, field
from itertools import groupby
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from corpus import CorpusError, content_paragraphs
from indexer import InvertedIndex, Posting
from utils import split_words

SNIPPET_WORDS = 50
TRUNCATION_MARKER = "..."

# a word that closes a sentence, allowing trailing quotes/brackets: end." end?)
_sentence_end_re = re.compile(r"[.?!][\"')\]]*$")


@dataclass
class Snippet:
    doc_id: int
    paragraph: int
    text: str
    truncated: bool = False
    other_paragraphs: List[int] = field(default_factory=list)

    def lines(self) -> List[str]:
        marker = f" {TRUNCATION_MARKER}" if self.truncated else ""
        out = [f"SNIPPET: {self.text}{marker} (PARAGRAPH #{self.paragraph})"]
        if self.other_paragraphs:
            out.append("OTHER HIGHLY RELEVANT PARAGRAPHS: " + "  ".join(str(p) for p in self.other_paragraphs))
        return out


# ----------------- paragraph selection -----------------

def document_postings(doc_id: int, terms: Iterable[str], index: InvertedIndex) -> List[Posting]:
    """the posting of every query term for doc_id (one per term occurrence in the query)"""
    found = []
    for term in terms:
        posting = index.posting_for(term, doc_id)
        if posting is not None:
            found.append(posting)
    return found

def find_best_paragraph(paragraph_numbers: Iterable[int]) -> Tuple[int, int, List[int]]:
    """
    Return (best paragraph, its occurrence count, other paragraphs with the same count).

    The numbers are sorted and walked once; each run of equal numbers is one
    paragraph's count. On a tie the lowest paragraph number is the best one and
    the rest are reported as also relevant, in ascending order.
    """
    nums = sorted(paragraph_numbers)
    if not nums:
        raise ValueError("no paragraph numbers to choose from")

    best, best_count = nums[0], 0
    runs = []
    for para, group in groupby(nums):
        n = sum(1 for _ in group)
        runs.append((para, n))
        if n > best_count:
            best, best_count = para, n
    others = [p for p, n in runs if n == best_count and p != best]
    return best, best_count, others

def best_paragraph_positions(postings: Iterable[Posting], paragraph: int) -> List[int]:
    """sorted within-paragraph word indices of every occurrence in `paragraph`"""
    return sorted(pw for posting in postings for _, pw, p in posting.positions if p == paragraph)

# ----------------- rendering -----------------

def render_snippet(paragraph_text: str, positions: Sequence[int], max_words: int = SNIPPET_WORDS) -> Tuple[str, bool]:
    """
    Cut the excerpt for one paragraph. Returns (text, truncated).

    positions are the sorted 1-based word indices of the query terms in the
    paragraph. Short paragraphs are returned whole. Otherwise the excerpt
    starts at the first occurrence and holds at most max_words words:
      - if the occurrences span max_words or more, the window is flagged
        as truncated;
      - otherwise it stops at the first sentence end at or after the last
        occurrence, or runs to the full window if there is none.
    """
    words = split_words(paragraph_text)
    if len(words) <= max_words:
        return " ".join(words), False

    first, last = positions[0], positions[-1]
    span = last - first
    window = words[first - 1:first - 1 + max_words]
    if span >= max_words:
        return " ".join(window), True

    for offset in range(span, len(window)):
        if _sentence_end_re.search(window[offset]):
            return " ".join(window[:offset + 1]), False
    return " ".join(window), False

def build_snippet(doc_id: int, terms: Sequence[str], index: InvertedIndex,
                  max_words: int = SNIPPET_WORDS,
                  load_paragraphs: Optional[Callable[[str], List[str]]] = None) -> Snippet:
    """
    Snippet for a selected document. Paragraph text is read through
    load_paragraphs (default: content_paragraphs, the same paragraph
    numbering the indexer used).
    """
    postings = document_postings(doc_id, terms, index)
    paragraph_numbers = [p for posting in postings for p in posting.paragraphs]
    best, _, others = find_best_paragraph(paragraph_numbers)
    positions = best_paragraph_positions(postings, best)

    doc = index.document(doc_id)
    paragraphs = (load_paragraphs or content_paragraphs)(doc.path)
    if best > len(paragraphs):
        raise CorpusError(f"{doc.path} has {len(paragraphs)} paragraphs, expected at least {best}; "
                          "was it modified after indexing?")

    text, truncated = render_snippet(paragraphs[best - 1], positions, max_words)
    return Snippet(doc_id=doc_id, paragraph=best, text=text, truncated=truncated, other_paragraphs=others)
