# evaluation.py
# precision / recall of a result list against the corpus category labels

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from indexer import InvertedIndex


@dataclass
class Evaluation:
    category: str
    true_positives: int
    selected: int
    relevant: int

    @property
    def precision(self) -> float:
        return self.true_positives / self.selected if self.selected else 0.0

    @property
    def recall(self) -> float:
        return self.true_positives / self.relevant if self.relevant else 0.0


def match_category(terms: Sequence[str], categories: Iterable[Tuple[str, str]]) -> Optional[str]:
    """category of the first trigger keyword (in table order) found among the query terms"""
    present = set(terms)
    for keyword, category in categories:
        if keyword in present:
            return category
    return None


def evaluate(selected, terms: Sequence[str], index: InvertedIndex, categories) -> Optional[Evaluation]:
    """
    Compare the selected documents with the category the query maps to.
    Returns None when no trigger keyword matches (precision/recall can't be
    computed for that query).
    """
    category = match_category(terms, categories)
    if category is None:
        return None
    tp = sum(1 for s in selected if index.document(s.doc_id).category == category)
    relevant = sum(1 for d in index.documents if d.category == category)
    return Evaluation(category=category, true_positives=tp, selected=len(selected), relevant=relevant)
