# searcher.py
# Query side of the engine:
#  - query normalization + stop-word removal + Porter stemming
#  - tf-idf scoring (tf normalized by document length, idf = log10(N / df))
#  - relative threshold cut around the 20th ranked document
#  - snippet + precision/recall for every selected document

import math
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import SearchConfig
from evaluation import Evaluation, evaluate
from indexer import InvertedIndex, Posting
from snippet import Snippet, build_snippet
from utils import tokenize

logger = logging.getLogger(__name__)


@dataclass
class ScoredDocument:
    doc_id: int
    score: float


@dataclass
class QueryResult:
    query: str
    terms: List[str]
    selected: List[ScoredDocument] = field(default_factory=list)
    snippets: Dict[int, Snippet] = field(default_factory=dict)
    evaluation: Optional[Evaluation] = None
    matched: int = 0


# ----------------- query processing -----------------

def process_query(query: str, index: InvertedIndex) -> List[str]:
    """
    Turn a raw query into the list of index terms it contains.

    A token survives if it is not a stop word and its stem is in the index
    vocabulary. Everything else is dropped without complaint, so a query made
    only of stop words or unknown words gives an empty list. Repeated words
    are kept, in query order.
    """
    terms = []
    for token in tokenize(query):
        if index.is_stopword(token):
            logger.debug("dropping stop word %r", token)
            continue
        root = index.stem(token)
        if root not in index:
            logger.debug("dropping %r: %r not in vocabulary", token, root)
            continue
        terms.append(root)
    return terms

# ----------------- tf-idf -----------------

def term_frequency(posting: Posting, word_count: int) -> float:
    return posting.count / word_count if word_count else 0.0

def inverse_document_frequency(corpus_size: int, df: int) -> float:
    return math.log10(corpus_size / df) if df else 0.0

def score_query(terms: List[str], index: InvertedIndex) -> List[ScoredDocument]:
    """
    Sum tf * idf over the query terms for every document that contains at
    least one of them. Each posting list is walked newest document first
    (the most recently added posting leads), and documents come back in the
    order they were first reached.
    """
    scores: Dict[int, float] = {}
    corpus_size = len(index)
    for term in terms:
        plist = index.get_postings(term)
        idf = inverse_document_frequency(corpus_size, len(plist))
        for posting in reversed(plist):
            doc = index.document(posting.doc_id)
            tf = term_frequency(posting, doc.word_count)
            scores[posting.doc_id] = scores.get(posting.doc_id, 0.0) + tf * idf
    return [ScoredDocument(doc_id, score) for doc_id, score in scores.items()]

# ----------------- result selection -----------------

def rank(scored: List[ScoredDocument]) -> List[ScoredDocument]:
    # sorted() is stable, so equal scores keep their encounter order
    return sorted(scored, key=lambda s: s.score, reverse=True)

def select_results(scored: List[ScoredDocument], threshold_rank: int = 20, threshold_ratio: float = 0.90) -> List[ScoredDocument]:
    """
    Rank the scored documents and cut the list relative to the document at
    `threshold_rank` (1-based): everything is kept down to and including the
    first document scoring below threshold_ratio times that document's score.

    With fewer than threshold_rank matches there is no reference score, so
    every match is returned.
    """
    ranked = rank(scored)
    if len(ranked) < threshold_rank:
        logger.debug("only %d matches (< %d), skipping threshold", len(ranked), threshold_rank)
        return ranked

    threshold = ranked[threshold_rank - 1].score * threshold_ratio
    selected = []
    for s in ranked:
        selected.append(s)
        if s.score < threshold:
            break
    logger.debug("threshold %.6f kept %d of %d matches", threshold, len(selected), len(ranked))
    return selected

# ----------------- wrapper: search + snippet -----------------

def search_and_snippet(query: str, index: InvertedIndex, config: Optional[SearchConfig] = None) -> QueryResult:
    config = config or SearchConfig()
    terms = process_query(query, index)
    result = QueryResult(query=query, terms=terms)
    if not terms:
        logger.info("query %r has no indexed terms", query)
    else:
        scored = score_query(terms, index)
        result.matched = len(scored)
        result.selected = select_results(scored, config.threshold_rank, config.threshold_ratio)
        for s in result.selected:
            result.snippets[s.doc_id] = build_snippet(s.doc_id, terms, index, max_words=config.snippet_words)
    result.evaluation = evaluate(result.selected, terms, index, config.categories)
    return result


# ----------------- CLI for quick testing -----------------

if __name__ == "__main__":
    import argparse
    from config import ConfigError, add_config_arguments, config_from_args
    from corpus import CorpusError
    from indexer import build_index_from_folder
    from report import format_result
    from utils import get_logger

    parser = add_config_arguments(argparse.ArgumentParser(description="searcher cli - tf-idf + paragraph snippets + precision/recall"))
    parser.add_argument("--q", required=True, help="query string (wrap in quotes)")
    args = parser.parse_args()

    get_logger("", level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        config = config_from_args(args)
        index = build_index_from_folder(config.corpus_root, stopwords_path=config.stopwords_path)
        print(format_result(search_and_snippet(args.q, index, config), index))
    except (ConfigError, CorpusError) as e:
        raise SystemExit(str(e))
