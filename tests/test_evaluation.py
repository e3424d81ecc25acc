import pytest

from config import DEFAULT_CATEGORIES
from evaluation import Evaluation, evaluate, match_category
from indexer import build_index
from searcher import ScoredDocument


@pytest.fixture
def labelled_index(stopwords):
    cats = ["NHL", "NHL", "NHL", "NFL", "Heisman"]
    return build_index(((f"/c/{c}/d{i}.txt", c, ["puck"]) for i, c in enumerate(cats)), stopwords)


def test_match_category_uses_table_order():
    # both "nhl" and "lidstrom" trigger; lidstrom comes first in the table
    assert match_category(["nhl", "lidstrom"], DEFAULT_CATEGORIES) == "NikLidstrom"
    assert match_category(["puck", "nfl"], DEFAULT_CATEGORIES) == "NFL"
    assert match_category(["puck"], DEFAULT_CATEGORIES) is None
    assert match_category([], DEFAULT_CATEGORIES) is None


def test_match_category_custom_table():
    table = (("goal", "Scoring"), ("puck", "Equipment"))
    assert match_category(["puck", "goal"], table) == "Scoring"


def test_evaluate_precision_recall(labelled_index):
    selected = [ScoredDocument(0, 1.0), ScoredDocument(3, 0.9), ScoredDocument(1, 0.5)]
    ev = evaluate(selected, ["nhl"], labelled_index, DEFAULT_CATEGORIES)
    assert ev == Evaluation(category="NHL", true_positives=2, selected=3, relevant=3)
    assert ev.precision == pytest.approx(2 / 3)
    assert ev.recall == pytest.approx(2 / 3)


def test_evaluate_no_true_positives(labelled_index):
    ev = evaluate([ScoredDocument(3, 1.0)], ["heisman"], labelled_index, DEFAULT_CATEGORIES)
    assert ev.true_positives == 0
    assert ev.precision == 0.0
    assert ev.recall == 0.0


def test_evaluate_not_computable(labelled_index):
    assert evaluate([ScoredDocument(0, 1.0)], ["puck"], labelled_index, DEFAULT_CATEGORIES) is None


@pytest.mark.parametrize("tp,selected,relevant", [(0, 0, 0), (1, 1, 5), (3, 4, 3)])
def test_precision_and_recall_stay_in_unit_range(tp, selected, relevant):
    ev = Evaluation(category="X", true_positives=tp, selected=selected, relevant=relevant)
    assert 0.0 <= ev.precision <= 1.0
    assert 0.0 <= ev.recall <= 1.0
