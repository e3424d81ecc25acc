import pytest

from indexer import build_index
from snippet import (
    Snippet,
    best_paragraph_positions,
    build_snippet,
    document_postings,
    find_best_paragraph,
    render_snippet,
)


def _words(n, overrides=None):
    words = [f"w{i}" for i in range(1, n + 1)]
    for pos, word in (overrides or {}).items():
        words[pos - 1] = word
    return " ".join(words)


def test_find_best_paragraph_counts_runs():
    assert find_best_paragraph([3, 1, 3, 2, 2, 2]) == (2, 3, [])
    assert find_best_paragraph([4]) == (4, 1, [])


def test_find_best_paragraph_ties_lowest_wins():
    assert find_best_paragraph([5, 3, 5, 3, 1]) == (3, 2, [5])
    assert find_best_paragraph([1, 2, 3]) == (1, 1, [2, 3])


def test_find_best_paragraph_ignores_earlier_smaller_ties():
    # 1 and 2 tie at one occurrence before 4 takes over with two
    assert find_best_paragraph([1, 2, 4, 4]) == (4, 2, [])


def test_find_best_paragraph_empty():
    with pytest.raises(ValueError):
        find_best_paragraph([])


def test_short_paragraph_is_returned_whole():
    text = "Lidstrom won the Norris Trophy seven times."
    assert render_snippet(text, [1]) == (text, False)
    assert render_snippet(_words(50), [50]) == (_words(50), False)


def test_long_span_gives_truncated_window():
    text, truncated = render_snippet(_words(120), [10, 70])
    assert truncated
    assert text.split() == [f"w{i}" for i in range(10, 60)]


def test_window_stops_short_at_end_of_paragraph():
    text, truncated = render_snippet(_words(80), [40, 95])
    assert truncated
    assert text.split() == [f"w{i}" for i in range(40, 81)]


def test_51_word_paragraph_extends_to_sentence_end():
    text, truncated = render_snippet(_words(51, {45: "end."}), [1, 40])
    assert not truncated
    assert text.split()[-1] == "end."
    assert len(text.split()) == 45


def test_51_word_paragraph_without_sentence_end_gives_full_window():
    text, truncated = render_snippet(_words(51), [1, 40])
    assert not truncated
    assert text.split() == [f"w{i}" for i in range(1, 51)]


def test_sentence_end_before_last_occurrence_is_ignored():
    text, _ = render_snippet(_words(60, {10: "stop.", 35: "done?"}), [1, 30])
    assert text.split()[-1] == "done?"
    assert len(text.split()) == 35


def test_sentence_end_with_closing_quote():
    text, _ = render_snippet(_words(60, {12: 'said."'}), [5, 8])
    assert text.split() == [f"w{i}" for i in range(5, 12)] + ['said."']


def test_snippet_lines():
    s = Snippet(doc_id=0, paragraph=3, text="some words", truncated=True, other_paragraphs=[5, 7])
    assert s.lines() == [
        "SNIPPET: some words ... (PARAGRAPH #3)",
        "OTHER HIGHLY RELEVANT PARAGRAPHS: 5  7",
    ]
    assert Snippet(doc_id=0, paragraph=1, text="short").lines() == ["SNIPPET: short (PARAGRAPH #1)"]


def test_build_snippet_picks_densest_paragraph(stopwords):
    paragraphs = [
        "The puck dropped at center ice.",
        "A goal, then another goal from the puck carrier.",
        "Nothing here.",
        "Goal.",
    ]
    index = build_index([("/c/NHL/game.txt", "NHL", paragraphs)], stopwords)
    terms = ["puck", "goal"]

    postings = document_postings(0, terms, index)
    assert best_paragraph_positions(postings, 2) == [2, 5, 8]

    snippet = build_snippet(0, terms, index, load_paragraphs=lambda path: paragraphs)
    assert snippet.paragraph == 2
    assert snippet.text == paragraphs[1]
    assert snippet.other_paragraphs == []
    assert 1 <= snippet.paragraph <= index.document(0).paragraph_count


def test_build_snippet_reports_tied_paragraphs(stopwords):
    paragraphs = ["puck", "", "nothing", "puck again", "puck"]
    index = build_index([("/c/NHL/game.txt", "NHL", paragraphs)], stopwords)
    loaded = [p for p in paragraphs if p.split()]
    snippet = build_snippet(0, ["puck"], index, load_paragraphs=lambda path: loaded)
    # the blank paragraph is not numbered, so the matches sit in 1, 3 and 4
    assert (snippet.paragraph, snippet.other_paragraphs) == (1, [3, 4])
    assert all(1 <= p <= index.document(0).paragraph_count for p in snippet.other_paragraphs)


def test_build_snippet_from_file(make_corpus, stopwords):
    from indexer import build_index_from_folder

    long_par = _words(70, {3: "puck", 20: "puck", 30: "over."})
    root = make_corpus({"NHL": {"game.txt": "Intro puck.\n\n" + long_par}})
    index = build_index_from_folder(root, stopwords=stopwords)
    snippet = build_snippet(0, ["puck"], index)
    assert snippet.paragraph == 2
    assert snippet.text.split()[0] == "puck"
    assert snippet.text.split()[-1] == "over."
    assert snippet.other_paragraphs == []
