import sys
from pathlib import Path

import pytest

# Repo root = one level above tests/; modules live at the root (flat layout).
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# small fixed list so tests never need the nltk stop-word download
STOPWORDS = frozenset(["the", "and", "of", "a", "in", "is", "to", "was", "on"])


@pytest.fixture
def stopwords():
    return STOPWORDS


@pytest.fixture
def make_corpus(tmp_path: Path):
    """write {category: {file name: text}} under tmp_path/Corpus and return the root"""

    def _make(layout):
        root = tmp_path / "Corpus"
        for category, docs in layout.items():
            group = root / category
            group.mkdir(parents=True, exist_ok=True)
            for fname, text in docs.items():
                (group / fname).write_text(text, encoding="utf-8")
        return root

    return _make
