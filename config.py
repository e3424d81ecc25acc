# config.py
# read-only search settings, optionally loaded from an INI file

from configparser import ConfigParser
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

# keyword (stemmed query term) -> category label; the first keyword found in a
# query decides its category, so order matters
DEFAULT_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("lidstrom", "NikLidstrom"),
    ("sec", "GeorgiaTech"),
    ("heisman", "Heisman"),
    ("quebec", "QuebecNordiques"),
    ("scout", "KCScouts"),
    ("nhl", "NHL"),
    ("nfl", "NFL"),
    ("fb", "FBS"),
    ("stanford", "Stanford"),
    ("iron", "IronBowl"),
)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class SearchConfig:
    corpus_root: Optional[str] = None
    stopwords_path: Optional[str] = None
    output_path: str = "results.txt"

    # results within threshold_ratio of the score at rank threshold_rank are kept
    threshold_rank: int = 20
    threshold_ratio: float = 0.90

    snippet_words: int = 50

    categories: Tuple[Tuple[str, str], ...] = field(default=DEFAULT_CATEGORIES)

    def __post_init__(self):
        if self.threshold_rank < 1:
            raise ConfigError(f"threshold_rank must be >= 1, got {self.threshold_rank}")
        if not 0.0 <= self.threshold_ratio <= 1.0:
            raise ConfigError(f"threshold_ratio must be within [0, 1], got {self.threshold_ratio}")
        if self.snippet_words < 1:
            raise ConfigError(f"snippet_words must be >= 1, got {self.snippet_words}")

    def override(self, **changes) -> "SearchConfig":
        """copy with the given fields replaced; None values are ignored"""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self


def _get(cparser: ConfigParser, section: str, key: str, cast=str):
    if not cparser.has_option(section, key):
        return None
    raw = cparser[section][key].strip()
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"[{section}] {key}: invalid value {raw!r}") from e


def load_config(config_file: str, base: Optional[SearchConfig] = None) -> SearchConfig:
    """
    Build a SearchConfig from an INI file.

    Recognised sections (all optional):

        [CORPUS]      ROOT, STOPWORDS, OUTPUT
        [RANKING]     THRESHOLD_RANK, THRESHOLD_RATIO
        [SNIPPET]     MAX_WORDS
        [CATEGORIES]  keyword = CategoryLabel   (one per line, in priority order)

    Option names may be written in any case. Missing values fall back to
    `base` (or the defaults).
    """
    # option names are case-insensitive (ConfigParser lowercases them);
    # category labels are values and keep their case
    cparser = ConfigParser()
    if not cparser.read(config_file, encoding="utf-8"):
        raise ConfigError(f"Config file not found: {config_file}")

    config = base or SearchConfig()
    categories = None
    if cparser.has_section("CATEGORIES"):
        categories = tuple(
            (keyword.strip().lower(), label.strip())
            for keyword, label in cparser["CATEGORIES"].items()
        )

    return config.override(
        corpus_root=_get(cparser, "CORPUS", "ROOT"),
        stopwords_path=_get(cparser, "CORPUS", "STOPWORDS"),
        output_path=_get(cparser, "CORPUS", "OUTPUT"),
        threshold_rank=_get(cparser, "RANKING", "THRESHOLD_RANK", int),
        threshold_ratio=_get(cparser, "RANKING", "THRESHOLD_RATIO", float),
        snippet_words=_get(cparser, "SNIPPET", "MAX_WORDS", int),
        categories=categories,
    )


def add_config_arguments(parser):
    """options shared by the command-line entry points"""
    parser.add_argument("--config", help="path to an INI config file")
    parser.add_argument("--corpus", help="corpus root (one sub-directory per category)")
    parser.add_argument("--stopwords", help="newline-delimited stop-word file (default: nltk english)")
    parser.add_argument("--output", help="file the query reports are appended to")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args) -> SearchConfig:
    """config file first, then command-line flags on top"""
    config = load_config(args.config) if args.config else SearchConfig()
    config = config.override(
        corpus_root=args.corpus,
        stopwords_path=args.stopwords,
        output_path=args.output,
    )
    if not config.corpus_root:
        raise ConfigError("No corpus given (use --corpus or [CORPUS] ROOT in the config file)")
    return config
