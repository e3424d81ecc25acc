# run_example.py
# batch runner: index the corpus once, answer a fixed list of queries
# (or the one given with --q) and write all reports to the results file
import argparse
import logging

from config import ConfigError, add_config_arguments, config_from_args
from corpus import CorpusError
from indexer import build_index_from_folder
from report import write_report
from searcher import search_and_snippet
from utils import get_logger

# demo queries, one per corpus category plus one with no category
DEMO_QUERIES = [
    "Nicklas Lidstrom Norris Trophy",
    "Georgia Tech leaving the SEC",
    "Heisman Trophy winners",
    "Quebec Nordiques relocation",
    "Kansas City Scouts",
    "NHL expansion teams",
    "NFL draft",
    "FBS bowl eligibility",
    "Stanford football",
    "Iron Bowl rivalry",
    "the and of",
]


def main(argv=None):
    parser = add_config_arguments(argparse.ArgumentParser(description="demo runner for the search engine"))
    parser.add_argument("--q", nargs="*", help="single query to run (wrap in quotes)")
    args = parser.parse_args(argv)
    get_logger("", level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = config_from_args(args)
        index = build_index_from_folder(config.corpus_root, stopwords_path=config.stopwords_path)
    except (ConfigError, CorpusError) as e:
        raise SystemExit(str(e))

    queries = [" ".join(args.q)] if args.q else DEMO_QUERIES

    with open(config.output_path, "w", encoding="utf8") as out:
        for q in queries:
            print("\n== query:", q)
            try:
                result = search_and_snippet(q, index, config)
            except CorpusError as e:
                raise SystemExit(str(e))
            write_report(out, result, index)
            if not result.selected:
                print("  no results")
                continue
            for rnk, s in enumerate(result.selected, start=1):
                doc = index.document(s.doc_id)
                print(f"{rnk}. {doc.file_name} [{doc.category}] (score={s.score:.4f})")
            ev = result.evaluation
            if ev is not None:
                print(f"   precision={ev.precision:.2%} recall={ev.recall:.2%} ({ev.category})")

    print(f"\nreports written to {config.output_path}")


if __name__ == "__main__":
    main()
