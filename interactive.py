# interactive.py
# simple interactive console for querying the corpus
# every report is printed and appended to the results file

import argparse
import logging

from config import ConfigError, add_config_arguments, config_from_args
from corpus import CorpusError
from indexer import build_index_from_folder
from report import format_result
from searcher import search_and_snippet
from utils import get_logger, read_text_file, save_text_file

EXIT_WORDS = ("exit", "quit", "q")


def read_queries(prompt="\nquery > "):
    """yield queries until an empty line, an exit word, EOF or Ctrl-C"""
    while True:
        try:
            query = input(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not query or query.lower() in EXIT_WORDS:
            return
        yield query


def main(argv=None):
    parser = add_config_arguments(argparse.ArgumentParser(description="interactive keyword search over a category corpus"))
    args = parser.parse_args(argv)
    get_logger("", level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = config_from_args(args)
        # build the index once, before any query
        index = build_index_from_folder(config.corpus_root, stopwords_path=config.stopwords_path)
    except (ConfigError, CorpusError) as e:
        raise SystemExit(str(e))

    print("🔎 simple search engine")
    print("type a query and press enter (empty line, 'exit' or 'quit' to stop)")
    print("-" * 50)

    # one results file per session, appended to after every query
    save_text_file(config.output_path, "")
    n = 0
    for query in read_queries():
        try:
            result = search_and_snippet(query, index, config)
        except CorpusError as e:
            raise SystemExit(str(e))
        text = format_result(result, index)
        print(text)
        save_text_file(config.output_path, text, append=True)
        n += 1

    # replay every report of the session, as saved
    print("=" * 50)
    print("All Searches")
    print("=" * 50)
    print(read_text_file(config.output_path))
    print(f"{n} queries answered, results saved to {config.output_path}")
    print("bye 👋")


if __name__ == "__main__":
    main()
