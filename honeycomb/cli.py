"""Command line solver: print every honeycomb word found in a dictionary."""
import argparse
import logging
import sys

from honeycomb.errors import HoneycombError
from honeycomb.grid import load_honeycomb
from honeycomb.settings import settings
from honeycomb.solver import solve
from honeycomb.trie import load_trie

logger = logging.getLogger("honeycomb")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="honeycomb-solve",
        description="Find dictionary words traced through adjacent honeycomb cells.",
    )
    parser.add_argument("honeycomb", help="honeycomb file: layer count then the ring letters")
    parser.add_argument("dictionary", help="dictionary file, one word per line")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        try:
            grid = load_honeycomb(args.honeycomb)
        except OSError as e:
            logger.debug("Cannot read %s: %s", args.honeycomb, e)
            print("Error: honeycomb.txt file missing.")
            return 1
        try:
            trie = load_trie(args.dictionary, settings.MIN_WORD_LENGTH, settings.MAX_WORD_LENGTH)
        except OSError as e:
            logger.debug("Cannot read %s: %s", args.dictionary, e)
            print("Error: dictionary.txt file missing.")
            return 1
    except HoneycombError as e:
        print(f"Error: {e}")
        return 1

    words, _ = solve(grid, trie)
    logger.info("Found %d distinct words", len(words))
    if not words:
        print("No words found.")
    for word in words:
        print(word)
    return 0


if __name__ == "__main__":
    sys.exit(main())
