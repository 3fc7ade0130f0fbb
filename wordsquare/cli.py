"""
Command-line word square solver.

Usage:
    wordsquare [dictionary] [--size N] [--workers K] [--all] [--seed S]

Examples:
    wordsquare words.txt
    wordsquare words.txt --size 5 --workers 4
    wordsquare words.txt --size 3 --all

This will:
  1. Build a dictionary from the word list
  2. Reduce it to words of the requested length
  3. Find every word square of that size
  4. Show one random solution (or all of them with --all)
"""
import argparse
import logging
import random
import sys

from wordsquare.metrics import LOG_FORMAT, StageTimer
from wordsquare.settings import settings
from wordsquare.solver import solve
from wordsquare.trie import load_dictionary

logger = logging.getLogger("wordsquare")

INDENT = " " * 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wordsquare", description="Enumerate N x N word squares")
    parser.add_argument("dictionary", nargs="?", default=str(settings.DICTIONARY_PATH),
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--size", type=int, default=settings.GRID_SIZE,
                        help=f"Side length of the square (default: {settings.GRID_SIZE})")
    parser.add_argument("--workers", type=int, default=settings.WORKERS,
                        help="Processes to spread the search over (default: %(default)s)")
    parser.add_argument("--all", action="store_true",
                        help="Print every solution instead of one random pick")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for picking the random solution")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose or settings.DEBUG else logging.INFO,
                        format=LOG_FORMAT)

    if args.size <= 0:
        parser.error(f"--size must be a positive integer, got {args.size}")

    timer = StageTimer()

    try:
        with timer.stage("load"):
            dictionary = load_dictionary(args.dictionary)
    except FileNotFoundError:
        logger.error("Dictionary not found: %s", args.dictionary)
        return 1
    if not dictionary:
        logger.error("Dictionary %s holds no usable words", args.dictionary)
        return 1
    logger.info("Full dictionary holds %d words", len(dictionary))

    with timer.stage("reduce"):
        reduced = dictionary.restricted_to_length(args.size)
    logger.info("Reduced dictionary holds %d %d-letter words", len(reduced), args.size)

    with timer.stage("solve"):
        solutions = solve(args.size, reduced, workers=args.workers)
    logger.info("%d solutions found", len(solutions))

    if not solutions:
        print("No solutions found!")
    elif args.all:
        for solution in solutions:
            print("\n".join(INDENT + row for row in solution))
            print()
    else:
        pick = random.Random(args.seed).choice(solutions)
        print("\n".join(INDENT + row for row in pick))

    logger.info("All tasks completed in %.1fms", timer.total_ms)
    return 0


if __name__ == "__main__":
    sys.exit(main())
