from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import count_words, lookup, save_report
from .cleaning import TokenSourceOptions, env_path, normalize, normalize_word, read_query
from .model import count_files, count_linear, count_quadratic, env_int, load_words, to_table
from .timing import benchmark

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
LOGGER = logging.getLogger(__name__)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        default=[env_path("WORD_COUNT_INPUT", "input.txt")],
        help="Text files to count (default: %(default)s or WORD_COUNT_INPUT)",
    )
    parser.add_argument(
        "--tokenizer",
        choices=["whitespace", "nltk"],
        default=os.getenv("WORD_COUNT_TOKENIZER", "whitespace"),
        help="How raw text is split into tokens (default: %(default)s or WORD_COUNT_TOKENIZER)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Word frequency counter")
    subparsers = parser.add_subparsers(dest="command", required=True)

    count_parser = subparsers.add_parser("count", help="Count words with both algorithms and look one up")
    _add_source_arguments(count_parser)
    count_parser.add_argument(
        "--word",
        default=None,
        help="Word to look up; read from the terminal when omitted",
    )
    count_parser.add_argument(
        "--output-dir",
        type=Path,
        default=os.getenv("WORD_COUNT_OUTPUT_DIR"),
        help="Optional directory for JSON/CSV reports (or WORD_COUNT_OUTPUT_DIR)",
    )
    count_parser.add_argument(
        "--top-n",
        type=int,
        default=env_int("WORD_COUNT_TOP_N", 10),
        help="Most frequent words to include in reports (default: %(default)s or WORD_COUNT_TOP_N)",
    )

    table_parser = subparsers.add_parser("table", help="Count each file and print the merged table")
    _add_source_arguments(table_parser)

    benchmark_parser = subparsers.add_parser("benchmark", help="Time the linear and quadratic counters")
    _add_source_arguments(benchmark_parser)
    benchmark_parser.add_argument(
        "--repeats",
        type=int,
        default=env_int("WORD_COUNT_REPEATS", 5),
        help="Runs per counter (default: %(default)s or WORD_COUNT_REPEATS)",
    )

    return parser


def run_count(args: argparse.Namespace, options: TokenSourceOptions) -> int:
    if args.top_n < 0:
        raise ValueError("--top-n must not be negative.")

    tokens = load_words(args.files, options)
    result = count_words(tokens)

    print(f"Total count of words: {result.total_words}")
    print(f"Duration for counting with map implementation: {result.linear_duration:.6f}s")
    print(f"Counting with map result: {result.linear_table}")
    ranked = ", ".join(f"{stat.word}:{stat.count}" for stat in result.ranked_stats)
    print(f"Sort result wordStats: [{ranked}]")

    if args.output_dir is not None:
        save_report(result, args.output_dir, top_n=args.top_n)

    query = normalize_word(args.word) if args.word is not None else read_query()
    count, found = lookup(result.ranked_table, query)
    if found:
        print(f"Found it! Word count: {count}")
    else:
        LOGGER.debug("No entry for %r", query)
        print("Word is not present.")
    return 0


def run_table(args: argparse.Namespace, options: TokenSourceOptions) -> int:
    table = count_files(args.files, options)
    for word, count in sorted(table.items(), key=lambda item: (-item[1], item[0])):
        print(f"{word}\t{count}")
    return 0


def run_benchmark(args: argparse.Namespace, options: TokenSourceOptions) -> int:
    words = normalize(load_words(args.files, options))
    linear_table, linear_summary = benchmark(count_linear, words, repeats=args.repeats, name="linear")
    quadratic_stats, quadratic_summary = benchmark(
        count_quadratic, words, repeats=args.repeats, name="quadratic"
    )

    print(f"Total count of words: {len(words)}")
    print(linear_summary)
    print(quadratic_summary)

    if linear_table != to_table(quadratic_stats):
        LOGGER.warning("Linear and quadratic counters disagree")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        options = TokenSourceOptions(tokenizer=args.tokenizer)
        if args.command == "count":
            return run_count(args, options)
        if args.command == "table":
            return run_table(args, options)
        if args.command == "benchmark":
            return run_benchmark(args, options)
    except OSError as exc:
        LOGGER.error("File error: %s", exc)
        return 1
    except (ValueError, LookupError) as exc:
        LOGGER.error("%s", exc)
        return 2

    parser.error("No command provided")
    return 2


def count_cli() -> None:
    argv = sys.argv[1:]
    sys.exit(main(["count", *argv]))


if __name__ == "__main__":
    sys.exit(main())
