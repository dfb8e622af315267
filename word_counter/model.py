from __future__ import annotations

import csv
import json
import logging
import os
from collections import Counter
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence

from word_counter.cleaning import TokenSourceOptions, load_tokens, normalize
from word_counter.timing import timed
from word_counter.types import CountReport, FrequencyTable, LookupResult, TermCount, WordStat

LOGGER = logging.getLogger(__name__)


class CountMismatchError(RuntimeError):
    """Raised when the linear and quadratic counters disagree."""


@dataclass(frozen=True)
class PipelineResult:
    total_words: int
    linear_table: FrequencyTable
    ranked_stats: List[WordStat]
    ranked_table: FrequencyTable
    linear_duration: float


def env_int(var_name: str, default: int) -> int:
    return int(os.getenv(var_name, str(default)))


def count_linear(words: Iterable[str]) -> FrequencyTable:
    """Count words with direct key lookup, one pass over the input."""

    word_to_count: FrequencyTable = {}
    for word in words:
        count = word_to_count.get(word)
        if count is not None:
            word_to_count[word] = count + 1
        else:
            word_to_count[word] = 1
    return word_to_count


def count_quadratic(words: Iterable[str]) -> List[WordStat]:
    """Count words by scanning every record collected so far.

    This is the naive approach and grows with distinct words times tokens.
    It stays around as the baseline the linear counter is measured against.
    Records come back in first-occurrence order.
    """

    stats: List[WordStat] = []
    for word in words:
        for stat in stats:
            if stat.word == word:
                stat.count += 1
                break
        else:
            stats.append(WordStat(word, 1))
    return stats


def by_count(stat: WordStat) -> int:
    return stat.count


def rank(stats: Sequence[WordStat], key: Callable[[WordStat], Any] = by_count) -> List[WordStat]:
    """Return copies of ``stats`` sorted ascending by ``key``.

    ``sorted`` is stable, so records with equal keys keep their input order.
    """

    return [replace(stat) for stat in sorted(stats, key=key)]


def to_table(stats: Iterable[WordStat]) -> FrequencyTable:
    word_to_count: FrequencyTable = {}
    for stat in stats:
        word_to_count[stat.word] = stat.count
    return word_to_count


def lookup(table: FrequencyTable, word: str) -> LookupResult:
    # Callers normalize the query themselves.
    if word in table:
        return LookupResult(table[word], True)
    return LookupResult(0, False)


def merge_tables(*tables: FrequencyTable) -> FrequencyTable:
    """Sum partial tables key by key."""

    merged: Counter[str] = Counter()
    for table in tables:
        merged.update(table)
    return dict(merged)


def top_terms(table: FrequencyTable, top_n: int) -> list[TermCount]:
    if top_n < 0:
        raise ValueError("top_n must not be negative.")
    # sorted first so equal counts stay alphabetical
    counter = Counter(dict(sorted(table.items())))
    return [{"term": term, "count": count} for term, count in counter.most_common(top_n)]


def count_words(
    tokens: Sequence[str],
    *,
    timer: Callable[..., tuple[Any, float]] = timed,
) -> PipelineResult:
    """Run both counting algorithms over raw tokens and check they agree."""

    words = normalize(tokens)
    LOGGER.info("Counting %d words", len(words))

    linear_table, duration = timer(count_linear, words)
    LOGGER.debug("Linear counter took %.6fs", duration)

    ranked_stats = rank(count_quadratic(words))
    ranked_table = to_table(ranked_stats)

    if linear_table != ranked_table:
        raise CountMismatchError(
            f"Counters disagree: {len(linear_table)} linear words vs {len(ranked_table)} ranked words"
        )

    LOGGER.info("Counted %d distinct words", len(linear_table))
    return PipelineResult(
        total_words=len(words),
        linear_table=linear_table,
        ranked_stats=ranked_stats,
        ranked_table=ranked_table,
        linear_duration=duration,
    )


def load_words(paths: Sequence[Path], options: TokenSourceOptions | None = None) -> List[str]:
    """Load raw tokens from every file in order."""

    tokens: List[str] = []
    for path in paths:
        tokens.extend(load_tokens(path, options))
    return tokens


def count_files(paths: Sequence[Path], options: TokenSourceOptions | None = None) -> FrequencyTable:
    """Count each file on its own and merge the per-file tables."""

    partials = []
    for path in paths:
        partial = count_linear(normalize(load_tokens(path, options)))
        LOGGER.debug("%s: %d distinct words", path, len(partial))
        partials.append(partial)
    return merge_tables(*partials)


def build_report(result: PipelineResult, top_n: int) -> CountReport:
    return {
        "total_words": result.total_words,
        "distinct_words": len(result.linear_table),
        "top_terms": top_terms(result.linear_table, top_n),
        "frequencies": dict(sorted(result.linear_table.items())),
    }


def save_report(result: PipelineResult, output_dir: Path, *, top_n: int = 10) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / "frequency_table.json"
    csv_path = output_dir / "ranked_words.csv"

    LOGGER.info("Writing word counts to %s and %s", json_path, csv_path)
    with json_path.open("w", encoding="utf-8") as outfile:
        json.dump(build_report(result, top_n), outfile, ensure_ascii=False, indent=2)

    with csv_path.open("w", encoding="utf-8", newline="") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=["rank", "word", "count"])
        writer.writeheader()
        for position, stat in enumerate(result.ranked_stats, start=1):
            writer.writerow({"rank": position, "word": stat.word, "count": stat.count})

    return json_path
