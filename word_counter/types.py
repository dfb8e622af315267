from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple, TypedDict

FrequencyTable = Dict[str, int]


@dataclass
class WordStat:
    """Count record for one distinct normalized word."""

    word: str
    count: int = 1


class LookupResult(NamedTuple):
    count: int
    found: bool


class TermCount(TypedDict):
    term: str
    count: int


class CountReport(TypedDict):
    """Structured report written by the export step."""

    total_words: int
    distinct_words: int
    top_terms: list[TermCount]
    frequencies: FrequencyTable
