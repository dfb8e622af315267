"""Word frequency counting with a linear and a quadratic algorithm."""

from .cleaning import load_tokens, normalize
from .model import (
    CountMismatchError,
    count_linear,
    count_quadratic,
    count_words,
    lookup,
    merge_tables,
    rank,
    save_report,
    to_table,
)
from .types import FrequencyTable, LookupResult, WordStat

__all__ = [
    "load_tokens",
    "normalize",
    "count_linear",
    "count_quadratic",
    "count_words",
    "rank",
    "to_table",
    "lookup",
    "merge_tables",
    "save_report",
    "CountMismatchError",
    "FrequencyTable",
    "LookupResult",
    "WordStat",
]
