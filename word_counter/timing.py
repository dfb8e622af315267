from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, TypeVar

import numpy as np
from numpy.typing import NDArray

LOGGER = logging.getLogger(__name__)
FloatArray = NDArray[np.float64]

T = TypeVar("T")

# z value for a 95% confidence interval
CONFIDENCE_Z = 1.96


@dataclass(frozen=True)
class TimingSummary:
    """Wall-clock statistics for repeated runs of one counter."""

    name: str
    runs: int
    mean: float
    half_width: float

    def __str__(self) -> str:
        return f"{self.name}: {self.mean:.6f}s ± {self.half_width:.6f}s over {self.runs} runs"


def timed(func: Callable[..., T], *args: object) -> Tuple[T, float]:
    """Call ``func`` and return its result together with the elapsed seconds."""

    start = time.perf_counter()
    result = func(*args)
    duration = time.perf_counter() - start
    return result, duration


def summarize_durations(name: str, durations: Sequence[float]) -> TimingSummary:
    data: FloatArray = np.asarray(durations, dtype=np.float64)
    if data.size == 0:
        raise ValueError("At least one duration is required.")
    half_width = CONFIDENCE_Z * data.std() / np.sqrt(data.size)
    return TimingSummary(name=name, runs=int(data.size), mean=float(data.mean()), half_width=float(half_width))


def benchmark(
    func: Callable[[Sequence[str]], T],
    words: Sequence[str],
    *,
    repeats: int,
    name: str | None = None,
) -> Tuple[T, TimingSummary]:
    if repeats < 1:
        raise ValueError("repeats must be at least 1.")

    label = name or getattr(func, "__name__", "counter")
    LOGGER.info("Timing %s over %d words (%d runs)", label, len(words), repeats)

    result, first = timed(func, words)
    durations = [first]
    for _ in range(repeats - 1):
        result, duration = timed(func, words)
        durations.append(duration)

    return result, summarize_durations(label, durations)
