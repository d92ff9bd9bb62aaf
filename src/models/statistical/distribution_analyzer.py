"""
src/models/statistical/distribution_analyzer.py
Descriptive statistics over the per-draw sum series.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

import numpy as np


class InsufficientDataError(ValueError):
    """Raised when there are no draws to describe."""


@dataclass(frozen=True)
class SumDistribution:
    mean: float
    std_dev: float
    median: float
    mode: tuple[int, ...]


class DistributionAnalyzer:
    """Mean, population std-dev, median and multiset mode of a list of sums."""

    def __init__(self, sums: Sequence[int]):
        if len(sums) == 0:
            raise InsufficientDataError("Cannot describe an empty sum series.")
        self.sums = list(sums)

    def mean(self) -> float:
        return float(np.mean(self.sums))

    def std_dev(self) -> float:
        # ddof=0 → divide by count, not count - 1
        return float(np.std(self.sums, ddof=0))

    def median(self) -> float:
        ordered = sorted(self.sums)
        mid = len(ordered) // 2
        if len(ordered) % 2 != 0:
            return float(ordered[mid])
        return (ordered[mid - 1] + ordered[mid]) / 2

    def mode(self) -> tuple[int, ...]:
        """Every sum tied at the highest frequency, ascending."""
        counts = Counter(self.sums)
        max_freq = max(counts.values())
        return tuple(sorted(s for s, c in counts.items() if c == max_freq))

    def describe(self) -> SumDistribution:
        return SumDistribution(
            mean=self.mean(),
            std_dev=self.std_dev(),
            median=self.median(),
            mode=self.mode(),
        )
