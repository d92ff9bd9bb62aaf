"""
src/models/statistics_engine.py
Draws → StatisticsReport: aggregator pass, then sum distribution, then
duplicate groups collected during the same pass.

Repeats are measured against the previous draw *in the order supplied*.
Callers that want a chronological metric must sort by contest first.
"""
from __future__ import annotations

from typing import Sequence

from src.models.draw import Draw, Parity, StatisticsReport
from src.models.statistical.aggregator import aggregate
from src.models.statistical.distribution_analyzer import DistributionAnalyzer, InsufficientDataError
from src.utils.config import PRIME_NUMBERS
from src.utils.logger import get_logger

log = get_logger("engine")

__all__ = [
    "InsufficientDataError",
    "average_repeats",
    "bottom_numbers",
    "compute_statistics",
    "top_numbers",
]


def compute_statistics(draws: Sequence[Draw]) -> StatisticsReport:
    """
    Build a fresh report from a snapshot of `draws`.
    Raises InsufficientDataError when there is nothing to describe.
    """
    if len(draws) == 0:
        raise InsufficientDataError("No draws provided to compute statistics.")

    state = aggregate(draws)
    dist = DistributionAnalyzer(state.sums).describe()
    n_draws = state.draw_count

    # every possible prime count 0..9 is reported, zero when unseen
    prime_count = {k: state.prime_count.get(k, 0) for k in range(len(PRIME_NUMBERS) + 1)}

    report = StatisticsReport(
        frequency=dict(state.frequency),
        parity=Parity(even=state.total_even / n_draws, odd=state.total_odd / n_draws),
        sum_avg=dist.mean,
        sum_std_dev=dist.std_dev,
        sum_median=dist.median,
        sum_mode=dist.mode,
        prime_count=prime_count,
        repeats_from_previous=tuple(state.repeats),
        duplicates=state.detector.duplicates(),
    )
    log.debug(
        f"Statistics over {n_draws} draws: avg={report.sum_avg:.2f} "
        f"median={report.sum_median} duplicates={len(report.duplicates)}"
    )
    return report


def average_repeats(report: StatisticsReport) -> float:
    """Mean count of numbers repeated from the previous draw; 0.0 for a single draw."""
    repeats = report.repeats_from_previous
    if not repeats:
        return 0.0
    return sum(repeats) / len(repeats)


def top_numbers(report: StatisticsReport, n: int = 10) -> list[int]:
    freq = report.frequency
    return sorted(freq, key=lambda num: (-freq[num], num))[:n]


def bottom_numbers(report: StatisticsReport, n: int = 5) -> list[int]:
    freq = report.frequency
    return sorted(freq, key=lambda num: (freq[num], num))[:n]
