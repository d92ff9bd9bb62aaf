"""
src/models/statistical/aggregator.py
Single forward pass over the draws: frequency, parity, sums, primes,
repeats from the previous draw. Feeds the duplicate detector on the way.

The pass is an explicit left fold: fold_draw(state, draw, index) is applied
to every draw in input order, starting from a fresh AggregateState().
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import Sequence

from src.models.draw import Draw
from src.models.statistical.duplicate_detector import DuplicateDetector
from src.utils.config import PRIME_NUMBERS, number_range

_PRIMES = frozenset(PRIME_NUMBERS)


def _zero_frequency() -> dict[int, int]:
    lo, hi = number_range()
    return {n: 0 for n in range(lo, hi + 1)}


@dataclass
class AggregateState:
    """Running totals of one aggregation. Owned by the fold that created it."""

    frequency: dict[int, int] = field(default_factory=_zero_frequency)
    total_even: int = 0
    total_odd: int = 0
    sums: list[int] = field(default_factory=list)
    prime_count: dict[int, int] = field(default_factory=dict)
    repeats: list[int] = field(default_factory=list)
    detector: DuplicateDetector = field(default_factory=DuplicateDetector)
    previous: frozenset[int] | None = None
    draw_count: int = 0


def fold_draw(state: AggregateState, draw: Draw, index: int) -> AggregateState:
    """
    Account for one draw and return the updated state.
    `index` is the draw's position in the input; repeats are recorded for index >= 1.
    """
    even = odd = total = primes = 0
    for num in draw.numbers:
        state.frequency[num] = state.frequency.get(num, 0) + 1
        if num % 2 == 0:
            even += 1
        else:
            odd += 1
        total += num
        if num in _PRIMES:
            primes += 1

    state.total_even += even
    state.total_odd += odd
    state.sums.append(total)
    state.prime_count[primes] = state.prime_count.get(primes, 0) + 1

    current = frozenset(draw.numbers)
    if index > 0 and state.previous is not None:
        state.repeats.append(len(current & state.previous))
    state.previous = current

    state.detector.observe(draw)
    state.draw_count += 1
    return state


def aggregate(draws: Sequence[Draw]) -> AggregateState:
    """Fold every draw, in input order, into a fresh state."""
    return reduce(
        lambda state, item: fold_draw(state, item[1], item[0]),
        enumerate(draws),
        AggregateState(),
    )
