"""
src/models/statistical/duplicate_detector.py
Group draws by their canonical (sorted) combination and surface repeats.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from src.models.draw import Draw, DuplicateEntry


def canonical_key(numbers: Sequence[int]) -> tuple[int, ...]:
    """Sorted-ascending tuple of the numbers. sorted() copies, the input is left as-is."""
    return tuple(sorted(numbers))


class DuplicateDetector:
    """Collect contest ids per combination; report combinations seen more than once."""

    def __init__(self) -> None:
        # dicts keep insertion order → groups come out in order of first appearance
        self.groups: dict[tuple[int, ...], list[int]] = {}

    def observe(self, draw: Draw) -> tuple[int, ...]:
        key = canonical_key(draw.numbers)
        self.groups.setdefault(key, []).append(draw.contest)
        return key

    def duplicates(self) -> tuple[DuplicateEntry, ...]:
        return tuple(
            DuplicateEntry(numbers=key, contests=tuple(contests))
            for key, contests in self.groups.items()
            if len(contests) > 1
        )


def find_duplicates(draws: Iterable[Draw]) -> tuple[DuplicateEntry, ...]:
    detector = DuplicateDetector()
    for draw in draws:
        detector.observe(draw)
    return detector.duplicates()
