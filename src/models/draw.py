"""
src/models/draw.py
Immutable records shared by the engine, loaders and services.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Draw:
    """One historical (or synthetic) Lotofácil draw."""

    contest: int
    date: str
    numbers: tuple[int, ...]

    def __post_init__(self) -> None:
        # Lists handed in by loaders are frozen so no caller can reorder them later
        object.__setattr__(self, "numbers", tuple(self.numbers))

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Draw":
        """Build from a DB row: {"contest", "draw_date", "numbers"}."""
        return cls(
            contest=int(record["contest"]),
            date=str(record.get("draw_date") or ""),
            numbers=tuple(int(n) for n in record["numbers"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {"contest": self.contest, "draw_date": self.date, "numbers": list(self.numbers)}


@dataclass(frozen=True)
class Parity:
    even: float
    odd: float


@dataclass(frozen=True)
class DuplicateEntry:
    """A combination drawn more than once, with every contest that produced it."""

    numbers: tuple[int, ...]
    contests: tuple[int, ...]


@dataclass(frozen=True)
class StatisticsReport:
    frequency: Mapping[int, int]
    parity: Parity
    sum_avg: float
    sum_std_dev: float
    sum_median: float
    sum_mode: tuple[int, ...]
    prime_count: Mapping[int, int]
    repeats_from_previous: tuple[int, ...]
    duplicates: tuple[DuplicateEntry, ...]

    def __post_init__(self) -> None:
        # read-only views over private copies
        object.__setattr__(self, "frequency", MappingProxyType(dict(self.frequency)))
        object.__setattr__(self, "prime_count", MappingProxyType(dict(self.prime_count)))
        object.__setattr__(self, "sum_mode", tuple(self.sum_mode))
        object.__setattr__(self, "repeats_from_previous", tuple(self.repeats_from_previous))
        object.__setattr__(self, "duplicates", tuple(self.duplicates))

    def __hash__(self) -> int:
        return hash((
            tuple(self.frequency.items()),
            self.parity,
            self.sum_avg,
            self.sum_std_dev,
            self.sum_median,
            self.sum_mode,
            tuple(self.prime_count.items()),
            self.repeats_from_previous,
            self.duplicates,
        ))

    def to_dict(self) -> dict[str, Any]:
        return {
            "frequency": dict(self.frequency),
            "parity": asdict(self.parity),
            "sum_avg": self.sum_avg,
            "sum_std_dev": self.sum_std_dev,
            "sum_median": self.sum_median,
            "sum_mode": list(self.sum_mode),
            "prime_count": dict(self.prime_count),
            "repeats_from_previous": list(self.repeats_from_previous),
            "duplicates": [
                {"numbers": list(d.numbers), "contests": list(d.contests)} for d in self.duplicates
            ],
        }


@dataclass(frozen=True)
class PredictionResult:
    numbers: tuple[int, ...]
    reasoning: str
    confidence: float


@dataclass(frozen=True)
class SavedPrediction(PredictionResult):
    id: str = ""
    timestamp: int = 0  # epoch milliseconds
    match_count: int = field(default=0, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "SavedPrediction":
        return cls(
            numbers=tuple(int(n) for n in record["numbers"]),
            reasoning=record.get("reasoning", ""),
            confidence=float(record.get("confidence", 0.0)),
            id=str(record["id"]),
            timestamp=int(record.get("timestamp", 0)),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "numbers": list(self.numbers),
            "reasoning": self.reasoning,
            "confidence": self.confidence,
            "timestamp": self.timestamp,
        }
