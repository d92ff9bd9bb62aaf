"""
src/ingest/csv_loader.py
Parse Lotofácil result exports: Concurso;Data;Bola1..Bola15
(semicolon or comma separated, optional header row).
"""
from __future__ import annotations

import re
from pathlib import Path

from src.models.draw import Draw
from src.utils.config import DRAW_SIZE, in_range
from src.utils.logger import get_logger

log = get_logger("ingest.csv")

_LINE_SPLIT = re.compile(r"\r?\n")
_COLUMN_SPLIT = re.compile(r"[;,]")
_HEADER_MARKERS = ("concurso", "bola")
_MIN_COLUMNS = 2 + DRAW_SIZE  # contest, date, 15 balls


class CSVParseError(ValueError):
    """Raised when a file yields no valid draw."""


def _to_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_row(line: str) -> Draw | None:
    columns = _COLUMN_SPLIT.split(line)
    if len(columns) < _MIN_COLUMNS:
        return None

    contest = _to_int(columns[0])
    if contest is None:
        return None

    numbers = [n for n in (_to_int(c) for c in columns[2:_MIN_COLUMNS]) if n is not None]
    if len(numbers) != DRAW_SIZE:
        return None

    return Draw(contest=contest, date=columns[1].strip(), numbers=tuple(sorted(numbers)))


def parse_lotofacil_csv(text: str) -> list[Draw]:
    """
    Return every well-formed row as a Draw, sorted by contest ascending.
    Malformed rows are skipped.
    """
    lines = _LINE_SPLIT.split(text)
    if not lines:
        return []

    first = lines[0].lower()
    start = 1 if any(marker in first for marker in _HEADER_MARKERS) else 0

    draws: list[Draw] = []
    skipped = 0
    for line in lines[start:]:
        line = line.strip()
        if not line:
            continue
        draw = _parse_row(line)
        if draw is None:
            skipped += 1
            log.debug(f"Skipping malformed row: {line[:60]}")
            continue
        draws.append(draw)

    draws.sort(key=lambda d: d.contest)
    log.info(f"Parsed {len(draws)} draws ({skipped} rows skipped)")
    return draws


def load_csv(path: str | Path) -> list[Draw]:
    """Read and parse a CSV export. Raises CSVParseError if nothing valid is found."""
    text = Path(path).read_text(encoding="utf-8-sig")
    draws = parse_lotofacil_csv(text)
    if not draws:
        raise CSVParseError(f"No valid Lotofácil draws found in {path}")
    return draws


def validate_draw(draw: Draw) -> bool:
    """Legality check before persisting: 15 distinct numbers in [1, 25]."""
    nums = draw.numbers
    if len(nums) != DRAW_SIZE:
        log.error(f"Contest {draw.contest}: expected {DRAW_SIZE} numbers, got {len(nums)}: {list(nums)}")
        return False
    if len(set(nums)) != DRAW_SIZE:
        log.error(f"Contest {draw.contest}: duplicate numbers: {list(nums)}")
        return False
    if not all(in_range(n) for n in nums):
        log.error(f"Contest {draw.contest}: numbers out of range: {list(nums)}")
        return False
    return True
