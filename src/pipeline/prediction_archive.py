"""
src/pipeline/prediction_archive.py
Archive, search and replay saved predictions.
Archived guesses can be appended to the history as synthetic draws
(negative contest ids) so the engine sees them alongside real results.
"""
from __future__ import annotations

import re
import time
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, Sequence

from src.models.draw import Draw, PredictionResult, SavedPrediction
from src.utils import supabase_client as db
from src.utils.config import in_range
from src.utils.logger import get_logger

log = get_logger("pipeline.archive")

_QUERY_SPLIT = re.compile(r"[\s,]+")
_LEADING_INT = re.compile(r"[+-]?\d+")


# ── Persistence ───────────────────────────────────────────────────

def new_saved_prediction(result: PredictionResult) -> SavedPrediction:
    return SavedPrediction(
        numbers=result.numbers,
        reasoning=result.reasoning,
        confidence=result.confidence,
        id=uuid.uuid4().hex[:9],
        timestamp=int(time.time() * 1000),
    )


def archive_prediction(prediction: SavedPrediction) -> SavedPrediction:
    """Persist a prediction unless one with the same id is already archived."""
    if db.get_saved_prediction(prediction.id):
        log.info(f"Prediction {prediction.id} already archived, skipping")
        return prediction
    db.insert_saved_prediction(prediction.to_record())
    log.info(f"Archived prediction {prediction.id}: {list(prediction.numbers)}")
    return prediction


def list_predictions() -> list[SavedPrediction]:
    return [SavedPrediction.from_record(row) for row in db.get_saved_predictions()]


def delete_prediction(prediction_id: str) -> None:
    db.delete_saved_prediction(prediction_id)
    log.info(f"Deleted prediction {prediction_id}")


# ── Search ────────────────────────────────────────────────────────

def parse_search_numbers(query: str) -> list[int]:
    """
    '01 07, 22' → [1, 7, 22]. Each token contributes its leading integer
    ("07x" → 7, "+7" → 7); tokens without one or outside 1..25 are ignored.
    """
    numbers: list[int] = []
    for token in _QUERY_SPLIT.split(query.strip()):
        match = _LEADING_INT.match(token)
        if match and in_range(int(match.group(0))):
            numbers.append(int(match.group(0)))
    return numbers


def search_predictions(
    predictions: Iterable[SavedPrediction],
    numbers: Sequence[int],
) -> list[SavedPrediction]:
    """
    With no search numbers, return every prediction (match_count=0).
    Otherwise keep predictions sharing at least one number, best match first.
    """
    if not numbers:
        return [replace(p, match_count=0) for p in predictions]

    wanted = set(numbers)
    scored = [replace(p, match_count=len(wanted.intersection(p.numbers))) for p in predictions]
    hits = [p for p in scored if p.match_count > 0]
    return sorted(hits, key=lambda p: p.match_count, reverse=True)


# ── Synthetic draws ───────────────────────────────────────────────

def predictions_as_draws(predictions: Sequence[SavedPrediction]) -> list[Draw]:
    """Contest ids -1, -2, ... in archive order; date is the archive timestamp."""
    draws = []
    for idx, p in enumerate(predictions, start=1):
        date = datetime.fromtimestamp(p.timestamp / 1000, tz=timezone.utc).strftime("%d/%m/%Y")
        draws.append(Draw(contest=-idx, date=date, numbers=p.numbers))
    return draws


def merge_draws(history: Sequence[Draw], predictions: Sequence[SavedPrediction]) -> list[Draw]:
    """Historical draws first, then archived predictions. Repeats across the seam are caller-visible."""
    return list(history) + predictions_as_draws(predictions)
