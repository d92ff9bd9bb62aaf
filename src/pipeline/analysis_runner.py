"""
src/pipeline/analysis_runner.py
Compute the statistics report for a draw history and, on demand,
request a prediction built from it.
"""
from __future__ import annotations

from typing import Any, Sequence

from src.models.draw import Draw, SavedPrediction, StatisticsReport
from src.models.statistics_engine import (
    InsufficientDataError,
    average_repeats,
    compute_statistics,
    top_numbers,
)
from src.pipeline.prediction_archive import merge_draws
from src.services.prediction_client import request_prediction
from src.utils.config import TOTAL_COMBINATIONS
from src.utils.logger import get_logger

log = get_logger("pipeline.analysis")


def run_analysis(
    draws: Sequence[Draw],
    include_archived: bool = False,
    predictions: Sequence[SavedPrediction] = (),
) -> dict[str, Any]:
    """
    1. Optionally append archived predictions as synthetic draws
    2. Compute the report
    3. Return a result dict for the console
    """
    snapshot = merge_draws(draws, predictions) if include_archived else list(draws)
    log.info(f"[ANALYSIS] {len(draws)} draws, {len(snapshot) - len(draws)} archived predictions")

    try:
        report = compute_statistics(snapshot)
    except InsufficientDataError as exc:
        log.warning(f"[ANALYSIS] {exc}")
        return {"success": False, "error": str(exc)}

    return {
        "success": True,
        "draw_count": len(snapshot),
        "report": report,
        "avg_repeats": average_repeats(report),
        "top_numbers": top_numbers(report, 10),
    }


def generate_prediction(draws: Sequence[Draw], recent: int = 10) -> dict[str, Any]:
    """Compute the report and ask the prediction service for a guess."""
    if not draws:
        raise InsufficientDataError("No draws loaded. Import a CSV first.")

    report = compute_statistics(draws)
    recent_games = [list(d.numbers) for d in draws[-recent:]]
    prediction = request_prediction(report, recent_games)

    log.info(f"[PREDICT] {list(prediction.numbers)}")
    return {
        "numbers": list(prediction.numbers),
        "reasoning": prediction.reasoning,
        "confidence": prediction.confidence,
        "prediction": prediction,
        "success": True,
    }


def format_report(report: StatisticsReport, draw_count: int) -> list[tuple[str, str]]:
    """Rounded (label, value) rows for display."""
    return [
        ("Draws", str(draw_count)),
        ("Sum mean", f"{report.sum_avg:.0f}"),
        ("Sum median", f"{report.sum_median:.0f}"),
        ("Sum mode", str(report.sum_mode[0]) if report.sum_mode else "-"),
        ("Sum std dev", f"{report.sum_std_dev:.1f}"),
        ("Odds (15 numbers)", f"1 in {TOTAL_COMBINATIONS:,}"),
        ("Avg repeats", f"{average_repeats(report):.1f}"),
        ("Even (avg)", f"{report.parity.even:.1f}"),
        ("Odd (avg)", f"{report.parity.odd:.1f}"),
        ("Duplicated combinations", str(len(report.duplicates))),
    ]
