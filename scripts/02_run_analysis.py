"""
scripts/02_run_analysis.py
Print the statistics report for a CSV file or the stored history.
Optionally request a prediction and archive it.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.table import Table

from src.ingest.csv_loader import load_csv
from src.models.draw import Draw
from src.pipeline.analysis_runner import format_report, generate_prediction, run_analysis
from src.pipeline.prediction_archive import (
    archive_prediction,
    delete_prediction,
    list_predictions,
    new_saved_prediction,
    parse_search_numbers,
    search_predictions,
)
from src.utils import supabase_client as db
from src.utils.logger import get_logger

log = get_logger("run_analysis")
console = Console()


def _print_report(result: dict) -> None:
    report = result["report"]

    summary = Table(title="Lotofácil summary")
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    for label, value in format_report(report, result["draw_count"]):
        summary.add_row(label, value)
    console.print(summary)

    freq = Table(title="Frequency (top 10)")
    freq.add_column("Number", justify="right")
    freq.add_column("Draws", justify="right")
    for num in result["top_numbers"]:
        freq.add_row(f"{num:02d}", str(report.frequency[num]))
    console.print(freq)

    primes = Table(title="Primes per draw")
    primes.add_column("Primes", justify="right")
    primes.add_column("Draws", justify="right")
    for count, draws in report.prime_count.items():
        primes.add_row(str(count), str(draws))
    console.print(primes)

    for dup in report.duplicates:
        console.print(f"[yellow]Duplicate[/yellow] {list(dup.numbers)} → contests {list(dup.contests)}")


def _print_search(query: str) -> None:
    numbers = parse_search_numbers(query)
    table = Table(title="Archived predictions")
    table.add_column("ID")
    table.add_column("Numbers")
    table.add_column("Matches", justify="right")
    for p in search_predictions(list_predictions(), numbers):
        shown = " ".join(f"[green]{n:02d}[/green]" if n in numbers else f"{n:02d}" for n in p.numbers)
        table.add_row(p.id, shown, str(p.match_count))
    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Lotofácil statistics report")
    parser.add_argument("--csv", default=None, help="Analyse this CSV instead of the stored history")
    parser.add_argument("--with-archived", action="store_true", help="Append archived predictions as synthetic draws")
    parser.add_argument("--predict", action="store_true", help="Request a prediction from the text-generation service")
    parser.add_argument("--archive", action="store_true", help="Archive the prediction (requires --predict)")
    parser.add_argument("--search", default=None, help="List archived predictions matching these numbers, e.g. \"01 07 22\"")
    parser.add_argument("--delete", default=None, metavar="ID", help="Delete an archived prediction and exit")
    args = parser.parse_args()
    if args.archive and not args.predict:
        parser.error("--archive requires --predict")

    if args.delete:
        delete_prediction(args.delete)
        return

    if args.search is not None:
        _print_search(args.search)
        return

    if args.csv:
        draws = load_csv(args.csv)
    else:
        draws = [Draw.from_record(row) for row in db.get_all_draws()]

    predictions = list_predictions() if args.with_archived else []
    result = run_analysis(draws, include_archived=args.with_archived, predictions=predictions)
    if not result["success"]:
        console.print(f"[red]{result['error']}[/red]")
        sys.exit(1)
    _print_report(result)

    if args.predict:
        pred = generate_prediction(draws)
        console.print(f"[green]Prediction[/green] {pred['numbers']} (confidence {pred['confidence']:.0%})")
        console.print(pred["reasoning"])
        if args.archive:
            saved = archive_prediction(new_saved_prediction(pred["prediction"]))
            log.info(f"Saved as {saved.id}")


if __name__ == "__main__":
    main()
