"""
scripts/01_import_csv.py
Parse a Lotofácil CSV export, validate every draw and upsert into Supabase.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.ingest.csv_loader import load_csv, validate_draw
from src.utils import supabase_client as db
from src.utils.logger import get_logger

log = get_logger("import_csv")


def run_import(csv_path: str, dry_run: bool = False) -> dict:
    log.info(f"[IMPORT] {csv_path} | dry_run={dry_run}")

    draws = load_csv(csv_path)
    valid = [d for d in draws if validate_draw(d)]
    rejected = len(draws) - len(valid)
    if rejected:
        log.warning(f"{rejected} draws failed validation and will not be stored")

    if dry_run:
        for draw in valid[:5]:
            log.info(f"[DRY RUN] Would upsert: {draw.to_record()}")
        inserted = len(valid)
    else:
        inserted = db.upsert_draws([d.to_record() for d in valid])

    log.info(f"[DONE] parsed={len(draws)}, inserted={inserted}, rejected={rejected}")
    return {"parsed": len(draws), "inserted": inserted, "rejected": rejected}


def main():
    parser = argparse.ArgumentParser(description="Lotofácil CSV import")
    parser.add_argument("csv_path", help="Path to the results CSV (Concurso;Data;Bola1..Bola15)")
    parser.add_argument("--dry-run", action="store_true", help="Parse and validate only, no DB writes")
    args = parser.parse_args()

    result = run_import(args.csv_path, dry_run=args.dry_run)

    print("\n" + "=" * 60)
    print("IMPORT SUMMARY")
    print("=" * 60)
    print(f"  parsed={result['parsed']:5d} | inserted={result['inserted']:5d} | rejected={result['rejected']:3d}")
    print("=" * 60)


if __name__ == "__main__":
    main()
