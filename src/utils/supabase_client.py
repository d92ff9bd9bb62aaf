"""
src/utils/supabase_client.py
Supabase wrapper for the draw history and the prediction archive.
"""
from __future__ import annotations

from typing import Any

from supabase import Client, create_client

from src.utils.config import SUPABASE_KEY, SUPABASE_URL
from src.utils.logger import get_logger

log = get_logger("supabase")

_client: Client | None = None

_BATCH_SIZE = 500


def get_client() -> Client:
    global _client
    if _client is None:
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set to use persistence.")
        _client = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _client


# ── lotofacil_draws ───────────────────────────────────────────────

def upsert_draws(records: list[dict[str, Any]]) -> int:
    """Upsert draw rows in batches. Unique constraint: contest."""
    db = get_client()
    written = 0
    for start in range(0, len(records), _BATCH_SIZE):
        batch = records[start:start + _BATCH_SIZE]
        resp = db.table("lotofacil_draws").upsert(batch, on_conflict="contest").execute()
        written += len(resp.data or [])
    log.info(f"Upserted {written} draws")
    return written


def get_all_draws() -> list[dict]:
    db = get_client()
    resp = (
        db.table("lotofacil_draws")
        .select("*")
        .order("contest", desc=False)
        .execute()
    )
    return resp.data or []


# ── saved_predictions ─────────────────────────────────────────────

def insert_saved_prediction(record: dict[str, Any]) -> dict:
    db = get_client()
    resp = db.table("saved_predictions").insert(record).execute()
    return resp.data[0]


def get_saved_prediction(prediction_id: str) -> dict | None:
    db = get_client()
    resp = (
        db.table("saved_predictions")
        .select("*")
        .eq("id", prediction_id)
        .maybe_single()
        .execute()
    )
    return getattr(resp, "data", None) if resp else None


def get_saved_predictions() -> list[dict]:
    """Newest first."""
    db = get_client()
    resp = (
        db.table("saved_predictions")
        .select("*")
        .order("timestamp", desc=True)
        .execute()
    )
    return resp.data or []


def delete_saved_prediction(prediction_id: str) -> None:
    db = get_client()
    db.table("saved_predictions").delete().eq("id", prediction_id).execute()
