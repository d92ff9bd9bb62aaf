"""
src/utils/config.py
Load env vars and Lotofácil game constants.
"""
import os
from math import comb

from dotenv import load_dotenv

load_dotenv()

# ── Logging ───────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR: str = os.getenv("LOG_DIR", "logs")
LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "true").lower() in ("1", "true", "yes")

# ── Lotofácil ─────────────────────────────────────────────────────
MIN_NUMBER = 1
MAX_NUMBER = 25
DRAW_SIZE = 15
PRIME_NUMBERS: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23)

# C(25, 15) = 3 268 760 single-ticket combinations
TOTAL_COMBINATIONS: int = comb(MAX_NUMBER - MIN_NUMBER + 1, DRAW_SIZE)

# ── Supabase ──────────────────────────────────────────────────────
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

# ── Prediction service ────────────────────────────────────────────
PREDICTION_API_URL: str = os.getenv("PREDICTION_API_URL", "https://apifreellm.com/api/chat")
PREDICTION_TIMEOUT: int = int(os.getenv("PREDICTION_TIMEOUT", "60"))
PREDICTION_MAX_RETRIES: int = int(os.getenv("PREDICTION_MAX_RETRIES", "3"))
DEFAULT_CONFIDENCE = 0.75


def number_range() -> tuple[int, int]:
    return MIN_NUMBER, MAX_NUMBER


def in_range(num: int) -> bool:
    """Return True if num is a playable Lotofácil number."""
    return MIN_NUMBER <= num <= MAX_NUMBER
