# proxle/config.py
from __future__ import annotations

import os
from datetime import date

import pytz

# ───────── Time ─────────
# Day boundaries (puzzle rollover, streaks) are always UTC midnight.
TZ = pytz.utc
PUZZLE_EPOCH = date.fromisoformat(os.getenv("PUZZLE_EPOCH", "2025-11-28"))
# Clients a few hours ahead of UTC may ask for "tomorrow", never beyond.
MAX_DAYS_AHEAD = int(os.getenv("MAX_DAYS_AHEAD", "1"))

# ───────── Guesses ─────────
MIN_GUESS_LENGTH = 1
MAX_GUESS_LENGTH = int(os.getenv("MAX_GUESS_LENGTH", "15"))
MAX_PREVIOUS_HINTS = int(os.getenv("MAX_PREVIOUS_HINTS", "50"))

# ───────── Hint oracle (Gemini) ─────────
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
HINT_TIMEOUT_SECONDS = float(os.getenv("HINT_TIMEOUT_SECONDS", "8"))

# ───────── Persistence ─────────
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./proxle.db")
PROGRESS_MAX_RETRIES = int(os.getenv("PROGRESS_MAX_RETRIES", "5"))

# ───────── App ─────────
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN")
