# proxle/daily_word.py
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional

from .config import MAX_DAYS_AHEAD, PUZZLE_EPOCH, TZ
from .word_list import DEFAULT_CATALOG, WordCatalog

_YMD = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateError(ValueError):
    pass


def utc_today() -> date:
    return datetime.now(TZ).date()


def days_between(start: date, end: date) -> int:
    """Whole calendar days between two dates, ignoring direction."""
    return abs((end - start).days)


def index_for_date(size: int, epoch: date, day: date) -> int:
    return days_between(epoch, day) % size


def word_for_date(catalog: WordCatalog, epoch: date, day: date) -> str:
    """
    Deterministic secret word for a calendar day.

    Dates before the epoch count backwards from it, so every finite date
    maps to a word.
    """
    return catalog[index_for_date(len(catalog), epoch, day)]


def parse_puzzle_date(ymd: Optional[str], today: Optional[date] = None) -> date:
    """
    Validate a client-supplied puzzle date.

    Accepts only YYYY-MM-DD. Omitted dates resolve to the server's UTC day;
    dates further ahead than MAX_DAYS_AHEAD are refused so clients cannot
    fish for future words.
    """
    today = today or utc_today()
    if ymd is None or not str(ymd).strip():
        return today

    ymd = str(ymd).strip()
    if not _YMD.match(ymd):
        raise InvalidDateError(f"date must be YYYY-MM-DD, got: {ymd}")
    try:
        day = date.fromisoformat(ymd)
    except ValueError as e:
        raise InvalidDateError(f"not a calendar date: {ymd}") from e

    if day > today + timedelta(days=MAX_DAYS_AHEAD):
        raise InvalidDateError(f"puzzle for {ymd} is not available yet")
    return day


def puzzle_number(day: date, epoch: date = PUZZLE_EPOCH) -> int:
    # Day one is the epoch itself.
    return (day - epoch).days + 1


def secret_for(day: date, catalog: WordCatalog = DEFAULT_CATALOG, epoch: date = PUZZLE_EPOCH) -> str:
    return word_for_date(catalog, epoch, day)
