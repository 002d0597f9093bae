# proxle/game.py
from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable, Optional

from .config import MAX_GUESS_LENGTH, MAX_PREVIOUS_HINTS, MIN_GUESS_LENGTH, PUZZLE_EPOCH
from .daily_word import parse_puzzle_date, word_for_date
from .hint_client import HintClient, evaluate_semantics
from .matcher import match_pattern
from .schema import GuessOut
from .word_list import DEFAULT_CATALOG, WordCatalog

logger = logging.getLogger(__name__)

_LETTERS = re.compile(r"^[A-Z]+$")


class InvalidGuessError(ValueError):
    pass


def normalize_guess(raw: Optional[str]) -> str:
    guess = (raw or "").strip().upper()
    if len(guess) < MIN_GUESS_LENGTH:
        raise InvalidGuessError("guess is empty")
    if len(guess) > MAX_GUESS_LENGTH:
        raise InvalidGuessError(f"guess is longer than {MAX_GUESS_LENGTH} letters")
    if not _LETTERS.match(guess):
        raise InvalidGuessError("guess must contain letters A-Z only")
    return guess


def normalize_hints(hints: Iterable[str]) -> list[str]:
    return [h.strip() for h in hints if isinstance(h, str) and h.strip()][-MAX_PREVIOUS_HINTS:]


async def submit_guess(
    guess_word: str,
    previous_hints: Iterable[str] = (),
    ymd: Optional[str] = None,
    hint_client: Optional[HintClient] = None,
    catalog: WordCatalog = DEFAULT_CATALOG,
    epoch: date = PUZZLE_EPOCH,
    today: Optional[date] = None,
    player_id: Optional[str] = None,
) -> GuessOut:
    """
    Evaluate one guess against the day's secret.

    Letter statuses are computed locally first and are returned even when
    the semantic oracle is down.
    """
    guess = normalize_guess(guess_word)
    day = parse_puzzle_date(ymd, today=today)
    secret = word_for_date(catalog, epoch, day)

    letter_status = match_pattern(guess, secret)
    verdict = await evaluate_semantics(guess, secret, normalize_hints(previous_hints), client=hint_client)

    logger.debug(
        "Guess by %s on %s: %s -> %s (%s)",
        player_id or "anonymous", day.isoformat(), guess, letter_status, verdict.source,
    )
    return GuessOut(
        is_valid_word=verdict.is_valid_word,
        similarity=verdict.similarity,
        hint=verdict.hint,
        letter_status=letter_status,
        source=verdict.source,
    )
