# proxle/progression.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from .config import TZ
from .schema import PlayerProgress


class InvalidGameResultError(ValueError):
    pass


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if dt.tzinfo is None:
        return TZ.localize(dt)
    return dt.astimezone(TZ)


def utc_day(dt: datetime) -> date:
    return as_utc(dt).date()


def distribution_bucket(guess_count: int) -> str:
    return "8+" if guess_count >= 8 else str(guess_count)


def win_rate(total_wins: int, total_games: int) -> int:
    if total_games <= 0:
        return 0
    # round half up, like the clients do
    return int(100 * total_wins / total_games + 0.5)


def apply_game_result(
    progress: PlayerProgress,
    won: bool,
    guess_count: int,
    now: Optional[datetime] = None,
) -> PlayerProgress:
    """
    Return the progress after one completed game. `progress` is not modified.

    Streaks compare UTC calendar days: a win the day after the last game
    extends the streak, a win on the same day leaves it alone, and anything
    later starts over at 1. A loss always resets it.
    """
    if guess_count < 1:
        raise InvalidGameResultError(f"guess_count must be >= 1, got {guess_count}")

    now = as_utc(now or datetime.now(TZ))
    new = progress.model_copy(deep=True)

    new.total_games += 1
    if won:
        new.total_wins += 1
        if new.last_played_date is None:
            new.current_streak = 1
        else:
            diff = abs((utc_day(now) - utc_day(new.last_played_date)).days)
            if diff == 1:
                new.current_streak += 1
            elif diff > 1:
                new.current_streak = 1
            # diff == 0: already counted today

        new.max_streak = max(new.max_streak, new.current_streak)

        key = distribution_bucket(guess_count)
        new.guess_distribution[key] = new.guess_distribution.get(key, 0) + 1
    else:
        new.total_losses += 1
        new.current_streak = 0

    new.win_rate = win_rate(new.total_wins, new.total_games)
    new.last_played_date = now
    return new
