from datetime import datetime, timedelta, timezone

import pytest

from proxle.progression import (
    InvalidGameResultError,
    apply_game_result,
    distribution_bucket,
    win_rate,
)
from proxle.schema import PlayerProgress

UTC = timezone.utc
DAY1 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def play(progress, won, guesses=3, at=DAY1):
    return apply_game_result(progress, won, guesses, now=at)


def assert_invariants(p):
    assert p.total_games == p.total_wins + p.total_losses
    assert p.current_streak <= p.max_streak
    assert sum(p.guess_distribution.values()) == p.total_wins
    assert 0 <= p.win_rate <= 100


def test_first_win():
    p = play(PlayerProgress(), True, 3)
    assert (p.total_games, p.total_wins, p.current_streak, p.max_streak) == (1, 1, 1, 1)
    assert p.guess_distribution["3"] == 1
    assert p.win_rate == 100
    assert p.last_played_date == DAY1
    assert_invariants(p)


def test_consecutive_day_extends_streak():
    p = play(PlayerProgress(), True)
    p = play(p, True, at=DAY1 + timedelta(days=1))
    assert p.current_streak == 2
    assert p.max_streak == 2


def test_gap_resets_streak_to_one():
    p = play(PlayerProgress(), True)
    p = play(p, True, at=DAY1 + timedelta(days=1))
    p = play(p, True, at=DAY1 + timedelta(days=3))
    assert p.current_streak == 1
    assert p.max_streak == 2


def test_same_day_win_does_not_double_count():
    p = play(PlayerProgress(), True)
    p = play(p, True, at=DAY1 + timedelta(days=1))
    again = play(p, True, at=DAY1 + timedelta(days=1, hours=5))
    assert again.current_streak == 2
    assert again.total_wins == 3
    assert_invariants(again)


def test_loss_breaks_streak():
    p = play(PlayerProgress(), True)
    p = play(p, False, 6, at=DAY1 + timedelta(days=1))
    assert p.current_streak == 0
    assert p.max_streak == 1
    assert p.total_losses == 1
    assert p.win_rate == 50
    assert_invariants(p)


def test_days_are_compared_in_utc():
    # 23:30 and 00:10 UTC are different days even though only 40 minutes apart
    late = datetime(2026, 3, 1, 23, 30, tzinfo=UTC)
    p = play(PlayerProgress(), True, at=late)
    p = play(p, True, at=late + timedelta(minutes=40))
    assert p.current_streak == 2

    # same local evening in New York spans two UTC days
    eastern = timezone(timedelta(hours=-5))
    p = play(PlayerProgress(), True, at=datetime(2026, 3, 1, 8, 0, tzinfo=eastern))
    p = play(p, True, at=datetime(2026, 3, 1, 20, 0, tzinfo=eastern))
    assert p.current_streak == 2


def test_naive_last_played_is_treated_as_utc():
    start = PlayerProgress(current_streak=4, max_streak=4, total_games=4, total_wins=4,
                           guess_distribution={"1": 0, "2": 0, "3": 4, "4": 0, "5": 0, "6": 0, "7": 0, "8+": 0},
                           last_played_date=datetime(2026, 2, 28, 22, 0))
    p = play(start, True)
    assert p.current_streak == 5


@pytest.mark.parametrize("count,bucket", [(1, "1"), (7, "7"), (8, "8+"), (15, "8+")])
def test_distribution_bucket(count, bucket):
    assert distribution_bucket(count) == bucket


def test_long_game_goes_in_overflow_bucket():
    p = play(PlayerProgress(), True, 11)
    assert p.guess_distribution["8+"] == 1


@pytest.mark.parametrize("wins,games,rate", [(0, 0, 0), (1, 2, 50), (2, 3, 67), (1, 3, 33), (1, 8, 13), (5, 5, 100)])
def test_win_rate(wins, games, rate):
    assert win_rate(wins, games) == rate


def test_max_streak_never_decreases_and_invariants_hold():
    p = PlayerProgress()
    history = [
        (True, 0), (True, 1), (True, 2), (False, 3), (True, 4), (True, 4),
        (True, 7), (True, 8), (True, 9), (True, 10), (False, 10), (True, 30),
    ]
    best = 0
    for won, day in history:
        p = play(p, won, 4, at=DAY1 + timedelta(days=day))
        assert p.max_streak >= best
        best = p.max_streak
        assert_invariants(p)
    assert p.max_streak == 4
    assert p.total_games == len(history)


def test_input_is_not_mutated():
    before = PlayerProgress()
    play(before, True)
    assert before.total_games == 0
    assert before.guess_distribution["3"] == 0


def test_rejects_zero_guesses():
    with pytest.raises(InvalidGameResultError):
        apply_game_result(PlayerProgress(), True, 0)
