from datetime import date, timedelta

import pytest

from proxle.config import PUZZLE_EPOCH
from proxle.daily_word import (
    InvalidDateError,
    days_between,
    parse_puzzle_date,
    puzzle_number,
    word_for_date,
)
from proxle.word_list import DEFAULT_CATALOG, WordCatalog, validate_words

EPOCH = date(2025, 1, 1)
SMALL = WordCatalog(["CAT", "DOGS", "BIRDS"])


def test_indexes_by_days_since_epoch():
    assert word_for_date(SMALL, EPOCH, EPOCH) == "CAT"
    assert word_for_date(SMALL, EPOCH, EPOCH + timedelta(days=1)) == "DOGS"
    assert word_for_date(SMALL, EPOCH, EPOCH + timedelta(days=2)) == "BIRDS"


def test_wraps_around_catalog():
    day = date(2025, 6, 17)
    assert word_for_date(SMALL, EPOCH, day) == word_for_date(SMALL, EPOCH, day + timedelta(days=len(SMALL)))
    day = PUZZLE_EPOCH + timedelta(days=40)
    later = day + timedelta(days=len(DEFAULT_CATALOG))
    assert word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, day) == word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, later)


def test_wraps_around_catalog_before_epoch():
    day = PUZZLE_EPOCH - timedelta(days=164)
    earlier = day - timedelta(days=len(DEFAULT_CATALOG))
    assert word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, day) == word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, earlier)
    # distance is absolute, so the cycle mirrors around the epoch
    mirror = PUZZLE_EPOCH + timedelta(days=164)
    assert word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, day) == word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, mirror)


def test_deterministic():
    day = date(2026, 2, 3)
    assert word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, day) == word_for_date(DEFAULT_CATALOG, PUZZLE_EPOCH, day)


def test_dates_before_epoch_count_backwards():
    assert days_between(EPOCH, EPOCH - timedelta(days=1)) == 1
    assert word_for_date(SMALL, EPOCH, EPOCH - timedelta(days=1)) == "DOGS"
    assert word_for_date(SMALL, EPOCH, date(1900, 1, 1)) in SMALL


def test_parse_defaults_to_server_day():
    today = date(2026, 3, 10)
    assert parse_puzzle_date(None, today=today) == today
    assert parse_puzzle_date("  ", today=today) == today
    assert parse_puzzle_date("2026-03-09", today=today) == date(2026, 3, 9)


def test_parse_allows_one_day_ahead_only():
    today = date(2026, 3, 10)
    assert parse_puzzle_date("2026-03-11", today=today) == date(2026, 3, 11)
    with pytest.raises(InvalidDateError):
        parse_puzzle_date("2026-03-12", today=today)


@pytest.mark.parametrize("bad", ["2026-3-1", "2026-13-01", "2026-02-30", "2026-03-10T00:00:00Z", "tomorrow"])
def test_parse_rejects_malformed(bad):
    with pytest.raises(InvalidDateError):
        parse_puzzle_date(bad, today=date(2026, 3, 10))


def test_puzzle_number_starts_at_one():
    assert puzzle_number(PUZZLE_EPOCH) == 1
    assert puzzle_number(PUZZLE_EPOCH + timedelta(days=9)) == 10


def test_default_catalog_is_valid():
    assert validate_words(DEFAULT_CATALOG.words) == []
    assert set(DEFAULT_CATALOG.length_distribution()) <= {3, 4, 5}


@pytest.mark.parametrize("words", [
    ["CAT", "CAT"],
    ["TOOLONG"],
    ["AB"],
    ["cat"],
    ["C4T"],
    [],
])
def test_catalog_rejects_bad_lists(words):
    with pytest.raises(ValueError):
        WordCatalog(words)


def test_catalog_is_read_only():
    with pytest.raises((AttributeError, TypeError)):
        SMALL.words.append("EELS")
    assert "cat" in SMALL
    assert len(SMALL) == 3
