from datetime import date

from proxle.catalog_tools import (
    SeededRandom,
    list_score,
    main,
    optimize_order,
    preview,
    seeded_shuffle,
    similarity,
)
from proxle.word_list import WordCatalog

WORDS = ["CAT", "CATS", "DOG", "DOGS", "BIRD", "FISH", "FROG", "MOLE"]


def test_seeded_shuffle_is_reproducible_permutation():
    a = seeded_shuffle(WORDS, 7)
    assert a == seeded_shuffle(WORDS, 7)
    assert sorted(a) == sorted(WORDS)
    assert 0 <= SeededRandom(1).next() < 1


def test_similarity_counts_shared_letters():
    assert similarity("CAT", "CAT") == 1.5
    assert similarity("CAT", "CATS") == 1.0
    assert similarity("DOG", "FISH") == 0


def test_optimize_never_worse_than_first_shuffle():
    best = optimize_order(WORDS, seed=3, iterations=20)
    assert sorted(best) == sorted(WORDS)
    assert list_score(best) <= list_score(seeded_shuffle(WORDS, 3))


def test_preview_walks_forward():
    cat = WordCatalog(["CAT", "DOGS", "BIRDS"])
    days = preview(cat, date(2025, 1, 1), 4, epoch=date(2025, 1, 1))
    assert [w for _, w in days] == ["CAT", "DOGS", "BIRDS", "CAT"]


def test_cli_validate(capsys):
    assert main(["validate"], catalog=WordCatalog(WORDS)) == 0
    out = capsys.readouterr().out
    assert "8 words" in out
    assert "3 letters: 2" in out


def test_cli_preview(capsys):
    assert main(["preview", "--days", "2", "--start", "2025-11-28"]) == 0
    assert capsys.readouterr().out.startswith("2025-11-28  PIECE")
