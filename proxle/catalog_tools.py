# proxle/catalog_tools.py
"""
Maintenance commands for the secret-word catalog.

    python -m proxle.catalog_tools validate
    python -m proxle.catalog_tools shuffle --seed 42069 --iterations 100
    python -m proxle.catalog_tools preview --days 10
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from typing import List, Optional, Sequence

from .config import PUZZLE_EPOCH
from .daily_word import utc_today, word_for_date
from .word_list import DEFAULT_CATALOG, WordCatalog, validate_words

SHUFFLE_SEED = 42069
SIMILAR = 0.6


class SeededRandom:
    """Small LCG so shuffles are reproducible across runtimes."""

    def __init__(self, seed: int):
        self.seed = seed

    def next(self) -> float:
        self.seed = (self.seed * 9301 + 49297) % 233280
        return self.seed / 233280


def seeded_shuffle(words: Sequence[str], seed: int) -> List[str]:
    out = list(words)
    rng = SeededRandom(seed)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def similarity(a: str, b: str) -> float:
    """Share of letters two words have in common, boosted for equal lengths."""
    pool = list(b)
    shared = 0
    for ch in a:
        if ch in pool:
            pool.remove(ch)
            shared += 1
    score = shared / min(len(a), len(b))
    return score * 1.5 if len(a) == len(b) else score


def list_score(words: Sequence[str]) -> float:
    """Lower is better: total neighbour similarity plus a penalty for close pairs."""
    total = 0.0
    for a, b in zip(words, words[1:]):
        s = similarity(a, b)
        total += s
        if s > SIMILAR:
            total += s * 10
    return total


def optimize_order(words: Sequence[str], seed: int = SHUFFLE_SEED, iterations: int = 100) -> List[str]:
    best = seeded_shuffle(words, seed)
    best_score = list_score(best)
    for i in range(iterations):
        candidate = seeded_shuffle(words, seed + i + 1)
        score = list_score(candidate)
        if score < best_score:
            best, best_score = candidate, score
    return best


def similar_clusters(words: Sequence[str]) -> int:
    """Runs of three consecutive days that all look alike."""
    return sum(
        1 for a, b, c in zip(words, words[1:], words[2:])
        if similarity(a, b) > SIMILAR and similarity(b, c) > SIMILAR
    )


def preview(catalog: WordCatalog, start: date, days: int, epoch: date = PUZZLE_EPOCH) -> List[tuple[date, str]]:
    return [(start + timedelta(days=i), word_for_date(catalog, epoch, start + timedelta(days=i))) for i in range(days)]


# ───────── CLI ─────────
def _cmd_validate(args, catalog: WordCatalog) -> int:
    problems = validate_words(catalog.words)
    for p in problems:
        print(f"[catalog] {p}")
    size = len(catalog)
    print(f"[catalog] {size} words")
    for length, n in catalog.length_distribution().items():
        print(f"[catalog]   {length} letters: {n} ({100 * n / size:.0f}%)")
    print(f"[catalog] similar 3-day clusters: {similar_clusters(catalog.words)}")
    return 1 if problems else 0


def _cmd_shuffle(args, catalog: WordCatalog) -> int:
    ordered = optimize_order(catalog.words, seed=args.seed, iterations=args.iterations)
    print(f"# score {list_score(ordered):.2f} (was {list_score(catalog.words):.2f}), "
          f"clusters {similar_clusters(ordered)}", file=sys.stderr)
    for i in range(0, len(ordered), 12):
        print("    " + " ".join(f'"{w}",' for w in ordered[i:i + 12]))
    return 0


def _cmd_preview(args, catalog: WordCatalog) -> int:
    start = date.fromisoformat(args.start) if args.start else utc_today()
    for day, word in preview(catalog, start, args.days):
        print(f"{day.isoformat()}  {word}")
    return 0


def main(argv: Optional[Sequence[str]] = None, catalog: WordCatalog = DEFAULT_CATALOG) -> int:
    parser = argparse.ArgumentParser(prog="proxle.catalog_tools", description="Word catalog maintenance")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("validate", help="check duplicates, lengths and distribution")

    p = sub.add_parser("shuffle", help="print a reordered catalog with fewer look-alike neighbours")
    p.add_argument("--seed", type=int, default=SHUFFLE_SEED)
    p.add_argument("--iterations", type=int, default=100)

    p = sub.add_parser("preview", help="list upcoming daily words")
    p.add_argument("--days", type=int, default=10)
    p.add_argument("--start", help="YYYY-MM-DD, defaults to today (UTC)")

    args = parser.parse_args(argv)
    handler = {"validate": _cmd_validate, "shuffle": _cmd_shuffle, "preview": _cmd_preview}[args.command]
    return handler(args, catalog)


if __name__ == "__main__":
    sys.exit(main())
