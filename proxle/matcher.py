# proxle/matcher.py
from __future__ import annotations

from typing import List, Literal

LetterStatus = Literal["correct", "present", "absent"]

_USED = "#"


def match_pattern(guess: str, secret: str) -> List[LetterStatus]:
    """
    Wordle-style letter statuses for `guess` against `secret`.

    One status per guess character. Exact positions are claimed first so a
    repeated letter is never counted twice; remaining secret letters are then
    consumed left to right by the displaced guess letters.
    """
    guess = guess.upper()
    secret = secret.upper()

    if guess == secret:
        return ["correct"] * len(guess)

    statuses: List[LetterStatus] = ["absent"] * len(guess)
    pool = list(secret)

    # Pass 1: exact positions
    for i in range(min(len(guess), len(secret))):
        if guess[i] == pool[i]:
            statuses[i] = "correct"
            pool[i] = _USED

    # Pass 2: displaced letters
    for i, ch in enumerate(guess):
        if statuses[i] == "correct":
            continue
        try:
            j = pool.index(ch)
        except ValueError:
            continue
        statuses[i] = "present"
        pool[j] = _USED

    return statuses


def is_solved(statuses: List[LetterStatus], secret: str) -> bool:
    return len(statuses) == len(secret) and all(s == "correct" for s in statuses)
