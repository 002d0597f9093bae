# proxle/hint_client.py
from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Dict, Iterable, Optional

import httpx

from .config import GEMINI_API_BASE, GEMINI_API_KEY, GEMINI_MODEL, HINT_TIMEOUT_SECONDS
from .schema import SemanticVerdict

logger = logging.getLogger(__name__)

FALLBACK_HINT = "Checking..."
FALLBACK_SIMILARITY = 15
VICTORY_HINT = "Victory!"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_SINGLE_WORD = re.compile(r"^[A-Za-z][A-Za-z'-]*$")
_VOWEL = re.compile(r"[AEIOUY]")
_CONSONANT_RUN = re.compile(r"[BCDFGHJKLMNPQRSTVWXZ]{3,}")


class HintResponseError(RuntimeError):
    """The oracle answered, but not with a usable verdict."""


# ───────── Prompt ─────────
def build_prompt(guess: str, secret: str, excluded: Iterable[str]) -> str:
    forbidden = ", ".join(excluded)
    return (
        "You are scoring a guess in a daily word guessing game.\n\n"
        f'Target word: "{secret}"\n'
        f'Guessed word: "{guess}"\n'
        f"Forbidden hints (do NOT use): {forbidden}\n\n"
        f'1. Decide whether "{guess}" is a valid, commonly used English word.\n'
        "2. If valid, rate semantic similarity between guess and target from 0 to 100.\n"
        "3. If similarity is below 60, give ONE single-word thematic hint about the target. "
        "It must not be the target and must not be in the forbidden list. Otherwise use an empty hint.\n\n"
        'Return ONLY JSON: {"isValidWord": boolean, "similarity": number, "hint": string}'
    )


def exclusion_set(previous_hints: Iterable[str], guess: str, secret: str) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for h in [*previous_hints, guess, secret]:
        key = (h or "").strip().upper()
        if key and key not in seen:
            seen.add(key)
            out.append(key)
    return out


# ───────── Response parsing ─────────
def _candidate_text(payload: Any) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    except (KeyError, IndexError, TypeError) as e:
        raise HintResponseError(f"unexpected oracle payload shape: {e!r}") from e
    if not text.strip():
        raise HintResponseError("oracle returned no text")
    return text


def clamp_similarity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HintResponseError(f"similarity is not a number: {value!r}")
    return int(round(min(100.0, max(0.0, float(value)))))


def parse_verdict(text: str, secret: str, excluded: Iterable[str]) -> SemanticVerdict:
    m = _JSON_OBJECT.search(text)
    if not m:
        raise HintResponseError("invalid oracle response format")
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        raise HintResponseError(f"oracle JSON did not parse: {e}") from e
    if not isinstance(data, dict):
        raise HintResponseError("oracle JSON is not an object")

    is_valid = data.get("isValidWord", True)
    if not isinstance(is_valid, bool):
        raise HintResponseError(f"isValidWord is not a boolean: {is_valid!r}")

    similarity = clamp_similarity(data.get("similarity", 0))

    hint = data.get("hint") or ""
    if not isinstance(hint, str):
        hint = ""
    hint = hint.strip()
    if hint:
        forbidden = {e.upper() for e in excluded} | {secret.upper()}
        if not _SINGLE_WORD.match(hint) or hint.upper() in forbidden or secret.upper() in hint.upper():
            # Cannot re-ask meaningfully; drop the clue instead.
            logger.warning("Oracle hint %r ignored: not a single allowed word", hint)
            hint = ""

    return SemanticVerdict(is_valid_word=is_valid, similarity=similarity, hint=hint, source="oracle")


# ───────── Local fallback ─────────
def looks_like_word(word: str) -> bool:
    w = word.upper()
    return len(w) >= 3 and bool(_VOWEL.search(w)) and not _CONSONANT_RUN.search(w)


def fallback_verdict(guess: str, secret: str) -> SemanticVerdict:
    guess, secret = guess.upper(), secret.upper()
    if not looks_like_word(guess):
        return SemanticVerdict(is_valid_word=False, similarity=0, hint="", source="fallback")
    similarity = 100 if guess == secret else FALLBACK_SIMILARITY
    return SemanticVerdict(is_valid_word=True, similarity=similarity, hint=FALLBACK_HINT, source="fallback")


# ───────── Client ─────────
class HintClient:
    """Thin Gemini generateContent client. Raises on any transport or format problem."""

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        api_base: str = GEMINI_API_BASE,
        timeout: float = HINT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _http_post(self, path: str, body: Dict[str, Any]) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.post(
                f"{self.api_base}{path}",
                params={"key": self.api_key},
                headers={"accept": "application/json"},
                json=body,
            )
            r.raise_for_status()
            try:
                return r.json()
            except ValueError as e:
                raise HintResponseError("oracle body is not JSON") from e

    async def generate(self, prompt: str) -> str:
        payload = await self._http_post(
            f"/models/{self.model}:generateContent",
            {
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "generationConfig": {"responseMimeType": "application/json", "temperature": 0.2},
            },
        )
        return _candidate_text(payload)


async def evaluate_semantics(
    guess: str,
    secret: str,
    previous_hints: Iterable[str],
    client: Optional[HintClient] = None,
) -> SemanticVerdict:
    """
    Semantic verdict for a guess. Never raises for oracle problems: any
    timeout, HTTP error or malformed answer degrades to `fallback_verdict`.
    """
    guess, secret = guess.upper(), secret.upper()
    if guess == secret:
        return SemanticVerdict(is_valid_word=True, similarity=100, hint=VICTORY_HINT, source="exact")

    client = client or HintClient()
    if not client.configured:
        logger.warning("GEMINI_API_KEY is not set; using local word heuristic")
        return fallback_verdict(guess, secret)

    excluded = exclusion_set(previous_hints, guess, secret)
    try:
        text = await asyncio.wait_for(
            client.generate(build_prompt(guess, secret, excluded)),
            timeout=client.timeout,
        )
        return parse_verdict(text, secret, excluded)
    except asyncio.TimeoutError:
        logger.error("Hint oracle timed out after %.1fs", client.timeout)
    except httpx.HTTPError as e:
        logger.error("Hint oracle request failed: %r", e)
    except HintResponseError as e:
        logger.error("Hint oracle response unusable: %s", e)
    return fallback_verdict(guess, secret)
