import asyncio
import json

import httpx

from proxle.hint_client import (
    FALLBACK_HINT,
    FALLBACK_SIMILARITY,
    HintClient,
    evaluate_semantics,
    exclusion_set,
    fallback_verdict,
    looks_like_word,
)
from tests.conftest import gemini_reply, hint_client_for


async def test_oracle_verdict_is_used_and_clamped():
    client = hint_client_for(lambda req: gemini_reply({"isValidWord": True, "similarity": 140, "hint": "Nautical"}))
    verdict = await evaluate_semantics("BOAT", "SHIP", [], client=client)
    assert verdict.source == "oracle"
    assert verdict.similarity == 100
    assert verdict.hint == "Nautical"
    assert verdict.is_valid_word is True


async def test_negative_similarity_clamped_to_zero():
    client = hint_client_for(lambda req: gemini_reply({"isValidWord": True, "similarity": -12, "hint": ""}))
    verdict = await evaluate_semantics("BOAT", "SHIP", [], client=client)
    assert verdict.similarity == 0


async def test_request_carries_exclusions_and_key():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return gemini_reply('Sure! {"isValidWord": true, "similarity": 40, "hint": "Harbor"}')

    verdict = await evaluate_semantics("boat", "ship", ["Ocean", "Sail"], client=hint_client_for(handler))
    assert verdict.hint == "Harbor"
    assert seen["url"].params["key"] == "test-key"
    assert ":generateContent" in seen["url"].path
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "Forbidden hints (do NOT use): OCEAN, SAIL, BOAT, SHIP" in prompt


async def test_forbidden_or_multiword_hints_are_dropped():
    for hint in ["Ocean", "ship", "Large vessel", "Shipyard"]:
        client = hint_client_for(lambda req, h=hint: gemini_reply({"isValidWord": True, "similarity": 30, "hint": h}))
        verdict = await evaluate_semantics("BOAT", "SHIP", ["OCEAN"], client=client)
        assert verdict.source == "oracle"
        assert verdict.hint == "", hint


async def test_http_error_falls_back():
    client = hint_client_for(lambda req: httpx.Response(503, json={"error": "unavailable"}))
    verdict = await evaluate_semantics("BOAT", "SHIP", [], client=client)
    assert verdict.source == "fallback"
    assert verdict.is_valid_word is True
    assert verdict.similarity == FALLBACK_SIMILARITY
    assert verdict.hint == FALLBACK_HINT


async def test_transport_timeout_falls_back():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    verdict = await evaluate_semantics("BOAT", "SHIP", [], client=hint_client_for(handler))
    assert verdict.source == "fallback"


async def test_slow_oracle_is_cut_off():
    class SlowClient(HintClient):
        async def generate(self, prompt):
            await asyncio.sleep(5)
            return "{}"

    verdict = await evaluate_semantics("BOAT", "SHIP", [], client=SlowClient(api_key="k", timeout=0.05))
    assert verdict.source == "fallback"


async def test_malformed_responses_fall_back():
    bodies = [
        gemini_reply("I cannot help with that."),
        gemini_reply('{"isValidWord": true, "similarity": "high"}'),
        gemini_reply('{"isValidWord": "yes", "similarity": 50}'),
        gemini_reply("{not json}"),
        httpx.Response(200, json={"candidates": []}),
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"candidates": [{"content": {"parts": None}}]}),
        httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": 5}]}}]}),
    ]
    for body in bodies:
        verdict = await evaluate_semantics("BOAT", "SHIP", [], client=hint_client_for(lambda req, b=body: b))
        assert verdict.source == "fallback"


async def test_exact_guess_skips_oracle():
    def handler(request):
        raise AssertionError("oracle should not be called")

    verdict = await evaluate_semantics("ship", "SHIP", [], client=hint_client_for(handler))
    assert verdict.source == "exact"
    assert verdict.similarity == 100


async def test_unconfigured_client_uses_heuristic():
    verdict = await evaluate_semantics("XQZT", "SHIP", [], client=HintClient(api_key=None))
    assert verdict.source == "fallback"
    assert verdict.is_valid_word is False
    assert verdict.similarity == 0


def test_local_word_heuristic():
    assert looks_like_word("boat")
    assert looks_like_word("GYM")
    assert not looks_like_word("AT")
    assert not looks_like_word("BCDF")
    assert not looks_like_word("ASTRNG")
    assert fallback_verdict("BOAT", "BOAT").similarity == 100


def test_exclusion_set_dedupes_case_insensitively():
    assert exclusion_set(["ocean", "OCEAN", " ", "Sail"], "boat", "ship") == ["OCEAN", "SAIL", "BOAT", "SHIP"]
