import json
import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="proxle-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TMP, "test.db")
os.environ.pop("GEMINI_API_KEY", None)

import httpx
import pytest

from proxle import models  # noqa: F401  (registers tables)
from proxle.db_pg import Base, SessionLocal, engine
from proxle.hint_client import HintClient


def gemini_reply(obj, status=200):
    """A generateContent response whose text part is `obj` (JSON-encoded unless already a str)."""
    text = obj if isinstance(obj, str) else json.dumps(obj)
    return httpx.Response(status, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def hint_client_for(handler, **kwargs):
    kwargs.setdefault("api_key", "test-key")
    return HintClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with SessionLocal() as session:
        yield session
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
