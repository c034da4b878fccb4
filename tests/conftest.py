"""
Conftest for StyleComplete tests.

Ensures the project root is on sys.path so 'stylecomplete' and 'configs'
resolve without an install, and provides in-process stand-ins for Redis
and the Gemini REST API.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to sys.path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from stylecomplete.orchestrator import GeminiCompletionClient, KeyRotator
from stylecomplete.utils.cache import CacheManager


PRIMARY = "primary-model"
FALLBACK = "fallback-model"
API_BASE = "https://gemini.test/v1beta"

SILK_SUGGESTIONS = [
    {
        "label": "Silk Satin",
        "insertText": "silk satin",
        "kind": "材质",
        "detail": "Lustrous, fluid drape",
        "trigger": "silk",
    },
    {
        "label": "Silk Chiffon",
        "insertText": "silk chiffon",
        "kind": "材质",
        "detail": "Sheer and lightweight",
        "trigger": "silk",
    },
]


class FakeRedis:
    """Dict-backed async client exposing the redis.asyncio calls the cache uses."""

    def __init__(self):
        self.store = {}
        self.ttls = {}
        self.calls = []

    async def ping(self):
        return True

    async def get(self, key):
        self.calls.append(("get", key))
        return self.store.get(key)

    async def set(self, key, value):
        self.calls.append(("set", key))
        self.store[key] = value
        self.ttls.pop(key, None)

    async def setex(self, key, ttl, value):
        self.calls.append(("setex", key))
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, key):
        self.calls.append(("delete", key))
        return 1 if self.store.pop(key, None) is not None else 0

    async def aclose(self):
        pass


def gemini_payload(text: str) -> dict:
    """A generateContent response whose answer is `text`."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class GeminiStub:
    """
    MockTransport handler that answers per model.

    `answers` maps a model id to either an httpx.Response, an exception
    instance to raise, or a Python object returned as answer text (JSON
    encoded unless it is already a string).
    """

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        model = request.url.path.rsplit("/", 1)[-1].split(":")[0]
        answer = self.answers.get(model)
        if answer is None:
            return httpx.Response(500, json={"error": {"message": "model unavailable"}})
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        text = answer if isinstance(answer, str) else json.dumps(answer, ensure_ascii=False)
        return httpx.Response(200, json=gemini_payload(text))

    @property
    def models_called(self):
        return [r.url.path.rsplit("/", 1)[-1].split(":")[0] for r in self.requests]

    @property
    def keys_used(self):
        return [r.url.params.get("key") for r in self.requests]

    def body(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


def make_llm_client(stub: GeminiStub, keys=("key-a",)) -> GeminiCompletionClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
    return GeminiCompletionClient(
        key_rotator=KeyRotator(list(keys)),
        http_client=http_client,
        primary_model=PRIMARY,
        fallback_model=FALLBACK,
        api_base=API_BASE,
    )


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return CacheManager(client=fake_redis)


@pytest.fixture
def gemini():
    return GeminiStub({PRIMARY: SILK_SUGGESTIONS})
