"""Pytest configuration and shared fixtures."""
import asyncio
import json
import logging
import os
from collections.abc import Callable, Sequence

import httpx
import pytest

from geminichat.errors import ChatError
from geminichat.llm import GenerateResult, GeminiClient, GenerativeClient, Turn
from geminichat.settings import InMemorySettingsStore

TEST_API_KEY = "test-key"


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler, level and propagation changes made by CLI runs."""
    package_logger = logging.getLogger("geminichat")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture(scope="session")
def api_key():
    """Return the live API key from environment (integration tests only)."""
    return os.getenv("GEMINI_API_KEY")


@pytest.fixture
def settings():
    """Return an in-memory settings store holding a test API key."""
    return InMemorySettingsStore(api_key=TEST_API_KEY)


@pytest.fixture
def make_gemini_client():
    """Return a builder for GeminiClient instances backed by a fake HTTP handler.

    Every request the client sends is appended to ``client.requests``.
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> GeminiClient:
        requests: list[httpx.Request] = []

        def _recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = GeminiClient(transport=httpx.MockTransport(_recording_handler), **kwargs)
        client.requests = requests
        return client

    return _make


def json_response(payload, status_code: int = 200) -> httpx.Response:
    """Build an httpx response with a JSON body."""
    return httpx.Response(status_code, text=json.dumps(payload))


def reply_payload(*texts: str) -> dict:
    """A generateContent response whose first candidate has the given text parts."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text} for text in texts]}}
        ]
    }


@pytest.fixture
def catalog_payload():
    """Return a models.list response with one generateContent-capable model."""
    return {
        "models": [
            {"name": "models/a", "supportedGenerationMethods": ["generateContent"]},
            {"name": "models/b", "supportedGenerationMethods": ["embedContent"]},
        ]
    }


class FakeClient(GenerativeClient):
    """In-process GenerativeClient with scripted outcomes.

    Each ``generate_content`` call records its arguments and answers with
    "reply to <text>" unless an error is queued. When ``gate`` is set, calls
    wait for it before answering, so tests can interleave clear() and submit().
    """

    def __init__(self, model_ids: Sequence[str] = ("a",)):
        self.calls: list[dict] = []
        self.errors: list[ChatError] = []
        self.model_ids = list(model_ids)
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def list_models(self, api_key: str) -> list[str]:
        self.calls.append({"op": "list_models", "api_key": api_key})
        if self.gate is not None:
            await self.gate.wait()
        if self.errors:
            raise self.errors.pop(0)
        return list(self.model_ids)

    async def generate_content(self, api_key, model_id, user_text, history=()):
        self.calls.append({
            "op": "generate_content",
            "api_key": api_key,
            "model_id": model_id,
            "user_text": user_text,
            "history": tuple(history),
        })
        if self.gate is not None:
            await self.gate.wait()
        if self.errors:
            raise self.errors.pop(0)
        reply = f"reply to {user_text}"
        return GenerateResult(reply_text=reply, reply_turn=Turn.model(reply), model=model_id)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client():
    """Return a scripted in-process client."""
    return FakeClient()
