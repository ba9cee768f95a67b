"""
Shared pytest fixtures for the translation service test suite.

This module provides fixtures that are automatically available to all test files:
- A fake inference backend that records calls and returns canned completions
- A TranslationService wired to that fake
- A FastAPI TestClient for the full app, also wired to the fake

No test in the suite talks to a real inference backend.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from rso_translator.api.server import create_app
from rso_translator.config import ServerConfig
from rso_translator.translation.service import TranslationService

# ============================================================================
# FAKE BACKEND
# ============================================================================


class FakeBackend:
    """
    In-memory stand-in for ``InferenceClient``.

    Attributes:
        completion: Text returned by ``chat_completion`` (``None`` simulates a
            backend that sent no content).
        error: Exception raised by ``chat_completion`` instead of answering.
        health_error: Exception raised by ``list_models``.
        calls: ``(system_prompt, user_message)`` for every completion request.
    """

    def __init__(self, completion: str | None = "[]") -> None:
        self.completion = completion
        self.error: BaseException | None = None
        self.health_error: BaseException | None = None
        self.calls: list[tuple[str, str]] = []
        self.health_calls = 0

    async def chat_completion(self, system_prompt: str, user_message: str) -> str | None:
        self.calls.append((system_prompt, user_message))
        if self.error is not None:
            raise self.error
        return self.completion

    async def list_models(self) -> list[dict[str, Any]]:
        self.health_calls += 1
        if self.health_error is not None:
            raise self.health_error
        return [{"id": "gpt-4-1106-preview", "object": "model"}]


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Fake backend answering with an empty JSON array by default."""
    return FakeBackend()


@pytest.fixture
def service(fake_backend: FakeBackend) -> TranslationService:
    """TranslationService backed by the fake backend (non-strict)."""
    return TranslationService(backend=fake_backend)


@pytest.fixture
def server_config() -> ServerConfig:
    """Default configuration, independent of any local server.ini."""
    return ServerConfig()


@pytest.fixture
def test_client(
    server_config: ServerConfig, fake_backend: FakeBackend
) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient for the full app, using the fake backend.

    Yields:
        TestClient: Client with lifespan events handled.
    """
    app = create_app(server_config, backend=fake_backend)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def translation_payload() -> dict[str, Any]:
    """Baseline valid ``POST /translate`` body."""
    return {
        "languageFrom": "en",
        "languageTo": "fr",
        "strings": [{"key": "greeting", "value": "Hello"}],
    }
