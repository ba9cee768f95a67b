"""Translation service.

``TranslationService`` is the single public entry-point of the translation
layer.  It ties together prompt construction
(:mod:`~rso_translator.translation.prompt`), the backend call
(:class:`~rso_translator.translation.client.InferenceClient`) and response
parsing (:class:`~rso_translator.translation.parser.ResponseParser`).

Caller contract
---------------
``translate()`` either returns a complete :class:`TranslationResponse` or
raises:

- ``InferenceError`` when the backend call fails (never retried);
- ``ResponseParseError`` when the backend answered with something that is
  not the requested JSON array, including an empty answer.

There is no partial-success mode.  Translation quality is not checked;
meaning is delegated entirely to the backend.

``check_health()`` never raises.  Any failure of the reachability call is
reported as ``HealthStatus(status="error")``.

Statelessness
-------------
A service instance is created once per process and shared by all
requests.  It holds only read-only collaborators, so concurrent
``translate()`` calls on the same event loop need no locking.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from rso_translator.translation.errors import ResponseParseError
from rso_translator.translation.models import (
    HealthStatus,
    TranslationRequest,
    TranslationResponse,
)
from rso_translator.translation.parser import ResponseParser
from rso_translator.translation.prompt import build_system_prompt, serialize_entries

logger = logging.getLogger(__name__)


class CompletionBackend(Protocol):
    """What the service needs from an inference client."""

    async def chat_completion(self, system_prompt: str, user_message: str) -> str | None: ...

    async def list_models(self) -> list[dict[str, Any]]: ...


class TranslationService:
    """Orchestrates prompt building, the backend call, and parsing.

    Attributes:
        _backend: Inference client (or a fake with the same two methods).
        _parser:  Parser applied to every completion.
    """

    def __init__(self, *, backend: CompletionBackend, strict_mode: bool = False) -> None:
        """Initialise the service.

        Args:
            backend:     Shared inference client.
            strict_mode: Reject completions whose keys differ from the
                         request's (see :class:`ResponseParser`).
        """
        self._backend = backend
        self._parser = ResponseParser(strict_mode=strict_mode)

    # ── Public API ────────────────────────────────────────────────────────────

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate every entry of ``request``.

        Full pipeline:

        1. Serialise the entries as a JSON array (user turn).
        2. Render the system instruction for the language pair.
        3. Call the backend exactly once.
        4. Parse the completion; raise ``ResponseParseError`` on failure.
        5. Wrap the parsed entries in a ``TranslationResponse``.

        A request without entries short-circuits to an empty response and
        makes no backend call.

        Raises:
            InferenceError:     The backend call failed.
            ResponseParseError: The completion was empty or malformed.
        """
        if not request.entries:
            return TranslationResponse(entries=())

        logger.info(
            "Translating %d strings from %r to %r",
            len(request.entries),
            request.language_from,
            request.language_to,
        )

        # ── Steps 1-2: Prompt ─────────────────────────────────────────────────
        user_message = serialize_entries(request.entries)
        system_prompt = build_system_prompt(request.language_from, request.language_to)

        # ── Step 3: Backend call ──────────────────────────────────────────────
        # InferenceError propagates unchanged; there is no retry.
        raw = await self._backend.chat_completion(system_prompt, user_message)

        # ── Step 4: Parse ─────────────────────────────────────────────────────
        outcome = self._parser.parse(raw, expected_keys=[entry.key for entry in request.entries])
        if not outcome.ok:
            raise ResponseParseError(
                message="Inference backend returned an unparseable response",
                detail=outcome.reason,
                raw=outcome.raw,
            )

        # ── Step 5: Wrap ──────────────────────────────────────────────────────
        return TranslationResponse(entries=tuple(outcome.entries))

    async def check_health(self) -> HealthStatus:
        """Report whether the inference backend is reachable.

        Performs one listing call.  Every exception, whatever its type, is
        absorbed and reported as ``status="error"``.
        """
        try:
            await self._backend.list_models()
        except Exception:
            logger.warning("Liveness probe against the inference backend failed.", exc_info=True)
            return HealthStatus(status="error")
        return HealthStatus(status="ok")
