"""Async HTTP client for an OpenAI-compatible inference backend.

``InferenceClient`` is the only place in the service that talks to the
network.  It exposes two calls:

``chat_completion``
    ``POST {base_url}/chat/completions`` with a system and a user message
    and the configured sampling parameters.  Returns the text of the first
    choice, or ``None`` when the backend sent no content.

``list_models``
    ``GET {base_url}/models``.  Cheap, side-effect free, and authenticated,
    which makes it a good reachability probe for the health check.

One client (and so one ``httpx.AsyncClient`` connection pool) is created
per process and shared by every request.  Streaming is never used; the
completion arrives as a single JSON body.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rso_translator.translation.config import TranslationConfig
from rso_translator.translation.errors import InferenceError

logger = logging.getLogger(__name__)


class InferenceClient:
    """Thin wrapper around ``httpx.AsyncClient`` for chat completions.

    The client can be used as an async context manager, or created once and
    closed explicitly with :meth:`aclose` (the FastAPI app does the latter
    from its lifespan handler).

    Attributes:
        _config:      Frozen inference settings.
        _http_client: Underlying connection pool.
    """

    def __init__(
        self,
        config: TranslationConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            config:      Frozen inference settings.
            http_client: Pre-built ``httpx.AsyncClient``; one is created from
                         ``config`` when omitted.
        """
        self._config = config
        self._http_client = http_client or httpx.AsyncClient(
            timeout=config.timeout_seconds,
            headers=self._build_headers(config),
        )

    async def __aenter__(self) -> InferenceClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http_client.aclose()

    @property
    def model(self) -> str:
        return self._config.model

    # ── Chat completions ──────────────────────────────────────────────────────

    async def chat_completion(self, system_prompt: str, user_message: str) -> str | None:
        """Request a single completion and return its text.

        Args:
            system_prompt: Instruction sent as the ``system`` turn.
            user_message:  Content sent as the ``user`` turn.

        Returns:
            The ``message.content`` of the first choice, or ``None`` when the
            backend returned no choices or an empty/``null`` content.

        Raises:
            InferenceError: On any transport failure, non-2xx status, or a
                            response body that is not JSON.
        """
        payload = self._build_payload(system_prompt, user_message)
        data = await self._request("POST", self._config.chat_completions_url, json=payload)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("InferenceClient: completion carried no message content.")
            return None

        if not isinstance(content, str) or not content.strip():
            return None
        return content

    # ── Reachability ──────────────────────────────────────────────────────────

    async def list_models(self) -> list[dict[str, Any]]:
        """Return the model listing exposed by the backend.

        Raises:
            InferenceError: Same conditions as :meth:`chat_completion`.
        """
        data = await self._request("GET", self._config.models_url)
        models = data.get("data", []) if isinstance(data, dict) else []
        return list(models)

    # ── Internal helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _build_headers(config: TranslationConfig) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"
        return headers

    def _build_payload(self, system_prompt: str, user_message: str) -> dict[str, Any]:
        """Construct the ``/chat/completions`` request body.

        ``stream`` is left unset (the API default is ``False``) so the whole
        completion comes back in one JSON object.
        """
        return {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "top_p": self._config.top_p,
            "frequency_penalty": self._config.frequency_penalty,
            "presence_penalty": self._config.presence_penalty,
        }

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._http_client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(
                "InferenceClient: request timed out after %.1fs (url=%s)",
                self._config.timeout_seconds,
                url,
            )
            raise InferenceError(
                message="Inference backend timed out",
                detail=f"No response from {url} within {self._config.timeout_seconds}s",
            ) from e
        except httpx.HTTPError as e:
            logger.error("InferenceClient: request to %s failed: %s", url, e)
            raise InferenceError(
                message="Inference backend unreachable",
                detail=f"Cannot connect to {url}: {e}",
            ) from e

        if response.status_code >= 400:
            logger.error(
                "InferenceClient: %s %s returned HTTP %d",
                method,
                url,
                response.status_code,
            )
            raise InferenceError(
                message="Inference backend returned an error",
                status_code=response.status_code,
                detail=self._error_detail(response),
            )

        try:
            return response.json()
        except ValueError as e:
            raise InferenceError(
                message="Inference backend returned invalid JSON",
                status_code=response.status_code,
                detail=response.text[:200],
            ) from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Pull the backend's error message out of an error body, if any."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if body.get("detail"):
                return str(body["detail"])
        return response.text[:200]
