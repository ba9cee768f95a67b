"""Translation pipeline for the RSO AI Microservice.

This package turns a validated :class:`TranslationRequest` into a
:class:`TranslationResponse` by prompting an OpenAI-compatible chat
completions backend and parsing its freeform answer back into typed data.

Package structure
-----------------
config.py   TranslationConfig: frozen inference settings (URL, model,
            sampling parameters, timeout, strict mode).
models.py   Pydantic request/response models; the one schema used both
            for validation and for the published OpenAPI document.
prompt.py   build_system_prompt / serialize_entries: deterministic
            prompt construction.
client.py   InferenceClient: async httpx client; the only network
            code in the service.
parser.py   ResponseParser: completion text → ParseOutcome.
errors.py   TranslationError, InferenceError, ResponseParseError.
service.py  TranslationService: orchestrates the above; the single
            entry-point used by the HTTP routes.

Typical call flow (inside ``POST /translate``)
----------------------------------------------
1. FastAPI validates the body into a ``TranslationRequest``.
2. ``await service.translate(request)``
3. Prompt built from the entries and the language pair.
4. ``InferenceClient.chat_completion`` called once.
5. ``ResponseParser`` checks the completion.
6. On success → ``TranslationResponse``; otherwise a typed error.
"""

from rso_translator.translation.errors import (
    InferenceError,
    ResponseParseError,
    TranslationError,
)
from rso_translator.translation.service import TranslationService

__all__ = ["InferenceError", "ResponseParseError", "TranslationError", "TranslationService"]
