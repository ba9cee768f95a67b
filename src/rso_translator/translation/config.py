"""Inference backend configuration.

``TranslationConfig`` is a frozen dataclass that mirrors the ``[inference]``
section of ``config/server.ini``.  It is built once at process start (see
:mod:`rso_translator.config`) and never mutated at runtime; environment
overrides are applied with :func:`dataclasses.replace` before the object is
handed to the inference client and the translation service.

Sampling defaults
-----------------
The defaults lean deterministic without being greedy: a moderate
temperature keeps translations natural, ``top_p=1`` and zero penalties keep
the model from drifting away from the JSON shape it is asked to echo back,
and ``max_tokens`` bounds the size of a single completion.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4-1106-preview"


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "yes", "1", "on", "enabled")


@dataclass(frozen=True)
class TranslationConfig:
    """Immutable settings for talking to the inference backend.

    Attributes:
        base_url:          Root of the OpenAI-compatible REST API
                           (``/chat/completions`` and ``/models`` are
                           appended).
        api_key:           Bearer token sent with every request.  Only ever
                           supplied through the environment.
        model:             Model identifier sent with each completion.
        temperature:       Sampling temperature.
        max_tokens:        Upper bound on completion length.
        top_p:             Nucleus sampling cutoff.
        frequency_penalty: Forwarded verbatim; ``0`` disables it.
        presence_penalty:  Forwarded verbatim; ``0`` disables it.
        timeout_seconds:   HTTP timeout for a single backend call.
        strict_mode:       When ``True`` the parsed response must carry the
                           same keys, in the same order, as the request.
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: str = field(default="", repr=False)
    model: str = DEFAULT_MODEL
    temperature: float = 0.8
    max_tokens: int = 4096
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    timeout_seconds: float = 60.0
    strict_mode: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be a positive number")
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be a positive integer")

    @property
    def chat_completions_url(self) -> str:
        """Full ``/chat/completions`` URL built from ``base_url``."""
        return f"{self.base_url.rstrip('/')}/chat/completions"

    @property
    def models_url(self) -> str:
        """Full ``/models`` URL used by the liveness probe."""
        return f"{self.base_url.rstrip('/')}/models"

    @classmethod
    def from_dict(cls, data: dict) -> TranslationConfig:
        """Parse an ``[inference]`` block.

        Values may be strings (as read from an INI file) or already-typed
        Python values.  Missing fields fall back to the dataclass defaults.

        Args:
            data: Mapping of option name to value.

        Returns:
            A fully-populated, frozen ``TranslationConfig``.
        """
        defaults = cls()
        return cls(
            base_url=str(data.get("base_url", defaults.base_url)),
            api_key=str(data.get("api_key", defaults.api_key)),
            model=str(data.get("model", defaults.model)),
            temperature=float(data.get("temperature", defaults.temperature)),
            max_tokens=int(data.get("max_tokens", defaults.max_tokens)),
            top_p=float(data.get("top_p", defaults.top_p)),
            frequency_penalty=float(data.get("frequency_penalty", defaults.frequency_penalty)),
            presence_penalty=float(data.get("presence_penalty", defaults.presence_penalty)),
            timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
            strict_mode=_parse_bool(data.get("strict_mode", defaults.strict_mode)),
        )
