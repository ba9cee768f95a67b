"""RSO AI Microservice: key/value string translation backed by an LLM.

Callers submit a list of ``{key, value}`` strings plus source and target
language tags; the service asks an OpenAI-compatible chat completions
backend to translate them and hands back the same keys with translated
values (and an optional ``comment`` where the model is unsure).

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("rso-translator")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
