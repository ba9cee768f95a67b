"""Response parser for backend completions.

``ResponseParser`` takes the raw completion text from the inference client
and decides whether it is a usable list of translated entries.  It never
raises: the result is a tagged :class:`ParseOutcome` that either carries
typed entries or a rejection reason plus the raw text (kept for logs only).
The service turns a failed outcome into ``ResponseParseError``.

Parsing pipeline (applied in order)
-----------------------------------
1. **Empty check**: missing or blank completion → failure.
2. **Fence stripping**: some models wrap the whole answer in a Markdown
   code fence (```` ```json ... ``` ````) despite being told not to.  A
   fence is only removed when it encloses the *entire* completion; prose
   before or after it still fails at step 3.
3. **JSON decode**: anything that is not valid JSON (prose, truncated
   output) → failure.
4. **Shape check**: the document must be an array whose items are objects
   with string ``key`` and ``value`` and an optional string ``comment``.
5. **Structure check** (strict mode only): the entry count and key order
   must match the request.

Strict vs non-strict
--------------------
By default the parser trusts the backend to preserve the request's
structure; a response with a dropped or reordered entry is returned as-is.
``strict_mode=True`` rejects such responses instead.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from pydantic import TypeAdapter, ValidationError

from rso_translator.translation.models import TranslatedEntry

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER: TypeAdapter[list[TranslatedEntry]] = TypeAdapter(list[TranslatedEntry])

# Whole-completion code fence with an optional language tag.
_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*\s*\n?(?P<body>.*?)\n?\s*```$", re.DOTALL)

EMPTY_RESPONSE = "empty response"


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one completion.

    Attributes:
        entries: Parsed entries on success, ``None`` on failure.
        reason:  Why parsing failed; empty on success.
        raw:     The completion text as received.
    """

    entries: list[TranslatedEntry] | None
    reason: str = ""
    raw: str = field(default="", repr=False)

    @property
    def ok(self) -> bool:
        return self.entries is not None

    @classmethod
    def success(cls, entries: list[TranslatedEntry], raw: str) -> ParseOutcome:
        return cls(entries=entries, raw=raw)

    @classmethod
    def failure(cls, reason: str, raw: str | None) -> ParseOutcome:
        return cls(entries=None, reason=reason, raw=raw or "")


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapping the whole of ``text``."""
    match = _FENCE_RE.match(text)
    if match is None:
        return text
    return match.group("body").strip()


class ResponseParser:
    """Turns raw completion text into translated entries.

    Attributes:
        _strict_mode: Enforce entry count and key order against the request.
    """

    def __init__(self, *, strict_mode: bool = False) -> None:
        self._strict_mode = strict_mode

    def parse(
        self,
        raw: str | None,
        *,
        expected_keys: Sequence[str] | None = None,
    ) -> ParseOutcome:
        """Run the parsing pipeline on one completion.

        Every failure is logged at WARNING with a short excerpt of the raw
        text so rejections are traceable.

        Args:
            raw:           Completion text, or ``None`` if the backend sent
                           no content.
            expected_keys: Request keys in order.  Only consulted in strict
                           mode.

        Returns:
            A :class:`ParseOutcome`; check ``outcome.ok``.
        """
        # ── 1. Empty check ────────────────────────────────────────────────────
        if raw is None or not raw.strip():
            return self._reject(EMPTY_RESPONSE, raw)

        # ── 2. Fence stripping ────────────────────────────────────────────────
        text = strip_code_fence(raw.strip())

        # ── 3. JSON decode ────────────────────────────────────────────────────
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            return self._reject(f"completion is not valid JSON ({e.msg})", raw)

        # ── 4. Shape check ────────────────────────────────────────────────────
        if not isinstance(document, list):
            return self._reject(
                f"expected a JSON array, got {type(document).__name__}",
                raw,
            )
        try:
            entries = _ENTRIES_ADAPTER.validate_python(document)
        except ValidationError as e:
            return self._reject(
                f"array items do not match the entry shape ({e.error_count()} errors)",
                raw,
            )

        # ── 5. Structure check (strict mode only) ─────────────────────────────
        if self._strict_mode and expected_keys is not None:
            received = [entry.key for entry in entries]
            if received != list(expected_keys):
                return self._reject(
                    f"entry keys do not match the request ({len(received)} received, "
                    f"{len(expected_keys)} expected)",
                    raw,
                )

        return ParseOutcome.success(entries, raw)

    @staticmethod
    def _reject(reason: str, raw: str | None) -> ParseOutcome:
        logger.warning("ResponseParser: rejected completion: %s: %r", reason, (raw or "")[:80])
        return ParseOutcome.failure(reason, raw)
