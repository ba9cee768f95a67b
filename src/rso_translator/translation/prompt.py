"""Prompt construction for the translation backend.

The system instruction is deliberately over-specified: it spells out the
exact output shape, shows an example of the optional ``comment`` field, and
forbids any text around the JSON.  The backend is the only unreliable part
of the pipeline, and narrowing what it may say is the main defence against
unparseable completions.

Both functions are pure; the same request always yields the same prompt.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from rso_translator.translation.models import TranslationEntry

_SYSTEM_PROMPT_TEMPLATE = (
    "Translate the following strings from {language_from} to {language_to}. "
    "Return them in the exact same format, but translated. "
    "You can add `comment` field to strings where you are not absolutely sure "
    "about the translation. Like this:\n"
    '```{{ "key": "value", "value": "translated value", '
    '"comment": "not sure about this one because of a specific reason" }}```\n\n'
    "Return absolutely nothing but the json itself, it will be directly parsed by a program."
)


def build_system_prompt(language_from: str, language_to: str) -> str:
    """Render the fixed system instruction for one language pair."""
    return _SYSTEM_PROMPT_TEMPLATE.format(language_from=language_from, language_to=language_to)


def serialize_entries(entries: Sequence[TranslationEntry]) -> str:
    """Serialise request entries as the JSON array sent in the user turn.

    Only ``key`` and ``value`` are emitted, in request order.  Non-ASCII
    text is written as-is so the model sees the source language directly
    rather than ``\\u`` escapes.

    Example::

        serialize_entries([TranslationEntry(key="greeting", value="Hello")])
        # →
        # [
        #   {
        #     "key": "greeting",
        #     "value": "Hello"
        #   }
        # ]
    """
    return json.dumps(
        [{"key": entry.key, "value": entry.value} for entry in entries],
        indent=2,
        ensure_ascii=False,
    )
