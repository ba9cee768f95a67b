"""Pydantic models for the translation request/response contract.

These models are the single schema description of the service: FastAPI
uses them to validate ``POST /translate`` bodies *and* to publish the
OpenAPI document, and the response parser reuses :class:`TranslatedEntry`
to check what the inference backend sent back.

Wire names vs. attribute names
------------------------------
The JSON contract uses ``languageFrom``, ``languageTo`` and ``strings``.
Python code uses ``language_from``, ``language_to`` and ``entries``.  Only
the wire names are accepted on input, so the runtime validator and the
published OpenAPI schema describe the same properties.  Entry lists are
stored as tuples; a validated request or response cannot be mutated.
Responses are serialised by alias.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class TranslationEntry(BaseModel):
    """A single string to translate.

    Attributes:
        key:   Caller-side identifier, echoed back untouched.  Keys are not
               required to be unique.
        value: Text in the source language.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="The key to translate")
    value: str = Field(..., description="The value to translate")


class TranslationRequest(BaseModel):
    """Body of ``POST /translate``.

    Unknown top-level properties are rejected.  ``strings`` may be omitted,
    in which case there is nothing to translate and an empty response is
    returned.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={"description": "The request payload"},
    )

    language_from: str = Field(
        ...,
        alias="languageFrom",
        min_length=1,
        description="The language to translate from",
    )
    language_to: str = Field(
        ...,
        alias="languageTo",
        min_length=1,
        description="The language to translate to",
    )
    entries: tuple[TranslationEntry, ...] = Field(
        default_factory=tuple,
        alias="strings",
        description="List of key-value pairs to translate",
    )

    @field_validator("language_from", "language_to")
    @classmethod
    def _require_visible_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("language tag must not be blank")
        return value


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class TranslatedEntry(BaseModel):
    """A translated string, optionally annotated by the model.

    Attributes:
        key:     Key from the request.
        value:   Text in the target language.
        comment: Present only when the model was not confident about the
                 translation.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="The key translated")
    value: str = Field(..., description="The value translated")
    comment: str | None = Field(default=None, description="Comments where applicable")


class TranslationResponse(BaseModel):
    """Body of a successful ``POST /translate`` response."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={"description": "The response payload"},
    )

    entries: tuple[TranslatedEntry, ...] = Field(
        ...,
        alias="strings",
        description="List of key-value pairs translated",
    )


class HealthStatus(BaseModel):
    """Body of ``GET /healthcheck``."""

    model_config = ConfigDict(json_schema_extra={"description": "The healthcheck response"})

    status: Literal["ok", "error"] = Field(..., description="The status of the service")
