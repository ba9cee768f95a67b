"""Exceptions raised by the translation pipeline.

Request validation failures are plain :class:`pydantic.ValidationError`
instances and never reach this module.  Everything that can go wrong
*after* a request has been accepted is one of the two subclasses below:

``InferenceError``
    The backend call itself failed: connection refused, timeout, non-2xx
    status, or a body that is not JSON.

``ResponseParseError``
    The backend answered, but the completion text is not the JSON array
    we asked for (this includes an empty or missing completion).  The raw
    text is kept on the exception for logging and is never sent back to
    the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class TranslationError(Exception):
    """Base class for failures after the request passed validation.

    Attributes:
        message: Short, caller-safe description.
        detail:  Extra diagnostic text for logs.
    """

    message: str
    detail: str = ""

    def __str__(self) -> str:
        """Return a formatted error message."""
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


@dataclass(eq=False)
class InferenceError(TranslationError):
    """The inference backend could not be reached or answered with an error.

    Attributes:
        status_code: HTTP status returned by the backend, ``0`` when no
                     response was received at all.
    """

    status_code: int = 0


@dataclass(eq=False)
class ResponseParseError(TranslationError):
    """The backend completion could not be turned into translated entries.

    Attributes:
        raw: The completion text as received.  Excluded from ``repr`` so it
             does not leak into tracebacks shown to operators by accident.
    """

    raw: str = field(default="", repr=False)
