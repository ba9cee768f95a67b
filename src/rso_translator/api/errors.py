"""Exception handlers for pipeline errors.

Request validation failures are left to FastAPI, which answers ``422`` with
its standard error body.  Failures after validation map to ``502 Bad
Gateway``: the request was fine, the upstream inference backend was not.
Only a fixed message is returned; backend error text and the raw
completion stay in the logs.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rso_translator.translation.errors import InferenceError, ResponseParseError

logger = logging.getLogger(__name__)


async def _inference_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Inference backend request failed"},
    )


async def _response_parse_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Inference backend returned an unparseable response"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the pipeline error handlers to ``app``."""
    app.add_exception_handler(InferenceError, _inference_error_handler)
    app.add_exception_handler(ResponseParseError, _response_parse_error_handler)
