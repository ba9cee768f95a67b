"""
FastAPI application for the translation service.

This module builds the FastAPI application that serves the HTTP surface of
the service. It sets up:
- The shared inference client and translation service (one per process)
- Exception handlers that map pipeline errors to HTTP responses
- All route endpoints (translation, health check, root)
- The OpenAPI documentation, generated from the same pydantic models that
  validate requests

The server listens on port 8080 by default.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rso_translator import __version__
from rso_translator.api.errors import register_exception_handlers
from rso_translator.api.routes import register_routes
from rso_translator.config import ServerConfig
from rso_translator.config import config as default_config
from rso_translator.translation.client import InferenceClient
from rso_translator.translation.service import CompletionBackend, TranslationService

API_TITLE = "RSO AI Microservice"
API_DESCRIPTION = "Handles advanced AI translation."


def create_app(
    cfg: ServerConfig | None = None,
    *,
    backend: CompletionBackend | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        cfg: Server configuration; the module-level singleton when omitted.
        backend: Inference backend to use. When omitted an ``InferenceClient``
            is created from ``cfg.inference`` and closed on shutdown. Tests
            pass a fake here.

    Returns:
        FastAPI: The configured application.
    """
    cfg = cfg or default_config

    owned_client: InferenceClient | None = None
    if backend is None:
        owned_client = InferenceClient(cfg.inference)
        backend = owned_client

    service = TranslationService(backend=backend, strict_mode=cfg.inference.strict_mode)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if owned_client is not None:
            await owned_client.aclose()

    docs_enabled = cfg.docs_should_be_enabled
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.translation_service = service

    register_exception_handlers(app)
    register_routes(app, service)

    return app


# ============================================================================
# SERVER STARTUP
# ============================================================================

if __name__ == "__main__":
    # Only runs when this file is executed directly (not when imported)
    import uvicorn

    from rso_translator.logging_config import configure_logging

    configure_logging(default_config.logging)
    uvicorn.run(
        create_app(),
        host=default_config.server.host,
        port=default_config.server.port,
        log_config=None,
    )
