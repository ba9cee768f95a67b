"""
Route registration entry point for the FastAPI application.

Each router module exposes a factory that closes over the shared
``TranslationService``; ``register_routes(app, service)`` mounts them all.
"""

from fastapi import FastAPI

from rso_translator.api.routes import health, translate
from rso_translator.translation.service import TranslationService


def register_routes(app: FastAPI, service: TranslationService) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router(service))
    app.include_router(translate.router(service))
