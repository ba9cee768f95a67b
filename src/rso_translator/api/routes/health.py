"""Health and root endpoints.

Provides the root ``/`` endpoint (API identity and version) and the
``/healthcheck`` endpoint, which probes the inference backend.

``/healthcheck`` always answers ``200``.  Backend reachability is reported
in the ``status`` field (``"ok"`` or ``"error"``), never through the HTTP
status code.
"""

from fastapi import APIRouter

from rso_translator import __version__
from rso_translator.translation.models import HealthStatus
from rso_translator.translation.service import TranslationService


def router(service: TranslationService) -> APIRouter:
    """Build the health router."""
    api = APIRouter(tags=["health"])

    @api.get("/", include_in_schema=False)
    async def root():
        """Root endpoint showing API identity and current version."""
        return {"message": "RSO AI Microservice", "version": __version__}

    @api.get(
        "/healthcheck",
        response_model=HealthStatus,
        summary="Healthcheck",
        description="Healthcheck",
    )
    async def healthcheck() -> HealthStatus:
        """Check that the inference backend is reachable."""
        return await service.check_health()

    return api
