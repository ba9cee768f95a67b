"""Translation endpoint."""

from fastapi import APIRouter

from rso_translator.translation.models import TranslationRequest, TranslationResponse
from rso_translator.translation.service import TranslationService


def router(service: TranslationService) -> APIRouter:
    """Build the translation router."""
    api = APIRouter(tags=["translation"])

    @api.post(
        "/translate",
        response_model=TranslationResponse,
        response_model_exclude_none=True,
        summary="Translate strings",
        description="Translate strings",
    )
    async def translate(request: TranslationRequest) -> TranslationResponse:
        """Translate every key/value pair from ``languageFrom`` to ``languageTo``.

        Pipeline failures are turned into ``502`` responses by the handlers
        in :mod:`rso_translator.api.errors`.
        """
        return await service.translate(request)

    return api
