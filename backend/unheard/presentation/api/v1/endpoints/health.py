"""Health check endpoint — never touches the document store."""

from fastapi import APIRouter, Depends

from unheard.application.services import SecondaryEffectQueue
from unheard.config import get_settings
from unheard.infrastructure.dependencies import get_effect_queue

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    effects: SecondaryEffectQueue = Depends(get_effect_queue),
) -> dict:
    """Returns the application health status and secondary-effect counters."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "secondary_effects": effects.stats(),
    }
