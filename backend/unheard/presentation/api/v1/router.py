"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from unheard.presentation.api.v1.endpoints.health import router as health_router
from unheard.presentation.api.v1.endpoints.catalog import router as catalog_router
from unheard.presentation.api.v1.endpoints.identity import router as identity_router
from unheard.presentation.api.v1.endpoints.confessions import router as confessions_router
from unheard.presentation.api.v1.endpoints.reactions import router as reactions_router
from unheard.presentation.api.v1.endpoints.comments import router as comments_router
from unheard.presentation.api.v1.endpoints.topics import router as topics_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(catalog_router)
router.include_router(identity_router)
router.include_router(confessions_router)
router.include_router(reactions_router)
router.include_router(comments_router)
router.include_router(topics_router)
