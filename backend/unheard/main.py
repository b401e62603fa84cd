"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from unheard.config import get_settings
from unheard.domain.exceptions import (
    DocumentStoreError,
    LocalStorageError,
    SessionUnavailableError,
)
from unheard.infrastructure.dependencies import (
    get_appwrite_client,
    get_effect_queue,
    get_key_value_store,
    get_legacy_migration,
)
from unheard.infrastructure.logging.log_config import setup_logging
from unheard.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _run_legacy_migration() -> None:
    """Assign a legacy device id to records created before ownership existed.

    Failures are logged and startup continues; the migration is idempotent
    and simply runs again on the next start.
    """
    try:
        report = await get_legacy_migration().run()
        logger.info(
            "Legacy migration done: %d confessions, %d comments, %d reactions",
            report.confessions_migrated,
            report.comments_migrated,
            report.reactions_migrated,
        )
    except Exception as exc:
        logger.warning("Legacy deviceId migration failed: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — logging, optional migration, orderly shutdown."""
    settings = get_settings()
    setup_logging()

    # Load device storage now; an unreadable file fails startup
    get_key_value_store()

    if settings.run_legacy_migration_on_startup:
        await _run_legacy_migration()

    yield

    # Shutdown: let queued bookkeeping writes finish before closing the client
    await get_effect_queue().drain()
    await get_appwrite_client().aclose()


async def session_unavailable_handler(request: Request, exc: SessionUnavailableError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


async def document_store_error_handler(request: Request, exc: DocumentStoreError) -> JSONResponse:
    logger.warning("Document store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.message, "retryable": exc.error_type == "transient"},
    )


async def local_storage_error_handler(request: Request, exc: LocalStorageError) -> JSONResponse:
    logger.error("Local storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Device storage is unavailable"},
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SessionUnavailableError, session_unavailable_handler)
    app.add_exception_handler(DocumentStoreError, document_store_error_handler)
    app.add_exception_handler(LocalStorageError, local_storage_error_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "unheard.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
