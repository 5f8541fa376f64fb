from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ideaboard.core.config import get_settings
from ideaboard.core.log import configure_logging
from ideaboard.repositories.base import LabelCascadeError
from ideaboard.repositories.repository import IdeaRepository
from ideaboard.routers import ideas as ideas_router
from ideaboard.routers import labels as labels_router

logger = logging.getLogger(__name__)


async def _label_cascade_error(request: Request, exc: LabelCascadeError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc),
            "label": exc.label,
            "cleared": exc.cleared,
            "pending": exc.pending,
            "vanished": exc.vanished,
        },
    )


def create_app(repository: Optional[IdeaRepository] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``).

    Without an explicit repository the process-wide one from
    ``get_repository()`` is used on first request.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title="Ideaboard API")
    application.state.repository = repository
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    application.add_exception_handler(LabelCascadeError, _label_cascade_error)

    application.include_router(labels_router.router)
    application.include_router(ideas_router.router)

    # mounted last so /api routes win
    if settings.public_dir.is_dir():
        application.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
    else:
        logger.debug("No public directory at %s, static files disabled", settings.public_dir)
    return application


app = create_app()
