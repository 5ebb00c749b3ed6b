from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notes_api.api import auth, notes
from notes_api.config import APP_VERSION, Settings, load_settings
from notes_api.services.auth_service import AuthService
from notes_api.services.notes_service import NotesService
from notes_api.storage.database import Database

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database = Database(settings.data_dir)
    try:
        database.open()
    except OSError:
        # nothing can be served without the store
        logger.critical("Could not open document store at %s", settings.data_dir, exc_info=True)
        raise

    app.state.database = database
    app.state.auth_service = AuthService(database.users, settings)
    app.state.notes_service = NotesService(database.notes)
    app.state.started_at = time.monotonic()
    logger.info("Notes API started (environment=%s)", settings.environment)
    try:
        yield
    finally:
        database.close()
        logger.info("Notes API stopped")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Something went wrong!"},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Notes API", version=APP_VERSION, lifespan=lifespan)
    app.state.settings = settings

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(auth.router)
    app.include_router(notes.router)

    @app.get("/")
    async def root():
        return {
            "message": "CRUD Notes API is running!",
            "version": APP_VERSION,
            "endpoints": {"auth": auth.router.prefix, "notes": notes.router.prefix},
        }

    @app.get("/health")
    async def health(request: Request):
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - request.app.state.started_at,
            "environment": request.app.state.settings.environment,
        }

    return app
