"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError

from courses_api.core.config import Settings, get_settings
from courses_api.core.database import Database
from courses_api.core.error_normalizer import ErrorNormalizer
from courses_api.routes import courses_router, users_router

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to the REST API project!"


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    database: Database = app.state.database
    logger.info("database.connecting backend=%s", database.url.get_backend_name())
    try:
        database.create_all()
    except SQLAlchemyError:
        logger.exception("database.connect_failed backend=%s", database.url.get_backend_name())
        raise
    logger.info("database.ready backend=%s", database.url.get_backend_name())
    try:
        yield
    finally:
        database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Courses REST API", version="1.0.0", lifespan=_lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    ErrorNormalizer(log_errors=settings.enable_global_error_logging).install(app)

    @app.middleware("http")
    async def log_request(request: Request, call_next) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http.request method=%s path=%s status=%s duration_ms=%.1f",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.get("/", tags=["Root"])
    async def welcome() -> dict[str, str]:
        return {"message": WELCOME_MESSAGE}

    api_prefix = "/api"
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(courses_router, prefix=api_prefix)

    return app


app = create_app()
