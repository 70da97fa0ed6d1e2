"""FastAPI application for the liftpal JSON API."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..db.engine import init_db
from ..errors import AuthError, ConflictError, NotFoundError, TransportError
from ..settings import get_db_path
from .routers import partners, stats, workouts

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    AuthError: 401,
    NotFoundError: 404,
    ConflictError: 409,
    ValueError: 422,
    TransportError: 502,
}


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Schema creation is idempotent
        await init_db(app.state.db_path)
        yield

    app = FastAPI(
        title="liftpal",
        description="Workout generation, set logging and partner progress",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = db_path or get_db_path()

    for exc_type, status_code in ERROR_STATUS.items():
        app.add_exception_handler(exc_type, _error_handler(status_code))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s in %.1fms",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response

    app.include_router(workouts.router)
    app.include_router(stats.router)
    app.include_router(partners.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
