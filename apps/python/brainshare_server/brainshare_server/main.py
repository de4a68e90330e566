"""FastAPI application composing the BrainShare routers."""

from __future__ import annotations

import os
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from functools import partial

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

from access_guard import AccessGuard, CredentialVerifier
from access_guard import settings as guard_settings
from brainshare_api import routers
from brainshare_api.config import settings as api_settings
from brainshare_db import ensure_indexes, get_db, ping
from brainshare_repo import get_role
from resource_query import (
    ClientInputError,
    NotFoundError,
    ResourceQueryEngine,
    StoreUnavailableError,
)

from .config import settings
from .middleware import RequestLogMiddleware


def _configure_logging() -> None:
    level = os.getenv("LOG_LEVEL") or os.getenv("LOGURU_LEVEL") or "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    logger.info("Logger configured at {level} level", level=level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    await ensure_indexes(app.state.db)
    logger.info("BrainShare is running on port {port}", port=settings.port)
    yield


async def _client_input_handler(request: Request, exc: ClientInputError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=400)


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=404)


async def _store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(
        "Store unavailable while serving {method} {path}: {error}",
        method=request.method,
        path=request.url.path,
        error=exc,
    )
    return JSONResponse({"detail": "Database unavailable, retry later"}, status_code=503)


def create_app(db: AsyncIOMotorDatabase | None = None) -> FastAPI:
    """Build the application with its process-wide engine, verifier and guard."""

    db = db if db is not None else get_db()
    engine = ResourceQueryEngine(db)
    verifier = CredentialVerifier(
        guard_settings.resolve_secret(api_settings.production),
        algorithm=guard_settings.token_algorithm,
        ttl=timedelta(days=guard_settings.token_ttl_days),
    )

    app = FastAPI(title=settings.api_title, version=settings.api_version, lifespan=lifespan)
    app.state.db = db
    app.state.query_engine = engine
    app.state.credential_verifier = verifier
    app.state.access_guard = AccessGuard(verifier, partial(get_role, engine))

    app.add_exception_handler(ClientInputError, _client_input_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(StoreUnavailableError, _store_unavailable_handler)

    app.add_middleware(RequestLogMiddleware)
    # Allow the front-end origins (with credentials) to talk to this API.
    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    async def root() -> str:
        return "BrainShare Server is running.."

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Simple liveness endpoint for load balancers and probes."""

        return {"status": "ok"}

    @app.get("/health/db", tags=["health"])
    async def database_health() -> dict[str, bool]:
        try:
            return await ping(app.state.db)
        except ConnectionFailure as exc:
            raise StoreUnavailableError(f"ping failed: {exc}") from exc

    for router in routers:
        app.include_router(router)
    return app


_configure_logging()

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
