"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from onboarding.api.auth import router as auth_router
from onboarding.api.public import router as public_router
from onboarding.api.v1 import v1_router
from onboarding.core.config import Settings, get_settings
from onboarding.core.database import Database
from onboarding.core.errors import AppError, AuthenticationError
from onboarding.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    configure_logging(settings.log_level, json_format=settings.log_json)

    # Startup: one database handle per app, tables created if missing
    db = Database(settings.database_url)
    await db.init()
    app.state.db = db
    logger.info("Database ready")
    yield
    # Shutdown: release the connection pool
    await db.dispose()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s", exc.detail, request.method, request.url.path,
            exc_info=exc.__cause__,
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Onboarding",
        version="0.1.0",
        description="Multi-tenant HR onboarding backend",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── CORS ─────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)

    # ── Routes ───────────────────────────────────────────────
    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(v1_router)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn; ``onboarding`` console script."""
    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)
    uvicorn.run(
        "onboarding.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    run()
