"""FastAPI application for the payroll engine."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from payroll_tool import __version__
from payroll_tool.config import AppSettings
from payroll_tool.logging_config import setup_logging


def _allowed_origins(settings: AppSettings) -> list[str]:
    # PAYROLL_ALLOWED_ORIGINS="*" allows any origin
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    if "*" in origins:
        return ["*"]
    return origins or ["http://localhost:8080", "http://localhost:3000", "http://127.0.0.1:8080"]


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings.log_level, settings.log_json)
        yield

    app = FastAPI(
        title="Payroll Engine API",
        description="Payroll aggregation, weekly overtime allocation and ledger upserts.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    origins = _allowed_origins(settings)
    allow_all = origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=not allow_all,  # credentials not allowed with wildcard
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

    app.include_router(router)

    @app.get("/")
    async def root():
        return {
            "name": "Payroll Engine API",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000)
