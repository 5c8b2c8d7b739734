"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from chat_gateway.infrastructure.config import Settings, get_settings
from chat_gateway.interface.dependencies import shutdown, startup
from chat_gateway.interface.error_handlers import register_error_handlers
from chat_gateway.interface.routes import router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage startup / shutdown of shared resources."""
        app.state.resources = await startup(settings)
        yield
        await shutdown(app.state.resources)

    app = FastAPI(
        title="Chat Gateway",
        version="1.0.0",
        description=(
            "Forwards prompts to an LLM: free-form chat with stored history "
            "and multiple-choice trivia generation."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
