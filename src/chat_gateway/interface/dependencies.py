"""FastAPI dependency injection wiring.

Shared resources are built once by :func:`startup` and stored on
``app.state``; request handlers reach them through :func:`get_gateway`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from chat_gateway.domain.exceptions import StorageError
from chat_gateway.infrastructure.config import Settings
from chat_gateway.infrastructure.openai_adapter import OpenAIAdapter
from chat_gateway.infrastructure.sqlalchemy_store import (
    SqlAlchemyConversationStore,
    build_engine,
)
from chat_gateway.services.completion_gateway import CompletionGateway

logger = logging.getLogger(__name__)


@dataclass
class Resources:
    """Process-wide adapters plus the gateway wired from them."""

    http_client: httpx.AsyncClient
    llm: OpenAIAdapter | None
    store: SqlAlchemyConversationStore
    gateway: CompletionGateway


def build_llm(settings: Settings, http_client: httpx.AsyncClient) -> OpenAIAdapter | None:
    """Return the OpenAI adapter, or ``None`` when no API key is configured."""
    if not settings.llm_configured:
        logger.error(
            "OPENAI_API_KEY is not set; chat and trivia requests will fail "
            "with a configuration error."
        )
        return None

    assert settings.openai_api_key is not None
    adapter = OpenAIAdapter(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.openai_model,
        http_client=http_client,
    )
    logger.info("OpenAI configured (model=%s)", settings.openai_model)
    return adapter


async def startup(settings: Settings) -> Resources:
    """Initialise shared resources — called from the lifespan context manager."""
    store = SqlAlchemyConversationStore(build_engine(settings.database_url))
    try:
        await store.create_schema()
    except StorageError:
        await store.close()
        raise

    http_client = httpx.AsyncClient()
    llm = build_llm(settings, http_client)

    gateway = CompletionGateway(
        llm=llm,
        store=store,
        chat_max_tokens=settings.chat_max_tokens,
        trivia_max_tokens=settings.trivia_max_tokens,
        temperature=settings.temperature,
        history_limit=settings.history_limit,
    )
    return Resources(http_client=http_client, llm=llm, store=store, gateway=gateway)


async def shutdown(resources: Resources) -> None:
    """Release shared resources."""
    if resources.llm:
        await resources.llm.close()
    await resources.http_client.aclose()
    await resources.store.close()


def get_gateway(request: Request) -> CompletionGateway:
    """Return the gateway built at startup."""
    resources: Resources | None = getattr(request.app.state, "resources", None)
    assert resources is not None, "startup() was not called"
    return resources.gateway
