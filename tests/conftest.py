"""Shared fixtures: in-memory fakes for the two ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import pytest

from chat_gateway.domain.entities import ChatExchange, ChatMessage
from chat_gateway.domain.exceptions import StorageError
from chat_gateway.services.completion_gateway import CompletionGateway


@dataclass
class FakeLlm:
    """Returns a canned reply (or raises) and records every call."""

    reply: str = ""
    error: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        self.calls.append(
            {
                "messages": list(messages),
                "max_tokens": max_tokens,
                "temperature": temperature,
                "json_mode": json_mode,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class FakeStore:
    exchanges: list[ChatExchange] = field(default_factory=list)
    fail: bool = False

    async def insert(self, exchange: ChatExchange) -> ChatExchange:
        if self.fail:
            raise StorageError("disk full")
        stored = ChatExchange(
            id=len(self.exchanges) + 1,
            prompt=exchange.prompt,
            response=exchange.response,
            created_at=exchange.created_at,
        )
        self.exchanges.append(stored)
        return stored

    async def find_recent(self, limit: int) -> list[ChatExchange]:
        if self.fail:
            raise StorageError("Error al obtener el historial de conversaciones")
        ordered = sorted(self.exchanges, key=lambda e: e.created_at, reverse=True)
        return ordered[:limit]


@pytest.fixture
def llm() -> FakeLlm:
    return FakeLlm()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def gateway(llm: FakeLlm, store: FakeStore) -> CompletionGateway:
    return CompletionGateway(llm=llm, store=store)
