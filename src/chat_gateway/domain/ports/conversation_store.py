"""Port: conversation store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from chat_gateway.domain.entities import ChatExchange


class ConversationStore(Protocol):
    """Abstract contract for persisting chat exchanges."""

    async def insert(self, exchange: ChatExchange) -> ChatExchange:
        """Persist *exchange* and return it with its store-assigned id."""
        ...

    async def find_recent(self, limit: int) -> list[ChatExchange]:
        """Return at most *limit* exchanges, newest first."""
        ...
