"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from chat_gateway.domain.entities import ChatExchange


class ChatRequest(BaseModel):
    """Request body for ``POST /chat``.

    Emptiness is checked by the gateway so that a missing and a blank
    prompt produce the same client error.
    """

    prompt: str | None = None


class ChatResponse(BaseModel):
    """Successful response from ``POST /chat``."""

    response: str


class TriviaRequest(BaseModel):
    """Request body for ``POST /trivia``."""

    topic: str | None = None


class TriviaResponse(BaseModel):
    """Successful response from ``POST /trivia``.

    Questions are passed through exactly as the LLM produced them.
    """

    questions: list[Any]


class ChatExchangeOut(BaseModel):
    """One entry of ``GET /history``."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    prompt: str
    response: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_entity(cls, exchange: ChatExchange) -> ChatExchangeOut:
        return cls(
            id=exchange.id,
            prompt=exchange.prompt,
            response=exchange.response,
            created_at=exchange.created_at,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    error: str
    details: str | None = None
