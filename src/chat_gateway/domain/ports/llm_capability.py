"""Port: LLM capability — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol, Sequence

from chat_gateway.domain.entities import ChatMessage


class LlmCapability(Protocol):
    """Abstract contract for interacting with a large-language model."""

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        """Send the ordered messages and return the raw completion text.

        With *json_mode* the provider is asked to constrain its output to a
        syntactically valid JSON object.
        """
        ...
