"""OpenAI adapter — implements the LlmCapability port."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx
from openai import AsyncOpenAI, AuthenticationError, RateLimitError

from chat_gateway.domain.entities import ChatMessage
from chat_gateway.domain.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmCapability`` backed by the OpenAI chat-completions API.

    The SDK's built-in retries are disabled: a failed call surfaces
    immediately as :class:`UpstreamError`.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            max_retries=0,
            http_client=http_client,
        )
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        """Send the messages and return the first choice's text."""
        try:
            kwargs: dict[str, object] = {
                "model": self._model,
                "messages": [message.to_dict() for message in messages],
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            if json_mode:
                kwargs["response_format"] = {"type": "json_object"}

            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[arg-type]

            return response.choices[0].message.content or ""

        except AuthenticationError as exc:
            raise UpstreamError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            detail = str(exc)
            logger.error("OpenAI RateLimitError: %s", detail)
            raise UpstreamError(
                f"OpenAI rate limit / quota error: {detail}"
            ) from exc

        except Exception as exc:
            raise UpstreamError(str(exc) or type(exc).__name__) from exc

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
