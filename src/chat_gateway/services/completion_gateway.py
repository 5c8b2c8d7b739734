"""Completion gateway use case — chat, trivia and conversation history.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`LlmCapability` and :class:`ConversationStore`).  The
interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
from typing import Any

from chat_gateway.domain.entities import ChatExchange, ChatMessage, MessageRole
from chat_gateway.domain.exceptions import ConfigurationError, ValidationError
from chat_gateway.domain.ports.conversation_store import ConversationStore
from chat_gateway.domain.ports.llm_capability import LlmCapability
from chat_gateway.services.trivia_parser import parse_trivia_response

logger = logging.getLogger(__name__)

# ── Prompt templates ────────────────────────────────────────────────────────

CHAT_SYSTEM_PROMPT = (
    "Eres un asistente amigable y útil. Tus respuestas deben ser concisas "
    "(máximo 100 palabras), claras e incluir emojis relevantes. Usa párrafos "
    "cortos para mejor legibilidad."
)

TRIVIA_SYSTEM_PROMPT = """\
Eres un generador de preguntas de trivia. Crea 5 preguntas sobre el tema \
proporcionado. Cada pregunta debe tener 4 opciones de respuesta, donde solo \
una es correcta.

IMPORTANTE: Devuelve ÚNICAMENTE un JSON válido con el siguiente formato \
exacto, sin texto adicional antes o después:

{
  "questions": [
    {
      "question": "¿Pregunta 1?",
      "options": [
        {"text": "Opción 1", "isCorrect": false},
        {"text": "Opción 2", "isCorrect": true},
        {"text": "Opción 3", "isCorrect": false},
        {"text": "Opción 4", "isCorrect": false}
      ]
    },
    ...más preguntas con el mismo formato
  ]
}
"""

TRIVIA_USER_PROMPT = "Crea 5 preguntas de trivia sobre el tema: {topic}"

# ── Use case ────────────────────────────────────────────────────────────────


class CompletionGateway:
    """Forwards prompts to the LLM and shapes / persists the results.

    Parameters
    ----------
    llm:
        Adapter for the LLM provider, or ``None`` when no API key was
        configured at startup.  Generation calls then fail with
        :class:`ConfigurationError` without contacting anything.
    store:
        Persistence for chat exchanges.
    chat_max_tokens, trivia_max_tokens, temperature:
        Fixed call configuration for the two generation operations.
    history_limit:
        Number of exchanges returned by :meth:`get_conversation_history`.
    """

    def __init__(
        self,
        llm: LlmCapability | None,
        store: ConversationStore,
        chat_max_tokens: int = 300,
        trivia_max_tokens: int = 1000,
        temperature: float = 0.7,
        history_limit: int = 10,
    ) -> None:
        self._llm = llm
        self._store = store
        self._chat_max_tokens = chat_max_tokens
        self._trivia_max_tokens = trivia_max_tokens
        self._temperature = temperature
        self._history_limit = history_limit

    @property
    def llm_available(self) -> bool:
        return self._llm is not None

    # ── Chat ────────────────────────────────────────────────────────────

    async def generate_chat_response(self, prompt: str | None) -> str:
        """Answer *prompt* and persist the exchange; return the answer text."""
        if not prompt:
            raise ValidationError("El prompt es requerido")
        llm = self._require_llm()

        logger.info("Generating chat response (%d chars)", len(prompt))
        response = await llm.complete(
            [
                ChatMessage(MessageRole.SYSTEM, CHAT_SYSTEM_PROMPT),
                ChatMessage(MessageRole.USER, prompt),
            ],
            max_tokens=self._chat_max_tokens,
            temperature=self._temperature,
        )

        await self._store.insert(ChatExchange(prompt=prompt, response=response))
        return response

    # ── Trivia ──────────────────────────────────────────────────────────

    async def generate_trivia_questions(self, topic: str | None) -> list[Any]:
        """Generate trivia questions about *topic*.

        Malformed LLM output never fails the request; it degrades to a
        single placeholder question (see :mod:`trivia_parser`).
        """
        if not topic:
            raise ValidationError("El tema es requerido")
        llm = self._require_llm()

        logger.info("Generating trivia questions about %r", topic)
        raw = await llm.complete(
            [
                ChatMessage(MessageRole.SYSTEM, TRIVIA_SYSTEM_PROMPT),
                ChatMessage(MessageRole.USER, TRIVIA_USER_PROMPT.format(topic=topic)),
            ],
            max_tokens=self._trivia_max_tokens,
            temperature=self._temperature,
            json_mode=True,
        )
        return parse_trivia_response(raw, topic)

    # ── History ─────────────────────────────────────────────────────────

    async def get_conversation_history(self) -> list[ChatExchange]:
        """Return the most recent exchanges, newest first."""
        exchanges = await self._store.find_recent(self._history_limit)
        return exchanges[: self._history_limit]

    def _require_llm(self) -> LlmCapability:
        if self._llm is None:
            raise ConfigurationError("Error interno del servidor al configurar OpenAI")
        return self._llm
