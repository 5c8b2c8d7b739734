"""Trivia payload parsing with a placeholder fallback.

The LLM is asked for ``{"questions": [...]}``.  Only the top-level shape is
checked; the inner questions are passed through untouched.  Anything that
does not decode to that shape is replaced by a single placeholder question
so the caller always receives a usable question set.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from chat_gateway.domain.entities import TriviaOption, TriviaQuestion

logger = logging.getLogger(__name__)

_FALLBACK_OPTIONS: tuple[TriviaOption, ...] = (
    TriviaOption("Opción 1"),
    TriviaOption("Opción 2", is_correct=True),
    TriviaOption("Opción 3"),
    TriviaOption("Opción 4"),
)


class TriviaFormatError(ValueError):
    """The LLM output is not a JSON object with a ``questions`` list."""


def fallback_questions(topic: str) -> list[dict[str, Any]]:
    """Return the one-question placeholder set for *topic*."""
    question = TriviaQuestion(
        question=f"¿Pregunta de ejemplo sobre {topic}?",
        options=_FALLBACK_OPTIONS,
    )
    return [question.to_dict()]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def extract_questions(raw: str) -> list[Any]:
    """Decode *raw* and return its ``questions`` list.

    Raises :class:`TriviaFormatError` when the text is not JSON or lacks a
    top-level ``questions`` list.
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        raise TriviaFormatError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise TriviaFormatError("Formato de respuesta incorrecto")

    questions = data.get("questions")
    if not isinstance(questions, list):
        raise TriviaFormatError("Formato de respuesta incorrecto")

    return questions


def parse_trivia_response(raw: str, topic: str) -> list[Any]:
    """Return the questions from *raw*, or the fallback set if malformed."""
    try:
        return extract_questions(raw)
    except TriviaFormatError as exc:
        logger.error("Error al analizar la respuesta JSON: %s", exc)
        logger.info("Respuesta recibida: %s", raw)
        return fallback_questions(topic)
