"""API routes — thin controllers that delegate to the gateway."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from chat_gateway.interface.dependencies import get_gateway
from chat_gateway.interface.schemas import (
    ChatExchangeOut,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    TriviaRequest,
    TriviaResponse,
)
from chat_gateway.services.completion_gateway import CompletionGateway

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Missing prompt / topic"},
    500: {"model": ErrorResponse, "description": "LLM, configuration or storage error"},
}


@router.post("/trivia", response_model=TriviaResponse, responses=_ERRORS)
async def generate_trivia(
    body: TriviaRequest,
    gateway: CompletionGateway = Depends(get_gateway),
) -> TriviaResponse:
    """Generate five multiple-choice trivia questions about a topic."""
    questions = await gateway.generate_trivia_questions(body.topic)
    return TriviaResponse(questions=questions)


@router.post("/chat", response_model=ChatResponse, responses=_ERRORS)
async def generate_chat(
    body: ChatRequest,
    gateway: CompletionGateway = Depends(get_gateway),
) -> ChatResponse:
    """Answer a prompt and store the exchange."""
    response = await gateway.generate_chat_response(body.prompt)
    return ChatResponse(response=response)


@router.get(
    "/history",
    response_model=list[ChatExchangeOut],
    responses={500: _ERRORS[500]},
)
async def conversation_history(
    gateway: CompletionGateway = Depends(get_gateway),
) -> list[ChatExchangeOut]:
    """Return the most recent conversations, newest first."""
    exchanges = await gateway.get_conversation_history()
    return [ChatExchangeOut.from_entity(e) for e in exchanges]
