"""Global exception handlers — translate domain errors to HTTP responses.

Client errors return ``{"error": "<message>"}``; server errors return a
generic ``error`` plus the underlying ``details`` where available.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chat_gateway.domain.exceptions import (
    ChatGatewayError,
    ConfigurationError,
    StorageError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Error al procesar la solicitud"
CONFIGURATION_ERROR = "No se ha configurado correctamente la API de OpenAI"

# (exception type, status code, generic message or None to use str(exc))
_EXCEPTION_STATUS: list[tuple[type[ChatGatewayError], int, str | None]] = [
    (ValidationError, 400, None),
    (ConfigurationError, 500, CONFIGURATION_ERROR),
    (UpstreamError, 500, GENERIC_ERROR),
    (StorageError, 500, GENERIC_ERROR),
]


def _error_json(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content = {"error": error}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code, generic in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
            generic_message: str | None,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                if generic_message is None:
                    return _error_json(status_code, str(exc))
                return _error_json(status_code, generic_message, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code, generic))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(400, "Solicitud inválida", "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, GENERIC_ERROR)
