"""Process entry point — logging setup and the uvicorn server."""

from __future__ import annotations

import logging

import uvicorn

from chat_gateway.infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Per-request INFO lines from the HTTP client duplicate the gateway's own logs.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(settings: Settings) -> None:
    """Configure root logging from ``LOG_LEVEL``."""
    level = settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    if level != "DEBUG":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    """Start the chat gateway under uvicorn."""
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Starting chat gateway on %s:%d (model=%s, database=%s)",
        settings.host,
        settings.port,
        settings.openai_model,
        settings.database_url.split("://", 1)[0],
    )
    uvicorn.run(
        "chat_gateway.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
