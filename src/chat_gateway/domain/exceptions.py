"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class ChatGatewayError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class ValidationError(ChatGatewayError):
    """A required input (prompt or topic) is missing or empty."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(ChatGatewayError):
    """The LLM capability was not initialised (no API key at startup)."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class UpstreamError(ChatGatewayError):
    """The call to the LLM provider failed (network, auth, quota, ...)."""


# ── Persistence errors ──────────────────────────────────────────────────────


class StorageError(ChatGatewayError):
    """Reading from or writing to the conversation store failed."""
