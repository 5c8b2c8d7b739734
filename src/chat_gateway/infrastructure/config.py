"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Optional: without it the chat / trivia operations report a
    # configuration error instead of the process failing to start.
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    chat_max_tokens: int = 300
    trivia_max_tokens: int = 1000
    temperature: float = 0.7
    history_limit: int = 10
    database_url: str = "sqlite+aiosqlite:///./conversations.db"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def llm_configured(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.get_secret_value())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
