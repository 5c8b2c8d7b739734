"""SQLAlchemy adapter — implements the ConversationStore port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text, TypeDecorator, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from chat_gateway.domain.entities import ChatExchange
from chat_gateway.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class UtcDateTime(TypeDecorator[datetime]):
    """Timezone-aware UTC timestamp, also on backends that drop the offset.

    SQLite stores ``DateTime(timezone=True)`` without an offset, so values
    are normalised to UTC on write and re-tagged as UTC on read.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: object) -> datetime | None:
        return _as_utc(value)

    def process_result_value(self, value: datetime | None, dialect: object) -> datetime | None:
        return _as_utc(value)


def _as_utc(value: datetime | None) -> datetime | None:
    """Naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ConversationRecord(Base):
    """Row in the ``conversations`` table."""

    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), nullable=False, index=True
    )

    def to_entity(self) -> ChatExchange:
        return ChatExchange(
            id=self.id,
            prompt=self.prompt,
            response=self.response,
            created_at=self.created_at,
        )


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; in-memory SQLite shares one connection."""
    kwargs: dict[str, object] = {}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        kwargs["poolclass"] = StaticPool
    return create_async_engine(database_url, **kwargs)


class SqlAlchemyConversationStore:
    """Concrete ``ConversationStore`` backed by an async SQLAlchemy engine."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = async_sessionmaker(engine, expire_on_commit=False)

    async def create_schema(self) -> None:
        """Create the ``conversations`` table if it does not exist."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not initialise the database: {exc}") from exc

    async def insert(self, exchange: ChatExchange) -> ChatExchange:
        record = ConversationRecord(
            prompt=exchange.prompt,
            response=exchange.response,
            created_at=exchange.created_at,
        )
        try:
            async with self._sessions() as session:
                session.add(record)
                await session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not save the conversation: {exc}") from exc

        logger.debug("Stored conversation %d", record.id)
        return record.to_entity()

    async def find_recent(self, limit: int) -> list[ChatExchange]:
        stmt = (
            select(ConversationRecord)
            .order_by(ConversationRecord.created_at.desc(), ConversationRecord.id.desc())
            .limit(limit)
        )
        try:
            async with self._sessions() as session:
                result = await session.scalars(stmt)
                records = result.all()
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Error al obtener el historial de conversaciones: {exc}"
            ) from exc

        return [record.to_entity() for record in records]

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self._engine.dispose()
