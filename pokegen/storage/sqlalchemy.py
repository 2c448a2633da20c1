"""SQLAlchemy storage backend for PokeGen."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String, delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .base import GameStateStore


class Base(DeclarativeBase):
    pass


class SlotTable(Base):
    __tablename__ = "pokegen_slots"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class AsyncSQLAlchemyStorage:
    """Async engine wrapper producing slot stores."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo, future=True)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    def game_store(self) -> "AsyncSQLAlchemyGameStore":
        return AsyncSQLAlchemyGameStore(self._session_factory)


class AsyncSQLAlchemyGameStore(GameStateStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def load_slot(self, name: str) -> Any | None:
        async with self._session_factory() as session:
            row = await session.get(SlotTable, name)
            return row.value if row else None

    async def save_slot(self, name: str, value: Any) -> None:
        async with self._session_factory() as session:
            row = await session.get(SlotTable, name)
            now = datetime.now(timezone.utc)
            if row is None:
                session.add(SlotTable(name=name, value=value, updated_at=now))
            else:
                row.value = value
                row.updated_at = now
            await session.commit()

    async def clear(self) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(SlotTable))
            await session.commit()
