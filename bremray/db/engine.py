"""Async SQLAlchemy engine for the local preferences database."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from bremray.models import Base

_SQLITE_PREFIX = "sqlite+aiosqlite:///"


def create_engine(database_url: str) -> AsyncEngine:
    if database_url.startswith(_SQLITE_PREFIX) and ":memory:" not in database_url:
        Path(database_url[len(_SQLITE_PREFIX):]).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(database_url, echo=False)


def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
