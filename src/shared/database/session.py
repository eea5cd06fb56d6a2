"""
Database Session Factory
Creates async SQLAlchemy sessions with proper configuration
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shared.database.base_model import Base
from shared.logging import get_logger

logger = get_logger(__name__)


class DatabaseSessionFactory:
    """
    Factory for creating async database sessions.

    Owns the async engine and session maker for the record store.
    Call timeouts are pushed down to the driver so a hung store surfaces
    as a failed call instead of a stalled request.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        timeout_seconds: float = 10.0,
        pool_size: int = 10,
        max_overflow: int = 10,
    ) -> None:
        """
        Initialize session factory with database connection.

        Args:
            database_url: Async SQLAlchemy URL (postgresql+asyncpg / sqlite+aiosqlite)
            echo: Whether to log SQL statements (debug mode)
            timeout_seconds: Connect/command timeout handed to the driver
            pool_size: Connection pool size (ignored for SQLite)
            max_overflow: Max overflow connections beyond pool_size (ignored for SQLite)
        """
        self.database_url = database_url

        engine_kwargs: dict[str, Any] = {"echo": echo}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"timeout": timeout_seconds}
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
            if database_url.startswith("postgresql+asyncpg"):
                engine_kwargs["connect_args"] = {
                    "timeout": timeout_seconds,
                    "command_timeout": timeout_seconds,
                }

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(
            "Database session factory initialized",
            dialect=self.engine.dialect.name,
        )

    def __call__(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        """Create all mapped tables (local development and tests only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def ping(self) -> None:
        """Round-trip a trivial statement; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all connections and dispose of the engine."""
        await self.engine.dispose()
        logger.info("Database engine disposed")
