"""
SQLAlchemy Unit of Work
Manages one transaction per use case and maps store failures onto the
shared error contract.
"""
from __future__ import annotations

import asyncio
import contextlib
from typing import Any, AsyncIterator, Callable, Protocol, runtime_checkable

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.domain.base_aggregate_root import BaseAggregateRoot
from shared.exceptions import ConflictError, DomainError, TransportError
from shared.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class IUnitOfWork(Protocol):
    """
    Unit of Work interface for transaction management.

    Usage:
        async with uow:
            entity = await uow.websites.get_by_id(website_id, owner_id)
            ...
            await uow.commit()
    """

    async def __aenter__(self) -> "IUnitOfWork":
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...

    def track_aggregate(self, aggregate: BaseAggregateRoot) -> None:
        ...


@contextlib.asynccontextmanager
async def store_errors(
    on_conflict: Callable[[], DomainError] | None = None,
) -> AsyncIterator[None]:
    """
    Translate SQLAlchemy/driver failures into domain errors.

    - IntegrityError (unique constraint) -> ConflictError
    - any other driver/connection failure or timeout -> TransportError
    """
    try:
        yield
    except IntegrityError as e:
        logger.info("Store rejected write (integrity)", error=str(e.orig) if e.orig else str(e))
        raise (on_conflict() if on_conflict else ConflictError()) from e
    except (asyncio.TimeoutError, DBAPIError, SQLAlchemyError, OSError) as e:
        logger.warning("Record store call failed", error_type=e.__class__.__name__, error=str(e))
        raise TransportError() from e


class SQLAlchemyUnitOfWork:
    """
    SQLAlchemy-based Unit of Work implementation.

    Opens a session on enter, rolls back on error or if the caller never
    committed, and after a successful commit collects domain events from
    tracked aggregates and logs them.

    Subclasses bind repositories in ``_bind_repositories``.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._committed = False
        self._tracked: list[BaseAggregateRoot] = []

    def _bind_repositories(self, session: AsyncSession) -> None:
        """Attach repositories bound to ``session``; overridden by contexts."""

    def require_session(self) -> AsyncSession:
        if self.session is None:
            raise RuntimeError("UnitOfWork used outside of its context")
        return self.session

    async def __aenter__(self) -> Any:
        self.session = self._session_factory()
        self._committed = False
        self._tracked = []
        self._bind_repositories(self.session)
        logger.debug("UnitOfWork transaction started")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
                logger.debug("UnitOfWork rolled back due to exception", exception=exc_type.__name__)
            elif not self._committed:
                await self.rollback()
                logger.debug("UnitOfWork rolled back (not committed)")
        finally:
            if self.session is not None:
                await self.session.close()
            self.session = None

    def track_aggregate(self, aggregate: BaseAggregateRoot) -> None:
        """Remember an aggregate so its events are published after commit."""
        if aggregate not in self._tracked:
            self._tracked.append(aggregate)

    async def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            ConflictError: the store rejected the write on a unique constraint
            TransportError: the store could not be reached or timed out
        """
        session = self.require_session()
        async with store_errors():
            await session.commit()
        self._committed = True
        logger.debug("UnitOfWork transaction committed")
        self._publish_events()

    async def rollback(self) -> None:
        if self.session is None:
            return
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            # the connection is already gone; nothing left to undo
            logger.warning("UnitOfWork rollback failed", error=str(e))
        self._committed = False

    def _publish_events(self) -> None:
        for aggregate in self._tracked:
            for event in aggregate.collect_domain_events():
                logger.info("Domain event", **event.to_dict())
        self._tracked = []
