"""
Base Entity Contract for Domain Layer
Identity, equality and audit fields
"""
from __future__ import annotations

from abc import ABC
from datetime import datetime, timezone
from uuid import UUID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseEntity(ABC):
    """
    Abstract base class for all domain entities.

    Entities are defined by their identity (id), not their attributes.
    The id is assigned by the record store when the entity is first
    persisted, so a transient entity carries ``id = None`` and is only
    equal to itself.

    Attributes:
        id: Unique identifier (UUID), None until persisted
        created_at: Timestamp of creation (set by the store)
        updated_at: Timestamp of last update (maintained by the store)
    """

    def __init__(
        self,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        self.id: UUID | None = id
        self.created_at: datetime | None = created_at
        self.updated_at: datetime | None = updated_at

    @property
    def is_transient(self) -> bool:
        """True while the entity has never been persisted."""
        return self.id is None

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same id and type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
