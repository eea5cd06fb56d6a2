"""
Collaborator interfaces (Protocols) consumed by the website workflow.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence
from uuid import UUID

from websites.domain.website import Website


class IWebsiteRepository(Protocol):
    """
    Website record store.

    Every write is scoped by owner: a record owned by someone else behaves
    exactly like a missing one. The store enforces UNIQUE(slug) across all
    records and reports violations as ``SlugTakenError``.
    """

    async def create(self, owner_id: UUID, website: Website) -> Website:
        """Persist a new record; assigns id and timestamps."""
        ...

    async def update(self, website_id: UUID, owner_id: UUID, patch: Mapping[str, Any]) -> Website:
        """Apply ``patch`` (slug / content / is_published) to an owned record."""
        ...

    async def get_by_id(self, website_id: UUID, owner_id: UUID) -> Optional[Website]:
        """Get an owned record by id"""
        ...

    async def get_by_slug(self, slug: str, published_only: bool = True) -> Optional[Website]:
        """Get a record by slug (published ones only for public lookups)"""
        ...

    async def delete(self, website_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned record; False when nothing matched"""
        ...

    async def list_by_owner(self, owner_id: UUID) -> Sequence[Website]:
        """All records of an owner, most recently updated first"""
        ...

    async def slug_taken(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        """True if any record other than ``exclude_id`` holds ``slug``"""
        ...


class IOwnerProfileRepository(Protocol):
    """Per-account profile kept alongside websites."""

    async def touch(self, owner_id: UUID, email: Optional[str]) -> None:
        """Create the profile on first sight, otherwise refresh last_seen_at"""
        ...


class ISlugUniquenessOracle(Protocol):
    """
    Early, non-authoritative uniqueness check.

    Must fail closed: when the underlying query errors, report ``False``.
    """

    async def is_unique(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        ...
