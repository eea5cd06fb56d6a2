"""
Website Aggregate - one nonprofit site and its draft/publish lifecycle
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from shared.domain.base_aggregate_root import BaseAggregateRoot
from websites.domain.content import SiteContent
from websites.domain.errors import InvalidSlugError, NotPublishableError, WebsiteDeletedError
from websites.domain.events import (
    WebsiteCreated,
    WebsiteDeleted,
    WebsitePublished,
    WebsiteSaved,
    WebsiteUnpublished,
)
from websites.domain.slug import Invalid, validate_slug


class WebsiteState(str, Enum):
    """Lifecycle states of a website record."""
    UNSAVED = "unsaved"
    DRAFT = "draft"
    PUBLISHED = "published"
    DELETED = "deleted"


class Website(BaseAggregateRoot):
    """
    Website aggregate root.

    A record starts UNSAVED (exists only in the editing session), becomes a
    DRAFT on its first successful save, may toggle between DRAFT and
    PUBLISHED any number of times, and ends DELETED.

    Attributes:
        owner_id: Owning account; immutable
        slug: Public path segment; mutable while editing
        content: Fixed-shape site content
        is_published: Visibility flag
    """

    def __init__(
        self,
        owner_id: UUID,
        slug: str,
        content: SiteContent,
        is_published: bool = False,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(id, created_at=created_at, updated_at=updated_at)
        self._owner_id = owner_id
        self._slug = slug
        self._content = content
        self._is_published = is_published
        self._deleted = False

    @staticmethod
    def start(owner_id: UUID, slug: str, content: SiteContent) -> Website:
        """Begin an editing session for a brand-new (unsaved) website."""
        return Website(owner_id=owner_id, slug=slug, content=content)

    # State -----------------------------------------------------------------
    @property
    def state(self) -> WebsiteState:
        if self._deleted:
            return WebsiteState.DELETED
        if self.id is None:
            return WebsiteState.UNSAVED
        return WebsiteState.PUBLISHED if self._is_published else WebsiteState.DRAFT

    def _require_live(self) -> None:
        if self._deleted:
            raise WebsiteDeletedError()

    # Editing ---------------------------------------------------------------
    def edit(self, *, slug: Optional[str] = None, content: Optional[SiteContent] = None) -> None:
        """Apply edits from the builder form. Nothing is validated until save."""
        self._require_live()
        if slug is not None:
            self._slug = slug
        if content is not None:
            self._content = content

    def check_slug(self) -> None:
        """
        Run syntactic validation on the current slug.

        Raises:
            InvalidSlugError: first failing rule
        """
        result = validate_slug(self._slug)
        if isinstance(result, Invalid):
            raise InvalidSlugError(result.slug, result.reason)

    def check_publishable(self) -> None:
        """
        Organization name and slug must be filled in before going public.

        Raises:
            NotPublishableError: listing the missing fields
        """
        missing = []
        if not self._content.has_org_name:
            missing.append("org_name")
        if not self._slug or not self._slug.strip():
            missing.append("slug")
        if missing:
            raise NotPublishableError(missing)

    # Transitions -----------------------------------------------------------
    def record_saved(self) -> None:
        """Note a successful save (first save creates the draft)."""
        self._require_live()
        event_cls = WebsiteCreated if self.state is WebsiteState.UNSAVED else WebsiteSaved
        self.raise_event(event_cls(owner_id=self._owner_id, slug=self._slug))

    def publish(self) -> None:
        """Flip visibility on. Publishing a published site is a no-op."""
        self._require_live()
        self.check_publishable()
        self.check_slug()
        if self._is_published:
            return
        self._is_published = True
        self.raise_event(WebsitePublished(owner_id=self._owner_id, slug=self._slug))

    def unpublish(self) -> None:
        """Flip visibility off. No validation needed to leave public view."""
        self._require_live()
        if not self._is_published:
            return
        self._is_published = False
        self.raise_event(WebsiteUnpublished(owner_id=self._owner_id, slug=self._slug))

    def mark_deleted(self) -> None:
        """Terminal transition."""
        self._require_live()
        self._deleted = True
        self._is_published = False
        self.raise_event(WebsiteDeleted(owner_id=self._owner_id, slug=self._slug))

    # Properties --------------------------------------------------------------
    @property
    def owner_id(self) -> UUID:
        return self._owner_id

    @property
    def slug(self) -> str:
        return self._slug

    @property
    def content(self) -> SiteContent:
        return self._content

    @property
    def org_name(self) -> str:
        return self._content.org_name

    @property
    def is_published(self) -> bool:
        return self._is_published
