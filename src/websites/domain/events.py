"""
Website lifecycle events.
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.domain.domain_event import DomainEvent


@dataclass(frozen=True)
class WebsiteEvent(DomainEvent):
    owner_id: UUID | None = None
    slug: str = ""

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(owner_id=str(self.owner_id) if self.owner_id else None, slug=self.slug)
        return data


@dataclass(frozen=True)
class WebsiteCreated(WebsiteEvent):
    """Unsaved -> Draft."""


@dataclass(frozen=True)
class WebsiteSaved(WebsiteEvent):
    """Persisted record re-validated and saved."""


@dataclass(frozen=True)
class WebsitePublished(WebsiteEvent):
    """Draft -> Published."""


@dataclass(frozen=True)
class WebsiteUnpublished(WebsiteEvent):
    """Published -> Draft."""


@dataclass(frozen=True)
class WebsiteDeleted(WebsiteEvent):
    """Draft | Published -> Deleted."""
