"""
Website ORM Models
Maps to the websites / owner_profiles tables
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Index, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.base_model import Base
from shared.domain.base_entity import utcnow


class WebsiteModel(Base):
    """
    SQLAlchemy model for the websites table.

    ``uq_websites_slug`` is the authoritative uniqueness guarantee for slugs
    across draft and published records; the application-level check only
    gives early feedback.
    """

    __tablename__ = "websites"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_websites_slug"),
        Index("ix_websites_owner_updated", "owner_id", "updated_at"),
    )

    owner_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(50), nullable=False)
    org_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    site_data: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict
    )
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<WebsiteModel(id={self.id}, slug={self.slug}, published={self.is_published})>"


class OwnerProfileModel(Base):
    """One row per account that has used the builder."""

    __tablename__ = "owner_profiles"
    __table_args__ = (UniqueConstraint("owner_id", name="uq_owner_profiles_owner"),)

    owner_id: Mapped[UUID] = mapped_column(nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    last_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
