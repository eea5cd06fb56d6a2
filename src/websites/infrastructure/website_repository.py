"""
Website Repository Implementation (SQLAlchemy, async)
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.unit_of_work import store_errors
from shared.logging import get_logger, time_block
from websites.domain.content import SiteContent
from websites.domain.errors import SlugTakenError, WebsiteNotFoundError
from websites.domain.website import Website
from websites.infrastructure.models import WebsiteModel

logger = get_logger(__name__)

_PATCHABLE = frozenset({"slug", "content", "is_published"})


class SQLAlchemyWebsiteRepository:
    """
    Website repository implementation.

    Owner scoping is applied in every query, so another owner's record is
    indistinguishable from a missing one. Unique violations on ``slug``
    surface as ``SlugTakenError``; connection failures and timeouts as
    ``TransportError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(model: WebsiteModel) -> Website:
        """Convert ORM model to domain entity"""
        return Website(
            id=model.id,
            owner_id=model.owner_id,
            slug=model.slug,
            content=SiteContent.from_dict(model.site_data),
            is_published=model.is_published,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _get_model(self, website_id: UUID, owner_id: UUID) -> Optional[WebsiteModel]:
        stmt = select(WebsiteModel).where(
            WebsiteModel.id == website_id,
            WebsiteModel.owner_id == owner_id,
        )
        async with store_errors():
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, owner_id: UUID, website: Website) -> Website:
        """
        Insert a new record and stamp the store-assigned id and timestamps
        onto ``website``.

        Raises:
            SlugTakenError: another record already holds the slug
        """
        model = WebsiteModel(
            owner_id=owner_id,
            slug=website.slug,
            org_name=website.content.org_name,
            site_data=website.content.to_dict(),
            is_published=website.is_published,
        )
        self.session.add(model)
        with time_block("websites.create", logger=logger):
            await self._flush(website.slug)

        website.id = model.id
        website.created_at = model.created_at
        website.updated_at = model.updated_at
        logger.debug("Website created", website_id=str(model.id), slug=model.slug)
        return website

    async def update(self, website_id: UUID, owner_id: UUID, patch: Mapping[str, Any]) -> Website:
        """
        Apply a partial update to an owned record.

        Raises:
            WebsiteNotFoundError: missing or not owned by ``owner_id``
            SlugTakenError: the new slug is held by another record
        """
        unknown = set(patch) - _PATCHABLE
        if unknown:
            raise ValueError(f"Unsupported website fields: {sorted(unknown)}")

        model = await self._get_model(website_id, owner_id)
        if model is None:
            raise WebsiteNotFoundError()

        if "slug" in patch:
            model.slug = patch["slug"]
        if "content" in patch:
            content: SiteContent = patch["content"]
            model.site_data = content.to_dict()
            model.org_name = content.org_name
        if "is_published" in patch:
            model.is_published = bool(patch["is_published"])

        with time_block("websites.update", logger=logger):
            await self._flush(model.slug)
        return self._to_entity(model)

    async def get_by_id(self, website_id: UUID, owner_id: UUID) -> Optional[Website]:
        model = await self._get_model(website_id, owner_id)
        return self._to_entity(model) if model else None

    async def get_by_slug(self, slug: str, published_only: bool = True) -> Optional[Website]:
        stmt = select(WebsiteModel).where(WebsiteModel.slug == slug)
        if published_only:
            stmt = stmt.where(WebsiteModel.is_published.is_(True))
        async with store_errors():
            result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def delete(self, website_id: UUID, owner_id: UUID) -> bool:
        model = await self._get_model(website_id, owner_id)
        if model is None:
            return False
        async with store_errors():
            await self.session.delete(model)
            await self.session.flush()
        logger.debug("Website deleted", website_id=str(website_id))
        return True

    async def list_by_owner(self, owner_id: UUID) -> Sequence[Website]:
        stmt = (
            select(WebsiteModel)
            .where(WebsiteModel.owner_id == owner_id)
            .order_by(WebsiteModel.updated_at.desc(), WebsiteModel.created_at.desc())
        )
        async with store_errors():
            result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def slug_taken(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        stmt = select(func.count()).select_from(WebsiteModel).where(WebsiteModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(WebsiteModel.id != exclude_id)
        async with store_errors():
            result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def _flush(self, slug: str) -> None:
        async with store_errors(on_conflict=lambda: SlugTakenError(slug)):
            await self.session.flush()
