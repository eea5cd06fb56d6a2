# src/websites/application/website_service.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence
from uuid import UUID

from shared.database.unit_of_work import IUnitOfWork
from shared.logging import get_logger
from websites.domain.content import SiteContent
from websites.domain.errors import SlugTakenError, WebsiteNotFoundError
from websites.domain.repositories import IOwnerProfileRepository, ISlugUniquenessOracle, IWebsiteRepository
from websites.domain.slug import Invalid, derive_slug, validate_slug
from websites.domain.website import Website, WebsiteState

logger = get_logger(__name__)


class WebsitesUnitOfWork(IUnitOfWork, Protocol):
    """Unit of work exposing the website and owner-profile repositories."""
    websites: IWebsiteRepository
    profiles: IOwnerProfileRepository

    async def __aenter__(self) -> "WebsitesUnitOfWork": ...


@dataclass(frozen=True)
class SlugCheck:
    """Outcome of an availability check; ``available`` is None when the slug is invalid."""
    slug: str
    valid: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    available: Optional[bool] = None


@dataclass
class WebsiteService:
    """
    Draft/publish workflow for website records.

    Every operation takes ``owner_id`` explicitly and runs inside its own
    unit of work, so a failure at any step (validation, uniqueness, store
    constraint, transport) leaves the persisted record untouched.

    Transitions:
      save     UNSAVED -> DRAFT, DRAFT -> DRAFT, PUBLISHED -> PUBLISHED
      publish  save first, then DRAFT -> PUBLISHED (idempotent)
      unpublish PUBLISHED -> DRAFT
      delete   DRAFT | PUBLISHED -> DELETED
    """
    uow_factory: Callable[[], WebsitesUnitOfWork]
    oracle: ISlugUniquenessOracle

    # ------------ Queries -----------------------------------------------------
    async def check_slug(
        self,
        owner_id: UUID,
        candidate: str,
        *,
        derive: bool = False,
        exclude_id: Optional[UUID] = None,
    ) -> SlugCheck:
        """
        Validate a slug (or a display name when ``derive``) and, when it is
        syntactically valid, ask the oracle whether it is free. Never persists.

        ``exclude_id`` must name one of the caller's own records; anything
        else is reported as not found.
        """
        if exclude_id is not None:
            async with self.uow_factory() as uow:
                await self._load(uow, owner_id, exclude_id)

        slug = derive_slug(candidate) if derive else candidate
        result = validate_slug(slug)
        if isinstance(result, Invalid):
            return SlugCheck(slug=slug, valid=False, reason=result.reason.value, message=result.message)

        available = await self.oracle.is_unique(slug, exclude_id)
        return SlugCheck(
            slug=slug,
            valid=True,
            message=None if available else SlugTakenError(slug).message,
            available=available,
        )

    async def get(self, owner_id: UUID, website_id: UUID) -> Website:
        async with self.uow_factory() as uow:
            return await self._load(uow, owner_id, website_id)

    async def list_for_owner(self, owner_id: UUID) -> Sequence[Website]:
        async with self.uow_factory() as uow:
            return await uow.websites.list_by_owner(owner_id)

    async def resolve_public(self, slug: str) -> Website:
        """Published record for a public path segment, else not found."""
        if isinstance(validate_slug(slug), Invalid):
            raise WebsiteNotFoundError()
        async with self.uow_factory() as uow:
            website = await uow.websites.get_by_slug(slug, published_only=True)
        if website is None:
            raise WebsiteNotFoundError()
        return website

    # ------------ Commands ----------------------------------------------------
    async def save(
        self,
        owner_id: UUID,
        *,
        content: SiteContent,
        slug: Optional[str] = None,
        website_id: Optional[UUID] = None,
    ) -> Website:
        """
        Save the builder form.

        Without ``website_id`` this creates the draft; the slug defaults to
        one derived from the organization name. With ``website_id`` the owned
        record is re-validated and updated, even if the slug is unchanged.

        Raises:
            InvalidSlugError, SlugTakenError, WebsiteNotFoundError, TransportError
        """
        async with self.uow_factory() as uow:
            if website_id is None:
                website = Website.start(
                    owner_id=owner_id,
                    slug=slug if slug is not None else derive_slug(content.org_name),
                    content=content,
                )
            else:
                website = await self._load(uow, owner_id, website_id)
                website.edit(slug=slug, content=content)

            stored = await self._save(uow, website)
            await uow.commit()

        logger.info(
            "Website saved",
            website_id=str(stored.id),
            owner_id=str(owner_id),
            slug=stored.slug,
            state=stored.state.value,
        )
        return stored

    async def publish(
        self,
        owner_id: UUID,
        website_id: UUID,
        *,
        content: Optional[SiteContent] = None,
        slug: Optional[str] = None,
    ) -> Website:
        """
        Save, then make the site publicly visible.

        The save half re-runs slug validation and the uniqueness check; if it
        fails, visibility is not touched. Publishing a published site
        re-saves and leaves it published.
        """
        async with self.uow_factory() as uow:
            website = await self._load(uow, owner_id, website_id)
            website.edit(slug=slug, content=content)
            website.check_publishable()

            await self._save(uow, website)
            website.publish()
            stored = await uow.websites.update(website_id, owner_id, {"is_published": True})
            await uow.commit()

        logger.info("Website published", website_id=str(website_id), owner_id=str(owner_id), slug=stored.slug)
        return stored

    async def unpublish(self, owner_id: UUID, website_id: UUID) -> Website:
        async with self.uow_factory() as uow:
            website = await self._load(uow, owner_id, website_id)
            website.unpublish()
            stored = await uow.websites.update(website_id, owner_id, {"is_published": False})
            uow.track_aggregate(website)
            await uow.commit()

        logger.info("Website unpublished", website_id=str(website_id), owner_id=str(owner_id))
        return stored

    async def delete(self, owner_id: UUID, website_id: UUID) -> None:
        async with self.uow_factory() as uow:
            website = await self._load(uow, owner_id, website_id)
            website.mark_deleted()
            if not await uow.websites.delete(website_id, owner_id):
                raise WebsiteNotFoundError()
            uow.track_aggregate(website)
            await uow.commit()

        logger.info("Website deleted", website_id=str(website_id), owner_id=str(owner_id))

    # ------------ Helpers -----------------------------------------------------
    async def _load(self, uow: WebsitesUnitOfWork, owner_id: UUID, website_id: UUID) -> Website:
        website = await uow.websites.get_by_id(website_id, owner_id)
        if website is None:
            raise WebsiteNotFoundError()
        return website

    async def _save(self, uow: WebsitesUnitOfWork, website: Website) -> Website:
        website.check_slug()
        if not await self.oracle.is_unique(website.slug, website.id):
            logger.info("Slug unavailable", slug=website.slug, website_id=str(website.id) if website.id else None)
            raise SlugTakenError(website.slug)

        first_save = website.state is WebsiteState.UNSAVED
        website.record_saved()
        if first_save:
            stored = await uow.websites.create(website.owner_id, website)
        else:
            stored = await uow.websites.update(
                website.id,
                website.owner_id,
                {"slug": website.slug, "content": website.content},
            )
        uow.track_aggregate(website)
        return stored
