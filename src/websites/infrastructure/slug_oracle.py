"""
Uniqueness oracle backed by the record store.
"""
from __future__ import annotations

from typing import Callable, Optional
from uuid import UUID

from shared.logging import get_logger
from websites.application.website_service import WebsitesUnitOfWork

logger = get_logger(__name__)


class RecordStoreSlugOracle:
    """
    Answers "is this slug free?" by querying all records, draft or published.

    Fails closed: if the store cannot be queried the slug is reported as
    taken, so an outage never grants a name. This is only an early check;
    the store's unique constraint stays authoritative.
    """

    def __init__(self, uow_factory: Callable[[], WebsitesUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def is_unique(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        try:
            async with self._uow_factory() as uow:
                taken = await uow.websites.slug_taken(slug, exclude_id)
        except Exception as e:
            logger.warning(
                "Slug uniqueness check failed; treating slug as taken",
                error_type=e.__class__.__name__,
                slug=slug,
                exclude_id=str(exclude_id) if exclude_id else None,
            )
            return False
        return not taken
