"""
Owner profile bookkeeping.

Refreshing the profile is a side effect of being signed in; it must never
fail the request that triggered it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from shared.exceptions import ConflictError, TransportError
from shared.logging import get_logger
from websites.application.website_service import WebsitesUnitOfWork
from websites.domain.identity import UserIdentity

logger = get_logger(__name__)


@dataclass
class OwnerProfileService:
    uow_factory: Callable[[], WebsitesUnitOfWork]

    async def record_activity(self, user: UserIdentity) -> bool:
        """Best-effort upsert of the owner's profile. Returns False if it was skipped."""
        try:
            async with self.uow_factory() as uow:
                await uow.profiles.touch(user.user_id, user.email)
                await uow.commit()
            return True
        except (TransportError, ConflictError) as e:
            logger.warning(
                "Owner profile update skipped",
                user_id=str(user.user_id),
                error_code=e.code,
            )
            return False
