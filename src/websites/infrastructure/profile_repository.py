"""
Owner Profile Repository Implementation
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.unit_of_work import store_errors
from shared.domain.base_entity import utcnow
from websites.infrastructure.models import OwnerProfileModel


class SQLAlchemyOwnerProfileRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def touch(self, owner_id: UUID, email: Optional[str]) -> None:
        stmt = select(OwnerProfileModel).where(OwnerProfileModel.owner_id == owner_id)
        async with store_errors():
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()
            if model is None:
                self.session.add(OwnerProfileModel(owner_id=owner_id, email=email))
            else:
                model.last_seen_at = utcnow()
                if email:
                    model.email = email
            await self.session.flush()
