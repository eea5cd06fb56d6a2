"""
Websites Unit of Work
Binds the website and owner-profile repositories to one transaction
"""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.unit_of_work import SQLAlchemyUnitOfWork
from websites.infrastructure.profile_repository import SQLAlchemyOwnerProfileRepository
from websites.infrastructure.website_repository import SQLAlchemyWebsiteRepository


class SQLAlchemyWebsitesUnitOfWork(SQLAlchemyUnitOfWork):
    """
    Usage:
        async with SQLAlchemyWebsitesUnitOfWork(session_factory) as uow:
            website = await uow.websites.get_by_id(website_id, owner_id)
            ...
            await uow.commit()
    """

    websites: SQLAlchemyWebsiteRepository
    profiles: SQLAlchemyOwnerProfileRepository

    def _bind_repositories(self, session: AsyncSession) -> None:
        self.websites = SQLAlchemyWebsiteRepository(session)
        self.profiles = SQLAlchemyOwnerProfileRepository(session)
