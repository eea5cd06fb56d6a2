import uuid

import pytest

from shared.database import DatabaseSessionFactory
from websites.application import WebsiteService
from websites.domain import SiteContent, SlugTakenError, WebsiteNotFoundError, WebsiteState
from websites.infrastructure.slug_oracle import RecordStoreSlugOracle
from websites.infrastructure.unit_of_work import SQLAlchemyWebsitesUnitOfWork

HOPE = SiteContent(org_name="Hope Foundation")


@pytest.fixture
def service(uow_factory):
    return WebsiteService(uow_factory=uow_factory, oracle=RecordStoreSlugOracle(uow_factory))


class _AlwaysFree:
    async def is_unique(self, slug, exclude_id=None):
        return True


@pytest.mark.asyncio
async def test_save_publish_resolve(service):
    owner_id = uuid.uuid4()
    draft = await service.save(owner_id, content=HOPE)
    assert draft.state is WebsiteState.DRAFT

    with pytest.raises(WebsiteNotFoundError):
        await service.resolve_public("hope-foundation")

    published = await service.publish(owner_id, draft.id)
    assert published.state is WebsiteState.PUBLISHED
    assert (await service.resolve_public("hope-foundation")).id == draft.id


@pytest.mark.asyncio
async def test_constraint_decides_when_check_is_stale(uow_factory):
    # the check answers "free" for both sessions; only one insert wins
    service = WebsiteService(uow_factory=uow_factory, oracle=_AlwaysFree())
    await service.save(uuid.uuid4(), content=HOPE)
    with pytest.raises(SlugTakenError):
        await service.save(uuid.uuid4(), content=HOPE)

    async with uow_factory() as uow:
        assert await uow.websites.slug_taken("hope-foundation") is True


@pytest.mark.asyncio
async def test_publish_with_taken_slug_keeps_draft(service, uow_factory):
    owner_id = uuid.uuid4()
    await service.save(uuid.uuid4(), content=SiteContent(org_name="Taken Name"))
    draft = await service.save(owner_id, content=HOPE)

    with pytest.raises(SlugTakenError):
        await service.publish(owner_id, draft.id, slug="taken-name")

    stored = await service.get(owner_id, draft.id)
    assert stored.slug == "hope-foundation"
    assert stored.state is WebsiteState.DRAFT


@pytest.mark.asyncio
async def test_unreachable_store_fails_closed(tmp_path):
    # a directory path cannot be opened as a database file
    broken = DatabaseSessionFactory(f"sqlite+aiosqlite:///{tmp_path}", timeout_seconds=1.0)
    oracle = RecordStoreSlugOracle(lambda: SQLAlchemyWebsitesUnitOfWork(broken))
    try:
        assert await oracle.is_unique("hope-foundation") is False
    finally:
        await broken.dispose()
