import uuid

import pytest
from sqlalchemy import select

from websites.domain import SiteContent, SlugTakenError, Website, WebsiteNotFoundError
from websites.infrastructure.models import OwnerProfileModel

HOPE = SiteContent(org_name="Hope Foundation")


async def _create(uow_factory, owner_id, slug, content=HOPE):
    async with uow_factory() as uow:
        site = await uow.websites.create(owner_id, Website.start(owner_id=owner_id, slug=slug, content=content))
        await uow.commit()
    return site


@pytest.mark.asyncio
async def test_create_assigns_id_and_roundtrips_content(uow_factory):
    owner_id = uuid.uuid4()
    content = SiteContent.from_dict(
        {"org_name": "Hope Foundation", "accent_color": "green", "programs": [{"title": "Meals"}]}
    )
    site = await _create(uow_factory, owner_id, "hope-foundation", content)
    assert site.id is not None
    assert site.created_at is not None

    async with uow_factory() as uow:
        loaded = await uow.websites.get_by_id(site.id, owner_id)
    assert loaded.slug == "hope-foundation"
    assert loaded.content == content
    assert loaded.is_published is False


@pytest.mark.asyncio
async def test_unique_slug_enforced_by_store(uow_factory):
    await _create(uow_factory, uuid.uuid4(), "hope-foundation")
    with pytest.raises(SlugTakenError) as exc:
        await _create(uow_factory, uuid.uuid4(), "hope-foundation")
    assert exc.value.details == {"slug": "hope-foundation"}

    async with uow_factory() as uow:
        assert await uow.websites.slug_taken("hope-foundation") is True


@pytest.mark.asyncio
async def test_update_to_taken_slug_conflicts(uow_factory):
    owner_id = uuid.uuid4()
    await _create(uow_factory, uuid.uuid4(), "taken-name")
    site = await _create(uow_factory, owner_id, "my-site")

    with pytest.raises(SlugTakenError):
        async with uow_factory() as uow:
            await uow.websites.update(site.id, owner_id, {"slug": "taken-name"})
            await uow.commit()

    async with uow_factory() as uow:
        assert (await uow.websites.get_by_id(site.id, owner_id)).slug == "my-site"


@pytest.mark.asyncio
async def test_writes_are_owner_scoped(uow_factory):
    owner_id = uuid.uuid4()
    stranger = uuid.uuid4()
    site = await _create(uow_factory, owner_id, "hope-foundation")

    async with uow_factory() as uow:
        assert await uow.websites.get_by_id(site.id, stranger) is None
        assert await uow.websites.delete(site.id, stranger) is False
        with pytest.raises(WebsiteNotFoundError):
            await uow.websites.update(site.id, stranger, {"is_published": True})


@pytest.mark.asyncio
async def test_slug_taken_excludes_own_record(uow_factory):
    site = await _create(uow_factory, uuid.uuid4(), "hope-foundation")
    async with uow_factory() as uow:
        assert await uow.websites.slug_taken("hope-foundation", site.id) is False
        assert await uow.websites.slug_taken("other-slug") is False


@pytest.mark.asyncio
async def test_get_by_slug_hides_drafts_by_default(uow_factory):
    owner_id = uuid.uuid4()
    site = await _create(uow_factory, owner_id, "hope-foundation")
    async with uow_factory() as uow:
        assert await uow.websites.get_by_slug("hope-foundation") is None
        assert (await uow.websites.get_by_slug("hope-foundation", published_only=False)).id == site.id
        await uow.websites.update(site.id, owner_id, {"is_published": True})
        await uow.commit()
    async with uow_factory() as uow:
        assert (await uow.websites.get_by_slug("hope-foundation")).id == site.id


@pytest.mark.asyncio
async def test_store_maintains_timestamps(uow_factory):
    owner_id = uuid.uuid4()
    site = await _create(uow_factory, owner_id, "hope-foundation")
    async with uow_factory() as uow:
        before = await uow.websites.get_by_id(site.id, owner_id)
    async with uow_factory() as uow:
        await uow.websites.update(site.id, owner_id, {"content": SiteContent(org_name="Edited")})
        await uow.commit()
    async with uow_factory() as uow:
        after = await uow.websites.get_by_id(site.id, owner_id)

    assert after.created_at == before.created_at
    assert after.updated_at > before.updated_at
    # entities never touch their own audit fields
    assert not hasattr(after, "mark_updated")


@pytest.mark.asyncio
async def test_list_by_owner_newest_first(uow_factory):
    owner_id = uuid.uuid4()
    first = await _create(uow_factory, owner_id, "first-site")
    await _create(uow_factory, owner_id, "second-site")
    await _create(uow_factory, uuid.uuid4(), "not-mine")

    async with uow_factory() as uow:
        await uow.websites.update(first.id, owner_id, {"content": SiteContent(org_name="Edited")})
        await uow.commit()

    async with uow_factory() as uow:
        slugs = [w.slug for w in await uow.websites.list_by_owner(owner_id)]
    assert slugs == ["first-site", "second-site"]


@pytest.mark.asyncio
async def test_uncommitted_work_is_rolled_back(uow_factory):
    owner_id = uuid.uuid4()
    async with uow_factory() as uow:
        await uow.websites.create(owner_id, Website.start(owner_id=owner_id, slug="never-saved", content=HOPE))
    async with uow_factory() as uow:
        assert await uow.websites.slug_taken("never-saved") is False


@pytest.mark.asyncio
async def test_profile_touch_creates_then_refreshes(uow_factory):
    owner_id = uuid.uuid4()
    for email in ("old@example.org", "new@example.org"):
        async with uow_factory() as uow:
            await uow.profiles.touch(owner_id, email)
            await uow.commit()

    async with uow_factory() as uow:
        result = await uow.require_session().execute(
            select(OwnerProfileModel).where(OwnerProfileModel.owner_id == owner_id)
        )
        emails = [p.email for p in result.scalars().all()]
    assert emails == ["new@example.org"]
