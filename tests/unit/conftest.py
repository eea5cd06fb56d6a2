"""
In-memory stand-ins for the record store, unit of work and uniqueness check.

The store keeps plain rows and snapshots them when a unit of work opens, so
an uncommitted or failed unit of work leaves it untouched, like a real
transaction.
"""
import copy
import uuid
from datetime import datetime, timezone

import pytest

from shared.exceptions import TransportError
from websites.application import OwnerProfileService, WebsiteService
from websites.domain import SlugTakenError, Website, WebsiteNotFoundError


class InMemoryStore:
    def __init__(self):
        self.rows = {}
        self.profiles = {}
        self.fail_writes = False
        self.commits = 0

    def seed(self, owner_id, slug, content, *, is_published=False):
        website_id = uuid.uuid4()
        now = datetime.now(timezone.utc)
        self.rows[website_id] = dict(
            id=website_id, owner_id=owner_id, slug=slug, content=content,
            is_published=is_published, created_at=now, updated_at=now,
        )
        return website_id


def _entity(row):
    return Website(
        id=row["id"],
        owner_id=row["owner_id"],
        slug=row["slug"],
        content=row["content"],
        is_published=row["is_published"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class InMemoryWebsiteRepository:
    def __init__(self, store):
        self.store = store

    def _check_unique(self, slug, website_id):
        for row in self.store.rows.values():
            if row["slug"] == slug and row["id"] != website_id:
                raise SlugTakenError(slug)

    def _check_writable(self):
        if self.store.fail_writes:
            raise TransportError()

    async def create(self, owner_id, website):
        self._check_writable()
        self._check_unique(website.slug, None)
        website_id = uuid.uuid4()
        now = datetime.now(timezone.utc)
        self.store.rows[website_id] = dict(
            id=website_id, owner_id=owner_id, slug=website.slug, content=website.content,
            is_published=website.is_published, created_at=now, updated_at=now,
        )
        website.id, website.created_at, website.updated_at = website_id, now, now
        return website

    async def update(self, website_id, owner_id, patch):
        self._check_writable()
        row = self.store.rows.get(website_id)
        if row is None or row["owner_id"] != owner_id:
            raise WebsiteNotFoundError()
        if "slug" in patch:
            self._check_unique(patch["slug"], website_id)
        row.update(patch)
        row["updated_at"] = datetime.now(timezone.utc)
        return _entity(row)

    async def get_by_id(self, website_id, owner_id):
        row = self.store.rows.get(website_id)
        if row is None or row["owner_id"] != owner_id:
            return None
        return _entity(row)

    async def get_by_slug(self, slug, published_only=True):
        for row in self.store.rows.values():
            if row["slug"] == slug and (row["is_published"] or not published_only):
                return _entity(row)
        return None

    async def delete(self, website_id, owner_id):
        row = self.store.rows.get(website_id)
        if row is None or row["owner_id"] != owner_id:
            return False
        del self.store.rows[website_id]
        return True

    async def list_by_owner(self, owner_id):
        rows = [r for r in self.store.rows.values() if r["owner_id"] == owner_id]
        return [_entity(r) for r in sorted(rows, key=lambda r: r["updated_at"], reverse=True)]

    async def slug_taken(self, slug, exclude_id=None):
        return any(r["slug"] == slug and r["id"] != exclude_id for r in self.store.rows.values())


class InMemoryProfileRepository:
    def __init__(self, store):
        self.store = store

    async def touch(self, owner_id, email):
        if self.store.fail_writes:
            raise TransportError()
        self.store.profiles[owner_id] = email


class InMemoryUnitOfWork:
    def __init__(self, store):
        self.store = store
        self.websites = InMemoryWebsiteRepository(store)
        self.profiles = InMemoryProfileRepository(store)
        self.events = []
        self._tracked = []

    async def __aenter__(self):
        self._snapshot = copy.deepcopy((self.store.rows, self.store.profiles))
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None or not self._committed:
            self.store.rows, self.store.profiles = self._snapshot

    def track_aggregate(self, aggregate):
        if aggregate not in self._tracked:
            self._tracked.append(aggregate)

    async def commit(self):
        self._committed = True
        self.store.commits += 1
        for aggregate in self._tracked:
            self.events.extend(aggregate.collect_domain_events())


class StoreBackedOracle:
    """Answers from the store unless ``answer`` is forced."""

    def __init__(self, store):
        self.store = store
        self.answer = None
        self.calls = []

    async def is_unique(self, slug, exclude_id=None):
        self.calls.append((slug, exclude_id))
        if self.answer is not None:
            return self.answer
        return not any(r["slug"] == slug and r["id"] != exclude_id for r in self.store.rows.values())


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def uows(store):
    created = []

    def factory():
        uow = InMemoryUnitOfWork(store)
        created.append(uow)
        return uow

    factory.created = created
    return factory


@pytest.fixture
def oracle(store):
    return StoreBackedOracle(store)


@pytest.fixture
def service(uows, oracle):
    return WebsiteService(uow_factory=uows, oracle=oracle)


@pytest.fixture
def profile_service(uows):
    return OwnerProfileService(uow_factory=uows)


@pytest.fixture
def owner_id():
    return uuid.uuid4()
