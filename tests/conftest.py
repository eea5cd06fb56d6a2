import time
import uuid

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shared.config import Settings
from shared.database import DatabaseSessionFactory
from websites.infrastructure.unit_of_work import SQLAlchemyWebsitesUnitOfWork

JWT_SECRET = "test-secret-test-secret-test-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    # file-backed SQLite: the uniqueness check opens its own connection
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'websites.db'}",
        JWT_SECRET=JWT_SECRET,
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
        AUTO_CREATE_SCHEMA=False,
    )


@pytest_asyncio.fixture
async def db(settings):
    factory = DatabaseSessionFactory(settings.DATABASE_URL, timeout_seconds=5.0)
    await factory.create_all()
    yield factory
    await factory.dispose()


@pytest.fixture
def uow_factory(db):
    return lambda: SQLAlchemyWebsitesUnitOfWork(db)


@pytest_asyncio.fixture
async def app_client(settings, db):
    from main import create_app

    app = create_app(settings=settings, db=db)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def _make_token(user_id=None, email="owner@example.org", *, secret=JWT_SECRET, expires_in=3600, aud="authenticated"):
    now = int(time.time())
    claims = {
        "sub": str(user_id or uuid.uuid4()),
        "email": email,
        "aud": aud,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def make_token():
    return _make_token


@pytest.fixture
def auth_headers():
    def _headers(user_id=None, email="owner@example.org"):
        return {"Authorization": f"Bearer {_make_token(user_id, email)}"}

    return _headers
