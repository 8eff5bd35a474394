import os

os.environ["TESTING"] = "1"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.api.dependencies import get_async_session, get_user
from app.api.main import app
from app.db.row_store import RowStore
from app.models.listing_model import Listing
from app.models.profile_model import Profile
from app.tests.factories import create_listing, create_profile

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        # ensure that we are connecting to the same
        # in memory database
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture()
async def session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def store(session) -> RowStore:
    return RowStore(session)


@pytest_asyncio.fixture()
async def seller(session) -> Profile:
    return await create_profile(
        session, display_name="Sarah Seller", phone="+27823334444", is_verified=True
    )


@pytest_asyncio.fixture()
async def buyer(session) -> Profile:
    return await create_profile(session, display_name="John Buyer")


@pytest_asyncio.fixture()
async def stranger(session) -> Profile:
    return await create_profile(session, display_name="Xavier Stranger")


@pytest_asyncio.fixture()
async def listing(session, seller) -> Listing:
    return await create_listing(session, seller, title="Trail Running Shoes", price=1200)


@pytest.fixture()
def login():
    """Make the API see requests as coming from the given profile."""

    def _login(profile: Profile) -> None:
        app.dependency_overrides[get_user] = lambda: {
            "uid": str(profile.id),
            "email": f"{profile.id}@example.com",
        }

    yield _login
    app.dependency_overrides.pop(get_user, None)


@pytest_asyncio.fixture()
async def async_client(session_factory) -> AsyncClient:
    async def override_get_async_session() -> AsyncSession:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    headers = {"Authorization": "Bearer fake"}

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", headers=headers
    ) as client:
        yield client

    app.dependency_overrides.pop(get_async_session, None)
