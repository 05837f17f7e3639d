# tests/conftest.py

import pytest
from httpx import AsyncClient, ASGITransport
from main import app
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from database import get_async_session, seed_first_run
from models import metadata

TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"
engine = create_async_engine(TEST_DATABASE_URL)
TestSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def override_get_async_session():
    async with TestSessionLocal() as session:
        yield session


app.dependency_overrides[get_async_session] = override_get_async_session


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def setup_database():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    async with TestSessionLocal() as session:
        await seed_first_run(session)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(setup_database):
    async with TestSessionLocal() as s:
        yield s


@pytest.fixture
async def client(setup_database):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
async def admin_client(client: AsyncClient):
    response = await client.post(
        "/api/admin/login", json={"username": "admin", "password": "changeme"}
    )
    assert response.status_code == 200
    return client
