"""
Shared fixtures: in-memory SQLite (aiosqlite) per test with foreign keys on,
plus an httpx client over the ASGI app with get_db pointed at that database.
"""
import os
import uuid

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["APP_ENV"] = "test"
os.environ["REDIS_URL"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from garden_planner.db import Base, get_db
from garden_planner.main import app
import garden_planner.models  # noqa: F401
from garden_planner.schemas.plans import PlanCreate
from garden_planner.services import plans_service


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def auth_headers(owner_id: uuid.UUID) -> dict[str, str]:
    return {"X-User-ID": str(owner_id)}


@pytest_asyncio.fixture
async def small_plan(db, owner_id):
    """4x3 grid (cell 25 cm), all soil."""
    plan = await plans_service.create_plan(
        db,
        owner_id,
        PlanCreate(name="Backyard", width_cm=100, height_cm=75, cell_size_cm=25),
    )
    await db.commit()
    return plan
