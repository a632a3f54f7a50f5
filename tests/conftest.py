import os

# Configure before app.config is imported anywhere
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.api.deps import get_photo_store
from app.models import Equipment, Job, ServiceRecord
from app.services.photo_store import MockPhotoStore

from tests.factories import (
    EquipmentFactory,
    AssignedJobFactory,
    CheckedInRecordFactory,
    CompletedRecordFactory,
)

# Test database URL (in-memory SQLite shared through a single connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_db():
    """Create test database and tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def photo_store():
    return MockPhotoStore()


@pytest_asyncio.fixture
async def client(test_db: AsyncSession, photo_store: MockPhotoStore):
    """Create test client with overridden database and photo store."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photo_store] = lambda: photo_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _persist(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


@pytest_asyncio.fixture
async def equipment(test_db: AsyncSession) -> Equipment:
    return await _persist(test_db, Equipment(**EquipmentFactory(engine_hours=1100)))


@pytest_asyncio.fixture
async def assigned_job(test_db: AsyncSession, equipment: Equipment) -> Job:
    return await _persist(test_db, Job(**AssignedJobFactory(equipment_id=equipment.id)))


@pytest_asyncio.fixture
async def checked_in_job(test_db: AsyncSession, equipment: Equipment) -> tuple[Job, ServiceRecord]:
    """IN_PROGRESS job with its checked-in service record."""
    job = await _persist(
        test_db, Job(**AssignedJobFactory(equipment_id=equipment.id, status="IN_PROGRESS"))
    )
    record = await _persist(test_db, ServiceRecord(**CheckedInRecordFactory(job_id=job.id)))
    return job, record


@pytest_asyncio.fixture
async def completed_job(test_db: AsyncSession, equipment: Equipment) -> tuple[Job, ServiceRecord]:
    """COMPLETED job with its completed service record."""
    job = await _persist(
        test_db, Job(**AssignedJobFactory(equipment_id=equipment.id, status="COMPLETED"))
    )
    record = await _persist(test_db, ServiceRecord(**CompletedRecordFactory(job_id=job.id)))
    return job, record
