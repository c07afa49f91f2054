from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.matching_engine.types import CanonicalEntity
from app.models.base import Base
# Import all models so they register with Base.metadata for create_all
import app.models  # noqa: F401
from app.models.catalog import Company, Product, Project, TimeLog
from app.project_linker.store import InMemoryProjectLinkStore


@pytest.fixture
async def test_engine(tmp_path):
    # SQLite per test (no Postgres dependency needed)
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def link_store() -> InMemoryProjectLinkStore:
    return InMemoryProjectLinkStore()


@pytest.fixture
async def client(db_session, link_store):
    from app.database import get_db
    from app.dependencies import get_project_link_store
    from app.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_project_link_store] = lambda: link_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_db(db_session) -> AsyncSession:
    """Companies, products, projects and time logs resembling production data."""
    db_session.add_all([
        Company(id=1, name="JKS Technology", email="ops@jks.example"),
        Company(id=2, name="Makati Medical Center (MMC)"),
        Company(id=3, name="Cyber Battalion"),
        Company(id=4, name="Northwind Traders"),
        Product(id=10, name="Trellix Email Security"),
        Product(id=11, name="Trellix Endpoint Security"),
        Product(id=12, name="Proofpoint Email Protection"),
        Project(id=100, external_id="1201", name="2026 - JKS Technology - Trellix Email Security"),
        Project(id=101, external_id="1202", name="2026 - Northwind Traders - Firewall Upgrade"),
        Project(id=102, external_id=None, name="Internal Tooling"),
    ])
    await db_session.flush()
    db_session.add_all([
        TimeLog(user_id=7, project_id=100, reference_number="1201", log_date=date(2026, 1, 5), duration=3.0),
        TimeLog(user_id=8, project_id=100, reference_number="1201", log_date=date(2026, 1, 6), duration=4.5),
        TimeLog(user_id=7, project_id=100, reference_number="1201", log_date=date(2025, 12, 30), duration=2.0),
        TimeLog(user_id=9, project_id=101, reference_number="1202", log_date=date(2026, 2, 1), duration=6.0),
        TimeLog(user_id=9, project_id=102, reference_number=None, log_date=date(2026, 2, 2), duration=1.0),
    ])
    await db_session.flush()
    return db_session


@pytest.fixture
def companies() -> list[CanonicalEntity]:
    return [
        CanonicalEntity(id=1, name="JKS Technology"),
        CanonicalEntity(id=2, name="Makati Medical Center (MMC)"),
        CanonicalEntity(id=3, name="CyberBattalion"),
        CanonicalEntity(id=4, name="Northwind Traders"),
    ]
