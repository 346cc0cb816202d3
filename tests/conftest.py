"""Pytest configuration and fixtures for EarProbe.

Environment is set before app.main is imported so that create_app() sees a
SQLite database, a test secret and a temporary local media root. Each test
gets its own file-backed SQLite database under tmp_path; the API client
overrides both session dependencies and the upload coordinator.
"""

import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="earprobe-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/bootstrap.db"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["STORAGE_ROOT"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["S3_BUCKET"] = ""

from collections.abc import Callable
from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.v1.dependencies import get_upload_coordinator
from app.application.services.upload_coordinator import UploadCoordinator
from app.core.config import get_settings
from app.core.limiter import limiter
from app.infrastructure.external.storage.local_media_store import LocalMediaStore
from app.infrastructure.persistence import models  # noqa: F401
from app.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
    transactional_session,
)
from app.infrastructure.persistence.models import Patient, User
from app.infrastructure.security.jwt import create_access_token
from app.main import app

get_settings.cache_clear()


@dataclass(frozen=True)
class SeedData:
    """Ids of the identities and patients every database test starts with."""

    alice: str = "doc-alice"
    bob: str = "doc-bob"
    carol: str = "doc-carol"
    alice_patient: str = "pat-alice-1"
    bob_patient: str = "pat-bob-1"


@pytest.fixture
async def engine(tmp_path):
    """Async engine on a fresh SQLite file with every table created."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'earprobe.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def seed(session_factory) -> SeedData:
    """Three doctors; Alice and Bob own one patient each."""
    data = SeedData()
    async with session_factory() as session:
        session.add_all([
            User(id=data.alice, name="Alice Achieng", email="alice@example.org",
                 specialty="ENT", hospital="Mulago"),
            User(id=data.bob, name="Bob Byaruhanga", email="bob@example.org",
                 specialty="Audiology", hospital="Nsambya"),
            User(id=data.carol, name="Carol Chebet", email="carol@example.org",
                 specialty="Paediatrics", hospital="Mengo"),
        ])
        await session.flush()
        session.add_all([
            Patient(id=data.alice_patient, name="Patient A", age=34, doctor_id=data.alice),
            Patient(id=data.bob_patient, name="Patient B", age=8, doctor_id=data.bob),
        ])
        await session.commit()
    return data


@pytest.fixture
async def db_session(session_factory, seed) -> AsyncSession:
    """Session over the seeded database for repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def local_store(tmp_path) -> LocalMediaStore:
    return LocalMediaStore(str(tmp_path / "uploads"), url_prefix="/uploads")


@pytest.fixture
def coordinator(local_store) -> UploadCoordinator:
    """Coordinator without a primary store: every image goes to the local tier."""
    return UploadCoordinator(primary=None, local=local_store)


@pytest.fixture
async def client(session_factory, seed, coordinator) -> AsyncClient:
    """Async HTTP client against the FastAPI app, bound to the per-test database."""

    async def _read_session():
        async with session_factory() as session:
            yield session

    async def _write_session():
        async with transactional_session(session_factory) as session:
            yield session

    app.dependency_overrides[get_db] = _read_session
    app.dependency_overrides[get_db_transactional] = _write_session
    app.dependency_overrides[get_upload_coordinator] = lambda: coordinator
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a function building Authorization headers for an identity id."""

    def _headers(identity_id: str) -> dict[str, str]:
        token = create_access_token({"sub": identity_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers
