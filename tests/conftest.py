"""
Alumnos API: Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite database file (aiosqlite driver) with
       the DALUMN table created from the ORM metadata, so repository and
       route tests exercise real statements and real constraint errors.

Fixture Hierarchy:
    Function-scoped:
    ├── store_config: StoreConfig pointing at a temp SQLite file
    ├── repository: StudentRepository with the DALUMN table created
    ├── app_settings: Settings with a temp upload directory
    ├── test_client: HTTPX AsyncClient bound to a fresh app
    ├── unreachable_client: same app over a store that cannot be opened
    └── sample_student: the reference record (id A001)
"""

import os
import tempfile

# Override settings BEFORE any alumnos_api import: importing
# alumnos_api.main builds the module-level app from the environment.
_IMPORT_DIR = tempfile.mkdtemp(prefix="alumnos_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_IMPORT_DIR}/import.db"
os.environ["UPLOAD_DIR"] = os.path.join(_IMPORT_DIR, "archivos")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from alumnos_api.config import Settings, StoreConfig
from alumnos_api.database import Base
from alumnos_api.services.student_repository import StudentRepository


@pytest.fixture
def store_config(tmp_path):
    """A StoreConfig whose URL points at a per-test SQLite file."""
    return StoreConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'alumnos.db'}")


@pytest_asyncio.fixture
async def repository(store_config):
    """
    Repository bound to the per-test store, schema already created.

    Disposed after the test so no pooled connection outlives it.
    """
    repo = StudentRepository(store_config)
    async with repo.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield repo
    await repo.dispose()


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        _env_file=None,
        upload_dir=str(tmp_path / "archivos"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_client(app_settings, repository):
    """
    Async HTTP client talking to a freshly created app over ASGI.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/dalumn")
    """
    from alumnos_api.main import create_app

    app = create_app(app_settings=app_settings, repository=repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_student():
    """The reference record used across repository and route tests."""
    return {
        "id": "A001",
        "paternal_surname": "Garcia",
        "maternal_surname": "Lopez",
        "given_name": "Ana",
        "sex": "F",
        "birth_date": "2000-01-01",
        "birth_place": "CDMX",
        "tax_id": "GALA000101XXX",
        "national_id": "GALA000101MDFXXX09",
        "school_id": 1,
        "email": "ana@example.com",
    }


@pytest.fixture
def make_student(sample_student):
    """Factory for distinct records: make_student("A002", given_name="Luis")."""

    def _make(student_id, **overrides):
        data = dict(sample_student, id=student_id)
        data.update(overrides)
        return data

    return _make


@pytest_asyncio.fixture
async def unreachable_client(app_settings, tmp_path):
    """Client whose repository points at a store that cannot be opened."""
    from alumnos_api.main import create_app

    config = StoreConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'alumnos.db'}")
    repo = StudentRepository(config)
    app = create_app(app_settings=app_settings, repository=repo)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await repo.dispose()
