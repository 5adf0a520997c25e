"""
Notes API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (fake cache, mock store, SQLite
       session, API client) so no test needs PostgreSQL or Redis.

Fixture Inventory (all function-scoped):
    ├── fake_cache:       In-memory CacheBackend recording every call
    ├── mock_store:       MagicMock(spec=NoteStore) with AsyncMock methods
    ├── mock_db_session:  Mock AsyncSession for store error-path tests
    ├── sqlite_session:   Real AsyncSession on in-memory SQLite
    ├── sample_note:      A transient Note ORM instance
    ├── note_factory:     Builds further transient Notes
    └── api_client:       HTTPX AsyncClient against the app with a NoteService
                          built from fake_cache and mock_store
"""

import os
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any notes_api import: the engine and the Redis
# client are created from settings at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notes_api.database import Base
from notes_api.exceptions import CacheError
from notes_api.models.note import Note
from notes_api.services.cache_base import CacheBackend
from notes_api.services.note_service import NoteService
from notes_api.services.store_base import NoteStore


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

class FakeCache(CacheBackend):
    """
    Dict-backed CacheBackend.

    Entries never expire on their own; expire() simulates TTL expiry.
    The fail_* flags make the matching operation raise CacheError.
    """

    def __init__(self) -> None:
        self.entries: Dict[str, Tuple[str, int]] = {}
        self.get_calls: List[str] = []
        self.set_calls: List[Tuple[str, int]] = []
        self.delete_calls: List[Tuple[str, ...]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False

    async def get(self, key: str) -> Optional[str]:
        self.get_calls.append(key)
        if self.fail_reads:
            raise CacheError(context={"operation": "get", "key": key})
        entry = self.entries.get(key)
        return entry[0] if entry else None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.set_calls.append((key, ttl_seconds))
        if self.fail_writes:
            raise CacheError(context={"operation": "set", "key": key})
        self.entries[key] = (value, ttl_seconds)

    async def delete(self, *keys: str) -> None:
        self.delete_calls.append(keys)
        if self.fail_deletes:
            raise CacheError(context={"operation": "delete", "keys": list(keys)})
        for key in keys:
            self.entries.pop(key, None)

    async def health_check(self) -> bool:
        return True

    def expire(self, key: str) -> None:
        self.entries.pop(key, None)

    def ttl_of(self, key: str) -> int:
        return self.entries[key][1]


def make_note(**overrides) -> Note:
    """Transient Note with fixed field values unless overridden."""
    fields = {
        "id": uuid.uuid4(),
        "name": "Test",
        "text": "Test",
        "date": datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Note(**fields)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def mock_store():
    """
    A NoteStore whose methods are AsyncMocks.

    Defaults describe an empty store; tests set return values as needed.
    """
    store = MagicMock(spec=NoteStore)
    store.get.return_value = None
    store.list.return_value = []
    store.insert.return_value = None
    store.update.return_value = None
    store.delete.return_value = True
    return store


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(StoreUnavailableError):
            await SQLAlchemyNoteStore(mock_db_session).list()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.merge = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def sqlite_session():
    """
    Real AsyncSession on a private in-memory SQLite database.

    StaticPool keeps a single connection so the schema survives across
    statements; each test gets a fresh database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def sample_note():
    return make_note()


@pytest.fixture
def note_factory():
    """Callable building transient Notes: note_factory(name="Other")."""
    return make_note


@pytest_asyncio.fixture
async def api_client(mock_store, fake_cache):
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    The lifespan does not run under ASGITransport, so no database or Redis
    connection is attempted.
    """
    from notes_api.main import app
    from notes_api.routes.notes import get_note_service

    app.dependency_overrides[get_note_service] = lambda: NoteService(mock_store, fake_cache)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
