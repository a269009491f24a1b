from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hr_ledger.config import get_settings
from hr_ledger.db import get_session, init_db
from hr_ledger.main import app
from hr_ledger.models import Employee
from hr_ledger.services.notification import InMemoryNotificationSink, NotificationDispatcher, set_dispatcher

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine

    from hr_ledger.config import Settings

ADMIN_EMAIL = "hr-admin@example.com"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """File-backed SQLite engine so separate sessions see each other's commits."""
    _engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'hr_ledger.db'}")
    await init_db(_engine)
    yield _engine
    await _engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """A session for arranging data directly in the database."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Cached settings with an admin address; attribute changes are undone after the test."""
    _settings = get_settings()
    monkeypatch.setattr(_settings, "admin_email", ADMIN_EMAIL)
    monkeypatch.setattr(_settings, "leave_balance_floor", None)
    return _settings


@pytest.fixture
def sink() -> InMemoryNotificationSink:
    return InMemoryNotificationSink()


@pytest.fixture(autouse=True)
async def dispatcher(sink: InMemoryNotificationSink, settings: Settings) -> AsyncIterator[NotificationDispatcher]:
    """Fresh dispatcher per test, delivering into the in-memory sink."""
    _dispatcher = NotificationDispatcher(sink)
    set_dispatcher(_dispatcher)
    yield _dispatcher
    await _dispatcher.stop()
    set_dispatcher(None)


@pytest.fixture
async def async_client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    """Async HTTP client; each request gets its own session, as in production."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_employee(session_factory: async_sessionmaker[AsyncSession]) -> Callable[..., Awaitable[Employee]]:
    """Insert an employee directly and return it."""

    async def _make(employee_id: str = "E1", **fields: object) -> Employee:
        fields.setdefault("name", f"Employee {employee_id}")
        fields.setdefault("email", f"{employee_id.lower()}@example.com")
        employee = Employee(id=employee_id, **fields)
        async with session_factory() as session:
            session.add(employee)
            await session.commit()
        return employee

    return _make


@pytest.fixture
def read_employee(session_factory: async_sessionmaker[AsyncSession]) -> Callable[[str], Awaitable[Employee | None]]:
    """Read an employee's committed state through a fresh session."""

    async def _read(employee_id: str) -> Employee | None:
        async with session_factory() as session:
            return await session.get(Employee, employee_id)

    return _read
