from pathlib import Path
from typing import Any, AsyncGenerator, Dict
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from househunt.accounts.enums import UserRole
from househunt.auth.schemas import AuthOut
from househunt.db.dependencies import get_db_session
from househunt.db.meta import meta
from househunt.db.models import load_all_models
from househunt.listings.tasks import increment_house_views
from househunt.web.application import get_app
from tests.helpers import make_account, make_landlord


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Backend for anyio pytest plugin.

    :return: backend name.
    """
    return "asyncio"


@pytest.fixture
async def _engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a fresh SQLite database with every table.

    :yield: new engine.
    """
    load_all_models()

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'househunt.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(meta.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def dbsession(
    _engine: AsyncEngine,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Get session to database.

    The same session backs every request of a test.

    :param _engine: current engine.
    :yields: async session.
    """
    session_maker = async_sessionmaker(_engine, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
def view_queue(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Stands in for the broker when the detail endpoint queues a view."""
    kiq = AsyncMock()
    monkeypatch.setattr(increment_house_views, "kiq", kiq)
    return kiq


@pytest.fixture
def fastapi_app(dbsession: AsyncSession, view_queue: AsyncMock) -> FastAPI:
    """
    Fixture for creating FastAPI app.

    :return: fastapi app with mocked dependencies.
    """
    application = get_app()
    application.dependency_overrides[get_db_session] = lambda: dbsession
    return application


@pytest.fixture
async def client(
    fastapi_app: FastAPI,
    anyio_backend: Any,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Fixture that creates client for requesting server.

    :param fastapi_app: the application.
    :yield: client for the app.
    """
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def tenant(dbsession: AsyncSession) -> AuthOut:
    return await make_account(dbsession, UserRole.TENANT, "jane@x.com")


@pytest.fixture
async def landlord(dbsession: AsyncSession) -> AuthOut:
    return await make_landlord(dbsession, "larry@x.com")


@pytest.fixture
async def other_landlord(dbsession: AsyncSession) -> AuthOut:
    return await make_landlord(dbsession, "olga@x.com")


@pytest.fixture
def house_payload() -> Dict[str, Any]:
    """A complete create body, with the numbers sent as strings like a form would."""
    return {
        "title": "Sunny 2BR in Kilimani",
        "description": "Close to shops and schools.",
        "houseType": "2BR",
        "bedrooms": "2",
        "bathrooms": "1",
        "monthlyRent": "45000",
        "deposit": "45000",
        "waterCharge": "500",
        "address": "12 Argwings Kodhek Rd",
        "city": "Nairobi",
        "estate": "Kilimani",
        "street": "Argwings Kodhek Rd",
        "latitude": "-1.2921",
        "longitude": "36.7856",
        "availabilityDate": "2026-11-01",
        "amenities": ["WIFI", "parking", "WIFI"],
        "rules": ["No smoking", "  "],
    }
