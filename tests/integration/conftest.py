"""
Integration Test Fixtures.

Fixtures for integration tests - uses real database and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.models.note import Note


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    The client uses the test database session, ensuring all API
    operations use the same session that gets rolled back after the test.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from modules.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Data Fixtures
# =============================================================================


NoteFactory = Callable[..., Awaitable[Note]]


@pytest.fixture
def note_factory(db_session: AsyncSession) -> NoteFactory:
    """
    Persist notes directly in the test session.

    Usage:
        async def test_show(client, note_factory):
            note = await note_factory(archived=True)
    """
    async def create(**overrides: Any) -> Note:
        fields = {
            "title": "Weekly planning",
            "body": "Agenda, owners and follow-ups.",
            "archived": False,
            **overrides,
        }
        note = Note(**fields)
        db_session.add(note)
        await db_session.flush()
        return note

    return create
