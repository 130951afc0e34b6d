"""
Todos API: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── store: a TodoStore seeded with the five default records
    ├── app: a FastAPI app serving that store
    ├── test_client: HTTPX AsyncClient routed straight into the app
    └── error_client: same, but returns 500 responses instead of raising
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

from todos_api.main import create_app  # noqa: E402
from todos_api.services.todo_store import TodoStore  # noqa: E402


@pytest.fixture
def store():
    """A freshly seeded store (ids 1-5, users 1 and 2)."""
    return TodoStore()


@pytest.fixture
def app(store):
    """An application instance that serves the `store` fixture."""
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_status(test_client):
            response = await test_client.get("/status")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def error_client(app):
    """
    Client for exercising the 500 handler.

    Starlette re-raises unhandled errors after sending the 500 response;
    raise_app_exceptions=False lets the test see that response.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
