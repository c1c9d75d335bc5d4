# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.change_feed import auth_events, change_feed
from dependencies.auth import CurrentUser, get_current_user, get_user_store
from tests.fake_supabase import FakeSupabase


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_db():
    """Empty in-memory Supabase."""
    return FakeSupabase()


@pytest.fixture
def mock_current_user():
    """Create a mock current user for testing."""
    return CurrentUser(
        id="test-user-id",
        email="test@example.com",
        full_name="Test User",
    )


@pytest.fixture
def as_user(app, fake_db, mock_current_user):
    """Route dependencies resolve to the mock user and the fake store."""
    app.dependency_overrides[get_current_user] = lambda: mock_current_user
    app.dependency_overrides[get_user_store] = lambda: fake_db
    yield mock_current_user
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_property(fake_db, mock_current_user):
    return fake_db.seed(
        "properties",
        {"id": "prop-1", "name": "Harbor House", "owner_id": mock_current_user.id},
    )[0]


@pytest.fixture(autouse=True)
def reset_feeds():
    """Drop subscriptions left behind by a test."""
    yield
    change_feed._subscribers.clear()
    auth_events._subscribers.clear()
