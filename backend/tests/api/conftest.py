"""API test fixtures — FastAPI app built by create_app with fake collaborators.

Invariants:
    - Every test gets a fresh fake service and a fresh in-memory preferences store
    - The app is wired through create_app exactly as in production (no dependency_overrides)

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises real routing, validation, and
      exception handlers without a network socket
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app
from tests.services.fake_user_service import (
    VALID_TOKEN, FakeUpdatingUserService, RecordingPreferencesStore, make_user,
)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None, jwt_secret="test-secret", jwt_expires_in="1h",
        log_format="text",
    )


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def service(user):
    return FakeUpdatingUserService({VALID_TOKEN: user})


@pytest.fixture
def store():
    return RecordingPreferencesStore()


def _client_for(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(service, store, settings):
    app = create_app(service, store, settings)
    async with _client_for(app) as c:
        yield c


@pytest.fixture
async def storeless_client(service, settings):
    """App with persistence explicitly disabled."""
    app = create_app(service, None, settings)
    async with _client_for(app) as c:
        yield c
