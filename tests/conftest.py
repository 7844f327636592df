"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_auth_options, get_recipe_service
from app.auth.adapter import MongoDBAdapter
from app.auth.config import AuthOptions, GoogleProvider
from app.config import Settings
from app.main import app
from app.middleware.auth import get_current_user_id


@pytest.fixture
def test_settings():
    """Settings with small image limits for fast tests."""
    return Settings(
        openai_api_key="test-openai-key",
        huggingface_api_key="test-hf-key",
        image_concurrency=2,
        image_timeout_seconds=1.0,
    )


@pytest.fixture
def mock_response_logger():
    """Response logger whose writes succeed with a fixed id."""
    response_logger = MagicMock()
    response_logger.save = AsyncMock(return_value="64b7f0c2a1b2c3d4e5f60718")
    return response_logger


@pytest.fixture
def mock_db():
    """Motor database stand-in; every collection is an independent mock."""
    collections = {}

    def get_collection(name):
        if name not in collections:
            collection = MagicMock()
            collection.insert_one = AsyncMock()
            collection.find_one = AsyncMock(return_value=None)
            collection.delete_one = AsyncMock()
            collections[name] = collection
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    db.command = AsyncMock(return_value={"ok": 1})
    return db


@pytest.fixture
def auth_options(mock_db):
    """Auth configuration over the mocked database."""
    return AuthOptions(
        providers=[GoogleProvider(client_id="test-client-id", client_secret="test-client-secret")],
        adapter=MongoDBAdapter(mock_db),
        base_url="http://testserver",
    )


@pytest.fixture
def mock_recipe_service():
    """Recipe service with every operation mocked."""
    service = MagicMock()
    service.generate_recipe = AsyncMock()
    service.generate_images = AsyncMock()
    service.validate_ingredient = AsyncMock()
    return service


@pytest.fixture
def client(auth_options, mock_db):
    """Create test client (anonymous)."""
    app.state.db = mock_db
    app.dependency_overrides[get_auth_options] = lambda: auth_options
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in_client(client, mock_recipe_service):
    """Test client with a signed-in user and a mocked recipe service."""
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    app.dependency_overrides[get_recipe_service] = lambda: mock_recipe_service
    return client
