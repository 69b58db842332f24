"""
Pytest conftest.py - Shared fixtures and configuration

Every API test builds its own application around a fresh SQLite file and
a temporary media root, so tests never share rows or photos.
"""

import io
import os
import tempfile
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

# The module-level app in urbanliving.main is built at import time; keep its
# storage directory out of the working tree.
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="urbanliving-media-"))
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from urbanliving.core.config import Settings  # noqa: E402
from urbanliving.main import create_application  # noqa: E402

TEST_API_KEY = "test-api-key"


# =============================================================================
# PYTEST HOOKS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture
def settings(tmp_path, media_root) -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        MEDIA_ROOT=media_root,
        API_KEY=TEST_API_KEY,
        JWT_SECRET_KEY="test-secret",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="correct-horse",
        RATE_LIMIT_ENABLED=False,
        SECURITY_HEADERS_ENABLED=True,
    )


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    # Entering the context runs the lifespan (tables, admin bootstrap)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"X-API-Key": TEST_API_KEY}


@pytest.fixture
def storage_dir(media_root):
    """Absolute storage root the app writes photos into."""
    return media_root / "photos" / "properties"


# =============================================================================
# DATA FIXTURES
# =============================================================================

def make_image_bytes(size=(100, 100), color="red", fmt="JPEG", mode="RGB") -> bytes:
    image = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes(fmt="PNG", mode="RGBA", color=(0, 128, 255, 128))


@pytest.fixture
def sample_property() -> Dict:
    return {
        "name": "The Loft District",
        "address": "123 Peachtree St",
        "city": "Atlanta",
        "state": "GA",
        "zipCode": "30303",
        "bedrooms": 2,
        "bathrooms": "1.5",
        "totalUnits": 12,
        "description": "Converted warehouse lofts",
    }


@pytest.fixture
def created_property(client, auth_headers, sample_property) -> Dict:
    response = client.post("/api/properties", json=sample_property, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def created_unit(client, auth_headers, created_property) -> Dict:
    response = client.post(
        "/api/units",
        json={"propertyId": created_property["id"], "unitNumber": "3B", "bedrooms": 2},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
