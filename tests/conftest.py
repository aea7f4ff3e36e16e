import pytest
from fastapi.testclient import TestClient

from contact_service.main import create_app
from contact_service.settings import Settings

@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.fixture
def settings(request, tmp_path):
    # tests override individual values with indirect parametrization
    overrides = getattr(request, "param", {})
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'contact.db'}",
        upload_dir=str(tmp_path / "uploads"),
        max_upload_bytes=1024,
        # low cost keeps the suite fast; the scheme is the same
        password_hash_method="pbkdf2:sha256:1000",
        **overrides,
    )

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c

@pytest.fixture
def form():
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "mobile": "+441234567890",
        "password": "s3cret-pass",
        "address": "12 St James's Square, London",
    }
