import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure `backend/` is on sys.path so `import promotheans_api` resolves to backend/promotheans_api
ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))

# Test-safe environment defaults for pydantic Settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")

from promotheans_api.core.config import Settings  # noqa: E402
from promotheans_api.main import create_app  # noqa: E402
from tests.helpers import login  # noqa: E402


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def settings(tmp_path):
    """Settings pointing at a throwaway sqlite file and upload directory."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        admin_username="admin",
        admin_password="admin123",
        use_ftp=False,
        rate_limit_max_requests=10_000,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def admin_headers(client):
    return login(client, "admin", "admin123")
