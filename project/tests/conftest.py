# tests/conftest.py

import os
import shutil
import tempfile

import pytest

# Окружение задаём до импорта приложения: settings читаются при импорте
TMP_DIR = tempfile.mkdtemp(prefix="landing-tests-")
DB_FILE = os.path.join(TMP_DIR, "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_FILE}"
os.environ["SESSION_SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = os.path.join(TMP_DIR, "upload")
os.environ["LOG_DIR"] = os.path.join(TMP_DIR, "log")
os.environ["LOG_PRINT"] = "0"
os.environ["LEADS_PUBLIC"] = "0"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"

from fastapi.testclient import TestClient  # noqa: E402

from landing.config import settings  # noqa: E402
from landing.main import app  # noqa: E402
from landing.utils.database import AsyncSessionLocal, init_db  # noqa: E402
from landing.utils.log import Log  # noqa: E402

ADMIN = {"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD}


@pytest.fixture(autouse=True)
def clean_storage():
    """Каждый тест начинает с пустой базы и пустого каталога загрузок."""
    if os.path.exists(DB_FILE):
        os.remove(DB_FILE)
    shutil.rmtree(settings.UPLOAD_DIR, ignore_errors=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(client):
    response = client.post("/api/auth/login", json=ADMIN)
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
async def log():
    log = Log()
    yield log
    await log.shutdown()


@pytest.fixture
async def db():
    await init_db()
    async with AsyncSessionLocal() as session:
        yield session
