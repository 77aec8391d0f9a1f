"""
Pytest configuration for the API tests.

Points the app at a throwaway SQLite file before ``edutrack`` is imported,
and forces AnyIO onto the asyncio backend.
"""
import os
import tempfile
from pathlib import Path

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="edutrack-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'edutrack.db'}"
os.environ.setdefault("ADMIN_EMAIL", "admin@ieti.edu.ph")

import httpx  # noqa: E402
from httpx import ASGITransport  # noqa: E402

from edutrack.core.activity import activity_log  # noqa: E402
from edutrack.core.database import create_tables, drop_tables, engine  # noqa: E402
from edutrack.main import app  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def database(anyio_backend):
    await drop_tables()
    await create_tables()
    activity_log.clear()
    yield
    activity_log.clear()
    await engine.dispose()


@pytest.fixture
async def client(database):
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
