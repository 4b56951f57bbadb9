"""
String Analyzer Service - Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── data_file: path of a JSON data file inside tmp_path
    ├── json_backend: JsonFileBackend writing to data_file
    ├── store: loaded StringStore over json_backend
    ├── make_record: factory building analyzed StringRecords
    └── test_client: HTTPX AsyncClient talking to an app bound to `store`
"""

import os
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings before any application import reads them
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("STORAGE_BACKEND", "json")

from string_analyzer.config import Settings  # noqa: E402
from string_analyzer.schemas.string import StringRecord  # noqa: E402
from string_analyzer.services.analyzer import analyze  # noqa: E402
from string_analyzer.services.backends import JsonFileBackend  # noqa: E402
from string_analyzer.services.store import StringStore  # noqa: E402


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "db.json")


@pytest.fixture
def json_backend(data_file):
    return JsonFileBackend(data_file)


@pytest_asyncio.fixture
async def store(json_backend):
    """A loaded, empty store persisting to a temporary JSON file."""
    s = StringStore(json_backend)
    await s.load()
    return s


@pytest.fixture
def make_record():
    """
    Factory for analyzed records.

    Usage:
        record = make_record("racecar")
    """

    def _make(value: str) -> StringRecord:
        properties = analyze(value)
        return StringRecord(
            id=properties.sha256_hash,
            value=value,
            properties=properties,
            created_at=datetime.now(timezone.utc),
        )

    return _make


@pytest_asyncio.fixture
async def test_client(store, data_file):
    """
    HTTPX AsyncClient wired to a fresh app instance.

    ASGITransport does not run the lifespan, so the store is loaded by the
    `store` fixture and injected into the factory.
    """
    from string_analyzer.main import create_app

    config = Settings(data_file=data_file, log_level="WARNING")
    app = create_app(config=config, store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
