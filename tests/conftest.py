"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials or a reachable Cosmos DB account.
"""

import json
import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'services', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tests.factories.fake_store import FakeDocumentStore  # noqa: E402
from tests.factories.record_factories import make_records  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables so get_config() succeeds.

    The connection string points at the local emulator address and is never
    contacted: every test injects a fake store or a mocked client.
    """
    defaults = {
        "COSMOS_CONNECTION_STRING": "AccountEndpoint=https://localhost:8081/;AccountKey=dGVzdA==;",
        "COSMOS_DATABASE_NAME": "SpatialDataTest",
        "COSMOS_CONTAINER_NAME": "NasaTest",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def reset_config_singleton():
    """Each test sees configuration built from its own environment."""
    from config import reset_config
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fake_store():
    return FakeDocumentStore()


@pytest.fixture
def records():
    return make_records(25)


@pytest.fixture
def dataset_file(tmp_path):
    """Factory fixture: write records to a JSON file and return its path."""
    def _write(payload) -> str:
        path = tmp_path / "meteorites.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write
