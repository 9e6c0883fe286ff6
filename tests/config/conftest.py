"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "COSMOS_CONNECTION_STRING", "COSMOS_ENDPOINT",
        "COSMOS_DATABASE_NAME", "COSMOS_CONTAINER_NAME", "COSMOS_PARTITION_KEY_PATH",
        "COSMOS_PROVISIONED_THROUGHPUT", "COSMOS_MINIMUM_THROUGHPUT",
        "COSMOS_CONSISTENCY_LEVEL", "COSMOS_MAX_RETRY_ATTEMPTS", "COSMOS_MAX_RETRY_WAIT_SECONDS",
        "GEOSPATIAL_DATA_FILE", "BULK_MAX_WORKERS",
        "QUERY_MAX_ITEM_COUNT", "QUERY_USE_OPTIONS",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
