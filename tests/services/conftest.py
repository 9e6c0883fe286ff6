"""
Service test fixtures - configs pointing at temp datasets.
"""

import pytest

from config import AppConfig, CosmosConfig, ImportConfig, QueryConfig


@pytest.fixture
def cosmos_config():
    return CosmosConfig(
        connection_string="AccountEndpoint=https://localhost:8081/;AccountKey=dGVzdA==;",
        database_name="SpatialDataTest",
        container_name="NasaTest",
    )


@pytest.fixture
def app_config(cosmos_config, tmp_path):
    """AppConfig whose dataset path is a temp file (not yet written)."""
    return AppConfig(
        cosmos=cosmos_config,
        data_import=ImportConfig(file_path=str(tmp_path / "meteorites.json"), max_workers=16),
        query=QueryConfig(),
    )
