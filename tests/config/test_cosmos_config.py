"""
Environment loading and validation for CosmosConfig, ImportConfig, QueryConfig.
"""

import pytest
from pydantic import ValidationError

from config import AppConfig, CosmosConfig, ImportConfig, QueryConfig, get_config
from config.defaults import CosmosDefaults, ImportDefaults, QueryDefaults
from exceptions import ConfigurationError

CONNECTION_STRING = "AccountEndpoint=https://localhost:8081/;AccountKey=c2VjcmV0;"


class TestCosmosConfigFromEnvironment:

    def test_missing_auth_raises(self, clean_env):
        with pytest.raises(ConfigurationError, match="COSMOS_CONNECTION_STRING or COSMOS_ENDPOINT"):
            CosmosConfig.from_environment()

    def test_defaults_applied(self, clean_env):
        clean_env.setenv("COSMOS_CONNECTION_STRING", CONNECTION_STRING)
        config = CosmosConfig.from_environment()
        assert config.database_name == CosmosDefaults.DATABASE_NAME
        assert config.container_name == CosmosDefaults.CONTAINER_NAME
        assert config.partition_key_path == "/year"
        assert config.provisioned_throughput == 10000
        assert config.minimum_throughput == 400
        assert config.consistency_level == "Eventual"
        assert config.max_retry_attempts_on_throttle == 999
        assert config.max_retry_wait_seconds == 3600

    def test_endpoint_only_uses_managed_identity(self, clean_env):
        clean_env.setenv("COSMOS_ENDPOINT", "https://acct.documents.azure.com:443/")
        config = CosmosConfig.from_environment()
        assert config.uses_managed_identity
        assert config.connection_string is None

    def test_connection_string_disables_managed_identity(self, clean_env):
        clean_env.setenv("COSMOS_CONNECTION_STRING", CONNECTION_STRING)
        assert not CosmosConfig.from_environment().uses_managed_identity

    def test_overrides_read(self, clean_env):
        clean_env.setenv("COSMOS_CONNECTION_STRING", CONNECTION_STRING)
        clean_env.setenv("COSMOS_DATABASE_NAME", "Geo")
        clean_env.setenv("COSMOS_CONTAINER_NAME", "Landings")
        clean_env.setenv("COSMOS_PARTITION_KEY_PATH", "/recclass")
        clean_env.setenv("COSMOS_PROVISIONED_THROUGHPUT", "4000")
        clean_env.setenv("COSMOS_CONSISTENCY_LEVEL", "Session")
        config = CosmosConfig.from_environment()
        assert config.database_name == "Geo"
        assert config.container_name == "Landings"
        assert config.partition_key_field == "recclass"
        assert config.provisioned_throughput == 4000
        assert config.consistency_level == "Session"

    def test_non_integer_throughput_raises(self, clean_env):
        clean_env.setenv("COSMOS_CONNECTION_STRING", CONNECTION_STRING)
        clean_env.setenv("COSMOS_PROVISIONED_THROUGHPUT", "lots")
        with pytest.raises(ConfigurationError):
            CosmosConfig.from_environment()

    def test_invalid_consistency_level_raises(self, clean_env):
        clean_env.setenv("COSMOS_CONNECTION_STRING", CONNECTION_STRING)
        clean_env.setenv("COSMOS_CONSISTENCY_LEVEL", "Whenever")
        with pytest.raises(ConfigurationError, match="consistency level"):
            CosmosConfig.from_environment()


class TestCosmosConfigValidation:

    def test_partition_key_path_requires_slash(self):
        with pytest.raises(ValidationError):
            CosmosConfig(partition_key_path="year")

    def test_minimum_above_provisioned_rejected(self):
        with pytest.raises(ValidationError, match="minimum_throughput"):
            CosmosConfig(provisioned_throughput=1000, minimum_throughput=2000)

    def test_throughput_floor(self):
        with pytest.raises(ValidationError):
            CosmosConfig(provisioned_throughput=100)

    def test_nested_partition_key_field(self):
        assert CosmosConfig(partition_key_path="/address/city").partition_key_field == "address"

    def test_debug_dict_masks_connection_string(self):
        config = CosmosConfig(connection_string=CONNECTION_STRING)
        dumped = config.debug_dict()
        assert dumped["connection_string"] == "***MASKED***"
        assert "c2VjcmV0" not in str(dumped)


class TestImportAndQueryConfig:

    def test_import_defaults(self, clean_env):
        config = ImportConfig.from_environment()
        assert config.file_path == ImportDefaults.FILE_PATH
        assert config.max_workers == 100

    def test_import_overrides(self, clean_env):
        clean_env.setenv("GEOSPATIAL_DATA_FILE", "/tmp/landings.json")
        clean_env.setenv("BULK_MAX_WORKERS", "8")
        config = ImportConfig.from_environment()
        assert config.file_path == "/tmp/landings.json"
        assert config.max_workers == 8

    def test_zero_workers_rejected(self, clean_env):
        clean_env.setenv("BULK_MAX_WORKERS", "0")
        with pytest.raises(ConfigurationError):
            ImportConfig.from_environment()

    def test_query_defaults(self, clean_env):
        config = QueryConfig.from_environment()
        assert config.max_item_count == QueryDefaults.MAX_ITEM_COUNT
        assert config.use_query_options is False

    def test_query_options_flag(self, clean_env):
        clean_env.setenv("QUERY_USE_OPTIONS", "TRUE")
        clean_env.setenv("QUERY_MAX_ITEM_COUNT", "5")
        config = QueryConfig.from_environment()
        assert config.use_query_options is True
        assert config.max_item_count == 5


class TestConfigSingleton:

    def test_get_config_cached(self, clean_env):
        clean_env.setenv("COSMOS_CONNECTION_STRING", CONNECTION_STRING)
        first = get_config()
        assert isinstance(first, AppConfig)
        assert get_config() is first

    def test_get_config_without_auth_raises(self, clean_env):
        with pytest.raises(ConfigurationError):
            get_config()
