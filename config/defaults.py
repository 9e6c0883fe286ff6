"""
Configuration Defaults - Single source of truth for all default values.

FAIL-FAST DESIGN:
Account-specific values have no usable default. COSMOS_CONNECTION_STRING or
COSMOS_ENDPOINT must be set, otherwise get_config() raises ConfigurationError.

Organization:
    - CosmosDefaults: Database, container, throughput and client retry policy
    - ImportDefaults: Dataset path and bulk worker pool size
    - QueryDefaults: Paging options for the canned spatial queries

Usage:
    from config.defaults import CosmosDefaults

    # In Pydantic Field definitions:
    partition_key_path: str = Field(default=CosmosDefaults.PARTITION_KEY_PATH)
"""


# =============================================================================
# COSMOS DB DEFAULTS
# =============================================================================

class CosmosDefaults:
    """
    Cosmos DB account and container defaults.

    The container is partitioned by year so that every record of the
    meteorite-landing dataset carries its routing value.
    """

    DATABASE_NAME = "SpatialData"
    CONTAINER_NAME = "Nasa"
    PARTITION_KEY_PATH = "/year"

    # RU/s used while importing, then scaled down to MINIMUM_THROUGHPUT
    PROVISIONED_THROUGHPUT = 10000
    MINIMUM_THROUGHPUT = 400

    CONSISTENCY_LEVEL = "Eventual"

    # Throttle (429) retry handled by the Cosmos client, not by the pipeline
    MAX_RETRY_ATTEMPTS_ON_THROTTLE = 999
    MAX_RETRY_WAIT_SECONDS = 3600

    SPATIAL_INDEX_PATH = "/geolocation/*"
    SPATIAL_TYPES = ("Point", "LineString", "Polygon", "MultiPolygon")


# =============================================================================
# IMPORT DEFAULTS
# =============================================================================

class ImportDefaults:
    """Bulk import defaults."""

    FILE_PATH = "data/meteorites.json"
    MAX_WORKERS = 100
    # Seconds between cancellation checks while waiting on the batch
    CANCEL_POLL_INTERVAL = 0.1


# =============================================================================
# QUERY DEFAULTS
# =============================================================================

class QueryDefaults:
    """Spatial query paging defaults."""

    MAX_ITEM_COUNT = 100
    USE_QUERY_OPTIONS = False
    PROXIMITY_DISTANCE_METERS = 300000
