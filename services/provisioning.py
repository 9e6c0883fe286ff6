"""
Provisioning Service - Database, container and dataset setup.

Creates the database and a year-partitioned container with a spatial
indexing policy, imports the dataset at high throughput, then scales the
container back down.

Exports:
    build_indexing_policy: Spatial indexing policy document
    ProvisioningService: Setup orchestration
"""

import threading
from typing import Any, Dict, Optional, Sequence

from config import AppConfig, CosmosDefaults
from core.models import SetupReport
from infrastructure.interface_repository import IProvisionableStore
from util_logger import LoggerFactory, ComponentType, format_elapsed
from .data_import import import_records, load_records

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ProvisioningService")


def build_indexing_policy(
    spatial_path: str = CosmosDefaults.SPATIAL_INDEX_PATH,
    spatial_types: Sequence[str] = CosmosDefaults.SPATIAL_TYPES
) -> Dict[str, Any]:
    """
    Consistent, automatic indexing of every path except _etag, plus a
    spatial index on the geolocation subtree.
    """
    return {
        'indexingMode': 'consistent',
        'automatic': True,
        'includedPaths': [{'path': '/*'}],
        'excludedPaths': [{'path': '/"_etag"/?'}],
        'spatialIndexes': [
            {'path': spatial_path, 'types': list(spatial_types)}
        ],
    }


class ProvisioningService:
    """
    Sets up Cosmos resources and imports the dataset.

    Usage:
        store = RepositoryFactory.create_cosmos_repository(config.cosmos)
        report = ProvisioningService(store, config).setup_resources()
    """

    def __init__(self, store: IProvisionableStore, config: AppConfig):
        self.store = store
        self.config = config

    def setup_resources(self, cancel_event: Optional[threading.Event] = None) -> SetupReport:
        """
        Provision, import, scale down.

        Raises:
            ProvisioningError: Database/container/throughput operation failed
            DataImportError: Dataset file unusable (nothing written)
            SubmissionError: Container unreachable before the import started
        """
        cosmos = self.config.cosmos

        database_name = self.store.create_database(cosmos.database_name)
        logger.info(f"Created database {database_name}")

        logger.info(
            f"Creating a {cosmos.provisioned_throughput} RU/s container with spatial indexes..."
        )
        container_name = self.store.create_container(
            cosmos.container_name,
            cosmos.partition_key_path,
            build_indexing_policy(),
            throughput=cosmos.provisioned_throughput
        )
        logger.info(f"Created container {container_name} with spatial indexing policy")

        # The container is scaled down even when the import fails or is interrupted
        try:
            documents = load_records(self.config.data_import.file_path)
            batch = import_records(
                documents,
                self.store,
                cosmos,
                self.config.data_import,
                cancel_event=cancel_event
            )
            logger.info(
                f"Import of items into {container_name} completed with total time: "
                f"{format_elapsed(batch.elapsed_seconds)}",
                extra={'custom_dimensions': batch.summary()}
            )
        finally:
            final_throughput = self.store.replace_throughput(cosmos.minimum_throughput)
            logger.info(f"Scaled container down to minimum {final_throughput} RU/s")

        return SetupReport(
            database_name=database_name,
            container_name=container_name,
            batch=batch,
            final_throughput=final_throughput
        )


__all__ = ['build_indexing_policy', 'ProvisioningService']
