"""
Cosmos DB Repository - Azure Cosmos DB for NoSQL document store.

Implements IProvisionableStore on top of the azure-cosmos SDK. The client is
built once per repository with the throttle retry policy from CosmosConfig, so
rate-limited (429) writes are retried inside the SDK and never reach the bulk
pipeline as failures until the client gives up.

Authentication Hierarchy:
    1. COSMOS_CONNECTION_STRING (account key)
    2. DefaultAzureCredential against COSMOS_ENDPOINT
       (environment, managed identity, Azure CLI)

Usage:
    from infrastructure import RepositoryFactory

    store = RepositoryFactory.create_cosmos_repository()
    store.verify()
    store.upsert_document({"id": "1", "year": "1880-01-01T00:00:00.000"}, "1880-01-01T00:00:00.000")

Exports:
    CosmosRepository: IProvisionableStore implementation
    build_cosmos_client: Client construction with retry/consistency policy
"""

# Standard library imports
from typing import Any, Dict, Iterator, List, Optional

# Azure SDK imports - fail fast if not installed
from azure.cosmos import CosmosClient, PartitionKey
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential

# Application imports
from config import CosmosConfig
from core.models import Document
from exceptions import ItemWriteError, ProvisioningError, QueryExecutionError, SubmissionError
from util_logger import LoggerFactory, ComponentType
from .interface_repository import IProvisionableStore, ParamNames

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "CosmosRepository")

REQUEST_CHARGE_HEADER = "x-ms-request-charge"


def build_cosmos_client(config: CosmosConfig) -> CosmosClient:
    """
    Create a CosmosClient with the configured consistency and throttle retry policy.

    retry_total / retry_backoff_max map onto the SDK's rate-limit retry
    options (max attempts, max cumulative wait in seconds).
    """
    client_options = {
        'consistency_level': config.consistency_level,
        'retry_total': config.max_retry_attempts_on_throttle,
        'retry_backoff_max': config.max_retry_wait_seconds,
    }

    if config.connection_string:
        logger.info("Initializing CosmosClient with connection string")
        return CosmosClient.from_connection_string(config.connection_string, **client_options)

    logger.info(f"Initializing CosmosClient with DefaultAzureCredential for endpoint: {config.endpoint}")
    return CosmosClient(config.endpoint, credential=DefaultAzureCredential(), **client_options)


# ============================================================================
# COSMOS REPOSITORY
# ============================================================================

class CosmosRepository(IProvisionableStore):
    """
    Document store backed by one Cosmos DB container.

    Not a singleton: the caller constructs the repository, passes it to the
    services that need it and owns its lifetime. The underlying CosmosClient
    is thread-safe, so one repository serves every pipeline worker.
    """

    def __init__(self, config: CosmosConfig, client: Optional[CosmosClient] = None):
        """
        Args:
            config: Cosmos settings (database, container, partition key, retry policy)
            client: Pre-built client, mainly for tests. Built from config when omitted.
        """
        self.config = config
        self.partition_key_field = config.partition_key_field
        self.client = client if client is not None else build_cosmos_client(config)
        self.database = self.client.get_database_client(config.database_name)
        self.container = self.database.get_container_client(config.container_name)
        logger.info(
            f"✅ CosmosRepository ready for {config.database_name}/{config.container_name}",
            extra={'custom_dimensions': config.debug_dict()}
        )

    # ========================================================================
    # HEALTH
    # ========================================================================

    def verify(self) -> None:
        """Read container properties; any failure means the batch cannot start."""
        try:
            self.container.read()
        except CosmosResourceNotFoundError as e:
            raise SubmissionError(
                f"Container {self.config.database_name}/{self.config.container_name} does not exist"
            ) from e
        except AzureError as e:
            raise SubmissionError(f"Cosmos DB unreachable: {e}") from e
        logger.debug(f"Container {self.config.container_name} reachable")

    # ========================================================================
    # WRITES
    # ========================================================================

    def upsert_document(self, document: Document, partition_key: Any) -> Document:
        """
        Upsert one document into its logical partition.

        The SDK routes by the partition key value inside the body, so the
        supplied key must match the document's own field.
        """
        record_id = str(document.get(ParamNames.ID, ""))
        if partition_key is None:
            raise ItemWriteError(record_id, f"Document has no '{self.partition_key_field}' partition key value")
        if document.get(self.partition_key_field) != partition_key:
            raise ItemWriteError(
                record_id,
                f"Partition key {partition_key!r} does not match document field "
                f"'{self.partition_key_field}'={document.get(self.partition_key_field)!r}"
            )

        try:
            return self.container.upsert_item(body=document)
        except CosmosHttpResponseError as e:
            raise ItemWriteError(record_id, f"{e.status_code} error occurred: {e.message}", e.status_code) from e
        except AzureError as e:
            raise ItemWriteError(record_id, f"Write failed: {e}") from e

    # ========================================================================
    # PROVISIONING
    # ========================================================================

    def create_database(self, name: str) -> str:
        try:
            database = self.client.create_database_if_not_exists(id=name)
        except AzureError as e:
            raise ProvisioningError(f"Could not create database {name}: {e}") from e
        self.database = database
        logger.info(f"Database ready: {database.id}")
        return database.id

    def create_container(
        self,
        name: str,
        partition_key_path: str,
        indexing_policy: Dict[str, Any],
        throughput: Optional[int] = None
    ) -> str:
        try:
            container = self.database.create_container_if_not_exists(
                id=name,
                partition_key=PartitionKey(path=partition_key_path),
                indexing_policy=indexing_policy,
                offer_throughput=throughput
            )
        except AzureError as e:
            raise ProvisioningError(f"Could not create container {name}: {e}") from e
        self.container = container
        logger.info(
            f"Container ready: {container.id}",
            extra={'custom_dimensions': {'partition_key_path': partition_key_path, 'throughput': throughput}}
        )
        return container.id

    def replace_throughput(self, throughput: int) -> int:
        try:
            properties = self.container.replace_throughput(throughput)
        except AzureError as e:
            raise ProvisioningError(f"Could not set throughput to {throughput} RU/s: {e}") from e
        return properties.offer_throughput

    # ========================================================================
    # QUERIES
    # ========================================================================

    def query(
        self,
        query_text: str,
        parameters: Optional[List[Dict[str, Any]]] = None,
        max_item_count: Optional[int] = None
    ) -> Iterator[Dict[str, Any]]:
        """Yield one dict per result page with its items and RU charge."""
        try:
            pager = self.container.query_items(
                query=query_text,
                parameters=parameters or None,
                enable_cross_partition_query=True,
                max_item_count=max_item_count
            ).by_page()

            for page in pager:
                items = list(page)
                yield {
                    'items': items,
                    'request_charge': self._last_request_charge(),
                }
        except AzureError as e:
            raise QueryExecutionError(f"Query failed: {e}") from e

    def _last_request_charge(self) -> float:
        headers = self.container.client_connection.last_response_headers or {}
        try:
            return float(headers.get(REQUEST_CHARGE_HEADER, 0))
        except (TypeError, ValueError):
            return 0.0


__all__ = ['CosmosRepository', 'build_cosmos_client']
