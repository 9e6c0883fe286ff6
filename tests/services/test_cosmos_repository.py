"""
CosmosRepository against a mocked azure-cosmos client.

No network: the CosmosClient is a MagicMock and SDK exceptions are raised
through side_effect.
"""

from unittest.mock import MagicMock, patch

import pytest
from azure.cosmos import PartitionKey
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from azure.core.exceptions import ServiceRequestError

from config import CosmosConfig
from exceptions import ItemWriteError, ProvisioningError, QueryExecutionError, SubmissionError
from infrastructure import RepositoryFactory
from infrastructure.cosmos import CosmosRepository, build_cosmos_client
from tests.factories.record_factories import make_spatial_record


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def repo(cosmos_config, client):
    return CosmosRepository(cosmos_config, client=client)


@pytest.fixture
def container(client):
    return client.get_database_client.return_value.get_container_client.return_value


class TestClientConstruction:

    def test_connection_string_with_retry_policy(self, cosmos_config):
        with patch("infrastructure.cosmos.CosmosClient") as cosmos_client:
            build_cosmos_client(cosmos_config)
        cosmos_client.from_connection_string.assert_called_once_with(
            cosmos_config.connection_string,
            consistency_level="Eventual",
            retry_total=999,
            retry_backoff_max=3600,
        )

    def test_endpoint_uses_default_credential(self):
        config = CosmosConfig(endpoint="https://acct.documents.azure.com:443/")
        with patch("infrastructure.cosmos.CosmosClient") as cosmos_client, \
                patch("infrastructure.cosmos.DefaultAzureCredential") as credential:
            build_cosmos_client(config)
        cosmos_client.assert_called_once()
        args, kwargs = cosmos_client.call_args
        assert args == ("https://acct.documents.azure.com:443/",)
        assert kwargs['credential'] is credential.return_value

    def test_factory_binds_database_and_container(self, cosmos_config):
        with patch("infrastructure.cosmos.CosmosClient") as cosmos_client:
            store = RepositoryFactory.create_cosmos_repository(cosmos_config)
        client = cosmos_client.from_connection_string.return_value
        client.get_database_client.assert_called_once_with("SpatialDataTest")
        client.get_database_client.return_value.get_container_client.assert_called_once_with("NasaTest")
        assert isinstance(store, CosmosRepository)


class TestVerify:

    def test_ok(self, repo, container):
        repo.verify()
        container.read.assert_called_once()

    def test_missing_container(self, repo, container):
        container.read.side_effect = CosmosResourceNotFoundError(status_code=404, message="gone")
        with pytest.raises(SubmissionError, match="does not exist"):
            repo.verify()

    def test_unreachable(self, repo, container):
        container.read.side_effect = ServiceRequestError("connection refused")
        with pytest.raises(SubmissionError, match="unreachable"):
            repo.verify()


class TestUpsertDocument:

    def test_upsert(self, repo, container):
        document = make_spatial_record()
        container.upsert_item.return_value = document
        assert repo.upsert_document(document, document["year"]) == document
        container.upsert_item.assert_called_once_with(body=document)

    def test_partition_key_mismatch(self, repo, container):
        document = make_spatial_record(year="1880-01-01T00:00:00.000")
        with pytest.raises(ItemWriteError, match="does not match"):
            repo.upsert_document(document, "1999-01-01T00:00:00.000")
        container.upsert_item.assert_not_called()

    def test_null_partition_key(self, repo):
        with pytest.raises(ItemWriteError):
            repo.upsert_document({"id": "1"}, None)

    def test_http_error_carries_status(self, repo, container):
        document = make_spatial_record()
        container.upsert_item.side_effect = CosmosHttpResponseError(status_code=429, message="throttled")
        with pytest.raises(ItemWriteError) as exc_info:
            repo.upsert_document(document, document["year"])
        assert exc_info.value.status_code == 429
        assert exc_info.value.record_id == document["id"]
        assert str(exc_info.value).startswith("429 error occurred")

    def test_transport_error(self, repo, container):
        document = make_spatial_record()
        container.upsert_item.side_effect = ServiceRequestError("reset")
        with pytest.raises(ItemWriteError) as exc_info:
            repo.upsert_document(document, document["year"])
        assert exc_info.value.status_code is None


class TestProvisioning:

    def test_create_database(self, repo, client):
        client.create_database_if_not_exists.return_value.id = "SpatialDataTest"
        assert repo.create_database("SpatialDataTest") == "SpatialDataTest"
        client.create_database_if_not_exists.assert_called_once_with(id="SpatialDataTest")

    def test_create_container_on_new_database(self, repo, client):
        database = client.create_database_if_not_exists.return_value
        database.create_container_if_not_exists.return_value.id = "NasaTest"
        repo.create_database("SpatialDataTest")
        policy = {'indexingMode': 'consistent'}
        assert repo.create_container("NasaTest", "/year", policy, throughput=10000) == "NasaTest"
        kwargs = database.create_container_if_not_exists.call_args.kwargs
        assert kwargs['id'] == "NasaTest"
        assert isinstance(kwargs['partition_key'], PartitionKey)
        assert kwargs['indexing_policy'] == policy
        assert kwargs['offer_throughput'] == 10000
        assert repo.container is database.create_container_if_not_exists.return_value

    def test_create_database_failure(self, repo, client):
        client.create_database_if_not_exists.side_effect = CosmosHttpResponseError(status_code=403, message="no")
        with pytest.raises(ProvisioningError):
            repo.create_database("SpatialDataTest")

    def test_replace_throughput(self, repo, container):
        container.replace_throughput.return_value.offer_throughput = 400
        assert repo.replace_throughput(400) == 400
        container.replace_throughput.assert_called_once_with(400)

    def test_replace_throughput_failure(self, repo, container):
        container.replace_throughput.side_effect = CosmosHttpResponseError(status_code=400, message="too low")
        with pytest.raises(ProvisioningError, match="400 RU/s"):
            repo.replace_throughput(400)


class TestQuery:

    def test_pages_with_charge(self, repo, container):
        container.query_items.return_value.by_page.return_value = iter([
            iter([{'id': '1'}, {'id': '2'}]),
            iter([{'id': '3'}]),
        ])
        container.client_connection.last_response_headers = {'x-ms-request-charge': '2.5'}
        pages = list(repo.query("SELECT * FROM c", [{'name': '@p', 'value': 1}], max_item_count=10))
        assert [len(p['items']) for p in pages] == [2, 1]
        assert all(p['request_charge'] == 2.5 for p in pages)
        kwargs = container.query_items.call_args.kwargs
        assert kwargs['enable_cross_partition_query'] is True
        assert kwargs['max_item_count'] == 10

    def test_missing_charge_header(self, repo, container):
        container.query_items.return_value.by_page.return_value = iter([iter([])])
        container.client_connection.last_response_headers = {}
        pages = list(repo.query("SELECT 1"))
        assert pages == [{'items': [], 'request_charge': 0.0}]

    def test_query_error(self, repo, container):
        container.query_items.side_effect = CosmosHttpResponseError(status_code=400, message="syntax")
        with pytest.raises(QueryExecutionError):
            list(repo.query("SELEC"))
