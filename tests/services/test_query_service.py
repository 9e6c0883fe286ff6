"""
QueryService paging, request charge accumulation and query options.
"""

import pytest

from config import QueryConfig
from core.models import QueryScenario
from core.spatial_queries import build_query
from exceptions import QueryExecutionError
from services import QueryService
from tests.factories.fake_store import FakeDocumentStore


def _pages():
    return [
        {'items': [{'id': '1'}, {'id': '2'}], 'request_charge': 3.5},
        {'items': [{'id': '3'}], 'request_charge': 1.25},
    ]


class TestRunQuery:

    def test_accumulates_pages(self):
        store = FakeDocumentStore(pages=_pages())
        result = QueryService(store).run_query(build_query(QueryScenario.PROXIMITY))
        assert result.count == 3
        assert result.page_count == 2
        assert result.request_charge == pytest.approx(4.75)
        assert result.elapsed_seconds >= 0

    def test_parameters_passed_to_store(self):
        store = FakeDocumentStore()
        query = build_query(QueryScenario.POLYGON)
        QueryService(store).run_query(query)
        text, parameters, max_item_count = store.queries[0]
        assert text == query.query_text
        assert parameters == query.parameters
        assert max_item_count is None

    def test_query_options_pass_page_size(self):
        store = FakeDocumentStore()
        config = QueryConfig(max_item_count=7, use_query_options=True)
        QueryService(store, config).run_query(build_query(QueryScenario.VALIDATE))
        assert store.queries[0][2] == 7

    def test_empty_result(self):
        result = QueryService(FakeDocumentStore()).run_query(build_query(QueryScenario.VALIDATE))
        assert result.count == 0
        assert result.page_count == 0
        assert result.request_charge == 0.0

    def test_store_failure_propagates(self):
        class FailingStore(FakeDocumentStore):
            def query(self, query_text, parameters=None, max_item_count=None):
                raise QueryExecutionError("Query failed: 400 bad geometry")
                yield  # pragma: no cover

        with pytest.raises(QueryExecutionError, match="bad geometry"):
            QueryService(FailingStore()).run_query(build_query(QueryScenario.VALIDATE_DETAILED))
