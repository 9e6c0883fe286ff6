"""
Query Service - Runs spatial queries and measures them.

Drains every result page, accumulating request units and wall-clock time.

Exports:
    QueryService: Query execution against an IDocumentStore
"""

import time
from typing import Optional

from config import QueryConfig
from core.models import QueryResult
from core.spatial_queries import SpatialQuery
from infrastructure.interface_repository import IDocumentStore
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "QueryService")


class QueryService:
    """Executes SpatialQuery objects and returns QueryResult."""

    def __init__(self, store: IDocumentStore, config: Optional[QueryConfig] = None):
        self.store = store
        self.config = config or QueryConfig()

    @log_exceptions(logger=logger)
    def run_query(self, query: SpatialQuery) -> QueryResult:
        """
        Run a query to completion.

        Page size is only passed to the store when use_query_options is set;
        otherwise the store's defaults apply.

        Raises:
            QueryExecutionError: Store failed while paging
        """
        max_item_count = self.config.max_item_count if self.config.use_query_options else None
        logger.info(
            f"Running query: \"{query.query_text}\"",
            extra={'custom_dimensions': {
                'scenario': query.scenario.value,
                'max_item_count': max_item_count,
            }}
        )

        items = []
        total_charge = 0.0
        page_count = 0
        start = time.perf_counter()

        for page in self.store.query(query.query_text, query.parameters, max_item_count):
            page_count += 1
            total_charge += page.get('request_charge', 0.0)
            items.extend(page.get('items', []))
            if self.config.use_query_options:
                logger.debug(f"Result count: {len(items)}")

        elapsed = time.perf_counter() - start
        result = QueryResult(
            query_text=query.query_text,
            items=items,
            page_count=page_count,
            request_charge=total_charge,
            elapsed_seconds=elapsed
        )
        logger.info(
            f"Query returned {result.count} results",
            extra={'custom_dimensions': {
                'scenario': query.scenario.value,
                'count': result.count,
                'pages': page_count,
                'request_charge': total_charge,
                'elapsed_seconds': round(elapsed, 3),
            }}
        )
        return result


__all__ = ['QueryService']
