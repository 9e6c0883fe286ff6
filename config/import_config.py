"""
Bulk Import and Query Configuration.

Exports:
    ImportConfig: Dataset location and worker pool size
    QueryConfig: Paging options for spatial queries
"""

import os
from pydantic import BaseModel, Field

from exceptions import ConfigurationError
from .defaults import ImportDefaults, QueryDefaults


class ImportConfig(BaseModel):
    """Dataset import settings."""

    file_path: str = Field(default=ImportDefaults.FILE_PATH, description="JSON array of records")
    max_workers: int = Field(default=ImportDefaults.MAX_WORKERS, ge=1, description="Concurrent upsert workers")
    cancel_poll_interval: float = Field(default=ImportDefaults.CANCEL_POLL_INTERVAL, gt=0)

    @classmethod
    def from_environment(cls) -> "ImportConfig":
        try:
            return cls(
                file_path=os.environ.get("GEOSPATIAL_DATA_FILE", ImportDefaults.FILE_PATH),
                max_workers=int(os.environ.get("BULK_MAX_WORKERS", str(ImportDefaults.MAX_WORKERS))),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid import configuration: {e}") from e


class QueryConfig(BaseModel):
    """Query paging settings."""

    max_item_count: int = Field(default=QueryDefaults.MAX_ITEM_COUNT, ge=1)
    use_query_options: bool = Field(default=QueryDefaults.USE_QUERY_OPTIONS)

    @classmethod
    def from_environment(cls) -> "QueryConfig":
        try:
            return cls(
                max_item_count=int(os.environ.get("QUERY_MAX_ITEM_COUNT", str(QueryDefaults.MAX_ITEM_COUNT))),
                use_query_options=os.environ.get("QUERY_USE_OPTIONS", "false").lower() == "true",
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid query configuration: {e}") from e
