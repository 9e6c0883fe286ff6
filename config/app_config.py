"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - CosmosConfig (account, database, container, retry policy)
    - ImportConfig (dataset path, worker pool)
    - QueryConfig (paging)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

from pydantic import BaseModel, Field

from .cosmos_config import CosmosConfig
from .import_config import ImportConfig, QueryConfig


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.

    Usage:
        config = AppConfig.from_environment()
        config.cosmos.container_name
        config.data_import.max_workers
    """

    cosmos: CosmosConfig
    data_import: ImportConfig = Field(default_factory=ImportConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @classmethod
    def from_environment(cls) -> "AppConfig":
        """Load every domain config from environment variables."""
        return cls(
            cosmos=CosmosConfig.from_environment(),
            data_import=ImportConfig.from_environment(),
            query=QueryConfig.from_environment(),
        )
