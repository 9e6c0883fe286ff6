"""
Repository Factory - Central Creation Point

Single point of repository instantiation. Services receive the store they
work against instead of reaching for a process-wide client.

Exports:
    RepositoryFactory: Static factory methods for document stores
"""

from typing import Optional

from config import CosmosConfig, get_config
from util_logger import LoggerFactory, ComponentType
from .cosmos import CosmosRepository

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


# ============================================================================
# REPOSITORY FACTORY - Central creation point
# ============================================================================

class RepositoryFactory:
    """
    Factory for creating repository instances.

    Design Philosophy:
    - Single factory for all repository types
    - Configuration-driven repository construction
    - Caller owns the returned repository
    """

    @staticmethod
    def create_cosmos_repository(config: Optional[CosmosConfig] = None) -> CosmosRepository:
        """
        Create a Cosmos DB repository.

        Args:
            config: Cosmos settings (loaded from environment if not provided)

        Returns:
            CosmosRepository bound to the configured database/container

        Example:
            store = RepositoryFactory.create_cosmos_repository()
            store.verify()
        """
        cosmos_config = config or get_config().cosmos
        logger.info(
            f"🏭 Creating CosmosRepository for {cosmos_config.database_name}/{cosmos_config.container_name}"
        )
        logger.debug(f"  Managed identity auth: {cosmos_config.uses_managed_identity}")
        return CosmosRepository(cosmos_config)


__all__ = ['RepositoryFactory']
