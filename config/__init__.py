"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── cosmos_config.py         # Cosmos DB account, container, retry policy
    ├── import_config.py         # Bulk import and query paging
    └── defaults.py              # Default values

Usage:
    from config import get_config
    config = get_config()
    container = config.cosmos.container_name
"""

from typing import Optional

from .defaults import CosmosDefaults, ImportDefaults, QueryDefaults
from .cosmos_config import CosmosConfig
from .import_config import ImportConfig, QueryConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Raises:
        ConfigurationError: Required environment variables missing
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton (tests, environment changes)."""
    global _config_instance
    _config_instance = None


__all__ = [
    'AppConfig',
    'CosmosConfig',
    'ImportConfig',
    'QueryConfig',
    'CosmosDefaults',
    'ImportDefaults',
    'QueryDefaults',
    'get_config',
    'reset_config',
]
