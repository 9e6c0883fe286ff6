"""
Core Components.

Structure:
    models/: Pure data structures (no business logic)
    bulk_upsert.py: Bulk upsert pipeline
    spatial_queries.py: Canned spatial queries

Exports:
    BulkUpsertPipeline, run_bulk, partition_key_from_field
    SpatialQuery, build_query
"""

# Make subpackages available first (no circular dependencies)
from . import models

# bulk_upsert depends on infrastructure, which depends on core.models -
# imported on first access via __getattr__
_LAZY_IMPORTS = {
    'BulkUpsertPipeline': '.bulk_upsert',
    'OutcomeCollector': '.bulk_upsert',
    'run_bulk': '.bulk_upsert',
    'partition_key_from_field': '.bulk_upsert',
    'SpatialQuery': '.spatial_queries',
    'build_query': '.spatial_queries',
}


def __getattr__(name):
    """Lazy import core classes to avoid circular dependencies."""
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package='core')
        return getattr(module, name)
    raise AttributeError(f"module 'core' has no attribute '{name}'")


__all__ = ['models'] + list(_LAZY_IMPORTS)
