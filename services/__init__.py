"""
Services Package.

Exports:
    load_records, import_records: Dataset loading and bulk import
    ProvisioningService, build_indexing_policy: Resource setup
    QueryService: Spatial query execution
"""

from .data_import import load_records, import_records
from .provisioning import ProvisioningService, build_indexing_policy
from .query_service import QueryService

__all__ = [
    'load_records',
    'import_records',
    'ProvisioningService',
    'build_indexing_policy',
    'QueryService',
]
