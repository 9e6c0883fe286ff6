"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    Document, Geolocation, SpatialRecord: Record models
    OutcomeStatus, SpatialType, QueryScenario: Enums
    UpsertOutcome, BatchResult, QueryResult, SetupReport: Result types
"""

from .enums import (
    OutcomeStatus,
    SpatialType,
    QueryScenario
)

from .document import (
    Document,
    Geolocation,
    SpatialRecord
)

from .results import (
    UpsertOutcome,
    BatchResult,
    QueryResult,
    SetupReport
)

__all__ = [
    'OutcomeStatus',
    'SpatialType',
    'QueryScenario',
    'Document',
    'Geolocation',
    'SpatialRecord',
    'UpsertOutcome',
    'BatchResult',
    'QueryResult',
    'SetupReport',
]
