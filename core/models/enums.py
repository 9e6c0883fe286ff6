"""
Pure Enumeration Types for Core Framework.

No business logic - pure type definitions only.

Exports:
    OutcomeStatus: Terminal state of a single document write
    SpatialType: Geometry types covered by the spatial index
    QueryScenario: Canned spatial query scenarios
"""

from enum import Enum


class OutcomeStatus(Enum):
    """
    Terminal status of one submitted upsert.

    There is no intermediate state: an outcome exists only once the
    store call has returned or raised.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SpatialType(str, Enum):
    """GeoJSON geometry types indexed on /geolocation/*."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"


class QueryScenario(str, Enum):
    """
    Canned spatial query scenarios.

    Values double as console subcommand arguments.
    """

    PROXIMITY = "proximity"
    POLYGON = "polygon"
    VALIDATE = "validate"
    VALIDATE_DETAILED = "validate-detailed"
