"""
Canned Spatial Queries.

Builds the four demo queries against the meteorite-landing container. The
geometries travel as query parameters rather than being spliced into the SQL
text, so the text stays constant and the coordinates stay valid JSON.

Scenarios:
    PROXIMITY         ST_DISTANCE from a point below a radius (meters)
    POLYGON           ST_WITHIN a polygon
    VALIDATE          ST_ISVALID on a point
    VALIDATE_DETAILED ST_ISVALIDDETAILED on a polygon whose ring is not closed

Exports:
    SpatialQuery: Query text plus parameters
    point, polygon: GeoJSON geometry helpers
    proximity_query, polygon_query, validate_query, validate_detailed_query
    build_query: Scenario dispatch
"""

import json
from typing import Any, Dict, List, Sequence
from pydantic import BaseModel, Field

from config.defaults import QueryDefaults
from core.models import QueryScenario, SpatialType


# Reference geometries from the demo dataset (lon, lat)
DEMO_POINT = [118.99, 32.94667]
DEMO_RING = [[118.99, 32.94667], [32, -5], [32, -4.7], [31.8, -4.7], [118.99, 32.94667]]
# Last vertex differs from the first - deliberately invalid
UNCLOSED_RING = [[118.99, 32.94667], [32, -5], [32, -4.7], [31.8, -4.7], [117, 32.94667]]


class SpatialQuery(BaseModel):
    """Parameterized query for a document store."""

    scenario: QueryScenario
    description: str
    query_text: str
    parameters: List[Dict[str, Any]] = Field(default_factory=list)

    def rendered(self) -> str:
        """Query text with parameter values inlined, for display only."""
        text = self.query_text
        # Longest names first so @a never clobbers @ab
        for param in sorted(self.parameters, key=lambda p: len(p['name']), reverse=True):
            text = text.replace(param['name'], json.dumps(param['value']))
        return text


def point(coordinates: Sequence[float]) -> Dict[str, Any]:
    return {'type': SpatialType.POINT.value, 'coordinates': list(coordinates)}


def polygon(ring: Sequence[Sequence[float]]) -> Dict[str, Any]:
    """Single-ring polygon."""
    return {'type': SpatialType.POLYGON.value, 'coordinates': [[list(v) for v in ring]]}


def proximity_query(
    coordinates: Sequence[float] = DEMO_POINT,
    distance_meters: float = QueryDefaults.PROXIMITY_DISTANCE_METERS
) -> SpatialQuery:
    return SpatialQuery(
        scenario=QueryScenario.PROXIMITY,
        description="Perform a proximity query against spatial data",
        query_text="SELECT * FROM c WHERE ST_DISTANCE(c.geolocation, @point) < @distance",
        parameters=[
            {'name': '@point', 'value': point(coordinates)},
            {'name': '@distance', 'value': distance_meters},
        ]
    )


def polygon_query(ring: Sequence[Sequence[float]] = DEMO_RING) -> SpatialQuery:
    return SpatialQuery(
        scenario=QueryScenario.POLYGON,
        description="Perform a query to check if a point lies within a Polygon",
        query_text="SELECT * FROM c WHERE ST_WITHIN(c.geolocation, @polygon)",
        parameters=[{'name': '@polygon', 'value': polygon(ring)}]
    )


def validate_query(coordinates: Sequence[float] = DEMO_POINT) -> SpatialQuery:
    return SpatialQuery(
        scenario=QueryScenario.VALIDATE,
        description="Perform a query to check if a spatial object is valid",
        query_text="SELECT ST_ISVALID(@geometry) AS isValid",
        parameters=[{'name': '@geometry', 'value': point(coordinates)}]
    )


def validate_detailed_query(ring: Sequence[Sequence[float]] = UNCLOSED_RING) -> SpatialQuery:
    return SpatialQuery(
        scenario=QueryScenario.VALIDATE_DETAILED,
        description="Perform a query to validate a Polygon that is not closed",
        query_text="SELECT ST_ISVALIDDETAILED(@geometry) AS validation",
        parameters=[{'name': '@geometry', 'value': polygon(ring)}]
    )


_BUILDERS = {
    QueryScenario.PROXIMITY: proximity_query,
    QueryScenario.POLYGON: polygon_query,
    QueryScenario.VALIDATE: validate_query,
    QueryScenario.VALIDATE_DETAILED: validate_detailed_query,
}


def build_query(scenario: QueryScenario) -> SpatialQuery:
    """Default demo query for a scenario."""
    return _BUILDERS[QueryScenario(scenario)]()


__all__ = [
    'SpatialQuery',
    'point',
    'polygon',
    'proximity_query',
    'polygon_query',
    'validate_query',
    'validate_detailed_query',
    'build_query',
    'DEMO_POINT',
    'DEMO_RING',
    'UNCLOSED_RING',
]
