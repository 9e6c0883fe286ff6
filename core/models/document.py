"""
Document Models.

Records are schema-less documents: a mapping from field name to a JSON value.
SpatialRecord describes the meteorite-landing dataset loosely enough that any
extra field survives validation untouched.

Exports:
    Document: Type alias for a schema-less record
    Geolocation: GeoJSON geometry attached to a record
    SpatialRecord: Permissive model of one meteorite-landing record
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import SpatialType


Document = Dict[str, Any]

Coordinates = Union[List[float], List[List[float]], List[List[List[float]]], List[List[List[List[float]]]]]


class Geolocation(BaseModel):
    """
    GeoJSON geometry.

    The dataset only contains Points, but any type the spatial index covers
    is accepted.
    """

    model_config = ConfigDict(extra="allow")

    type: SpatialType = Field(..., description="GeoJSON geometry type")
    coordinates: Coordinates = Field(..., description="GeoJSON coordinates (lon, lat order)")

    @field_validator('coordinates')
    @classmethod
    def validate_point_coordinates(cls, v, info):
        if info.data.get('type') == SpatialType.POINT and (len(v) < 2 or not all(isinstance(c, (int, float)) for c in v)):
            raise ValueError(f"Point coordinates must be [lon, lat], got {v!r}")
        return v


class SpatialRecord(BaseModel):
    """
    One meteorite-landing record.

    Only id is required. year is the partition key; a record without it is
    still loaded so the upsert pipeline can report it as a failed outcome.
    All measurement fields stay strings, the way the source dataset stores them.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Application-supplied document id")
    name: Optional[str] = None
    nametype: Optional[str] = None
    recclass: Optional[str] = None
    mass: Optional[str] = None
    fall: Optional[str] = None
    year: Optional[str] = Field(default=None, description="Partition key value")
    reclat: Optional[str] = None
    reclong: Optional[str] = None
    geolocation: Optional[Geolocation] = None

    def to_document(self) -> Document:
        """Plain dict for the store, unset optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)
