"""
Pydantic Schemas - Dashboard Response Models

Defines the shapes returned by the API service:
- Chart rows (registrations per state, brand and month)
- Charging station records
- Filter option lists
- The dashboard envelope bundling all of the above

Usage:
    from utils.schemas import DashboardPayload

    payload = DashboardPayload(chartData=rows, stationData=stations, filters=filters)
    body = payload.model_dump(mode="json")
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_serializer

FUEL_TYPES = ("electric", "hybrid_petrol", "hybrid_diesel")


class ChartRow(BaseModel):
    """Registration count for one normalized (state, brand, month) group."""

    state: str = Field(..., min_length=1, description="Uppercased, trimmed state")
    brand: str = Field(..., min_length=1, description="Uppercased, trimmed brand")
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="Registration month (YYYY-MM)")
    registrations: int = Field(..., ge=1, description="Registrations in the group")


class StationRecord(BaseModel):
    """Charging station row, passed through as stored.

    Coordinates keep whatever type the column has; only numeric columns,
    which the driver returns as Decimal, are rendered as JSON numbers.
    """

    name: Any = None
    latitude: Any = None
    longitude: Any = None
    state: Any = None

    @field_serializer("latitude", "longitude")
    def serialize_coordinate(self, value: Any) -> Any:
        return float(value) if isinstance(value, Decimal) else value


class Filters(BaseModel):
    """Distinct filter options, each ascending."""

    brands: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    years: list[str] = Field(default_factory=list)


class DashboardPayload(BaseModel):
    """Envelope returned by GET /api/data."""

    chartData: list[ChartRow] = Field(default_factory=list)
    stationData: list[StationRecord] = Field(default_factory=list)
    filters: Filters = Field(default_factory=Filters)
