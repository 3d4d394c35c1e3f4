"""
Input records for the dispatcher's construction contract.

An external loader (CSV, database, fixture) parses its source into these
models; the dispatcher accepts them or plain mappings with the same keys.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, TypeVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.domain.enums import DriverStatus


class RiderRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = ""
    phone: str = ""


class DriverRecord(BaseModel):
    """A driver is a specialised rider: name and phone come from the rider record."""

    model_config = ConfigDict(frozen=True)

    id: int
    vehicle_id: str = Field(..., validation_alias=AliasChoices("vehicle_id", "vin"))
    status: Optional[Union[DriverStatus, str]] = None


class TripRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    passenger_id: int
    driver_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    cost: Optional[float] = None
    rating: Optional[int] = None


RecordT = TypeVar("RecordT", RiderRecord, DriverRecord, TripRecord)


def coerce_record(
    model: type[RecordT], value: Union[RecordT, Mapping[str, Any]]
) -> RecordT:
    """Validate a plain mapping into *model*; records pass through untouched."""
    if isinstance(value, model):
        return value
    return model.model_validate(value)

