"""Domain enumerations and state-transition rules."""

import enum


class DriverStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


class TripStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


# State machine: maps current status -> set of valid next statuses
TRIP_TRANSITIONS: dict[TripStatus, set[TripStatus]] = {
    TripStatus.PENDING: {TripStatus.COMPLETED},
    TripStatus.COMPLETED: set(),
}
