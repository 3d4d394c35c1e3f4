"""
Domain entities with business logic.

Patterns used
-------------
- **State Pattern** on ``Trip``: enforces the PENDING -> COMPLETED lifecycle.
- **Arena handles**: a ``Trip`` stores the integer ids of its passenger and
  driver, never the objects themselves, so the party <-> trip graph has no
  reference cycles.  The dispatcher resolves handles through its lookups.
- ``Rider`` and ``Driver`` are independent types that both satisfy the
  ``Passenger`` protocol; ``Driver`` adds availability, driven trips and
  the rating / revenue aggregates, and overrides ``net_expenditures``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol, Union, runtime_checkable

from .enums import DriverStatus, TRIP_TRANSITIONS, TripStatus
from .exceptions import (
    InvalidDriverStatus,
    InvalidId,
    InvalidStateTransition,
    InvalidTripData,
    InvalidTripReference,
    InvalidVehicleId,
)
from .pricing import PayoutPolicy, total_cost

VIN_LENGTH = 17
MIN_RATING, MAX_RATING = 1, 5


def check_id(value) -> int:
    """Return *value* if it is a positive integer id, else raise ``InvalidId``."""
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise InvalidId(f"ID cannot be blank or less than one (got {value!r})")
    if value <= 0:
        raise InvalidId(f"ID cannot be blank or less than one (got {value!r})")
    return value


def as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """Normalise to an aware UTC datetime; naive values are taken as UTC."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _validate_completion(
    start_time: datetime,
    end_time: datetime,
    cost: Optional[float],
    rating: Optional[int],
) -> None:
    if cost is None or rating is None:
        raise InvalidTripData("A completed trip needs end_time, cost and rating")
    if end_time < start_time:
        raise InvalidTripData(
            f"Trip cannot end ({end_time.isoformat()}) before it starts "
            f"({start_time.isoformat()})"
        )
    if cost < 0:
        raise InvalidTripData(f"Trip cost cannot be negative (got {cost})")
    if isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidTripData(
            f"Rating must be between {MIN_RATING} and {MAX_RATING} (got {rating!r})"
        )


# ── Trip ──────────────────────────────────────────────────────────────


@dataclass
class Trip:
    id: int
    passenger_id: int
    driver_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    cost: Optional[float] = None
    rating: Optional[int] = None

    def __post_init__(self) -> None:
        try:
            check_id(self.id)
            check_id(self.passenger_id)
            check_id(self.driver_id)
        except InvalidId as exc:
            raise InvalidTripData(str(exc)) from exc

        self.start_time = as_utc(self.start_time)
        self.end_time = as_utc(self.end_time)

        if self.end_time is None:
            if self.cost is not None or self.rating is not None:
                raise InvalidTripData(
                    f"Trip {self.id} is in progress but already has a cost or rating"
                )
        else:
            _validate_completion(self.start_time, self.end_time, self.cost, self.rating)

    @property
    def status(self) -> TripStatus:
        return TripStatus.PENDING if self.end_time is None else TripStatus.COMPLETED

    @property
    def is_pending(self) -> bool:
        return self.status is TripStatus.PENDING

    def duration(self) -> float:
        """Elapsed seconds, or ``0.0`` while the trip is still in progress."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    def complete(self, end_time: datetime, cost: float, rating: int) -> None:
        """Set the completion fields if the transition is legal, else raise."""
        if TripStatus.COMPLETED not in TRIP_TRANSITIONS[self.status]:
            raise InvalidStateTransition(
                f"Cannot transition trip {self.id} from {self.status.value} "
                f"to {TripStatus.COMPLETED.value}"
            )
        end_time = as_utc(end_time)
        _validate_completion(self.start_time, end_time, cost, rating)
        self.end_time = end_time
        self.cost = cost
        self.rating = rating


def _require_trip(trip) -> Trip:
    if not isinstance(trip, Trip):
        raise InvalidTripReference(f"Expected a Trip, got {type(trip).__name__}")
    return trip


# ── Parties ───────────────────────────────────────────────────────────


@runtime_checkable
class Passenger(Protocol):
    """Anything that can request trips: riders, and drivers off shift."""

    id: int
    name: str
    phone: str
    trips: list[Trip]

    def add_trip(self, trip: Trip) -> None: ...

    def total_time_spent(self) -> float: ...

    def net_expenditures(self) -> float: ...


@dataclass
class Rider:
    id: int
    name: str = ""
    phone: str = ""
    trips: list[Trip] = field(default_factory=list)

    def __post_init__(self) -> None:
        check_id(self.id)

    def add_trip(self, trip: Trip) -> None:
        self.trips.append(_require_trip(trip))

    def total_time_spent(self) -> float:
        return sum(trip.duration() for trip in self.trips)

    def net_expenditures(self) -> float:
        return round(total_cost(trip.cost for trip in self.trips), 2)


@dataclass
class Driver:
    id: int
    vehicle_id: str
    name: str = ""
    phone: str = ""
    status: Union[DriverStatus, str, None] = None
    trips: list[Trip] = field(default_factory=list)
    driven_trips: list[Trip] = field(default_factory=list)
    payout: PayoutPolicy = field(default_factory=PayoutPolicy)

    def __post_init__(self) -> None:
        check_id(self.id)
        if not isinstance(self.vehicle_id, str) or len(self.vehicle_id) != VIN_LENGTH:
            raise InvalidVehicleId(
                f"Vehicle ID must be {VIN_LENGTH} characters (got {self.vehicle_id!r})"
            )
        self.status = self._coerce_status(self.status)

    @staticmethod
    def _coerce_status(value) -> DriverStatus:
        if value is None:
            return DriverStatus.UNAVAILABLE
        try:
            return DriverStatus(value)
        except ValueError:
            raise InvalidDriverStatus(f"Invalid driver status: {value!r}") from None

    @property
    def is_available(self) -> bool:
        return self.status is DriverStatus.AVAILABLE

    # passenger side

    def add_trip(self, trip: Trip) -> None:
        self.trips.append(_require_trip(trip))

    def total_time_spent(self) -> float:
        return sum(trip.duration() for trip in self.trips)

    def net_expenditures(self) -> float:
        """Spent as a passenger minus earned as a driver; negative means net income."""
        spent_as_rider = round(total_cost(trip.cost for trip in self.trips), 2)
        return round(spent_as_rider - self.total_revenue(), 2)

    # driver side

    def add_driven_trip(self, trip: Trip) -> None:
        self.driven_trips.append(_require_trip(trip))

    def average_rating(self) -> float:
        """Mean rating over rated driven trips, rounded to 2 places; 0 if none."""
        ratings = [trip.rating for trip in self.driven_trips if trip.rating is not None]
        if not ratings:
            return 0
        return round(sum(ratings) / len(ratings), 2)

    def total_revenue(self) -> float:
        gross = total_cost(trip.cost for trip in self.driven_trips)
        return self.payout.revenue(gross, len(self.driven_trips))

    def has_pending_trip(self) -> bool:
        return any(trip.is_pending for trip in self.driven_trips)

    def last_active_at(self) -> Optional[datetime]:
        """End time of the most recently completed driven trip."""
        ends = [trip.end_time for trip in self.driven_trips if trip.end_time is not None]
        return max(ends) if ends else None


def link_trip(trip: Trip, passenger: Passenger, driver: Driver) -> None:
    """Record *trip* in both parties' histories."""
    driver.add_driven_trip(trip)
    passenger.add_trip(trip)
