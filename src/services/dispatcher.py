"""
Trip Dispatcher
===============

Owns the arena of riders, drivers and trips and is the single place where
the party <-> trip graph is mutated.

Construction
------------
1. Build a ``Rider`` per rider record.
2. Build a ``Driver`` per driver record, borrowing name and phone from the
   rider record with the same id.
3. Substitute each driver for its rider entry so no id has two parties.
4. Build each ``Trip`` and link it into its passenger's ``trips`` and its
   driver's ``driven_trips``.

Concurrency safety
------------------
``request_trip`` and ``complete_trip`` run under a re-entrant lock: driver
selection, the status flip, trip creation, linking and the append to the
trip collection form one critical section, so two requests can never be
handed the same driver when the dispatcher is shared between threads.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from src.domain.assignment import choose_driver
from src.domain.entities import Driver, Passenger, Rider, Trip, check_id, link_trip
from src.domain.enums import DriverStatus
from src.domain.exceptions import (
    DuplicatePartyId,
    InvalidTripData,
    NoAvailableDrivers,
    RiderNotFound,
    TripNotFound,
    UnknownPartyReference,
)
from src.domain.pricing import PayoutPolicy
from src.services.records import DriverRecord, RiderRecord, TripRecord, coerce_record

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
RecordLike = Union[RiderRecord, DriverRecord, TripRecord, Mapping[str, Any]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TripDispatcher:
    def __init__(
        self,
        riders: Iterable[RecordLike] = (),
        drivers: Iterable[RecordLike] = (),
        trips: Iterable[RecordLike] = (),
        *,
        clock: Optional[Clock] = None,
        payout: Optional[PayoutPolicy] = None,
    ):
        self.payout = payout or PayoutPolicy()
        self.clock: Clock = clock or utcnow
        self._lock = threading.RLock()

        self.riders: list[Passenger] = self._load_riders(riders)
        self.drivers: list[Driver] = self._load_drivers(drivers)
        self._replace_riders(self.drivers)
        self.trips: list[Trip] = self._load_trips(trips)

        logger.info("Dispatcher ready: %s", self.summary())

    # ── Construction ──────────────────────────────────────────────────

    @staticmethod
    def _load_riders(records: Iterable[RecordLike]) -> list[Passenger]:
        riders: list[Passenger] = []
        seen: set[int] = set()
        for raw in records:
            record = coerce_record(RiderRecord, raw)
            if record.id in seen:
                raise DuplicatePartyId(f"Duplicate rider id {record.id}")
            seen.add(record.id)
            riders.append(Rider(id=record.id, name=record.name, phone=record.phone))
        return riders

    def _load_drivers(self, records: Iterable[RecordLike]) -> list[Driver]:
        drivers: list[Driver] = []
        seen: set[int] = set()
        for raw in records:
            record = coerce_record(DriverRecord, raw)
            if record.id in seen:
                raise DuplicatePartyId(f"Duplicate driver id {record.id}")
            seen.add(record.id)
            rider = self.find_rider(record.id)
            if rider is None:
                raise UnknownPartyReference(
                    f"Driver {record.id} has no matching rider record"
                )
            drivers.append(
                Driver(
                    id=rider.id,
                    name=rider.name,
                    phone=rider.phone,
                    vehicle_id=record.vehicle_id,
                    status=record.status,
                    payout=self.payout,
                )
            )
        return drivers

    def _replace_riders(self, drivers: list[Driver]) -> None:
        """Swap every rider entry that is also a driver for the Driver object."""
        by_id = {driver.id: driver for driver in drivers}
        self.riders = [by_id.get(rider.id, rider) for rider in self.riders]

    def _load_trips(self, records: Iterable[RecordLike]) -> list[Trip]:
        trips: list[Trip] = []
        seen: set[int] = set()

        for raw in records:
            record = coerce_record(TripRecord, raw)
            if record.id in seen:
                raise InvalidTripData(f"Duplicate trip id {record.id}")
            if record.passenger_id == record.driver_id:
                raise InvalidTripData(
                    f"Trip {record.id}: driver {record.driver_id} cannot be its own passenger"
                )

            passenger = self.find_rider(record.passenger_id)
            if passenger is None:
                raise UnknownPartyReference(
                    f"Trip {record.id} references unknown passenger {record.passenger_id}"
                )
            driver = self.find_driver(record.driver_id)
            if driver is None:
                raise UnknownPartyReference(
                    f"Trip {record.id} references unknown driver {record.driver_id}"
                )

            trip = Trip(
                id=record.id,
                passenger_id=passenger.id,
                driver_id=driver.id,
                start_time=record.start_time,
                end_time=record.end_time,
                cost=record.cost,
                rating=record.rating,
            )
            link_trip(trip, passenger, driver)
            trips.append(trip)
            seen.add(trip.id)

        return trips

    # ── Lookups ───────────────────────────────────────────────────────

    def find_rider(self, rider_id: int) -> Optional[Passenger]:
        check_id(rider_id)
        return next((rider for rider in self.riders if rider.id == rider_id), None)

    def find_driver(self, driver_id: int) -> Optional[Driver]:
        check_id(driver_id)
        return next((driver for driver in self.drivers if driver.id == driver_id), None)

    def find_trip(self, trip_id: int) -> Optional[Trip]:
        check_id(trip_id)
        return next((trip for trip in self.trips if trip.id == trip_id), None)

    def passenger_of(self, trip: Trip) -> Passenger:
        passenger = self.find_rider(trip.passenger_id)
        if passenger is None:
            raise UnknownPartyReference(
                f"Trip {trip.id} references unknown passenger {trip.passenger_id}"
            )
        return passenger

    def driver_of(self, trip: Trip) -> Driver:
        driver = self.find_driver(trip.driver_id)
        if driver is None:
            raise UnknownPartyReference(
                f"Trip {trip.id} references unknown driver {trip.driver_id}"
            )
        return driver

    def next_trip_id(self) -> int:
        return max((trip.id for trip in self.trips), default=0) + 1

    # ── Mutations ─────────────────────────────────────────────────────

    def find_available_driver(self, rider_id: int) -> Driver:
        """
        Select a driver for *rider_id* and mark them UNAVAILABLE.

        No trip is created, so ``complete_trip`` will never free this driver;
        the caller owns the hold and must end it with ``release_driver``.
        """
        check_id(rider_id)
        with self._lock:
            driver = choose_driver(self.drivers, exclude_id=rider_id)
            driver.status = DriverStatus.UNAVAILABLE
            return driver

    def release_driver(self, driver_id: int) -> Driver:
        """Return a held driver to AVAILABLE unless they are mid-trip."""
        check_id(driver_id)
        with self._lock:
            driver = self.find_driver(driver_id)
            if driver is None:
                raise UnknownPartyReference(f"No driver with id {driver_id}")
            if not driver.has_pending_trip():
                driver.status = DriverStatus.AVAILABLE
            return driver

    def request_trip(self, rider_id: int) -> Trip:
        """Create a pending trip for *rider_id* with the longest-idle driver."""
        check_id(rider_id)
        with self._lock:
            passenger = self.find_rider(rider_id)
            if passenger is None:
                logger.warning("Trip request rejected: unknown rider %d", rider_id)
                raise RiderNotFound(f"No rider with id {rider_id}")

            try:
                driver = choose_driver(self.drivers, exclude_id=rider_id)
            except NoAvailableDrivers:
                logger.warning("Trip request rejected: no drivers for rider %d", rider_id)
                raise

            trip = Trip(
                id=self.next_trip_id(),
                passenger_id=passenger.id,
                driver_id=driver.id,
                start_time=self.clock(),
            )

            driver.status = DriverStatus.UNAVAILABLE
            link_trip(trip, passenger, driver)
            self.trips.append(trip)

        logger.info(
            "Trip %d created: rider %d assigned driver %d", trip.id, rider_id, driver.id
        )
        return trip

    def complete_trip(
        self,
        trip_id: int,
        cost: float,
        rating: int,
        end_time: Optional[datetime] = None,
    ) -> Trip:
        """Finish a pending trip and release its driver."""
        check_id(trip_id)
        with self._lock:
            trip = self.find_trip(trip_id)
            if trip is None:
                raise TripNotFound(f"No trip with id {trip_id}")

            driver = self.driver_of(trip)
            trip.complete(end_time or self.clock(), cost, rating)
            if not driver.has_pending_trip():
                driver.status = DriverStatus.AVAILABLE

        logger.info(
            "Trip %d completed: cost=%.2f rating=%d, driver %d is %s",
            trip.id,
            trip.cost,
            trip.rating,
            driver.id,
            driver.status.value,
        )
        return trip

    # ── Introspection ─────────────────────────────────────────────────

    def summary(self) -> dict[str, int]:
        return {
            "trips": len(self.trips),
            "drivers": len(self.drivers),
            "riders": len(self.riders),
        }

    def __repr__(self) -> str:
        counts = self.summary()
        return (
            f"<{type(self).__name__} {counts['trips']} trips, "
            f"{counts['drivers']} drivers, {counts['riders']} riders>"
        )
