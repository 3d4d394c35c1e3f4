"""
Shared test fixtures.

A small ride-share graph built in memory:

* riders 1-6; riders 4, 5 and 6 also drive
* driver 4 -- AVAILABLE, drove trips 1 and 2, idle since T0 + 2h30m
* driver 5 -- AVAILABLE, drove trip 3, idle since T0 + 45m
* driver 6 -- UNAVAILABLE, never driven
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.services.dispatcher import TripDispatcher

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
NOW = T0 + timedelta(hours=5)

VIN_4 = "1C9EVBRM0YBC564DZ"
VIN_5 = "1B9WEX2R92R12900E"
VIN_6 = "1FDLR2N51DV7K4RJS"

RIDERS = [
    {"id": i, "name": f"Rider {i}", "phone": f"555-010{i}"} for i in range(1, 7)
]

DRIVERS = [
    {"id": 4, "vehicle_id": VIN_4, "status": "AVAILABLE"},
    {"id": 5, "vehicle_id": VIN_5, "status": "AVAILABLE"},
    {"id": 6, "vehicle_id": VIN_6, "status": "UNAVAILABLE"},
]

TRIPS = [
    {
        "id": 1, "passenger_id": 1, "driver_id": 4,
        "start_time": T0, "end_time": T0 + timedelta(hours=1),
        "cost": 10.0, "rating": 3,
    },
    {
        "id": 2, "passenger_id": 2, "driver_id": 4,
        "start_time": T0 + timedelta(hours=2), "end_time": T0 + timedelta(hours=2, minutes=30),
        "cost": 20.0, "rating": 5,
    },
    {
        "id": 3, "passenger_id": 4, "driver_id": 5,
        "start_time": T0, "end_time": T0 + timedelta(minutes=45),
        "cost": 12.5, "rating": 4,
    },
]


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def dispatcher() -> TripDispatcher:
    return TripDispatcher(RIDERS, DRIVERS, TRIPS, clock=fixed_clock)


@pytest.fixture
def empty_dispatcher() -> TripDispatcher:
    return TripDispatcher(clock=fixed_clock)
