"""
Seed data -- a small in-memory ride-share graph for local runs and reviewers.

Run standalone to print the seeded dispatcher and per-driver totals:
    python seed.py

Creates:
  - 8 riders, 4 of whom also drive
  - 9 completed trips spread over two days
"""

from datetime import datetime, timezone

from src.config import settings
from src.domain.pricing import PayoutPolicy
from src.services.dispatcher import TripDispatcher


def _at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2016, 4, day, hour, minute, tzinfo=timezone.utc)


RIDERS = [
    {"id": 1, "name": "Nina Hintz Sr.", "phone": "560.815.3059"},
    {"id": 2, "name": "Kaia Klocko", "phone": "(392) 217-0777"},
    {"id": 3, "name": "Simone Hackett", "phone": "360-882-7181"},
    {"id": 4, "name": "Ms. Ilene Marvin", "phone": "(808) 640-6254 x6516"},
    {"id": 5, "name": "Lavern Kohler", "phone": "1-437-583-8441"},
    {"id": 6, "name": "Ramiro Cassin", "phone": "(614) 324-5734"},
    {"id": 7, "name": "Kristy Wolff", "phone": "1-555-211-0312"},
    {"id": 8, "name": "Destini Koss", "phone": "(234) 561-9021"},
]

DRIVERS = [
    {"id": 5, "vehicle_id": "1C9EVBRM0YBC564DZ", "status": "AVAILABLE"},
    {"id": 6, "vehicle_id": "1B9WEX2R92R12900E", "status": "AVAILABLE"},
    {"id": 7, "vehicle_id": "1FDLR2N51DV7K4RJS", "status": "UNAVAILABLE"},
    {"id": 8, "vehicle_id": "1HTP1D2S6FS0NZTJ2", "status": "AVAILABLE"},
]

TRIPS = [
    {"id": 1, "passenger_id": 1, "driver_id": 5, "start_time": _at(5, 9, 0), "end_time": _at(5, 9, 25), "cost": 18.40, "rating": 5},
    {"id": 2, "passenger_id": 2, "driver_id": 6, "start_time": _at(5, 9, 10), "end_time": _at(5, 9, 52), "cost": 27.10, "rating": 4},
    {"id": 3, "passenger_id": 3, "driver_id": 7, "start_time": _at(5, 10, 5), "end_time": _at(5, 10, 31), "cost": 14.75, "rating": 3},
    {"id": 4, "passenger_id": 4, "driver_id": 5, "start_time": _at(5, 13, 0), "end_time": _at(5, 13, 40), "cost": 22.00, "rating": 4},
    {"id": 5, "passenger_id": 1, "driver_id": 8, "start_time": _at(5, 17, 15), "end_time": _at(5, 17, 48), "cost": 19.95, "rating": 5},
    {"id": 6, "passenger_id": 5, "driver_id": 6, "start_time": _at(6, 8, 0), "end_time": _at(6, 8, 20), "cost": 12.30, "rating": 2},
    {"id": 7, "passenger_id": 2, "driver_id": 8, "start_time": _at(6, 11, 30), "end_time": _at(6, 12, 10), "cost": 31.60, "rating": 5},
    {"id": 8, "passenger_id": 3, "driver_id": 5, "start_time": _at(6, 14, 0), "end_time": _at(6, 14, 18), "cost": 9.80, "rating": 3},
    {"id": 9, "passenger_id": 6, "driver_id": 7, "start_time": _at(6, 18, 45), "end_time": _at(6, 19, 20), "cost": 24.50, "rating": 4},
]


def build_dispatcher(payout: PayoutPolicy | None = None) -> TripDispatcher:
    return TripDispatcher(RIDERS, DRIVERS, TRIPS, payout=payout)


def main():
    dispatcher = build_dispatcher(PayoutPolicy.from_settings(settings))
    print(f"Seeded {dispatcher!r}")
    for driver in dispatcher.drivers:
        print(
            f"  Driver {driver.id} ({driver.status.value}): "
            f"{len(driver.driven_trips)} trips, "
            f"rating {driver.average_rating()}, "
            f"revenue ${driver.total_revenue():.2f}"
        )


if __name__ == "__main__":
    main()
