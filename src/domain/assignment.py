"""
Longest-Idle Driver Assignment
==============================

1. **Eligibility**  -- keep drivers whose status is AVAILABLE and whose id
   differs from the requesting rider's id (a party never drives its own
   request).  Collection order is preserved.
2. **Fresh drivers first** -- the first eligible driver that has never
   driven a trip wins outright.
3. **Longest idle** -- otherwise, stable-sort the eligible drivers by the
   end time of their most recently completed driven trip and take the
   head.  Ties keep collection order.

A driver with an in-progress driven trip, or with no completed trip at all,
has no measurable idle time and sorts after every driver that has one.

Complexity
----------
Let D = drivers, T = driven trips across eligible drivers.

* Eligibility:   O(D)
* Fresh check:   O(D)
* Idle sort:     O(T + D log D)

The functions here are pure: they never flip a driver's status.  The
dispatcher does that inside the same critical section as trip creation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from .entities import Driver
from .exceptions import NoAvailableDrivers


def eligible_drivers(
    drivers: Iterable[Driver], exclude_id: Optional[int] = None
) -> list[Driver]:
    """Return AVAILABLE drivers other than *exclude_id*, in collection order."""
    eligible = []

    for driver in drivers:
        if not driver.is_available:
            continue

        if exclude_id is not None and driver.id == exclude_id:
            continue

        eligible.append(driver)

    return eligible


def idle_sort_key(driver: Driver) -> tuple[int, datetime]:
    """Sort key putting the longest-idle driver first."""
    last_active = driver.last_active_at()
    if last_active is None or driver.has_pending_trip():
        return (1, datetime.max)
    return (0, last_active.replace(tzinfo=None))


def choose_driver(
    drivers: Iterable[Driver], exclude_id: Optional[int] = None
) -> Driver:
    """Pick the driver for a new trip request, or raise ``NoAvailableDrivers``."""
    eligible = eligible_drivers(drivers, exclude_id)
    if not eligible:
        raise NoAvailableDrivers("There are no available drivers")

    for driver in eligible:
        if not driver.driven_trips:
            return driver

    return sorted(eligible, key=idle_sort_key)[0]
