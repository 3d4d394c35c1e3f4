"""
Driver Payout Policy
====================

Formula
-------
Revenue = (Gross_Fares - Trip_Count x Platform_Fee) x Driver_Share

* **Platform_Fee**: flat fee withheld per driven trip (default $1.65),
  charged for pending trips as well.
* **Driver_Share**: fraction of the remainder paid to the driver
  (default 80 %).

Complexity: O(n) over the driven trips, O(1) per revenue calculation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

PLATFORM_FEE = 1.65
DRIVER_SHARE = 0.80


def total_cost(costs: Iterable[Optional[float]]) -> float:
    """Sum fares, counting an absent cost (trip in progress) as zero."""
    return sum((cost or 0.0) for cost in costs)


@dataclass(frozen=True)
class PayoutPolicy:
    platform_fee: float = PLATFORM_FEE
    driver_share: float = DRIVER_SHARE

    def revenue(self, gross: float, trip_count: int) -> float:
        return round((gross - trip_count * self.platform_fee) * self.driver_share, 2)

    @classmethod
    def from_settings(cls, settings) -> PayoutPolicy:
        return cls(
            platform_fee=settings.platform_fee,
            driver_share=settings.driver_payout_share,
        )
