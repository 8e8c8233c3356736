"""
Overflow Estimator Module
Estimates how many days remain before a 32-bit ID column overflows
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

from .growth_model import HORIZON_DAYS

LOGGER = logging.getLogger("overflow_watch.estimator")

INT32_MAX = 2_147_483_647
INT64_MAX = 9_223_372_036_854_775_807
WARNING_THRESHOLD = 0.9 * INT32_MAX

DEGENERATE_INPUT = "degenerate_input"


@dataclass(frozen=True)
class OverflowForecast:
    """Either a day count until overflow or a safe (no overflow) result"""

    days_until_overflow: Optional[int]
    current_value: int
    ceiling: int = INT32_MAX
    reason: Optional[str] = None

    @classmethod
    def safe(cls, current_value: int, ceiling: int = INT32_MAX,
             reason: Optional[str] = None) -> "OverflowForecast":
        return cls(days_until_overflow=None, current_value=current_value,
                   ceiling=ceiling, reason=reason)

    @classmethod
    def days(cls, days: int, current_value: int, ceiling: int = INT32_MAX) -> "OverflowForecast":
        return cls(days_until_overflow=days, current_value=current_value, ceiling=ceiling)

    @property
    def is_safe(self) -> bool:
        return self.days_until_overflow is None

    @property
    def display(self) -> str:
        return "Safe" if self.is_safe else str(self.days_until_overflow)

    def to_dict(self) -> Dict[str, object]:
        return {
            "days_until_overflow": self.days_until_overflow,
            "display": self.display,
            "safe": self.is_safe,
            "reason": self.reason,
            "current_value": self.current_value,
            "ceiling": self.ceiling,
        }


class OverflowEstimator:
    """Computes time-to-overflow and usage figures against an integer ceiling"""

    def __init__(self, ceiling: int = INT32_MAX):
        self.ceiling = ceiling

    def estimate_days_until_overflow(self,
                                     current_value: int,
                                     predicted_value_in_30_days: int,
                                     growth_rate: float,
                                     ceiling: Optional[int] = None) -> OverflowForecast:
        """
        Estimate days until the max ID passes the ceiling

        A prediction at or below the ceiling is safe. A prediction above the
        ceiling without a positive increase over the current value cannot be
        extrapolated and is reported as safe with a degenerate_input reason.

        Args:
            current_value: Current max ID
            predicted_value_in_30_days: Predicted max ID 30 days out
            growth_rate: IDs added per day
            ceiling: Overflow ceiling (defaults to the estimator's ceiling)

        Returns:
            OverflowForecast
        """
        if ceiling is None:
            ceiling = self.ceiling

        if predicted_value_in_30_days <= ceiling:
            return OverflowForecast.safe(current_value, ceiling)

        increase = predicted_value_in_30_days - current_value
        if increase <= 0 or growth_rate <= 0:
            LOGGER.warning(
                "Prediction %s exceeds ceiling %s without positive growth from %s; treating as safe",
                predicted_value_in_30_days, ceiling, current_value,
            )
            return OverflowForecast.safe(current_value, ceiling, reason=DEGENERATE_INPUT)

        days = math.floor(HORIZON_DAYS * (ceiling - current_value) / increase)
        return OverflowForecast.days(days, current_value, ceiling)

    def overflow_percentage(self, current_value: int, ceiling: Optional[int] = None) -> int:
        """Share of the ID space already used, rounded half up and capped at 100"""
        if ceiling is None:
            ceiling = self.ceiling
        percentage = current_value / ceiling * 100
        return min(math.floor(percentage + 0.5), 100)

    def remaining_capacity(self, current_value: int, ceiling: Optional[int] = None) -> int:
        if ceiling is None:
            ceiling = self.ceiling
        return ceiling - current_value


def usage_status(percentage: int) -> str:
    """Gauge treatment for an overflow percentage"""
    if percentage > 90:
        return "exception"
    if percentage > 70:
        return "normal"
    return "success"
