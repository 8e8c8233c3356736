"""
Overflow Projector Module
Runs the growth, series, overflow and severity steps for one prediction
"""

import os
from dataclasses import dataclass
from typing import Dict, List

from .growth_model import GrowthModel
from .overflow_estimator import (
    INT32_MAX,
    OverflowEstimator,
    OverflowForecast,
    usage_status,
)
from .series_generator import DEFAULT_FLOOR_VALUE, Sample, SeriesGenerator
from .severity import MITIGATION_STEPS, SeverityTier, classify, tier_to_dict


@dataclass(frozen=True)
class OverflowReport:
    """Everything the dashboard renders for one table"""

    current_max_id: int
    predicted_max_id_in_30_days: int
    growth_rate: float
    series: List[Sample]
    forecast: OverflowForecast
    tier: SeverityTier
    overflow_percentage: int
    remaining_capacity: int
    ceiling: int

    @property
    def warning_threshold(self) -> float:
        return 0.9 * self.ceiling

    def to_dict(self) -> Dict:
        return {
            "current_max_id": self.current_max_id,
            "predicted_max_id_in_30_days": self.predicted_max_id_in_30_days,
            "growth_rate_per_day": self.growth_rate,
            "series": [sample.to_dict() for sample in self.series],
            "forecast": self.forecast.to_dict(),
            "severity": tier_to_dict(self.tier),
            "usage": {
                "percentage": self.overflow_percentage,
                "status": usage_status(self.overflow_percentage),
                "remaining_capacity": self.remaining_capacity,
            },
            "thresholds": {
                "ceiling": self.ceiling,
                "warning": self.warning_threshold,
            },
            "mitigation_steps": [dict(step) for step in MITIGATION_STEPS],
        }


class OverflowProjector:
    """Projects max ID growth and overflow risk from a 30-day prediction"""

    def __init__(self, ceiling: int = INT32_MAX, floor_value: int = DEFAULT_FLOOR_VALUE):
        """
        Initialize projector

        Args:
            ceiling: Maximum representable ID value
            floor_value: Lower clamp for back-filled chart values
        """
        self.ceiling = ceiling
        self.growth_model = GrowthModel()
        self.series_generator = SeriesGenerator(floor_value=floor_value)
        self.estimator = OverflowEstimator(ceiling=ceiling)

    @classmethod
    def from_environment(cls) -> "OverflowProjector":
        return cls(floor_value=int(os.getenv("SERIES_FLOOR_VALUE", DEFAULT_FLOOR_VALUE)))

    def project(self, current_max_id: int, predicted_max_id_in_30_days: int) -> OverflowReport:
        """
        Build a full overflow report

        Args:
            current_max_id: Current max ID of the table
            predicted_max_id_in_30_days: Predicted max ID 30 days out

        Returns:
            OverflowReport
        """
        growth_rate = self.growth_model.compute_growth_rate(current_max_id, predicted_max_id_in_30_days)
        series = self.series_generator.generate_series(current_max_id, growth_rate)
        forecast = self.estimator.estimate_days_until_overflow(
            current_max_id, predicted_max_id_in_30_days, growth_rate
        )

        return OverflowReport(
            current_max_id=current_max_id,
            predicted_max_id_in_30_days=predicted_max_id_in_30_days,
            growth_rate=growth_rate,
            series=series,
            forecast=forecast,
            tier=classify(forecast),
            overflow_percentage=self.estimator.overflow_percentage(current_max_id),
            remaining_capacity=self.estimator.remaining_capacity(current_max_id),
            ceiling=self.ceiling,
        )
