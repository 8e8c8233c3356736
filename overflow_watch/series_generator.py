"""
Series Generator Module
Builds the historical and projected max ID points shown on the growth chart
"""

from dataclasses import dataclass
from typing import Dict, List, Union

DEFAULT_FLOOR_VALUE = 1_000_000_000

PAST_POINTS = 6
PAST_STEP_DAYS = 6
FUTURE_POINTS = 7
FUTURE_STEP_DAYS = 5


@dataclass(frozen=True)
class Sample:
    """One point of the max ID chart"""

    value: Union[int, float]
    offset_days: int
    is_projected: bool
    label: str

    @property
    def kind(self) -> str:
        return "Projected" if self.is_projected else "Historical"

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.label,
            "max_id": self.value,
            "days_from_now": self.offset_days,
            "projected": self.is_projected,
            "kind": self.kind,
            "axis_label": format_axis_value(self.value),
        }


class SeriesGenerator:
    """Generates a fixed-shape series of past estimates and future projections"""

    def __init__(self, floor_value: int = DEFAULT_FLOOR_VALUE):
        """
        Initialize series generator

        Args:
            floor_value: Lower clamp for back-filled historical values
        """
        self.floor_value = floor_value

    def generate_series(self, current_value: int, growth_rate: float) -> List[Sample]:
        """
        Generate chart samples around the current max ID

        Historical points are back-filled from the growth rate every 6 days
        starting 30 days ago and never drop below the floor. The last of them
        shares day 0 with the "Today" point, which always carries the exact
        current value. Projected points every 5 days up to 35 days out are not
        clamped, so values above the 32-bit ceiling stay visible on the chart.

        Args:
            current_value: Current max ID
            growth_rate: IDs added per day

        Returns:
            14 samples in chart order, non-decreasing in day offset
        """
        past = []
        for i in range(PAST_POINTS):
            offset = -30 + i * PAST_STEP_DAYS
            past.append(Sample(
                value=max(current_value - growth_rate * (30 - i * PAST_STEP_DAYS), self.floor_value),
                offset_days=offset,
                is_projected=False,
                label=f"Day {offset}",
            ))

        today = Sample(value=current_value, offset_days=0, is_projected=False, label="Today")

        future = []
        for i in range(FUTURE_POINTS):
            offset = (i + 1) * FUTURE_STEP_DAYS
            future.append(Sample(
                value=current_value + growth_rate * offset,
                offset_days=offset,
                is_projected=True,
                label=f"Day {offset}",
            ))

        return past + [today] + future


def format_axis_value(value: float) -> str:
    """Abbreviate large chart values, e.g. 2.0B or 1.5M"""
    if value >= 1_000_000_000:
        return f"{value / 1_000_000_000:.1f}B"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    return str(value)
