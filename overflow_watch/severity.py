"""
Severity Classifier Module
Maps days until overflow onto ordered risk tiers and their alert copy
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

from .overflow_estimator import OverflowForecast


class SeverityTier(Enum):
    """Risk tiers, most severe first"""

    CRITICAL = "critical"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"

    @property
    def rank(self) -> int:
        return list(SeverityTier).index(self)

    @property
    def info(self) -> "TierInfo":
        return TIER_TABLE[self]


@dataclass(frozen=True)
class TierInfo:
    max_days: Optional[int]
    title: str
    description: str
    alert_type: str
    action: Optional[str] = None


TIER_TABLE: Mapping[SeverityTier, TierInfo] = MappingProxyType({
    SeverityTier.CRITICAL: TierInfo(
        max_days=7,
        title="Critical Overflow Risk",
        description="Integer overflow is imminent. Immediate action required to prevent data corruption.",
        alert_type="error",
        action="Mitigate Now",
    ),
    SeverityTier.HIGH: TierInfo(
        max_days=30,
        title="High Overflow Risk",
        description="Integer overflow projected within 30 days. Plan mitigation steps soon.",
        alert_type="warning",
    ),
    SeverityTier.MODERATE: TierInfo(
        max_days=90,
        title="Moderate Overflow Risk",
        description="Integer overflow projected within 3 months. Add this to your planned work.",
        alert_type="info",
    ),
    SeverityTier.LOW: TierInfo(
        max_days=None,
        title="Low Overflow Risk",
        description="No imminent risk of integer overflow. Continue monitoring.",
        alert_type="success",
    ),
})

MITIGATION_STEPS: Tuple[Mapping[str, str], ...] = (
    MappingProxyType({"step": "Change ID column to BIGINT", "difficulty": "Medium", "impact": "None"}),
    MappingProxyType({"step": "Implement ID reset with offset", "difficulty": "Hard", "impact": "Medium"}),
    MappingProxyType({"step": "Partition the table", "difficulty": "Hard", "impact": "Low"}),
    MappingProxyType({"step": "Implement UUID instead of sequential IDs", "difficulty": "Hard", "impact": "High"}),
)


def classify(days_until_overflow: Union[OverflowForecast, int, None]) -> SeverityTier:
    """
    Classify overflow risk

    Args:
        days_until_overflow: A forecast, a day count, or None for safe

    Returns:
        The first tier whose threshold covers the day count, LOW when safe
    """
    if isinstance(days_until_overflow, OverflowForecast):
        days_until_overflow = days_until_overflow.days_until_overflow

    if days_until_overflow is None:
        return SeverityTier.LOW

    for tier, info in TIER_TABLE.items():
        if info.max_days is not None and days_until_overflow <= info.max_days:
            return tier
    return SeverityTier.LOW


def tier_to_dict(tier: SeverityTier) -> Dict[str, object]:
    info = tier.info
    return {
        "tier": tier.name,
        "title": info.title,
        "description": info.description,
        "alert_type": info.alert_type,
        "action": info.action,
    }
