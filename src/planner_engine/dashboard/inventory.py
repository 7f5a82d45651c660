"""
Supply forecasting for tracked supplements.

Projects how many days a consumable lasts at its daily rate and assigns
an urgency tier:

    - days_left <= 3:   CRITICAL
    - days_left <= 7:   WARNING
    - days_left <= 14:  LOW
    - otherwise:        GOOD
    - missing data:     NO_DATA

Collections are ordered by tier (critical first, no-data last), not by
the number of days remaining.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional

from planner_engine.core.config import Config
from planner_engine.core.models import Supplement


class SupplyTier(str, Enum):
    """Urgency tier of a supply forecast."""
    CRITICAL = "critical"
    WARNING = "warning"
    LOW = "low"
    GOOD = "good"
    NO_DATA = "no-data"


TIER_ORDER = {
    SupplyTier.CRITICAL: 0,
    SupplyTier.WARNING: 1,
    SupplyTier.LOW: 2,
    SupplyTier.GOOD: 3,
    SupplyTier.NO_DATA: 4,
}


@dataclass(frozen=True)
class SupplyForecast:
    """Projected depletion of one consumable."""
    days_left: Optional[int]
    run_out_date: Optional[date]
    tier: SupplyTier

    def remaining_fraction(
        self,
        total_servings: Optional[float],
        servings_per_day: Optional[float]
    ) -> Optional[float]:
        """
        Share of a full supply still left, clamped to 0..1.

        Returns None when the forecast has no data or the full supply
        would last zero days.
        """
        if self.days_left is None or total_servings is None:
            return None
        if servings_per_day is None or servings_per_day <= 0:
            return None
        total_days = total_servings / servings_per_day
        if total_days <= 0:
            return None
        return max(0.0, min(1.0, self.days_left / total_days))


NO_DATA_FORECAST = SupplyForecast(days_left=None, run_out_date=None, tier=SupplyTier.NO_DATA)


@dataclass(frozen=True)
class SupplementForecast:
    """Supplement paired with its forecast."""
    supplement: Supplement
    forecast: SupplyForecast

    @property
    def tier(self) -> SupplyTier:
        return self.forecast.tier

    @property
    def remaining_fraction(self) -> Optional[float]:
        return self.forecast.remaining_fraction(
            self.supplement.quantity_servings,
            self.supplement.servings_per_day,
        )


def tier_for_days(
    days_left: int,
    critical_days: int = 3,
    warning_days: int = 7,
    low_days: int = 14
) -> SupplyTier:
    """Map days remaining to a tier; first matching threshold wins."""
    if days_left <= critical_days:
        return SupplyTier.CRITICAL
    elif days_left <= warning_days:
        return SupplyTier.WARNING
    elif days_left <= low_days:
        return SupplyTier.LOW
    else:
        return SupplyTier.GOOD


def forecast_supply(
    total_servings: Optional[float],
    servings_per_day: Optional[float],
    today: date,
    config: Optional[Config] = None
) -> SupplyForecast:
    """
    Forecast when a supply runs out.

    Args:
        total_servings: Servings remaining, or None if unknown
        servings_per_day: Daily consumption, or None if unknown
        today: Calendar date the projection starts from
        config: Configuration holding the tier thresholds

    Returns:
        SupplyForecast, NO_DATA when either input is missing or the
        rate is not positive
    """
    if total_servings is None or servings_per_day is None or servings_per_day <= 0:
        return NO_DATA_FORECAST

    supply_days = total_servings / servings_per_day
    if not math.isfinite(supply_days):
        return NO_DATA_FORECAST

    config = config if config else Config()
    days_left = math.floor(supply_days)

    tier = tier_for_days(
        days_left,
        critical_days=config.get("supply_critical_days", "thresholds", 3),
        warning_days=config.get("supply_warning_days", "thresholds", 7),
        low_days=config.get("supply_low_days", "thresholds", 14),
    )

    try:
        run_out_date = today + timedelta(days=days_left)
    except OverflowError:
        # Beyond the calendar; nothing to show
        run_out_date = None

    return SupplyForecast(days_left=days_left, run_out_date=run_out_date, tier=tier)


def sort_by_urgency(forecasts: Iterable[SupplementForecast]) -> List[SupplementForecast]:
    """Order by tier, critical first and no-data last. Stable within a tier."""
    return sorted(forecasts, key=lambda f: TIER_ORDER[f.tier])


def forecast_supplements(
    supplements: Iterable[Supplement],
    today: date,
    config: Optional[Config] = None
) -> List[SupplementForecast]:
    """
    Forecast every supplement and order the result by urgency.

    Args:
        supplements: Supplement inventory records
        today: Calendar date the projections start from
        config: Configuration holding the tier thresholds

    Returns:
        List of SupplementForecast, most urgent first
    """
    config = config if config else Config()
    return sort_by_urgency(
        SupplementForecast(
            supplement=s,
            forecast=forecast_supply(s.quantity_servings, s.servings_per_day, today, config),
        )
        for s in supplements
    )


def restock_summary(
    forecasts: Iterable[SupplementForecast]
) -> Dict[SupplyTier, List[SupplementForecast]]:
    """Group forecasts that need attention into critical/warning/low lists."""
    summary: Dict[SupplyTier, List[SupplementForecast]] = {
        SupplyTier.CRITICAL: [],
        SupplyTier.WARNING: [],
        SupplyTier.LOW: [],
    }
    for forecast in forecasts:
        if forecast.tier in summary:
            summary[forecast.tier].append(forecast)
    return summary
