"""
Dashboard module for the Life Planner engine.

Provides date classification, streaks, supply forecasts, ordering, task
aggregation and Rich formatting for the derived dashboard views.
"""

from .classifier import (
    DateStatus,
    DateStatusClassifier,
    classify_date,
    is_overdue,
)
from .streaks import (
    calculate_streak,
    completion_streak,
    diary_streak,
    month_activity,
)
from .inventory import (
    SupplementForecast,
    SupplyForecast,
    SupplyTier,
    forecast_supplements,
    forecast_supply,
    restock_summary,
    sort_by_urgency,
)
from .sorting import (
    SortKey,
    TimelineItem,
    sort_items,
    sort_timeline,
)
from .filters import TaskFilters, apply_filters
from .aggregator import (
    CategorySummary,
    DailyStats,
    DashboardAggregator,
    DashboardData,
    TaskAggregator,
    TaskBuckets,
    aggregate_tasks,
    category_summaries,
)
from .formatter import (
    DashboardFormatter,
    format_due_label,
    format_relative_datetime,
    tier_label,
)

__all__ = [
    # Classifier
    'DateStatus',
    'DateStatusClassifier',
    'classify_date',
    'is_overdue',
    # Streaks
    'calculate_streak',
    'completion_streak',
    'diary_streak',
    'month_activity',
    # Inventory
    'SupplementForecast',
    'SupplyForecast',
    'SupplyTier',
    'forecast_supplements',
    'forecast_supply',
    'restock_summary',
    'sort_by_urgency',
    # Sorting
    'SortKey',
    'TimelineItem',
    'sort_items',
    'sort_timeline',
    # Filters
    'TaskFilters',
    'apply_filters',
    # Aggregator
    'CategorySummary',
    'DailyStats',
    'DashboardAggregator',
    'DashboardData',
    'TaskAggregator',
    'TaskBuckets',
    'aggregate_tasks',
    'category_summaries',
    # Formatter
    'DashboardFormatter',
    'format_due_label',
    'format_relative_datetime',
    'tier_label',
]
