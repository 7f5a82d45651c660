"""
Life Planner engine
Derives dashboard views (urgency, streaks, supply forecasts, buckets)
from already-fetched organizer records
"""

__version__ = "0.1.0"
