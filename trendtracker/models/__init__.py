"""
Data models module.

Defines the scored items, themes and rankings that flow through the pipeline.
"""

from trendtracker.models.trend_item import (
    EngagementMetrics,
    RankedItem,
    ScoredItem,
    SourceType,
    Strategy,
    StrategyResult,
    Theme,
)

__all__ = [
    "EngagementMetrics",
    "RankedItem",
    "ScoredItem",
    "SourceType",
    "Strategy",
    "StrategyResult",
    "Theme",
]
