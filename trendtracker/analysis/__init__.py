"""
Analysis module.

Cross-source theme matching and viral ranking, each with an external model
strategy and a keyword heuristic fallback.
"""

from trendtracker.analysis.matcher import (
    SOURCE_ORDER,
    extract_keywords,
    match,
    match_external,
    match_heuristic,
    ordered_items,
)
from trendtracker.analysis.ranker import (
    rank,
    rank_external,
    rank_heuristic,
    viral_score,
)

__all__ = [
    "SOURCE_ORDER",
    "extract_keywords",
    "match",
    "match_external",
    "match_heuristic",
    "ordered_items",
    "rank",
    "rank_external",
    "rank_heuristic",
    "viral_score",
]
