"""
Scoring module.

Keyword tables, headline / forum / social scorers and content filters.
"""

from trendtracker.scoring.scorer import (
    categorize_social_trend,
    engagement_rate,
    forum_traffic_level,
    has_devanagari,
    is_mixed_script,
    is_viral_social_content,
    score_forum_post,
    score_headline,
    score_social_trend,
    social_content_type,
)
from trendtracker.scoring.filters import (
    clean_headline,
    clean_trend_text,
    is_children_content,
    is_indian_news_video,
    is_trending_forum_post,
    is_valid_headline,
    is_viral_video,
)

__all__ = [
    "categorize_social_trend",
    "engagement_rate",
    "forum_traffic_level",
    "has_devanagari",
    "is_mixed_script",
    "is_viral_social_content",
    "score_forum_post",
    "score_headline",
    "score_social_trend",
    "social_content_type",
    "clean_headline",
    "clean_trend_text",
    "is_children_content",
    "is_indian_news_video",
    "is_trending_forum_post",
    "is_valid_headline",
    "is_viral_video",
]
