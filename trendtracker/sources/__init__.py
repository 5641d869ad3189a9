"""
Data sources module.

Fetchers for external platforms: GNews, MediaStack, YouTube, Google Trends,
Twitter trend trackers and Reddit.
"""

from trendtracker.sources.base import Source, dedupe_by_title, run_fallback_chain
from trendtracker.sources.gnews import GNewsSource
from trendtracker.sources.mediastack import MediaStackSource
from trendtracker.sources.youtube import YouTubeSource
from trendtracker.sources.google_trends import GoogleTrendsSource
from trendtracker.sources.twitter_trends import TwitterTrendsSource
from trendtracker.sources.reddit import RedditSource

__all__ = [
    "Source",
    "dedupe_by_title",
    "run_fallback_chain",
    "GNewsSource",
    "MediaStackSource",
    "YouTubeSource",
    "GoogleTrendsSource",
    "TwitterTrendsSource",
    "RedditSource",
]
