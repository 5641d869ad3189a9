"""
YouTube source implementation.

Finds news-oriented Indian shorts published in the last few hours through
the YouTube Data API v3, falling back to the regional "most popular" chart.
API Documentation: https://developers.google.com/youtube/v3/docs
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
import requests

from trendtracker.config import REQUEST_TIMEOUT, YOUTUBE_API_KEY, YOUTUBE_LOOKBACK_HOURS
from trendtracker.models.trend_item import EngagementMetrics, ScoredItem, SourceType
from trendtracker.scoring.filters import is_indian_news_video, is_viral_video
from trendtracker.scoring.keywords import VIDEO_SEARCH_QUERY
from trendtracker.scoring.scorer import score_headline
from trendtracker.sources.base import Source, parse_timestamp


logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
YOUTUBE_SEARCH_URL = f"{YOUTUBE_API_BASE}/search"
YOUTUBE_VIDEOS_URL = f"{YOUTUBE_API_BASE}/videos"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

SEARCH_MAX_RESULTS = 50
MAX_VIDEOS = 10


class YouTubeSource(Source):
    """
    Fetches trending Indian news videos from YouTube.

    Primary strategy:
    - search short videos published within YOUTUBE_LOOKBACK_HOURS, by views
    - look up statistics for the hits (matched by video id)
    - keep videos that are viral enough AND look like Indian news
    - sort by views, keep the top 10

    Fallback, only when the search fails or has no hits: the IN
    ``mostPopular`` chart, unfiltered.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = YOUTUBE_API_KEY if api_key is None else api_key

    @property
    def name(self) -> str:
        return "youtube"

    @property
    def source_type(self) -> SourceType:
        return SourceType.VIDEO

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def _fetch_items(self) -> List[ScoredItem]:
        try:
            videos = self._fetch_recent_shorts()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"[{self.name}] recent shorts search failed: {e}")
            videos = None

        # Hits that all fail the filters still count as an answer
        if videos is not None:
            return videos

        logger.info(f"[{self.name}] recent shorts search returned nothing, trying most popular chart")
        return self._fetch_most_popular()

    def _fetch_recent_shorts(self) -> Optional[List[ScoredItem]]:
        """Filtered recent shorts, or None when the search has no hits."""
        published_after = datetime.now(timezone.utc) - timedelta(hours=YOUTUBE_LOOKBACK_HOURS)
        response = requests.get(
            YOUTUBE_SEARCH_URL,
            params={
                "key": self._api_key,
                "part": "snippet",
                "q": VIDEO_SEARCH_QUERY,
                "type": "video",
                "regionCode": "IN",
                "relevanceLanguage": "hi",
                "publishedAfter": published_after.strftime("%Y-%m-%dT%H:%M:%SZ"),
                "order": "viewCount",
                "videoDuration": "short",
                "maxResults": SEARCH_MAX_RESULTS,
            },
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        hits = response.json().get("items") or []
        if not hits:
            return None

        video_ids = [
            (hit.get("id") or {}).get("videoId")
            for hit in hits
            if (hit.get("id") or {}).get("videoId")
        ]
        if not video_ids:
            return []

        statistics = self._fetch_statistics(video_ids)
        timeframe = f"Last {YOUTUBE_LOOKBACK_HOURS} hours"

        videos: List[ScoredItem] = []
        for hit in hits:
            video_id = (hit.get("id") or {}).get("videoId")
            snippet = hit.get("snippet") or {}
            if not video_id or not snippet.get("title"):
                continue

            stats = statistics.get(video_id, {})
            views = _to_int(stats.get("viewCount"))
            if not is_viral_video(snippet["title"], views):
                continue
            if not is_indian_news_video(snippet["title"], snippet.get("channelTitle")):
                continue

            videos.append(self._build_item(video_id, snippet, stats, timeframe))

        videos.sort(key=lambda item: item.metrics.views_or_zero, reverse=True)
        return videos[:MAX_VIDEOS]

    def _fetch_statistics(self, video_ids: List[str]) -> Dict[str, dict]:
        """Look up statistics for the given videos, keyed by video id."""
        response = requests.get(
            YOUTUBE_VIDEOS_URL,
            params={
                "key": self._api_key,
                "part": "statistics",
                "id": ",".join(video_ids),
            },
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        return {
            video["id"]: video.get("statistics") or {}
            for video in response.json().get("items") or []
            if video.get("id")
        }

    def _fetch_most_popular(self) -> List[ScoredItem]:
        response = requests.get(
            YOUTUBE_VIDEOS_URL,
            params={
                "key": self._api_key,
                "part": "snippet,statistics",
                "chart": "mostPopular",
                "regionCode": "IN",
                "maxResults": MAX_VIDEOS,
            },
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()

        videos: List[ScoredItem] = []
        for video in response.json().get("items") or []:
            snippet = video.get("snippet") or {}
            if not video.get("id") or not snippet.get("title"):
                continue
            videos.append(self._build_item(
                video["id"],
                snippet,
                video.get("statistics") or {},
                "Overall Popular (Fallback)",
            ))
        return videos

    def _build_item(self, video_id: str, snippet: dict, stats: dict, timeframe: str) -> ScoredItem:
        title = snippet["title"].strip()
        channel = snippet.get("channelTitle") or "YouTube"
        return ScoredItem(
            title=title,
            source=channel,
            source_type=self.source_type,
            score=score_headline(title, channel),
            url=YOUTUBE_WATCH_URL.format(video_id=video_id),
            engagement=EngagementMetrics(
                views=_to_int(stats.get("viewCount")),
                comments=_to_int(stats.get("commentCount")),
            ),
            published_at=parse_timestamp(snippet.get("publishedAt")),
            metadata={
                "channel": channel,
                "category": snippet.get("categoryId"),
                "timeframe": timeframe,
            },
        )


def _to_int(value) -> int:
    """YouTube returns counts as strings; missing or malformed counts read as 0."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
