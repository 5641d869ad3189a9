"""
GNews source implementation.

Fetches top Indian headlines from the GNews API.
API Documentation: https://gnews.io/docs/v4
"""

from typing import List, Optional
import requests

from trendtracker.config import GNEWS_API_KEY, REQUEST_TIMEOUT
from trendtracker.models.trend_item import ScoredItem, SourceType
from trendtracker.scoring.scorer import score_headline
from trendtracker.sources.base import Source, parse_timestamp


GNEWS_TOP_HEADLINES_URL = "https://gnews.io/api/v4/top-headlines"

# General news only; entertainment is covered by the other sources
GNEWS_PARAMS = {
    "country": "in",
    "lang": "en",
    "category": "general",
    "max": 15,
}


class GNewsSource(Source):
    """
    Fetches top headlines for India from GNews.

    Each article is scored against the publisher's URL so tier-1 domains
    earn their bonus.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = GNEWS_API_KEY if api_key is None else api_key

    @property
    def name(self) -> str:
        return "gnews"

    @property
    def source_type(self) -> SourceType:
        return SourceType.NEWS

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def _fetch_items(self) -> List[ScoredItem]:
        response = requests.get(
            GNEWS_TOP_HEADLINES_URL,
            params={"token": self._api_key, **GNEWS_PARAMS},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        articles = response.json().get("articles") or []

        items: List[ScoredItem] = []
        for article in articles:
            item = self._normalize_article(article)
            if item is not None:
                items.append(item)
        return items

    def _normalize_article(self, raw: dict) -> Optional[ScoredItem]:
        """
        Convert a GNews article to a ScoredItem.

        GNews article structure:
        {
            "title": "...",
            "description": "...",
            "url": "https://...",
            "publishedAt": "2025-01-01T10:00:00Z",
            "source": {"name": "NDTV", "url": "https://www.ndtv.com"}
        }
        """
        if not isinstance(raw, dict):
            return None

        title = (raw.get("title") or "").strip()
        if not title:
            return None

        publisher = raw.get("source") or {}
        return ScoredItem(
            title=title,
            source=publisher.get("name") or "GNews",
            source_type=self.source_type,
            score=score_headline(title, publisher.get("url") or ""),
            url=raw.get("url"),
            published_at=parse_timestamp(raw.get("publishedAt")),
            metadata={
                "description": raw.get("description") or "",
                "api": "GNews",
            },
        )
