"""
MediaStack source implementation.

Fetches popular Indian news matching a viral-keyword query from MediaStack.
API Documentation: https://mediastack.com/documentation
"""

from typing import List, Optional
import requests

from trendtracker.config import MEDIASTACK_API_KEY, REQUEST_TIMEOUT
from trendtracker.models.trend_item import ScoredItem, SourceType
from trendtracker.scoring.scorer import score_headline
from trendtracker.sources.base import Source, parse_timestamp


# The free plan only serves plain HTTP
MEDIASTACK_NEWS_URL = "http://api.mediastack.com/v1/news"

MEDIASTACK_PARAMS = {
    "countries": "in",
    "languages": "en",
    "sort": "popularity",
    "categories": "general,entertainment,sports,technology",
    "keywords": (
        "viral,trending,breaking,popular,watch,latest,exclusive,video,"
        "shares,social media"
    ),
    "limit": 15,
}


class MediaStackSource(Source):
    """Fetches popular, viral-leaning Indian news from MediaStack."""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = MEDIASTACK_API_KEY if api_key is None else api_key

    @property
    def name(self) -> str:
        return "mediastack"

    @property
    def source_type(self) -> SourceType:
        return SourceType.NEWS

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def _fetch_items(self) -> List[ScoredItem]:
        response = requests.get(
            MEDIASTACK_NEWS_URL,
            params={"access_key": self._api_key, **MEDIASTACK_PARAMS},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()

        # MediaStack reports auth and quota problems in a 200 body
        if payload.get("error"):
            error = payload["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RuntimeError(f"MediaStack error: {message}")

        items: List[ScoredItem] = []
        for article in payload.get("data") or []:
            item = self._normalize_article(article)
            if item is not None:
                items.append(item)
        return items

    def _normalize_article(self, raw: dict) -> Optional[ScoredItem]:
        if not isinstance(raw, dict):
            return None

        title = (raw.get("title") or "").strip()
        if not title:
            return None

        publisher = raw.get("source") or "MediaStack"
        return ScoredItem(
            title=title,
            source=publisher,
            source_type=self.source_type,
            score=score_headline(title, publisher),
            url=raw.get("url"),
            published_at=parse_timestamp(raw.get("published_at")),
            metadata={
                "description": raw.get("description") or "",
                "api": "MediaStack",
            },
        )
