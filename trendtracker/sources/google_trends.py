"""
Google Trends source implementation.

Google publishes no supported trends API, so this source walks a chain:

1. Google's daily trending-searches RSS feed for India (via feedparser)
2. Search-trend blocks scraped from trends24.in
3. Headlines scraped from India-focused news sites
4. A curated list of evergreen Indian topics

Each step runs only when every earlier step produced nothing.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
import feedparser
import requests
from bs4 import BeautifulSoup

from trendtracker.config import REQUEST_TIMEOUT
from trendtracker.models.trend_item import ScoredItem, SourceType
from trendtracker.scoring.filters import clean_trend_text
from trendtracker.scoring.keywords import CURATED_TRENDING_TOPICS
from trendtracker.scoring.scorer import score_headline
from trendtracker.sources.base import BROWSER_HEADERS, Source, run_fallback_chain
from trendtracker.sources.news_sites import scrape_trending_headlines


logger = logging.getLogger(__name__)

GOOGLE_TRENDS_RSS_URL = "https://trends.google.com/trending/rss?geo=IN"
TRENDS24_URL = "https://trends24.in/india/"

# Blocks on trends24.in that hold search (not Twitter) trends
TRENDS24_SEARCH_SELECTORS: tuple[str, ...] = (
    ".google-trends",
    ".search-trends",
    '[data-source="google"]',
    ".trending-searches",
    'div[class*="search"]',
)

MAX_RSS_TRENDS = 10
MAX_TRENDS24_SCAN = 15
MAX_TRENDS24_TRENDS = 12


class GoogleTrendsSource(Source):
    """
    Fetches what India is searching for.

    Keyless: always available. Items carry an approximate ``traffic`` label
    and, when the feed provides them, related news ``articles``.
    """

    @property
    def name(self) -> str:
        return "google_trends"

    @property
    def source_type(self) -> SourceType:
        return SourceType.SEARCH_TREND

    def _fetch_items(self) -> List[ScoredItem]:
        return run_fallback_chain(self.name, [
            ("daily trends feed", self._fetch_daily_trends),
            ("trends24.in", self._scrape_trends24),
            ("news site headlines", self._scrape_news_sites),
            ("curated topics", self._curated_topics),
        ])

    # -------------------------------------------------------------------------
    # Step 1: RSS feed
    # -------------------------------------------------------------------------

    def _fetch_daily_trends(self) -> List[ScoredItem]:
        response = requests.get(
            GOOGLE_TRENDS_RSS_URL,
            headers=BROWSER_HEADERS,
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            logger.warning(f"[{self.name}] Feed parse error: {feed.bozo_exception}")
            return []

        items: List[ScoredItem] = []
        for entry in feed.entries[:MAX_RSS_TRENDS]:
            item = self._normalize_entry(entry)
            if item is not None:
                items.append(item)
        return items

    def _normalize_entry(self, entry: dict) -> Optional[ScoredItem]:
        """
        Convert a trends feed entry to a ScoredItem.

        feedparser flattens the ``ht:`` namespace, e.g. ``ht:approx_traffic``
        becomes ``ht_approx_traffic``. Only the last ``ht:news_item`` of an
        entry survives the flattening.
        """
        title = (entry.get("title") or "").strip()
        if not title:
            return None

        articles = []
        if entry.get("ht_news_item_title"):
            articles.append({
                "title": entry.get("ht_news_item_title"),
                "source": entry.get("ht_news_item_source"),
                "url": entry.get("ht_news_item_url"),
            })

        return ScoredItem(
            title=title,
            source="Google Trends",
            source_type=self.source_type,
            score=score_headline(title, ""),
            url=entry.get("link"),
            published_at=_entry_datetime(entry),
            metadata={
                "traffic": entry.get("ht_approx_traffic") or "Rising",
                "articles": articles,
            },
        )

    # -------------------------------------------------------------------------
    # Step 2: trends24.in
    # -------------------------------------------------------------------------

    def _scrape_trends24(self) -> List[ScoredItem]:
        response = requests.get(TRENDS24_URL, headers=BROWSER_HEADERS, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        soup = BeautifulSoup(response.text, "html.parser")

        titles: List[str] = []
        for selector in TRENDS24_SEARCH_SELECTORS:
            for container in soup.select(selector):
                for element in container.select("a, span, div"):
                    if len(titles) >= MAX_TRENDS24_SCAN:
                        break
                    text = element.get_text(strip=True)
                    if not _is_search_trend_text(text):
                        continue
                    title = clean_trend_text(text)
                    if title and title not in titles:
                        titles.append(title)

            if len(titles) >= MAX_RSS_TRENDS:
                break

        return [
            ScoredItem(
                title=title,
                source="trends24.in (Google)",
                source_type=self.source_type,
                score=score_headline(title, ""),
                metadata={"traffic": "High", "articles": []},
            )
            for title in titles[:MAX_TRENDS24_TRENDS]
        ]

    # -------------------------------------------------------------------------
    # Steps 3-4: headlines and curated topics
    # -------------------------------------------------------------------------

    def _scrape_news_sites(self) -> List[ScoredItem]:
        return scrape_trending_headlines()

    def _curated_topics(self) -> List[ScoredItem]:
        now = datetime.now(timezone.utc)
        return [
            ScoredItem(
                title=topic,
                source="India News Trends",
                source_type=self.source_type,
                score=score_headline(topic, "India"),
                published_at=now,
                metadata={"traffic": "Rising", "articles": []},
            )
            for topic in CURATED_TRENDING_TOPICS
        ]


def _is_search_trend_text(text: str) -> bool:
    return bool(text) and 2 < len(text) < 100 and "Twitter" not in text and "#" not in text


def _entry_datetime(entry: dict) -> Optional[datetime]:
    parsed = entry.get("published_parsed")
    if not parsed:
        return None
    try:
        return datetime(*parsed[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None
