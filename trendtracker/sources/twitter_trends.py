"""
Twitter trends source implementation.

Scrapes India's Twitter/X trending topics from public trend trackers:
trends24.in first, getdaytrends.com as fallback. Uses BeautifulSoup,
since the official API is paid.
"""

from dataclasses import dataclass
from typing import List
from urllib.parse import quote, urljoin
import requests
from bs4 import BeautifulSoup

from trendtracker.config import REQUEST_TIMEOUT
from trendtracker.models.trend_item import ScoredItem, SourceType
from trendtracker.scoring.filters import clean_trend_text
from trendtracker.scoring.scorer import (
    categorize_social_trend,
    is_viral_social_content,
    score_social_trend,
    social_content_type,
)
from trendtracker.sources.base import BROWSER_HEADERS, Source, run_fallback_chain


TWITTER_SEARCH_URL = "https://twitter.com/search?q={query}"

MIN_TREND_SCORE = 5
MAX_TRENDS = 15


@dataclass(frozen=True)
class TrendPage:
    """A public page listing trends, with the rules for reading it."""
    name: str
    url: str
    selectors: tuple[str, ...]
    max_text_length: int
    max_scan: int


TRENDS24 = TrendPage(
    name="trends24.in",
    url="https://trends24.in/india/",
    selectors=(
        ".trend-card__list .trend-card__list-item",
        ".trending-item",
        ".trend-item",
        'a[href*="twitter.com"]',
        '[class*="trend"]',
        ".hashtag-item",
        ".trending-topic",
    ),
    max_text_length=120,
    max_scan=25,
)

GETDAYTRENDS = TrendPage(
    name="getdaytrends.com",
    url="https://getdaytrends.com/india",
    selectors=(
        ".trend",
        ".trend-item",
        ".hashtag",
        "[data-trend]",
        "td a",
        ".trending-topic",
        ".viral-trend",
    ),
    max_text_length=100,
    max_scan=20,
)


class TwitterTrendsSource(Source):
    """
    Fetches trending Twitter topics for India.

    Trend text is cleaned of rank numbers and tweet counts, scored with the
    social trend scorer, and kept when it scores at least 5 or reads as
    viral content. Results are sorted by score, top 15.
    """

    def __init__(self, pages: tuple[TrendPage, ...] = (TRENDS24, GETDAYTRENDS)):
        self.pages = pages

    @property
    def name(self) -> str:
        return "twitter"

    @property
    def source_type(self) -> SourceType:
        return SourceType.SOCIAL_TREND

    def _fetch_items(self) -> List[ScoredItem]:
        return run_fallback_chain(self.name, [
            (page.name, lambda page=page: self._scrape_page(page))
            for page in self.pages
        ])

    def _scrape_page(self, page: TrendPage) -> List[ScoredItem]:
        response = requests.get(page.url, headers=BROWSER_HEADERS, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        soup = BeautifulSoup(response.text, "html.parser")

        trends: List[ScoredItem] = []
        seen = set()
        for selector in page.selectors:
            for element in soup.select(selector):
                if len(trends) >= page.max_scan:
                    break

                text = element.get_text(strip=True)
                if not text or not 1 < len(text) < page.max_text_length:
                    continue

                title = clean_trend_text(text)
                if not title or title in seen:
                    continue
                seen.add(title)

                score = score_social_trend(title)
                if score < MIN_TREND_SCORE and not is_viral_social_content(title):
                    continue

                trends.append(self._build_item(page, element, title, score))

            if len(trends) >= MAX_TRENDS:
                break

        trends.sort(key=lambda item: item.score, reverse=True)
        return trends[:MAX_TRENDS]

    def _build_item(self, page: TrendPage, element, title: str, score: int) -> ScoredItem:
        link = element.get("href")
        if not link:
            anchor = element.find("a")
            link = anchor.get("href") if anchor else None

        return ScoredItem(
            title=title,
            source=page.name,
            source_type=self.source_type,
            score=score,
            url=urljoin(page.url, link) if link else TWITTER_SEARCH_URL.format(query=quote(title)),
            metadata={
                "type": social_content_type(title),
                "category": categorize_social_trend(title),
                "platform": "Twitter",
            },
        )
