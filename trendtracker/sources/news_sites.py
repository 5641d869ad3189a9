"""
Headline scraper for India-focused news sites.

Walks a fixed list of trending / viral sections on Indian news sites and
pulls out headline-looking text with BeautifulSoup. Used by the Google
Trends source when no search-trend upstream answers.
"""

import logging
from dataclasses import dataclass
from typing import List
from urllib.parse import urljoin
import requests
from bs4 import BeautifulSoup

from trendtracker.config import SCRAPE_TIMEOUT
from trendtracker.models.trend_item import ScoredItem, SourceType
from trendtracker.scoring.filters import clean_headline, is_valid_headline
from trendtracker.scoring.scorer import score_headline
from trendtracker.sources.base import BROWSER_HEADERS, dedupe_by_title


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewsSite:
    name: str
    url: str


NEWS_SITES: tuple[NewsSite, ...] = (
    NewsSite("India Today", "https://www.indiatoday.in/trending-news"),
    NewsSite("India Today Entertainment", "https://www.indiatoday.in/entertainment"),
    NewsSite("Hindustan Times Entertainment", "https://www.hindustantimes.com/entertainment"),
    NewsSite("Times of India Etimes", "https://timesofindia.indiatimes.com/etimes/trending"),
    NewsSite("Indian Express Trending", "https://indianexpress.com/section/trending/"),
    NewsSite("News18", "https://www.news18.com/trending"),
    NewsSite("News18 Viral", "https://www.news18.com/viral"),
    NewsSite("Times of India", "https://timesofindia.indiatimes.com/trending-topics"),
    NewsSite("Hindustan Times", "https://www.hindustantimes.com/trending"),
    NewsSite("Republic World", "https://www.republicworld.com/trending-news"),
    NewsSite("Free Press Journal", "https://www.freepressjournal.in/viral"),
    NewsSite("India TV Viral", "https://www.indiatv.in/viral"),
    NewsSite("DNA India Viral", "https://www.dnaindia.com/viral"),
)

# Tried in order; most sites match the first one
HEADLINE_SELECTORS: tuple[str, ...] = (
    "h1, h2, h3",
    ".trending-story",
    ".headline",
    ".story-title",
    ".news-title",
    '[class*="trend"]',
    '[class*="viral"]',
    '[class*="popular"]',
    ".top-story",
    ".breaking-news",
    ".story-card h3",
    ".article-title",
)

MAX_SCAN_PER_SITE = 10
MAX_PER_SITE = 8
MAX_HEADLINES = 10


def scrape_site_headlines(site: NewsSite) -> List[ScoredItem]:
    """
    Scrape headline candidates from one news site.

    Raises:
        requests.RequestException: If the page cannot be fetched.
    """
    response = requests.get(site.url, headers=BROWSER_HEADERS, timeout=SCRAPE_TIMEOUT)
    response.raise_for_status()
    soup = BeautifulSoup(response.text, "html.parser")

    headlines: List[ScoredItem] = []
    seen = set()
    for selector in HEADLINE_SELECTORS:
        for element in soup.select(selector):
            if len(headlines) >= MAX_SCAN_PER_SITE:
                break

            text = element.get_text(" ", strip=True)
            if not is_valid_headline(text):
                continue

            title = clean_headline(text)
            if not title or title.lower() in seen:
                continue
            seen.add(title.lower())

            link = element.get("href")
            if not link:
                anchor = element.find("a")
                link = anchor.get("href") if anchor else None

            headlines.append(ScoredItem(
                title=title,
                source=site.name,
                source_type=SourceType.SEARCH_TREND,
                score=score_headline(title, site.url),
                url=urljoin(site.url, link) if link else site.url,
                metadata={"traffic": "Trending", "articles": []},
            ))

        if len(headlines) >= MAX_PER_SITE:
            break

    return headlines[:MAX_PER_SITE]


def scrape_trending_headlines(sites=NEWS_SITES) -> List[ScoredItem]:
    """
    Collect trending headlines across news sites.

    Sites are visited in order until at least 10 headlines are collected.
    A site that fails is logged and skipped.

    Returns:
        Up to 10 headlines, de-duplicated by title.
    """
    collected: List[ScoredItem] = []
    for site in sites:
        try:
            headlines = scrape_site_headlines(site)
        except Exception as e:
            logger.warning(f"[news_sites] Failed to scrape {site.name}: {e}")
            continue

        if headlines:
            logger.debug(f"[news_sites] {len(headlines)} headlines from {site.name}")
            collected.extend(headlines)
            if len(collected) >= MAX_HEADLINES:
                break

    return dedupe_by_title(collected)[:MAX_HEADLINES]
