"""
Reddit source implementation.

Reads hot and rising listings of Indian subreddits through Reddit's public
JSON endpoints and keeps recent posts with real engagement.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional
import requests

from trendtracker.config import REDDIT_MAX_AGE_HOURS, REQUEST_TIMEOUT
from trendtracker.models.trend_item import EngagementMetrics, ScoredItem, SourceType
from trendtracker.scoring.filters import clean_headline, is_trending_forum_post
from trendtracker.scoring.scorer import engagement_rate, forum_traffic_level, score_forum_post
from trendtracker.sources.base import Source, dedupe_by_title


logger = logging.getLogger(__name__)

REDDIT_LISTING_URL = "https://www.reddit.com/r/{subreddit}/{listing}/.json"
REDDIT_WEB_URL = "https://www.reddit.com{permalink}"

# Reddit rejects generic user agents
REDDIT_HEADERS = {
    "User-Agent": "TrendTracker/2.0 (by /u/TrendTracker)",
    "Accept": "application/json",
}

MAX_POSTS = 15


@dataclass(frozen=True)
class SubredditFeed:
    subreddit: str
    listing: str = "hot"

    @property
    def url(self) -> str:
        return REDDIT_LISTING_URL.format(subreddit=self.subreddit, listing=self.listing)


SUBREDDIT_FEEDS: tuple[SubredditFeed, ...] = (
    SubredditFeed("india"),
    SubredditFeed("unpopularopinion"),
    SubredditFeed("india", "rising"),
    SubredditFeed("IndianDankMemes"),
    SubredditFeed("indiauncensored"),
    SubredditFeed("IndiaNews"),
    SubredditFeed("IndiaSpeaks"),
)


class RedditSource(Source):
    """
    Fetches trending posts from Indian subreddits.

    For each feed:
    - skip posts older than REDDIT_MAX_AGE_HOURS
    - keep posts that pass the trending-post test
    - clean the title and score it with the forum post scorer

    A feed that fails is logged and skipped, as is a malformed post. Results are sorted by score,
    top 15.
    """

    def __init__(self, feeds: tuple[SubredditFeed, ...] = SUBREDDIT_FEEDS):
        self.feeds = feeds

    @property
    def name(self) -> str:
        return "reddit"

    @property
    def source_type(self) -> SourceType:
        return SourceType.FORUM_POST

    def _fetch_items(self) -> List[ScoredItem]:
        now = time.time()
        posts: List[ScoredItem] = []

        for feed in self.feeds:
            try:
                children = self._fetch_listing(feed)
            except (requests.RequestException, ValueError) as e:
                logger.warning(f"[{self.name}] Failed to fetch r/{feed.subreddit}/{feed.listing}: {e}")
                continue

            for child in children:
                try:
                    item = self._normalize_post(child.get("data") or {}, feed, now)
                except (TypeError, ValueError, AttributeError) as e:
                    logger.warning(f"[{self.name}] Skipping malformed post in r/{feed.subreddit}: {e}")
                    continue
                if item is not None:
                    posts.append(item)

        # The same post often sits in both hot and rising
        posts = dedupe_by_title(posts)
        posts.sort(key=lambda item: item.score, reverse=True)
        return posts[:MAX_POSTS]

    def _fetch_listing(self, feed: SubredditFeed) -> List[dict]:
        response = requests.get(feed.url, headers=REDDIT_HEADERS, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return ((response.json() or {}).get("data") or {}).get("children") or []

    def _normalize_post(self, raw: dict, feed: SubredditFeed, now: float) -> Optional[ScoredItem]:
        """
        Convert a Reddit listing post to a ScoredItem, or None if it is stale
        or not trending.

        Reddit post structure (fields used):
        {
            "title": "...",
            "permalink": "/r/india/comments/abc/...",
            "created_utc": 1700000000.0,
            "ups": 1200,
            "num_comments": 340,
            "upvote_ratio": 0.93
        }
        """
        created = raw.get("created_utc")
        title = raw.get("title")
        if not created or not title:
            return None

        age_hours = (now - float(created)) / 3600
        if age_hours > REDDIT_MAX_AGE_HOURS:
            return None

        upvotes = raw.get("ups") or 0
        comments = raw.get("num_comments") or 0
        ratio = raw.get("upvote_ratio") or 0.0
        if not is_trending_forum_post(title, upvotes, ratio, comments):
            return None

        clean_title = clean_headline(title)
        if not clean_title:
            return None

        return ScoredItem(
            title=clean_title,
            source=f"Reddit r/{feed.subreddit}",
            source_type=self.source_type,
            score=score_forum_post(clean_title, upvotes, comments, ratio, feed.subreddit),
            url=REDDIT_WEB_URL.format(permalink=raw.get("permalink", "")),
            engagement=EngagementMetrics(
                upvotes=upvotes,
                comments=comments,
                upvote_ratio=ratio,
            ),
            published_at=datetime.fromtimestamp(float(created), tz=timezone.utc),
            metadata={
                "traffic": forum_traffic_level(upvotes, comments, ratio),
                "upvotes": upvotes,
                "comments": comments,
                "upvoteRatio": ratio,
                "subreddit": feed.subreddit,
                "hoursAgo": round(age_hours),
                "engagementRate": engagement_rate(upvotes, comments),
                "type": "reddit_post",
            },
        )
