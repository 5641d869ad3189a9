"""
Text filters for scraped and fetched content.

Decides which scraped strings are real headlines, normalizes them, and
classifies YouTube videos and Reddit posts as relevant trending content.
"""

import re
from typing import Optional

from trendtracker.scoring.keywords import (
    CHILDREN_CONTENT_KEYWORDS,
    HEADLINE_EXCLUDE_PATTERNS,
    HEADLINE_KEYWORDS,
    HEADLINE_MAX_LENGTH,
    HEADLINE_MIN_LENGTH,
    HEADLINE_TRUNCATE_LENGTH,
    INDIAN_NEWS_KEYWORDS,
    NEWS_CHANNEL_PATTERNS,
    TRENDING_POST_KEYWORDS,
    VIDEO_MIN_VIEWS,
    VIDEO_VIRAL_TERMS,
)
from trendtracker.scoring.scorer import has_devanagari


_LEADING_ORDINAL = re.compile(r"^\d+\.?\s*")
_PIPE_SUFFIX = re.compile(r"\s*\|\s*.*$")
_WHITESPACE = re.compile(r"\s+")
_UNSAFE_CHARS = re.compile(r"[^\w\s\-'\"]")
_TWEET_COUNT = re.compile(r"\s*(?:[\d.,]+\s*[KM]?\s*)?tweets.*$", re.IGNORECASE)


# =============================================================================
# Headlines
# =============================================================================

def is_valid_headline(text: Optional[str]) -> bool:
    """
    Decide whether a scraped string is a real news headline.

    Rules:
    - Length between 15 and 200 characters
    - Contains at least one headline keyword (case-insensitive)
    - Matches none of the boilerplate exclusion patterns
    """
    if not text or len(text) < HEADLINE_MIN_LENGTH or len(text) > HEADLINE_MAX_LENGTH:
        return False

    lowered = text.lower()
    if not any(keyword in lowered for keyword in HEADLINE_KEYWORDS):
        return False

    return not any(pattern.search(text) for pattern in HEADLINE_EXCLUDE_PATTERNS)


def clean_headline(text: Optional[str]) -> str:
    """
    Normalize a headline for display and comparison.

    Strips leading numbering and any ``| Source`` suffix, collapses whitespace,
    blanks out characters outside word characters, whitespace, hyphens and
    quotes, and truncates to 120 characters.
    """
    text = text or ""
    text = _LEADING_ORDINAL.sub("", text)
    text = _PIPE_SUFFIX.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    text = _UNSAFE_CHARS.sub(" ", text)
    return text.strip()[:HEADLINE_TRUNCATE_LENGTH]


def clean_trend_text(text: Optional[str]) -> str:
    """Strip ranking numbers and tweet counts from a scraped trend label."""
    text = (text or "").strip()
    text = _LEADING_ORDINAL.sub("", text)
    text = _TWEET_COUNT.sub("", text)
    return text.strip()


# =============================================================================
# Videos
# =============================================================================

def is_children_content(title: str, channel: str) -> bool:
    """True if title or channel hits the family/children/entertainment list."""
    title = (title or "").lower()
    channel = (channel or "").lower()
    return any(
        keyword in title or keyword in channel
        for keyword in CHILDREN_CONTENT_KEYWORDS
    )


def is_indian_news_video(title: Optional[str], channel: Optional[str]) -> bool:
    """
    Relevance classifier for YouTube videos.

    A video is kept when it is not children/entertainment content AND at least
    one of these holds:
    - title or channel contains Devanagari script
    - title or channel hits the Indian news keyword list
    - channel name matches a news-channel pattern
    """
    title = title or ""
    channel = channel or ""

    if is_children_content(title, channel):
        return False

    lowered_title = title.lower()
    lowered_channel = channel.lower()

    if has_devanagari(title) or has_devanagari(channel):
        return True

    if any(
        keyword in lowered_title or keyword in lowered_channel
        for keyword in INDIAN_NEWS_KEYWORDS
    ):
        return True

    return any(pattern in lowered_channel for pattern in NEWS_CHANNEL_PATTERNS)


def is_viral_video(title: Optional[str], views: Optional[int]) -> bool:
    """True if the video has enough views or a viral/news term in its title."""
    if (views or 0) >= VIDEO_MIN_VIEWS:
        return True
    lowered = (title or "").lower()
    return any(term in lowered for term in VIDEO_VIRAL_TERMS)


# =============================================================================
# Forum Posts
# =============================================================================

def is_trending_forum_post(
    title: Optional[str],
    upvotes: Optional[int],
    upvote_ratio: Optional[float],
    comments: Optional[int],
) -> bool:
    """
    Decide whether a Reddit post is trending.

    Accepted when the title is 10-300 characters and any of:
    - upvotes >= 500, comments >= 100 or ratio >= 0.85
    - upvotes >= 50 with ratio >= 0.7 and comments >= 10
    - a trending keyword in the title with upvotes >= 20 and ratio >= 0.6
    """
    if not title or len(title) < 10 or len(title) > 300:
        return False

    upvotes = upvotes or 0
    comments = comments or 0
    upvote_ratio = upvote_ratio or 0.0

    if upvotes >= 500 or comments >= 100 or upvote_ratio >= 0.85:
        return True

    if upvotes >= 50 and upvote_ratio >= 0.7 and comments >= 10:
        return True

    lowered = title.lower()
    has_keyword = any(keyword in lowered for keyword in TRENDING_POST_KEYWORDS)
    return has_keyword and upvotes >= 20 and upvote_ratio >= 0.6
