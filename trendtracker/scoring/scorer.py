"""
Scoring logic for India Trend Tracker.

Provides pure, side-effect-free functions to:
1. Score a headline from its text and publisher (base scorer)
2. Score a Reddit post from its title and engagement numbers
3. Score a Twitter trend from its text, format and topic category

All functions are deterministic, total (they never raise) and treat missing
text or engagement numbers as empty / zero.
"""

import re
from typing import Iterable, Optional

from trendtracker.scoring.keywords import (
    COUNTRY_TERMS,
    SOCIAL_BREAKING_KEYWORDS,
    SOCIAL_CATEGORIES,
    SOCIAL_COUNTRY_KEYWORDS,
    SOCIAL_CRIME_KEYWORDS,
    SOCIAL_ENTERTAINMENT_KEYWORDS,
    SOCIAL_POLITICAL_KEYWORDS,
    SOCIAL_SENSATIONAL_KEYWORDS,
    SOCIAL_VIRAL_INDICATORS,
    SOCIAL_VIRAL_KEYWORDS,
    SUBREDDIT_BONUSES,
    TIER1_SOURCES,
    VIRAL_KEYWORDS,
)


# =============================================================================
# Scoring Configuration
# =============================================================================

# Base headline scorer
HEADLINE_KEYWORD_POINTS: int = 10
TIER1_SOURCE_BONUS: int = 10
COUNTRY_TERM_BONUS: int = 5

# Forum post scorer: (threshold, points), checked highest first
UPVOTE_TIERS: tuple[tuple[int, int], ...] = (
    (5000, 25), (2000, 20), (1000, 15), (500, 10), (100, 5), (50, 2),
)
COMMENT_TIERS: tuple[tuple[int, int], ...] = (
    (1000, 20), (500, 15), (200, 10), (100, 7), (50, 5), (20, 3),
)
UPVOTE_RATIO_TIERS: tuple[tuple[float, int], ...] = (
    (0.95, 15), (0.9, 10), (0.8, 7), (0.7, 5),
)
# Strictly-greater thresholds on comments per upvote
ENGAGEMENT_RATE_TIERS: tuple[tuple[float, int], ...] = (
    (0.3, 10), (0.2, 7), (0.1, 5),
)
FORUM_SCORE_CAP: int = 50

# Social trend scorer
HASHTAG_BONUS: int = 15
MENTION_BONUS: int = 10
SOCIAL_CATEGORY_BONUSES: tuple[tuple[tuple[str, ...], int], ...] = (
    (SOCIAL_BREAKING_KEYWORDS, 35),
    (SOCIAL_VIRAL_KEYWORDS, 25),
    (SOCIAL_SENSATIONAL_KEYWORDS, 20),
    (SOCIAL_POLITICAL_KEYWORDS, 25),
    (SOCIAL_CRIME_KEYWORDS, 30),
    (SOCIAL_ENTERTAINMENT_KEYWORDS, 20),
    (SOCIAL_COUNTRY_KEYWORDS, 15),
)
SHORT_TEXT_LENGTH: int = 10
SHORT_TEXT_PENALTY: int = 5
MIXED_SCRIPT_BONUS: int = 10

_DEVANAGARI = re.compile(r"[ऀ-ॿ]")
_LATIN = re.compile(r"[a-zA-Z]")


# =============================================================================
# Helpers
# =============================================================================

def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _tier_points(value: float, tiers) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def has_devanagari(text: Optional[str]) -> bool:
    """True if the text contains any Devanagari (Hindi) character."""
    return bool(text) and bool(_DEVANAGARI.search(text))


def is_mixed_script(text: Optional[str]) -> bool:
    """True if the text mixes Devanagari and Latin letters."""
    return has_devanagari(text) and bool(_LATIN.search(text))


# =============================================================================
# Base Headline Scorer
# =============================================================================

def score_headline(text: Optional[str], source: Optional[str]) -> int:
    """
    Score a headline by viral keywords, publisher reputation and country terms.

    Formula:
        +10 per viral keyword found anywhere in the text
        +10 if the source identifier contains a tier-1 domain
        +5  if the text mentions "india" / "indian"

    Keyword hits accumulate; there is no cap.

    Args:
        text: Headline or trend text.
        source: Publisher name, domain or URL.

    Returns:
        Non-negative integer score.

    Example:
        >>> score_headline("BREAKING: Modi announces new policy", "https://www.ndtv.com")
        20
    """
    lowered = (text or "").lower()
    source = source or ""

    score = sum(HEADLINE_KEYWORD_POINTS for keyword in VIRAL_KEYWORDS if keyword in lowered)

    if _contains_any(source, TIER1_SOURCES):
        score += TIER1_SOURCE_BONUS

    if _contains_any(lowered, COUNTRY_TERMS):
        score += COUNTRY_TERM_BONUS

    return score


# =============================================================================
# Forum Post Scorer
# =============================================================================

def engagement_rate(upvotes: Optional[int], comments: Optional[int]) -> float:
    """Comments per upvote, rounded to 2 decimals (0 when there are no upvotes)."""
    upvotes = upvotes or 0
    if upvotes <= 0:
        return 0.0
    return round((comments or 0) / upvotes, 2)


def score_forum_post(
    title: Optional[str],
    upvotes: Optional[int] = None,
    comments: Optional[int] = None,
    upvote_ratio: Optional[float] = None,
    community: Optional[str] = None,
) -> int:
    """
    Score a Reddit post by its title and engagement.

    Formula:
        base headline score (source "Reddit")
        + upvote tier (2-25) + comment tier (3-20) + ratio tier (5-15)
        + community bonus + engagement-rate tier (5-10)
        capped at 50

    Args:
        title: Post title.
        upvotes: Upvote count.
        comments: Comment count.
        upvote_ratio: Fraction of votes that are upvotes (0-1).
        community: Subreddit name without the ``r/`` prefix.

    Returns:
        Score between 0 and 50.
    """
    upvotes = upvotes or 0
    comments = comments or 0
    upvote_ratio = upvote_ratio or 0.0

    score = score_headline(title, "Reddit")
    score += _tier_points(upvotes, UPVOTE_TIERS)
    score += _tier_points(comments, COMMENT_TIERS)
    score += _tier_points(upvote_ratio, UPVOTE_RATIO_TIERS)
    score += SUBREDDIT_BONUSES.get(community or "", 0)

    rate = comments / (upvotes or 1)
    for threshold, points in ENGAGEMENT_RATE_TIERS:
        if rate > threshold:
            score += points
            break

    return max(0, min(score, FORUM_SCORE_CAP))


def forum_traffic_level(
    upvotes: Optional[int], comments: Optional[int], upvote_ratio: Optional[float]
) -> str:
    """Describe a post's traffic as Viral / Hot / Trending / Rising / Active."""
    upvotes = upvotes or 0
    comments = comments or 0
    if upvotes >= 2000 or comments >= 500:
        return "Viral"
    if upvotes >= 1000 or comments >= 200:
        return "Hot"
    if upvotes >= 500 or comments >= 100:
        return "Trending"
    if (upvote_ratio or 0.0) >= 0.9:
        return "Rising"
    return "Active"


# =============================================================================
# Social Trend Scorer
# =============================================================================

def score_social_trend(text: Optional[str]) -> int:
    """
    Score a Twitter trend.

    Formula:
        base headline score (no source)
        +15 hashtag (``#...``) / +10 mention (``@...``)
        + category bonuses: breaking 35, viral 25, sensational 20,
          political 25, crime 30, entertainment 20, country context 15
        -5 when shorter than 10 characters
        +10 when mixing Devanagari and Latin script
        floored at 0

    Args:
        text: Trend text as scraped.

    Returns:
        Non-negative integer score.
    """
    text = text or ""
    lowered = text.lower()

    score = score_headline(text, "")

    if text.startswith("#"):
        score += HASHTAG_BONUS
    if text.startswith("@"):
        score += MENTION_BONUS

    for keywords, bonus in SOCIAL_CATEGORY_BONUSES:
        if _contains_any(lowered, keywords):
            score += bonus

    if len(text) < SHORT_TEXT_LENGTH:
        score -= SHORT_TEXT_PENALTY

    if is_mixed_script(text):
        score += MIXED_SCRIPT_BONUS

    return max(0, score)


def is_viral_social_content(text: Optional[str]) -> bool:
    """True if the trend text hits any broad viral indicator."""
    return _contains_any((text or "").lower(), SOCIAL_VIRAL_INDICATORS)


def categorize_social_trend(text: Optional[str]) -> str:
    """Assign a display category to a trend (first matching category wins)."""
    lowered = (text or "").lower()
    for category, triggers in SOCIAL_CATEGORIES:
        if _contains_any(lowered, triggers):
            return category
    return "General"


def social_content_type(text: Optional[str]) -> str:
    """Classify a trend as hashtag, mention, viral_topic or trending_topic."""
    text = text or ""
    if text.startswith("#"):
        return "hashtag"
    if text.startswith("@"):
        return "mention"
    if is_viral_social_content(text):
        return "viral_topic"
    return "trending_topic"
