"""
Viral ranking for India Trend Tracker.

Orders the merged item set by viral potential for an Indian audience and
keeps the top 15. The base ``score`` of each item is left alone; the ranker
produces RankedItem records carrying a separate ``viral_score``.
"""

import logging
import re
from typing import List, Optional, Sequence

from trendtracker.models.trend_item import RankedItem, ScoredItem, SourceType, Strategy, StrategyResult
from trendtracker.scoring.keywords import (
    EMOTIONAL_KEYWORDS,
    NEWS_URGENCY_TERMS,
    RANK_COUNTRY_TERMS,
    VIRAL_RANK_KEYWORDS,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Ranking Configuration
# =============================================================================

MAX_RANKED = 15
MAX_MODEL_ITEMS = 50

VIRAL_KEYWORD_POINTS = 25
EMOTIONAL_KEYWORD_POINTS = 15
COUNTRY_CONTEXT_BONUS = 20
# Strictly-greater thresholds
VIEW_TIERS: tuple[tuple[int, int], ...] = ((500_000, 40), (100_000, 25))
UPVOTE_TIERS: tuple[tuple[int, int], ...] = ((1000, 30), (500, 20))
NEWS_URGENCY_BONUS = 30
HASHTAG_TREND_BONUS = 15
LIVE_VIDEO_BONUS = 20

# Model-ranked items score 100, 95, 90, ...
MODEL_TOP_SCORE = 100
MODEL_SCORE_STEP = 5

# "<rank>. <original number>" at the start of a line
_RANK_LINE = re.compile(r"^\d+\.\s*(\d+)")


# =============================================================================
# Heuristic Strategy
# =============================================================================

def _tier_points(value: int, tiers) -> int:
    for threshold, points in tiers:
        if value > threshold:
            return points
    return 0


def viral_score(item: ScoredItem) -> int:
    """
    Score an item's viral potential from scratch (the base score is ignored).

    Formula:
        +25 per viral keyword in the title
        views >500k +40 / >100k +25
        upvotes >1000 +30 / >500 +20
        +20 Indian context (india, indian, modi, delhi, mumbai)
        +30 news headline that is breaking or live
        +15 hashtag social trend
        +20 live video
        +15 per emotional keyword
    """
    title = (item.title or "").lower()
    metrics = item.metrics

    score = sum(VIRAL_KEYWORD_POINTS for keyword in VIRAL_RANK_KEYWORDS if keyword in title)
    score += _tier_points(metrics.views_or_zero, VIEW_TIERS)
    score += _tier_points(metrics.upvotes_or_zero, UPVOTE_TIERS)

    if any(term in title for term in RANK_COUNTRY_TERMS):
        score += COUNTRY_CONTEXT_BONUS

    if item.source_type is SourceType.NEWS and any(term in title for term in NEWS_URGENCY_TERMS):
        score += NEWS_URGENCY_BONUS
    if item.source_type is SourceType.SOCIAL_TREND and title.startswith("#"):
        score += HASHTAG_TREND_BONUS
    if item.source_type is SourceType.VIDEO and "live" in title:
        score += LIVE_VIDEO_BONUS

    score += sum(EMOTIONAL_KEYWORD_POINTS for word in EMOTIONAL_KEYWORDS if word in title)
    return score


def rank_heuristic(items: Sequence[ScoredItem]) -> List[RankedItem]:
    """
    Rank items by keyword/engagement viral score.

    Ties keep their input order. Returns at most 15 items ranked 1..N.
    """
    scored = [(viral_score(item), item) for item in items]
    scored.sort(key=lambda pair: pair[0], reverse=True)

    return [
        RankedItem(item=item, viral_score=score, viral_rank=rank, ranked_by=Strategy.HEURISTIC)
        for rank, (score, item) in enumerate(scored[:MAX_RANKED], start=1)
    ]


# =============================================================================
# External Model Strategy
# =============================================================================

RANK_SYSTEM_PROMPT = (
    "You are a viral content expert. Return only a numbered list of items "
    "ranked by viral potential."
)


def _describe(item: ScoredItem) -> str:
    line = f'[{item.source_type.label}] "{item.title}" - Source: {item.source}'
    metrics = item.metrics
    if metrics.views:
        line += f" (Views: {metrics.views})"
    if metrics.upvotes:
        line += f" (Upvotes: {metrics.upvotes})"
    if item.metadata.get("traffic"):
        line += f" (Traffic: {item.metadata['traffic']})"
    return line


def build_rank_prompt(items: Sequence[ScoredItem]) -> str:
    """Build the viral-ranking prompt for a numbered list of items."""
    content_list = "\n".join(
        f"{index}. {_describe(item)}" for index, item in enumerate(items, start=1)
    )

    return f"""Below is a list of trending content from various sources.

IMPORTANT: Ignore any previous scores or rankings. Analyze each item purely based on its VIRAL POTENTIAL for Indian social media.

Rank these items by their VIRAL POTENTIAL, considering:
- Breaking news impact and urgency
- Controversy and debate potential
- Celebrity/entertainment/Bollywood value
- Emotional impact (anger, joy, surprise, outrage)
- Social media shareability and discussion potential
- Indian cultural relevance and local context

Content to analyze:
{content_list}

Return ONLY the top {MAX_RANKED} items with highest viral potential. Format your response as a simple numbered list using the original numbers:
1. [Original number from list]
2. [Original number from list]
...and so on"""


def parse_rank_response(text: str, item_count: int) -> List[int]:
    """
    Extract 0-based item indices from a numbered-list reply.

    Lines that do not match, numbers outside the list and repeats are
    skipped. At most 15 indices are returned.
    """
    indices: List[int] = []
    for line in (text or "").splitlines():
        found = _RANK_LINE.match(line.strip())
        if not found:
            continue
        index = int(found.group(1)) - 1
        if 0 <= index < item_count and index not in indices:
            indices.append(index)
        if len(indices) >= MAX_RANKED:
            break
    return indices


def rank_external(items: Sequence[ScoredItem], client) -> Optional[List[RankedItem]]:
    """
    Ask the external model to rank items by viral potential.

    Returns:
        Ranked items with contiguous ranks, or None if the call failed or
        no item could be parsed from the reply.
    """
    candidates = list(items)[:MAX_MODEL_ITEMS]
    if not candidates:
        return None

    try:
        result = client.complete(
            build_rank_prompt(candidates),
            system=RANK_SYSTEM_PROMPT,
            max_tokens=300,
            temperature=0.3,
        )
    except Exception as e:
        logger.warning(f"[ranker] Model call failed: {e}")
        return None

    if not result.success:
        logger.warning(f"[ranker] Model call failed: {result.error}")
        return None

    indices = parse_rank_response(result.text, len(candidates))
    if not indices:
        logger.warning("[ranker] No ranked items in model reply")
        return None

    logger.info(f"[ranker] Model selected {len(indices)} viral items")
    return [
        RankedItem(
            item=candidates[index],
            viral_score=MODEL_TOP_SCORE - MODEL_SCORE_STEP * offset,
            viral_rank=offset + 1,
            ranked_by=Strategy.EXTERNAL_MODEL,
        )
        for offset, index in enumerate(indices)
    ]


# =============================================================================
# Dispatcher
# =============================================================================

def rank(items: Sequence[ScoredItem], client=None) -> StrategyResult[List[RankedItem]]:
    """
    Rank items by viral potential, top 15.

    Uses the external model when ``client`` is given and configured, and the
    keyword heuristic on the full item set otherwise or on any model failure.
    """
    items = list(items)

    if client is not None and client.is_available():
        ranked = rank_external(items, client)
        if ranked is not None:
            return StrategyResult(via=Strategy.EXTERNAL_MODEL, value=ranked)
        logger.info("[ranker] Falling back to keyword ranking")

    return StrategyResult(via=Strategy.HEURISTIC, value=rank_heuristic(items))
