"""
Cross-source theme matching for India Trend Tracker.

Groups items from different sources into shared themes. Two strategies:

1. Heuristic (always available, deterministic):
   - extract keywords per title (important terms and phrases, or the
     first few long words when none hit)
   - group items by keyword, merging keywords that cover the same items
   - keep only groups spanning more than one source type
   - sort by total member score, top 5

2. External model (when a client is configured):
   - send up to 40 numbered, source-tagged titles
   - expect a JSON array of 3 ``{theme, description, items, sources}``
   - map item numbers back to items and drop single-source themes

Any model failure falls back to the heuristic strategy.
"""

import json
import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence

from trendtracker.models.trend_item import ScoredItem, SourceType, Strategy, StrategyResult, Theme
from trendtracker.scoring.keywords import IMPORTANT_PHRASES, IMPORTANT_TERMS
from trendtracker.sources.base import dedupe_by_title


logger = logging.getLogger(__name__)


# =============================================================================
# Matching Configuration
# =============================================================================

# Order in which source groups are walked; decides member order and ties
SOURCE_ORDER: tuple[SourceType, ...] = (
    SourceType.NEWS,
    SourceType.VIDEO,
    SourceType.SOCIAL_TREND,
    SourceType.SEARCH_TREND,
    SourceType.FORUM_POST,
)

MAX_HEURISTIC_THEMES = 5
MAX_MODEL_ITEMS = 40
MODEL_THEME_COUNT = 3

# Fallback keyword extraction
FALLBACK_WORD_COUNT = 3
FALLBACK_MIN_WORD_LENGTH = 4

_PUNCTUATION = re.compile(r"[^\w\s]")
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

ItemsBySource = Mapping[SourceType, Sequence[ScoredItem]]


# =============================================================================
# Keyword Extraction
# =============================================================================

def normalize_title(title: Optional[str]) -> str:
    """Lowercase a title and blank out punctuation."""
    return " ".join(_PUNCTUATION.sub(" ", (title or "").lower()).split())


def extract_keywords(title: Optional[str]) -> List[str]:
    """
    Extract grouping keywords from a title.

    Important terms and phrases are matched as substrings of the normalized
    title. When none hit, the first 3 words longer than 3 characters are used.

    Example:
        >>> extract_keywords("BREAKING: Modi announces new policy")
        ['modi', 'breaking', 'announces']
    """
    text = normalize_title(title)
    if not text:
        return []

    keywords = [term for term in IMPORTANT_TERMS if term in text]
    keywords.extend(phrase for phrase in IMPORTANT_PHRASES if phrase in text)
    if keywords:
        return keywords

    words = [word for word in text.split() if len(word) >= FALLBACK_MIN_WORD_LENGTH]
    # dict.fromkeys keeps order while dropping repeats
    return list(dict.fromkeys(words[:FALLBACK_WORD_COUNT]))


def ordered_items(items_by_source: ItemsBySource) -> List[ScoredItem]:
    """Flatten source groups in the canonical source order."""
    flattened: List[ScoredItem] = []
    for source_type in SOURCE_ORDER:
        flattened.extend(items_by_source.get(source_type) or [])
    return flattened


def dedupe_sources(items_by_source: ItemsBySource) -> Dict[SourceType, List[ScoredItem]]:
    """Drop case-insensitive duplicate titles within each source group."""
    return {
        source_type: dedupe_by_title(items)
        for source_type, items in items_by_source.items()
    }


def _build_theme(
    label: str,
    members: List[ScoredItem],
    strategy: Strategy,
    description: Optional[str] = None,
) -> Theme:
    return Theme(
        label=label,
        member_items=members,
        total_score=sum(member.score for member in members),
        source_types_present=frozenset(member.source_type for member in members),
        generated_by=strategy,
        description=description,
    )


# =============================================================================
# Heuristic Strategy
# =============================================================================

def _merged_label(keywords: List[str], title: str) -> str:
    """
    Join keywords that cover the same items into one label.

    Keywords are ordered by where they appear in the title; a keyword
    contained in a longer one (``modi`` in ``pm modi``) is dropped.
    """
    text = normalize_title(title)
    kept = [
        keyword for keyword in keywords
        if not any(keyword != other and keyword in other for other in keywords)
    ]
    kept.sort(key=lambda keyword: (text.find(keyword) if keyword in text else len(text)))
    return " ".join(kept)


def match_heuristic(items_by_source: ItemsBySource) -> List[Theme]:
    """
    Group items into cross-source themes by shared keywords.

    Args:
        items_by_source: Items keyed by source type (already de-duplicated).

    Returns:
        At most 5 themes spanning more than one source type, by total score.
    """
    groups: Dict[str, List[ScoredItem]] = {}
    for item in ordered_items(items_by_source):
        for keyword in extract_keywords(item.title):
            groups.setdefault(keyword, []).append(item)

    # Keywords with identical member lists describe the same theme
    merged: Dict[tuple, List[str]] = {}
    members_by_key: Dict[tuple, List[ScoredItem]] = {}
    for keyword, members in groups.items():
        key = tuple(id(member) for member in members)
        merged.setdefault(key, []).append(keyword)
        members_by_key[key] = members

    themes = []
    for key, keywords in merged.items():
        members = members_by_key[key]
        theme = _build_theme(_merged_label(keywords, members[0].title), members, Strategy.HEURISTIC)
        if theme.is_cross_source:
            themes.append(theme)

    themes.sort(key=lambda theme: theme.total_score, reverse=True)
    return themes[:MAX_HEURISTIC_THEMES]


# =============================================================================
# External Model Strategy
# =============================================================================

THEME_SYSTEM_PROMPT = (
    "You are an expert at identifying thematic connections across news and "
    "social media. Return only valid JSON arrays."
)


def build_theme_prompt(items: Sequence[ScoredItem]) -> str:
    """Build the theme-detection prompt for a numbered list of items."""
    content_list = "\n".join(
        f'{index}. [{item.source_type.label}] "{item.title}"'
        for index, item in enumerate(items, start=1)
    )

    return f"""Analyze the following content from various sources and identify the TOP {MODEL_THEME_COUNT} COMMON THEMES that appear across MULTIPLE sources (News, YouTube, Twitter, Google Trends, Reddit).

Look for thematic connections like:
- Same events described differently (e.g., "Israel-Iran conflict" and "Middle East crisis")
- Related topics (e.g., "Cricket match" and "India vs England")
- Common personalities (e.g., "Modi announces" and "PM Modi")
- Similar incidents (e.g., "Train accident" and "Railway mishap")

Content to analyze:
{content_list}

For each common theme, provide:
1. Theme name (concise, 2-4 words)
2. Brief description
3. Which content items belong to this theme (use the numbers from the list)

Return ONLY a JSON array with exactly {MODEL_THEME_COUNT} themes:
[
  {{
    "theme": "Theme Name",
    "description": "Brief description of the theme",
    "items": [1, 5, 12, 18],
    "sources": ["News", "YouTube", "Twitter"]
  }}
]"""


def parse_theme_response(text: str) -> Optional[list]:
    """
    Parse the model's JSON reply, tolerating a markdown code fence.

    Returns:
        The decoded list, or None if the reply is not a JSON array.
    """
    cleaned = _CODE_FENCE.sub("", (text or "").strip())
    try:
        data = json.loads(cleaned)
    except (json.JSONDecodeError, TypeError):
        return None
    return data if isinstance(data, list) else None


def _resolve_members(numbers, items: Sequence[ScoredItem]) -> List[ScoredItem]:
    members: List[ScoredItem] = []
    seen = set()
    for number in numbers if isinstance(numbers, list) else []:
        if isinstance(number, bool):
            continue
        try:
            index = int(number) - 1
        except (TypeError, ValueError):
            continue
        if 0 <= index < len(items) and index not in seen:
            seen.add(index)
            members.append(items[index])
    return members


def match_external(items_by_source: ItemsBySource, client) -> Optional[List[Theme]]:
    """
    Ask the external model for cross-source themes.

    Args:
        items_by_source: Items keyed by source type (already de-duplicated).
        client: An ``LLMClient`` (or anything with ``complete``).

    Returns:
        Cross-source themes, or None if the call or the parse failed.
    """
    items = ordered_items(items_by_source)[:MAX_MODEL_ITEMS]
    if not items:
        return None

    try:
        result = client.complete(
            build_theme_prompt(items),
            system=THEME_SYSTEM_PROMPT,
            max_tokens=500,
            temperature=0.3,
        )
    except Exception as e:
        logger.warning(f"[matcher] Model call failed: {e}")
        return None

    if not result.success:
        logger.warning(f"[matcher] Model call failed: {result.error}")
        return None

    raw_themes = parse_theme_response(result.text)
    if raw_themes is None:
        logger.warning("[matcher] Could not parse model themes")
        return None

    themes: List[Theme] = []
    for raw in raw_themes:
        if not isinstance(raw, dict):
            continue
        members = _resolve_members(raw.get("items"), items)
        if not members:
            continue
        theme = _build_theme(
            str(raw.get("theme") or "Untitled theme"),
            members,
            Strategy.EXTERNAL_MODEL,
            description=raw.get("description"),
        )
        if theme.is_cross_source:
            themes.append(theme)

    logger.info(f"[matcher] Model identified {len(themes)} cross-source themes")
    return themes


# =============================================================================
# Dispatcher
# =============================================================================

def match(items_by_source: ItemsBySource, client=None) -> StrategyResult[List[Theme]]:
    """
    Find themes shared across sources.

    Uses the external model when ``client`` is given and configured, and the
    keyword heuristic otherwise or whenever the model path fails.

    Args:
        items_by_source: Items keyed by source type.
        client: Optional model client.

    Returns:
        StrategyResult tagging which strategy produced the themes.
    """
    deduped = dedupe_sources(items_by_source)

    if client is not None and client.is_available():
        themes = match_external(deduped, client)
        if themes is not None:
            return StrategyResult(via=Strategy.EXTERNAL_MODEL, value=themes)
        logger.info("[matcher] Falling back to keyword matching")

    return StrategyResult(via=Strategy.HEURISTIC, value=match_heuristic(deduped))
