"""
Base source abstraction for India Trend Tracker.

Defines the interface every trend source implements, plus the helpers the
sources share: title de-duplication, timestamp parsing and ordered
fallback chains.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from trendtracker.config import is_configured
from trendtracker.models.trend_item import ScoredItem, SourceType


logger = logging.getLogger(__name__)

# Desktop browser headers for HTML scraping
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

FallbackStep = Tuple[str, Callable[[], List[ScoredItem]]]


class Source(ABC):
    """
    Abstract base class for all trend sources.

    Each source (GNews, YouTube, Reddit, ...) implements ``_fetch_items``.
    Callers only use ``fetch``, which never raises:

    - a missing or placeholder credential returns [] without touching the network
    - any exception from ``_fetch_items`` is logged and returns []
    - the output is de-duplicated by case-insensitive title

    Attributes:
        name: Unique identifier for this source (e.g., "gnews", "reddit").
        source_type: Kind of items this source produces.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the unique name identifier for this source.

        Used as the log prefix and as the key in pipeline results.
        Should be lowercase, no spaces (e.g., "gnews", "google_trends").
        """
        pass

    @property
    @abstractmethod
    def source_type(self) -> SourceType:
        """Kind of items this source produces."""
        pass

    @property
    def api_key(self) -> Optional[str]:
        """Credential this source needs, or None for keyless sources."""
        return None

    @property
    def is_available(self) -> bool:
        """False when the source needs a credential that is not configured."""
        key = self.api_key
        return key is None or is_configured(key)

    def fetch(self, limit: Optional[int] = None) -> List[ScoredItem]:
        """
        Fetch trending items from this source.

        Args:
            limit: Maximum number of items to return. None keeps the
                   source's own cap.

        Returns:
            List of ScoredItem instances (empty if the source is unavailable
            or the upstream fails).
        """
        if not self.is_available:
            logger.warning(f"[{self.name}] API key not configured, skipping")
            return []

        try:
            items = self._fetch_items()
        except Exception as e:
            logger.error(f"[{self.name}] Error fetching items: {e}")
            return []

        items = dedupe_by_title(items)
        if limit is not None:
            items = items[:limit]

        logger.info(f"[{self.name}] Fetched {len(items)} items")
        return items

    @abstractmethod
    def _fetch_items(self) -> List[ScoredItem]:
        """
        Do the actual upstream work.

        Implementations may raise; ``fetch`` converts any exception into
        an empty result.
        """
        pass

    def __str__(self) -> str:
        return f"Source({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


# =============================================================================
# Shared Helpers
# =============================================================================

def dedupe_by_title(items: Iterable[ScoredItem]) -> List[ScoredItem]:
    """Keep the first item for each case-insensitive title, preserving order."""
    seen = set()
    unique: List[ScoredItem] = []
    for item in items:
        key = item.title.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def run_fallback_chain(source_name: str, steps: Sequence[FallbackStep]) -> List[ScoredItem]:
    """
    Run fetch strategies in order until one yields items.

    A step that raises is logged and treated like a step that returned
    nothing, so the next step runs.

    Args:
        source_name: Log prefix.
        steps: (label, callable) pairs, most preferred first.

    Returns:
        Items from the first productive step, or [] if none produced any.
    """
    for position, (label, step) in enumerate(steps):
        try:
            items = step()
        except Exception as e:
            logger.warning(f"[{source_name}] {label} failed: {e}")
            items = []

        if items:
            if position > 0:
                logger.info(f"[{source_name}] Using {label} ({len(items)} items)")
            return items

        if position + 1 < len(steps):
            logger.info(f"[{source_name}] {label} returned nothing, trying {steps[position + 1][0]}")

    return []


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed), or None if unparseable."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return None
