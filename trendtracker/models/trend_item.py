"""
Core data models for India Trend Tracker.

Defines the records that flow through the system:

    adapters -> ScoredItem -> matcher -> Theme
                           -> ranker  -> RankedItem

All records are built fresh for each request and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar


T = TypeVar("T")


class SourceType(str, Enum):
    """Kind of upstream an item came from."""

    NEWS = "news"
    VIDEO = "video"
    SEARCH_TREND = "search_trend"
    SOCIAL_TREND = "social_trend"
    FORUM_POST = "forum_post"

    @property
    def label(self) -> str:
        """Human-readable tag used in prompts and reports."""
        return _SOURCE_TYPE_LABELS[self]


_SOURCE_TYPE_LABELS = {
    SourceType.NEWS: "News",
    SourceType.VIDEO: "YouTube",
    SourceType.SEARCH_TREND: "Google Trends",
    SourceType.SOCIAL_TREND: "Twitter",
    SourceType.FORUM_POST: "Reddit",
}


class Strategy(str, Enum):
    """Which path produced a theme or ranking."""

    HEURISTIC = "heuristic"
    EXTERNAL_MODEL = "external_model"


@dataclass(frozen=True)
class EngagementMetrics:
    """
    Raw engagement numbers reported by a platform.

    Any field the platform does not report stays None and reads as zero
    through the ``*_or_zero`` helpers.
    """
    views: Optional[int] = None
    upvotes: Optional[int] = None
    comments: Optional[int] = None
    upvote_ratio: Optional[float] = None

    @property
    def views_or_zero(self) -> int:
        return self.views or 0

    @property
    def upvotes_or_zero(self) -> int:
        return self.upvotes or 0

    @property
    def comments_or_zero(self) -> int:
        return self.comments or 0

    @property
    def upvote_ratio_or_zero(self) -> float:
        return self.upvote_ratio or 0.0

    def to_dict(self) -> dict:
        data = {
            "views": self.views,
            "upvotes": self.upvotes,
            "comments": self.comments,
            "upvoteRatio": self.upvote_ratio,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class ScoredItem:
    """
    A single trending headline, video, search trend, social trend or post.

    Produced by a source adapter and never changed afterwards. The viral
    ranker wraps items in RankedItem instead of touching ``score``.

    Attributes:
        title: Cleaned headline / trend text.
        source: Publisher, site, channel or community the item came from.
        source_type: Which adapter family produced the item.
        score: Base relevance score assigned by the adapter.
        url: Link to the original content, if known.
        engagement: Platform engagement numbers, if any.
        published_at: When the content was published, if known.
        metadata: Adapter-specific display fields (channel, traffic label, ...).
    """
    title: str
    source: str
    source_type: SourceType
    score: float = 0.0
    url: Optional[str] = None
    engagement: Optional[EngagementMetrics] = None
    published_at: Optional[datetime] = None
    metadata: dict = field(default_factory=dict, compare=False)

    @property
    def metrics(self) -> EngagementMetrics:
        """Engagement metrics, with an all-empty record when absent."""
        return self.engagement or EngagementMetrics()

    def to_dict(self) -> dict:
        """
        Convert to a JSON-compatible dictionary.

        Datetime fields are converted to ISO format strings.
        """
        data: dict[str, Any] = {
            "title": self.title,
            "source": self.source,
            "sourceType": self.source_type.value,
            "score": self.score,
        }
        if self.url:
            data["url"] = self.url
        if self.engagement is not None:
            data["engagementMetrics"] = self.engagement.to_dict()
        if self.published_at is not None:
            data["publishedAt"] = self.published_at.isoformat()
        data.update(self.metadata)
        return data

    def __str__(self) -> str:
        return f"[{self.source_type.label}] {self.title} (score: {self.score})"


@dataclass(frozen=True)
class RankedItem:
    """An item placed in the viral ranking."""
    item: ScoredItem
    viral_score: float
    viral_rank: int
    ranked_by: Strategy

    def to_dict(self) -> dict:
        data = self.item.to_dict()
        data.update({
            "viralScore": self.viral_score,
            "viralRank": self.viral_rank,
            "rankedBy": self.ranked_by.value,
        })
        return data


@dataclass
class Theme:
    """
    A topic that recurs across more than one kind of source.

    Attributes:
        label: Short theme name (keyword or model-given name).
        member_items: Items belonging to the theme, in discovery order.
        total_score: Sum of the members' base scores.
        source_types_present: Distinct source types among the members.
        generated_by: Strategy that produced the theme.
        description: Optional model-written description.
    """
    label: str
    member_items: list[ScoredItem]
    total_score: float
    source_types_present: frozenset[SourceType]
    generated_by: Strategy
    description: Optional[str] = None

    @property
    def is_cross_source(self) -> bool:
        """A theme is only meaningful when members span several source types."""
        return len(self.source_types_present) > 1

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "description": self.description,
            "totalScore": self.total_score,
            "sourceTypesPresent": sorted(t.value for t in self.source_types_present),
            "generatedBy": self.generated_by.value,
            "memberCount": len(self.member_items),
            "memberItems": [item.to_dict() for item in self.member_items],
        }


@dataclass(frozen=True)
class StrategyResult(Generic[T]):
    """Outcome of a model-or-heuristic dispatch, tagged with the path taken."""
    via: Strategy
    value: T

    @property
    def used_model(self) -> bool:
        return self.via is Strategy.EXTERNAL_MODEL
