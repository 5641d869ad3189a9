"""
India Trend Tracker Pipeline - Core execution logic.

This module orchestrates one complete pass:

    Sources (concurrent) → Merge → Theme Matching → Viral Ranking → Summary

Steps:
1. Instantiate sources (all, or the subset named in the config)
2. Fetch from every source in parallel and wait for all of them
3. Group items by source type (news from both news APIs is merged)
4. Find cross-source themes (model or keyword heuristic)
5. Rank everything by viral potential (model or keyword heuristic)

Design principles:
- Error isolation: one source failure doesn't stop others
- No shared state: every run re-fetches and re-scores from scratch
- Model optional: without a configured model both analysis steps
  use their keyword heuristics
"""

import concurrent.futures
import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from trendtracker.analysis.matcher import SOURCE_ORDER, match, ordered_items
from trendtracker.analysis.ranker import rank
from trendtracker.models.trend_item import RankedItem, ScoredItem, SourceType, StrategyResult, Theme
from trendtracker.services.llm_client import get_llm_client
from trendtracker.sources.base import Source
from trendtracker.sources import (
    GNewsSource,
    GoogleTrendsSource,
    MediaStackSource,
    RedditSource,
    TwitterTrendsSource,
    YouTubeSource,
)


logger = logging.getLogger(__name__)

# Registered source names, in report order
SOURCE_NAMES: tuple[str, ...] = (
    "gnews",
    "mediastack",
    "youtube",
    "google_trends",
    "twitter",
    "reddit",
)


def build_sources(names: Optional[List[str]] = None) -> List[Source]:
    """
    Instantiate the registered sources.

    Args:
        names: Source names to keep (None = all).

    Raises:
        ValueError: If a name is not a registered source.
    """
    all_sources: List[Source] = [
        GNewsSource(),
        MediaStackSource(),
        YouTubeSource(),
        GoogleTrendsSource(),
        TwitterTrendsSource(),
        RedditSource(),
    ]
    if not names:
        return all_sources

    unknown = sorted(set(names) - set(SOURCE_NAMES))
    if unknown:
        raise ValueError(f"Unknown source(s): {', '.join(unknown)}")
    return [source for source in all_sources if source.name in names]


def group_by_source_type(results: List["SourceResult"]) -> Dict[SourceType, List[ScoredItem]]:
    """
    Merge source results into one list per source type.

    Groups keep fetch order, so news lists GNews items before MediaStack.
    """
    grouped: Dict[SourceType, List[ScoredItem]] = {source_type: [] for source_type in SOURCE_ORDER}
    for result in results:
        grouped[result.source_type].extend(result.items)

    return grouped


# =============================================================================
# Pipeline Result Data Structures
# =============================================================================

@dataclass
class SourceResult:
    """Result of fetching from a single source."""
    source_name: str
    source_type: SourceType
    items: List[ScoredItem] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def items_fetched(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        return {
            "source": self.source_name,
            "sourceType": self.source_type.value,
            "itemsFetched": self.items_fetched,
            "success": self.success,
            "error": self.error,
            "durationMs": round(self.duration_ms),
        }


@dataclass
class PipelineResult:
    """Complete result of a pipeline execution."""
    started_at: datetime
    finished_at: Optional[datetime] = None

    # Source results
    source_results: List[SourceResult] = field(default_factory=list)
    items_by_source: Dict[SourceType, List[ScoredItem]] = field(default_factory=dict)

    # Analysis results (None if the step did not run)
    themes: Optional[StrategyResult[List[Theme]]] = None
    viral: Optional[StrategyResult[List[RankedItem]]] = None

    # Errors
    errors: List[str] = field(default_factory=list)

    def items_of(self, source_type: SourceType) -> List[ScoredItem]:
        return self.items_by_source.get(source_type, [])

    @property
    def total_items(self) -> int:
        return sum(len(items) for items in self.items_by_source.values())

    @property
    def theme_list(self) -> List[Theme]:
        return self.themes.value if self.themes else []

    @property
    def viral_list(self) -> List[RankedItem]:
        return self.viral.value if self.viral else []

    @property
    def sources_succeeded(self) -> int:
        """Number of sources that fetched successfully."""
        return sum(1 for r in self.source_results if r.success)

    @property
    def sources_failed(self) -> int:
        """Number of sources that failed."""
        return sum(1 for r in self.source_results if not r.success)

    @property
    def duration_seconds(self) -> float:
        """Total pipeline duration in seconds."""
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape served by the API."""
        return {
            "news": [item.to_dict() for item in self.items_of(SourceType.NEWS)],
            "youtube": [item.to_dict() for item in self.items_of(SourceType.VIDEO)],
            "googleTrends": [item.to_dict() for item in self.items_of(SourceType.SEARCH_TREND)],
            "twitter": [item.to_dict() for item in self.items_of(SourceType.SOCIAL_TREND)],
            "reddit": [item.to_dict() for item in self.items_of(SourceType.FORUM_POST)],
            "crossMatched": [theme.to_dict() for theme in self.theme_list],
            "viralContent": [ranked.to_dict() for ranked in self.viral_list],
            "summary": {
                "totalNews": len(self.items_of(SourceType.NEWS)),
                "totalYouTube": len(self.items_of(SourceType.VIDEO)),
                "totalTrends": len(self.items_of(SourceType.SEARCH_TREND)),
                "totalTwitter": len(self.items_of(SourceType.SOCIAL_TREND)),
                "totalReddit": len(self.items_of(SourceType.FORUM_POST)),
                "crossMatchedTopics": len(self.theme_list),
                "viralContent": len(self.viral_list),
                "themesGeneratedBy": self.themes.via.value if self.themes else None,
                "viralRankedBy": self.viral.via.value if self.viral else None,
                "sources": [r.to_dict() for r in self.source_results],
                "durationSeconds": round(self.duration_seconds, 2),
            },
        }

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            "=" * 60,
            "TREND ANALYSIS SUMMARY",
            "=" * 60,
            f"Started:  {self.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Duration: {self.duration_seconds:.2f}s",
            "",
            "Sources:",
        ]

        for sr in self.source_results:
            status = "✓" if sr.success else "✗"
            lines.append(f"  {status} {sr.source_name}: {sr.items_fetched} items ({sr.duration_ms:.0f}ms)")
            if sr.error:
                lines.append(f"      Error: {sr.error}")

        lines.extend([
            "",
            f"Sources:       {self.sources_succeeded} succeeded, {self.sources_failed} failed",
            f"Total items:   {self.total_items}",
            f"Themes:        {len(self.theme_list)}"
            + (f" (via {self.themes.via.value})" if self.themes else ""),
            f"Viral ranking: {len(self.viral_list)}"
            + (f" (via {self.viral.via.value})" if self.viral else ""),
        ])

        if self.errors:
            lines.extend([
                "",
                "Errors:",
            ])
            for error in self.errors[:5]:  # Show first 5
                lines.append(f"  - {error}")

        lines.append("=" * 60)
        return "\n".join(lines)


# =============================================================================
# Pipeline Configuration
# =============================================================================

@dataclass
class PipelineConfig:
    """
    Configuration for a pipeline run.

    CLI arguments override the defaults.
    """
    # Source selection (None = all sources)
    sources: Optional[List[str]] = None

    # Use the external model when configured
    use_model: bool = True

    verbose: bool = False
    max_workers: int = len(SOURCE_NAMES)

    @classmethod
    def from_args(cls, args) -> "PipelineConfig":
        """Create config from argparse namespace."""
        return cls(
            sources=getattr(args, "sources", None) or None,
            use_model=not getattr(args, "no_model", False),
            verbose=getattr(args, "verbose", False),
        )


# =============================================================================
# Pipeline Class
# =============================================================================

class TrendPipeline:
    """
    Main pipeline for fetching, matching and ranking trends.

    Usage:
        pipeline = TrendPipeline(PipelineConfig(sources=["reddit", "twitter"]))
        result = pipeline.run()
        print(result.to_summary())
    """

    def __init__(
        self,
        config: PipelineConfig = None,
        sources: Optional[List[Source]] = None,
        client=None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration. Defaults to PipelineConfig().
            sources: Explicit source instances (overrides config.sources).
            client: Model client. Defaults to the shared client when
                    config.use_model is set.
        """
        self.config = config or PipelineConfig()
        self._sources = sources
        self._client = client

    @property
    def sources(self) -> List[Source]:
        if self._sources is None:
            self._sources = build_sources(self.config.sources)
        return self._sources

    @property
    def client(self):
        """Model client, or None when the model is disabled."""
        if not self.config.use_model:
            return None
        if self._client is None:
            self._client = get_llm_client()
        return self._client

    def _fetch_from_source(self, source: Source) -> SourceResult:
        """
        Fetch items from a single source with error isolation.

        Returns:
            SourceResult with success/failure status and items.
        """
        start_time = datetime.now()

        try:
            items = source.fetch()
            duration_ms = (datetime.now() - start_time).total_seconds() * 1000
            return SourceResult(
                source_name=source.name,
                source_type=source.source_type,
                items=items,
                success=True,
                duration_ms=duration_ms,
            )

        except Exception as e:
            duration_ms = (datetime.now() - start_time).total_seconds() * 1000
            error_msg = f"{type(e).__name__}: {str(e)}"
            logger.error(f"[{source.name}] {error_msg}")

            if self.config.verbose:
                error_msg += f"\n{traceback.format_exc()}"

            return SourceResult(
                source_name=source.name,
                source_type=source.source_type,
                success=False,
                error=error_msg,
                duration_ms=duration_ms,
            )

    def fetch_all(self) -> List[SourceResult]:
        """
        Fetch from all sources concurrently and wait for every one.

        Returns:
            One SourceResult per source, in registration order.
        """
        sources = self.sources
        if not sources:
            return []

        logger.debug(f"Fetching from {len(sources)} sources: {[s.name for s in sources]}")

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            futures = [pool.submit(self._fetch_from_source, source) for source in sources]
            concurrent.futures.wait(futures)

        return [future.result() for future in futures]

    def fetch_grouped(self) -> Dict[SourceType, List[ScoredItem]]:
        """Fetch everything and group items by source type."""
        return group_by_source_type(self.fetch_all())

    def find_themes(self, items_by_source: Dict[SourceType, List[ScoredItem]]) -> StrategyResult[List[Theme]]:
        return match(items_by_source, client=self.client)

    def rank_viral(self, items_by_source: Dict[SourceType, List[ScoredItem]]) -> StrategyResult[List[RankedItem]]:
        return rank(ordered_items(items_by_source), client=self.client)

    def run(self) -> PipelineResult:
        """
        Execute the full pipeline.

        Steps:
        1. Fetch from all sources (concurrent, errors isolated)
        2. Group items by source type
        3. Find cross-source themes
        4. Rank by viral potential

        Returns:
            PipelineResult with execution details.
        """
        result = PipelineResult(started_at=datetime.now())

        try:
            result.source_results = self.fetch_all()
            result.items_by_source = group_by_source_type(result.source_results)
            logger.info(f"Fetched {result.total_items} items from {len(result.source_results)} sources")

            result.themes = self.find_themes(result.items_by_source)
            result.viral = self.rank_viral(result.items_by_source)

        except Exception as e:
            logger.exception("Pipeline error")
            result.errors.append(f"Pipeline error: {str(e)}")
            if self.config.verbose:
                result.errors.append(traceback.format_exc())

        result.finished_at = datetime.now()
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def run_pipeline(
    sources: List[str] = None,
    use_model: bool = True,
    verbose: bool = False,
) -> PipelineResult:
    """
    Run the pipeline with specified options.

    Convenience function for programmatic use.

    Args:
        sources: List of source names to use (None = all).
        use_model: If False, skip the external model entirely.
        verbose: If True, keep tracebacks in errors.

    Returns:
        PipelineResult with execution details.
    """
    config = PipelineConfig(sources=sources, use_model=use_model, verbose=verbose)
    return TrendPipeline(config).run()
