#!/usr/bin/env python3
"""
India Trend Tracker - What is going viral in India right now.

Command-line entry point for running the full pipeline once:
  - Fetch trends from news APIs, YouTube, Google Trends, Twitter and Reddit
  - Find themes that recur across sources
  - Rank everything by viral potential
  - Print a sectioned report (or JSON)

Usage:
    python main.py                      # Run full pipeline
    python main.py --json               # Print the API payload as JSON
    python main.py --sources reddit     # Only fetch from Reddit
    python main.py --no-model           # Keyword heuristics only
    python main.py --verbose            # Debug logging

Examples:
    # Quick keyless run
    python main.py --sources google_trends twitter reddit --no-model

    # Everything, for piping into other tools
    python main.py --json > trends.json
"""

import argparse
import json
import sys
from typing import List

from trendtracker.config import print_config_summary, validate_config
from trendtracker.log import configure_logging
from trendtracker.models.trend_item import ScoredItem, SourceType
from trendtracker.pipeline import (
    SOURCE_NAMES,
    PipelineConfig,
    PipelineResult,
    TrendPipeline,
)


# Report sections, in display order
REPORT_SECTIONS = (
    (SourceType.NEWS, "📰 TOP NEWS"),
    (SourceType.SOCIAL_TREND, "🐦 TWITTER TRENDS"),
    (SourceType.VIDEO, "📺 YOUTUBE VIDEOS"),
    (SourceType.SEARCH_TREND, "🔍 GOOGLE TRENDS"),
    (SourceType.FORUM_POST, "💬 REDDIT POSTS"),
)

ITEMS_PER_SECTION = 10


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="trendtracker",
        description="Fetch, match and rank trending content for India.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           Run full pipeline with defaults
  %(prog)s --json                    Print JSON instead of the report
  %(prog)s --sources reddit twitter  Only fetch from Reddit and Twitter
  %(prog)s --no-model                Never call the external model
  %(prog)s -v --no-model             Debug logging, heuristics only
        """,
    )

    parser.add_argument(
        "--sources",
        nargs="+",
        choices=list(SOURCE_NAMES),
        metavar="SOURCE",
        help=f"Only fetch from specific sources (default: all; choices: {', '.join(SOURCE_NAMES)})",
    )

    parser.add_argument(
        "--no-model",
        action="store_true",
        help="Use keyword heuristics for themes and ranking even if a model is configured",
    )

    # Output options
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 2.0.0",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("India Trend Tracker Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def _format_item(position: int, item: ScoredItem) -> str:
    line = f"{position:>2}. {item.title} [{item.source}] (score: {item.score})"
    metrics = item.metrics
    if metrics.views:
        line += f" 👁 {metrics.views:,}"
    if metrics.upvotes:
        line += f" ⬆ {metrics.upvotes:,} 💬 {metrics.comments_or_zero:,}"
    if item.metadata.get("traffic"):
        line += f" [{item.metadata['traffic']}]"
    return line


def format_report(result: PipelineResult) -> str:
    """Render the sectioned console report."""
    lines: List[str] = []

    for source_type, heading in REPORT_SECTIONS:
        items = result.items_of(source_type)
        lines.extend(["", heading, "-" * 60])
        if not items:
            lines.append("  (nothing found)")
        for position, item in enumerate(items[:ITEMS_PER_SECTION], start=1):
            lines.append(_format_item(position, item))

    lines.extend(["", "🔗 CROSS-SOURCE THEMES", "-" * 60])
    if not result.theme_list:
        lines.append("  (no theme spans more than one source)")
    for position, theme in enumerate(result.theme_list, start=1):
        sources = ", ".join(sorted(t.label for t in theme.source_types_present))
        lines.append(f"{position:>2}. {theme.label} (total: {theme.total_score}) - {sources}")
        if theme.description:
            lines.append(f"      {theme.description}")

    lines.extend(["", "🔥 VIRAL RANKING", "-" * 60])
    for ranked in result.viral_list:
        item = ranked.item
        lines.append(
            f"{ranked.viral_rank:>2}. {item.title} "
            f"[{item.source_type.label}] (viral: {ranked.viral_score})"
        )

    return "\n".join(lines)


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle --show-config
    if args.show_config:
        show_config()
        return 0

    configure_logging(verbose=args.verbose)
    config = PipelineConfig.from_args(args)

    try:
        result = TrendPipeline(config).run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_report(result))
        print()
        print(result.to_summary())

    if result.errors:
        return 1

    # Every selected source failed or returned nothing
    if result.source_results and result.total_items == 0:
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
