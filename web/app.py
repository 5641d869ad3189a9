"""
India Trend Tracker - JSON API

A Flask app serving live trends, cross-source themes and the viral ranking.
Every request re-fetches from the upstream sources.

Run with: python -m web.app
Or: cd web && python app.py
"""

import sys
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, jsonify

from trendtracker.config import DEBUG, PORT, REDDIT_MAX_AGE_HOURS
from trendtracker.log import configure_logging
from trendtracker.models.trend_item import SourceType, Strategy
from trendtracker.pipeline import PipelineConfig, TrendPipeline
from trendtracker.services.llm_client import get_llm_client
from trendtracker.sources.reddit import SUBREDDIT_FEEDS

app = Flask(__name__)
logger = configure_logging()

THEME_CRITERIA = [
    "Same events described differently",
    "Related topics",
    "Common personalities",
    "Similar incidents",
    "Trending subjects",
]

VIRAL_CRITERIA = [
    "Breaking news impact",
    "Controversy potential",
    "Celebrity/entertainment value",
    "Emotional impact",
    "Social shareability",
    "Indian relevance",
]

# Static trends served by /api/trends
SAMPLE_TRENDS = [
    {
        "id": 1,
        "title": "Artificial Intelligence",
        "category": "Technology",
        "popularity": 95,
        "growth": 12.5,
        "description": "AI continues to dominate tech discussions",
    },
    {
        "id": 2,
        "title": "Sustainable Living",
        "category": "Lifestyle",
        "popularity": 78,
        "growth": 8.3,
        "description": "Growing interest in eco-friendly practices",
    },
    {
        "id": 3,
        "title": "Remote Work",
        "category": "Business",
        "popularity": 85,
        "growth": -2.1,
        "description": "Remote work trends stabilizing post-pandemic",
    },
]


# =============================================================================
# Helpers
# =============================================================================

def build_pipeline(sources: Optional[list] = None) -> TrendPipeline:
    """Pipeline restricted to the given source names (None = all)."""
    return TrendPipeline(PipelineConfig(sources=sources))


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _success(data, count: Optional[int] = None, meta: Optional[dict] = None):
    body = {"success": True, "data": data}
    if count is not None:
        body["count"] = count
    body["timestamp"] = _timestamp()
    if meta is not None:
        body["meta"] = meta
    return jsonify(body)


def _failure(message: str, error: Exception):
    logger.error(f"[api] {message}: {error}")
    return jsonify({
        "success": False,
        "message": message,
        "error": str(error),
    }), 500


def _method_label(strategy: Strategy, model: str) -> str:
    if strategy is Strategy.EXTERNAL_MODEL:
        return model
    return "Manual keyword matching"


def _source_items(sources: list, source_type: SourceType) -> list:
    grouped = build_pipeline(sources).fetch_grouped()
    items = sorted(grouped[source_type], key=lambda item: item.score, reverse=True)
    return [item.to_dict() for item in items]


# =============================================================================
# Routes
# =============================================================================

@app.route("/")
def index():
    """Service banner."""
    return jsonify({"message": "India Trend Tracker API is running!"})


@app.route("/api/trends")
def api_trends():
    """Static sample trends."""
    return _success(SAMPLE_TRENDS, count=len(SAMPLE_TRENDS))


@app.route("/api/trends/<trend_id>")
def api_trend(trend_id: str):
    """One sample trend by id."""
    trend = next((t for t in SAMPLE_TRENDS if str(t["id"]) == trend_id.strip()), None)
    if trend is None:
        return jsonify({"success": False, "message": "Trend not found"}), 404
    return _success(trend)


@app.route("/api/trends/category/<category>")
def api_trends_by_category(category: str):
    """Sample trends in a category (case-insensitive)."""
    trends = [t for t in SAMPLE_TRENDS if t["category"].lower() == category.lower()]
    return _success(trends, count=len(trends))


@app.route("/api/live-trends")
def api_live_trends():
    """Full pipeline: every source, themes and viral ranking."""
    try:
        result = build_pipeline().run()
        if result.errors:
            raise RuntimeError(result.errors[0])
        return _success(result.to_dict())
    except Exception as e:
        return _failure("Failed to fetch live trends", e)


@app.route("/api/live-trends/news")
def api_news():
    try:
        data = _source_items(["gnews", "mediastack"], SourceType.NEWS)
        return _success(data, count=len(data))
    except Exception as e:
        return _failure("Failed to fetch news trends", e)


@app.route("/api/live-trends/youtube")
def api_youtube():
    try:
        data = _source_items(["youtube"], SourceType.VIDEO)
        return _success(data, count=len(data))
    except Exception as e:
        return _failure("Failed to fetch YouTube trends", e)


@app.route("/api/live-trends/twitter")
def api_twitter():
    try:
        data = _source_items(["twitter"], SourceType.SOCIAL_TREND)
        return _success(data, count=len(data))
    except Exception as e:
        return _failure("Failed to fetch Twitter trends", e)


@app.route("/api/live-trends/google")
def api_google():
    try:
        data = _source_items(["google_trends"], SourceType.SEARCH_TREND)
        return _success(data, count=len(data))
    except Exception as e:
        return _failure("Failed to fetch Google trends", e)


@app.route("/api/live-trends/reddit")
def api_reddit():
    try:
        data = _source_items(["reddit"], SourceType.FORUM_POST)
        subreddits = sorted({f"r/{feed.subreddit}" for feed in SUBREDDIT_FEEDS})
        return _success(data, count=len(data), meta={
            "subreddits": subreddits,
            "timeframe": f"Last {REDDIT_MAX_AGE_HOURS} hours",
            "criteria": "High upvote ratio, growing comments",
        })
    except Exception as e:
        return _failure("Failed to fetch Reddit trends", e)


@app.route("/api/live-trends/themes")
def api_themes():
    """Cross-source themes over a fresh fetch of every source."""
    try:
        pipeline = build_pipeline()
        grouped = pipeline.fetch_grouped()
        themes = pipeline.find_themes(grouped)
        data = [theme.to_dict() for theme in themes.value]
        return _success(data, count=len(data), meta={
            "method": _method_label(themes.via, get_llm_client().model),
            "strategy": themes.via.value,
            "totalAnalyzed": sum(len(items) for items in grouped.values()),
            "themesFound": len(data),
            "criteria": THEME_CRITERIA,
        })
    except Exception as e:
        return _failure("Failed to fetch cross-matched themes", e)


@app.route("/api/live-trends/viral")
def api_viral():
    """Viral ranking over a fresh fetch of every source."""
    try:
        pipeline = build_pipeline()
        grouped = pipeline.fetch_grouped()
        ranked = pipeline.rank_viral(grouped)
        data = [item.to_dict() for item in ranked.value]
        method = (
            get_llm_client().model
            if ranked.via is Strategy.EXTERNAL_MODEL
            else "Manual viral scoring"
        )
        return _success(data, count=len(data), meta={
            "method": method,
            "strategy": ranked.via.value,
            "totalAnalyzed": sum(len(items) for items in grouped.values()),
            "viralSelected": len(data),
            "criteria": VIRAL_CRITERIA,
        })
    except Exception as e:
        return _failure("Failed to fetch viral content", e)


@app.route("/api/ai/status")
def api_ai_status():
    """Check if the external model is available."""
    client = get_llm_client()
    return jsonify({
        "available": client.is_available(),
        "model": client.model if client.is_available() else None,
    })


@app.errorhandler(500)
def internal_error(error):
    return jsonify({
        "success": False,
        "message": "Internal server error",
        "error": str(error),
    }), 500


if __name__ == "__main__":
    print("=" * 50)
    print("🚀 India Trend Tracker API")
    print("=" * 50)
    print(f"Listening on http://localhost:{PORT}")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=DEBUG, port=PORT)
