"""
Configuration module for India Trend Tracker.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.

Every source credential is optional: a missing or placeholder value
disables only that one source.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of trendtracker/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Console log level (overridden to DEBUG when DEBUG=true)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Port for the HTTP API
PORT: int = int(os.getenv("PORT", "3001"))


# =============================================================================
# Source Credentials (Optional)
# =============================================================================

# GNews top-headlines API token
GNEWS_API_KEY: str = os.getenv("GNEWS_API_KEY", "")

# MediaStack news API access key
MEDIASTACK_API_KEY: str = os.getenv("MEDIASTACK_API_KEY", "")

# YouTube Data API v3 key
YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")


# =============================================================================
# External Model (Optional)
# =============================================================================

# Key for an OpenAI-compatible chat completions endpoint
# When unset, theme matching and viral ranking use the keyword heuristics
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

OPENAI_API_URL: str = os.getenv(
    "OPENAI_API_URL", "https://api.openai.com/v1/chat/completions"
)


# =============================================================================
# Data Fetching Configuration
# =============================================================================

# HTTP request timeout in seconds for API calls
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))

# HTTP request timeout in seconds for news-site scraping
SCRAPE_TIMEOUT: int = int(os.getenv("SCRAPE_TIMEOUT", "8"))

# Timeout for the external model call
MODEL_TIMEOUT: int = int(os.getenv("MODEL_TIMEOUT", "30"))

# Reddit posts older than this are ignored
REDDIT_MAX_AGE_HOURS: int = int(os.getenv("REDDIT_MAX_AGE_HOURS", "12"))

# YouTube search only considers videos published within this window
YOUTUBE_LOOKBACK_HOURS: int = int(os.getenv("YOUTUBE_LOOKBACK_HOURS", "12"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_configured(value: str | None) -> bool:
    """
    Check whether a credential holds a usable value.

    Empty strings and the ``your_..._here`` placeholders shipped in example
    env files both count as "not configured".

    Args:
        value: Raw credential value.

    Returns:
        True if the value looks like a real credential.
    """
    if not value or not value.strip():
        return False
    lowered = value.strip().lower()
    return not (lowered.startswith("your_") and lowered.endswith("_here"))


def validate_config() -> list[str]:
    """
    Validate configuration values.

    Returns:
        List of invalid configuration problems (empty if all valid).
    """
    errors = []

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if SCRAPE_TIMEOUT < 1:
        errors.append("SCRAPE_TIMEOUT must be at least 1 second")

    if MODEL_TIMEOUT < 1:
        errors.append("MODEL_TIMEOUT must be at least 1 second")

    if REDDIT_MAX_AGE_HOURS < 1:
        errors.append("REDDIT_MAX_AGE_HOURS must be at least 1")

    if YOUTUBE_LOOKBACK_HOURS < 1:
        errors.append("YOUTUBE_LOOKBACK_HOURS must be at least 1")

    if not (0 < PORT < 65536):
        errors.append(f"PORT must be a valid TCP port, got {PORT}")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    def _mask(value: str) -> str:
        return "***" if is_configured(value) else "(not set)"

    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  GNEWS_API_KEY: {_mask(GNEWS_API_KEY)}")
    print(f"  MEDIASTACK_API_KEY: {_mask(MEDIASTACK_API_KEY)}")
    print(f"  YOUTUBE_API_KEY: {_mask(YOUTUBE_API_KEY)}")
    print(f"  OPENAI_API_KEY: {_mask(OPENAI_API_KEY)}")
    print(f"  OPENAI_MODEL: {OPENAI_MODEL}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  SCRAPE_TIMEOUT: {SCRAPE_TIMEOUT}s")
    print(f"  REDDIT_MAX_AGE_HOURS: {REDDIT_MAX_AGE_HOURS}")
