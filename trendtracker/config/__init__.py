"""
Configuration module.

Handles environment variables, API keys, and application settings.
"""

from trendtracker.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    PORT,
    GNEWS_API_KEY,
    MEDIASTACK_API_KEY,
    YOUTUBE_API_KEY,
    OPENAI_API_KEY,
    OPENAI_MODEL,
    OPENAI_API_URL,
    REQUEST_TIMEOUT,
    SCRAPE_TIMEOUT,
    MODEL_TIMEOUT,
    REDDIT_MAX_AGE_HOURS,
    YOUTUBE_LOOKBACK_HOURS,
    is_configured,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "PORT",
    "GNEWS_API_KEY",
    "MEDIASTACK_API_KEY",
    "YOUTUBE_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_API_URL",
    "REQUEST_TIMEOUT",
    "SCRAPE_TIMEOUT",
    "MODEL_TIMEOUT",
    "REDDIT_MAX_AGE_HOURS",
    "YOUTUBE_LOOKBACK_HOURS",
    "is_configured",
    "validate_config",
    "print_config_summary",
]
