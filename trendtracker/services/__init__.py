"""
Services module.

External model client used for theme matching and viral ranking.
"""

from trendtracker.services.llm_client import CompletionResult, LLMClient, get_llm_client

__all__ = ["CompletionResult", "LLMClient", "get_llm_client"]
