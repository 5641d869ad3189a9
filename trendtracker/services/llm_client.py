"""
External language model client.

Thin wrapper around an OpenAI-compatible chat completions endpoint. Used by
the theme matcher and the viral ranker; both fall back to keyword
heuristics whenever this client is unavailable or a call fails.
"""

import logging
import requests
from typing import Optional
from dataclasses import dataclass

from trendtracker.config import (
    MODEL_TIMEOUT,
    OPENAI_API_KEY,
    OPENAI_API_URL,
    OPENAI_MODEL,
    is_configured,
)


logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert in Indian social media trends and viral content. "
    "Answer exactly in the format requested."
)


@dataclass
class CompletionResult:
    """Result of a chat completion request."""
    success: bool
    text: str
    error: Optional[str] = None
    model: Optional[str] = None
    tokens_used: int = 0


class LLMClient:
    """Chat completions client. Never raises; failures come back as results."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = OPENAI_API_KEY if api_key is None else api_key
        self.model = model or OPENAI_MODEL
        self.api_url = api_url or OPENAI_API_URL
        self.timeout = timeout or MODEL_TIMEOUT

    def is_available(self) -> bool:
        """Check if the model is available (API key configured)."""
        return is_configured(self.api_key)

    def complete(
        self,
        prompt: str,
        system: str = DEFAULT_SYSTEM_PROMPT,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> CompletionResult:
        """
        Send a single-turn prompt and return the reply text.

        Args:
            prompt: User message.
            system: System message.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.

        Returns:
            CompletionResult with the reply, or with ``success=False`` and
            an error message.
        """
        if not self.is_available():
            return CompletionResult(
                success=False,
                text="",
                error="Model not configured. Add OPENAI_API_KEY to .env",
            )

        try:
            return self._call_api(prompt, system, max_tokens, temperature)
        except Exception as e:
            logger.warning(f"[model] Request failed: {e}")
            return CompletionResult(
                success=False,
                text="",
                error=f"API error: {str(e)}",
            )

    def _call_api(
        self, prompt: str, system: str, max_tokens: int, temperature: float
    ) -> CompletionResult:
        """Make the chat completions call."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        response = requests.post(
            self.api_url,
            headers=headers,
            json=payload,
            timeout=self.timeout,
        )

        if response.status_code != 200:
            try:
                error_msg = response.json().get("error", {}).get("message", response.text)
            except ValueError:
                error_msg = response.text
            logger.warning(f"[model] API error ({response.status_code}): {error_msg}")
            return CompletionResult(
                success=False,
                text="",
                error=f"API error ({response.status_code}): {error_msg}",
            )

        data = response.json()
        text = data["choices"][0]["message"]["content"].strip()
        tokens = data.get("usage", {}).get("total_tokens", 0)

        logger.debug(f"[model] {self.model} replied using {tokens} tokens")
        return CompletionResult(
            success=True,
            text=text,
            model=self.model,
            tokens_used=tokens,
        )


# Singleton instance
_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the singleton model client instance."""
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
