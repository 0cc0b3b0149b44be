"""LLM provider interface and implementations."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from openai import OpenAI

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = 429
SERVICE_UNAVAILABLE = 503
TRANSIENT_STATUSES = {TOO_MANY_REQUESTS, SERVICE_UNAVAILABLE}


def is_transient(error: BaseException) -> bool:
    """Rate limiting and unavailability clear up on their own; other errors do not."""
    status = getattr(error, "status_code", None) or getattr(error, "status", None)
    return status in TRANSIENT_STATUSES


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Send a single-turn prompt.

        Args:
            prompt: Full prompt text

        Returns:
            Response text
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of LLM provider."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        temperature: float = 0.3,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL
            temperature: Sampling temperature
        """
        # Retries are handled by the classification service with long waits
        self.client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self.model = model
        self.temperature = temperature
        self.total_tokens = 0
        self.api_calls = 0

    def complete(self, prompt: str) -> str:
        self.api_calls += 1
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
        )

        if response.usage:
            self.total_tokens += response.usage.total_tokens
            logger.debug("LLM call used %d tokens", response.usage.total_tokens)

        return (response.choices[0].message.content or "").strip()

    def get_usage_stats(self) -> Dict:
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.model,
        }


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for tests and dry runs without an API key."""

    def __init__(self, responses: Optional[List[str]] = None) -> None:
        """Replay ``responses`` in order, then answer with an empty ranking."""
        self.responses = list(responses or [])
        self.calls: List[str] = []

    def complete(self, prompt: str) -> str:
        self.calls.append(prompt)
        if self.responses:
            return self.responses.pop(0)
        return "```json\n[]\n```"

    def get_usage_stats(self) -> Dict:
        return {
            "total_tokens": 0,
            "api_calls": len(self.calls),
            "model": "mock",
        }
