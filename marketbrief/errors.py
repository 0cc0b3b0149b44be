"""Exceptions raised by the digest pipeline."""

from typing import Optional


class MarketBriefError(Exception):
    """Base class for pipeline errors."""


class RetryExhausted(MarketBriefError):
    """Raised by a retry policy once every attempt has failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


class ProxyUnavailable(MarketBriefError):
    """No usable proxy credential could be obtained."""


class FetchError(MarketBriefError):
    """A page could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class NoCleanerRegistered(MarketBriefError):
    """An article came from a source that has no article cleaner."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"No cleaner function found for source: {source}")


class MalformedLLMResponse(MarketBriefError):
    """The LLM response did not contain a valid fenced JSON block."""


class ClassificationError(MarketBriefError):
    """The LLM could not be reached after all retries."""


class DeliveryError(MarketBriefError):
    """The report could not be delivered."""
