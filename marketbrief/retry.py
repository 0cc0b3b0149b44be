"""Bounded retry with a wait between attempts."""

import logging
import time
from typing import Callable, Optional, TypeVar, Union

from .errors import RetryExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """
    Retry a call on errors accepted by ``is_retryable``.

    Non-retryable errors propagate untouched. The wait happens between
    attempts only, so a policy with ``max_attempts=3`` sleeps at most twice.
    ``backoff_seconds`` is either a fixed wait or a function of the number
    of the attempt that just failed.
    """

    def __init__(
        self,
        max_attempts: int,
        backoff_seconds: Union[float, Callable[[int], float]],
        is_retryable: Callable[[BaseException], bool],
        sleep: Callable[[float], None] = time.sleep,
        name: str = "call",
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.is_retryable = is_retryable
        self.sleep = sleep
        self.name = name

    def wait_after(self, attempt: int) -> float:
        if callable(self.backoff_seconds):
            return self.backoff_seconds(attempt)
        return self.backoff_seconds

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Invoke ``fn`` until it succeeds or the attempts run out."""
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                logger.info("Retrying %s (attempt %d of %d)", self.name, attempt, self.max_attempts)
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                if not self.is_retryable(e):
                    raise
                last_error = e
                logger.error(
                    "%s failed on attempt %d of %d: %s", self.name, attempt, self.max_attempts, e
                )
                if attempt < self.max_attempts:
                    wait = self.wait_after(attempt)
                    logger.warning("Waiting %.0f seconds before retrying %s", wait, self.name)
                    self.sleep(wait)

        raise RetryExhausted(self.max_attempts, last_error)
