"""Prompt building and rate-limit aware submission to the LLM."""

import logging
import time
from typing import Callable, Dict, Tuple, Union

from ..config.catalog import SourceCatalog
from ..config.models import Frequency, SourceType, Stage
from ..errors import ClassificationError, RetryExhausted
from ..retry import RetryPolicy
from .llm_provider import LLMProvider, is_transient

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_WAIT_MINUTES = 10.0


def format_prompt(instruction: str, content: str) -> str:
    """Instruction followed by the content fenced in a code block."""
    return f"{instruction}\n```\n{content}\n```"


class ClassificationService:
    """
    Rank and summarize content with the LLM.

    Rate limits on the LLM reset over minutes, so transient failures wait a
    fixed ``retry_wait_minutes`` before the next attempt.
    """

    def __init__(
        self,
        provider: LLMProvider,
        catalog: SourceCatalog,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_wait_minutes: float = DEFAULT_RETRY_WAIT_MINUTES,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.provider = provider
        self.catalog = catalog
        self.retry_policy = RetryPolicy(
            max_attempts=max_retries,
            backoff_seconds=retry_wait_minutes * 60,
            is_retryable=is_transient,
            sleep=sleep,
            name="LLM request",
        )
        self._instructions: Dict[Tuple[Stage, SourceType, Frequency], str] = {}

    def instruction(
        self,
        stage: Union[Stage, str],
        source_type: Union[SourceType, str],
        frequency: Union[Frequency, str] = Frequency.DAILY,
    ) -> str:
        """Catalog instruction for the key, looked up once and cached."""
        key = (Stage(stage), SourceType(source_type), Frequency(frequency))
        if key not in self._instructions:
            self._instructions[key] = self.catalog.instruction(*key)
        return self._instructions[key]

    def build_prompt(
        self,
        stage: Union[Stage, str],
        content: str,
        source_type: Union[SourceType, str],
        frequency: Union[Frequency, str] = Frequency.DAILY,
    ) -> str:
        return format_prompt(self.instruction(stage, source_type, frequency), content)

    def classify(
        self,
        stage: Union[Stage, str],
        content: str,
        source_type: Union[SourceType, str],
        frequency: Union[Frequency, str] = Frequency.DAILY,
    ) -> str:
        """
        Send content to the LLM with the instruction for this stage.

        Raises:
            ClassificationError: every attempt hit rate limiting or unavailability
        """
        logger.info(
            "Classifying %d chars (stage=%s, type=%s, frequency=%s)",
            len(content),
            Stage(stage).value,
            SourceType(source_type).value,
            Frequency(frequency).value,
        )
        prompt = self.build_prompt(stage, content, source_type, frequency)

        try:
            return self.retry_policy.call(self.provider.complete, prompt)
        except RetryExhausted as e:
            raise ClassificationError(
                f"Failed to generate content after {e.attempts} attempts due to "
                f"rate limiting or service unavailability: {e.last_error}"
            ) from e.last_error
