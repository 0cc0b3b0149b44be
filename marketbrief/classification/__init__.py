"""LLM ranking and summarization."""

from .llm_provider import LLMProvider, MockLLMProvider, OpenAIProvider, is_transient
from .service import ClassificationService, format_prompt

__all__ = [
    "ClassificationService",
    "LLMProvider",
    "MockLLMProvider",
    "OpenAIProvider",
    "format_prompt",
    "is_transient",
]
