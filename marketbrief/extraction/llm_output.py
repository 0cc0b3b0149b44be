"""Helpers for text returned by the LLM."""

import json
import logging
import re
from typing import Any

from ..errors import MalformedLLMResponse

logger = logging.getLogger(__name__)

JSON_BLOCK_PATTERN = re.compile(r"```json\n([\s\S]*?)```")
CODE_MARKER_PATTERN = re.compile(r"```(?:html)?")


def parse_json_string(text: str) -> Any:
    """
    Parse the fenced ```json block of an LLM response.

    Text outside the fence is never parsed.

    Raises:
        MalformedLLMResponse: no fenced block, or the block is not valid JSON
    """
    match = JSON_BLOCK_PATTERN.search(text)
    if not match or not match.group(1).strip():
        raise MalformedLLMResponse("No valid JSON content found between backticks")

    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as e:
        logger.error("Error parsing JSON: %s", e)
        raise MalformedLLMResponse(f"Invalid JSON string: {e}") from e


def strip_code_markers(text: str) -> str:
    """Remove ``` and ```html markers wherever they appear."""
    return CODE_MARKER_PATTERN.sub("", text)
