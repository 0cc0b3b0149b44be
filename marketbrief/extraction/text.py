"""Text chunking for multi-turn LLM conversations."""

from typing import Iterator


def chunk_text(text: str, size: int) -> Iterator[str]:
    """
    Lazily yield consecutive ``size``-character slices of ``text``.

    The size check happens at call time rather than on first iteration.
    Each call returns a new iterator, so the sequence can be restarted.
    """
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return (text[start:start + size] for start in range(0, len(text), size))
