"""Report delivery."""

from .email import EmailSender, backoff_seconds

__all__ = ["EmailSender", "backoff_seconds"]
