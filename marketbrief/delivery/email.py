"""Report delivery over SMTP."""

import logging
import smtplib
import time
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Callable, List, Optional

from bs4 import BeautifulSoup

from ..errors import DeliveryError, RetryExhausted
from ..retry import RetryPolicy

logger = logging.getLogger(__name__)

MAX_BACKOFF_SECONDS = 30


def backoff_seconds(attempt: int) -> int:
    """Exponential wait after the ``attempt``-th failure, capped at 30 seconds."""
    return min(2 ** attempt, MAX_BACKOFF_SECONDS)


def html_to_text(html: str) -> str:
    text = BeautifulSoup(html, "lxml").get_text("\n")
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())


class EmailSender:
    """Send HTML reports through an SMTP server with STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        sender: Optional[str],
        recipients: List[str],
        max_retries: int = 3,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.recipients = recipients
        self.max_retries = max_retries
        self.timeout = timeout
        self.sleep = sleep
        self.smtp_factory = smtp_factory

    def build_message(self, html: str, subject: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.sender or ""
        message["To"] = ", ".join(self.recipients)
        message.attach(MIMEText(html_to_text(html), "plain", "utf-8"))
        message.attach(MIMEText(html, "html", "utf-8"))
        return message

    def _deliver(self, message: MIMEMultipart) -> None:
        with self.smtp_factory(self.host, self.port, timeout=self.timeout) as server:
            server.ehlo()
            server.starttls()
            server.ehlo()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.sender, self.recipients, message.as_string())

    def send(self, html: str, subject: str = "Daily Report") -> None:
        """
        Email the report.

        Raises:
            DeliveryError: no recipients, or every attempt failed
        """
        if not self.recipients:
            raise DeliveryError("No email recipients configured")

        message = self.build_message(html, subject)
        policy = RetryPolicy(
            max_attempts=self.max_retries,
            backoff_seconds=backoff_seconds,
            is_retryable=lambda e: isinstance(e, (smtplib.SMTPException, OSError)),
            sleep=self.sleep,
            name=f"sending '{subject}'",
        )

        try:
            policy.call(self._deliver, message)
        except RetryExhausted as e:
            raise DeliveryError(
                f"Failed to send '{subject}' after {e.attempts} attempts: {e.last_error}"
            ) from e.last_error
        logger.info("Email '%s' sent to %s", subject, ", ".join(self.recipients))
