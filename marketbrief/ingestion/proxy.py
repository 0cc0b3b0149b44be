"""Rotating proxy credentials."""

import logging
import time
from typing import Callable, Optional

import httpx

from ..errors import ProxyUnavailable, RetryExhausted
from ..models import HttpProxy
from ..retry import RetryPolicy

logger = logging.getLogger(__name__)

# Bounds the total latency of a market run, not a tuning knob.
MAX_PROXY_ATTEMPTS = 3
PROXY_RETRY_WAIT_SECONDS = 5 * 60


def is_client_error(error: BaseException) -> bool:
    """4xx responses from the proxy API are worth retrying."""
    return (
        isinstance(error, httpx.HTTPStatusError)
        and 400 <= error.response.status_code < 500
    )


class ProxyProvider:
    """Fetch a working proxy from the rotating proxy list API."""

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str],
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_url = api_url
        self.api_token = api_token
        self.timeout = timeout
        self.client = client
        self.retry_policy = RetryPolicy(
            max_attempts=MAX_PROXY_ATTEMPTS,
            backoff_seconds=PROXY_RETRY_WAIT_SECONDS,
            is_retryable=is_client_error,
            sleep=sleep,
            name="proxy fetch",
        )

    def _request_proxy_list(self) -> dict:
        params = {"mode": "direct", "page": 1, "page_size": 1}
        headers = {"Authorization": f"Token {self.api_token}"}

        if self.client is not None:
            response = self.client.get(self.api_url, params=params, headers=headers)
        else:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(self.api_url, params=params, headers=headers)

        response.raise_for_status()
        return response.json()

    def acquire_proxy(self) -> HttpProxy:
        """
        Get a fresh proxy credential.

        Raises:
            ProxyUnavailable: every attempt got a 4xx, or the list was empty
        """
        try:
            data = self.retry_policy.call(self._request_proxy_list)
        except RetryExhausted as e:
            logger.error("Failed to fetch the proxy after %d attempts", e.attempts)
            raise ProxyUnavailable(
                f"Proxy API returned client errors {e.attempts} times: {e.last_error}"
            ) from e.last_error

        results = data.get("results") or []
        if not results:
            raise ProxyUnavailable("Proxy API returned no proxies")

        entry = results[0]
        proxy = HttpProxy(
            host=entry["proxy_address"],
            port=int(entry["port"]),
            username=entry["username"],
            password=entry["password"],
        )
        logger.info("Got proxy %s", proxy)
        return proxy
