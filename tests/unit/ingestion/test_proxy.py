"""Tests for marketbrief.ingestion.proxy."""

from unittest.mock import Mock

import httpx
import pytest

from marketbrief.errors import ProxyUnavailable
from marketbrief.ingestion.proxy import PROXY_RETRY_WAIT_SECONDS, ProxyProvider

API_URL = "https://proxy.webshare.io/api/v2/proxy/list/"

PROXY_LIST = {
    "results": [
        {"proxy_address": "10.0.0.1", "port": "8080", "username": "user", "password": "secret"}
    ]
}


def response(status: int, payload=None) -> httpx.Response:
    return httpx.Response(status, json=payload, request=httpx.Request("GET", API_URL))


def make_provider(client: Mock, sleep) -> ProxyProvider:
    return ProxyProvider(API_URL, "token-123", client=client, sleep=sleep)


class TestProxyProvider:
    def test_returns_first_proxy(self, fake_sleep) -> None:
        client = Mock()
        client.get.return_value = response(200, PROXY_LIST)

        proxy = make_provider(client, fake_sleep).acquire_proxy()

        assert proxy.host == "10.0.0.1"
        assert proxy.port == 8080
        assert proxy.username == "user"
        assert proxy.password == "secret"
        assert fake_sleep.calls == []

    def test_sends_token_and_paging_params(self, fake_sleep) -> None:
        client = Mock()
        client.get.return_value = response(200, PROXY_LIST)

        make_provider(client, fake_sleep).acquire_proxy()

        _, kwargs = client.get.call_args
        assert kwargs["headers"] == {"Authorization": "Token token-123"}
        assert kwargs["params"] == {"mode": "direct", "page": 1, "page_size": 1}

    def test_client_errors_are_retried_three_times(self, fake_sleep) -> None:
        client = Mock()
        client.get.return_value = response(429)

        with pytest.raises(ProxyUnavailable):
            make_provider(client, fake_sleep).acquire_proxy()

        assert client.get.call_count == 3
        assert fake_sleep.calls == [PROXY_RETRY_WAIT_SECONDS, PROXY_RETRY_WAIT_SECONDS]

    def test_recovers_after_client_error(self, fake_sleep) -> None:
        client = Mock()
        client.get.side_effect = [response(403), response(200, PROXY_LIST)]

        proxy = make_provider(client, fake_sleep).acquire_proxy()

        assert proxy.host == "10.0.0.1"
        assert client.get.call_count == 2
        assert fake_sleep.calls == [300]

    def test_server_error_is_not_retried(self, fake_sleep) -> None:
        client = Mock()
        client.get.return_value = response(500)

        with pytest.raises(httpx.HTTPStatusError):
            make_provider(client, fake_sleep).acquire_proxy()

        assert client.get.call_count == 1
        assert fake_sleep.calls == []

    def test_network_error_is_not_retried(self, fake_sleep) -> None:
        client = Mock()
        client.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(httpx.ConnectError):
            make_provider(client, fake_sleep).acquire_proxy()

        assert client.get.call_count == 1

    def test_empty_result_list(self, fake_sleep) -> None:
        client = Mock()
        client.get.return_value = response(200, {"results": []})

        with pytest.raises(ProxyUnavailable, match="no proxies"):
            make_provider(client, fake_sleep).acquire_proxy()
