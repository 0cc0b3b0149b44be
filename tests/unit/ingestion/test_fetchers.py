"""Tests for marketbrief.ingestion.fetchers."""

from unittest.mock import MagicMock, Mock, PropertyMock

import httpx
import pytest
from selenium.common.exceptions import InvalidSessionIdException, TimeoutException, WebDriverException

from marketbrief.config.models import BrowserConfig
from marketbrief.errors import FetchError
from marketbrief.ingestion import BrowserFetcher, ProxiedHttpFetcher
from marketbrief.models import HttpProxy


def make_driver() -> MagicMock:
    driver = MagicMock()
    driver.current_window_handle = "base"
    driver.page_source = "<html><body>page</body></html>"

    def new_window(kind):
        driver.current_window_handle = "tab"

    def switch_window(handle):
        driver.current_window_handle = handle

    driver.switch_to.new_window.side_effect = new_window
    driver.switch_to.window.side_effect = switch_window
    return driver


class TestBrowserFetcher:
    def test_launches_lazily_and_reuses_driver(self) -> None:
        driver = make_driver()
        factory = Mock(return_value=driver)
        fetcher = BrowserFetcher(BrowserConfig(), driver_factory=factory)

        assert factory.call_count == 0
        fetcher.fetch("https://a.example")
        fetcher.fetch("https://b.example")

        assert factory.call_count == 1
        driver.set_page_load_timeout.assert_called_once_with(1200.0)

    def test_fetch_uses_new_tab_and_returns_to_base(self) -> None:
        driver = make_driver()
        fetcher = BrowserFetcher(driver_factory=Mock(return_value=driver))

        html = fetcher.fetch("https://a.example")

        assert html == "<html><body>page</body></html>"
        driver.get.assert_called_once_with("https://a.example")
        driver.close.assert_called_once()
        assert driver.current_window_handle == "base"

    def test_navigation_error_becomes_fetch_error(self) -> None:
        driver = make_driver()
        driver.get.side_effect = TimeoutException("timed out")
        fetcher = BrowserFetcher(driver_factory=Mock(return_value=driver))

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("https://slow.example")

        assert exc_info.value.url == "https://slow.example"
        assert driver.current_window_handle == "base"

    def test_launch_failure_becomes_fetch_error(self) -> None:
        fetcher = BrowserFetcher(driver_factory=Mock(side_effect=WebDriverException("no chrome")))

        with pytest.raises(FetchError, match="browser launch failed"):
            fetcher.fetch("https://a.example")

    def test_dead_session_becomes_fetch_error_and_relaunches(self) -> None:
        dead, fresh = make_driver(), make_driver()
        type(dead).current_window_handle = PropertyMock(
            side_effect=InvalidSessionIdException("invalid session id")
        )
        fetcher = BrowserFetcher(driver_factory=Mock(side_effect=[dead, fresh]))

        with pytest.raises(FetchError, match="browser session lost"):
            fetcher.fetch("https://a.example")

        dead.quit.assert_called_once()
        assert fetcher.driver is None
        assert fetcher.fetch("https://b.example") == "<html><body>page</body></html>"
        assert fetcher.driver is fresh

    def test_close_is_idempotent_and_relaunches(self) -> None:
        first, second = make_driver(), make_driver()
        factory = Mock(side_effect=[first, second])
        fetcher = BrowserFetcher(driver_factory=factory)
        fetcher.fetch("https://a.example")

        fetcher.close()
        fetcher.close()
        fetcher.fetch("https://b.example")

        first.quit.assert_called_once()
        assert fetcher.driver is second

    def test_options_use_eager_page_load(self) -> None:
        options = BrowserFetcher(BrowserConfig(headless=True))._build_options()

        assert options.page_load_strategy == "eager"
        assert "--headless=new" in options.arguments
        assert "--window-size=1920,1080" in options.arguments


class TestProxiedHttpFetcher:
    proxy = HttpProxy(host="10.0.0.1", port=8080, username="u", password="p")

    def test_returns_body(self) -> None:
        client = Mock()
        client.get.return_value = httpx.Response(
            200, text="<html>ok</html>", request=httpx.Request("GET", "https://x.example")
        )

        fetcher = ProxiedHttpFetcher(self.proxy, client=client)

        assert fetcher.fetch("https://x.example") == "<html>ok</html>"

    def test_http_status_error(self) -> None:
        client = Mock()
        client.get.return_value = httpx.Response(
            404, request=httpx.Request("GET", "https://x.example")
        )

        with pytest.raises(FetchError, match="HTTP 404"):
            ProxiedHttpFetcher(self.proxy, client=client).fetch("https://x.example")

    def test_network_error(self) -> None:
        client = Mock()
        client.get.side_effect = httpx.ConnectTimeout("timed out")

        with pytest.raises(FetchError):
            ProxiedHttpFetcher(self.proxy, client=client).fetch("https://x.example")
