"""Page fetchers: a shared headless browser, or plain HTTP through a proxy."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

import httpx
from selenium import webdriver
from selenium.common.exceptions import InvalidSessionIdException, WebDriverException
from selenium.webdriver.chrome.options import Options

from ..config.models import BrowserConfig
from ..errors import FetchError
from ..models import HttpProxy

logger = logging.getLogger(__name__)


class PageFetcher(ABC):
    """Retrieve the HTML of a page."""

    @abstractmethod
    def fetch(self, url: str) -> str:
        """
        Fetch a page.

        Raises:
            FetchError: navigation timed out or the network failed
        """
        pass

    def close(self) -> None:
        """Release held resources. Safe to call more than once."""


class BrowserFetcher(PageFetcher):
    """
    Render pages in one headless Chrome shared across a run.

    The driver is launched on the first fetch. Every fetch uses a fresh tab
    that is closed afterwards; the browser itself stays up until ``close``.
    A WebDriver session handles one command at a time, so concurrent callers
    queue on a lock. A session that dies is discarded and relaunched on the
    next fetch.
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        driver_factory: Optional[Callable[[Options], webdriver.Chrome]] = None,
    ) -> None:
        self.config = config or BrowserConfig()
        self.driver_factory = driver_factory or (lambda options: webdriver.Chrome(options=options))
        self.driver = None
        self._lock = threading.Lock()

    def _build_options(self) -> Options:
        options = Options()
        if self.config.headless:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--ignore-certificate-errors")
        options.add_argument(f"--window-size={self.config.window_width},{self.config.window_height}")
        options.add_argument(f"--user-agent={self.config.user_agent}")
        options.add_argument(f"--lang={self.config.accept_language.split(',')[0]}")
        options.add_experimental_option(
            "prefs", {"intl.accept_languages": self.config.accept_language}
        )
        # Return once DOMContentLoaded fires
        options.page_load_strategy = "eager"
        options.accept_insecure_certs = True
        return options

    def _get_driver(self):
        if self.driver is None:
            driver = self.driver_factory(self._build_options())
            driver.set_page_load_timeout(self.config.page_load_timeout)
            driver.execute_cdp_cmd("Network.enable", {})
            driver.execute_cdp_cmd(
                "Network.setExtraHTTPHeaders",
                {
                    "headers": {
                        "Accept-Language": self.config.accept_language,
                        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
                    }
                },
            )
            self.driver = driver
            logger.info("Launched headless Chrome")
        return self.driver

    def fetch(self, url: str) -> str:
        with self._lock:
            try:
                driver = self._get_driver()
            except WebDriverException as e:
                raise FetchError(url, f"browser launch failed: {e.msg or e}") from e

            base_handle = None
            try:
                base_handle = driver.current_window_handle
                driver.switch_to.new_window("tab")
                driver.get(url)
                return driver.page_source
            except InvalidSessionIdException as e:
                logger.error("Browser session lost while scraping %s: %s", url, e.msg or e)
                self._quit_driver()
                raise FetchError(url, f"browser session lost: {e.msg or e}") from e
            except WebDriverException as e:
                logger.error("An error occurred while scraping %s: %s", url, e.msg or e)
                raise FetchError(url, e.msg or str(e)) from e
            finally:
                if base_handle is not None and self.driver is driver:
                    self._close_tab(driver, base_handle)

    def _close_tab(self, driver, base_handle: str) -> None:
        try:
            if driver.current_window_handle != base_handle:
                driver.close()
            driver.switch_to.window(base_handle)
        except WebDriverException as e:
            logger.warning("Could not close browser tab: %s", e.msg or e)

    def _quit_driver(self) -> None:
        """Quit the current driver, if any. The next fetch launches a new one."""
        if self.driver is None:
            return
        try:
            self.driver.quit()
            logger.info("Closed headless Chrome")
        except WebDriverException as e:
            logger.error("Error closing browser: %s", e.msg or e)
        finally:
            self.driver = None

    def close(self) -> None:
        """Quit the browser; the next fetch launches a new one."""
        with self._lock:
            self._quit_driver()


class ProxiedHttpFetcher(PageFetcher):
    """Plain GET requests routed through an HTTP proxy."""

    def __init__(
        self,
        proxy: HttpProxy,
        timeout: float = 60.0,
        user_agent: str = BrowserConfig().user_agent,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.proxy = proxy
        self.client = client or httpx.Client(
            proxy=proxy.url,
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml",
                "Accept-Language": "en-US,en;q=0.9",
            },
        )

    def fetch(self, url: str) -> str:
        logger.info("Fetching %s with proxy %s", url, self.proxy)
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("An error occurred while fetching %s: %s", url, e)
            raise FetchError(url, str(e) or type(e).__name__) from e
        return response.text

    def close(self) -> None:
        self.client.close()
