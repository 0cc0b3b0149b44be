"""Page fetching, proxies and scratch storage."""

from .fetchers import BrowserFetcher, PageFetcher, ProxiedHttpFetcher
from .proxy import ProxyProvider
from .scratch import ScratchStore, safe_filename

__all__ = [
    "BrowserFetcher",
    "PageFetcher",
    "ProxiedHttpFetcher",
    "ProxyProvider",
    "ScratchStore",
    "safe_filename",
]
