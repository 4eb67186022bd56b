"""
HTTP request utilities for spoiler scrapers.

Provides header building, an async page fetcher built on a requests
session, and a write-spacing rate limiter.
"""

import asyncio
import logging
import time
from typing import Optional, Dict

import requests


class FetchError(RuntimeError):
    """A page or API request failed (network error or non-2xx status)."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        msg = f"Error fetching {url}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


def build_browser_headers(
    origin: Optional[str] = None,
    referer: Optional[str] = None,
    user_agent: Optional[str] = None
) -> Dict[str, str]:
    """
    Build browser-like HTTP headers.

    Args:
        origin: Origin URL (e.g., "http://www.magicspoiler.com")
        referer: Referer URL (defaults to origin + "/")
        user_agent: User agent string (defaults to Safari on macOS)

    Returns:
        Dictionary of HTTP headers
    """
    if user_agent is None:
        user_agent = (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            "AppleWebKit/605.1.15 (KHTML, like Gecko) "
            "Version/18.6 Safari/605.1.15"
        )

    headers = {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }
    if referer is None and origin:
        referer = origin.rstrip("/") + "/"
    if referer:
        headers["Referer"] = referer
    return headers


class PageFetcher:
    """
    Fetches HTML pages without blocking the event loop.

    Each request runs the blocking requests call in a worker thread, so
    every fetch is a suspension point for the calling coroutine.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        headers: Optional[Dict[str, str]] = None
    ):
        """
        Initialize fetcher.

        Args:
            session: Optional requests session (a new one is created if omitted)
            timeout: Request timeout in seconds
            headers: Extra headers to send with every request
        """
        self.session = session or requests.Session()
        self.session.headers.update(headers or build_browser_headers())
        self.timeout = timeout

    def get_text(self, url: str) -> str:
        """
        Blocking GET returning the response body.

        Raises:
            FetchError: On connection errors or non-2xx responses
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        return response.text

    async def fetch(self, url: str) -> str:
        return await asyncio.to_thread(self.get_text, url)

    async def __call__(self, url: str) -> str:
        return await self.fetch(url)

    def close(self) -> None:
        self.session.close()


class RateLimiter:
    """
    Async rate limiter for outgoing writes.

    Ensures minimum time between calls to respect the remote API. Callers
    sharing one limiter are serialized on the delay.
    """

    def __init__(self, min_delay_seconds: float = 1.0):
        """
        Initialize rate limiter.

        Args:
            min_delay_seconds: Minimum seconds between requests
        """
        self.min_delay = min_delay_seconds
        self.last_request_time: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        """
        Wait if necessary to respect rate limit.

        Await before making an HTTP request.
        """
        if self.min_delay <= 0:
            return
        async with self._lock:
            if self.last_request_time is not None:
                elapsed = time.monotonic() - self.last_request_time
                if elapsed < self.min_delay:
                    logging.debug(f"Rate limiter sleeping {self.min_delay - elapsed:.2f}s")
                    await asyncio.sleep(self.min_delay - elapsed)

            self.last_request_time = time.monotonic()
