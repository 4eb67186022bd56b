"""
Tests for HTTP utilities.
"""
import asyncio
import time
from unittest.mock import Mock

import pytest
import requests

from shared.http_utils import (
    FetchError,
    PageFetcher,
    RateLimiter,
    build_browser_headers,
)


class TestBuildBrowserHeaders:
    """Test build_browser_headers function."""

    def test_referer_from_origin(self):
        headers = build_browser_headers("http://www.magicspoiler.com")
        assert headers["Referer"] == "http://www.magicspoiler.com/"
        assert "Safari" in headers["User-Agent"]

    def test_no_origin_no_referer(self):
        assert "Referer" not in build_browser_headers()


class TestPageFetcher:
    """Test PageFetcher class."""

    def test_fetch_returns_text(self):
        session = Mock()
        session.headers = {}
        session.get.return_value = Mock(text="<html>ok</html>")
        fetcher = PageFetcher(session=session, timeout=7)

        assert asyncio.run(fetcher.fetch("http://site/")) == "<html>ok</html>"
        session.get.assert_called_once_with("http://site/", timeout=7)

    def test_http_error_raises_fetch_error(self):
        session = Mock()
        session.headers = {}
        response = Mock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        session.get.return_value = response
        fetcher = PageFetcher(session=session)

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(fetcher("http://site/missing"))
        assert exc_info.value.url == "http://site/missing"
        assert "404" in str(exc_info.value)

    def test_connection_error_raises_fetch_error(self):
        session = Mock()
        session.headers = {}
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(FetchError):
            PageFetcher(session=session).get_text("http://site/")


class TestRateLimiter:
    """Test RateLimiter class."""

    def test_spaces_calls(self):
        async def run():
            limiter = RateLimiter(0.05)
            start = time.monotonic()
            for _ in range(3):
                await limiter.wait()
            return time.monotonic() - start

        assert asyncio.run(run()) >= 0.09

    def test_zero_delay_never_sleeps(self):
        async def run():
            limiter = RateLimiter(0)
            start = time.monotonic()
            for _ in range(50):
                await limiter.wait()
            return time.monotonic() - start

        assert asyncio.run(run()) < 0.05
