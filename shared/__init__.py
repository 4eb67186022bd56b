"""
Shared utilities for spoiler scrapers.

This package provides HTTP fetching, image URL and text helpers used by
the sync pipelines.
"""

from .http_utils import (
    FetchError,
    PageFetcher,
    RateLimiter,
    build_browser_headers,
)

from .image_utils import (
    make_absolute_url,
    strip_size_suffix,
)

__all__ = [
    # HTTP utilities
    "FetchError",
    "PageFetcher",
    "RateLimiter",
    "build_browser_headers",
    # Image utilities
    "make_absolute_url",
    "strip_size_suffix",
]
