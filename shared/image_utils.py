"""
Image URL processing utilities for spoiler scrapers.

Provides thumbnail-to-full-size conversion and relative URL resolution.
"""

import re
from typing import Optional
from urllib.parse import urljoin


# WordPress thumbnail suffix, e.g. "card-216x302.jpg"
_SIZE_SUFFIX = re.compile(r"-\d+x\d+(?=\..{3}$)")


def strip_size_suffix(url: Optional[str]) -> str:
    """
    Remove a -WIDTHxHEIGHT thumbnail suffix from an image URL.

    Only a suffix sitting immediately before a three-character file
    extension at the very end of the URL is removed.

    Args:
        url: Thumbnail image URL

    Returns:
        URL of the full-resolution image, or empty string if no URL

    Examples:
        >>> strip_size_suffix("http://x.com/avacyn-216x302.jpg")
        'http://x.com/avacyn.jpg'
    """
    if not url:
        return ""
    return _SIZE_SUFFIX.sub("", url.strip(), count=1)


def make_absolute_url(base_url: str, maybe_relative: Optional[str]) -> str:
    """
    Convert potentially relative URL to absolute URL.

    Args:
        base_url: URL of the page the link was found on
        maybe_relative: URL that might be relative

    Returns:
        Absolute URL
    """
    if not maybe_relative:
        return ""
    maybe_relative = maybe_relative.strip()
    # Already absolute
    if maybe_relative.startswith(("http://", "https://")):
        return maybe_relative
    # Protocol-relative
    if maybe_relative.startswith("//"):
        return "https:" + maybe_relative
    if not base_url:
        return maybe_relative
    return urljoin(base_url, maybe_relative)
