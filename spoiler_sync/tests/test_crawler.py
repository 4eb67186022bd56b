"""
Tests for crawler module.
"""
import asyncio

import pytest

from shared.http_utils import FetchError
from spoiler_sync.src.crawler import SpoilerCrawler
from spoiler_sync.src.models import SpoilerCard


def listing_page(names, next_url=None):
    tiles = "".join(
        f'<div class="spoiler-set-card"><a href="http://site/{n}/" title="{n}">'
        f'<img src="http://site/{n}-216x302.jpg"></a></div>'
        for n in names
    )
    nxt = f'<a class="nextpostslink" href="{next_url}">next</a>' if next_url else ""
    return f"<html><body>{tiles}{nxt}</body></html>"


class FakeFetch:
    """Async fetch returning canned pages and recording requested URLs."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    async def __call__(self, url):
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "404 Not Found")
        return page


class TestCrawl:
    """Test crawl method."""

    def test_follows_pages_in_order(self):
        fetch = FakeFetch({
            "http://site/p1": listing_page(["A", "B"], "http://site/p2"),
            "http://site/p2": listing_page(["C"], "http://site/p3"),
            "http://site/p3": listing_page(["D", "E"]),
        })
        cards = asyncio.run(SpoilerCrawler(fetch, log=None).crawl("http://site/p1"))

        assert [c.name for c in cards] == ["A", "B", "C", "D", "E"]
        assert fetch.calls == ["http://site/p1", "http://site/p2", "http://site/p3"]

    def test_single_page(self):
        fetch = FakeFetch({"http://site/p1": listing_page(["A"])})
        cards = asyncio.run(SpoilerCrawler(fetch, log=None).crawl("http://site/p1"))
        assert [c.image_url for c in cards] == ["http://site/A.jpg"]

    def test_fetch_error_aborts_crawl(self):
        fetch = FakeFetch({"http://site/p1": listing_page(["A"], "http://site/missing")})
        with pytest.raises(FetchError):
            asyncio.run(SpoilerCrawler(fetch, log=None).crawl("http://site/p1"))

    def test_logs_progress(self):
        messages = []
        fetch = FakeFetch({"http://site/p1": listing_page(["A", "B"])})
        asyncio.run(SpoilerCrawler(fetch, log=messages.append).crawl("http://site/p1"))
        assert messages == ["Fetching http://site/p1...", "Scraped 2 cards."]


class TestFetchDetails:
    """Test fetch_details and enrich methods."""

    def test_enrich_merges_attributes_in_place(self):
        fetch = FakeFetch({"http://site/a/": '<p class="card-type">Color: Blue</p><p class="card-type">Type: Instant</p>'})
        card = SpoilerCard("A", "http://site/a/", "http://site/a.jpg")

        result = asyncio.run(SpoilerCrawler(fetch, log=None).enrich(card))

        assert result is card
        assert card.attributes == {"color": "Blue", "type": "Instant"}
        assert card.name == "A"
        assert card.image_url == "http://site/a.jpg"

    def test_fetch_error_is_logged_and_reraised(self):
        messages = []
        crawler = SpoilerCrawler(FakeFetch({}), log=messages.append)
        with pytest.raises(FetchError):
            asyncio.run(crawler.fetch_details("http://site/missing/"))
        assert any("Error fetching http://site/missing/" in m for m in messages)

    def test_other_errors_become_fetch_errors(self):
        async def broken(url):
            raise ConnectionError("reset by peer")

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(SpoilerCrawler(broken, log=None).fetch_details("http://site/x/"))
        assert exc_info.value.url == "http://site/x/"
