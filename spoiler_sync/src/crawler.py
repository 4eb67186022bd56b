"""
Spoiler feed crawler.

Walks the paginated spoiler listing into a flat card list and enriches
individual cards from their detail pages.
"""

from typing import Awaitable, Callable, Dict, List, Optional

from shared.http_utils import FetchError
from shared.utils.logging_utils import log_and_status, log_error

from .models import SpoilerCard
from .spoiler_parser import SpoilerParser

# async (url) -> html text
FetchFn = Callable[[str], Awaitable[str]]


class SpoilerCrawler:
    """Crawls spoiler listing pages and card detail pages."""

    def __init__(
        self,
        fetch: FetchFn,
        parser: Optional[SpoilerParser] = None,
        log: Optional[Callable[[str], None]] = print
    ):
        """
        Initialize crawler.

        Args:
            fetch: Async function returning the HTML text of a URL
            parser: Page parser (defaults to SpoilerParser)
            log: Status callback
        """
        self.fetch = fetch
        self.parser = parser or SpoilerParser()
        self.log = log

    async def crawl(self, start_url: str) -> List[SpoilerCard]:
        """
        Scrape every card from start_url and all following pages.

        Pages are fetched one at a time since each next URL is only known
        after parsing the current page. Cards keep feed order, first page
        first. The feed's "next" links are trusted to end; a cycle would
        never terminate.

        Args:
            start_url: First listing page

        Returns:
            All scraped cards

        Raises:
            FetchError: If any page cannot be fetched (no partial result)
        """
        cards: List[SpoilerCard] = []
        url: Optional[str] = start_url

        while url:
            log_and_status(self.log, f"Fetching {url}...")
            html_text = await self.fetch(url)
            page_cards, url = self.parser.parse_listing(html_text, url)
            log_and_status(self.log, f"Scraped {len(page_cards)} cards.")
            cards.extend(page_cards)

        return cards

    async def fetch_details(self, details_url: str) -> Dict[str, str]:
        """
        Scrape the detail rows of one card page.

        Raises:
            FetchError: If the page cannot be fetched (logged first)
        """
        log_and_status(self.log, f"Getting card details at {details_url}...")
        try:
            html_text = await self.fetch(details_url)
        except FetchError as e:
            log_error(self.log, f"Error fetching {details_url}", exc=e)
            raise
        except Exception as e:
            log_error(self.log, f"Error fetching {details_url}", exc=e)
            raise FetchError(details_url, str(e)) from e

        return self.parser.parse_details(html_text)

    async def enrich(self, card: SpoilerCard) -> SpoilerCard:
        """Merge a card's detail page attributes into the card itself."""
        card.attributes.update(await self.fetch_details(card.details_url))
        return card
