"""
Spoiler sync and review pipelines.

SyncPipeline files newly spoiled cards into the right board lists.
ReviewPipeline posts set review ratings as comments on existing cards.
Both default to dry run: every read, match and classification happens,
but writes are only logged.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from shared.http_utils import RateLimiter
from shared.utils.logging_utils import (
    log_and_status,
    log_error,
    log_section_header,
    log_success,
    log_summary,
    log_warning,
)
from shared.utils.text_utils import eq_loose

from .classifier import target_list_name
from .concurrency import bounded_map
from .config import SyncConfig
from .crawler import SpoilerCrawler
from .errors import ListNotFoundError, ReviewMatchError
from .matching import filter_new_cards, match_reviews, reject_basic_lands
from .models import (
    BoardCard,
    BoardList,
    CardReview,
    ReviewOutcome,
    SpoilerCard,
    SyncOutcome,
)
from .review_parser import ReviewParser, review_to_comment
from .trello_client import TrelloBoard


def resolve_list(lists: Sequence[BoardList], list_name: str) -> Optional[BoardList]:
    """First board list loosely equal to list_name, or None."""
    return next((lst for lst in lists if eq_loose(lst.name, list_name)), None)


def _take(items: List, limit: Optional[int]) -> List:
    return items if limit is None else items[:limit]


class SyncPipeline:
    """Crawl the spoiler feed and add new cards to the board."""

    def __init__(
        self,
        config: SyncConfig,
        board: TrelloBoard,
        crawler: SpoilerCrawler,
        log: Optional[Callable[[str], None]] = print
    ):
        """
        Initialize pipeline.

        Args:
            config: Run settings (urls, limits, dry run)
            board: Board client (any object with the TrelloBoard methods)
            crawler: Spoiler crawler
            log: Status callback
        """
        self.config = config
        self.board = board
        self.crawler = crawler
        self.log = log
        self.rate_limiter = RateLimiter(config.apply_delay_seconds)

    async def run(self) -> List[SyncOutcome]:
        """
        Run the full sync.

        Returns:
            One outcome per new card, in feed order

        Raises:
            FetchError: If the feed, a detail page or the board is unreachable
            ListNotFoundError: If a card's target list is missing (no writes made)
        """
        cfg = self.config
        log_section_header(self.log, "SPOILER SYNC" + (" (DRY RUN)" if cfg.dry_run else ""))

        lists, board_cards, spoilers = await asyncio.gather(
            self.board.get_lists(),
            self.board.get_cards(),
            self.crawler.crawl(cfg.spoiler_url),
        )
        spoilers = reject_basic_lands(spoilers)
        log_and_status(self.log, f"{len(spoilers)} total spoilers found.")
        log_and_status(self.log, f"{len(board_cards)} cards on board.")

        new_cards = _take(
            filter_new_cards(spoilers, [card.name for card in board_cards]),
            cfg.new_card_limit,
        )

        new_cards = await bounded_map(new_cards, self.crawler.enrich, cfg.detail_concurrency)
        log_and_status(self.log, f"{len(new_cards)} new cards found.")

        targets = self.plan(new_cards, lists)
        outcomes = await bounded_map(targets, self._apply, cfg.apply_concurrency)

        created = sum(1 for o in outcomes if o.status == "created")
        log_summary(self.log, "SPOILER SYNC COMPLETE", {
            "Spoilers found": len(spoilers),
            "Cards on board": len(board_cards),
            "New cards": len(new_cards),
            "Cards created": created,
            "Dry run": cfg.dry_run,
        })
        return outcomes

    def plan(
        self,
        cards: Sequence[SpoilerCard],
        lists: Sequence[BoardList]
    ) -> List[Tuple[SpoilerCard, BoardList]]:
        """
        Pair every card with its target board list.

        Raises:
            ListNotFoundError: For the first card whose list is missing
        """
        targets = []
        for card in cards:
            list_name = target_list_name(card)
            board_list = resolve_list(lists, list_name)
            if board_list is None:
                log_error(self.log, f'Could not find list "{list_name}".', details=f"card={card.name}")
                raise ListNotFoundError(list_name, card.name)
            targets.append((card, board_list))
        return targets

    async def _apply(self, target: Tuple[SpoilerCard, BoardList]) -> SyncOutcome:
        card, board_list = target
        log_and_status(self.log, f"Adding {card.name} to {board_list.name} list.")

        if self.config.dry_run:
            return SyncOutcome(card.name, board_list.name, "dry_run")

        await self.rate_limiter.wait()
        created = await self.board.add_card(card.name, board_list.id, pos="top")
        if card.image_url:
            await self.rate_limiter.wait()
            await self.board.add_attachment(created.id, card.image_url)
        return SyncOutcome(card.name, board_list.name, "created", card_id=created.id)


class ReviewPipeline:
    """Scrape set reviews and post them as comments on board cards."""

    def __init__(
        self,
        config: SyncConfig,
        board: TrelloBoard,
        fetch: Callable[[str], Awaitable[str]],
        parser: Optional[ReviewParser] = None,
        log: Optional[Callable[[str], None]] = print
    ):
        """
        Initialize pipeline.

        Args:
            config: Run settings (review urls, limits, dry run)
            board: Board client
            fetch: Async function returning the HTML text of a URL
            parser: Review page parser
            log: Status callback
        """
        self.config = config
        self.board = board
        self.fetch = fetch
        self.parser = parser or ReviewParser()
        self.log = log
        self.rate_limiter = RateLimiter(config.apply_delay_seconds)

    async def scrape_reviews(self, url: str) -> List[CardReview]:
        log_and_status(self.log, f"Fetching {url}...")
        reviews = self.parser.parse_page(await self.fetch(url))
        if not reviews:
            log_warning(self.log, f"No reviews found at {url}")
        return reviews

    async def run(self) -> List[ReviewOutcome]:
        """
        Run the review import.

        Returns:
            One outcome per review, in scrape order

        Raises:
            FetchError: If a review page or the board is unreachable
            ReviewMatchError: If any review has no board card (no writes made)
        """
        cfg = self.config
        log_section_header(self.log, "REVIEW IMPORT" + (" (DRY RUN)" if cfg.dry_run else ""))

        pages, board_cards = await asyncio.gather(
            bounded_map(cfg.review_urls, self.scrape_reviews, cfg.detail_concurrency),
            self.board.get_cards(),
        )
        reviews = _take([review for page in pages for review in page], cfg.review_limit)
        log_and_status(self.log, f"Scraped {len(reviews)} reviews.")
        log_and_status(self.log, f"{len(board_cards)} cards on board.")

        try:
            pairs = match_reviews(reviews, board_cards)
        except ReviewMatchError as e:
            log_error(self.log, "Some review cards could not be matched to Trello cards:")
            for name in e.names:
                log_and_status(self.log, f"  {name}", level="error")
            raise
        log_success(self.log, "All review cards matched to Trello cards!")

        outcomes = await bounded_map(pairs, self._comment, cfg.apply_concurrency)
        log_summary(self.log, "REVIEW IMPORT COMPLETE", {
            "Reviews": len(reviews),
            "Cards on board": len(board_cards),
            "Comments posted": sum(1 for o in outcomes if o.status == "commented"),
            "Dry run": cfg.dry_run,
        })
        return outcomes

    async def _comment(self, pair: Tuple[CardReview, BoardCard]) -> ReviewOutcome:
        review, card = pair
        log_and_status(self.log, f"Adding review to {card.name}.")

        if self.config.dry_run:
            return ReviewOutcome(review.name, card.name, "dry_run")

        await self.rate_limiter.wait()
        await self.board.add_comment(card.id, review_to_comment(review))
        return ReviewOutcome(review.name, card.name, "commented")
