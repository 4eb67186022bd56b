"""
Data models for the spoiler sync pipelines.

Feed-side records (SpoilerCard, CardReview) live for one run only. Board-side
records (BoardCard, BoardList) are snapshots read once at the start of a run.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class SpoilerCard:
    """
    A card scraped from the spoiler feed.

    Attributes:
        name: Card name as shown in the feed (never empty)
        details_url: URL of the card's detail page
        image_url: Full-resolution card image URL
        attributes: Key/value pairs scraped from the detail page
    """
    name: str
    details_url: str
    image_url: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def color(self) -> str:
        return self.attributes.get("color", "")

    @property
    def card_type(self) -> str:
        return self.attributes.get("type", "")


@dataclass(frozen=True)
class BoardCard:
    """An existing card on the Trello board."""
    id: str
    name: str


@dataclass(frozen=True)
class BoardList:
    """A list on the Trello board that cards are filed into."""
    id: str
    name: str


@dataclass
class CardReview:
    """
    A set review entry for one card.

    Attributes:
        name: Card name the review is about
        rating: Rating text, one rating per face joined by " // "
        text: Review body
    """
    name: str
    rating: str
    text: str = ""


@dataclass
class SyncOutcome:
    """Result of applying one new spoiler card to the board."""
    name: str
    list_name: str
    status: str  # "created" or "dry_run"
    card_id: str = ""


@dataclass
class ReviewOutcome:
    """Result of posting one review to its board card."""
    review_name: str
    card_name: str
    status: str  # "commented" or "dry_run"
