"""
Card matching between the spoiler feed, set reviews and the Trello board.

All comparisons are loose (see shared.utils.text_utils): card names from
the feed, reviews and board drift in punctuation, casing and spacing.
"""

from typing import Iterable, List, Sequence, Tuple

from shared.utils.text_utils import (
    contains_loose,
    make_loosely_comparable,
    primary_face,
)

from .errors import ReviewMatchError
from .models import BoardCard, CardReview, SpoilerCard


# Spoiled with every set, never tracked on the board
BASIC_LANDS = frozenset({"plains", "island", "swamp", "mountain", "forest"})


def is_basic_land(name: str) -> bool:
    return make_loosely_comparable(name) in BASIC_LANDS


def reject_basic_lands(cards: Iterable[SpoilerCard]) -> List[SpoilerCard]:
    return [card for card in cards if not is_basic_land(card.name)]


def filter_new_cards(
    scraped: Iterable[SpoilerCard],
    known_names: Sequence[str]
) -> List[SpoilerCard]:
    """
    Keep only spoiler cards that are not on the board yet.

    Basic lands are dropped first. Order of the scraped cards is kept and
    the result does not depend on how often the filter is applied.

    Args:
        scraped: Cards from the spoiler feed
        known_names: Names of every card already on the board

    Returns:
        New cards in feed order
    """
    return [
        card for card in reject_basic_lands(scraped)
        if not contains_loose(card.name, known_names)
    ]


def _face_key(name: str) -> str:
    return make_loosely_comparable(primary_face(name))


def find_unmatched_reviews(
    reviews: Iterable[CardReview],
    cards: Sequence[BoardCard]
) -> List[str]:
    """
    Names of reviews whose front face matches no board card's front face.

    Args:
        reviews: Scraped reviews
        cards: Board cards

    Returns:
        Unmatched review names in review order
    """
    card_keys = {_face_key(card.name) for card in cards}
    return [r.name for r in reviews if _face_key(r.name) not in card_keys]


def match_reviews(
    reviews: Sequence[CardReview],
    cards: Sequence[BoardCard]
) -> List[Tuple[CardReview, BoardCard]]:
    """
    Pair each review with the first board card sharing its front face.

    Args:
        reviews: Scraped reviews
        cards: Board cards

    Returns:
        (review, card) pairs in review order

    Raises:
        ReviewMatchError: If any review matches no card; nothing is paired
    """
    unmatched = find_unmatched_reviews(reviews, cards)
    if unmatched:
        raise ReviewMatchError(unmatched)

    by_face = {}
    for card in cards:
        by_face.setdefault(_face_key(card.name), card)

    return [(review, by_face[_face_key(review.name)]) for review in reviews]

