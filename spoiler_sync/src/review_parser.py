"""
Parser for ChannelFireball limited set reviews.

Each review on the page looks like:

    <h2>Card Name</h2>
    <img ...>
    <h3>Limited: 3.5</h3>
    <p>Flavor text (optional)</p>
    <p>Review paragraph</p>
    <p>Review paragraph</p>
    <h2>Next Card</h2>
"""

from typing import List, Optional
from bs4 import BeautifulSoup, Tag

from shared.utils.text_utils import FACE_DELIMITER

from .models import CardReview


RATING_SELECTOR = 'h3:-soup-contains("Limited")'
RATING_PREFIX_LEN = len("Limited: ")


# LSV's limited grading scale
LSV_SCALE = {
    "5.0": "The best of the best. (Gideon, Ally of Zendikar. Quarantine Field. Linvala, the Preserver.)",
    "4.5": "Incredible bomb, but not unbeatable. (Ruinous Path. Drana, Liberator of Malakir. Guardian of Tazeem.)",
    "4.0": "Good rare or top-tier uncommon. (Tyrant of Valakut. Roil Spout. Nissa’s Judgment.)",
    "3.5": "Top-tier common or solid uncommon. (Oblivion Strike. Isolation Zone. Eldrazi Skyspawner.)",
    "3.0": "Good playable that basically always makes the cut. (Benthic Infiltrator. Touch of the Void. Stalking Drone.)",
    "2.5": "Solid playable that rarely gets cut. (Expedition Raptor. Makindi Aeronaut. Jwar Isle Avenger.)",
    "2.0": "Good filler, but sometimes gets cut. (Kozilek’s Translator. Murk Strider. Kor Scythemaster.)",
    "1.5": "Filler. Gets cut about half the time. (Affa Protector. Call of the Scions. Culling Drone.)",
    "1.0": "Bad filler. Gets cut most of the time. (Salvage Drone. Blisterpod. Dazzling Reflection.)",
    "0.5": "Very low-end playables and sideboard material. (Geyserfield Stalker. Natural State. Consuming Sinkhole.)",
    "0.0": "Completely unplayable. (Hedron Alignment. Call of the Gatewatch.)",
}


def _previous_tag(el: Optional[Tag], steps: int) -> Optional[Tag]:
    for _ in range(steps):
        if el is None:
            return None
        el = el.find_previous_sibling()
    return el


def _same_tag_run(el: Optional[Tag]) -> List[Tag]:
    """The element plus every directly following sibling with the same tag."""
    run: List[Tag] = []
    while el is not None:
        run.append(el)
        nxt = el.find_next_sibling()
        if nxt is None or nxt.name != el.name:
            break
        el = nxt
    return run


class ReviewParser:
    """Extracts card reviews from a set review article."""

    def parse_page(self, html_text: str) -> List[CardReview]:
        """
        Extract every card review from a review article.

        Args:
            html_text: HTML content of the article

        Returns:
            Reviews in page order
        """
        soup = BeautifulSoup(html_text or "", "html.parser")
        return [self._parse_review(h3) for h3 in soup.select(RATING_SELECTOR)]

    def _parse_review(self, rating_el: Tag) -> CardReview:
        heading = _previous_tag(rating_el, 2)
        body_start = rating_el.find_next_sibling()
        # Skip flavor text
        if body_start is not None and body_start.get_text().startswith("Flavor"):
            body_start = body_start.find_next_sibling()

        paragraphs = [el.get_text().strip() for el in _same_tag_run(body_start)]
        return CardReview(
            name=heading.get_text().strip() if heading is not None else "",
            rating=rating_el.get_text()[RATING_PREFIX_LEN:].strip(),
            text="\n\n".join(paragraphs),
        )


def describe_rating(rating: str) -> str:
    """Scale description for each face's rating, one per line."""
    return "\n".join(
        LSV_SCALE.get(part.strip(), "") for part in rating.split(FACE_DELIMITER)
    )


def review_to_comment(review: CardReview) -> str:
    """
    Render a review as a Trello comment (Markdown).

    Examples:
        >>> review_to_comment(CardReview("Ojutai", "0.0", "No."))
        'LSV: **0.0**\\n*Completely unplayable. (Hedron Alignment. Call of the Gatewatch.)*\\n\\n"No."'
    """
    return f'LSV: **{review.rating}**\n*{describe_rating(review.rating)}*\n\n"{review.text}"'
