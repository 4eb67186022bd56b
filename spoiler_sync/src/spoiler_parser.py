"""
Page parsing for magicspoiler.com set spoilers.

Extracts card tiles and the next-page link from listing pages, and the
key/value detail rows from card pages.
"""

from typing import Dict, List, Optional, Tuple
from bs4 import BeautifulSoup

from shared.image_utils import make_absolute_url, strip_size_suffix

from .models import SpoilerCard


CARD_LINK_SELECTOR = ".spoiler-set-card > a"
NEXT_PAGE_SELECTOR = ".nextpostslink"
DETAIL_ROW_SELECTOR = ".card-type"


class SpoilerParser:
    """Parses spoiler listing pages and card detail pages."""

    def parse_listing(self, html_text: str, page_url: str = "") -> Tuple[List[SpoilerCard], Optional[str]]:
        """
        Extract cards and the next page link from a listing page.

        Args:
            html_text: HTML content of the listing page
            page_url: URL the page was fetched from (resolves relative links)

        Returns:
            (cards in page order, absolute next page URL or None)
        """
        soup = BeautifulSoup(html_text or "", "html.parser")

        cards: List[SpoilerCard] = []
        for link in soup.select(CARD_LINK_SELECTOR):
            name = (link.get("title") or "").strip()
            if not name:
                continue
            img = link.find("img")
            src = img.get("src") if img else ""
            cards.append(SpoilerCard(
                name=name,
                details_url=make_absolute_url(page_url, link.get("href")),
                image_url=strip_size_suffix(make_absolute_url(page_url, src)),
            ))

        next_link = soup.select_one(NEXT_PAGE_SELECTOR)
        next_url = None
        if next_link and next_link.get("href"):
            next_url = make_absolute_url(page_url, next_link["href"])

        return cards, next_url

    def parse_details(self, html_text: str) -> Dict[str, str]:
        """
        Extract "Key: Value" rows from a card detail page.

        Keys are trimmed and lowercased, values trimmed. A repeated key keeps
        the last value. Rows without a colon are skipped.

        Args:
            html_text: HTML content of the card page

        Returns:
            Mapping of detail keys to values
        """
        soup = BeautifulSoup(html_text or "", "html.parser")

        details: Dict[str, str] = {}
        for row in soup.select(DETAIL_ROW_SELECTOR):
            pair = parse_pair(row.get_text())
            if pair:
                key, value = pair
                details[key.lower()] = value
        return details


def parse_pair(text: str) -> Optional[Tuple[str, str]]:
    """
    Split a "key: value" string at its first colon.

    Examples:
        >>> parse_pair(" Mana Cost : {2}{W} ")
        ('Mana Cost', '{2}{W}')
        >>> parse_pair("Text: Flying: sometimes")
        ('Text', 'Flying: sometimes')
    """
    if ":" not in (text or ""):
        return None
    key, value = text.split(":", 1)
    return key.strip(), value.strip()
