"""
Board list classification for spoiler cards.

A card is filed under its color. Colorless cards go to "Artifact" or to
their type, and double-faced cards are filed under the color of their
transformed face.
"""

from dataclasses import dataclass
from typing import Mapping, Tuple, Union

from .models import SpoilerCard


UNKNOWN_LIST = "Unknown"
ARTIFACT_LIST = "Artifact"
COLORLESS = "Colorless"

# Compound colors read "White, Black"
COLOR_SEPARATOR = ", "


@dataclass(frozen=True)
class SingleColor:
    name: str


@dataclass(frozen=True)
class CompoundColor:
    """Color of a double-faced card, one entry per face."""
    names: Tuple[str, ...]

    @property
    def transformed(self) -> str:
        # Text after the last comma, minus the separator's space
        return self.names[-1][len(COLOR_SEPARATOR) - 1:]


Color = Union[SingleColor, CompoundColor]


def parse_color(color: str) -> Color:
    """
    Parse a detail page color string.

    Examples:
        >>> parse_color("Green")
        SingleColor(name='Green')
        >>> parse_color("White, Black").transformed
        'Black'
    """
    if "," in color:
        return CompoundColor(tuple(color.split(",")))
    return SingleColor(color)


def front_face_type(card_type: str) -> str:
    """Type line up to the first comma; the back face's type is dropped."""
    comma = card_type.find(",")
    return card_type if comma < 0 else card_type[:comma]


def list_name_for(color: str, card_type: str) -> str:
    """
    Name of the board list a card with this color and type belongs to.

    Args:
        color: Color detail, e.g. "Blue", "Colorless" or "White, Black"
        card_type: Type detail, e.g. "Legendary Artifact Creature"

    Returns:
        Target list name
    """
    if not color:
        return UNKNOWN_LIST

    if color == COLORLESS:
        if "Artifact" in card_type:
            return ARTIFACT_LIST
        return card_type.replace("Legendary ", "", 1)

    parsed = parse_color(color)
    if isinstance(parsed, CompoundColor):
        # The transformed color has no comma left, so this recurses once
        return list_name_for(parsed.transformed, front_face_type(card_type))

    return parsed.name


def target_list_name(card: Union[SpoilerCard, Mapping[str, str]]) -> str:
    """
    Board list name for a spoiler card or a raw detail mapping.

    Examples:
        >>> target_list_name({"color": "Colorless", "type": "Legendary Artifact Creature"})
        'Artifact'
        >>> target_list_name({"color": "White, Black", "type": "Creature, Creature"})
        'Black'
    """
    if isinstance(card, SpoilerCard):
        return list_name_for(card.color, card.card_type)
    return list_name_for(card.get("color", ""), card.get("type", ""))
