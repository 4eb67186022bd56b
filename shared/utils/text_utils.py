"""
Text Normalization Utilities

Provides loose string comparison shared by the dedup and review matchers,
so that punctuation, casing and markup whitespace never cause a mismatch.
"""

import re
from typing import Iterable

# Separator between the faces of a double-faced card name
FACE_DELIMITER = " // "

_MULTI_SPACE = re.compile(r" {2,}")
_NON_WORD = re.compile(r"\W")
_OTHER_FACES = re.compile(r" //.*$")


def make_loosely_comparable(text: str) -> str:
    """
    Normalize text into a loose comparison key.

    Applies the following normalizations:
    1. Strips leading/trailing whitespace
    2. Collapses runs of two or more spaces to one
    3. Removes every non-word character (punctuation and spaces)
    4. Lowercases

    The key is only ever compared, never stored.

    Args:
        text: String to normalize

    Returns:
        Normalized comparison key

    Examples:
        >>> make_loosely_comparable('Brisela, Voice of Nightmares')
        'briselavoiceofnightmares'
        >>> make_loosely_comparable('  Kindly  Stranger ')
        'kindlystranger'
    """
    text = (text or "").strip()
    text = _MULTI_SPACE.sub(" ", text)
    text = _NON_WORD.sub("", text)
    return text.lower()


def eq_loose(a: str, b: str) -> bool:
    """Equality that ignores case, extra whitespace and punctuation."""
    return make_loosely_comparable(a) == make_loosely_comparable(b)


def contains_loose(target: str, values: Iterable[str]) -> bool:
    """
    Check whether any value is loosely equal to target.

    Args:
        target: String to look for
        values: Candidate strings

    Returns:
        True if at least one candidate matches
    """
    key = make_loosely_comparable(target)
    return any(make_loosely_comparable(v) == key for v in values)


def primary_face(name: str) -> str:
    """
    Get the front face of a double-faced card name.

    Examples:
        >>> primary_face('Delver of Secrets // Insectile Aberration')
        'Delver of Secrets'
    """
    return _OTHER_FACES.sub("", name or "")

