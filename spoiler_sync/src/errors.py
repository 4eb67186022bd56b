"""
Failure types raised by the sync pipelines.

Every failure propagates to the CLI, which logs it and exits non-zero.
"""

from typing import Iterable

from shared.http_utils import FetchError


class ConfigError(ValueError):
    """Required configuration is missing or invalid."""


class ReviewMatchError(RuntimeError):
    """One or more reviews could not be matched to a board card."""

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        listing = "\n".join(f"  {name}" for name in self.names)
        super().__init__(
            f"Some review cards could not be matched to Trello cards:\n{listing}"
        )


class ListNotFoundError(RuntimeError):
    """A card classified into a list that does not exist on the board."""

    def __init__(self, list_name: str, card_name: str = ""):
        self.list_name = list_name
        self.card_name = card_name
        msg = f'Could not find list "{list_name}".'
        if card_name:
            msg += f" (needed for {card_name})"
        super().__init__(msg)


__all__ = ["ConfigError", "FetchError", "ListNotFoundError", "ReviewMatchError"]
