"""
Trello board client.

Thin wrapper over the Trello REST API covering the reads and writes the
pipelines need. Blocking requests run in a worker thread so every call is
awaitable from the event loop.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from shared.http_utils import FetchError

from .models import BoardCard, BoardList


TRELLO_API_URL = "https://api.trello.com/1"


class TrelloBoard:
    """Reads and writes one Trello board."""

    def __init__(
        self,
        api_key: str,
        token: str,
        board_id: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        api_url: str = TRELLO_API_URL
    ):
        """
        Initialize board client.

        Args:
            api_key: Trello API key
            token: Trello user token
            board_id: Board to operate on
            session: Optional requests session
            timeout: Request timeout in seconds
            api_url: API base URL
        """
        self.api_key = api_key
        self.token = token
        self.board_id = board_id
        self.session = session or requests.Session()
        self.timeout = timeout
        self.api_url = api_url.rstrip("/")

    def _request(self, method: str, path: str, **params) -> Any:
        """
        Perform a blocking API call and decode its JSON body.

        Raises:
            FetchError: On connection errors, non-2xx responses or bad JSON
        """
        url = f"{self.api_url}{path}"
        query: Dict[str, Any] = {"key": self.api_key, "token": self.token}
        query.update(params)
        logging.debug(f"Trello {method} {path}")
        try:
            response = self.session.request(method, url, params=query, timeout=self.timeout)
            response.raise_for_status()
            return response.json() if response.content else None
        except requests.RequestException as e:
            raise FetchError(url, self._redact(str(e))) from e
        except ValueError as e:
            raise FetchError(url, f"Invalid JSON response: {e}") from e

    def _redact(self, text: str) -> str:
        """Hide credentials that requests echoes back in error messages."""
        for secret in (self.token, self.api_key):
            if secret:
                text = text.replace(secret, "***")
        return text

    async def _call(self, method: str, path: str, **params) -> Any:
        return await asyncio.to_thread(self._request, method, path, **params)

    async def get_lists(self) -> List[BoardList]:
        data = await self._call("GET", f"/boards/{self.board_id}/lists")
        return [BoardList(id=row["id"], name=row["name"]) for row in data or []]

    async def get_cards(self) -> List[BoardCard]:
        data = await self._call("GET", f"/boards/{self.board_id}/cards")
        return [BoardCard(id=row["id"], name=row["name"]) for row in data or []]

    async def add_card(self, name: str, list_id: str, pos: str = "top") -> BoardCard:
        """
        Create a card in a list.

        Args:
            name: Card name
            list_id: Target list id
            pos: Position in the list ("top", "bottom" or a number)

        Returns:
            The created card
        """
        data = await self._call("POST", "/cards", name=name, idList=list_id, pos=pos)
        return BoardCard(id=data["id"], name=data.get("name", name))

    async def add_attachment(self, card_id: str, url: str) -> None:
        await self._call("POST", f"/cards/{card_id}/attachments", url=url)

    async def add_comment(self, card_id: str, text: str) -> None:
        await self._call("POST", f"/cards/{card_id}/actions/comments", text=text)

    def close(self) -> None:
        self.session.close()
