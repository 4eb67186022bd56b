"""
Tests for trello_client module.
"""
import asyncio
from unittest.mock import Mock

import pytest
import requests

from shared.http_utils import FetchError
from spoiler_sync.src.models import BoardCard, BoardList
from spoiler_sync.src.trello_client import TrelloBoard


def mock_response(payload, content=b"{}"):
    response = Mock()
    response.json.return_value = payload
    response.content = content
    response.raise_for_status.return_value = None
    return response


def make_board(response):
    session = Mock()
    session.request.return_value = response
    return TrelloBoard("KEY", "TOKEN", "board1", session=session, timeout=5), session


class TestReads:
    """Test board read methods."""

    def test_get_lists(self):
        board, session = make_board(mock_response([{"id": "l1", "name": "White", "closed": False}]))
        lists = asyncio.run(board.get_lists())

        assert lists == [BoardList("l1", "White")]
        method, url = session.request.call_args.args
        assert method == "GET"
        assert url == "https://api.trello.com/1/boards/board1/lists"
        assert session.request.call_args.kwargs["params"] == {"key": "KEY", "token": "TOKEN"}
        assert session.request.call_args.kwargs["timeout"] == 5

    def test_get_cards(self):
        board, _ = make_board(mock_response([{"id": "c1", "name": "Avacyn"}, {"id": "c2", "name": "Ulvenwald"}]))
        assert asyncio.run(board.get_cards()) == [BoardCard("c1", "Avacyn"), BoardCard("c2", "Ulvenwald")]


class TestWrites:
    """Test board write methods."""

    def test_add_card(self):
        board, session = make_board(mock_response({"id": "new1", "name": "Avacyn"}))
        card = asyncio.run(board.add_card("Avacyn", "l1"))

        assert card == BoardCard("new1", "Avacyn")
        params = session.request.call_args.kwargs["params"]
        assert params["name"] == "Avacyn"
        assert params["idList"] == "l1"
        assert params["pos"] == "top"

    def test_add_attachment(self):
        board, session = make_board(mock_response({"id": "a1"}))
        asyncio.run(board.add_attachment("c1", "http://img/avacyn.jpg"))

        method, url = session.request.call_args.args
        assert (method, url) == ("POST", "https://api.trello.com/1/cards/c1/attachments")
        assert session.request.call_args.kwargs["params"]["url"] == "http://img/avacyn.jpg"

    def test_add_comment(self):
        board, session = make_board(mock_response({"id": "x"}))
        asyncio.run(board.add_comment("c1", "LSV: **3.0**"))

        _, url = session.request.call_args.args
        assert url == "https://api.trello.com/1/cards/c1/actions/comments"
        assert session.request.call_args.kwargs["params"]["text"] == "LSV: **3.0**"


class TestErrors:
    """Test error handling."""

    def test_http_error_becomes_fetch_error(self):
        response = mock_response(None)
        response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized for url ...?key=KEY&token=TOKEN")
        board, _ = make_board(response)

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(board.get_cards())
        assert "TOKEN" not in str(exc_info.value)
        assert "KEY" not in str(exc_info.value)

    def test_connection_error_becomes_fetch_error(self):
        session = Mock()
        session.request.side_effect = requests.ConnectionError("no route")
        board = TrelloBoard("k", "t", "b", session=session)
        with pytest.raises(FetchError):
            asyncio.run(board.get_lists())
