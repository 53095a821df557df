"""Tests for the MCP tool handlers against a mocked Trello API."""

import json

import httpx
import pytest
import respx

import tools
from config import _load_config
from tests.conftest import API_KEY, API_TOKEN, BOARD_ID
from tools.trello import client as client_module
from tools.trello.client import API_BASE


def text_of(result) -> str:
    assert len(result) == 1
    assert result[0].type == "text"
    return result[0].text


def body_of(route) -> dict:
    return json.loads(route.calls.last.request.content)


class TestToolRegistry:

    def test_every_tool_has_a_handler(self):
        names = {tool.name for tool in tools.TOOLS}
        assert names == set(tools._HANDLERS)
        assert names == {
            "configureTrello", "getBoards", "getLists", "addList", "archiveList",
            "getCardsByList", "getMyCards", "getRecentActivity", "addCard",
            "updateCard", "moveCard", "changeCardMembers", "archiveCard", "addComment",
        }

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        with pytest.raises(ValueError, match="Unknown tool"):
            await tools.call_tool("deleteEverything", {})


class TestUnconfigured:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,arguments", [
        ("getMyCards", {}),
        ("getBoards", {}),
        ("getLists", {}),
        ("getRecentActivity", {}),
        ("getCardsByList", {"listId": "l1"}),
        ("addCard", {"listId": "l1", "name": "New"}),
        ("archiveCard", {"cardId": "c1"}),
        ("changeCardMembers", {"cardId": "c1", "members": ["m1"]}),
        ("addList", {"name": "Review"}),
        ("addComment", {"cardId": "c1", "text": "hi"}),
    ])
    async def test_reports_missing_credentials(self, monkeypatch, name, arguments):
        monkeypatch.setenv("trelloBoardId", BOARD_ID)

        text = text_of(await tools.call_tool(name, arguments))
        assert text.startswith("Error: Trello not configured.")

    @pytest.mark.asyncio
    async def test_board_tools_need_a_board(self, monkeypatch):
        monkeypatch.setenv("trelloApiKey", API_KEY)
        monkeypatch.setenv("trelloToken", API_TOKEN)

        text = text_of(await tools.call_tool("getLists", {}))
        assert text.startswith("Error: No board configured")


@pytest.mark.usefixtures("configured")
class TestReadTools:

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_cards_by_list(self):
        respx.get(f"{API_BASE}/lists/l1/cards").mock(
            return_value=httpx.Response(200, json=[{"id": "c1", "name": "Fix login"}])
        )

        text = text_of(await tools.call_tool("getCardsByList", {"listId": "l1"}))
        assert json.loads(text) == [{"id": "c1", "name": "Fix login"}]

    @pytest.mark.asyncio
    async def test_get_cards_by_list_requires_list_id(self):
        text = text_of(await tools.call_tool("getCardsByList", {}))
        assert text == "Error: listId is required."

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_lists_uses_configured_board(self):
        respx.get(f"{API_BASE}/boards/{BOARD_ID}/lists").mock(
            return_value=httpx.Response(200, json=[{"id": "l1", "name": "To Do"}])
        )

        text = text_of(await tools.call_tool("getLists", {}))
        assert json.loads(text)[0]["name"] == "To Do"

    @pytest.mark.asyncio
    @respx.mock
    async def test_recent_activity_default_limit(self):
        route = respx.get(f"{API_BASE}/boards/{BOARD_ID}/actions").mock(
            return_value=httpx.Response(200, json=[])
        )

        await tools.call_tool("getRecentActivity", {})
        assert route.calls.last.request.url.params["limit"] == "10"

        await tools.call_tool("getRecentActivity", {"limit": 3})
        assert route.calls.last.request.url.params["limit"] == "3"

    @pytest.mark.asyncio
    async def test_recent_activity_rejects_bad_limit(self):
        text = text_of(await tools.call_tool("getRecentActivity", {"limit": "lots"}))
        assert text.startswith("Error: limit must be a number")

    @pytest.mark.asyncio
    @respx.mock
    async def test_my_cards(self):
        respx.get(f"{API_BASE}/members/me/cards").mock(return_value=httpx.Response(200, json=[]))

        assert text_of(await tools.call_tool("getMyCards", {})) == "[]"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_boards(self):
        route = respx.get(f"{API_BASE}/members/me/boards").mock(
            return_value=httpx.Response(200, json=[{"id": "b1", "name": "Roadmap"}])
        )

        text = text_of(await tools.call_tool("getBoards", {}))
        assert json.loads(text) == [{"id": "b1", "name": "Roadmap"}]
        assert route.calls.last.request.url.params["fields"] == "name,id,url"

    @pytest.mark.asyncio
    @respx.mock
    async def test_api_error_is_returned_as_text(self):
        respx.get(f"{API_BASE}/lists/nope/cards").mock(
            return_value=httpx.Response(400, text="invalid id")
        )

        text = text_of(await tools.call_tool("getCardsByList", {"listId": "nope"}))
        assert text == "Error fetching cards: Trello API error: invalid id"


@pytest.mark.usefixtures("configured")
class TestWriteTools:

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_card_omits_missing_fields(self):
        route = respx.post(f"{API_BASE}/cards").mock(
            return_value=httpx.Response(200, json={"id": "c9"})
        )

        text = text_of(await tools.call_tool("addCard", {"listId": "l1", "name": "Write docs"}))

        assert json.loads(text) == {"id": "c9"}
        assert body_of(route) == {"idList": "l1", "name": "Write docs"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_card_maps_all_fields(self):
        route = respx.post(f"{API_BASE}/cards").mock(return_value=httpx.Response(200, json={}))

        await tools.call_tool("addCard", {
            "listId": "l1",
            "name": "Ship",
            "description": "Release 1.0",
            "dueDate": "2026-11-01",
            "labels": ["lb1", "lb2"],
        })

        assert body_of(route) == {
            "idList": "l1",
            "name": "Ship",
            "desc": "Release 1.0",
            "due": "2026-11-01",
            "idLabels": ["lb1", "lb2"],
        }

    @pytest.mark.asyncio
    async def test_add_card_requires_name(self):
        text = text_of(await tools.call_tool("addCard", {"listId": "l1"}))
        assert text == "Error: name is required."

    @pytest.mark.asyncio
    @respx.mock
    async def test_update_card(self):
        route = respx.put(f"{API_BASE}/cards/c1").mock(return_value=httpx.Response(200, json={"id": "c1"}))

        await tools.call_tool("updateCard", {
            "cardId": "c1", "name": "Renamed", "position": "top", "startDate": "2026-10-20",
        })

        assert body_of(route) == {"name": "Renamed", "pos": "top", "start": "2026-10-20"}

    @pytest.mark.asyncio
    async def test_update_card_without_changes(self):
        text = text_of(await tools.call_tool("updateCard", {"cardId": "c1"}))
        assert text.startswith("No changes specified")

    @pytest.mark.asyncio
    @respx.mock
    async def test_move_card(self):
        route = respx.put(f"{API_BASE}/cards/c1").mock(return_value=httpx.Response(200, json={}))

        await tools.call_tool("moveCard", {"cardId": "c1", "listId": "l2"})
        assert body_of(route) == {"idList": "l2"}

        await tools.call_tool("moveCard", {"cardId": "c1", "listId": "l2", "boardId": "b2"})
        assert body_of(route) == {"idList": "l2", "idBoard": "b2"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_change_members_joins_ids(self):
        route = respx.put(f"{API_BASE}/cards/c1").mock(return_value=httpx.Response(200, json={}))

        await tools.call_tool("changeCardMembers", {"cardId": "c1", "members": ["m1", "m2"]})
        assert body_of(route) == {"idMembers": "m1,m2"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("members", ["m1,m2", [1, 2], {"id": "m1"}])
    async def test_change_members_rejects_non_list(self, members):
        text = text_of(await tools.call_tool("changeCardMembers", {"cardId": "c1", "members": members}))
        assert text == "Error: members must be a list."

    @pytest.mark.asyncio
    @respx.mock
    async def test_archive_card(self):
        route = respx.put(f"{API_BASE}/cards/c1").mock(return_value=httpx.Response(200, json={}))

        await tools.call_tool("archiveCard", {"cardId": "c1"})
        assert body_of(route) == {"closed": True}

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_list(self):
        route = respx.post(f"{API_BASE}/lists").mock(return_value=httpx.Response(200, json={"id": "l3"}))

        await tools.call_tool("addList", {"name": "Review"})
        assert body_of(route) == {"name": "Review", "idBoard": BOARD_ID}

    @pytest.mark.asyncio
    @respx.mock
    async def test_archive_list(self):
        route = respx.put(f"{API_BASE}/lists/l1/closed").mock(return_value=httpx.Response(200, json={}))

        await tools.call_tool("archiveList", {"listId": "l1"})
        assert body_of(route) == {"value": True}

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_comment(self):
        route = respx.post(f"{API_BASE}/cards/c1/actions/comments").mock(
            return_value=httpx.Response(200, json={"id": "a1"})
        )

        text = text_of(await tools.call_tool("addComment", {"cardId": "c1", "text": "Done!"}))

        assert route.calls.last.request.url.params["text"] == "Done!"
        assert text.startswith("Comment added to card c1.")


class TestConfigureTrello:

    @pytest.mark.asyncio
    async def test_without_credentials_shows_instructions(self):
        text = text_of(await tools.call_tool("configureTrello", {}))
        assert text.startswith("Trello not configured.")

    @pytest.mark.asyncio
    @respx.mock
    async def test_saves_credentials_and_lists_boards(self):
        respx.get(f"{API_BASE}/members/me/boards").mock(
            return_value=httpx.Response(200, json=[{"id": "b1", "name": "Roadmap"}])
        )

        text = text_of(await tools.call_tool("configureTrello", {"apiKey": API_KEY, "token": API_TOKEN}))

        assert "Trello API key: 01234567..." in text
        assert API_TOKEN not in text
        assert "  - Roadmap: b1" in text
        assert _load_config()["trello"] == {"api_key": API_KEY, "api_token": API_TOKEN}

    @pytest.mark.asyncio
    @respx.mock
    async def test_selects_board(self):
        respx.get(f"{API_BASE}/boards/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1", "name": "Roadmap"})
        )

        text = text_of(await tools.call_tool("configureTrello", {
            "apiKey": API_KEY, "token": API_TOKEN, "boardId": "b1",
        }))

        assert text == "Board selected: Roadmap (b1)"
        assert _load_config()["trello"]["board_id"] == "b1"

    @pytest.mark.asyncio
    @respx.mock
    async def test_bad_credentials(self):
        respx.get(f"{API_BASE}/members/me/boards").mock(
            return_value=httpx.Response(401, text="invalid key")
        )

        text = text_of(await tools.call_tool("configureTrello", {"apiKey": "bad", "token": "bad"}))
        assert text == "Error verifying credentials: Trello API error: invalid key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_new_credentials_close_the_old_client(self):
        respx.get(f"{API_BASE}/members/me/boards").mock(
            return_value=httpx.Response(200, json=[{"id": "b1", "name": "Roadmap"}])
        )

        await tools.call_tool("configureTrello", {"apiKey": API_KEY, "token": API_TOKEN})
        old = client_module._clients[(API_KEY, API_TOKEN)]

        await tools.call_tool("configureTrello", {"token": "rotated-token"})

        assert list(client_module._clients) == [(API_KEY, "rotated-token")]
        assert old._http.is_closed
