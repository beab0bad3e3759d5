"""Unit tests for the HackMD API endpoint methods."""

import json
from typing import get_type_hints

import pytest

from hackmd_api.client import HackMDAPI
from hackmd_api.http.models import RawResponse
from hackmd_api.models import (
    CommentPermissionType,
    CreateNoteOptions,
    Note,
    NotePermissionRole,
    NotePublishType,
    SingleNote,
    Team,
    TeamVisibilityType,
    UpdateNoteOptions,
    User,
)
from tests.helpers.http import Reply, ScriptedHandler, make_api


def _body(handler: ScriptedHandler) -> dict:
    return json.loads(handler.requests[-1].content)


class TestReadEndpoints:
    """Tests for endpoints without a request body."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("call", "path"),
        [
            (lambda api: api.get_me(), "/v1/me"),
            (lambda api: api.get_history(), "/v1/history"),
            (lambda api: api.get_note_list(), "/v1/notes"),
            (lambda api: api.get_note("abc"), "/v1/notes/abc"),
            (lambda api: api.get_teams(), "/v1/teams"),
            (lambda api: api.get_team_notes("devops"), "/v1/teams/devops/notes"),
        ],
    )
    async def test_get_paths(self, call, path: str) -> None:
        handler = ScriptedHandler(Reply(200, json={}))

        async with make_api(handler) as api:
            await call(api)

        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == path
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_get_me_returns_user(self) -> None:
        user = {"id": "u1", "name": "Ada", "email": None, "teams": []}
        handler = ScriptedHandler(Reply(200, json=user))

        async with make_api(handler) as api:
            result = await api.get_me()

        assert result == user

    @pytest.mark.asyncio
    async def test_get_note_list_raw(self) -> None:
        handler = ScriptedHandler(Reply(200, json=[]))

        async with make_api(handler) as api:
            result = await api.get_note_list(unwrap_data=False)

        assert isinstance(result, RawResponse)
        assert result.data == []


class TestNoteMutations:
    """Tests for user note mutations."""

    @pytest.mark.asyncio
    async def test_create_note_body_in_camel_case(self) -> None:
        """Test that payload fields are sent in camelCase without unset fields."""
        handler = ScriptedHandler(Reply(201, json={"id": "n1"}))
        payload = CreateNoteOptions(
            title="Hello",
            content="# Hello",
            read_permission=NotePermissionRole.GUEST,
            write_permission=NotePermissionRole.OWNER,
            comment_permission=CommentPermissionType.EVERYONE,
        )

        async with make_api(handler) as api:
            await api.create_note(payload)

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/notes"
        assert _body(handler) == {
            "title": "Hello",
            "content": "# Hello",
            "readPermission": "guest",
            "writePermission": "owner",
            "commentPermission": "everyone",
        }

    @pytest.mark.asyncio
    async def test_create_note_from_mapping(self) -> None:
        """Test that plain mappings are accepted in either casing."""
        handler = ScriptedHandler(Reply(201, json={"id": "n1"}))

        async with make_api(handler) as api:
            await api.create_note({"title": "T", "readPermission": "signed_in"})

        assert _body(handler) == {"title": "T", "readPermission": "signed_in"}

    @pytest.mark.asyncio
    async def test_update_note_content(self) -> None:
        handler = ScriptedHandler(Reply(202, headers={"ETag": '"v3"'}))

        async with make_api(handler) as api:
            result = await api.update_note_content("n1", "# Updated")

        request = handler.requests[0]
        assert request.method == "PATCH"
        assert request.url.path == "/v1/notes/n1"
        assert _body(handler) == {"content": "# Updated"}
        assert result == {"status": 202, "etag": '"v3"'}

    @pytest.mark.asyncio
    async def test_update_note_sends_only_set_fields(self) -> None:
        handler = ScriptedHandler(Reply(202))

        async with make_api(handler) as api:
            await api.update_note(
                "n1",
                UpdateNoteOptions(
                    read_permission=NotePermissionRole.OWNER, permalink="my-note"
                ),
            )

        assert _body(handler) == {"readPermission": "owner", "permalink": "my-note"}

    @pytest.mark.asyncio
    async def test_delete_note(self) -> None:
        handler = ScriptedHandler(Reply(204))

        async with make_api(handler) as api:
            result = await api.delete_note("n1")

        request = handler.requests[0]
        assert request.method == "DELETE"
        assert request.url.path == "/v1/notes/n1"
        assert result is None


class TestTeamNotes:
    """Tests for team note endpoints."""

    @pytest.mark.asyncio
    async def test_create_team_note(self) -> None:
        handler = ScriptedHandler(Reply(201, json={"id": "n1", "shortId": "abc"}))

        async with make_api(handler) as api:
            result = await api.create_team_note("devops", {"title": "Session"})

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/teams/devops/notes"
        assert result == {"id": "n1", "shortId": "abc"}

    @pytest.mark.asyncio
    async def test_team_mutations_return_raw_by_default(self) -> None:
        """Test that team note mutations surface the raw response."""
        handler = ScriptedHandler(Reply(202))

        async with make_api(handler) as api:
            updated = await api.update_team_note_content("devops", "n1", "# New")
            patched = await api.update_team_note(
                "devops", "n1", {"writePermission": "signed_in"}
            )
            deleted = await api.delete_team_note("devops", "n1")

        assert isinstance(updated, RawResponse)
        assert isinstance(patched, RawResponse)
        assert isinstance(deleted, RawResponse)
        assert [r.method for r in handler.requests] == ["PATCH", "PATCH", "DELETE"]
        assert {r.url.path for r in handler.requests} == {"/v1/teams/devops/notes/n1"}
        assert updated.status == 202

    @pytest.mark.asyncio
    async def test_team_mutation_can_unwrap(self) -> None:
        handler = ScriptedHandler(Reply(202))

        async with make_api(handler) as api:
            result = await api.delete_team_note("devops", "n1", unwrap_data=True)

        assert result is None


class TestLifecycle:
    """Tests for client lifecycle helpers."""

    @pytest.mark.asyncio
    async def test_config_exposed(self) -> None:
        api = make_api(ScriptedHandler())

        async with api:
            assert api.config.access_token == "test-token"  # noqa: S105

    @pytest.mark.asyncio
    async def test_context_manager_returns_client(self) -> None:
        api = make_api(ScriptedHandler())

        async with api as entered:
            assert entered is api
            assert isinstance(entered, HackMDAPI)


class TestResponseTypes:
    """Tests for the typed endpoint results."""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            (HackMDAPI.get_me, User | RawResponse),
            (HackMDAPI.get_history, list[Note] | RawResponse),
            (HackMDAPI.get_note_list, list[Note] | RawResponse),
            (HackMDAPI.get_note, SingleNote | RawResponse),
            (HackMDAPI.create_note, SingleNote | RawResponse),
            (HackMDAPI.update_note, SingleNote | RawResponse),
            (HackMDAPI.get_teams, list[Team] | RawResponse),
            (HackMDAPI.get_team_notes, list[Note] | RawResponse),
            (HackMDAPI.create_team_note, SingleNote | RawResponse),
        ],
    )
    def test_return_annotations(self, method, expected) -> None:
        assert get_type_hints(method)["return"] == expected

    @pytest.mark.asyncio
    async def test_enum_fields_compare_to_decoded_values(self) -> None:
        """Test that decoded string fields match the response enums."""
        handler = ScriptedHandler(
            Reply(
                200,
                json={
                    "id": "n1",
                    "publishType": "view",
                    "readPermission": "guest",
                    "writePermission": "owner",
                },
            ),
            Reply(200, json=[{"id": "t1", "path": "devops", "visibility": "public"}]),
        )

        async with make_api(handler) as api:
            note = await api.get_note("n1")
            teams = await api.get_teams()

        assert isinstance(note, dict)
        assert note["publishType"] == NotePublishType.VIEW
        assert note["readPermission"] == NotePermissionRole.GUEST
        assert isinstance(teams, list)
        assert teams[0]["visibility"] == TeamVisibilityType.PUBLIC
