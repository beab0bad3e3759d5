"""HackMD API client.

One thin method per endpoint; every method builds a ``RequestDescriptor``
and hands it to the shared ``RequestDispatcher``.
"""

import asyncio
from collections.abc import Mapping
from types import TracebackType
from typing import Any, cast

import httpx

from hackmd_api.constants import DEFAULT_API_ENDPOINT
from hackmd_api.http.config import ClientConfig
from hackmd_api.http.dispatcher import RequestDispatcher
from hackmd_api.http.metrics import ClientMetrics
from hackmd_api.http.models import (
    Envelope,
    HttpMethod,
    RawResponse,
    RequestDescriptor,
)
from hackmd_api.http.retry import Sleep
from hackmd_api.models import (
    CreateNoteOptions,
    Note,
    SingleNote,
    Team,
    UpdateNoteOptions,
    User,
)


class HackMDAPI:
    """Async client for the HackMD REST API.

    Every method accepts ``unwrap_data``. When True (the default for all but
    the team note mutations) the decoded JSON body is returned; note
    endpoints merge ``status`` and ``etag`` into it. When False a
    ``RawResponse`` is returned.

    Example:
        >>> async with HackMDAPI(token) as api:
        ...     note = await api.get_note("note-id")
        ...     same = await api.get_note("note-id", etag=note["etag"])
        ...     same["status"]
        304
    """

    def __init__(
        self,
        access_token: str | None = None,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
        *,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: HackMD API token.
            api_endpoint: API base URL, override for self-hosted deployments.
            config: Full configuration, used instead of the token and endpoint
                arguments. Must not be combined with ``access_token``.
            transport: Optional httpx transport, used to mock the API in tests.
            sleep: Awaitable used between retries.

        Raises:
            MissingArgumentError: If no access token is supplied.
            ValueError: If both ``config`` and ``access_token`` are given.
        """
        if config is not None and access_token is not None:
            msg = "Pass the access token either directly or through config, not both"
            raise ValueError(msg)
        if config is None:
            config = ClientConfig(
                access_token=access_token or "",
                api_endpoint=api_endpoint,
            )
        self._dispatcher = RequestDispatcher(config, transport=transport, sleep=sleep)

    async def __aenter__(self) -> "HackMDAPI":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def config(self) -> ClientConfig:
        return self._dispatcher.config

    @property
    def metrics(self) -> ClientMetrics:
        return self._dispatcher.metrics

    async def aclose(self) -> None:
        await self._dispatcher.aclose()

    async def execute(self, descriptor: RequestDescriptor) -> Envelope:
        """Execute an arbitrary request through the shared pipeline."""
        return await self._dispatcher.execute(descriptor)

    async def _request(  # noqa: PLR0913
        self,
        method: HttpMethod,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        unwrap_data: bool = True,
        etag: str | None = None,
        include_etag: bool = False,
    ) -> Envelope:
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            body=body,
            unwrap_data=unwrap_data,
            etag=etag,
            include_etag_in_result=include_etag,
        )
        return await self._dispatcher.execute(descriptor)

    # -------------------------------------------------------------------------
    # User
    # -------------------------------------------------------------------------

    async def get_me(self, *, unwrap_data: bool = True) -> User | RawResponse:
        """Get the user owning the access token."""
        result = await self._request("GET", "me", unwrap_data=unwrap_data)
        return cast(User | RawResponse, result)

    async def get_history(
        self, *, unwrap_data: bool = True
    ) -> list[Note] | RawResponse:
        """Get the user's reading history."""
        result = await self._request("GET", "history", unwrap_data=unwrap_data)
        return cast(list[Note] | RawResponse, result)

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    async def get_note_list(
        self, *, unwrap_data: bool = True
    ) -> list[Note] | RawResponse:
        result = await self._request("GET", "notes", unwrap_data=unwrap_data)
        return cast(list[Note] | RawResponse, result)

    async def get_note(
        self,
        note_id: str,
        *,
        unwrap_data: bool = True,
        etag: str | None = None,
    ) -> SingleNote | RawResponse:
        """Get a single note.

        Args:
            note_id: Note identifier.
            unwrap_data: Return the decoded body instead of a raw response.
            etag: ETag of a copy the caller already holds. When the note is
                unchanged the API answers 304 and the result is exactly
                ``{"status": 304, "etag": ...}``.

        Returns:
            The note merged with ``status`` and ``etag``, or a raw response.
        """
        result = await self._request(
            "GET",
            f"notes/{note_id}",
            unwrap_data=unwrap_data,
            etag=etag,
            include_etag=True,
        )
        return cast(SingleNote | RawResponse, result)

    async def create_note(
        self,
        payload: CreateNoteOptions | Mapping[str, Any],
        *,
        unwrap_data: bool = True,
    ) -> SingleNote | RawResponse:
        result = await self._request(
            "POST",
            "notes",
            body=_create_body(payload),
            unwrap_data=unwrap_data,
            include_etag=True,
        )
        return cast(SingleNote | RawResponse, result)

    async def update_note_content(
        self,
        note_id: str,
        content: str | None = None,
        *,
        unwrap_data: bool = True,
    ) -> SingleNote | RawResponse:
        """Replace the content of a note.

        Returns:
            ``status`` and ``etag`` of the update (the API sends no body),
            or a raw response.
        """
        result = await self._request(
            "PATCH",
            f"notes/{note_id}",
            body=UpdateNoteOptions(content=content).to_body(),
            unwrap_data=unwrap_data,
            include_etag=True,
        )
        return cast(SingleNote | RawResponse, result)

    async def update_note(
        self,
        note_id: str,
        payload: UpdateNoteOptions | Mapping[str, Any],
        *,
        unwrap_data: bool = True,
    ) -> SingleNote | RawResponse:
        result = await self._request(
            "PATCH",
            f"notes/{note_id}",
            body=_update_body(payload),
            unwrap_data=unwrap_data,
            include_etag=True,
        )
        return cast(SingleNote | RawResponse, result)

    async def delete_note(self, note_id: str, *, unwrap_data: bool = True) -> Envelope:
        return await self._request(
            "DELETE", f"notes/{note_id}", unwrap_data=unwrap_data
        )

    # -------------------------------------------------------------------------
    # Teams
    # -------------------------------------------------------------------------

    async def get_teams(self, *, unwrap_data: bool = True) -> list[Team] | RawResponse:
        result = await self._request("GET", "teams", unwrap_data=unwrap_data)
        return cast(list[Team] | RawResponse, result)

    async def get_team_notes(
        self, team_path: str, *, unwrap_data: bool = True
    ) -> list[Note] | RawResponse:
        result = await self._request(
            "GET", f"teams/{team_path}/notes", unwrap_data=unwrap_data
        )
        return cast(list[Note] | RawResponse, result)

    async def create_team_note(
        self,
        team_path: str,
        payload: CreateNoteOptions | Mapping[str, Any],
        *,
        unwrap_data: bool = True,
    ) -> SingleNote | RawResponse:
        result = await self._request(
            "POST",
            f"teams/{team_path}/notes",
            body=_create_body(payload),
            unwrap_data=unwrap_data,
        )
        return cast(SingleNote | RawResponse, result)

    # Team note mutations answer with an empty body; the status code carries
    # the outcome, so they return the raw response by default.

    async def update_team_note_content(
        self,
        team_path: str,
        note_id: str,
        content: str | None = None,
        *,
        unwrap_data: bool = False,
    ) -> Envelope:
        return await self._request(
            "PATCH",
            f"teams/{team_path}/notes/{note_id}",
            body=UpdateNoteOptions(content=content).to_body(),
            unwrap_data=unwrap_data,
        )

    async def update_team_note(
        self,
        team_path: str,
        note_id: str,
        payload: UpdateNoteOptions | Mapping[str, Any],
        *,
        unwrap_data: bool = False,
    ) -> Envelope:
        return await self._request(
            "PATCH",
            f"teams/{team_path}/notes/{note_id}",
            body=_update_body(payload),
            unwrap_data=unwrap_data,
        )

    async def delete_team_note(
        self,
        team_path: str,
        note_id: str,
        *,
        unwrap_data: bool = False,
    ) -> Envelope:
        return await self._request(
            "DELETE",
            f"teams/{team_path}/notes/{note_id}",
            unwrap_data=unwrap_data,
        )


def _create_body(payload: CreateNoteOptions | Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(payload, CreateNoteOptions):
        payload = CreateNoteOptions.model_validate(dict(payload))
    return payload.to_body()


def _update_body(payload: UpdateNoteOptions | Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(payload, UpdateNoteOptions):
        payload = UpdateNoteOptions.model_validate(dict(payload))
    return payload.to_body()
