"""Book mode conference note generation.

Creates one team note per session, then a main "book" note linking every
session note, grouped by day and start time.
"""

from collections.abc import Sequence
from typing import Any
from urllib.parse import urlparse

import httpx
import structlog

from hackmd_api.client import HackMDAPI
from hackmd_api.conference.book import (
    book_content,
    main_book_content,
    nest_by_day_and_time,
    session_note_content,
)
from hackmd_api.conference.models import (
    BookResult,
    ConferenceConfig,
    CreatedSessionNote,
    ProcessedSession,
    SessionUrl,
)
from hackmd_api.constants import DEFAULT_HACKMD_HOST
from hackmd_api.errors import HackMDError
from hackmd_api.models import CreateNoteOptions, NotePermissionRole


logger = structlog.get_logger()


def hackmd_host(endpoint: str | None) -> str:
    """Get the scheme and host used to build note URLs.

    Args:
        endpoint: HackMD URL; None selects the public host.

    Returns:
        ``scheme://host`` of the endpoint, or the public host if unparseable.
    """
    if not endpoint:
        return DEFAULT_HACKMD_HOST
    parsed = urlparse(endpoint)
    if not parsed.scheme or not parsed.netloc:
        logger.warning("hackmd_host_unparseable", endpoint=endpoint)
        return DEFAULT_HACKMD_HOST
    return f"{parsed.scheme}://{parsed.netloc}"


def _note_options(title: str, content: str) -> CreateNoteOptions:
    return CreateNoteOptions(
        title=title,
        content=content,
        read_permission=NotePermissionRole.GUEST,
        write_permission=NotePermissionRole.SIGNED_IN,
    )


def _short_id(note: Any) -> str | None:
    if isinstance(note, dict):
        short_id = note.get("shortId")
        if isinstance(short_id, str) and short_id:
            return short_id
    return None


async def create_session_notes(
    api: HackMDAPI,
    sessions: Sequence[ProcessedSession],
    team_path: str,
    config: ConferenceConfig,
) -> tuple[list[CreatedSessionNote], list[str]]:
    """Create one team note per session, sequentially.

    A failed session is logged and skipped; it does not abort the run.

    Returns:
        Created session notes and the ids of sessions that failed.
    """
    log = logger.bind(component="conference", team_path=team_path)
    created: list[CreatedSessionNote] = []
    failed: list[str] = []

    for session in sessions:
        options = _note_options(
            session.title, session_note_content(session.title, config)
        )
        try:
            note = await api.create_team_note(team_path, options)
        except (HackMDError, httpx.HTTPError) as exc:
            log.error("session_note_failed", session_id=session.id, error=str(exc))
            failed.append(session.id)
            continue

        short_id = _short_id(note)
        if short_id is None:
            log.error("session_note_missing_short_id", session_id=session.id)
            failed.append(session.id)
            continue

        log.info("session_note_created", session_id=session.id, short_id=short_id)
        created.append(CreatedSessionNote(session=session, short_id=short_id))

    return created, failed


async def generate_book(
    api: HackMDAPI,
    sessions: Sequence[ProcessedSession],
    team_path: str,
    config: ConferenceConfig | None = None,
    host: str = DEFAULT_HACKMD_HOST,
) -> BookResult:
    """Create the session notes and the main book note.

    Args:
        api: HackMD client.
        sessions: Processed sessions, sorted by start.
        team_path: Team the notes are created in.
        config: Conference details, defaults to the built-in conference.
        host: HackMD host used to build note URLs.

    Returns:
        BookResult with session URLs, failed sessions and the book URL.
        ``book_url`` is None if the book note could not be created.
    """
    config = config or ConferenceConfig()
    log = logger.bind(component="conference", team_path=team_path)

    created, failed = await create_session_notes(api, sessions, team_path, config)
    session_urls = [
        SessionUrl(
            id=note.session.id,
            url=f"{host}/{note.short_id}",
            title=note.session.title,
        )
        for note in created
    ]

    index = book_content(nest_by_day_and_time(created), 1)
    options = _note_options(
        f"{config.name} 共同筆記", main_book_content(index, config)
    )

    book_url: str | None = None
    try:
        book = await api.create_team_note(team_path, options)
    except (HackMDError, httpx.HTTPError) as exc:
        log.error("book_note_failed", error=str(exc))
    else:
        short_id = _short_id(book)
        if short_id is not None:
            book_url = f"{host}/{short_id}"
        log.info("book_note_created", book_url=book_url, sessions=len(session_urls))

    return BookResult(
        session_urls=session_urls,
        failed_session_ids=failed,
        book_url=book_url,
    )
