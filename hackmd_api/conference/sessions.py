"""Loading and normalization of conference session data."""

import json
from pathlib import Path

from pydantic import TypeAdapter

from hackmd_api.conference.models import ProcessedSession, RawSession


_RAW_SESSIONS = TypeAdapter(list[RawSession])


def process_session(raw: RawSession) -> ProcessedSession:
    """Normalize one raw session.

    Speaker names are joined with " & " and appended to the title.

    Args:
        raw: Session from the sessions JSON.

    Returns:
        The processed session.
    """
    speakers = " & ".join(s.speaker.public_name for s in raw.speaker)
    title = f"{raw.title} - {speakers}" if speakers else raw.title

    classroom = "TBD"
    if raw.classroom is not None:
        classroom = raw.classroom.tw_name or raw.classroom.en_name or "TBD"

    return ProcessedSession(
        id=raw.id,
        title=title,
        tags=raw.tags or [],
        start=raw.started_at,
        day=raw.started_at.strftime("%m/%d"),
        start_time=raw.started_at.strftime("%H:%M"),
        end_time=raw.finished_at.strftime("%H:%M"),
        session_type=raw.session_type or "",
        classroom=classroom,
        language=raw.language or "en",
        difficulty=raw.difficulty or "General",
    )


def process_sessions(raw_sessions: list[RawSession]) -> list[ProcessedSession]:
    """Drop sessions without a type, normalize the rest and sort by start."""
    processed = [process_session(s) for s in raw_sessions if s.session_type]
    return sorted(processed, key=lambda s: s.start.timestamp())


def load_sessions(path: Path) -> list[ProcessedSession]:
    """Load and process sessions from a JSON file.

    Args:
        path: Path to the sessions JSON array.

    Returns:
        Processed sessions sorted by start time.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the data does not match the schema.
    """
    if not path.exists():
        msg = f"Sessions file not found: {path}"
        raise FileNotFoundError(msg)
    data = json.loads(path.read_text(encoding="utf-8"))
    return process_sessions(_RAW_SESSIONS.validate_python(data))
