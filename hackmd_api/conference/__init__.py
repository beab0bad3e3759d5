"""Book mode conference note generator."""

from hackmd_api.conference.book import (
    book_content,
    main_book_content,
    nest,
    nest_by_day_and_time,
    session_note_content,
)
from hackmd_api.conference.generator import (
    create_session_notes,
    generate_book,
    hackmd_host,
)
from hackmd_api.conference.models import (
    BookResult,
    ConferenceConfig,
    CreatedSessionNote,
    ProcessedSession,
    RawSession,
    SessionUrl,
)
from hackmd_api.conference.sessions import (
    load_sessions,
    process_session,
    process_sessions,
)


__all__ = [
    # Generation
    "create_session_notes",
    "generate_book",
    "hackmd_host",
    # Templates
    "book_content",
    "main_book_content",
    "nest",
    "nest_by_day_and_time",
    "session_note_content",
    # Sessions
    "load_sessions",
    "process_session",
    "process_sessions",
    # Models
    "BookResult",
    "ConferenceConfig",
    "CreatedSessionNote",
    "ProcessedSession",
    "RawSession",
    "SessionUrl",
]
