"""Sample conference session data."""

from typing import Any


RAW_SESSIONS: list[dict[str, Any]] = [
    {
        "id": "s1",
        "title": "Keynote",
        "speaker": [
            {"speaker": {"public_name": "Alice"}},
            {"speaker": {"public_name": "Bob"}},
        ],
        "session_type": "keynote",
        "started_at": "2025-09-24T09:00:00+08:00",
        "finished_at": "2025-09-24T09:40:00+08:00",
        "tags": ["devops"],
        "classroom": {"tw_name": "R1 會議室", "en_name": "Room 1"},
        "language": "zh-TW",
        "difficulty": "入門",
    },
    {
        "id": "s2",
        "title": "Lunch",
        "speaker": [],
        "session_type": None,
        "started_at": "2025-09-24T12:00:00+08:00",
        "finished_at": "2025-09-24T13:00:00+08:00",
    },
    {
        "id": "s3",
        "title": "Panel",
        "speaker": [],
        "session_type": "panel",
        "started_at": "2025-09-25T10:00:00+08:00",
        "finished_at": "2025-09-25T10:40:00+08:00",
        "classroom": {"tw_name": None, "en_name": "Room 2"},
    },
    {
        "id": "s4",
        "title": "Workshop",
        "speaker": [{"speaker": {"public_name": "Carol", "bio": "ignored"}}],
        "session_type": "workshop",
        "started_at": "2025-09-24T09:00:00+08:00",
        "finished_at": "2025-09-24T10:30:00+08:00",
        "classroom": None,
    },
]
