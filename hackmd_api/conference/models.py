"""Data models for the book mode conference generator."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class SpeakerProfile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    public_name: str


class SessionSpeaker(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    speaker: SpeakerProfile


class Classroom(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    tw_name: str | None = None
    en_name: str | None = None


class RawSession(BaseModel):
    """Session as published in the conference sessions JSON."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    title: str
    speaker: list[SessionSpeaker] = Field(default_factory=list)
    session_type: str | None = None
    started_at: datetime
    finished_at: datetime
    tags: list[str] | None = None
    classroom: Classroom | None = None
    language: str | None = None
    difficulty: str | None = None


class ProcessedSession(BaseModel):
    """Session normalized for note generation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    title: Annotated[str, Field(min_length=1)]
    tags: list[str] = Field(default_factory=list)
    start: datetime
    day: str = Field(description="MM/DD of the start")
    start_time: str = Field(description="HH:MM of the start")
    end_time: str = Field(description="HH:MM of the end")
    session_type: str
    classroom: str
    language: str
    difficulty: str


class CreatedSessionNote(BaseModel):
    """A session whose note was created in the team workspace."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    session: ProcessedSession
    short_id: Annotated[str, Field(min_length=1)]


class SessionUrl(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    url: str
    title: str


class ConferenceConfig(BaseModel):
    """Conference details and note template settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "DevOpsDays Taipei 2025"
    website: str = "https://devopsdays.tw/"
    community: str = "https://www.facebook.com/groups/DevOpsTaiwan/"
    tags: str = "DevOpsDays Taipei 2025"
    announcement_note: str = Field(
        default="@DevOpsDay/rkO2jyLMlg",
        description="Note embedded at the top of every session note",
    )
    welcome_note: str = "/@DevOpsDay/ry9DnJIfel"
    quick_start_url: str = "https://hackmd.io/s/BJvtP4zGX"
    meeting_features_url: str = "https://hackmd.io/s/BJHWlNQMX"
    notes_heading: str = "筆記區"
    notes_description: str = "從這開始記錄你的筆記"
    discussion_heading: str = "討論區"
    discussion_description: str = "歡迎在此進行討論"
    links_heading: str = "相關連結"


class BookResult(BaseModel):
    """Outcome of a book mode generation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    session_urls: list[SessionUrl] = Field(default_factory=list)
    failed_session_ids: list[str] = Field(default_factory=list)
    book_url: str | None = None
