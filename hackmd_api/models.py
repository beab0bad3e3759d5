"""Request payloads and response shapes of the HackMD API."""

from enum import Enum
from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NotePermissionRole(str, Enum):
    OWNER = "owner"
    SIGNED_IN = "signed_in"
    GUEST = "guest"


class CommentPermissionType(str, Enum):
    DISABLED = "disabled"
    FORBIDDEN = "forbidden"
    OWNERS = "owners"
    SIGNED_IN_USERS = "signed_in_users"
    EVERYONE = "everyone"


class NotePublishType(str, Enum):
    EDIT = "edit"
    VIEW = "view"
    SLIDE = "slide"
    BOOK = "book"


class TeamVisibilityType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class _Payload(BaseModel):
    """Base for request bodies, serialized in camelCase without unset fields."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_body(self) -> dict[str, Any]:
        """Serialize to the JSON body sent to the API."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CreateNoteOptions(_Payload):
    """Body of a note creation request."""

    title: str | None = None
    content: str | None = None
    read_permission: NotePermissionRole | None = None
    write_permission: NotePermissionRole | None = None
    comment_permission: CommentPermissionType | None = None
    permalink: str | None = None


class UpdateNoteOptions(_Payload):
    """Body of a note update request; only set fields are sent."""

    content: str | None = None
    read_permission: NotePermissionRole | None = None
    write_permission: NotePermissionRole | None = None
    permalink: str | None = None


# Response shapes. The client returns decoded JSON; these describe its keys.
# Enum-typed fields hold the plain string values, which compare equal to the
# enum members.


class Team(TypedDict, total=False):
    id: str
    ownerId: str
    name: str
    logo: str
    path: str
    description: str
    hardBreaks: bool
    visibility: TeamVisibilityType
    createdAt: str


class User(TypedDict, total=False):
    id: str
    email: str | None
    name: str
    userPath: str
    photo: str
    teams: list[Team]


class SimpleUserProfile(TypedDict, total=False):
    name: str
    userPath: str
    photo: str
    biography: str | None
    createdAt: str


class Note(TypedDict, total=False):
    id: str
    title: str
    tags: list[str]
    lastChangedAt: str
    createdAt: str
    lastChangeUser: SimpleUserProfile | None
    publishType: NotePublishType
    publishedAt: str | None
    userPath: str | None
    teamPath: str | None
    permalink: str | None
    shortId: str
    publishLink: str
    readPermission: NotePermissionRole
    writePermission: NotePermissionRole


class SingleNote(Note, total=False):
    content: str
    status: int
    etag: str | None
