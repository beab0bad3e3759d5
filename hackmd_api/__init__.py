"""Async Python client for the HackMD API.

Example usage:
    >>> from hackmd_api import HackMDAPI
    >>>
    >>> async with HackMDAPI("your-token") as api:
    ...     me = await api.get_me()
    ...     note = await api.create_note({"title": "Hello", "content": "# Hello"})
    ...     unchanged = await api.get_note(note["id"], etag=note["etag"])
"""

from hackmd_api.client import HackMDAPI
from hackmd_api.errors import (
    ErrorKind,
    HackMDError,
    HttpResponseError,
    MissingArgumentError,
    RateLimitedError,
    ServerError,
)
from hackmd_api.http import ClientConfig, RawResponse, RequestDescriptor, RetryPolicy
from hackmd_api.models import (
    CommentPermissionType,
    CreateNoteOptions,
    NotePermissionRole,
    NotePublishType,
    TeamVisibilityType,
    UpdateNoteOptions,
)


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Client
    "HackMDAPI",
    "ClientConfig",
    "RetryPolicy",
    "RequestDescriptor",
    "RawResponse",
    # Errors
    "ErrorKind",
    "HackMDError",
    "HttpResponseError",
    "MissingArgumentError",
    "RateLimitedError",
    "ServerError",
    # Models
    "CommentPermissionType",
    "CreateNoteOptions",
    "NotePermissionRole",
    "NotePublishType",
    "TeamVisibilityType",
    "UpdateNoteOptions",
]
