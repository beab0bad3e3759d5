"""CLI commands for the HackMD API client."""

import asyncio
import json
import logging
import sys
import uuid
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import click
import httpx

from hackmd_api.client import HackMDAPI
from hackmd_api.conference import (
    BookResult,
    ConferenceConfig,
    generate_book,
    hackmd_host,
    load_sessions,
)
from hackmd_api.constants import DEFAULT_API_ENDPOINT
from hackmd_api.errors import HackMDError
from hackmd_api.http.models import RawResponse
from hackmd_api.models import CreateNoteOptions, NotePermissionRole
from hackmd_api.observability.logging import (
    bind_run_context,
    configure_logging,
    get_logger,
)
from hackmd_api.settings import get_settings


T = TypeVar("T")

MISSING_TOKEN_HELP = (
    "Error: HACKMD_ACCESS_TOKEN environment variable is not set.\n"
    "Please set your HackMD access token using one of these methods:\n"
    "1. Create a .env file with HACKMD_ACCESS_TOKEN=your_token_here\n"
    "2. Set the environment variable directly: "
    "export HACKMD_ACCESS_TOKEN=your_token_here"
)


def _build_api() -> HackMDAPI:
    """Create a client from the environment, exiting if no token is set."""
    settings = get_settings()
    if not settings.access_token:
        click.echo(MISSING_TOKEN_HELP, err=True)
        sys.exit(1)
    return HackMDAPI(config=settings.to_client_config())


def _run(command: Callable[[HackMDAPI], Awaitable[T]]) -> T:
    """Run an async command with a fresh client, reporting API errors."""
    api = _build_api()

    async def runner() -> T:
        async with api:
            return await command(api)

    try:
        return asyncio.run(runner())
    except HackMDError as exc:
        get_logger("cli").error("command_failed", **exc.to_dict())
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)
    except httpx.HTTPStatusError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(f"Response status: {exc.response.status_code}", err=True)
        click.echo(f"Response data: {exc.response.text}", err=True)
        sys.exit(1)
    except httpx.HTTPError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _expect_dict(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        msg = f"Unexpected response from HackMD: {value!r}"
        raise click.ClickException(msg)
    return value


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2, ensure_ascii=False))


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON format for logs (default: false).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def cli(json_logs: bool, verbose: bool) -> None:
    """HackMD API command line client."""
    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        json_format=json_logs,
    )


@cli.command()
def me() -> None:
    """Print the user owning the access token."""
    _echo_json(_run(lambda api: api.get_me()))


@cli.command()
def notes() -> None:
    """Print the user's notes."""
    _echo_json(_run(lambda api: api.get_note_list()))


async def run_demo(api: HackMDAPI) -> None:
    """Walk through the main API operations on a throwaway note."""
    click.echo("Getting user information...")
    user = _expect_dict(await api.get_me())
    click.echo(f"User email: {user.get('email')}")
    click.echo(f"User name: {user.get('name')}")

    click.echo("\nCreating a new note...")
    created = _expect_dict(
        await api.create_note(
            CreateNoteOptions(
                title="Test Note",
                content=(
                    "# Hello from HackMD API\n\n"
                    "This is a test note created using the API client."
                ),
                read_permission=NotePermissionRole.GUEST,
                write_permission=NotePermissionRole.OWNER,
            )
        )
    )
    note_id = created["id"]
    click.echo(f"Created note ID: {note_id}")
    click.echo(f"Note URL: {created.get('publishLink')}")

    click.echo("\nGetting note with ETag support...")
    note = _expect_dict(await api.get_note(note_id))
    click.echo(f"Note content: {note.get('content')}")
    cached = _expect_dict(await api.get_note(note_id, etag=note.get("etag")))
    click.echo(f"Note status: {cached['status']}")

    click.echo("\nUpdating note content...")
    updated = _expect_dict(
        await api.update_note_content(
            note_id, "# Updated Content\n\nThis note has been updated!"
        )
    )
    click.echo(f"Update status: {updated['status']}")

    click.echo("\nGetting raw response...")
    raw = await api.get_note(note_id, unwrap_data=False)
    if isinstance(raw, RawResponse):
        click.echo(f"Response headers: {dict(raw.headers)}")
        click.echo(f"Response status: {raw.status}")

    click.echo("\nCleaning up - deleting test note...")
    await api.delete_note(note_id)
    click.echo("Note deleted successfully")


@cli.command()
def demo() -> None:
    """Create, read, update and delete a test note."""
    _run(run_demo)


@cli.command("book-mode")
@click.option(
    "--sessions",
    "sessions_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the sessions JSON file.",
)
@click.option("--team", "team_path", required=True, help="Team path for the notes.")
@click.option(
    "--conference",
    "conference_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file overriding the conference details.",
)
@click.option(
    "--host",
    default=None,
    help="HackMD host for note URLs (default: derived from HACKMD_API_ENDPOINT).",
)
def book_mode(
    sessions_path: Path,
    team_path: str,
    conference_path: Path | None,
    host: str | None,
) -> None:
    """Create session notes and a conference book note linking them."""
    bind_run_context(uuid.uuid4().hex[:12])
    config = ConferenceConfig()
    if conference_path is not None:
        config = ConferenceConfig.model_validate_json(
            conference_path.read_text(encoding="utf-8")
        )

    if host is None:
        endpoint = get_settings().api_endpoint
        host = hackmd_host(None if endpoint == DEFAULT_API_ENDPOINT else endpoint)

    click.echo("Loading session data...")
    sessions = load_sessions(sessions_path)
    click.echo(f"Processing {len(sessions)} sessions...")

    result: BookResult = _run(
        lambda api: generate_book(api, sessions, team_path, config, host=host)
    )

    click.echo("\n=== Session URLs ===")
    _echo_json([url.model_dump() for url in result.session_urls])
    if result.failed_session_ids:
        click.echo(f"Failed sessions: {', '.join(result.failed_session_ids)}", err=True)

    if result.book_url is None:
        click.echo("Failed to create main book", err=True)
        sys.exit(1)
    click.echo(f"\nBook URL: {result.book_url}")
    click.echo(f"Main book contains links to {len(result.session_urls)} session notes")


if __name__ == "__main__":
    cli()
