"""Markdown templates for session notes and the conference book note."""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from hackmd_api.conference.models import ConferenceConfig, CreatedSessionNote


T = TypeVar("T")

# Nested groups: dict levels keyed by group value, lists at the leaves
Nested = dict[str, Any]


def nest(items: Sequence[T], keys: Sequence[Callable[[T], str]]) -> Nested | list[T]:
    """Group items recursively, one dict level per key function.

    Args:
        items: Items to group, order is preserved within each group.
        keys: Key functions, outermost level first.

    Returns:
        Nested dicts with lists at the leaves, or the items if no keys.
    """
    if not keys:
        return list(items)
    first, rest = keys[0], keys[1:]
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(first(item), []).append(item)
    return {key: nest(group, rest) for key, group in groups.items()}


def nest_by_day_and_time(notes: Sequence[CreatedSessionNote]) -> Nested | list[Any]:
    return nest(notes, [lambda n: n.session.day, lambda n: n.session.start_time])


def session_note_content(title: str, config: ConferenceConfig) -> str:
    """Render the Markdown of a single session note."""
    return (
        f"# {title}\n"
        "\n"
        f"{{%hackmd {config.announcement_note} %}}\n"
        "\n"
        f"## {config.notes_heading}\n"
        f"> {config.notes_description}\n"
        "\n"
        f"## {config.discussion_heading}\n"
        f"> {config.discussion_description}\n"
        "\n"
        f"## {config.links_heading}\n"
        f"- [{config.name} 官方網站]({config.website})\n"
        "\n"
        f"###### tags: `{config.tags}`\n"
    )


def book_content(nested: Nested | list[Any], layer: int = 1) -> str:
    """Render the session index of the book note.

    Each grouping level becomes a heading of depth ``layer``. At the last
    grouping level all sessions of the group are listed in start order.

    Args:
        nested: Output of ``nest_by_day_and_time``.
        layer: Heading depth of the outermost level.

    Returns:
        Markdown for the session index.
    """
    if isinstance(nested, list):
        return _session_lines(nested)

    group_keys = sorted(nested)
    if group_keys and isinstance(nested[group_keys[0]], list):
        notes: list[CreatedSessionNote] = []
        for key in group_keys:
            notes.extend(nested[key])
        return _session_lines(notes)

    content = ""
    for key in group_keys:
        content += f"{'#' * layer} {key}\n\n"
        content += book_content(nested[key], layer + 1)
    return content


def _session_lines(notes: list[CreatedSessionNote]) -> str:
    lines = ""
    for note in sorted(notes, key=lambda n: n.session.start_time):
        session = note.session
        lines += (
            f"- {session.start_time} ~ {session.end_time} "
            f"[{session.title}](/{note.short_id}) ({session.classroom})\n"
        )
    return lines


def main_book_content(index: str, config: ConferenceConfig) -> str:
    """Render the main conference book note around the session index."""
    return (
        f"{config.name} 共同筆記\n"
        "===\n"
        "\n"
        f"## 歡迎來到 {config.name}！\n"
        "\n"
        f"- [歡迎來到 DevOpsDays！]({config.welcome_note})\n"
        f"- [{config.name} 官方網站]({config.website}) [target=_blank]\n"
        f"- [HackMD 快速入門]({config.quick_start_url})\n"
        f"- [HackMD 會議功能介紹]({config.meeting_features_url})\n"
        "\n"
        "## 議程筆記\n"
        "\n"
        f"{index}\n"
        "\n"
        "## 相關資源\n"
        "\n"
        f"- [DevOps Taiwan Community]({config.community})\n"
        "- [活動照片分享區](#)\n"
        "- [問題回饋](#)\n"
        "\n"
        f"###### tags: `{config.tags}`\n"
    )
