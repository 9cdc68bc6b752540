"""Helpers for replying to issues, patches and comments."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

# The latest date used for quoting: "9999-01-01 at 00:00 UTC".
MAX_DATE = 253370764800
GIT_REPO_ANNOUNCEMENT_KIND = 30617

_I64_MAX = 2**63 - 1


class InvalidEventError(ValueError):
    """Raised when an event lacks what a command needs from it."""


def _date_prefix(created_at: int) -> str:
    timestamp = created_at if created_at <= _I64_MAX else MAX_DATE
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ""
    return (
        f"On {moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"at {moment.hour:02d}:{moment.minute:02d} UTC, "
    )


def quote_reply_to_content(author_name: str, created_at: int, content: str) -> str:
    """Quote ``content`` as "On yyyy-mm-dd at hh:mm UTC, {author} wrote:" plus lines.

    Each line of the trimmed content is prefixed with ``> ``. The date is
    left out when the timestamp cannot be shown as a date.
    """
    quoted = content.strip().replace("\n", "\n> ")
    return f"{_date_prefix(created_at)}{author_name} wrote:\n> {quoted}"


def _coordinate_kind(coordinate: str) -> int | None:
    parts = coordinate.split(":", 2)
    if len(parts) != 3 or not parts[0].isdigit() or not parts[1]:
        return None
    return int(parts[0])


def coordinates_from_root(coordinates: Iterable[str]) -> list[str]:
    """Return the repository coordinates (``kind:pubkey:identifier``) of a root event.

    Only coordinates of repository announcements are kept; malformed ones
    are ignored. Raises :class:`InvalidEventError` if none is left.
    """
    repos = [
        c for c in coordinates if _coordinate_kind(c) == GIT_REPO_ANNOUNCEMENT_KIND
    ]
    if not repos:
        raise InvalidEventError(
            "The Git issue/patch does not specify a target repository"
        )
    return repos