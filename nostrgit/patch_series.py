"""Building unsigned patch events that form a patch series."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from nostrgit.patch import (
    REVISION_ROOT_HASHTAG_CONTENT,
    ROOT_HASHTAG_CONTENT,
    GitPatch,
    PathLike,
    read_patch_file,
)

logger = logging.getLogger(__name__)

GIT_PATCH_KIND = 1617
# Prefix used for the alt tag of git patches.
PATCH_ALT_PREFIX = "git patch: "

Tag = list


def compute_event_id(
    pubkey: str, created_at: int, kind: int, tags: Sequence[Sequence[str]], content: str
) -> str:
    """Return the hex event id: sha256 of the serialized event."""
    serialized = json.dumps(
        [0, pubkey, created_at, kind, [list(t) for t in tags], content],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class UnsignedEvent:
    """An event ready to be signed; its id is derived from its fields."""

    pubkey: str
    created_at: int
    kind: int
    tags: tuple[tuple[str, ...], ...]
    content: str
    id: str = field(init=False)

    def __post_init__(self) -> None:
        tags = tuple(tuple(t) for t in self.tags)
        object.__setattr__(self, "tags", tags)
        object.__setattr__(
            self,
            "id",
            compute_event_id(self.pubkey, self.created_at, self.kind, tags, self.content),
        )

    def tag_content(self, name: str) -> Optional[str]:
        """Return the first value of the first tag called ``name``, if any."""
        for tag in self.tags:
            if len(tag) >= 2 and tag[0] == name:
                return tag[1]
        return None

    @property
    def subject(self) -> Optional[str]:
        """The patch subject, taken from the alt tag."""
        alt = self.tag_content("alt")
        return None if alt is None else alt.replace(PATCH_ALT_PREFIX, "")


def _coordinate_pubkey(coordinate: str) -> str:
    parts = coordinate.split(":", 2)
    if len(parts) != 3 or not parts[0].isdigit() or not parts[1]:
        raise ValueError(f"Invalid coordinate `{coordinate}`")
    return parts[1]


def _reply_tag(event_id: str, relay: Optional[str], marker: str) -> tuple[str, ...]:
    return ("e", event_id, relay or "", marker)


def _dedup(tags: Iterable[tuple[str, ...]]) -> list[tuple[str, ...]]:
    seen: set[tuple[str, ...]] = set()
    result = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def make_patch(
    patch: GitPatch,
    root: Optional[str],
    reply_to: Optional[str],
    relay_hint: Optional[str],
    coordinates: Sequence[str],
    euc: Optional[str],
    author_pubkey: str,
    created_at: Optional[int] = None,
) -> UnsignedEvent:
    """Build the unsigned event of one patch.

    With no ``root`` the patch is a root patch; with a ``reply_to`` but no
    ``root`` it is the root of a revision replying to the original patch.
    """
    if created_at is None:
        created_at = int(time.time())

    # Only these tags are deduplicated: the root and reply `e` tags of the
    # second patch point at the same event and must both be kept.
    safe_tags: list[tuple[str, ...]] = [
        ("alt", f"{PATCH_ALT_PREFIX}{patch.subject}"),
        ("description", patch.subject),
    ]
    safe_tags.extend(("a", c) for c in coordinates)
    safe_tags.extend(("p", _coordinate_pubkey(c)) for c in coordinates)
    if euc is not None:
        safe_tags.append(("r", str(euc)))
    tags = _dedup(safe_tags)

    if root is not None:
        tags.append(_reply_tag(root, relay_hint, "root"))
    else:
        tags.append(("t", ROOT_HASHTAG_CONTENT))

    if reply_to is not None:
        tags.append(_reply_tag(reply_to, relay_hint, "reply"))
        if root is None:
            tags.append(("t", REVISION_ROOT_HASHTAG_CONTENT))

    return UnsignedEvent(
        pubkey=author_pubkey,
        created_at=created_at,
        kind=GIT_PATCH_KIND,
        tags=tuple(tags),
        content=patch.inner,
    )


def make_patch_series(
    patches: Iterable[GitPatch],
    original_patch: Optional[str],
    relay_hint: Optional[str],
    coordinates: Sequence[str],
    euc: Optional[str],
    author_pubkey: str,
    created_at: Optional[int] = None,
) -> list[UnsignedEvent]:
    """Build the events of a patch series, each replying to the previous one."""
    if created_at is None:
        created_at = int(time.time())
    iterator = iter(patches)
    try:
        root_patch = next(iterator)
    except StopIteration:
        raise ValueError("Patches can't be empty") from None

    root_event = make_patch(
        root_patch, None, original_patch, relay_hint, coordinates, euc,
        author_pubkey, created_at,
    )
    series = [root_event]
    previous = root_event.id
    for patch in iterator:
        event = make_patch(
            patch, root_event.id, previous, relay_hint, coordinates, euc,
            author_pubkey, created_at,
        )
        previous = event.id
        series.append(event)
    return series


def parse_patch_path(path: PathLike) -> Optional[GitPatch]:
    """Read the patch at ``path``; ``-`` means patches come from stdin (None)."""
    if str(path) == "-":
        logger.info("Reading patches from standard input")
        return None
    return read_patch_file(path)