"""Repository state tags and the ``nostr-address`` file."""

from __future__ import annotations

import logging
import os
import string
from pathlib import Path
from typing import Iterable, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

# Prefix for branch references in git.
HEADS_REFS = "refs/heads/"
# Prefix for tag references in git.
TAGS_REFS = "refs/tags/"
# Kind of repository state announcements.
REPO_STATE_KIND = 30618
HEAD_TAG_KIND = "HEAD"

NOSTR_ADDRESS_FILE = "nostr-address"
PERSONAL_FORK_HASHTAG = "personal-fork"

# Header written to new address files, ending with a blank line.
NOSTR_ADDRESS_FILE_HEADER = """\
# This file contains NIP-19 `naddr` entities for repositories that accept this
# project's issues and patches.
#
# The file acts as a **read-only reference** for retrieving repository relays
# when embedded in an `naddr` and mentions those repositories when opening
# patches or issues. Modifications here will not affect in the relays, as the
# file is **explicitly untracked**. Its goal is to simplify contributions by
# removing the need for manual address entry.
#
# Each entry must start with "naddr". Embedded relays are **strongly recommended**
# to assist client-side discovery.
#
# Empty lines are ignored. Lines starting with "#" are treated as comments.

"""

_HEX_DIGITS = frozenset(string.hexdigits)
_SHA1_LENGTH = 40


def _parse_sha1(value: str) -> str:
    if len(value) != _SHA1_LENGTH or not set(value) <= _HEX_DIGITS:
        raise ValueError(f"Invalid SHA-1 hash `{value}`")
    return value.lower()


def parse_name_and_sha1(value: str) -> tuple[str, str]:
    """Parse ``<name>=<commit-id>`` into the name and the lower-case commit hash."""
    name, sep, commit = value.rpartition("=")
    if not sep:
        raise ValueError(f"Expected `<name>=<commit-id>`, got `{value}`")
    name = name.strip()
    if not name:
        raise ValueError(f"Missing name in `{value}`")
    return name, _parse_sha1(commit.strip())


def refs_tags(
    refs: Iterable[tuple[str, str]], is_heads: bool
) -> list[tuple[str, str]]:
    """Build the ref tags of a state event for branches or for tags."""
    prefix = HEADS_REFS if is_heads else TAGS_REFS
    return [(f"{prefix}{name}", str(commit)) for name, commit in refs]


def head_tag(head: str) -> tuple[str, str]:
    """Build the ``HEAD`` tag pointing at the primary branch ``head``."""
    return (HEAD_TAG_KIND, f"ref: {HEADS_REFS}{head}")


def write_address_file(directory: PathLike, naddr: str) -> Path:
    """Append ``naddr`` to the address file in ``directory``, creating it if needed.

    A new file starts with the explanatory header. Returns the file path.
    """
    path = Path(directory) / NOSTR_ADDRESS_FILE
    if not path.exists():
        logger.info(
            "Creating new address file: '%s' at path '%s' with default header",
            NOSTR_ADDRESS_FILE,
            path,
        )
        path.write_text(NOSTR_ADDRESS_FILE_HEADER, encoding="utf-8")

    logger.info("Appending naddr '%s' to address file: '%s'", naddr, NOSTR_ADDRESS_FILE)
    with path.open("a", encoding="utf-8", newline="") as handle:
        handle.write(f"{naddr}\n")
    logger.info("Successfully wrote naddr to address file")
    return path