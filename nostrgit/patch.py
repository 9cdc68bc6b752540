"""Parsing, naming and writing of git patches in mbox format."""

from __future__ import annotations

import logging
import os
import re
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

FROM_RE = re.compile(
    r"^From [a-f0-9]{40} \w+ \w+ \d{1,2} \d{2}:\d{2}:\d{2} \d{4}$"
)
_SUBJECT_RE = re.compile(r"^Subject: (.*(?:\n .*)*)", re.MULTILINE)
_BODY_RE = re.compile(r"\n\n((?:.|\n)*?)(?:\n--[ -]|\Z)")
_PATCH_VERSION_NUMBER_RE = re.compile(
    r"\[PATCH\s+(?:v(?P<version>\d+)\s*)?(?P<number>\d+)/(?:\d+)"
)

ROOT_HASHTAG_CONTENT = "root"
REVISION_ROOT_HASHTAG_CONTENT = "root-revision"
# Earlier clients tagged revision roots with this misspelled hashtag.
LEGACY_NGIT_REVISION_ROOT_HASHTAG_CONTENT = "revision-root"

_ALLOWED_NAME_CHARS = frozenset(string.ascii_letters + string.digits + ".-_")
_MAX_NAME_LENGTH = 60


class PatchError(ValueError):
    """Raised when a patch cannot be read, parsed or named."""


@dataclass
class GitPatch:
    """A git patch: its full text, subject line and description body."""

    inner: str
    subject: str
    body: str

    def filename(self, parent: PathLike = "") -> Path:
        """Return the patch file path under ``parent``, derived from the subject."""
        if "[PATCH]" in self.subject:
            version, number = "", "1"
        else:
            version, number = patch_version_and_number(self.subject)

        if number == "0":
            name = "cover-letter"
        else:
            name = patch_file_name(self.subject)

        stem = f"{version}{number.rjust(4, '0')}-{name}".replace("--", "-")
        return Path(os.fspath(parent)) / _with_patch_extension(stem)


def _with_patch_extension(name: str) -> str:
    """Replace the final extension of ``name`` (if any) with ``.patch``."""
    dot = name.rfind(".")
    if dot > 0:
        name = name[:dot]
    return f"{name}.patch"


def parse_patch(content: str) -> GitPatch:
    """Parse the text of a patch file into a :class:`GitPatch`."""
    first_line = content.split("\n", 1)[0]
    if not FROM_RE.match(first_line):
        raise PatchError("The first line must start with 'From '.")

    subject_match = _SUBJECT_RE.search(content)
    if subject_match is None:
        raise PatchError("No subject found")
    subject = subject_match.group(1).strip().replace("\n", "")

    body_match = _BODY_RE.search(content)
    if body_match is None:
        raise PatchError("No body found")
    body = body_match.group(1).strip()

    return GitPatch(inner=content, subject=subject, body=body)


def patch_version_and_number(subject: str) -> tuple[str, str]:
    """Return the ``v{N}-`` version prefix (or ``""``) and the patch number."""
    match = _PATCH_VERSION_NUMBER_RE.search(subject)
    if match is None:
        raise PatchError(f"Can not parse the patch subject `{subject}`")
    version = match.group("version")
    prefix = f"v{version}-" if version is not None else ""
    return prefix, match.group("number")


def patch_file_name(subject: str) -> str:
    """Build a clean, lower-case file name from the text after ``[PATCH ...]``."""
    _, sep, rest = subject.partition("]")
    if not sep:
        raise PatchError(f"Invalid patch subject. No `[PATCH ...]`: `{subject}`")

    cleaned = "".join(
        c if c in _ALLOWED_NAME_CHARS else "-" for c in rest.strip().lower()
    )
    return cleaned[:_MAX_NAME_LENGTH].strip("-").strip().replace("--", "-")


def read_patch_file(path: PathLike) -> GitPatch:
    """Read and parse the patch file at ``path``."""
    logger.debug("Parsing patch file `%s`", path)
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as err:
        raise PatchError(f"Failed to read patch file `{path}`: {err}") from err
    return parse_patch(content)


def _output_str(output: PathLike | None) -> str:
    return "" if output is None else os.fspath(output)


def order_patches(
    patches: Iterable[GitPatch], output: PathLike | None = None
) -> list[tuple[Path, GitPatch]]:
    """Pair each patch with its file path, sorted by path, without duplicate paths."""
    parent = _output_str(output)
    named = sorted(
        ((patch.filename(parent), patch) for patch in patches), key=lambda p: p[0]
    )
    ordered: list[tuple[Path, GitPatch]] = []
    for path, patch in named:
        if ordered and ordered[-1][0] == path:
            continue
        ordered.append((path, patch))
    return ordered


def write_patches(
    patches: Iterable[GitPatch], output: PathLike | None = None
) -> list[Path]:
    """Write patches into ``output`` (a directory, ``""`` for here, ``-`` for stdout).

    Returns the paths written; nothing is returned when printing to stdout.
    """
    out = _output_str(output)
    is_stdout = out == "-"
    is_current_dir = out == ""
    ordered = order_patches(patches, out)

    if not is_stdout and not is_current_dir and not os.path.exists(out):
        os.makedirs(out)

    if is_stdout:
        logger.info(
            "Writing %d patch%s to the stdout",
            len(ordered),
            "es" if len(ordered) >= 2 else "",
        )
        print("\n".join(patch.inner for _, patch in ordered))
        return []

    written = []
    for path, patch in ordered:
        logger.info("Writing `%s` in `%s`", patch.subject, path)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(patch.inner)
        written.append(path)
    return written