# nostrgit

Building blocks for collaborating on git repositories over Nostr (NIP-34):
parsing `git format-patch` files, turning them into unsigned patch series
events, quoting replies, updating configuration values and preparing
repository state tags.

The package has no dependencies beyond the Python standard library
(Python 3.10 or later).

## Installation

```
pip install nostrgit
```

## Parsing and writing patches (`nostrgit.patch`)

```python
from nostrgit.patch import read_patch_file, PatchError

patch = read_patch_file("0001-fix-something.patch")
print(patch.subject)           # "[PATCH 1/2] fix: something"
print(patch.body)              # the commit message body
print(patch.filename("out"))   # out/0001-fix-something.patch
```

- `parse_patch(content)` parses the text of a patch into a `GitPatch`
  (`inner`, `subject`, `body`). The first line must be a `From <sha1> ...`
  line; multi-line subjects are joined.
- `GitPatch.filename(parent)` derives the file name from the subject:
  an optional `v{N}-` version prefix, the four-digit patch number, and the
  lower-cased subject text (at most 60 characters), or `cover-letter` for
  patch number 0.
- `patch_version_and_number(subject)` and `patch_file_name(subject)` expose
  the two halves of that naming.
- `order_patches(patches, output)` pairs patches with their paths, sorted by
  path, dropping duplicate paths.
- `write_patches(patches, output)` writes them into a directory (created if
  missing), into the current directory when `output` is empty, or prints them
  to stdout when `output` is `-`. It returns the paths written.

Malformed patches, unreadable files and subjects that cannot be named raise
`PatchError` (a `ValueError`).

## Patch series events (`nostrgit.patch_series`)

`make_patch_series(patches, original_patch, relay_hint, coordinates, euc,
author_pubkey, created_at=None)` turns parsed patches into `UnsignedEvent`
objects of kind 1617. The first patch is tagged `root`; with an
`original_patch` id it also replies to that patch and is tagged
`root-revision`. Every later patch carries an `e` root tag to the first event
and an `e` reply tag to the previous one. Repository coordinates
(`kind:pubkey:identifier`) become `a` and `p` tags, and the earliest unique
commit becomes an `r` tag.

`UnsignedEvent.id` is the sha256 of the serialized event (see
`compute_event_id`); `UnsignedEvent.subject` reads the subject back from the
`alt` tag. `make_patch` builds a single event, and `parse_patch_path(path)`
reads a patch file, returning `None` for `-` (standard input).

## Replies (`nostrgit.reply`)

- `quote_reply_to_content(author_name, created_at, content)` produces
  `"On 2025-05-27 at 19:20 UTC, alice wrote:\n> ..."`, prefixing each line of
  the content with `> `.
- `coordinates_from_root(coordinates)` keeps only repository announcement
  coordinates (kind 30617) and raises `InvalidEventError` when none remain.

## Configuration values (`nostrgit.config_update`)

- `update_fallback_relays(current, relays, override_relays)`: no relays
  clears them (`None`); otherwise the relays replace or are merged into the
  current ones (merged lists are sorted and de-duplicated).
- `nip07_address(enable, addr=None)`: validated `ip:port` for the browser
  signer proxy, defaulting to `127.0.0.1:7400`, or `None` when disabled.
- `check_bunker_url(url)`: accepts `bunker://<hex pubkey>...` URIs, raises
  `NotBunkerUrlError` for `nostrconnect://` URIs and `ValueError` otherwise.
- `pow_difficulty(value)`: an integer from 0 to 255.

## Repository state (`nostrgit.repo_state`)

- `parse_name_and_sha1("v0.4.0=9aa3...")` returns the name and the
  lower-cased 40-digit commit hash.
- `refs_tags(refs, is_heads)` builds `refs/heads/...` or `refs/tags/...` tags;
  `head_tag(head)` builds the `HEAD` tag (`ref: refs/heads/<head>`).
- `write_address_file(directory, naddr)` appends an `naddr` to the
  `nostr-address` file, creating it with an explanatory header first.

## What this package does not do

It is a library only: it installs no command. It does not connect to relays,
fetch or publish events, sign events or compute proof of work, and it does
not encode `naddr`/`nevent` identifiers. It also does not track or validate
status changes of issues, patches or pull requests (open, draft, closed,
applied/merged).

## Running the tests

```
pip install -e ".[test]"
pytest
```