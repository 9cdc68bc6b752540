import pytest

from nostrgit.patch import GitPatch, PatchError
from nostrgit.patch_series import (
    UnsignedEvent,
    compute_event_id,
    make_patch,
    make_patch_series,
    parse_patch_path,
)

PUBKEY = "a" * 64
COORD = f"30617:{PUBKEY}:n34"
OTHER_PUBKEY = "b" * 64
COORD2 = f"30617:{OTHER_PUBKEY}:n34"
NOW = 1700000000

PATCH_TEXT = """From 24e8522268ad675996fc3b35209ce23951236bdc Mon Sep 17 00:00:00 2001
From: Someone <someone@example.com>
Date: Tue, 27 May 2025 19:20:42 +0000
Subject: [PATCH] chore: a to abc

Abc patch
---
- a
+ abc
-- 
2.49.0"""


def _patch(subject):
    return GitPatch(inner=f"content of {subject}", subject=subject, body="body")


def test_event_id_matches_fields():
    event = UnsignedEvent(PUBKEY, NOW, 1617, (("t", "root"),), "hello")
    assert event.id == compute_event_id(PUBKEY, NOW, 1617, [["t", "root"]], "hello")
    assert len(event.id) == 64
    int(event.id, 16)


def test_event_id_changes_with_content():
    first = compute_event_id(PUBKEY, NOW, 1617, [], "a")
    second = compute_event_id(PUBKEY, NOW, 1617, [], "b")
    assert first != second
    assert first == compute_event_id(PUBKEY, NOW, 1617, [], "a")


def test_root_patch_tags():
    event = make_patch(_patch("[PATCH] fix"), None, None, None, [COORD], "f" * 40, PUBKEY, NOW)
    assert event.kind == 1617
    assert event.content == "content of [PATCH] fix"
    assert ("alt", "git patch: [PATCH] fix") in event.tags
    assert ("description", "[PATCH] fix") in event.tags
    assert ("a", COORD) in event.tags
    assert ("p", PUBKEY) in event.tags
    assert ("r", "f" * 40) in event.tags
    assert ("t", "root") in event.tags
    assert event.subject == "[PATCH] fix"
    assert not any(t[0] == "e" for t in event.tags)


def test_duplicate_coordinates_deduplicated():
    event = make_patch(_patch("[PATCH] x"), None, None, None, [COORD, COORD], None, PUBKEY, NOW)
    assert event.tags.count(("a", COORD)) == 1
    assert event.tags.count(("p", PUBKEY)) == 1


def test_series_reply_chain():
    patches = [_patch(f"[PATCH {n}/3] p{n}") for n in range(1, 4)]
    series = make_patch_series(patches, None, "wss://relay.example.com", [COORD, COORD2], None, PUBKEY, NOW)
    assert len(series) == 3
    root = series[0]
    assert ("t", "root") in root.tags
    second, third = series[1], series[2]
    assert ("e", root.id, "wss://relay.example.com", "root") in second.tags
    assert ("e", root.id, "wss://relay.example.com", "reply") in second.tags
    assert ("e", root.id, "wss://relay.example.com", "root") in third.tags
    assert ("e", second.id, "wss://relay.example.com", "reply") in third.tags
    assert ("t", "root") not in second.tags
    assert ("p", OTHER_PUBKEY) in third.tags


def test_revision_root():
    original = "c" * 64
    series = make_patch_series([_patch("[PATCH v2 1/1] x")], original, None, [COORD], None, PUBKEY, NOW)
    root = series[0]
    assert ("t", "root") in root.tags
    assert ("t", "root-revision") in root.tags
    assert ("e", original, "", "reply") in root.tags


def test_empty_series_raises():
    with pytest.raises(ValueError):
        make_patch_series([], None, None, [COORD], None, PUBKEY, NOW)


def test_invalid_coordinate_raises():
    with pytest.raises(ValueError):
        make_patch(_patch("[PATCH] x"), None, None, None, ["bad"], None, PUBKEY, NOW)


def test_parse_patch_path_stdin():
    assert parse_patch_path("-") is None


def test_parse_patch_path_file(tmp_path):
    path = tmp_path / "a.patch"
    path.write_text(PATCH_TEXT, encoding="utf-8")
    patch = parse_patch_path(path)
    assert patch.subject == "[PATCH] chore: a to abc"
    assert patch.body == "Abc patch"


def test_parse_patch_path_missing(tmp_path):
    with pytest.raises(PatchError):
        parse_patch_path(tmp_path / "missing.patch")