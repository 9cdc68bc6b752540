import pytest

from nostrgit.config_update import (
    DEFAULT_NIP07_PROXY_ADDR,
    NotBunkerUrlError,
    check_bunker_url,
    nip07_address,
    pow_difficulty,
    pow_difficulty as _pow,
    update_fallback_relays,
)

R1 = "wss://a.example.com"
R2 = "wss://b.example.com"
R3 = "wss://c.example.com"
PK = "b" * 64


def test_empty_relays_removes_all():
    assert update_fallback_relays([R1], [], False) is None
    assert update_fallback_relays([R1], [], True) is None


def test_override_replaces():
    assert update_fallback_relays([R1], [R3, R2], True) == [R3, R2]


def test_append_sorts_and_dedups():
    result = update_fallback_relays([R3, R1], [R2, R1], False)
    assert result == [R1, R2, R3]
    assert result == sorted(set(result))


def test_append_to_nothing():
    assert update_fallback_relays(None, [R2, R2], False) == [R2]


def test_nip07_disable():
    assert nip07_address(False, "127.0.0.1:9000") is None


def test_nip07_default_address():
    assert nip07_address(True) == DEFAULT_NIP07_PROXY_ADDR


def test_nip07_custom_address():
    assert nip07_address(True, "127.0.0.1:9000") == "127.0.0.1:9000"
    assert nip07_address(True, "[::1]:9000") == "[::1]:9000"


@pytest.mark.parametrize("addr", ["localhost:80", "127.0.0.1", "1.2.3.4:70000", "::1:80"])
def test_nip07_invalid_address(addr):
    with pytest.raises(ValueError):
        nip07_address(True, addr)


def test_bunker_none_removes():
    assert check_bunker_url(None) is None


def test_bunker_valid():
    url = f"bunker://{PK}?relay=wss://relay.example.com"
    assert check_bunker_url(url) == url


def test_nostrconnect_is_not_bunker():
    with pytest.raises(NotBunkerUrlError):
        check_bunker_url(f"nostrconnect://{PK}?relay=wss://relay.example.com")


@pytest.mark.parametrize("url", ["https://example.com", "bunker://nothex?relay=x"])
def test_bunker_invalid_uri(url):
    with pytest.raises(ValueError):
        check_bunker_url(url)


@pytest.mark.parametrize("value", [0, 16, 255, "42"])
def test_pow_valid(value):
    assert pow_difficulty(value) == int(value)


@pytest.mark.parametrize("value", [-1, 256, "abc"])
def test_pow_invalid(value):
    with pytest.raises(ValueError):
        _pow(value)