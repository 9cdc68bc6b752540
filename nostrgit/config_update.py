"""Changes applied to the configuration by the ``config`` commands."""

from __future__ import annotations

import ipaddress
from typing import Iterable, Optional, Union

DEFAULT_NIP07_PROXY_ADDR = "127.0.0.1:7400"

BUNKER_SCHEME = "bunker://"
NOSTR_CONNECT_SCHEME = "nostrconnect://"

_HEX = frozenset("0123456789abcdef")


class NotBunkerUrlError(ValueError):
    """Raised when a Nostr Connect URI is not a bunker URI."""

    def __init__(self, message: str = "The given Nostr Connect URL is not a bunker URL"):
        super().__init__(message)


def update_fallback_relays(
    current: Optional[Iterable[str]], relays: Iterable[str], override_relays: bool
) -> Optional[list[str]]:
    """Return the new fallback relays.

    No relays removes them all (``None``). With ``override_relays`` the given
    relays replace the current ones; otherwise they are added, and the result
    is sorted without duplicates.
    """
    new = list(relays)
    if not new:
        return None
    if override_relays:
        return new
    return sorted(set(current or ()) | set(new))


def _socket_address(addr: str) -> str:
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit() or int(port) > 65535:
        raise ValueError(f"Invalid socket address `{addr}`")
    if host.startswith("[") and host.endswith("]"):
        ip = ipaddress.ip_address(host[1:-1])
        if ip.version != 6:
            raise ValueError(f"Invalid socket address `{addr}`")
        return f"[{ip}]:{int(port)}"
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        raise ValueError(f"Invalid socket address `{addr}`") from None
    if ip.version != 4:
        raise ValueError(f"Invalid socket address `{addr}`")
    return f"{ip}:{int(port)}"


def nip07_address(enable: bool, addr: Optional[str] = None) -> Optional[str]:
    """Return the browser signer proxy address to store, or ``None`` to disable it."""
    if not enable:
        return None
    return _socket_address(addr) if addr is not None else DEFAULT_NIP07_PROXY_ADDR


def check_bunker_url(url: Optional[str]) -> Optional[str]:
    """Return ``url`` if it is a bunker URI; ``None`` removes the bunker.

    Raises :class:`NotBunkerUrlError` for a client ``nostrconnect://`` URI and
    :class:`ValueError` for anything that is not a Nostr Connect URI.
    """
    if url is None:
        return None
    if url.startswith(NOSTR_CONNECT_SCHEME):
        raise NotBunkerUrlError()
    if not url.startswith(BUNKER_SCHEME):
        raise ValueError(f"Invalid Nostr Connect URI `{url}`")
    pubkey = url[len(BUNKER_SCHEME):].split("?", 1)[0].rstrip("/")
    if len(pubkey) != 64 or not set(pubkey.lower()) <= _HEX:
        raise ValueError(f"Invalid remote signer public key in `{url}`")
    return url


def pow_difficulty(value: Union[int, str]) -> int:
    """Return the PoW difficulty, which must fit in an unsigned byte."""
    try:
        difficulty = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid PoW difficulty `{value}`") from None
    if not 0 <= difficulty <= 255:
        raise ValueError(f"PoW difficulty out of range: {difficulty}")
    return difficulty