"""Input validation for addresses and ports."""

from __future__ import annotations

import enum
import re
import socket
import sys

_UNSIGNED = re.compile(r"\+?[0-9]+")


class ValidationState(enum.Enum):
    """Outcome of validating partially typed input."""

    INVALID = 0
    INTERMEDIATE = 1
    ACCEPTABLE = 2


def _to_ushort(text: str) -> int | None:
    stripped = text.strip()
    if not _UNSIGNED.fullmatch(stripped):
        return None
    value = int(stripped)
    return value if value <= 0xFFFF else None


def validate_ipv4(text: str) -> ValidationState:
    """Validate a possibly incomplete dotted IPv4 address."""
    if not text:
        return ValidationState.ACCEPTABLE
    groups = text.split(".")
    if len(groups) > 4:
        return ValidationState.INVALID
    empty_group = False
    for group in groups:
        if not group:
            empty_group = True
            continue
        value = _to_ushort(group)
        if value is None or value > 255:
            return ValidationState.INVALID
    if len(groups) < 4 or empty_group:
        return ValidationState.INTERMEDIATE
    return ValidationState.ACCEPTABLE


def is_valid_port(text: str) -> bool:
    """True if text is empty or an unsigned 16-bit number."""
    if not text:
        return True
    return _to_ushort(text) is not None


def validate_port(text: str) -> ValidationState:
    """Acceptable for a valid port, invalid otherwise."""
    return ValidationState.ACCEPTABLE if is_valid_port(text) else ValidationState.INVALID


def port_in_use(port: int, ipv6: bool = False, share_over_lan: bool = False) -> str:
    """Try to listen on the local port; return the error text, or "" if it is free."""
    if ipv6:
        family, address = socket.AF_INET6, ("::" if share_over_lan else "::1")
    else:
        family, address = socket.AF_INET, ("0.0.0.0" if share_over_lan else "127.0.0.1")
    try:
        with socket.socket(family, socket.SOCK_STREAM) as server:
            if not sys.platform.startswith("win"):
                server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server.bind((address, port))
            server.listen()
    except OSError as exc:
        return exc.strerror or str(exc)
    return ""