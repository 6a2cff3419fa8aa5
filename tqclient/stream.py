"""Text forms of transport settings edited as multi-line fields."""

from __future__ import annotations

from collections.abc import Iterable

from tqclient.textutils import WsHeader, split_lines

_CHECKED = 2


def parse_ws_headers(text: str) -> list[WsHeader]:
    """Parse "key|value" lines; a line without "|" is used as both key and value."""
    headers = []
    for line in split_lines(text):
        key, sep, value = line.partition("|")
        headers.append(WsHeader(key, value) if sep else WsHeader(line, line))
    return headers


def format_ws_headers(headers: Iterable[WsHeader]) -> str:
    """Render headers as "key|value" lines ended by CRLF."""
    return "".join(f"{header.key}|{header.value}\r\n" for header in headers)


def parse_list_text(text: str) -> list[str]:
    """Split a multi-line field into entries, skipping blank lines."""
    return [line for line in split_lines(text) if line.strip()]


def format_list_text(items: Iterable[str]) -> str:
    """Render entries one per line, each ended by CRLF."""
    return "".join(f"{item}\r\n" for item in items)


def is_checked(state: int) -> bool:
    """True for a fully checked check-box state."""
    return state == _CHECKED