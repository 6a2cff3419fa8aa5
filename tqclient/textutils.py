"""Small text, encoding and path helpers shared across the client."""

from __future__ import annotations

import base64
import binascii
import json
import os
import re
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_BASE64_ALPHABET = re.compile(r"[^A-Za-z0-9+/]")
_LINE_BREAK = re.compile(r"[\r\n]")

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024
_TB = _GB * 1024


@dataclass
class WsHeader:
    """A single websocket header entry."""

    key: str = ""
    value: str = ""


def base64url_encode(text: str) -> str:
    """Encode text as URL-safe base64 without padding."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_").replace("=", "")


def base64url_decode(encoded: str) -> str:
    """Decode URL-safe (or standard) base64, tolerating missing padding and stray characters."""
    normalized = encoded.replace("-", "+").replace("_", "/")
    cleaned = _BASE64_ALPHABET.sub("", normalized)
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned)
    except binascii.Error:
        raw = b""
    return raw.decode("utf-8", errors="replace")


def split_lines(text: str) -> list[str]:
    """Split on CR or LF, dropping empty pieces."""
    return [part for part in _LINE_BREAK.split(text) if part]


def to_camel_case(text: str) -> str:
    """Capitalise the first letter of every space-separated word."""
    words = (word for word in text.split(" ") if word)
    return " ".join(word[0].upper() + word[1:] for word in words)


def to_compact_json(obj: Mapping[str, Any]) -> str:
    """Serialise a JSON object compactly with keys in sorted order."""
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def format_bytes(size: int) -> str:
    """Render a byte count with two decimals and a binary unit."""
    if size >= _TB:
        return f"{size / _TB:.2f} TB"
    if size >= _GB:
        return f"{size / _GB:.2f} GB"
    if size >= _MB:
        return f"{size / _MB:.2f} MB"
    if size >= _KB:
        return f"{size / _KB:.2f} KB"
    return f"{size:.2f} B"


def config_path() -> str:
    """Directory holding the client configuration."""
    if sys.platform.startswith("win"):
        return str(Path(sys.argv[0] or ".").resolve().parent)
    return str(Path.home() / ".config" / "trojan-qt5")


def log_dir() -> str:
    """Directory where log files are written on this platform."""
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return str(Path(appdata) / "trojan-qt5")
    if sys.platform == "darwin":
        return str(Path.home() / "Library" / "Logs" / "Trojan-Qt5")
    cache = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return str(Path(cache) / "trojan-qt5")


def headers_to_dict(headers: Iterable[WsHeader]) -> dict[str, str]:
    """Convert header entries to a mapping; later keys win."""
    return {header.key: header.value for header in headers}


def headers_from_dict(mapping: Mapping[str, Any]) -> list[WsHeader]:
    """Convert a mapping to header entries, ordered by key; non-string values become empty."""
    return [
        WsHeader(key, value if isinstance(value, str) else "")
        for key, value in sorted(mapping.items())
    ]