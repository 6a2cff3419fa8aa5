"""Routing rule sets and their JSON form."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_CATEGORIES = ("direct", "proxy", "block")


@dataclass
class RouterSettings:
    """Domain and IP rules grouped by the outbound they route to."""

    domain_strategy: str = ""
    domain_direct: list[str] = field(default_factory=list)
    domain_proxy: list[str] = field(default_factory=list)
    domain_block: list[str] = field(default_factory=list)
    ip_direct: list[str] = field(default_factory=list)
    ip_proxy: list[str] = field(default_factory=list)
    ip_block: list[str] = field(default_factory=list)


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _object(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_string(item) for item in value]


def parse_router_settings(obj: Mapping[str, Any]) -> RouterSettings:
    """Build settings from a rules object; missing or mistyped parts become empty."""
    domain = _object(obj.get("domain"))
    ip = _object(obj.get("ip"))
    return RouterSettings(
        domain_strategy=_string(obj.get("domainStrategy")),
        domain_direct=_string_list(domain.get("direct")),
        domain_proxy=_string_list(domain.get("proxy")),
        domain_block=_string_list(domain.get("block")),
        ip_direct=_string_list(ip.get("direct")),
        ip_proxy=_string_list(ip.get("proxy")),
        ip_block=_string_list(ip.get("block")),
    )


def export_router_settings(settings: RouterSettings) -> dict[str, Any]:
    """Render settings as a rules object."""
    return {
        "domainStrategy": settings.domain_strategy,
        "domain": {
            "direct": list(settings.domain_direct),
            "proxy": list(settings.domain_proxy),
            "block": list(settings.domain_block),
        },
        "ip": {
            "direct": list(settings.ip_direct),
            "proxy": list(settings.ip_proxy),
            "block": list(settings.ip_block),
        },
    }


def lines_from_text(text: str) -> list[str]:
    """Split edited text into rule lines, skipping blank ones."""
    return [line for line in text.replace("\r", "").split("\n") if line.strip()]


def text_from_lines(lines: Iterable[str]) -> str:
    """Join rule lines for editing, each ended by CRLF."""
    return "".join(f"{line}\r\n" for line in lines)


def load_rules(path: str | Path) -> RouterSettings:
    """Read a rules file; unreadable JSON or a non-object document gives empty settings."""
    raw = Path(path).read_bytes()
    try:
        document = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        document = {}
    return parse_router_settings(_object(document))


def save_rules(path: str | Path, settings: RouterSettings) -> None:
    """Write settings to a rules file as indented JSON."""
    text = json.dumps(export_router_settings(settings), indent=4, sort_keys=True, ensure_ascii=False)
    Path(path).write_text(text + "\n", encoding="utf-8")