"""Subscription records and their binary stream form."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_NULL_STRING = 0xFFFFFFFF
_DEFAULT_URL = "https://subscribe.example.com/trojan.txt"


def _write_string(text: str) -> bytes:
    data = text.encode("utf-16-be")
    return struct.pack(">I", len(data)) + data


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise ValueError("truncated subscription data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def string(self) -> str:
        (length,) = struct.unpack(">I", self.take(4))
        if length == _NULL_STRING:
            return ""
        if length % 2:
            raise ValueError("string length is not a whole number of UTF-16 units")
        return self.take(length).decode("utf-16-be")

    def uint64(self) -> int:
        (value,) = struct.unpack(">Q", self.take(8))
        return value


@dataclass
class Subscription:
    """A subscription source: its URL, the group it fills and when it was last fetched."""

    url: str = _DEFAULT_URL
    group_name: str = ""
    last_update_time: int = 0

    def to_bytes(self) -> bytes:
        """Serialise as big-endian length-prefixed UTF-16 strings and a 64-bit time."""
        if not 0 <= self.last_update_time < 1 << 64:
            raise ValueError("last_update_time out of range")
        return (
            _write_string(self.url)
            + _write_string(self.group_name)
            + struct.pack(">Q", self.last_update_time)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Subscription:
        """Read a subscription written by to_bytes."""
        reader = _Reader(data)
        url = reader.string()
        group_name = reader.string()
        last_update_time = reader.uint64()
        return cls(url=url, group_name=group_name, last_update_time=last_update_time)