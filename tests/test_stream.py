import pytest

from tqclient.stream import (
    format_list_text,
    format_ws_headers,
    is_checked,
    parse_list_text,
    parse_ws_headers,
)
from tqclient.textutils import WsHeader


def test_parse_ws_headers_pairs():
    headers = parse_ws_headers("Host|example.com\r\nUser-Agent|agent\n")
    assert headers == [WsHeader("Host", "example.com"), WsHeader("User-Agent", "agent")]


def test_parse_ws_header_without_separator():
    assert parse_ws_headers("Host") == [WsHeader("Host", "Host")]


def test_parse_ws_header_splits_at_first_separator():
    assert parse_ws_headers("a|b|c") == [WsHeader("a", "b|c")]


def test_parse_ws_header_empty_parts():
    assert parse_ws_headers("|") == [WsHeader("", "")]
    assert parse_ws_headers("\r\n\r\n") == []


def test_format_ws_headers():
    assert format_ws_headers([WsHeader("Host", "example.com")]) == "Host|example.com\r\n"


def test_ws_headers_round_trip():
    headers = [WsHeader("Host", "example.com"), WsHeader("X-Key", "v|w")]
    assert parse_ws_headers(format_ws_headers(headers)) == headers


def test_parse_list_text_skips_blank_lines():
    assert parse_list_text("h2\r\n   \r\nhttp/1.1\n") == ["h2", "http/1.1"]


def test_list_text_round_trip():
    items = ["-v", "--mode=fast", " spaced "]
    text = format_list_text(items)
    assert text.endswith("\r\n")
    assert parse_list_text(text) == items


@pytest.mark.parametrize("state, expected", [(0, False), (1, False), (2, True)])
def test_is_checked(state, expected):
    assert is_checked(state) is expected