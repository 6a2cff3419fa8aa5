import pytest

from tqclient.subscription import Subscription


def test_defaults():
    sub = Subscription()
    assert sub.url == "https://subscribe.example.com/trojan.txt"
    assert sub.group_name == ""
    assert sub.last_update_time == 0


@pytest.mark.parametrize(
    "sub",
    [
        Subscription(),
        Subscription("https://example.com/sub", "group ✓", 1_600_000_000),
        Subscription("", "", 2 ** 64 - 1),
    ],
)
def test_round_trip(sub):
    assert Subscription.from_bytes(sub.to_bytes()) == sub


def test_wire_format():
    data = Subscription("a", "g", 1).to_bytes()
    assert data == (
        b"\x00\x00\x00\x02\x00a"
        + b"\x00\x00\x00\x02\x00g"
        + (1).to_bytes(8, "big")
    )


def test_null_string_reads_as_empty():
    data = b"\x00\x00\x00\x02\x00a" + b"\xff\xff\xff\xff" + (5).to_bytes(8, "big")
    sub = Subscription.from_bytes(data)
    assert sub.group_name == ""
    assert sub.url == "a"
    assert sub.last_update_time == 5


def test_truncated_data_raises():
    data = Subscription("a", "g", 1).to_bytes()
    with pytest.raises(ValueError):
        Subscription.from_bytes(data[:-1])


def test_odd_string_length_raises():
    with pytest.raises(ValueError):
        Subscription.from_bytes(b"\x00\x00\x00\x01a")


def test_negative_time_rejected():
    with pytest.raises(ValueError):
        Subscription(last_update_time=-1).to_bytes()