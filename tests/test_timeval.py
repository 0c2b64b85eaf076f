import time

import pytest

from echoping.timeval import Timeval


def test_from_seconds_splits_fraction():
    assert Timeval.from_seconds(1.5) == Timeval(1, 500000)


@pytest.mark.parametrize(
    "a,b",
    [
        (Timeval(1, 999_999), Timeval(0, 2)),
        (Timeval(5, 0), Timeval(3, 700_000)),
        (Timeval(0, 0), Timeval(0, 0)),
    ],
)
def test_add_then_sub_round_trip(a, b):
    total = a + b
    assert 0 <= total.usec < 1_000_000
    assert total - b == a
    assert total - a == b


def test_sub_borrows_and_keeps_usec_in_range():
    diff = Timeval(2, 100) - Timeval(1, 200)
    assert 0 <= diff.usec < 1_000_000
    assert diff + Timeval(1, 200) == Timeval(2, 100)


def test_sub_can_go_negative():
    earlier = Timeval(10, 0)
    later = Timeval(11, 250)
    assert (earlier - later).compare(Timeval(0, 0)) == -1


def test_compare_orders_values():
    a = Timeval(1, 5)
    b = Timeval(1, 6)
    c = Timeval(2, 0)
    assert a.compare(b) == -1
    assert b.compare(a) == 1
    assert a.compare(Timeval(1, 5)) == 0
    assert b.compare(c) == -1
    assert sorted([c, a, b]) == [a, b, c]


def test_to_seconds_matches_from_seconds():
    value = Timeval.from_seconds(3.25)
    assert value.to_seconds() == pytest.approx(3.25)


def test_bytes_round_trip():
    value = Timeval(1_700_000_000, 123_456)
    packed = value.to_bytes()
    assert len(packed) == Timeval.SIZE
    assert Timeval.from_bytes(packed) == value
    assert Timeval.from_bytes(packed + b"\xaa\xaa") == value


def test_from_bytes_rejects_short_data():
    with pytest.raises(ValueError):
        Timeval.from_bytes(b"\x00" * (Timeval.SIZE - 1))


def test_now_is_close_to_system_time():
    before = time.time()
    now = Timeval.now()
    after = time.time()
    assert before - 1 <= now.to_seconds() <= after + 1
    assert 0 <= now.usec < 1_000_000