from datetime import date

import pytest

from src.bookings.intervals import Interval, INDEFINITE_END, overlaps

def iv(start, end):
    return Interval(start=start, end=end)

PAIRS = [
    (iv(date(2025, 1, 1), date(2025, 1, 10)), iv(date(2025, 1, 10), date(2025, 1, 20))),
    (iv(date(2025, 1, 1), date(2025, 1, 9)), iv(date(2025, 1, 10), date(2025, 1, 20))),
    (iv(date(2025, 1, 5), date(2025, 1, 6)), iv(date(2025, 1, 1), date(2025, 1, 31))),
    (Interval.indefinite(date(2025, 2, 1)), iv(date(2030, 6, 1), date(2030, 6, 2))),
    (Interval.indefinite(date(2025, 2, 1)), iv(date(2025, 1, 1), date(2025, 1, 31))),
]

@pytest.mark.parametrize("a,b", PAIRS)
def test_overlaps_is_symmetric(a, b):
    assert overlaps(a, b) == overlaps(b, a)

def test_overlap_is_inclusive_on_both_ends():
    a = iv(date(2025, 1, 1), date(2025, 1, 10))
    assert overlaps(a, iv(date(2025, 1, 10), date(2025, 1, 12)))
    assert overlaps(a, iv(date(2024, 12, 20), date(2025, 1, 1)))
    assert not overlaps(a, iv(date(2025, 1, 11), date(2025, 1, 12)))

def test_indefinite_uses_far_future_sentinel():
    interval = Interval.indefinite(date(2025, 2, 1))
    assert interval.end == INDEFINITE_END == date(9999, 12, 31)
    assert interval.is_indefinite
    assert not iv(date(2025, 2, 1), date(2025, 2, 28)).is_indefinite

def test_indefinite_sentinel_survives_serialization():
    interval = Interval.indefinite(date(2025, 2, 1))
    payload = interval.model_dump(mode="json")
    assert payload["end"] == "9999-12-31"
    assert Interval.model_validate(payload) == interval

def test_month_interval_uses_calendar_days():
    assert Interval.month(2025, 2).days == 28
    assert Interval.month(2024, 2).days == 29
    assert Interval.month(2025, 4).days == 30
    dec = Interval.month(2025, 12)
    assert (dec.start, dec.end) == (date(2025, 12, 1), date(2025, 12, 31))

def test_days_counts_both_endpoints():
    assert iv(date(2025, 2, 10), date(2025, 2, 20)).days == 11
    assert iv(date(2025, 2, 10), date(2025, 2, 10)).days == 1
    assert iv(date(2025, 2, 10), date(2025, 2, 9)).days == 0

def test_clip_to_window():
    month = Interval.month(2025, 2)
    clipped = Interval.indefinite(date(2025, 1, 15)).clip(month)
    assert clipped == month
    assert iv(date(2025, 3, 1), date(2025, 3, 5)).clip(month) is None

def test_contains():
    interval = iv(date(2025, 1, 5), date(2025, 1, 20))
    assert interval.contains(date(2025, 1, 5))
    assert interval.contains(date(2025, 1, 20))
    assert not interval.contains(date(2025, 1, 21))
