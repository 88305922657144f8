from datetime import date

from src.bookings.intervals import Interval
from src.reports.schemas import FeeBreakdown, MovementBucket
from src.reports.movement import MovementClassifier, classify

FEB_2025 = Interval.month(2025, 2)

def test_booking_spanning_month_is_beginning_and_ending():
    buckets = classify(Interval(start=date(2025, 1, 1), end=date(2025, 3, 31)), FEB_2025)
    assert buckets == {MovementBucket.BEGINNING, MovementBucket.ENDING}

def test_booking_inside_month_is_new_and_expired():
    buckets = classify(Interval(start=date(2025, 2, 10), end=date(2025, 2, 20)), FEB_2025)
    assert buckets == {MovementBucket.NEW, MovementBucket.EXPIRED}

def test_indefinite_booking_never_expires():
    buckets = classify(Interval.indefinite(date(2025, 2, 1)), FEB_2025)
    assert buckets == {MovementBucket.NEW, MovementBucket.ENDING}

def test_booking_ending_on_last_day_is_expired_and_ending():
    buckets = classify(Interval(start=date(2025, 1, 15), end=date(2025, 2, 28)), FEB_2025)
    assert buckets == {MovementBucket.BEGINNING, MovementBucket.EXPIRED, MovementBucket.ENDING}

def test_booking_outside_month_has_no_bucket():
    assert classify(Interval(start=date(2025, 3, 1), end=date(2025, 3, 5)), FEB_2025) == set()
    assert classify(Interval(start=date(2025, 1, 1), end=date(2025, 1, 31)), FEB_2025) == set()

def fee(gross, net):
    return FeeBreakdown(
        days_occupied=1,
        days_in_month=28,
        monthly_price=gross,
        daily_rate=0,
        gross_fee=gross,
        net_fee=net,
        is_exempt=net == 0
    )

def test_classifier_accumulates_totals_per_bucket():
    classifier = MovementClassifier(FEB_2025)
    classifier.record(Interval(start=date(2025, 1, 1), end=date(2025, 3, 31)), fee(3000, 3000))
    classifier.record(Interval(start=date(2025, 2, 10), end=date(2025, 2, 20)), fee(1217, 0))

    lines = {line.bucket: line for line in classifier.lines()}
    assert [line.bucket for line in classifier.lines()] == [
        MovementBucket.BEGINNING, MovementBucket.NEW, MovementBucket.EXPIRED, MovementBucket.ENDING
    ]
    assert (lines[MovementBucket.BEGINNING].count, lines[MovementBucket.BEGINNING].gross_amount) == (1, 3000)
    assert (lines[MovementBucket.NEW].count, lines[MovementBucket.NEW].net_amount) == (1, 0)
    assert lines[MovementBucket.EXPIRED].gross_amount == 1217
    assert lines[MovementBucket.ENDING].net_amount == 3000
