"""
Monthly movement classification.

Buckets answer different questions about the same booking set ("what did we
have at the start", "what changed", "what do we have at the end"), so one
booking may land in several of them.
"""

from typing import Dict, List, Set

from src.bookings.intervals import Interval
from src.reports.schemas import FeeBreakdown, MovementBucket, MovementLine

BUCKET_ORDER = [
    MovementBucket.BEGINNING,
    MovementBucket.NEW,
    MovementBucket.EXPIRED,
    MovementBucket.ENDING,
]

def classify(booking: Interval, month: Interval) -> Set[MovementBucket]:
    buckets = set()

    if booking.start < month.start and booking.end >= month.start:
        buckets.add(MovementBucket.BEGINNING)

    if month.contains(booking.start):
        buckets.add(MovementBucket.NEW)

    if month.contains(booking.end) and not booking.is_indefinite:
        buckets.add(MovementBucket.EXPIRED)

    if booking.start <= month.end and booking.end >= month.end:
        buckets.add(MovementBucket.ENDING)

    return buckets

class MovementClassifier:
    """Accumulates bucket counts and fee totals for one reporting month"""

    def __init__(self, month: Interval):
        self.month = month
        self._lines: Dict[MovementBucket, MovementLine] = {
            bucket: MovementLine(bucket=bucket) for bucket in BUCKET_ORDER
        }

    def classify(self, booking: Interval) -> Set[MovementBucket]:
        return classify(booking, self.month)

    def record(self, booking: Interval, fee: FeeBreakdown) -> Set[MovementBucket]:
        buckets = self.classify(booking)
        for bucket in buckets:
            line = self._lines[bucket]
            line.count += 1
            line.gross_amount += fee.gross_fee
            line.net_amount += fee.net_fee
        return buckets

    def lines(self) -> List[MovementLine]:
        return [self._lines[bucket] for bucket in BUCKET_ORDER]
