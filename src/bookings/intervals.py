"""
Closed date intervals used for bookings and reporting windows.

A booking occupies every day from ``start`` through ``end`` inclusive. Bookings
without a planned end carry ``INDEFINITE_END`` (9999-12-31) instead of a null,
so ordering, overlap and clipping work the same way for every booking.
"""

from datetime import date, timedelta
from typing import Optional
from pydantic import BaseModel

INDEFINITE_END = date.max  # 9999-12-31

class Interval(BaseModel):
    """Closed date range ``[start, end]``"""
    start: date
    end: date

    class Config:
        frozen = True

    @classmethod
    def indefinite(cls, start: date) -> "Interval":
        return cls(start=start, end=INDEFINITE_END)

    @classmethod
    def month(cls, year: int, month: int) -> "Interval":
        """Interval covering every calendar day of one month"""
        first = date(year, month, 1)
        if month == 12:
            next_first = date(year + 1, 1, 1) if year < date.max.year else None
        else:
            next_first = date(year, month + 1, 1)
        last = next_first - timedelta(days=1) if next_first else date.max
        return cls(start=first, end=last)

    @property
    def is_indefinite(self) -> bool:
        return self.end == INDEFINITE_END

    @property
    def is_valid(self) -> bool:
        return self.start <= self.end

    @property
    def days(self) -> int:
        """Number of days covered, both endpoints included"""
        if not self.is_valid:
            return 0
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def clip(self, window: "Interval") -> Optional["Interval"]:
        """Intersection with ``window``, or None when they do not overlap"""
        start = max(self.start, window.start)
        end = min(self.end, window.end)
        if start > end:
            return None
        return Interval(start=start, end=end)

def overlaps(a: Interval, b: Interval) -> bool:
    """True when the two closed intervals share at least one day"""
    return a.start <= b.end and a.end >= b.start
