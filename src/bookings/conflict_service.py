from typing import Iterable, List, Optional

from src.bookings.intervals import Interval, overlaps
from src.bookings.schemas import ConflictKind, ConflictResult
from src.bookings.exceptions import ConflictError

def booking_interval(booking) -> Interval:
    """Interval occupied by a stored booking row"""
    return Interval(start=booking.booking_start, end=booking.booking_end)

def validate_interval(candidate: Interval) -> ConflictResult:
    """Reject ranges that end before they start"""
    if candidate.end < candidate.start:
        return ConflictResult(has_conflict=True, kind=ConflictKind.INVALID_RANGE)
    return ConflictResult.clear()

def _overlapping(
    bookings: Iterable,
    candidate: Interval,
    exclude_booking_id: Optional[int]
) -> List[int]:
    return [
        b.id for b in bookings
        if not b.is_deleted
        and b.id != exclude_booking_id
        and overlaps(booking_interval(b), candidate)
    ]

def check_spot_conflict(
    bookings: Iterable,
    spot_id: int,
    candidate: Interval,
    exclude_booking_id: Optional[int] = None
) -> ConflictResult:
    """Another live booking on the same spot overlaps ``candidate``"""
    ids = _overlapping(
        (b for b in bookings if b.spot_id == spot_id), candidate, exclude_booking_id
    )
    if ids:
        return ConflictResult(
            has_conflict=True,
            kind=ConflictKind.SPOT_OCCUPIED,
            conflicting_booking_ids=ids
        )
    return ConflictResult.clear()

def check_employee_conflict(
    bookings: Iterable,
    employee_id: int,
    candidate: Interval,
    exclude_booking_id: Optional[int] = None
) -> ConflictResult:
    """The employee already holds any spot for an overlapping period"""
    ids = _overlapping(
        (b for b in bookings if b.employee_id == employee_id), candidate, exclude_booking_id
    )
    if ids:
        return ConflictResult(
            has_conflict=True,
            kind=ConflictKind.EMPLOYEE_ALREADY_BOOKED,
            conflicting_booking_ids=ids
        )
    return ConflictResult.clear()

class ConflictDetector:
    """Decides whether a new or edited booking may be committed"""

    MESSAGES = {
        ConflictKind.INVALID_RANGE: "End date cannot be before start date",
        ConflictKind.SPOT_OCCUPIED: "Spot occupied during selected dates",
        ConflictKind.EMPLOYEE_ALREADY_BOOKED: "Employee already holds a spot during selected dates",
    }

    def check(
        self,
        bookings: Iterable,
        spot_id: int,
        employee_id: int,
        candidate: Interval,
        exclude_booking_id: Optional[int] = None
    ) -> ConflictResult:
        """Run the range check, then the spot check, then the employee check"""
        result = validate_interval(candidate)
        if result.has_conflict:
            return result

        bookings = list(bookings)
        result = check_spot_conflict(bookings, spot_id, candidate, exclude_booking_id)
        if result.has_conflict:
            return result

        return check_employee_conflict(bookings, employee_id, candidate, exclude_booking_id)

    def ensure_allowed(
        self,
        bookings: Iterable,
        spot_id: int,
        employee_id: int,
        candidate: Interval,
        exclude_booking_id: Optional[int] = None
    ) -> None:
        """Raise ConflictError when the allocation is not permitted"""
        result = self.check(bookings, spot_id, employee_id, candidate, exclude_booking_id)
        if result.has_conflict:
            raise ConflictError(
                result.kind,
                self.MESSAGES[result.kind],
                result.conflicting_booking_ids
            )
