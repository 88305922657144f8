from typing import List, Optional

from src.bookings.schemas import ConflictKind

class BookingError(ValueError):
    """Base class for rejected booking operations"""
    kind = "BookingError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ConflictError(BookingError):
    """A write would break an interval or allocation invariant"""

    def __init__(self, kind: ConflictKind, message: str, conflicting_booking_ids: Optional[List[int]] = None):
        super().__init__(message)
        self.kind = kind
        self.conflicting_booking_ids = conflicting_booking_ids or []

class NotFoundError(BookingError):
    """A booking, spot or employee id is unknown"""
    kind = "NotFound"

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
