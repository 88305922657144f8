"""
Booking Ledger Module

This module owns the allocation of parking spots to employees. It includes:

- Closed date intervals with an indefinite (9999-12-31) end sentinel
- Conflict detection for spots and employees over overlapping periods
- Booking lifecycle management (create, amend dates, soft-delete)
- Spot lookups for the active and the next upcoming booking

Key Components:
- intervals.py: Interval value type and the overlap primitive
- conflict_service.py: Spot, employee and range conflict checks
- booking_service.py: Booking ledger with per-spot/per-employee write locks
- router.py: FastAPI endpoints for booking management
- schemas.py: Pydantic models for booking requests and responses
"""

from .router import router
from .intervals import Interval, INDEFINITE_END, overlaps
from .conflict_service import (
    ConflictDetector, check_spot_conflict, check_employee_conflict, validate_interval
)
from .booking_service import BookingService, BookingLockRegistry
from .exceptions import BookingError, ConflictError, NotFoundError
from .schemas import (
    BookingCreateRequest, BookingAmendRequest, BookingRead, BookingListItem,
    BookingSearchFilters, BookingStatus, BookingLifecycle, ConflictKind, ConflictResult
)

__all__ = [
    "router",
    "Interval",
    "INDEFINITE_END",
    "overlaps",
    "ConflictDetector",
    "check_spot_conflict",
    "check_employee_conflict",
    "validate_interval",
    "BookingService",
    "BookingLockRegistry",
    "BookingError",
    "ConflictError",
    "NotFoundError",
    "BookingCreateRequest",
    "BookingAmendRequest",
    "BookingRead",
    "BookingListItem",
    "BookingSearchFilters",
    "BookingStatus",
    "BookingLifecycle",
    "ConflictKind",
    "ConflictResult"
]
