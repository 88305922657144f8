from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime, date
from enum import Enum

from src.bookings.intervals import Interval, INDEFINITE_END

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    CONFIRMED = "confirmed"

class BookingLifecycle(str, Enum):
    """Where a booking sits relative to today"""
    ACTIVE = "Active"
    FUTURE = "Future"
    EXPIRED = "Expired"

class ConflictKind(str, Enum):
    """Reasons a booking write is rejected"""
    SPOT_OCCUPIED = "SpotOccupied"
    EMPLOYEE_ALREADY_BOOKED = "EmployeeAlreadyBooked"
    INVALID_RANGE = "InvalidRange"

class ConflictResult(BaseModel):
    """Outcome of a single conflict check"""
    has_conflict: bool
    kind: Optional[ConflictKind] = None
    conflicting_booking_ids: List[int] = Field(default_factory=list)

    @classmethod
    def clear(cls) -> "ConflictResult":
        return cls(has_conflict=False)

# Booking Request Models
class BookingCreateRequest(BaseModel):
    """Request to allocate a spot to an employee"""
    spot_id: int
    employee_id: int
    start_date: date
    is_indefinite: bool = False
    end_date: Optional[date] = None

    @validator('end_date', always=True)
    def validate_end_date(cls, v, values):
        if v is None and not values.get('is_indefinite'):
            raise ValueError('end_date is required unless the booking is indefinite')
        return v

    @property
    def interval(self) -> Interval:
        if self.is_indefinite:
            return Interval.indefinite(self.start_date)
        return Interval(start=self.start_date, end=self.end_date)

class BookingAmendRequest(BaseModel):
    """Request to change the dates of an existing booking"""
    start_date: date
    is_indefinite: bool = False
    end_date: Optional[date] = None

    @validator('end_date', always=True)
    def validate_end_date(cls, v, values):
        if v is None and not values.get('is_indefinite'):
            raise ValueError('end_date is required unless the booking is indefinite')
        return v

    @property
    def interval(self) -> Interval:
        if self.is_indefinite:
            return Interval.indefinite(self.start_date)
        return Interval(start=self.start_date, end=self.end_date)

class BookingSearchFilters(BaseModel):
    """Filters for the booking list"""
    search: Optional[str] = None
    spot_id: Optional[int] = None
    employee_id: Optional[int] = None
    include_deleted: bool = False

# Booking Response Models
class BookingRead(BaseModel):
    """Booking as returned to callers"""
    id: int
    spot_id: int
    employee_id: int
    license_plate_used: Optional[str] = None
    booking_start: date
    booking_end: date
    status: BookingStatus
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_indefinite(self) -> bool:
        return self.booking_end == INDEFINITE_END

class BookingListItem(BaseModel):
    """Booking list row with joined spot and employee details"""
    id: int
    spot_id: int
    spot_label: str
    employee_id: int
    employee_code: Optional[str] = None
    full_name: str
    license_plate_used: Optional[str] = None
    booking_start: date
    booking_end: date
    is_indefinite: bool
    lifecycle: BookingLifecycle
    is_deleted: bool = False
