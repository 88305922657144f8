from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from decimal import Decimal
from enum import Enum

from src.bookings.schemas import BookingRead

class SpotType(str, Enum):
    """Parking spot categories"""
    GENERAL = "General Parking"
    EV_CHARGING = "EV Charging Parking"
    RESERVED_PAID = "Reserved (Paid) Parking"

class EmployeeType(str, Enum):
    """Employee categories"""
    GENERAL = "General"
    MANAGEMENT = "Management"

class SpotOccupancy(str, Enum):
    OCCUPIED = "Occupied"
    AVAILABLE = "Available"

class SpotRecord(BaseModel):
    """Parking spot as seen by the booking and billing core"""
    id: int
    label: str
    lot_code: Optional[str] = None
    spot_number: Optional[int] = None
    zone: str
    spot_type: str
    price: Optional[Decimal] = None
    roof_type: bool = False
    is_active: bool = True

class EmployeeRecord(BaseModel):
    """Employee with vehicles and privilege tier joined in"""
    id: int
    employee_code: str
    full_name: Optional[str] = None
    employee_type: str = EmployeeType.GENERAL.value
    vehicles: List[str] = Field(default_factory=list)
    privilege_tier: int = 0
    privilege_label: Optional[str] = None
    is_active: bool = True

class SpotStatus(BaseModel):
    """Occupancy of one spot on one date"""
    spot_id: int
    on_date: date
    status: SpotOccupancy
    active_booking: Optional[BookingRead] = None
    next_booking: Optional[BookingRead] = None

class SpotBoardItem(BaseModel):
    """Spot board row"""
    spot: SpotRecord
    status: SpotOccupancy
    active_booking: Optional[BookingRead] = None
    employee_code: Optional[str] = None
    full_name: Optional[str] = None

class SpotBoard(BaseModel):
    """All active spots with their status on a date"""
    on_date: date
    zones: List[str]
    spot_types: List[str]
    spots: List[SpotBoardItem]
    total: int
    occupied: int
    available: int
