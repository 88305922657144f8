from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

class FeeMode(str, Enum):
    """How far into the reporting month fees accrue"""
    ACCRUED = "accrued"  # up to min(month end, today)
    PROJECTED = "projected"  # the whole month

class MovementBucket(str, Enum):
    """Relationship of a booking to the reporting month's boundaries"""
    BEGINNING = "Beginning Balance"
    NEW = "New Booking"
    EXPIRED = "Expired Booking"
    ENDING = "Ending Balance"

class FeeBreakdown(BaseModel):
    """Prorated fee of one booking for one reporting month"""
    effective_start: Optional[date] = None  # None when no day is billable
    effective_end: Optional[date] = None
    days_occupied: int
    days_in_month: int
    monthly_price: Decimal
    daily_rate: Decimal
    gross_fee: int
    net_fee: int
    is_exempt: bool

class MovementLine(BaseModel):
    bucket: MovementBucket
    count: int = 0
    gross_amount: int = 0
    net_amount: int = 0

class FinancialSummary(BaseModel):
    revenue: int
    net_revenue: int
    occupancy_rate: float
    total_reserved_spots: int
    occupied_reserved_spots: int
    occupancy_as_of: date

class InventoryLine(BaseModel):
    zone: str
    spot_type: str
    count: int

class InventorySummary(BaseModel):
    lines: List[InventoryLine]
    total_spots: int

class TenantRow(BaseModel):
    """Per-booking billing detail for the month"""
    booking_id: int
    spot_id: int
    spot_label: str
    employee_id: int
    employee_code: Optional[str] = None
    full_name: str
    effective_start: Optional[date] = None
    effective_end: Optional[date] = None
    days_occupied: int
    monthly_price: Decimal
    gross_fee: int
    net_fee: int
    employee_type: Optional[str] = None
    privilege: Optional[str] = None

class NewBookingRow(BaseModel):
    """Booking that started during the month, with its original dates"""
    booking_id: int
    spot_id: int
    spot_label: str
    employee_code: Optional[str] = None
    full_name: str
    license_plate_used: Optional[str] = None
    booking_start: date
    booking_end: date
    is_indefinite: bool

class MonthlyReport(BaseModel):
    """Movement, revenue, occupancy and tenant detail for one month"""
    year: int
    month: int
    month_start: date
    month_end: date
    days_in_month: int
    fee_mode: FeeMode
    today: date
    movement: List[MovementLine]
    financials: FinancialSummary
    inventory: InventorySummary
    tenants: List[TenantRow]
    new_bookings: List[NewBookingRow]
    generated_at: datetime = Field(default_factory=datetime.now)
