from typing import Optional, Tuple
from datetime import date
from decimal import Decimal, ROUND_FLOOR
import calendar

from src.bookings.intervals import Interval
from src.inventory.schemas import EmployeeType
from src.reports.schemas import FeeBreakdown, FeeMode

EXEMPT_TIERS = {1, 2}

def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]

def is_exempt(employee_type: Optional[str], privilege_tier: Optional[int]) -> bool:
    """Management staff and privilege tiers 1 and 2 pay no net fee"""
    if employee_type == EmployeeType.MANAGEMENT.value:
        return True
    return (privilege_tier or 0) in EXEMPT_TIERS

def privilege_label(privilege_tier: Optional[int], label: Optional[str] = None) -> Optional[str]:
    """Display label for an employee's privilege, None when there is none"""
    if label:
        return label
    if privilege_tier:
        return f"Tier {privilege_tier}"
    return None

class FeeCalculationService:
    """Prorates monthly spot prices over the days a booking occupies a month"""

    def __init__(self, mode: FeeMode = FeeMode.ACCRUED, today: Optional[date] = None):
        self.mode = FeeMode(mode)
        self.today = today or date.today()

    def window_end(self, month: Interval) -> date:
        """Last billable day of the month under the current mode"""
        if self.mode == FeeMode.ACCRUED:
            return min(month.end, self.today)
        return month.end

    def effective_window(self, booking: Interval, month: Interval) -> Tuple[date, date]:
        effective_start = max(booking.start, month.start)
        effective_end = min(booking.end, self.window_end(month))
        return effective_start, effective_end

    def calculate(
        self,
        monthly_price: Optional[Decimal],
        booking: Interval,
        month: Interval,
        exempt: bool = False
    ) -> FeeBreakdown:
        """Gross and net fee for ``booking`` within ``month``"""

        price = Decimal(monthly_price or 0)
        month_days = month.days
        effective_start, effective_end = self.effective_window(booking, month)

        if effective_start > effective_end:
            days_occupied = 0
            effective_start = effective_end = None
        else:
            days_occupied = (effective_end - effective_start).days + 1

        # Multiply before dividing so a full month reproduces the price exactly
        gross_fee = int((price * days_occupied / month_days).to_integral_value(rounding=ROUND_FLOOR))

        return FeeBreakdown(
            effective_start=effective_start,
            effective_end=effective_end,
            days_occupied=days_occupied,
            days_in_month=month_days,
            monthly_price=price,
            daily_rate=(price / month_days).quantize(Decimal("0.01")),
            gross_fee=gross_fee,
            net_fee=0 if exempt else gross_fee,
            is_exempt=exempt
        )
