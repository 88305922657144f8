from typing import Dict, List, Optional
from datetime import date
from collections import defaultdict
from sqlalchemy.orm import Session
import logging

import pandas as pd

from src.config import settings
from src.bookings.intervals import Interval
from src.bookings.schemas import BookingRead
from src.inventory.schemas import EmployeeRecord, SpotRecord, SpotType
from src.inventory.service import InventoryCatalog
from src.reports.schemas import (
    FeeMode, FinancialSummary, InventoryLine, InventorySummary, MonthlyReport,
    MovementBucket, NewBookingRow, TenantRow
)
from src.reports.movement import MovementClassifier
from src.reports.fee_service import (
    FeeCalculationService, days_in_month, is_exempt, privilege_label
)

logger = logging.getLogger(__name__)

TENANT_CSV_COLUMNS = [
    "spot_label", "employee_code", "full_name", "effective_start", "effective_end",
    "days_occupied", "monthly_price", "gross_fee", "employee_type", "privilege", "net_fee"
]

def sort_inventory(lines: List[InventoryLine], zone_order: List[str]) -> List[InventoryLine]:
    """Configured zones first in their configured order, the rest alphabetically"""
    positions = {zone: i for i, zone in enumerate(zone_order)}

    def key(line: InventoryLine):
        if line.zone in positions:
            return (0, positions[line.zone], "", line.spot_type)
        return (1, 0, line.zone, line.spot_type)

    return sorted(lines, key=key)

class ReportService:
    """Builds the monthly movement, billing and occupancy report"""

    def __init__(self, db: Session):
        self.db = db
        self.catalog = InventoryCatalog(db)

    def generate_monthly_report(
        self,
        year: int,
        month: int,
        today: Optional[date] = None,
        mode: Optional[FeeMode] = None
    ) -> MonthlyReport:
        """Generate the report for one calendar month"""

        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {month}")

        today = today or date.today()
        mode = FeeMode(mode or settings.FEE_MODE)
        window = Interval.month(year, month)
        fees = FeeCalculationService(mode=mode, today=today)
        movement = MovementClassifier(window)

        bookings = self.catalog.list_bookings_in_window(window)
        spots = self.catalog.spot_index({b.spot_id for b in bookings})
        employees = self.catalog.employee_index({b.employee_id for b in bookings})

        tenants: List[TenantRow] = []
        new_bookings: List[NewBookingRow] = []

        for booking in bookings:
            interval = Interval(start=booking.booking_start, end=booking.booking_end)
            spot = spots.get(booking.spot_id)
            employee = employees.get(booking.employee_id)

            price = spot.price if spot else None
            if price is None:
                logger.warning(
                    "No price for spot %s on booking %s, billing as zero",
                    booking.spot_id, booking.id
                )

            exempt = is_exempt(employee.employee_type, employee.privilege_tier) if employee else False
            fee = fees.calculate(price, interval, window, exempt)
            buckets = movement.record(interval, fee)

            tenants.append(self._tenant_row(booking, spot, employee, fee))
            if MovementBucket.NEW in buckets:
                new_bookings.append(self._new_booking_row(booking, spot, employee, interval))

        logger.info(
            "Monthly report %04d-%02d (%s): %d bookings",
            year, month, mode.value, len(bookings)
        )

        return MonthlyReport(
            year=year,
            month=month,
            month_start=window.start,
            month_end=window.end,
            days_in_month=days_in_month(year, month),
            fee_mode=mode,
            today=today,
            movement=movement.lines(),
            financials=self._financials(tenants, fees.window_end(window)),
            inventory=self.inventory_summary(),
            tenants=tenants,
            new_bookings=new_bookings
        )

    def inventory_summary(self) -> InventorySummary:
        """Active spots counted per (zone, type) with a grand total"""
        counts: Dict[tuple, int] = defaultdict(int)
        spots = self.catalog.list_active_spots()
        for spot in spots:
            counts[(spot.zone, spot.spot_type)] += 1

        lines = [
            InventoryLine(zone=zone, spot_type=spot_type, count=count)
            for (zone, spot_type), count in counts.items()
        ]
        return InventorySummary(
            lines=sort_inventory(lines, settings.ZONE_ORDER),
            total_spots=len(spots)
        )

    def occupancy(self, as_of: date):
        """(occupied, total, rate) for active Reserved-Paid spots on ``as_of``"""
        reserved = {
            s.id for s in self.catalog.list_active_spots()
            if s.spot_type == SpotType.RESERVED_PAID.value
        }
        if not reserved:
            return 0, 0, 0.0

        occupied = {
            b.spot_id for b in self.catalog.list_active_bookings(as_of=as_of)
            if b.spot_id in reserved
        }
        return len(occupied), len(reserved), len(occupied) / len(reserved) * 100

    def export_tenants_csv(self, report: MonthlyReport) -> str:
        """Tenant rows of a report as CSV text"""
        df = pd.DataFrame(
            [row.model_dump() for row in report.tenants],
            columns=TENANT_CSV_COLUMNS
        )
        for column in ("effective_start", "effective_end"):
            df[column] = df[column].map(lambda d: d.strftime("%d/%m/%Y") if d else "")
        return df.to_csv(index=False)

    def _financials(self, tenants: List[TenantRow], as_of: date) -> FinancialSummary:
        occupied, total, rate = self.occupancy(as_of)
        return FinancialSummary(
            revenue=sum(t.gross_fee for t in tenants),
            net_revenue=sum(t.net_fee for t in tenants),
            occupancy_rate=round(rate, 2),
            total_reserved_spots=total,
            occupied_reserved_spots=occupied,
            occupancy_as_of=as_of
        )

    def _tenant_row(
        self,
        booking: BookingRead,
        spot: Optional[SpotRecord],
        employee: Optional[EmployeeRecord],
        fee
    ) -> TenantRow:
        return TenantRow(
            booking_id=booking.id,
            spot_id=booking.spot_id,
            spot_label=spot.label if spot else str(booking.spot_id),
            employee_id=booking.employee_id,
            employee_code=employee.employee_code if employee else None,
            full_name=self._employee_name(employee),
            effective_start=fee.effective_start,
            effective_end=fee.effective_end,
            days_occupied=fee.days_occupied,
            monthly_price=fee.monthly_price,
            gross_fee=fee.gross_fee,
            net_fee=fee.net_fee,
            employee_type=employee.employee_type if employee else None,
            privilege=privilege_label(employee.privilege_tier, employee.privilege_label) if employee else None
        )

    def _new_booking_row(
        self,
        booking: BookingRead,
        spot: Optional[SpotRecord],
        employee: Optional[EmployeeRecord],
        interval: Interval
    ) -> NewBookingRow:
        return NewBookingRow(
            booking_id=booking.id,
            spot_id=booking.spot_id,
            spot_label=spot.label if spot else str(booking.spot_id),
            employee_code=employee.employee_code if employee else None,
            full_name=self._employee_name(employee),
            license_plate_used=booking.license_plate_used,
            booking_start=booking.booking_start,
            booking_end=booking.booking_end,
            is_indefinite=interval.is_indefinite
        )

    @staticmethod
    def _employee_name(employee: Optional[EmployeeRecord]) -> str:
        if employee and employee.full_name:
            return employee.full_name
        return settings.UNKNOWN_EMPLOYEE_LABEL
