"""
Monthly Reporting Module

This module provides the monthly movement and billing report. It includes:

- Movement classification (Beginning / New / Expired / Ending balances)
- Prorated, privilege-aware fee calculation per booking
- Revenue, net revenue and reserved-spot occupancy totals
- Inventory summary per zone and spot type
- Tenant detail export as CSV

Key Components:
- movement.py: Movement buckets and their running totals
- fee_service.py: Fee proration in accrued or projected mode
- report_service.py: Report aggregation over the inventory catalog
- router.py: FastAPI endpoints for reports
- schemas.py: Pydantic models for report structures
"""

from .router import router
from .movement import MovementClassifier, classify
from .fee_service import FeeCalculationService, days_in_month, is_exempt, privilege_label
from .report_service import ReportService
from .schemas import (
    FeeMode, MovementBucket, FeeBreakdown, MovementLine, FinancialSummary,
    InventoryLine, InventorySummary, TenantRow, NewBookingRow, MonthlyReport
)

__all__ = [
    "router",
    "MovementClassifier",
    "classify",
    "FeeCalculationService",
    "days_in_month",
    "is_exempt",
    "privilege_label",
    "ReportService",
    "FeeMode",
    "MovementBucket",
    "FeeBreakdown",
    "MovementLine",
    "FinancialSummary",
    "InventoryLine",
    "InventorySummary",
    "TenantRow",
    "NewBookingRow",
    "MonthlyReport"
]
