"""
Inventory Catalog Module

Read-only access to parking spots, employees, vehicles, privileges and the
live booking set, plus the per-date spot board.
"""

from .router import router
from .service import InventoryCatalog, SpotBoardService, normalize_employee_code
from .schemas import (
    SpotType, EmployeeType, SpotOccupancy, SpotRecord, EmployeeRecord,
    SpotStatus, SpotBoard, SpotBoardItem
)

__all__ = [
    "router",
    "InventoryCatalog",
    "SpotBoardService",
    "normalize_employee_code",
    "SpotType",
    "EmployeeType",
    "SpotOccupancy",
    "SpotRecord",
    "EmployeeRecord",
    "SpotStatus",
    "SpotBoard",
    "SpotBoardItem"
]
