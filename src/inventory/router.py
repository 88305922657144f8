from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from src.database import get_db
from src.bookings.exceptions import BookingError
from src.bookings.router import booking_error_to_http
from src.inventory.schemas import (
    EmployeeRecord, SpotBoard, SpotOccupancy, SpotRecord, SpotStatus
)
from src.inventory.service import InventoryCatalog, SpotBoardService

router = APIRouter()

@router.get("/spots", response_model=List[SpotRecord])
def list_active_spots(db: Session = Depends(get_db)):
    """List active parking spots"""
    return InventoryCatalog(db).list_active_spots()

@router.get("/spots/{spot_id}/status", response_model=SpotStatus)
def get_spot_status(
    spot_id: int,
    on_date: Optional[date] = Query(None, description="Date to check, defaults to today"),
    db: Session = Depends(get_db)
):
    """Whether a spot is occupied on a date, and its next booking"""

    try:
        return SpotBoardService(db).get_spot_status(spot_id, on_date or date.today())
    except BookingError as e:
        raise booking_error_to_http(e)

@router.get("/board", response_model=SpotBoard)
def get_spot_board(
    on_date: Optional[date] = Query(None, description="Date to show, defaults to today"),
    zone: Optional[str] = Query(None, description="Filter by zone"),
    spot_type: Optional[str] = Query(None, description="Filter by spot type"),
    status: Optional[SpotOccupancy] = Query(None, description="Occupied or Available"),
    db: Session = Depends(get_db)
):
    """Every active spot with its occupancy on a date"""

    return SpotBoardService(db).get_board(
        on_date or date.today(),
        zone=zone,
        spot_type=spot_type,
        status=status
    )

@router.get("/employees", response_model=List[EmployeeRecord])
def list_active_employees(db: Session = Depends(get_db)):
    """Active employees with their vehicles and privilege tiers"""
    return InventoryCatalog(db).list_active_employees_with_privilege_and_vehicle()
