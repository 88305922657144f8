from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional

from src.database import get_db
from src.bookings.schemas import (
    BookingCreateRequest, BookingAmendRequest, BookingRead, BookingListItem,
    BookingSearchFilters, ConflictKind
)
from src.bookings.booking_service import BookingService
from src.bookings.exceptions import BookingError, ConflictError, NotFoundError

router = APIRouter()

def booking_error_to_http(error: BookingError) -> HTTPException:
    """Map a rejected booking operation to an HTTP error"""
    if isinstance(error, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, ConflictError) and error.kind != ConflictKind.INVALID_RANGE:
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    detail = {"kind": getattr(error.kind, "value", error.kind), "message": error.message}
    if isinstance(error, ConflictError) and error.conflicting_booking_ids:
        detail["conflicting_booking_ids"] = error.conflicting_booking_ids
    return HTTPException(status_code=status_code, detail=detail)

@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreateRequest,
    db: Session = Depends(get_db)
):
    """Allocate a spot to an employee for a date range"""

    booking_service = BookingService(db)

    try:
        return booking_service.create(request.spot_id, request.employee_id, request.interval)
    except BookingError as e:
        raise booking_error_to_http(e)

@router.get("/", response_model=List[BookingListItem])
def list_bookings(
    search: Optional[str] = Query(None, description="Employee code, name or spot label"),
    spot_id: Optional[int] = Query(None, description="Filter by spot ID"),
    employee_id: Optional[int] = Query(None, description="Filter by employee ID"),
    include_deleted: bool = Query(False, description="Include soft-deleted bookings"),
    db: Session = Depends(get_db)
):
    """List bookings, newest start first"""

    filters = BookingSearchFilters(
        search=search,
        spot_id=spot_id,
        employee_id=employee_id,
        include_deleted=include_deleted
    )
    return BookingService(db).list_bookings(filters)

@router.get("/{booking_id}", response_model=BookingRead)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db)
):
    """Get booking details by ID"""

    try:
        return BookingService(db).get_booking(booking_id, include_deleted=True)
    except BookingError as e:
        raise booking_error_to_http(e)

@router.put("/{booking_id}", response_model=BookingRead)
def amend_booking(
    booking_id: int,
    request: BookingAmendRequest,
    db: Session = Depends(get_db)
):
    """Change the dates of an existing booking"""

    try:
        return BookingService(db).amend(booking_id, request.interval)
    except BookingError as e:
        raise booking_error_to_http(e)

@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db)
):
    """Soft-delete a booking"""

    try:
        BookingService(db).soft_delete(booking_id)
    except BookingError as e:
        raise booking_error_to_http(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
