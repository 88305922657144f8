from typing import Dict, Iterable, List, Optional, Tuple
from datetime import date, datetime
from contextlib import contextmanager
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
import logging
import threading

from src.config import settings
from src.models import Booking, Employee, ParkingSpot, Vehicle, normalize_employee_code
from src.bookings.intervals import Interval
from src.bookings.schemas import (
    BookingStatus, BookingLifecycle, BookingListItem, BookingSearchFilters
)
from src.bookings.conflict_service import ConflictDetector
from src.bookings.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

class BookingLockRegistry:
    """Per-spot and per-employee locks serializing conflict-check-then-write

    One lock is kept per spot and per employee, so the map never grows past
    the size of the inventory plus the staff list.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[str, int], threading.Lock] = {}

    def _lock_for(self, key: Tuple[str, int]) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, spot_id: int, employee_id: int):
        # Fixed acquisition order so two writers never wait on each other in a cycle
        keys = sorted({("employee", employee_id), ("spot", spot_id)})
        locks = [self._lock_for(key) for key in keys]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()

booking_locks = BookingLockRegistry()

class BookingService:
    """Service for managing the booking ledger"""

    def __init__(self, db: Session, locks: BookingLockRegistry = None):
        self.db = db
        self.locks = locks or booking_locks
        self.detector = ConflictDetector()

    def create(self, spot_id: int, employee_id: int, interval: Interval) -> Booking:
        """Allocate a spot to an employee after both conflict checks pass"""

        spot = self._get_active_spot(spot_id)
        employee = self._get_active_employee(employee_id)

        with self.locks.hold(spot.id, employee.id):
            self._ensure_allowed(spot.id, employee.id, interval)

            booking = Booking(
                spot_id=spot.id,
                employee_id=employee.id,
                license_plate_used=self._license_plate_for(employee),
                booking_start=interval.start,
                booking_end=interval.end,
                status=BookingStatus.CONFIRMED.value,
                is_deleted=False
            )
            self._commit(booking)

        logger.info(
            "Booking %s created: spot=%s employee=%s %s..%s",
            booking.id, spot.id, employee.id, interval.start, interval.end
        )
        return booking

    def amend(self, booking_id: int, interval: Interval) -> Booking:
        """Change a booking's dates, re-validated against everything but itself"""

        booking = self.get_booking(booking_id)

        with self.locks.hold(booking.spot_id, booking.employee_id):
            self._ensure_allowed(
                booking.spot_id, booking.employee_id, interval, exclude_booking_id=booking.id
            )
            booking.booking_start = interval.start
            booking.booking_end = interval.end
            booking.updated_at = datetime.now()
            self._commit(booking)

        logger.info("Booking %s amended to %s..%s", booking.id, interval.start, interval.end)
        return booking

    def soft_delete(self, booking_id: int) -> None:
        """Flag a booking deleted; the row stays for historical reporting"""

        booking = self.get_booking(booking_id)
        booking.is_deleted = True
        booking.deleted_at = datetime.now()
        self._commit(booking)
        logger.info("Booking %s deleted", booking.id)

    def get_booking(self, booking_id: int, include_deleted: bool = False) -> Booking:
        """Get booking by ID"""
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if not include_deleted:
            query = query.filter(Booking.is_deleted == False)
        booking = query.first()
        if not booking:
            raise NotFoundError("Booking", booking_id)
        return booking

    def find_active_for_spot(self, spot_id: int, on_date: date) -> Optional[Booking]:
        """Booking whose interval contains ``on_date``"""
        return self.db.query(Booking).filter(
            and_(
                Booking.spot_id == spot_id,
                Booking.is_deleted == False,
                Booking.booking_start <= on_date,
                Booking.booking_end >= on_date
            )
        ).order_by(Booking.booking_start.desc()).first()

    def find_next_for_spot(self, spot_id: int, after_date: date) -> Optional[Booking]:
        """Earliest booking on the spot starting strictly after ``after_date``"""
        return self.db.query(Booking).filter(
            and_(
                Booking.spot_id == spot_id,
                Booking.is_deleted == False,
                Booking.booking_start > after_date
            )
        ).order_by(Booking.booking_start.asc()).first()

    def list_bookings(
        self,
        filters: Optional[BookingSearchFilters] = None,
        today: Optional[date] = None
    ) -> List[BookingListItem]:
        """All bookings, newest start first, with lifecycle relative to today"""

        filters = filters or BookingSearchFilters()
        today = today or date.today()

        query = self.db.query(Booking).options(
            joinedload(Booking.spot),
            joinedload(Booking.employee)
        )
        if not filters.include_deleted:
            query = query.filter(Booking.is_deleted == False)
        if filters.spot_id is not None:
            query = query.filter(Booking.spot_id == filters.spot_id)
        if filters.employee_id is not None:
            query = query.filter(Booking.employee_id == filters.employee_id)

        items = [
            self._to_list_item(b, today)
            for b in query.order_by(Booking.booking_start.desc(), Booking.id.desc()).all()
        ]

        if filters.search:
            term = filters.search.strip().lower()
            items = [
                item for item in items
                if term in (item.employee_code or "").lower()
                or term in item.full_name.lower()
                or term in item.spot_label.lower()
            ]

        return items

    @staticmethod
    def lifecycle(booking_start: date, booking_end: date, today: date) -> BookingLifecycle:
        if booking_end < today:
            return BookingLifecycle.EXPIRED
        if booking_start > today:
            return BookingLifecycle.FUTURE
        return BookingLifecycle.ACTIVE

    def _ensure_allowed(
        self,
        spot_id: int,
        employee_id: int,
        interval: Interval,
        exclude_booking_id: Optional[int] = None
    ) -> None:
        try:
            self.detector.ensure_allowed(
                self._candidates(spot_id, employee_id, interval),
                spot_id,
                employee_id,
                interval,
                exclude_booking_id
            )
        except ConflictError as e:
            logger.info(
                "Booking rejected (%s): spot=%s employee=%s %s..%s",
                e.kind.value, spot_id, employee_id, interval.start, interval.end
            )
            raise

    def _candidates(self, spot_id: int, employee_id: int, interval: Interval) -> Iterable[Booking]:
        """Live bookings on the spot or for the employee near the interval"""
        if not interval.is_valid:
            return []
        return self.db.query(Booking).filter(
            and_(
                Booking.is_deleted == False,
                or_(Booking.spot_id == spot_id, Booking.employee_id == employee_id),
                Booking.booking_start <= interval.end,
                Booking.booking_end >= interval.start
            )
        ).all()

    def _get_active_spot(self, spot_id: int) -> ParkingSpot:
        spot = self.db.query(ParkingSpot).filter(
            and_(ParkingSpot.id == spot_id, ParkingSpot.is_active == True)
        ).first()
        if not spot:
            raise NotFoundError("Parking spot", spot_id)
        return spot

    def _get_active_employee(self, employee_id: int) -> Employee:
        employee = self.db.query(Employee).filter(
            and_(Employee.id == employee_id, Employee.is_active == True)
        ).first()
        if not employee:
            raise NotFoundError("Employee", employee_id)
        return employee

    def _license_plate_for(self, employee: Employee) -> str:
        code = normalize_employee_code(employee.employee_code)
        vehicles = self.db.query(Vehicle).filter(
            Vehicle.is_active == True
        ).order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()
        for vehicle in vehicles:
            if normalize_employee_code(vehicle.employee_code) == code:
                return vehicle.license_plate
        return "-"

    def _commit(self, booking: Booking) -> None:
        try:
            self.db.add(booking)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to write booking %s", booking.id)
            raise
        self.db.refresh(booking)

    def _to_list_item(self, booking: Booking, today: date) -> BookingListItem:
        employee = booking.employee
        return BookingListItem(
            id=booking.id,
            spot_id=booking.spot_id,
            spot_label=booking.spot.label if booking.spot else str(booking.spot_id),
            employee_id=booking.employee_id,
            employee_code=employee.employee_code if employee else None,
            full_name=(employee.full_name if employee else None) or settings.UNKNOWN_EMPLOYEE_LABEL,
            license_plate_used=booking.license_plate_used,
            booking_start=booking.booking_start,
            booking_end=booking.booking_end,
            is_indefinite=Interval(start=booking.booking_start, end=booking.booking_end).is_indefinite,
            lifecycle=self.lifecycle(booking.booking_start, booking.booking_end, today),
            is_deleted=booking.is_deleted
        )
