from typing import Dict, Iterable, List, Optional
from datetime import date
from collections import defaultdict
from sqlalchemy import and_
from sqlalchemy.orm import Session

from src.config import settings
from src.models import Booking, Employee, ParkingSpot, Privilege, Vehicle, normalize_employee_code
from src.bookings.intervals import Interval
from src.bookings.schemas import BookingRead
from src.bookings.booking_service import BookingService
from src.bookings.exceptions import NotFoundError
from src.inventory.schemas import (
    EmployeeRecord, SpotBoard, SpotBoardItem, SpotOccupancy, SpotRecord, SpotStatus
)

def to_spot_record(spot: ParkingSpot) -> SpotRecord:
    return SpotRecord(
        id=spot.id,
        label=spot.label,
        lot_code=spot.lot_code,
        spot_number=spot.spot_number,
        zone=spot.zone_text,
        spot_type=spot.spot_type,
        price=spot.price,
        roof_type=bool(spot.roof_type),
        is_active=bool(spot.is_active)
    )

class InventoryCatalog:
    """Read-only view over spots, employees and bookings"""

    def __init__(self, db: Session):
        self.db = db

    def list_active_spots(self) -> List[SpotRecord]:
        spots = self.db.query(ParkingSpot).filter(
            ParkingSpot.is_active == True
        ).order_by(ParkingSpot.id).all()
        return [to_spot_record(s) for s in spots]

    def spot_index(self, spot_ids: Optional[Iterable[int]] = None) -> Dict[int, SpotRecord]:
        """Spots by id, inactive ones included for historical bookings"""
        query = self.db.query(ParkingSpot)
        if spot_ids is not None:
            query = query.filter(ParkingSpot.id.in_(list(spot_ids)))
        return {s.id: to_spot_record(s) for s in query.all()}

    def list_active_employees_with_privilege_and_vehicle(self) -> List[EmployeeRecord]:
        employees = self.db.query(Employee).filter(
            Employee.is_active == True
        ).order_by(Employee.employee_code).all()
        return self._with_privileges_and_vehicles(employees)

    def employee_index(self, employee_ids: Optional[Iterable[int]] = None) -> Dict[int, EmployeeRecord]:
        """Employees by id, inactive ones included for historical bookings"""
        query = self.db.query(Employee)
        if employee_ids is not None:
            query = query.filter(Employee.id.in_(list(employee_ids)))
        return {e.id: e for e in self._with_privileges_and_vehicles(query.all())}

    def list_active_bookings(self, as_of: Optional[date] = None) -> List[BookingRead]:
        """Non-deleted bookings, limited to those covering ``as_of`` when given"""
        query = self.db.query(Booking).filter(Booking.is_deleted == False)
        if as_of is not None:
            query = query.filter(
                and_(Booking.booking_start <= as_of, Booking.booking_end >= as_of)
            )
        return [
            BookingRead.model_validate(b)
            for b in query.order_by(Booking.booking_start, Booking.id).all()
        ]

    def list_bookings_in_window(self, window: Interval) -> List[BookingRead]:
        """Non-deleted bookings intersecting ``window``"""
        bookings = self.db.query(Booking).filter(
            and_(
                Booking.is_deleted == False,
                Booking.booking_start <= window.end,
                Booking.booking_end >= window.start
            )
        ).order_by(Booking.booking_start, Booking.id).all()
        return [BookingRead.model_validate(b) for b in bookings]

    def _with_privileges_and_vehicles(self, employees: List[Employee]) -> List[EmployeeRecord]:
        if not employees:
            return []

        privileges = {
            normalize_employee_code(p.employee_code): p
            for p in self.db.query(Privilege).all()
        }

        plates = defaultdict(list)
        vehicles = self.db.query(Vehicle).filter(
            Vehicle.is_active == True
        ).order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()
        for vehicle in vehicles:
            plates[normalize_employee_code(vehicle.employee_code)].append(vehicle.license_plate)

        records = []
        for employee in employees:
            code = normalize_employee_code(employee.employee_code)
            privilege = privileges.get(code)
            records.append(EmployeeRecord(
                id=employee.id,
                employee_code=employee.employee_code,
                full_name=employee.full_name,
                employee_type=employee.employee_type or "General",
                vehicles=plates.get(code, []),
                privilege_tier=(privilege.tier or 0) if privilege else 0,
                privilege_label=privilege.label if privilege else None,
                is_active=bool(employee.is_active)
            ))
        return records

class SpotBoardService:
    """Spot status lookups for a given date"""

    def __init__(self, db: Session):
        self.db = db
        self.catalog = InventoryCatalog(db)
        self.bookings = BookingService(db)

    def get_spot_status(self, spot_id: int, on_date: date) -> SpotStatus:
        """Status of one spot, its active booking and what comes next"""
        spot = self.db.query(ParkingSpot).filter(ParkingSpot.id == spot_id).first()
        if not spot:
            raise NotFoundError("Parking spot", spot_id)

        active = self.bookings.find_active_for_spot(spot_id, on_date)
        upcoming = self.bookings.find_next_for_spot(spot_id, on_date)

        return SpotStatus(
            spot_id=spot_id,
            on_date=on_date,
            status=SpotOccupancy.OCCUPIED if active else SpotOccupancy.AVAILABLE,
            active_booking=BookingRead.model_validate(active) if active else None,
            next_booking=BookingRead.model_validate(upcoming) if upcoming else None
        )

    def get_board(
        self,
        on_date: date,
        zone: Optional[str] = None,
        spot_type: Optional[str] = None,
        status: Optional[SpotOccupancy] = None
    ) -> SpotBoard:
        """Every active spot with its status on ``on_date``, filtered"""

        spots = self.catalog.list_active_spots()
        active_by_spot = {b.spot_id: b for b in self.catalog.list_active_bookings(as_of=on_date)}
        employees = self.catalog.employee_index({b.employee_id for b in active_by_spot.values()})

        items = []
        for spot in spots:
            booking = active_by_spot.get(spot.id)
            employee = employees.get(booking.employee_id) if booking else None
            full_name = None
            if booking:
                full_name = (employee.full_name if employee else None) or settings.UNKNOWN_EMPLOYEE_LABEL
            items.append(SpotBoardItem(
                spot=spot,
                status=SpotOccupancy.OCCUPIED if booking else SpotOccupancy.AVAILABLE,
                active_booking=booking,
                employee_code=employee.employee_code if employee else None,
                full_name=full_name
            ))

        zones = sorted({s.zone for s in spots})
        spot_types = sorted({s.spot_type for s in spots})

        if zone:
            items = [i for i in items if i.spot.zone == zone]
        if spot_type:
            items = [i for i in items if i.spot.spot_type == spot_type]
        if status:
            items = [i for i in items if i.status == status]

        occupied = len([i for i in items if i.status == SpotOccupancy.OCCUPIED])
        return SpotBoard(
            on_date=on_date,
            zones=zones,
            spot_types=spot_types,
            spots=items,
            total=len(items),
            occupied=occupied,
            available=len(items) - occupied
        )
