#!/usr/bin/env python3

from datetime import date, timedelta
from decimal import Decimal

from src.database import SessionLocal, init_db
from src.models import Booking, Employee, ParkingSpot, Privilege, Vehicle
from src.bookings.intervals import Interval
from src.bookings.booking_service import BookingService
from src.bookings.exceptions import ConflictError

def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for the car park...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(Booking).delete()
        db.query(Vehicle).delete()
        db.query(Privilege).delete()
        db.query(Employee).delete()
        db.query(ParkingSpot).delete()

        # 1. Create Parking Spots
        print("Creating parking spots...")
        zones = ["แถวแรกในลานจอด", "แถวสองในลานจอด", "ริมถนน"]
        spots = []
        for number in range(1, 11):
            spots.append(ParkingSpot(
                lot_code="R1", spot_number=number, zone_text=zones[0],
                spot_type="Reserved (Paid) Parking", price=Decimal("3000.00"), roof_type=True
            ))
        for number in range(1, 6):
            spots.append(ParkingSpot(
                lot_code="R2", spot_number=number, zone_text=zones[1],
                spot_type="EV Charging Parking", price=Decimal("3500.00")
            ))
        for number in range(1, 9):
            spots.append(ParkingSpot(
                lot_code="RS", spot_number=number, zone_text=zones[2],
                spot_type="General Parking", price=None
            ))
        db.add_all(spots)
        db.flush()

        # 2. Create Employees, Vehicles & Privileges
        print("Creating employees...")
        employees = [
            Employee(employee_code="00010001", full_name="Somchai Jaidee", employee_type="General"),
            Employee(employee_code="00010002", full_name="Suda Rattanakorn", employee_type="Management"),
            Employee(employee_code="00010003", full_name="Anan Wongsa", employee_type="General"),
            Employee(employee_code="00010004", full_name="Pim Srisuk", employee_type="General"),
        ]
        db.add_all(employees)
        db.add_all([
            Vehicle(employee_code="00010001", license_plate="1กข1234"),
            Vehicle(employee_code="00010003", license_plate="2คง5678"),
            Vehicle(employee_code="00010004", license_plate="3จฉ9012"),
        ])
        db.add(Privilege(employee_code="00010003", tier=1, label="Bond Holder"))
        db.commit()

        # 3. Create Bookings through the ledger so they are conflict checked
        print("Creating bookings...")
        service = BookingService(db)
        month_start = date.today().replace(day=1)
        plans = [
            (spots[0], employees[0], Interval.indefinite(month_start - timedelta(days=40))),
            (spots[1], employees[1], Interval.indefinite(month_start)),
            (spots[10], employees[2], Interval(start=month_start + timedelta(days=4), end=month_start + timedelta(days=20))),
            (spots[2], employees[3], Interval(start=month_start - timedelta(days=10), end=month_start + timedelta(days=9))),
        ]
        for spot, employee, interval in plans:
            try:
                service.create(spot.id, employee.id, interval)
            except ConflictError as e:
                print(f"Skipped booking for {employee.employee_code}: {e.message}")

        print(f"✅ Seeded {len(zones)} zones, {len(spots)} spots, {len(employees)} employees")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
