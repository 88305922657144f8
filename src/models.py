from sqlalchemy import Column, Integer, BigInteger, String, Boolean, DateTime, Date, Text, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from typing import Optional
from src.database import Base

# Integer rather than BigInteger primary keys so SQLite autoincrements them
PrimaryKey = BigInteger().with_variant(Integer, "sqlite")

# ================================
# Parking Spots
# ================================
class ParkingSpot(Base):
    __tablename__ = "parking_spots"

    id = Column(PrimaryKey, primary_key=True, index=True)
    lot_code = Column(String(50))
    spot_number = Column(Integer)
    zone_text = Column(String(255), nullable=False, index=True)
    roof_type = Column(Boolean, default=False)
    spot_type = Column(String(50), nullable=False, default="General Parking", index=True)
    price = Column(Numeric(10, 2))  # monthly, NULL bills as zero
    is_active = Column(Boolean, default=True, index=True)
    effective_from = Column(DateTime(timezone=True), server_default=func.now())
    expired_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="spot")

    @property
    def label(self) -> str:
        if self.lot_code and self.spot_number is not None:
            return f"{self.lot_code}-{self.spot_number:03d}"
        return self.lot_code or str(self.id)

# ================================
# Employees, Vehicles & Privileges
# ================================
EMPLOYEE_CODE_WIDTH = 8

def normalize_employee_code(code: Optional[str]) -> str:
    """Strip and left-pad employee codes so imported and stored codes match"""
    code = str(code or "").strip()
    if not code:
        return ""
    return code.rjust(EMPLOYEE_CODE_WIDTH, "0")

class Employee(Base):
    __tablename__ = "employees"

    id = Column(PrimaryKey, primary_key=True, index=True)
    employee_code = Column(String(20), unique=True, nullable=False, index=True)
    full_name = Column(String(255))
    employee_type = Column(String(50), default="General")
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="employee")

class Vehicle(Base):
    __tablename__ = "employee_vehicles"

    id = Column(PrimaryKey, primary_key=True, index=True)
    employee_code = Column(String(20), nullable=False, index=True)
    license_plate = Column(String(20), nullable=False)
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Privilege(Base):
    __tablename__ = "employee_privileges"

    id = Column(PrimaryKey, primary_key=True, index=True)
    employee_code = Column(String(20), unique=True, nullable=False, index=True)
    tier = Column(Integer, default=0)  # 1 and 2 waive the net fee
    label = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"

    id = Column(PrimaryKey, primary_key=True, index=True)
    spot_id = Column(BigInteger, ForeignKey("parking_spots.id"), nullable=False, index=True)
    employee_id = Column(BigInteger, ForeignKey("employees.id"), nullable=False, index=True)
    license_plate_used = Column(String(20), default="-")
    booking_start = Column(Date, nullable=False, index=True)
    booking_end = Column(Date, nullable=False, index=True)  # 9999-12-31 when indefinite
    status = Column(String(50), default="confirmed")
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    spot = relationship("ParkingSpot", back_populates="bookings")
    employee = relationship("Employee", back_populates="bookings")
