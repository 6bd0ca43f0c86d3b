from datetime import datetime
from uuid import uuid4
from sqlalchemy import (
    Column, String, DateTime, Text, Boolean, Date, Time, Integer, Numeric,
    ForeignKey, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.orm import relationship
from app.db.base import Base


class CareType(Base):
    """
    Care service catalog - owned by the agency administration service.
    Defined here for read-only queries (service selection and composition).
    """
    __tablename__ = "care_types"
    __table_args__ = {'extend_existing': True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    agency_id = Column(UUID(as_uuid=True), nullable=True, index=True)  # NULL for the shared catalog
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration_hours = Column(Numeric(5, 2, asdecimal=False), nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=True)


class Client(Base):
    """
    Clients table - owned by another service.
    Defined here for read-only queries (zip code and agency lookup).
    """
    __tablename__ = "clients"
    __table_args__ = {'extend_existing': True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    agency_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    zip_code = Column(String(20), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=True)


class ClientCareNeed(Base):
    """Care types configured for a client; read-only here"""
    __tablename__ = "client_care_needs"
    __table_args__ = {'extend_existing': True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    client_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    care_type_code = Column(String(50), nullable=False)


class Caregiver(Base):
    """
    Caregivers table - owned by another service.
    Read for eligibility matching together with declared availability.
    """
    __tablename__ = "caregivers"
    __table_args__ = {'extend_existing': True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    agency_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    hourly_rate = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    performance_rating = Column(Numeric(3, 2, asdecimal=False), nullable=True)
    service_zipcodes = Column(ARRAY(String(20)), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=True)

    availability = relationship(
        "CaregiverAvailability",
        lazy="selectin",
        order_by="CaregiverAvailability.created_at",
    )


class CaregiverAvailability(Base):
    """Weekly availability window declared by a caregiver (0=Sunday..6=Saturday)"""
    __tablename__ = "caregiver_availability"
    __table_args__ = {'extend_existing': True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    caregiver_id = Column(UUID(as_uuid=True), ForeignKey("caregivers.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_available = Column(Boolean, nullable=True, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=True)


class ClientOrder(Base):
    """
    Care order spanning a date range.
    Owned by this service; the shifts generated for it reference it by order_id.
    """
    __tablename__ = "client_orders"
    __table_args__ = {'extend_existing': True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    order_number = Column(String(50), unique=True, nullable=False, index=True)
    client_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    agency_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    frequency = Column(String(20), nullable=False, default="once")  # once | weekly | biweekly | monthly
    days_of_week = Column(String(20), nullable=True)
    status = Column(String(50), nullable=False, default="submitted", index=True)  # draft | submitted | active | completed | cancelled
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Shift(Base):
    """One scheduled visit; order-generated shifts always carry order_id"""
    __tablename__ = "shifts"
    __table_args__ = (
        UniqueConstraint("caregiver_id", "shift_date", "start_time", name="uq_shifts_caregiver_slot"),
        {'extend_existing': True},
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    order_id = Column(UUID(as_uuid=True), ForeignKey("client_orders.id", ondelete="CASCADE"), nullable=True, index=True)
    client_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    agency_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    caregiver_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    shift_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    duration_hours = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    care_type_code = Column(String(50), nullable=False)
    order_title = Column(String(255), nullable=False)
    pay_rate = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    status = Column(String(50), nullable=False, default="open", index=True)
    special_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
