from uuid import UUID
from datetime import date, datetime, time
from typing import List, Optional
from pydantic import BaseModel, Field

from app.scheduling.recurrence import Cadence


class CareServiceResponse(BaseModel):
    """Care service catalog entry"""
    code: str
    name: str
    category: str
    duration_hours: Optional[float] = None
    price: Optional[float] = None

    class Config:
        from_attributes = True


class ServiceOptionsResponse(BaseModel):
    """Services a client can book"""
    primary: List[CareServiceResponse]
    additional: List[CareServiceResponse]


class ComposeServicesRequest(BaseModel):
    """Primary service plus an optional add-on"""
    primary_service_code: str
    additional_service_code: Optional[str] = None


class ComposedServiceResponse(BaseModel):
    """Effective duration and hourly rate of a visit"""
    duration_hours: float
    rate: float
    total_cost: float


class TimeSlotResponse(BaseModel):
    """Candidate start time"""
    time: str  # 12-hour label, e.g. "9:00"
    period: str  # AM | PM
    display: str  # "9:00 AM"
    start_time: time


class TimeSlotsResponse(BaseModel):
    """Start times grouped by day segment"""
    morning: List[TimeSlotResponse]
    afternoon: List[TimeSlotResponse]
    evening: List[TimeSlotResponse]


class AvailabilityWindowResponse(BaseModel):
    """Caregiver availability for one day of the week"""
    day_of_week: int  # 0=Sunday .. 6=Saturday
    start_time: time
    end_time: time
    is_available: bool

    class Config:
        from_attributes = True


class CaregiverMatchResponse(BaseModel):
    """Caregiver eligible for a requested day"""
    id: UUID
    first_name: str
    last_name: str
    performance_rating: Optional[float] = None
    hourly_rate: Optional[float] = None
    window: AvailabilityWindowResponse


class EligibleCaregiversResponse(BaseModel):
    """Ranked caregivers for a client and day"""
    client_id: UUID
    day_of_week: int
    caregivers: List[CaregiverMatchResponse]
    count: int
    advisory: Optional[str] = None  # Set when no caregiver is available


class FeasibleSlotsResponse(TimeSlotsResponse):
    """Start times a caregiver can cover for a visit length"""
    caregiver_id: UUID
    day_of_week: int
    duration_hours: float
    advisory: Optional[str] = None  # Set when nothing fits


class RecurrencePreviewRequest(BaseModel):
    """Dates a booking would produce"""
    start_date: date
    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday .. 6=Saturday")
    cadence: Cadence = Cadence.ONCE


class RecurrencePreviewResponse(BaseModel):
    """Expanded booking dates"""
    start_date: date
    end_date: date
    cadence: Cadence
    dates: List[date]
    count: int


class BookingDraft(BaseModel):
    """Booking being assembled; every field must be set before an order can be created"""
    primary_service_code: Optional[str] = None
    additional_service_code: Optional[str] = None
    day_of_week: Optional[int] = Field(None, ge=0, le=6, description="0=Sunday .. 6=Saturday")
    cadence: Cadence = Cadence.ONCE
    caregiver_id: Optional[UUID] = None
    time_slot: Optional[str] = Field(None, description="Catalog start time, e.g. '9:00 AM'")
    start_date: Optional[date] = None


class CreateOrderRequest(BookingDraft):
    """Request to turn a completed booking into an order and its shifts"""
    client_id: UUID


class ShiftResponse(BaseModel):
    """Scheduled visit"""
    id: UUID
    order_id: Optional[UUID] = None
    client_id: UUID
    caregiver_id: Optional[UUID] = None
    shift_date: date
    start_time: time
    end_time: time
    duration_hours: float
    care_type_code: str
    order_title: str
    pay_rate: Optional[float] = None
    status: str  # open | assigned | completed | cancelled
    special_notes: Optional[str] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Care order"""
    id: UUID
    order_number: str
    client_id: UUID
    agency_id: UUID
    start_date: date
    end_date: date
    frequency: str
    days_of_week: Optional[str] = None
    status: str  # draft | submitted | active | completed | cancelled
    created_at: datetime
    shift_count: int = 0


class OrderListResponse(BaseModel):
    """Orders of an agency"""
    orders: List[OrderResponse]
    count: int
