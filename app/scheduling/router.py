import logging
from uuid import UUID
from datetime import date
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import ClientOrder
from app.scheduling.exceptions import PartialBookingFailureException
from app.scheduling.repository import BookingRepository
from app.scheduling.service import BookingService
from app.scheduling.time_slots import CandidateSlot, get_time_slots
from app.scheduling.schemas import (
    AvailabilityWindowResponse,
    CareServiceResponse,
    CaregiverMatchResponse,
    ComposeServicesRequest,
    ComposedServiceResponse,
    CreateOrderRequest,
    EligibleCaregiversResponse,
    FeasibleSlotsResponse,
    OrderListResponse,
    OrderResponse,
    RecurrencePreviewRequest,
    RecurrencePreviewResponse,
    ServiceOptionsResponse,
    ShiftResponse,
    TimeSlotResponse,
    TimeSlotsResponse,
)
from app.scheduling.availability import resolve_availability_window
from app.utils.timezone import to_agency_time

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/scheduling",
    tags=["scheduling"],
)


def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    """Dependency to build the booking service for a request."""
    return BookingService(BookingRepository(db))


def to_slot_responses(slots: Dict[str, List[CandidateSlot]]) -> Dict[str, List[TimeSlotResponse]]:
    return {
        segment: [
            TimeSlotResponse(time=s.time, period=s.period, display=s.display, start_time=s.start_time)
            for s in segment_slots
        ]
        for segment, segment_slots in slots.items()
    }


def to_order_response(order: ClientOrder, shift_count: int) -> OrderResponse:
    """Convert ClientOrder model to response schema"""
    return OrderResponse(
        id=order.id,
        order_number=order.order_number,
        client_id=order.client_id,
        agency_id=order.agency_id,
        start_date=order.start_date,
        end_date=order.end_date,
        frequency=order.frequency,
        days_of_week=order.days_of_week,
        status=order.status,
        created_at=to_agency_time(order.created_at),
        shift_count=shift_count,
    )


@router.get("/time-slots", response_model=TimeSlotsResponse)
async def list_time_slots():
    """Candidate start times grouped into morning, afternoon and evening."""
    return TimeSlotsResponse(**to_slot_responses(get_time_slots()))


@router.get("/clients/{client_id}/services", response_model=ServiceOptionsResponse)
async def list_client_services(
    client_id: UUID,
    service: BookingService = Depends(get_booking_service),
):
    """
    Services a client can book.

    Primary options are limited to daily-living and health-monitoring
    categories; every service can be added as an additional service.
    """
    primary, additional = await service.list_services(client_id)
    return ServiceOptionsResponse(
        primary=[CareServiceResponse.model_validate(s) for s in primary],
        additional=[CareServiceResponse.model_validate(s) for s in additional],
    )


@router.post("/compose", response_model=ComposedServiceResponse)
async def compose_services(
    request: ComposeServicesRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Duration, hourly rate and visit cost of a primary service plus an optional add-on."""
    composed = await service.compose(request.primary_service_code, request.additional_service_code)
    return ComposedServiceResponse(
        duration_hours=composed.duration_hours,
        rate=composed.rate,
        total_cost=composed.total_cost,
    )


@router.get("/clients/{client_id}/caregivers", response_model=EligibleCaregiversResponse)
async def list_eligible_caregivers(
    client_id: UUID,
    day: int = Query(..., ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    service: BookingService = Depends(get_booking_service),
):
    """
    Caregivers serving the client's zip code who are available on a day,
    best rated first. An empty list comes with an advisory message.
    """
    caregivers, advisory = await service.find_caregivers(client_id, day)

    matches = [
        CaregiverMatchResponse(
            id=cg.id,
            first_name=cg.first_name,
            last_name=cg.last_name,
            performance_rating=cg.performance_rating,
            hourly_rate=cg.hourly_rate,
            window=AvailabilityWindowResponse.model_validate(
                resolve_availability_window(cg.availability, day)
            ),
        )
        for cg in caregivers
    ]

    return EligibleCaregiversResponse(
        client_id=client_id,
        day_of_week=day,
        caregivers=matches,
        count=len(matches),
        advisory=advisory,
    )


@router.get("/caregivers/{caregiver_id}/slots", response_model=FeasibleSlotsResponse)
async def list_feasible_slots(
    caregiver_id: UUID,
    day: int = Query(..., ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    duration_hours: float = Query(..., gt=0, le=24),
    service: BookingService = Depends(get_booking_service),
):
    """Start times at which the caregiver can cover the whole visit."""
    slots, advisory = await service.find_slots(caregiver_id, day, duration_hours)
    return FeasibleSlotsResponse(
        caregiver_id=caregiver_id,
        day_of_week=day,
        duration_hours=duration_hours,
        advisory=advisory,
        **to_slot_responses(slots),
    )


@router.post("/recurrence/preview", response_model=RecurrencePreviewResponse)
async def preview_recurrence(
    request: RecurrencePreviewRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Dates a booking would produce, without creating anything."""
    end_date, dates = service.preview_dates(request.start_date, request.day_of_week, request.cadence)
    return RecurrencePreviewResponse(
        start_date=request.start_date,
        end_date=end_date,
        cadence=request.cadence,
        dates=dates,
        count=len(dates),
    )


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CreateOrderRequest,
    service: BookingService = Depends(get_booking_service),
):
    """
    Submit a completed booking.

    Workflow:
    1. Validates every required booking field is set
    2. Expands the recurrence into shift dates
    3. Creates the order and one open shift per date

    If the shifts cannot be stored the order is deleted again and the
    failure is reported.
    """
    try:
        order, shifts = await service.materialize(request.client_id, request)
    except PartialBookingFailureException as exc:
        logger.warning(f"Discarding order {exc.order_id} left without shifts")
        try:
            await service.discard_order(exc.order_id)
        except Exception:
            logger.error(f"Failed to discard order {exc.order_id}, it remains without shifts", exc_info=True)
        raise exc

    return to_order_response(order, len(shifts))


@router.get("/agencies/{agency_id}/orders", response_model=OrderListResponse)
async def list_orders(
    agency_id: UUID,
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    period: Optional[str] = Query(None, pattern="^(week|month|year)$"),
    on: Optional[date] = Query(None, description="Date inside the period (defaults to today)"),
    service: BookingService = Depends(get_booking_service),
):
    """Orders of an agency with shift counts, newest first."""
    rows = await service.list_orders(agency_id, status=status_filter, search=search, period=period, on=on)
    orders = [to_order_response(order, count) for order, count in rows]
    return OrderListResponse(orders=orders, count=len(orders))


@router.get("/orders/{order_id}/shifts", response_model=List[ShiftResponse])
async def list_order_shifts(
    order_id: UUID,
    service: BookingService = Depends(get_booking_service),
):
    """Shifts generated for an order, by date."""
    shifts = await service.get_order_shifts(order_id)
    return [ShiftResponse.model_validate(s) for s in shifts]


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: UUID,
    service: BookingService = Depends(get_booking_service),
):
    """Delete an order and all of its shifts."""
    await service.discard_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
