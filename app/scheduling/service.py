import logging
from uuid import UUID
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from app.db.models import CareType, Caregiver, Client, ClientOrder, Shift
from app.scheduling.availability import (
    DAY_NAMES,
    feasible_slots,
    has_feasible_slot,
    resolve_availability_window,
)
from app.scheduling.composer import (
    ComposedService,
    additional_service_options,
    compose_services,
    primary_service_options,
)
from app.scheduling.exceptions import (
    CareServiceNotFoundException,
    CaregiverNotFoundException,
    ClientNotFoundException,
    ClientZipCodeMissingException,
    IncompleteBookingException,
    InvalidDayOfWeekException,
    InvalidTimeSlotException,
    NoShiftDatesProducedException,
    OrderNotFoundException,
    PartialBookingFailureException,
)
from app.scheduling.matching import eligibility_advisory, eligible_caregivers
from app.scheduling.order_numbers import generate_order_number
from app.scheduling.periods import period_bounds
from app.scheduling.recurrence import Cadence, compute_end_date, expand_dates
from app.scheduling.repository import BookingRepository
from app.scheduling.schemas import BookingDraft
from app.scheduling.shift_times import scheduled_hours, shift_times
from app.scheduling.time_slots import CandidateSlot, parse_slot

logger = logging.getLogger(__name__)

ORDER_STATUS_SUBMITTED = "submitted"
SHIFT_STATUS_OPEN = "open"

REQUIRED_DRAFT_FIELDS = {
    "primary_service_code": "primary service",
    "caregiver_id": "caregiver",
    "time_slot": "time slot",
    "day_of_week": "day",
    "start_date": "start date",
}


def validate_draft(draft: BookingDraft) -> None:
    """Raise IncompleteBookingException listing every unset required field."""
    missing = [label for field, label in REQUIRED_DRAFT_FIELDS.items() if getattr(draft, field) in (None, "")]
    if missing:
        raise IncompleteBookingException(missing)


def validate_day(day_of_week: int) -> None:
    if not 0 <= day_of_week <= 6:
        raise InvalidDayOfWeekException(day_of_week)


def build_shifts(
    order: ClientOrder,
    client: Client,
    caregiver_id: UUID,
    dates: List[date],
    slot: CandidateSlot,
    composed: ComposedService,
    primary: CareType,
    additional: Optional[CareType] = None,
) -> List[Shift]:
    """One open shift per date, all tied to the same order."""
    start_time, end_time = shift_times(slot, composed.duration_hours)
    special_notes = f"Includes {additional.name}" if additional else None

    return [
        Shift(
            order_id=order.id,
            client_id=client.id,
            agency_id=client.agency_id,
            caregiver_id=caregiver_id,
            shift_date=shift_date,
            start_time=start_time,
            end_time=end_time,
            duration_hours=scheduled_hours(composed.duration_hours),
            care_type_code=primary.code,
            order_title=primary.name,
            pay_rate=composed.rate,
            status=SHIFT_STATUS_OPEN,
            special_notes=special_notes,
        )
        for shift_date in dates
    ]


class BookingService:
    """Service layer for care order booking"""

    def __init__(
        self,
        repository: BookingRepository,
        order_number_factory: Callable[[], str] = generate_order_number,
    ):
        self.repository = repository
        self.order_number_factory = order_number_factory

    async def _get_client(self, client_id: UUID) -> Client:
        client = await self.repository.get_client(client_id)
        if not client:
            raise ClientNotFoundException(client_id)
        return client

    async def _get_service(self, code: str) -> CareType:
        service = await self.repository.get_care_service(code)
        if not service:
            raise CareServiceNotFoundException(code)
        return service

    async def _get_agency_caregiver(self, caregiver_id: UUID, agency_id: UUID) -> Caregiver:
        caregiver = await self.repository.get_caregiver(caregiver_id)
        if not caregiver or caregiver.agency_id != agency_id:
            raise CaregiverNotFoundException(caregiver_id)
        return caregiver

    async def list_services(self, client_id: UUID) -> Tuple[List[CareType], List[CareType]]:
        """
        Services a client can book, as (primary options, additional options).

        Clients with configured care needs are offered only those services;
        otherwise the agency's whole active catalog is offered.
        """
        client = await self._get_client(client_id)
        services = await self.repository.get_client_care_services(client_id)
        if not services:
            logger.info(f"Client {client_id} has no care needs configured, offering full catalog")
            services = await self.repository.get_active_care_services(client.agency_id)

        return primary_service_options(services), additional_service_options(services)

    async def compose(self, primary_code: str, additional_code: Optional[str] = None) -> ComposedService:
        """Effective duration and rate of a primary service plus an optional add-on"""
        primary = await self._get_service(primary_code)
        additional = await self._get_service(additional_code) if additional_code else None
        return compose_services(primary, additional)

    async def find_caregivers(self, client_id: UUID, day_of_week: int) -> Tuple[List[Caregiver], Optional[str]]:
        """
        Caregivers serving the client's zip code who are available on a day.

        Returns:
            Tuple of (ranked caregivers, advisory message when none qualify)
        """
        validate_day(day_of_week)
        client = await self._get_client(client_id)
        if not client.zip_code:
            raise ClientZipCodeMissingException(client_id)

        pool = await self.repository.get_active_caregivers(client.agency_id)
        matches = eligible_caregivers(pool, client.zip_code, day_of_week)

        if not matches:
            advisory = eligibility_advisory(day_of_week)
            logger.info(f"No eligible caregivers for client {client_id} on {DAY_NAMES[day_of_week]}")
            return [], advisory

        return matches, None

    async def find_slots(
        self,
        caregiver_id: UUID,
        day_of_week: int,
        duration_hours: float,
    ) -> Tuple[Dict[str, List[CandidateSlot]], Optional[str]]:
        """
        Start times a caregiver's window can fit a visit of the given length.

        Returns:
            Tuple of (segment -> slots, advisory message when nothing fits)
        """
        validate_day(day_of_week)
        caregiver = await self.repository.get_caregiver(caregiver_id)
        if not caregiver:
            raise CaregiverNotFoundException(caregiver_id)

        window = resolve_availability_window(caregiver.availability, day_of_week)
        slots = feasible_slots(window, duration_hours)

        if not has_feasible_slot(slots):
            day_name = DAY_NAMES[day_of_week]
            if window is None:
                advisory = f"Caregiver is not available on {day_name}, choose another caregiver or day"
            else:
                advisory = (
                    f"No start times fit a {duration_hours:g}-hour visit with this caregiver on {day_name}, "
                    "choose a shorter service or another caregiver"
                )
            return slots, advisory

        return slots, None

    def preview_dates(self, start_date: date, day_of_week: int, cadence: Cadence) -> Tuple[date, List[date]]:
        """End date and shift dates a booking would produce, without writing anything"""
        validate_day(day_of_week)
        return compute_end_date(start_date, cadence), expand_dates(start_date, day_of_week, cadence)

    async def materialize(self, client_id: UUID, draft: BookingDraft) -> Tuple[ClientOrder, List[Shift]]:
        """
        Turn a completed booking into one order and its shifts.

        Steps:
        1. Validate the draft is complete and expand its dates
        2. Resolve services, client and caregiver; compose duration and rate
        3. Create the order, then insert one shift per date

        Raises:
            IncompleteBookingException: A required field is unset
            NoShiftDatesProducedException: No date in range falls on the chosen day
            PartialBookingFailureException: The order exists but shifts were not stored
        """
        try:
            validate_draft(draft)
        except IncompleteBookingException as exc:
            logger.warning(f"Rejected incomplete booking for client {client_id}: {exc.detail}")
            raise

        try:
            slot = parse_slot(draft.time_slot)
        except ValueError as exc:
            raise InvalidTimeSlotException(str(exc)) from exc

        dates = expand_dates(draft.start_date, draft.day_of_week, draft.cadence)
        if not dates:
            raise NoShiftDatesProducedException(DAY_NAMES[draft.day_of_week], Cadence(draft.cadence).value)

        client = await self._get_client(client_id)
        caregiver = await self._get_agency_caregiver(draft.caregiver_id, client.agency_id)
        primary = await self._get_service(draft.primary_service_code)
        additional = (
            await self._get_service(draft.additional_service_code)
            if draft.additional_service_code else None
        )
        composed = compose_services(primary, additional)

        order = await self.repository.create_order(
            ClientOrder(
                order_number=self.order_number_factory(),
                client_id=client.id,
                agency_id=client.agency_id,
                start_date=draft.start_date,
                end_date=compute_end_date(draft.start_date, draft.cadence),
                frequency=Cadence(draft.cadence).value,
                days_of_week=str(draft.day_of_week),
                status=ORDER_STATUS_SUBMITTED,
            )
        )

        # Rollback expires the order, so keep its identifiers
        order_id, order_number = order.id, order.order_number

        shifts = build_shifts(order, client, caregiver.id, dates, slot, composed, primary, additional)
        try:
            await self.repository.create_shifts(shifts)
        except Exception as exc:
            logger.error(
                f"Order {order_number} ({order_id}) created but {len(shifts)} shifts failed to save: {exc}",
                exc_info=True,
            )
            raise PartialBookingFailureException(order_id, str(exc)) from exc

        logger.info(
            f"Order {order_number} submitted for client {client.id}: "
            f"{len(shifts)} shifts with caregiver {caregiver.id} at {slot.display}"
        )
        return order, shifts

    async def list_orders(
        self,
        agency_id: UUID,
        status: Optional[str] = None,
        search: Optional[str] = None,
        period: Optional[str] = None,
        on: Optional[date] = None,
    ) -> List[Tuple[ClientOrder, int]]:
        """Orders with shift counts, optionally limited to the week/month/year containing `on`"""
        period_start = period_end = None
        if period:
            period_start, period_end = period_bounds(period, on or date.today())

        return await self.repository.list_orders(
            agency_id=agency_id,
            status=status,
            search=search,
            period_start=period_start,
            period_end=period_end,
        )

    async def get_order_shifts(self, order_id: UUID) -> List[Shift]:
        """Shifts of an order by date"""
        order = await self.repository.get_order(order_id)
        if not order:
            raise OrderNotFoundException(order_id)
        return await self.repository.get_order_shifts(order_id)

    async def discard_order(self, order_id: UUID) -> None:
        """Delete an order and all of its shifts"""
        deleted = await self.repository.delete_order(order_id)
        if not deleted:
            raise OrderNotFoundException(order_id)
        logger.info(f"Order {order_id} and its shifts deleted")
