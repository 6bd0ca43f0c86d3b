import pytest
from datetime import datetime
from types import SimpleNamespace
from uuid import uuid4
from httpx import AsyncClient, ASGITransport
from app.main import app
from app.scheduling.router import get_booking_service
from app.scheduling.service import BookingService
from tests.factories import AGENCY_ID


class InMemoryBookingRepository:
    """Stands in for BookingRepository with plain lists."""

    def __init__(self):
        self.clients = {}
        self.caregivers = {}
        self.services = {}
        self.care_needs = {}
        self.orders = {}
        self.shifts = []
        self.fail_shift_insert = False

    def add_client(self, zip_code="90001", agency_id=AGENCY_ID):
        client = SimpleNamespace(
            id=uuid4(), agency_id=agency_id, first_name="Rosa", last_name="Diaz", zip_code=zip_code,
        )
        self.clients[client.id] = client
        return client

    def add_caregiver(self, caregiver):
        self.caregivers[caregiver.id] = caregiver
        return caregiver

    def add_service(self, service):
        self.services[service.code] = service
        return service

    async def get_active_care_services(self, agency_id):
        return sorted(self.services.values(), key=lambda s: s.name)

    async def get_client_care_services(self, client_id):
        return [self.services[code] for code in self.care_needs.get(client_id, [])]

    async def get_care_service(self, code):
        return self.services.get(code)

    async def get_client(self, client_id):
        return self.clients.get(client_id)

    async def get_active_caregivers(self, agency_id):
        return [cg for cg in self.caregivers.values() if cg.agency_id == agency_id]

    async def get_caregiver(self, caregiver_id):
        return self.caregivers.get(caregiver_id)

    async def create_order(self, order):
        order.id = uuid4()
        order.created_at = datetime.utcnow()
        self.orders[order.id] = order
        return order

    async def create_shifts(self, shifts):
        if self.fail_shift_insert:
            raise RuntimeError("duplicate key value violates unique constraint \"uq_shifts_caregiver_slot\"")
        for shift in shifts:
            shift.id = uuid4()
        self.shifts.extend(shifts)

    async def get_order(self, order_id):
        return self.orders.get(order_id)

    async def list_orders(self, agency_id, status=None, search=None, period_start=None, period_end=None):
        rows = []
        for order in self.orders.values():
            if order.agency_id != agency_id:
                continue
            if status and order.status != status:
                continue
            if search and search.lower() not in order.order_number.lower():
                continue
            if period_start and order.end_date < period_start:
                continue
            if period_end and order.start_date > period_end:
                continue
            rows.append((order, len([s for s in self.shifts if s.order_id == order.id])))
        return sorted(rows, key=lambda row: row[0].created_at, reverse=True)

    async def get_order_shifts(self, order_id):
        return sorted((s for s in self.shifts if s.order_id == order_id), key=lambda s: s.shift_date)

    async def delete_order(self, order_id):
        if order_id not in self.orders:
            return False
        self.shifts = [s for s in self.shifts if s.order_id != order_id]
        del self.orders[order_id]
        return True


@pytest.fixture
def repository():
    """Empty in-memory repository."""
    return InMemoryBookingRepository()


@pytest.fixture
def booking_service(repository):
    """Booking service with a predictable order number sequence."""
    counter = iter(range(1, 10000))
    return BookingService(repository, order_number_factory=lambda: f"ORD-TEST-{next(counter)}")


@pytest.fixture
async def client(booking_service):
    """Create a test client with the booking service overridden."""
    app.dependency_overrides[get_booking_service] = lambda: booking_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
