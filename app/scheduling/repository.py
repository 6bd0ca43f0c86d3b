"""Booking Repository Layer"""
from uuid import UUID
from datetime import date
from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, and_, or_
from app.db.models import (
    CareType,
    Caregiver,
    Client,
    ClientCareNeed,
    ClientOrder,
    Shift,
)
from app.db.repository import BaseRepository


class BookingRepository(BaseRepository):
    """Reads the catalog, clients and caregivers; writes orders and their shifts"""

    def __init__(self, db: AsyncSession):
        super().__init__(db)

    async def get_active_care_services(self, agency_id: UUID) -> List[CareType]:
        """Active services of an agency plus the shared catalog"""
        stmt = select(CareType).where(
            and_(
                CareType.is_active.is_(True),
                or_(CareType.agency_id == agency_id, CareType.agency_id.is_(None)),
            )
        ).order_by(CareType.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_client_care_services(self, client_id: UUID) -> List[CareType]:
        """Active services configured as care needs of a client"""
        stmt = select(CareType).join(
            ClientCareNeed, ClientCareNeed.care_type_code == CareType.code
        ).where(
            and_(ClientCareNeed.client_id == client_id, CareType.is_active.is_(True))
        ).order_by(CareType.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_care_service(self, code: str) -> Optional[CareType]:
        """Get an active care service by code"""
        stmt = select(CareType).where(CareType.code == code, CareType.is_active.is_(True))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_client(self, client_id: UUID) -> Optional[Client]:
        """Get active client by ID"""
        stmt = select(Client).where(Client.id == client_id, Client.is_active.is_(True))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_caregivers(self, agency_id: UUID) -> List[Caregiver]:
        """Active caregivers of an agency with their availability windows"""
        stmt = select(Caregiver).where(
            and_(Caregiver.agency_id == agency_id, Caregiver.is_active.is_(True))
        ).order_by(Caregiver.last_name, Caregiver.first_name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_caregiver(self, caregiver_id: UUID) -> Optional[Caregiver]:
        """Get active caregiver by ID"""
        stmt = select(Caregiver).where(Caregiver.id == caregiver_id, Caregiver.is_active.is_(True))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_order(self, order: ClientOrder) -> ClientOrder:
        """Create a new order"""
        self.db.add(order)
        await self._commit()
        await self.db.refresh(order)
        return order

    async def create_shifts(self, shifts: List[Shift]) -> None:
        """Insert a batch of shifts in one transaction"""
        self.db.add_all(shifts)
        await self._commit()

    async def get_order(self, order_id: UUID) -> Optional[ClientOrder]:
        """Get order by ID"""
        stmt = select(ClientOrder).where(ClientOrder.id == order_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_orders(
        self,
        agency_id: UUID,
        status: Optional[str] = None,
        search: Optional[str] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
    ) -> List[Tuple[ClientOrder, int]]:
        """
        List an agency's orders with their shift counts, newest first.

        Args:
            agency_id: Agency whose orders to list
            status: Filter by order status (optional)
            search: Case-insensitive match on order number or client name (optional)
            period_start: Only orders ending on or after this date (optional)
            period_end: Only orders starting on or before this date (optional)

        Returns:
            List of (order, shift_count)
        """
        shift_count = (
            select(func.count(Shift.id))
            .where(Shift.order_id == ClientOrder.id)
            .correlate(ClientOrder)
            .scalar_subquery()
        )
        stmt = select(ClientOrder, shift_count.label("shift_count")).where(
            ClientOrder.agency_id == agency_id
        )

        if status:
            stmt = stmt.where(ClientOrder.status == status)
        if search:
            pattern = f"%{search}%"
            client_name = func.concat(Client.first_name, " ", Client.last_name)
            stmt = stmt.outerjoin(Client, Client.id == ClientOrder.client_id).where(
                or_(ClientOrder.order_number.ilike(pattern), client_name.ilike(pattern))
            )
        if period_start:
            stmt = stmt.where(ClientOrder.end_date >= period_start)
        if period_end:
            stmt = stmt.where(ClientOrder.start_date <= period_end)

        stmt = stmt.order_by(ClientOrder.created_at.desc())
        result = await self.db.execute(stmt)
        return [(row[0], int(row[1])) for row in result.all()]

    async def get_order_shifts(self, order_id: UUID) -> List[Shift]:
        """Shifts of an order by date"""
        stmt = select(Shift).where(Shift.order_id == order_id).order_by(Shift.shift_date)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_order(self, order_id: UUID) -> bool:
        """Delete an order together with its shifts"""
        order = await self.get_order(order_id)
        if not order:
            return False
        await self.db.execute(delete(Shift).where(Shift.order_id == order_id))
        await self.db.delete(order)
        await self._commit()
        return True
