from app.scheduling.repository import BookingRepository
from app.scheduling.service import BookingService
from app.scheduling.schemas import BookingDraft

__all__ = ["BookingRepository", "BookingService", "BookingDraft"]
