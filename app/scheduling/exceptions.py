"""Custom exceptions for care order scheduling"""
from uuid import UUID
from typing import List
from fastapi import HTTPException, status


class IncompleteBookingException(HTTPException):
    """Raised when an order is submitted before every required booking field is set"""
    def __init__(self, missing_fields: List[str]):
        self.missing_fields = missing_fields
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Please complete all required fields: {', '.join(missing_fields)}"
        )


class NoShiftDatesProducedException(HTTPException):
    """Raised when the booking's date range contains no day matching the chosen weekday"""
    def __init__(self, day_name: str, cadence: str):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"No {day_name} falls within the {cadence} booking period; choose a start date on a {day_name}"
        )


class PartialBookingFailureException(HTTPException):
    """Raised when the order was stored but its shifts could not be"""
    def __init__(self, order_id: UUID, reason: str = None):
        self.order_id = order_id
        detail = f"Order {order_id} was created but its shifts could not be saved"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class ClientNotFoundException(HTTPException):
    """Raised when a client is not found or inactive"""
    def __init__(self, client_id: UUID):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client {client_id} not found"
        )


class ClientZipCodeMissingException(HTTPException):
    """Raised when a client has no service zip code to match caregivers against"""
    def __init__(self, client_id: UUID):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Client {client_id} has no zip code"
        )


class CaregiverNotFoundException(HTTPException):
    """Raised when a caregiver is not found, inactive, or outside the client's agency"""
    def __init__(self, caregiver_id: UUID):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Caregiver {caregiver_id} not found"
        )


class CareServiceNotFoundException(HTTPException):
    """Raised when a care service code is unknown or inactive"""
    def __init__(self, code: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Care service '{code}' not found or inactive"
        )


class OrderNotFoundException(HTTPException):
    """Raised when an order is not found"""
    def __init__(self, order_id: UUID):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order {order_id} not found"
        )


class InvalidDayOfWeekException(HTTPException):
    """Raised when a day index is outside 0 (Sunday) .. 6 (Saturday)"""
    def __init__(self, day_of_week: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid day of week '{day_of_week}'. Must be 0 (Sunday) to 6 (Saturday)"
        )


class InvalidTimeSlotException(HTTPException):
    """Raised when a requested start time is not in the slot catalog"""
    def __init__(self, reason: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=reason)
