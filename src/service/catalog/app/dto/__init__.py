"""Application layer DTOs"""

from src.service.catalog.app.dto.reservation_result import (
    RESERVATION_SUCCESS_MESSAGE,
    ReservationResult,
)

__all__ = ['RESERVATION_SUCCESS_MESSAGE', 'ReservationResult']
