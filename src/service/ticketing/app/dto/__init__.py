"""Application layer DTOs"""

from src.service.ticketing.app.dto.booking_intent import BookingIntent

__all__ = [
    'BookingIntent',
]
