"""Booking intent DTO (what the assistant understood from a chat message)."""

from typing import Any, Optional

import attrs


@attrs.define(frozen=True)
class BookingIntent:
    """
    Either a resolved booking request (event + quantity) or an error message.

    Exactly one of `event_id` / `error` is set.
    """

    event_id: Optional[int] = None
    event_name: Optional[str] = None
    quantity: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_booking(self) -> bool:
        return self.error is None and self.event_id is not None

    @classmethod
    def failed(cls, message: str) -> 'BookingIntent':
        return cls(error=message)

    def to_dict(self) -> dict[str, Any]:
        if self.is_booking:
            return {
                'event': {'id': self.event_id, 'name': self.event_name, 'quantity': self.quantity}
            }
        return {'error': {'msg': self.error}}
