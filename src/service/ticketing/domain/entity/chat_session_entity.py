from typing import Optional

import attrs


CONFIRMATION_WORDS = ('yes', 'confirm')


@attrs.define(frozen=True)
class PendingBooking:
    event_id: int
    event_name: str
    quantity: int


@attrs.define
class ChatSession:
    """
    Booking assistant conversation state for one user.

    Holds at most one booking waiting for a "yes"/"confirm" reply.
    """

    session_key: str
    pending_booking: Optional[PendingBooking] = None

    @property
    def awaiting_confirmation(self) -> bool:
        return self.pending_booking is not None

    def propose(self, booking: PendingBooking) -> None:
        self.pending_booking = booking

    def take_pending(self) -> Optional[PendingBooking]:
        booking, self.pending_booking = self.pending_booking, None
        return booking

    @staticmethod
    def is_confirmation(message: str) -> bool:
        text = message.lower()
        return any(word in text for word in CONFIRMATION_WORDS)
