"""
Booking Assistant Use Case

Two-step chat booking: a message is parsed into a pending booking, and the
user's next message either confirms it ("yes" / "confirm") or drops it.
The conversation state lives in a ChatSession per user, never in globals.
"""

from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.purchase_tickets_use_case import PurchaseTicketsUseCase
from src.service.ticketing.app.interface.i_chat_session_store import IChatSessionStore
from src.service.ticketing.app.query.parse_booking_request_use_case import (
    ParseBookingRequestUseCase,
)
from src.service.ticketing.domain.entity.chat_session_entity import ChatSession, PendingBooking
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.ticketing_errors import (
    EventNotFoundError,
    InsufficientCapacityError,
    PurchaseTimeoutError,
)


NOT_CONFIRMED_REPLY = 'Reservation not confirmed. Let me know if you want to book something else.'


@attrs.define(frozen=True)
class AssistantReply:
    reply: str
    pending_booking: Optional[PendingBooking] = None
    purchased_event: Optional[EventEntity] = None


class BookingAssistantUseCase:
    def __init__(
        self,
        chat_session_store: IChatSessionStore,
        parse_booking_request_use_case: ParseBookingRequestUseCase,
        purchase_tickets_use_case: PurchaseTicketsUseCase,
    ) -> None:
        self.chat_session_store = chat_session_store
        self.parse_booking_request_use_case = parse_booking_request_use_case
        self.purchase_tickets_use_case = purchase_tickets_use_case

    @classmethod
    @inject
    def depends(
        cls,
        chat_session_store: IChatSessionStore = Depends(Provide[Container.chat_session_store]),
        parse_booking_request_use_case: ParseBookingRequestUseCase = Depends(
            ParseBookingRequestUseCase.depends
        ),
        purchase_tickets_use_case: PurchaseTicketsUseCase = Depends(
            PurchaseTicketsUseCase.depends
        ),
    ) -> Self:
        return cls(
            chat_session_store=chat_session_store,
            parse_booking_request_use_case=parse_booking_request_use_case,
            purchase_tickets_use_case=purchase_tickets_use_case,
        )

    @Logger.io
    async def handle_message(self, *, session_key: str, message: str) -> AssistantReply:
        session = await self.chat_session_store.get(session_key=session_key)

        if session.awaiting_confirmation:
            return await self._answer_pending(session, message)

        intent = await self.parse_booking_request_use_case.parse(message=message)
        if not intent.is_booking:
            return AssistantReply(reply=intent.error or '')

        booking = PendingBooking(
            event_id=intent.event_id,  # type: ignore[arg-type]
            event_name=intent.event_name or '',
            quantity=intent.quantity,  # type: ignore[arg-type]
        )
        session.propose(booking)
        await self.chat_session_store.save(session=session)

        Logger.base.info(f'💬 [ASSISTANT] Session {session_key} awaiting confirmation: {booking}')
        return AssistantReply(
            reply=(
                f'To confirm your reservation for {booking.quantity} ticket(s) to '
                f'{booking.event_name}, please respond with "yes" or "confirm".'
            ),
            pending_booking=booking,
        )

    async def _answer_pending(self, session: ChatSession, message: str) -> AssistantReply:
        # The pending booking is consumed whatever the answer is
        booking = session.take_pending()
        await self.chat_session_store.save(session=session)

        if booking is None or not ChatSession.is_confirmation(message):
            Logger.base.info(f'💬 [ASSISTANT] Session {session.session_key} declined booking')
            return AssistantReply(reply=NOT_CONFIRMED_REPLY)

        try:
            event = await self.purchase_tickets_use_case.purchase(
                event_id=booking.event_id, quantity=booking.quantity
            )
        except (EventNotFoundError, InsufficientCapacityError, PurchaseTimeoutError) as e:
            return AssistantReply(reply=f'Sorry, your reservation failed: {e.message}')

        return AssistantReply(
            reply=(
                f'Reservation confirmed: {booking.quantity} ticket(s) to {event.name}. '
                f'{event.tickets_remaining} ticket(s) left.'
            ),
            purchased_event=event,
        )
