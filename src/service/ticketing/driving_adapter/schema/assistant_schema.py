from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.ticketing.app.command.booking_assistant_use_case import AssistantReply
from src.service.ticketing.driving_adapter.schema.event_schema import EventResponse


class AssistantMessageRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'message': 'Book 2 tickets for the homecoming game'}}
    )

    message: str = Field(..., min_length=1, max_length=2000)


class PendingBookingResponse(BaseModel):
    event_id: int
    event_name: str
    quantity: int


class AssistantMessageResponse(BaseModel):
    reply: str
    pending_booking: Optional[PendingBookingResponse] = None
    purchased_event: Optional[EventResponse] = None

    @classmethod
    def from_reply(cls, assistant_reply: AssistantReply) -> 'AssistantMessageResponse':
        pending = assistant_reply.pending_booking
        purchased = assistant_reply.purchased_event
        return cls(
            reply=assistant_reply.reply,
            pending_booking=(
                PendingBookingResponse(
                    event_id=pending.event_id,
                    event_name=pending.event_name,
                    quantity=pending.quantity,
                )
                if pending
                else None
            ),
            purchased_event=EventResponse.from_entity(purchased) if purchased else None,
        )
