"""
Parse Booking Request Use Case

Turns a free-text chat message into a BookingIntent by asking the LLM to pick
an event from the current event list. The model's answer is never trusted
as-is: the event reference is resolved against the store and the quantity
is re-validated.
"""

import re
from typing import Any, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import orjson

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, ExternalServiceError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.booking_intent import BookingIntent
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_llm_client import ILlmClient
from src.service.ticketing.domain.entity.event_entity import EventEntity


BOOKING_PROMPT = """You are the TigerTix booking assistant for campus events.
Read the user's message and decide which event they want tickets for and how many.

Respond with JSON only, no markdown, in exactly one of these shapes:
{"event": {"id": <event id from the list>, "name": "<event name>", "quantity": <tickets>}}
{"error": {"msg": "<short message for the user>"}}

Use the error shape when the message is not a booking request, names no event from
the list, or does not say how many tickets (assume 1 only if they say "a ticket").

Events (id | name | datetime | location | tickets remaining):
"""

UNKNOWN_EVENT_MESSAGE = 'Sorry, I could not find that event. Please pick one from the list.'
INVALID_QUANTITY_MESSAGE = 'Please tell me how many tickets you would like.'
NOT_UNDERSTOOD_MESSAGE = 'Sorry, I did not understand that request.'

_CODE_FENCE_PATTERN = re.compile(r'^\s*```(?:json)?\s*|\s*```\s*$', re.IGNORECASE)


class ParseBookingRequestUseCase:
    def __init__(self, event_query_repo: IEventQueryRepo, llm_client: ILlmClient) -> None:
        self.event_query_repo = event_query_repo
        self.llm_client = llm_client

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        llm_client: ILlmClient = Depends(Provide[Container.llm_client]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, llm_client=llm_client)

    @Logger.io
    async def parse(self, *, message: str) -> BookingIntent:
        if not message or not message.strip():
            raise DomainError('Message cannot be empty')

        events = await self.event_query_repo.list_events()
        raw_answer = await self.llm_client.generate(prompt=self.build_prompt(message, events))
        intent = self.to_intent(raw_answer, events)

        Logger.base.info(f'🤖 [LLM_PARSE] {intent.to_dict()}')
        return intent

    @staticmethod
    def build_prompt(message: str, events: List[EventEntity]) -> str:
        event_lines = '\n'.join(
            f'{event.id} | {event.name} | {event.starts_at.isoformat()} | '
            f'{event.location} | {event.tickets_remaining}'
            for event in events
        )
        return f'{BOOKING_PROMPT}{event_lines or "(no events)"}\n\nUser message: {message.strip()}'

    @classmethod
    def to_intent(cls, raw_answer: str, events: List[EventEntity]) -> BookingIntent:
        try:
            answer = orjson.loads(_CODE_FENCE_PATTERN.sub('', raw_answer))
        except orjson.JSONDecodeError as e:
            raise ExternalServiceError('Booking assistant returned an unreadable answer') from e

        if not isinstance(answer, dict):
            raise ExternalServiceError('Booking assistant returned an unreadable answer')

        if isinstance(error := answer.get('error'), dict):
            return BookingIntent.failed(str(error.get('msg') or NOT_UNDERSTOOD_MESSAGE))

        booking = answer.get('event')
        if not isinstance(booking, dict):
            return BookingIntent.failed(NOT_UNDERSTOOD_MESSAGE)

        event = cls._resolve_event(booking, events)
        if event is None:
            return BookingIntent.failed(UNKNOWN_EVENT_MESSAGE)

        quantity = cls._as_positive_int(booking.get('quantity'))
        if quantity is None:
            return BookingIntent.failed(INVALID_QUANTITY_MESSAGE)

        return BookingIntent(event_id=event.id, event_name=event.name, quantity=quantity)

    @classmethod
    def _resolve_event(
        cls, booking: dict[str, Any], events: List[EventEntity]
    ) -> Optional[EventEntity]:
        event_id = cls._as_positive_int(booking.get('id'))
        if event_id is not None:
            for event in events:
                if event.id == event_id:
                    return event

        name = booking.get('name')
        if isinstance(name, str) and name.strip():
            wanted = name.strip().casefold()
            for event in events:
                if event.name.casefold() == wanted:
                    return event
        return None

    @staticmethod
    def _as_positive_int(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, int) and value >= 1:
            return value
        return None
