"""
Shared test doubles for the ticketing service.
"""

from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

import orjson

from src.platform.exception.exceptions import ExternalServiceError
from src.service.ticketing.app.interface.i_llm_client import ILlmClient
from src.service.ticketing.domain.entity.event_entity import EventEntity


def make_event(
    *,
    event_id: int = 1,
    name: str = 'Homecoming Game',
    tickets_remaining: int = 3,
    location: str = 'Memorial Stadium',
    days_ahead: int = 30,
) -> EventEntity:
    return EventEntity(
        id=event_id,
        name=name,
        starts_at=datetime.now(timezone.utc) + timedelta(days=days_ahead),
        location=location,
        tickets_remaining=tickets_remaining,
    )


def booking_answer(*, event_id: int, name: str, quantity: int) -> str:
    return orjson.dumps({'event': {'id': event_id, 'name': name, 'quantity': quantity}}).decode()


def error_answer(msg: str) -> str:
    return orjson.dumps({'error': {'msg': msg}}).decode()


class FakeLlmClient(ILlmClient):
    """Replays canned answers in order and records every prompt it was sent"""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers: deque[str] = deque(answers)
        self.prompts: list[str] = []
        self.failure: Optional[ExternalServiceError] = None

    def queue(self, *answers: str) -> None:
        self.answers.extend(answers)

    async def generate(self, *, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.failure is not None:
            raise self.failure
        if not self.answers:
            raise AssertionError('FakeLlmClient has no answer queued')
        return self.answers.popleft()
