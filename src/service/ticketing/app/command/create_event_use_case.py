from datetime import datetime
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity


class CreateEventUseCase:
    def __init__(self, event_command_repo: IEventCommandRepo) -> None:
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_command_repo=event_command_repo)

    @Logger.io
    async def create_event(
        self, *, name: str, starts_at: datetime, location: str, capacity: int
    ) -> EventEntity:
        """Validate and persist a new event; capacity becomes its remaining tickets."""
        event_entity = EventEntity.create(
            name=name, starts_at=starts_at, location=location, capacity=capacity
        )

        created_event = await self.event_command_repo.create_event(event_entity=event_entity)

        Logger.base.info(
            f'✅ [CREATE_EVENT] Event {created_event.id} "{created_event.name}" '
            f'with {created_event.tickets_remaining} tickets'
        )
        return created_event
