from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.ticketing_errors import EventNotFoundError


class GetEventUseCase:
    def __init__(self, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> EventEntity:
        Logger.base.info(f'🎫 [GET_EVENT] Loading event {event_id}')

        event = await self.event_query_repo.get_event(event_id=event_id)

        if event is None:
            Logger.base.warning(f'⚠️ [GET_EVENT] Event {event_id} not found')
            raise EventNotFoundError(event_id)

        Logger.base.info(f'✅ [GET_EVENT] Found event {event_id}')
        return event
