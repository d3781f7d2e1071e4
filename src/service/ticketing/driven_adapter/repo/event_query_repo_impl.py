from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import MAX_STORED_INTEGER, EventEntity
from src.service.ticketing.driven_adapter.model.event_model import EventModel


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def list_events(self) -> List[EventEntity]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(EventModel).order_by(EventModel.starts_at, EventModel.id)
                )
                return [self._model_to_entity(event_model) for event_model in result.scalars()]
        except SQLAlchemyError as e:
            raise StorageError('Event store unavailable') from e

    @Logger.io
    async def get_event(self, *, event_id: int) -> Optional[EventEntity]:
        if not 1 <= event_id <= MAX_STORED_INTEGER:
            return None

        try:
            async with self.session_factory() as session:
                event_model = await session.get(EventModel, event_id)
                if not event_model:
                    return None

                return self._model_to_entity(event_model)
        except SQLAlchemyError as e:
            raise StorageError('Event store unavailable') from e

    def _model_to_entity(self, event_model: EventModel) -> EventEntity:
        return EventEntity(
            id=event_model.id,
            name=event_model.name,
            starts_at=event_model.starts_at,
            location=event_model.location,
            tickets_remaining=event_model.tickets_remaining,
            created_at=event_model.created_at,
        )
