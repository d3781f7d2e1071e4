from typing import AsyncContextManager, Callable

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import MAX_STORED_INTEGER, EventEntity
from src.service.ticketing.domain.ticketing_errors import (
    EventNotFoundError,
    InsufficientCapacityError,
)
from src.service.ticketing.driven_adapter.model.event_model import EventModel


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create_event(self, *, event_entity: EventEntity) -> EventEntity:
        try:
            async with self.session_factory() as session:
                event_model = EventModel(
                    name=event_entity.name,
                    starts_at=event_entity.starts_at.replace(tzinfo=None),
                    location=event_entity.location,
                    tickets_remaining=event_entity.tickets_remaining,
                )
                session.add(event_model)
                await session.commit()
                await session.refresh(event_model)

                return self._model_to_entity(event_model)
        except SQLAlchemyError as e:
            raise StorageError('Failed to create event') from e

    @Logger.io
    async def decrement_tickets_remaining(self, *, event_id: int, quantity: int) -> EventEntity:
        """
        Check-and-decrement as one conditional UPDATE inside one transaction.

        `session.begin()` commits on normal exit and rolls back on any exception,
        so a failed purchase never leaves a partial write behind.
        Ids and quantities beyond the INTEGER column range are never bound:
        no row has such an id and no counter covers such a quantity.
        """
        if event_id > MAX_STORED_INTEGER:
            raise EventNotFoundError(event_id)

        try:
            async with self.session_factory() as session, session.begin():
                sold = quantity <= MAX_STORED_INTEGER and await self._conditional_decrement(
                    session, event_id=event_id, quantity=quantity
                )
                if not sold:
                    available = await session.scalar(
                        select(EventModel.tickets_remaining).where(EventModel.id == event_id)
                    )
                    if available is None:
                        raise EventNotFoundError(event_id)
                    raise InsufficientCapacityError(
                        event_id=event_id, requested=quantity, available=available
                    )

                event_model = (
                    await session.execute(select(EventModel).where(EventModel.id == event_id))
                ).scalar_one()
                updated_event = self._model_to_entity(event_model)

            Logger.base.info(
                f'🎟️  [PURCHASE] Event {event_id}: -{quantity}, '
                f'{updated_event.tickets_remaining} remaining'
            )
            return updated_event
        except SQLAlchemyError as e:
            raise StorageError(f'Purchase for event {event_id} could not be committed') from e

    async def _conditional_decrement(
        self, session: AsyncSession, *, event_id: int, quantity: int
    ) -> bool:
        result = await session.execute(
            update(EventModel)
            .where(
                EventModel.id == event_id,
                EventModel.tickets_remaining >= quantity,
            )
            .values(tickets_remaining=EventModel.tickets_remaining - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    def _model_to_entity(self, event_model: EventModel) -> EventEntity:
        return EventEntity(
            id=event_model.id,
            name=event_model.name,
            starts_at=event_model.starts_at,
            location=event_model.location,
            tickets_remaining=event_model.tickets_remaining,
            created_at=event_model.created_at,
        )
