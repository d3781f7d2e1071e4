from abc import ABC, abstractmethod

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    """Event Command Repository - the only writer of an event's ticket counter"""

    @abstractmethod
    async def create_event(self, *, event_entity: EventEntity) -> EventEntity:
        """Persist a new event and return it with its assigned id"""
        pass

    @abstractmethod
    async def decrement_tickets_remaining(self, *, event_id: int, quantity: int) -> EventEntity:
        """
        Atomically check and lower the event's remaining tickets by `quantity`.

        The check and the write happen in a single transaction; on any failure
        nothing is written.

        Raises:
            EventNotFoundError: no event with this id
            InsufficientCapacityError: fewer than `quantity` tickets remain
            StorageError: the store failed (original error chained)
        """
        pass
