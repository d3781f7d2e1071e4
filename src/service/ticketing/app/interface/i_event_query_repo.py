from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    """Event Query Repository - lock-free reads of committed state"""

    @abstractmethod
    async def list_events(self) -> List[EventEntity]:
        pass

    @abstractmethod
    async def get_event(self, *, event_id: int) -> Optional[EventEntity]:
        pass
