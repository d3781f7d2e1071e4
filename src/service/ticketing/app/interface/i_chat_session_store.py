from abc import ABC, abstractmethod

from src.service.ticketing.domain.entity.chat_session_entity import ChatSession


class IChatSessionStore(ABC):
    """Per-user booking assistant state"""

    @abstractmethod
    async def get(self, *, session_key: str) -> ChatSession:
        """Return the session for `session_key`, starting an empty one if needed"""
        pass

    @abstractmethod
    async def save(self, *, session: ChatSession) -> None:
        pass
