from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_chat_session_store import IChatSessionStore
from src.service.ticketing.domain.entity.chat_session_entity import ChatSession


class InMemoryChatSessionStore(IChatSessionStore):
    """
    Process-local session store keyed by session key (the user id).

    Sessions are lost on restart, which only drops unconfirmed bookings.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, ChatSession] = {}

    async def get(self, *, session_key: str) -> ChatSession:
        session = self._sessions.get(session_key)
        if session is None:
            session = ChatSession(session_key=session_key)
            self._sessions[session_key] = session
            Logger.base.debug(f'💬 [CHAT] New session {session_key}')
        return session

    async def save(self, *, session: ChatSession) -> None:
        self._sessions[session.session_key] = session

    async def clear(self) -> None:
        self._sessions.clear()
