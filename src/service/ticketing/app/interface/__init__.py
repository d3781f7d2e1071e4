"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_chat_session_store import IChatSessionStore
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_llm_client import ILlmClient
from src.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from src.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IChatSessionStore',
    'IEventCommandRepo',
    'IEventQueryRepo',
    'ILlmClient',
    'IPasswordHasher',
    'IUserCommandRepo',
    'IUserQueryRepo',
]
