"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.state.keyed_lock import KeyedLock
from src.service.ticketing.driven_adapter.llm.gemini_llm_client import GeminiLlmClient
from src.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.ticketing.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.ticketing.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.ticketing.driven_adapter.state.in_memory_chat_session_store import (
    InMemoryChatSessionStore,
)
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (sessions come from the global AsyncEngineManager)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call)
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )

    # Per-event purchase serialization (one lock per event id, process-wide)
    purchase_lock = providers.Singleton(KeyedLock)

    # Auth
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Booking assistant
    llm_client = providers.Singleton(
        GeminiLlmClient,
        api_key=config_service.provided.GEMINI_API_KEY,
        model=config_service.provided.LLM_MODEL,
        base_url=config_service.provided.LLM_BASE_URL,
        timeout=config_service.provided.LLM_TIMEOUT_SECONDS,
    )
    chat_session_store = providers.Singleton(InMemoryChatSessionStore)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
