from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(UserModel).where(UserModel.email == email.strip().lower())
                )
                user_model = result.scalar_one_or_none()

                if not user_model:
                    return None

                return self._model_to_entity(user_model)
        except SQLAlchemyError as e:
            raise StorageError('User store unavailable') from e

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(UserModel).where(UserModel.id == user_id))
                user_model = result.scalar_one_or_none()

                if not user_model:
                    return None

                return self._model_to_entity(user_model)
        except SQLAlchemyError as e:
            raise StorageError('User store unavailable') from e

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            hashed_password=user_model.hashed_password,
            created_at=user_model.created_at,
        )
