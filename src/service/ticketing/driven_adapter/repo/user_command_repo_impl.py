from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, StorageError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        try:
            async with self.session_factory() as session:
                user_model = UserModel(
                    email=user_entity.email,
                    hashed_password=user_entity.hashed_password,
                    first_name=user_entity.first_name,
                    last_name=user_entity.last_name,
                )

                session.add(user_model)
                await session.commit()
                await session.refresh(user_model)

                return self._model_to_entity(user_model)
        except IntegrityError as e:
            raise ConflictError(f'User with email {user_entity.email} already exists') from e
        except SQLAlchemyError as e:
            raise StorageError('Failed to create user') from e

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            hashed_password=user_model.hashed_password,
            created_at=user_model.created_at,
        )
