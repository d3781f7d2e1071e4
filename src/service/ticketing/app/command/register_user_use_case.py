"""
User Registration Use Case
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from src.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.ticketing.domain.entity.user_entity import UserEntity


class RegisterUserUseCase:
    def __init__(
        self, user_command_repo: IUserCommandRepo, password_hasher: IPasswordHasher
    ) -> None:
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def register(
        self, *, email: str, password: SecretStr, first_name: str, last_name: str
    ) -> UserEntity:
        user_entity = UserEntity(email=email, first_name=first_name, last_name=last_name)
        user_entity.set_password(password, self.password_hasher)

        created_user = await self.user_command_repo.create(user_entity)
        Logger.base.info(f'👤 [REGISTER] User {created_user.id} registered')
        return created_user
