"""
User Query Use Cases (login + profile)
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from src.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.ticketing.domain.entity.user_entity import UserEntity


class UserQueryUseCase:
    def __init__(self, user_query_repo: IUserQueryRepo, password_hasher: IPasswordHasher) -> None:
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo, password_hasher=password_hasher)

    @Logger.io
    async def authenticate(self, *, email: str, password: SecretStr) -> UserEntity:
        user_entity = await self.user_query_repo.get_by_email(email)
        validated_user = UserEntity.validate_user_exists(user_entity)

        if not self.password_hasher.verify_password(
            plain_password=password, hashed_password=validated_user.hashed_password
        ):
            raise AuthenticationError('Invalid email or password')

        Logger.base.info(f'🔑 [LOGIN] User {validated_user.id} logged in')
        return validated_user

    @Logger.io
    async def get_profile(self, *, user_id: int) -> UserEntity:
        user_entity = await self.user_query_repo.get_by_id(user_id)
        if user_entity is None:
            # Token outlived the account
            raise AuthenticationError('Invalid authentication token')
        return user_entity
