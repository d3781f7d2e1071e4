from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.register_user_use_case import RegisterUserUseCase
from src.service.ticketing.app.query.user_query_use_case import UserQueryUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.ticketing.driving_adapter.schema.user_schema import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)


# === API Router ===

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserEntity:
    """Current user from the `Authorization: Bearer <token>` header (no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(credentials.credentials if credentials else None)


@router.post('/register', status_code=status.HTTP_201_CREATED)
@Logger.io
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> RegisterResponse:
    user_entity = await use_case.register(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return RegisterResponse(message='User registered successfully', user_id=user_entity.id or 0)


@router.post('/login')
@Logger.io
@inject
async def login(
    request: LoginRequest,
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LoginResponse:
    user_entity = await use_case.authenticate(email=request.email, password=request.password)
    token = jwt_auth.create_jwt_token(user_entity)
    return LoginResponse(token=token, user=UserResponse.from_entity(user_entity))


@router.get('/profile')
@Logger.io
async def get_profile(
    email: Optional[str] = Query(None, description='Only succeeds when it matches the token'),
    current_user: UserEntity = Depends(get_current_user),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserResponse:
    if email is not None and email.strip().lower() != current_user.email:
        raise ForbiddenError('Access denied')

    user_entity = await use_case.get_profile(user_id=current_user.id or 0)
    return UserResponse.from_entity(user_entity)
