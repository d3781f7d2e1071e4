"""
JWT authentication (stateless, HS256 by default)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.ticketing.domain.entity.user_entity import UserEntity


INVALID_TOKEN_MESSAGE = 'Invalid authentication token'


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def create_jwt_token(self, user_entity: UserEntity, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': issued_at + self.token_expire,
            'iat': issued_at,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'first_name': user_entity.first_name,
            'last_name': user_entity.last_name,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Missing authentication token')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        email = payload.get('email')
        first_name = payload.get('first_name')
        last_name = payload.get('last_name')
        if not user_id or not email or not first_name or not last_name:
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)

        # Rebuild UserEntity from JWT payload (no DB query)
        return UserEntity(id=user_id, email=email, first_name=first_name, last_name=last_name)
