from datetime import datetime
from typing import TYPE_CHECKING, Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError, DomainError


if TYPE_CHECKING:
    from src.service.ticketing.app.interface.i_password_hasher import IPasswordHasher


def _normalize_email(value: str) -> str:
    return value.strip().lower() if isinstance(value, str) else value


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainError(f'User {attribute.name} cannot be empty')


@attrs.define
class UserEntity:
    email: str = attrs.field(converter=_normalize_email, validator=_validate_non_empty_string)
    first_name: str = attrs.field(validator=_validate_non_empty_string)
    last_name: str = attrs.field(validator=_validate_non_empty_string)
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    def set_password(self, plain_password: SecretStr, password_hasher: 'IPasswordHasher') -> None:
        """Set password using provided password hasher"""
        if not plain_password.get_secret_value():
            raise DomainError('Password cannot be empty')
        self.hashed_password = password_hasher.hash_password(plain_password=plain_password)

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise AuthenticationError('Invalid email or password')

        return user_entity
