"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr

from src.service.ticketing.domain.entity.user_entity import UserEntity


class RegisterRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'email': 'tiger@clemson.edu',
                'password': 'P@ssw0rd',
                'firstName': 'Tiger',
                'lastName': 'Paw',
            }
        },
    )

    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )
    first_name: str = Field(..., alias='firstName', min_length=1, max_length=100)
    last_name: str = Field(..., alias='lastName', min_length=1, max_length=100)


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: int = Field(..., alias='userId')


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'tiger@clemson.edu', 'password': 'P@ssw0rd'}}
    )

    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    first_name: str = Field(..., alias='firstName')
    last_name: str = Field(..., alias='lastName')

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
