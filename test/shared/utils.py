from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    ADMIN_EVENT_CREATE,
    USER_LOGIN,
    USER_REGISTER,
)
from test.constants import (
    DEFAULT_CAPACITY,
    DEFAULT_EVENT_NAME,
    DEFAULT_LOCATION,
    DEFAULT_PASSWORD,
    TEST_FIRST_NAME,
    TEST_LAST_NAME,
)


def future_iso(days: int = 30) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_event(
    client: TestClient,
    *,
    name: str = DEFAULT_EVENT_NAME,
    capacity: int = DEFAULT_CAPACITY,
    location: str = DEFAULT_LOCATION,
    days_ahead: int = 30,
) -> Dict[str, Any]:
    response = client.post(
        ADMIN_EVENT_CREATE,
        json={
            'name': name,
            'datetime': future_iso(days_ahead),
            'location': location,
            'capacity': capacity,
        },
    )
    assert_response_status(response, 201, 'Failed to create event')
    return response.json()


def register_user(
    client: TestClient,
    email: str,
    password: str = DEFAULT_PASSWORD,
    first_name: str = TEST_FIRST_NAME,
    last_name: str = TEST_LAST_NAME,
) -> Dict[str, Any]:
    response = client.post(
        USER_REGISTER,
        json={
            'email': email,
            'password': password,
            'firstName': first_name,
            'lastName': last_name,
        },
    )
    assert_response_status(response, 201, f'Failed to register {email}')
    return response.json()


def login_user(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> str:
    """Log in and return the bearer token."""
    response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert_response_status(response, 200, f'Login failed for {email}')
    return response.json()['token']


def auth_headers(token: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {token}'}
