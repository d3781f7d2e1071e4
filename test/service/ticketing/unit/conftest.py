"""
Unit test configuration for ticketing service.

Overrides fixtures from parent conftest to enable pure unit testing
without infrastructure dependencies (database, HTTP app).

This module also prevents the session-scoped TestClient from being created.
"""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
import pytest


@pytest.fixture(autouse=True, scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """No-op override for unit tests - no real database needed"""
    yield


@pytest.fixture(scope='session')
def client() -> Generator[MagicMock, None, None]:
    """Mock client for unit tests - prevents TestClient/lifespan from being created"""
    mock_client = MagicMock(spec=TestClient)
    yield mock_client
