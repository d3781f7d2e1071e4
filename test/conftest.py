"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database per test session
- Table cleanup between integration tests
- The session-scoped TestClient

Architecture:
- Unit tests (test/**/unit/): Override fixtures with no-ops in their own conftest.py
- Integration tests: Use the real SQLite database with cleanup after each test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time, so DATABASE_URL and friends must exist first
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_db_dir = Path(tempfile.mkdtemp(prefix='tigertix_test_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{test_db_dir / "test_database.sqlite"}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SECRET_KEY'] = 'test_secret_key'
    os.environ['GEMINI_API_KEY'] = 'test_gemini_key'
    os.environ.setdefault('PURCHASE_LOCK_TIMEOUT_SECONDS', '5')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import (  # noqa: E402
    Base,
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_sessionstart(session: pytest.Session) -> None:
    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # Runs before the test's own fixtures so their rows survive the wipe
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _setup_test_database() -> None:
    await drop_db_and_tables()
    await create_db_and_tables()
    await dispose_engine()


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL)
    try:
        async with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(table.delete())
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield
    await _clean_all_tables()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[Any, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
