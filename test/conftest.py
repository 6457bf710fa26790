"""
Test Configuration and Fixtures

- Unit tests (test/**/unit/): repositories replaced by AsyncMock, no database
- Integration tests: a SQLite file database, recreated for every test
- HTTP tests: FastAPI TestClient over the production app, cookie auth with
  tokens minted by JwtAuth
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = Path(tempfile.gettempdir()) / f'box_office_test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_path}'
    os.environ['AUTO_CREATE_TABLES'] = 'true'
    os.environ['EMAIL_BACKEND'] = 'mock'
    os.environ['DEBUG'] = 'false'
    # Concurrency tests make writers queue on the SQLite lock
    os.environ['TRANSACTION_MAX_ATTEMPTS'] = '10'
    os.environ['TRANSACTION_RETRY_BACKOFF'] = '0.01'
    os.environ['DELIVERY_RETRY_DELAY'] = '0'


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.db_setting import Base  # noqa: E402
import src.service.box_office.driven_adapter.model  # noqa: E402, F401


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _reset_database() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


@pytest.fixture
async def clean_database() -> AsyncGenerator[None, None]:
    """Empty schema for async integration tests"""
    await _reset_database()
    yield


# =============================================================================
# HTTP Client
# =============================================================================
@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    # Sync tests only: no event loop is running here yet
    asyncio.run(_reset_database())

    from src.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# =============================================================================
# Load BDD steps and shared fixtures
# =============================================================================
from test.bdd_steps_loader import *  # noqa: E402, F401, F403
from test.fixture_loader import *  # noqa: E402, F401, F403


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if '/unit/' in str(item.path).replace('\\', '/'):
            item.add_marker(pytest.mark.unit)
