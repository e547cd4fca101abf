"""
Core pytest configuration for the entire test suite.

Only the database setup and the logging installation live here; domain
fixtures (repositories, sample payloads, the HTTP client) are defined in
`tests/test_fixtures/` and imported at the bottom of this module so every test
package can use them without imports.
"""
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# Set noisy third-party loggers before importing modules that may configure them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "faker",
    "faker.factory",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from backend_store.config import get_settings
from backend_store.core.logging.builder import setup_logging
from backend_store.database.base import Base
from backend_store.database.session import build_session_maker, create_engine_from_url
from backend_store import models  # noqa: F401  registers every table on Base.metadata

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application logging once for the session, then re-attach
    pytest's capture handler (dictConfig removes it) so `caplog` keeps working.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


def safe_log_db_url(db_url: str) -> str:
    """Drop credentials from `db_url` before it is logged."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. `TEST_DATABASE_URL` (CI override, e.g. a throwaway Postgres)
    2. the app URL when `TESTING=true` and `TEST_POSTGRES_DB` is set
    3. in-memory SQLite
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL
    return "sqlite+aiosqlite://"


TEST_DATABASE_URL = get_test_database_url()
logger.info("tests.database", extra={"url": safe_log_db_url(TEST_DATABASE_URL)})


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test. In-memory SQLite runs on a single shared
    connection with foreign keys enforced (see `create_engine_from_url`).
    """
    engine = create_engine_from_url(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(async_engine)


@pytest.fixture()
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
        await session.rollback()


# Domain fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    client_repository,
    supplier_repository,
    user_repository,
    product_repository,
    address_repository,
    contact_repository,
    supplier_category_repository,
    user_category_repository,
    product_category_repository,
    supplier_category_relations,
    product_category_relations,
    supplier_contact_relations,
    sample_client_data,
    create_client,
    created_supplier,
    created_user,
    created_product,
    supplier_categories,
    user_categories,
    product_category,
)
from .test_fixtures.api_fixtures import app, api_client  # noqa: E402
