# tests/integration/conftest.py
# PostgreSQL via TestContainers for repository tests.
# - One container per session; schema recreated from the shared MetaData per test.
# - Skips the whole directory when Docker is not reachable.

from typing import AsyncIterator, Iterator

import pytest  # type: ignore[import-not-found]
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from configapi.db.base import _to_asyncpg_url, metadata
import configapi.models.pages_table  # noqa: F401  (registers table)
import configapi.models.widgets_table  # noqa: F401  (registers table)
from postgres_container import start_postgres  # sibling module; pytest puts this dir on sys.path


def pytest_collection_modifyitems(items):
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def postgres_url() -> Iterator[str]:
    postgres = pytest.importorskip("testcontainers.postgres", reason="testcontainers is not installed")
    container = start_postgres(postgres)
    try:
        yield _to_asyncpg_url(container.get_connection_url())
    finally:
        container.stop()


@pytest_asyncio.fixture
async def engine(postgres_url: str) -> AsyncIterator[AsyncEngine]:
    # NullPool: connections never outlive the test's event loop
    eng = create_async_engine(postgres_url, poolclass=NullPool)
    async with eng.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    async with factory() as s:
        yield s
