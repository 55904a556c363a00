from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio

import sre_server.config as config_module
import sre_server.db.session as session_module
from sre_server.db.session import Database
from sre_server.db.session import init_database as _init_database
from sre_server.db.tables import Base


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> None:
    config_module.get_settings.cache_clear()


@pytest_asyncio.fixture
async def sqlite_db(tmp_path: Path) -> AsyncIterator[Database]:
    db_path = tmp_path / "server-test.db"
    db = _init_database(f"sqlite+aiosqlite:///{db_path}")
    await db.connect()
    await db.create_tables()
    try:
        yield db
    finally:
        await db.disconnect()
        session_module._database = None  # type: ignore[attr-defined]


@pytest.fixture
def seed(sqlite_db: Database) -> Callable[..., Awaitable[None]]:
    """Insert ORM rows in one committed session."""

    async def _seed(*rows: Base) -> None:
        async with sqlite_db.session() as session:
            session.add_all(rows)
            await session.commit()

    return _seed
