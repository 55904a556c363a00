from collections.abc import Sequence
from typing import Any

from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from sre_server.db.errors import DataFetchError


async def fetch_mappings(
    session: AsyncSession, query: Select[Any], *, source: str
) -> Sequence[RowMapping]:
    """Run a read query, translating driver failures into ``DataFetchError``."""
    try:
        result = await session.execute(query)
    except (SQLAlchemyError, OSError) as exc:
        raise DataFetchError(source, exc) from exc
    return result.mappings().all()
