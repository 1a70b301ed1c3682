"""
Storage
=======

Async PostgreSQL access through a lazily created, process-wide SQLAlchemy
engine. Each query acquires a pooled connection and releases it on exit.
"""

from typing import Any, Sequence

import structlog
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from nl_postgres.config import Settings, get_settings
from nl_postgres.models import ResultRow

logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """A failure reported by the storage engine."""

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.sqlstate = sqlstate


class Database:
    """Thin async query interface over a pooled SQLAlchemy engine."""

    def __init__(
        self,
        url: str,
        command_timeout: float | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        self.url = url
        self.command_timeout = command_timeout
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        """The engine, created on first access."""
        if self._engine is None:
            connect_args = {}
            if self.command_timeout:
                connect_args["command_timeout"] = self.command_timeout
            self._engine = create_async_engine(
                self.url,
                pool_pre_ping=True,
                connect_args=connect_args,
            )
            logger.info("Created database engine", host=self._engine.url.host)
        return self._engine

    async def query(self, sql: str, params: Sequence[Any] | None = None) -> list[ResultRow]:
        """
        Execute a statement verbatim and return its rows as dicts.

        The statement goes to the driver as-is; positional parameters use the
        driver's ``$1`` style.

        Raises:
            StorageError: If the driver reports any failure
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.exec_driver_sql(sql, tuple(params) if params else None)
                return [dict(row._mapping) for row in result]
        except DBAPIError as e:
            orig = e.orig
            sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
            raise StorageError(str(orig) if orig is not None else str(e), sqlstate=sqlstate) from e

    async def dispose(self) -> None:
        """Close every pooled connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None


_database: Database | None = None


def get_database(settings: Settings | None = None) -> Database:
    """Return the process-wide database, creating it on first use."""
    global _database
    if _database is None:
        settings = settings or get_settings()
        _database = Database(
            settings.database_url,
            command_timeout=settings.QUERY_TIMEOUT_SECONDS,
        )
    return _database


async def close_database() -> None:
    """Dispose the process-wide database, if it was created."""
    global _database
    if _database is not None:
        await _database.dispose()
        _database = None
