"""
log_query.py — Reads the trash log from MySQL.

One operation: LogQueryService.list_events(). Each call

  1. validates the DB_* settings (MissingConfigError names the missing one),
  2. opens a single connection (no pooling),
  3. runs the fixed three-table join, newest event first,
  4. materialises every row into TrashEvent models,
  5. closes the connection, on the failure path too.

Any failure after the settings check becomes LogQueryError, including
errors from outside the driver's own exception hierarchy.
Callers get either the full list or an exception, never a partial list.

USAGE
─────
    service = LogQueryService(settings)
    events = await service.list_events()
"""

import logging
from typing import Any, Callable

import aiomysql
from pydantic import TypeAdapter

from trashvision.core.config import Settings, settings
from trashvision.core.database import DatabaseConfig, open_connection
from trashvision.models.trash_log import TrashEvent

logger = logging.getLogger(__name__)

LIST_EVENTS_SQL = """
    SELECT t.trash_id, t.trash_name, b.bin_id, b.bin_name, l.time_stamp, l.correct
    FROM trash_log l
    JOIN trash t ON l.trash_id = t.trash_id
    JOIN bin b ON l.bin_id = b.bin_id
    ORDER BY l.time_stamp DESC
"""

_events_adapter = TypeAdapter(list[TrashEvent])


class LogQueryError(Exception):
    """Connecting to the store or running the log query failed."""


class LogQueryService:
    def __init__(
        self,
        settings: Settings,
        connect: Callable[..., Any] = aiomysql.connect,
    ):
        self._settings = settings
        self._connect = connect

    async def list_events(self) -> list[TrashEvent]:
        """
        Return every logged event, ordered by time_stamp descending.

        Raises:
            MissingConfigError: a DB_* setting is absent; no I/O attempted.
            LogQueryError:      anything failed once connecting began.
        """
        config = DatabaseConfig.from_settings(self._settings)

        try:
            async with open_connection(config, connect=self._connect) as conn:
                async with conn.cursor(aiomysql.DictCursor) as cur:
                    await cur.execute(LIST_EVENTS_SQL)
                    rows = await cur.fetchall()
            events = _events_adapter.validate_python(list(rows))
        except Exception as exc:
            logger.exception("Database connection or query failed: %s", exc)
            raise LogQueryError("Failed to fetch logs") from exc

        logger.debug("Fetched %d trash log rows", len(events))
        return events


def get_log_query_service() -> LogQueryService:
    """
    FastAPI dependency — inject the query service into route handlers.

    Tests replace it through app.dependency_overrides.
    """
    return LogQueryService(settings)
