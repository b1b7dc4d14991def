"""
logs.py — GET /api/logs, the raw trash log feed.

Returns every row of trash_log joined with its trash type and bin, newest
first. This is what the dashboard poller consumes, and it is safe to call
from anything else that wants the raw events.

Responses:
  200  [{trash_id, trash_name, bin_id, bin_name, time_stamp, correct}, ...]
  500  {"error": "Missing environment variable: host"}  (or port, user,
                                                         password, database)
  500  {"error": "Failed to fetch logs"}                 (connection / query)

Error bodies use the `error` key, not FastAPI's usual `detail`.

Manual test:
  curl http://localhost:8000/api/logs
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from trashvision.core.config import settings
from trashvision.core.database import MissingConfigError
from trashvision.core.rate_limit import limiter
from trashvision.models.trash_log import ErrorResponse, TrashEvent
from trashvision.services.log_query import (
    LogQueryError,
    LogQueryService,
    get_log_query_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["logs"])


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())


@router.get(
    "/logs",
    response_model=list[TrashEvent],
    responses={500: {"model": ErrorResponse}},
    summary="List every logged disposal, newest first",
)
@limiter.limit(settings.logs_rate_limit)
async def list_logs(
    request: Request,
    service: LogQueryService = Depends(get_log_query_service),
):
    try:
        return await service.list_events()
    except MissingConfigError as exc:
        logger.error("Cannot query trash log: %s", exc)
        return _error(str(exc))
    except LogQueryError:
        # Cause already logged with traceback by the service
        return _error("Failed to fetch logs")
