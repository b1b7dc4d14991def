"""
rate_limit.py — Global rate limiter instance.

Uses slowapi (a Starlette-compatible wrapper around the `limits` library).
Requests are keyed by client IP address. Only /api/logs is limited: every
call there opens a fresh MySQL connection.

Usage in routes:
    from fastapi import Request
    from trashvision.core.rate_limit import limiter

    @router.get("/logs")
    @limiter.limit(settings.logs_rate_limit)
    async def get_logs(request: Request):
        ...
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
