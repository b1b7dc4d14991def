"""
TrashVision API — Application entry point.

Bootstraps FastAPI, wires up middleware, registers route groups, and
manages the dashboard poller lifecycle.

Extension points:
  - Add new route groups with app.include_router() below
  - Add new middleware in the middleware block
  - Change startup behaviour in the lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from trashvision.core.config import settings
from trashvision.core.database import DatabaseConfig, MissingConfigError
from trashvision.core.rate_limit import limiter
from trashvision.routes.dashboard import router as dashboard_router
from trashvision.routes.health import VERSION
from trashvision.routes.health import router as health_router
from trashvision.routes.logs import router as logs_router
from trashvision.services.poller import LogPoller

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Validate DB settings once, then run the dashboard poller until shutdown.

    Missing DB settings do not stop the server: /api/logs keeps answering
    with the 500 that names the missing key, and /health reports it.
    """
    logger.info("Starting TrashVision API (env: %s)", settings.environment)
    try:
        DatabaseConfig.from_settings(settings)
    except MissingConfigError as exc:
        logger.warning("%s. /api/logs will fail until it is set.", exc)

    app.state.poller = None
    if settings.dashboard_poll_enabled:
        app.state.poller = LogPoller(
            settings.dashboard_source_url,
            interval=settings.dashboard_poll_interval,
        )
        app.state.poller.start()

    yield

    logger.info("Shutting down TrashVision API")
    if app.state.poller is not None:
        await app.state.poller.stop()


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="TrashVision API",
    description="Trash sorting log feed and live dashboard.",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ─── Middleware ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(logs_router)
app.include_router(dashboard_router)


@app.get("/api", tags=["root"])
async def root():
    """API root — basic metadata."""
    return {
        "name": "TrashVision API",
        "version": VERSION,
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }


if __name__ == "__main__":
    uvicorn.run("trashvision.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
