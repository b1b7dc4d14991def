"""
poller.py — Keeps the dashboard's copy of the trash log fresh.

HOW THE DATA FLOWS
──────────────────
1. LogPoller.start() fetches GET /api/logs once, then again every
   `interval` seconds (5 by default).
2. Each successful fetch replaces DashboardState.events wholesale; there
   is no merging or diffing.
3. The dashboard routes read DashboardState on every request and derive
   counters and page slices from it (see aggregation.py).

Failure policy: a non-2xx status, network error or malformed body is
logged and swallowed. The previous snapshot stays on screen and the
loading flag is cleared; the next tick is the only retry.

Ticks do not wait for each other. If a fetch is slower than the interval,
two can be in flight at once and whichever completes last wins.
stop() only cancels the timer. Fetches already in flight are allowed
to finish before the HTTP client is closed.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import httpx
from pydantic import TypeAdapter

from trashvision.models.trash_log import TrashEvent

logger = logging.getLogger(__name__)

_events_adapter = TypeAdapter(list[TrashEvent])


@dataclass
class DashboardState:
    """
    Everything the dashboard view owns.

    Transitions:
      apply_snapshot(events, at)  loading -> ready, events replaced
      mark_fetch_failed()         loading cleared, nothing else touched
    """

    loading: bool = True
    events: tuple[TrashEvent, ...] = ()
    last_refresh: Optional[datetime] = None
    failures: int = field(default=0, repr=False)

    @property
    def status(self) -> str:
        return "loading" if self.loading else "ready"

    def apply_snapshot(self, events: list[TrashEvent], at: datetime) -> None:
        self.events = tuple(events)
        self.last_refresh = at
        self.loading = False

    def mark_fetch_failed(self) -> None:
        self.failures += 1
        self.loading = False


class LogPoller:
    def __init__(
        self,
        source_url: str,
        interval: float = 5.0,
        state: DashboardState | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.source_url = source_url
        self.interval = interval
        self.state = state or DashboardState()
        self._client = client
        self._owns_client = client is None
        self._timer: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def refresh(self) -> bool:
        """
        Run one fetch-and-replace cycle. Returns True when state was updated.

        Never raises for HTTP or payload problems.
        """
        client = self._ensure_client()
        try:
            response = await client.get(self.source_url)
            response.raise_for_status()
            events = _events_adapter.validate_python(response.json())
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Error fetching logs: HTTP %s: %s",
                exc.response.status_code,
                exc.response.text[:200],
            )
        except httpx.HTTPError as exc:
            logger.error("Error fetching logs: %s", exc)
        except ValueError as exc:  # bad JSON or ValidationError
            logger.error("Error fetching logs: malformed payload: %s", exc)
        else:
            self.state.apply_snapshot(events, datetime.now())
            logger.debug("Dashboard refreshed with %d events", len(events))
            return True

        self.state.mark_fetch_failed()
        return False

    def start(self) -> None:
        """Fetch now, then keep fetching every `interval` seconds."""
        if self.running:
            return
        self._ensure_client()
        self._timer = asyncio.create_task(self._tick_forever(), name="log-poller")
        logger.info("Polling %s every %.1fs", self.source_url, self.interval)

    async def stop(self) -> None:
        """Cancel the timer, let in-flight fetches finish, close the client."""
        if self._timer is not None:
            self._timer.cancel()
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
            self._timer = None

        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.info("Log poller stopped")

    async def _tick_forever(self) -> None:
        while True:
            task = asyncio.create_task(self.refresh())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            await asyncio.sleep(self.interval)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=10.0)
        return self._client
