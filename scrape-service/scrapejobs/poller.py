from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

from scrapejobs.models import FailedStatus, PendingStatus, RunStatus
from scrapejobs.status import poll_with_retry

logger = logging.getLogger("scrape-poller")


async def wait_for_run(
    poll: Callable[[], Awaitable[RunStatus]],
    *,
    interval_s: float = 5.0,
    timeout_s: float = 600.0,
) -> RunStatus:
    """Poll until the run is terminal or ``timeout_s`` elapses.

    The run itself is left untouched on timeout; the pending status is returned.
    """
    deadline = time.monotonic() + timeout_s
    logger.info("Polling started (interval=%ss, timeout=%ss)", interval_s, timeout_s)
    while True:
        status = await poll_with_retry(poll)
        if not isinstance(status, PendingStatus):
            if isinstance(status, FailedStatus):
                logger.warning("Run failed: %s", status.error)
            return status
        if time.monotonic() + interval_s > deadline:
            logger.info("Polling horizon reached, run still pending")
            return status
        await asyncio.sleep(interval_s)
