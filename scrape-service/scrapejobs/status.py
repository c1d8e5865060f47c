"""Run status resolution.

Every poll re-reads the run from the external platform and maps it onto
``pending | complete | failed``. Nothing is cached between calls, so polling
the same run concurrently from several places is safe.

Transport failures raise ``PollTransportError`` instead of producing a
``FailedStatus``: the run may still be executing and the caller should retry.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional

from scrapejobs.clients import ActorPlatformClient, TaskPlatformClient
from scrapejobs.config import settings
from scrapejobs.errors import PollTransportError
from scrapejobs.models import CompleteStatus, FailedStatus, PendingStatus, RunHandle, RunStatus


logger = logging.getLogger("scrape-status")

TASK_SUCCESS_STATES = frozenset({"COMPLETED"})
TASK_FAILURE_STATES = frozenset(
    {"FAILED", "CRASHED", "INTERRUPTED", "SYSTEM_FAILURE", "EXPIRED", "TIMED_OUT", "CANCELED"}
)
TASK_FAILED_MESSAGE = "Task execution failed"
TASK_CANCELED_MESSAGE = "Task was canceled"

ACTOR_SUCCESS_STATES = frozenset({"SUCCEEDED"})
ACTOR_FAILURE_STATES = frozenset({"FAILED", "TIMED-OUT", "ABORTED"})
ACTOR_FAILED_MESSAGE = "Scrape run failed"


def _iso(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _error_message(raw: Any) -> Optional[str]:
    if isinstance(raw, dict):
        message = raw.get("message")
        return str(message) if message else None
    if isinstance(raw, str) and raw.strip():
        return raw
    return None


def _task_fields(run: Dict[str, Any]) -> Dict[str, Any]:
    duration = run.get("durationMs")
    metadata = run.get("metadata")
    return {
        "task_identifier": run.get("taskIdentifier"),
        "metadata": metadata if isinstance(metadata, dict) else None,
        "created_at": _iso(run.get("createdAt")),
        "started_at": _iso(run.get("startedAt")),
        "finished_at": _iso(run.get("finishedAt")),
        "duration_ms": int(duration) if isinstance(duration, (int, float)) else None,
    }


class TaskRunStatusResolver:
    def __init__(self, client: TaskPlatformClient) -> None:
        self.client = client

    async def poll(self, run_id: str) -> RunStatus:
        run = await self.client.retrieve_run(run_id)
        state = str(run.get("status") or "").upper()
        fields = _task_fields(run)

        if state in TASK_SUCCESS_STATES:
            return CompleteStatus(data=run.get("output"), **fields)
        if state in TASK_FAILURE_STATES:
            default = TASK_CANCELED_MESSAGE if state == "CANCELED" else TASK_FAILED_MESSAGE
            message = _error_message(run.get("error")) or default
            return FailedStatus(error=message, **fields)
        # queued, executing, reattempting and anything the platform adds later
        return PendingStatus(**fields)


class ActorRunStatusResolver:
    def __init__(self, client: ActorPlatformClient) -> None:
        self.client = client

    async def poll(self, handle: RunHandle) -> RunStatus:
        run = await self.client.get_run(handle.run_id)
        state = str(run.status or "").upper()

        if state in ACTOR_SUCCESS_STATES:
            items = await self.client.get_dataset_items(handle.dataset_id)
            return CompleteStatus(data=items)
        if state in ACTOR_FAILURE_STATES:
            return FailedStatus(error=run.status_message or f"{ACTOR_FAILED_MESSAGE}: {state}")
        return PendingStatus()


async def poll_with_retry(
    poll: Callable[[], Awaitable[RunStatus]],
    *,
    retries: Optional[int] = None,
    delay_s: Optional[float] = None,
) -> RunStatus:
    """Retry transport errors a bounded number of times, then report failure.

    ``RunNotFoundError`` and other errors propagate untouched.
    """
    retries = settings.scrape_poll_retry_times if retries is None else retries
    delay_s = settings.scrape_poll_retry_delay_s if delay_s is None else delay_s
    attempt = 0
    while True:
        try:
            return await poll()
        except PollTransportError as exc:
            if attempt >= retries:
                logger.error("Poll gave up after %d attempts: %s", attempt + 1, exc)
                return FailedStatus(error=str(exc))
            attempt += 1
            logger.warning("Poll transport error (attempt %d/%d): %s", attempt, retries + 1, exc)
            await asyncio.sleep(delay_s)
