from __future__ import annotations

import logging
from typing import Optional

from scrapejobs.errors import InvalidHandleError, JobSubmissionError
from scrapejobs.models import ActorRunDescriptor, RunHandle


logger = logging.getLogger("scrape-validator")

DEAD_ON_ARRIVAL = frozenset({"FAILED", "ABORTED"})


def normalize_handle(handle: Optional[str]) -> str:
    value = str(handle or "").strip()
    if value.startswith("@"):
        value = value[1:].strip()
    if not value:
        raise InvalidHandleError(handle)
    return value


class ScrapeRunValidator:
    """Acceptance check shared by every launcher.

    Returns a handle for a usable run, ``None`` when the descriptor lacks
    identifiers (the platform may still have scheduled an orphan run), and
    raises ``JobSubmissionError`` when the run is already dead.
    """

    def accept(self, descriptor: ActorRunDescriptor, *, platform: str = "") -> Optional[RunHandle]:
        if not descriptor.id or not descriptor.default_dataset_id:
            logger.warning(
                "%s run descriptor missing identifiers: run_id=%r dataset_id=%r status=%r",
                platform or "actor",
                descriptor.id,
                descriptor.default_dataset_id,
                descriptor.status,
            )
            return None
        status = str(descriptor.status or "").upper()
        if status in DEAD_ON_ARRIVAL:
            logger.error("%s run %s rejected at submission: %s", platform or "actor", descriptor.id, status)
            raise JobSubmissionError(descriptor.id, status)
        return RunHandle(run_id=descriptor.id, dataset_id=descriptor.default_dataset_id)


run_validator = ScrapeRunValidator()
