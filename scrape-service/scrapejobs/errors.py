"""Scrape service error hierarchy."""

from __future__ import annotations

from typing import Optional


class ScrapeServiceError(Exception):
    """Base error for job submission and status resolution."""


class InvalidHandleError(ScrapeServiceError):
    """Handle is empty after normalization. Nothing was submitted."""

    def __init__(self, raw: Optional[str] = None) -> None:
        self.raw = raw
        super().__init__(f"invalid_handle:{raw!r}")


class JobSubmissionError(ScrapeServiceError):
    """Platform accepted the run but already reports it dead."""

    def __init__(self, run_id: str, status: str) -> None:
        self.run_id = run_id
        self.status = status
        super().__init__(f"outstanding error: run {run_id} is {status}")


class PlatformRequestError(ScrapeServiceError):
    """Request to an external platform could not be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class PollTransportError(PlatformRequestError):
    """Status poll failed in transit (network, auth, 5xx). Safe to retry."""


class RunNotFoundError(ScrapeServiceError):
    """Platform has no record of the run."""

    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"run_not_found:{run_id}")
