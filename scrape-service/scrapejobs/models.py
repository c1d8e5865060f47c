from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    TWITTER = "TWITTER"
    INSTAGRAM = "INSTAGRAM"
    SPOTIFY = "SPOTIFY"
    TIKTOK = "TIKTOK"
    APPLE = "APPLE"
    YOUTUBE = "YOUTUBE"
    FACEBOOK = "FACEBOOK"
    THREADS = "THREADS"
    NONE = "NONE"


class LaunchOutcome(str, Enum):
    STARTED = "started"
    AMBIGUOUS = "ambiguous"
    INVALID = "invalid"
    REJECTED = "rejected"
    ERROR = "error"
    UNSUPPORTED = "unsupported"


class ScrapeTarget(BaseModel):
    platform: Platform
    handle: str


class RunHandle(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    run_id: str = Field(alias="runId", min_length=1)
    dataset_id: str = Field(alias="datasetId", min_length=1)


class ActorRunDescriptor(BaseModel):
    """Run record as returned by the actor platform. Shape is not trusted."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    default_dataset_id: Optional[str] = Field(default=None, alias="defaultDatasetId")
    status: Optional[str] = None
    status_message: Optional[str] = Field(default=None, alias="statusMessage")


class _StatusBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_identifier: Optional[str] = Field(default=None, alias="taskIdentifier")
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    started_at: Optional[str] = Field(default=None, alias="startedAt")
    finished_at: Optional[str] = Field(default=None, alias="finishedAt")
    duration_ms: Optional[int] = Field(default=None, alias="durationMs")


class PendingStatus(_StatusBase):
    status: Literal["pending"] = "pending"


class CompleteStatus(_StatusBase):
    status: Literal["complete"] = "complete"
    data: Any = None


class FailedStatus(_StatusBase):
    status: Literal["failed"] = "failed"
    error: str


RunStatus = Annotated[Union[PendingStatus, CompleteStatus, FailedStatus], Field(discriminator="status")]


def status_body(status: RunStatus) -> Dict[str, Any]:
    # `data` stays in the body even when null; descriptive fields only when known
    body = status.model_dump(by_alias=True, exclude_none=True)
    if isinstance(status, CompleteStatus):
        body["data"] = status.data
    return body


class ProfileScrapeRequest(BaseModel):
    profile_url: Optional[str] = None
    username: Optional[str] = None


class BatchScrapeRequest(BaseModel):
    profiles: List[ProfileScrapeRequest] = Field(default_factory=list)


class ProfileScrapeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    platform: Platform = Platform.NONE
    run_id: Optional[str] = Field(default=None, alias="runId")
    dataset_id: Optional[str] = Field(default=None, alias="datasetId")
    outcome: LaunchOutcome
    error: Optional[str] = None
    supported: bool = True


class CollectResultsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    platform: Platform
    social_id: str = Field(alias="socialId", min_length=1)
    run_id: str = Field(alias="runId", min_length=1)
    dataset_id: str = Field(alias="datasetId", min_length=1)
