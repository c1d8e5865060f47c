from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, Header, HTTPException, Query

from scrapejobs.clients import ActorPlatformClient, TaskPlatformClient, get_actor_client, get_task_client
from scrapejobs.config import settings
from scrapejobs.errors import RunNotFoundError
from scrapejobs.logging_config import setup_logging
from scrapejobs.models import (
    BatchScrapeRequest,
    CollectResultsRequest,
    LaunchOutcome,
    ProfileScrapeRequest,
    ProfileScrapeResult,
    RunHandle,
    status_body,
)
from scrapejobs.service import ScrapeService
from scrapejobs.sink import JobResultSink, get_result_sink
from scrapejobs.status import ActorRunStatusResolver, TaskRunStatusResolver, poll_with_retry


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    setup_logging(settings.scrape_log_level, settings.scrape_log_file or None)
    yield


app = FastAPI(title="Scrape Job Service", version="0.1.0", lifespan=lifespan)

OUTCOME_STATUS_CODES = {
    LaunchOutcome.INVALID: 400,
    LaunchOutcome.REJECTED: 502,
    LaunchOutcome.ERROR: 502,
    LaunchOutcome.AMBIGUOUS: 503,
}


def verify_token(authorization: str | None = Header(default=None)) -> None:
    if not settings.scrape_api_token:
        return
    expected = f"Bearer {settings.scrape_api_token}"
    if authorization != expected:
        raise HTTPException(status_code=401, detail="Unauthorized")


def get_scrape_service(client: ActorPlatformClient = Depends(get_actor_client)) -> ScrapeService:
    return ScrapeService(client)


def get_task_resolver(client: TaskPlatformClient = Depends(get_task_client)) -> TaskRunStatusResolver:
    return TaskRunStatusResolver(client)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/socials/scrape", dependencies=[Depends(verify_token)])
async def scrape_social(
    req: ProfileScrapeRequest,
    service: ScrapeService = Depends(get_scrape_service),
) -> dict[str, Any]:
    result = await service.scrape_profile(req.profile_url, req.username)
    if result.outcome == LaunchOutcome.STARTED:
        return {"runId": result.run_id, "datasetId": result.dataset_id}
    if result.outcome == LaunchOutcome.UNSUPPORTED:
        return {"runId": None, "datasetId": None, "error": result.error}
    raise HTTPException(status_code=OUTCOME_STATUS_CODES[result.outcome], detail=result.error)


@app.post("/api/socials/scrape/batch", dependencies=[Depends(verify_token)])
async def scrape_socials_batch(
    req: BatchScrapeRequest,
    service: ScrapeService = Depends(get_scrape_service),
) -> list[dict[str, Any]]:
    results: list[ProfileScrapeResult] = await service.scrape_batch(req.profiles)
    return [item.model_dump(mode="json", by_alias=True) for item in results]


@app.get("/api/tasks/runs", dependencies=[Depends(verify_token)])
async def get_task_run(
    run_id: str | None = Query(default=None, alias="runId"),
    resolver: TaskRunStatusResolver = Depends(get_task_resolver),
) -> dict[str, Any]:
    run_id = str(run_id or "").strip()
    if not run_id:
        raise HTTPException(status_code=400, detail="runId is required")
    try:
        status = await poll_with_retry(lambda: resolver.poll(run_id))
    except RunNotFoundError:
        raise HTTPException(status_code=404, detail="Task run not found")
    return status_body(status)


@app.get("/api/scrape/runs/{run_id}", dependencies=[Depends(verify_token)])
async def get_scrape_run(
    run_id: str,
    dataset_id: str = Query(alias="datasetId", min_length=1),
    client: ActorPlatformClient = Depends(get_actor_client),
) -> dict[str, Any]:
    resolver = ActorRunStatusResolver(client)
    handle = RunHandle(run_id=run_id, dataset_id=dataset_id)
    try:
        status = await poll_with_retry(lambda: resolver.poll(handle))
    except RunNotFoundError:
        raise HTTPException(status_code=404, detail="Scrape run not found")
    return status_body(status)


@app.post("/api/scrape/results", dependencies=[Depends(verify_token)])
async def collect_scrape_results(
    req: CollectResultsRequest,
    service: ScrapeService = Depends(get_scrape_service),
    sink: JobResultSink = Depends(get_result_sink),
) -> dict[str, Any]:
    handle = RunHandle(run_id=req.run_id, dataset_id=req.dataset_id)
    try:
        status = await service.collect_results(sink, req.platform, req.social_id, handle)
    except RunNotFoundError:
        raise HTTPException(status_code=404, detail="Scrape run not found")
    return status_body(status)
