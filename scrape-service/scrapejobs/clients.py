from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from scrapejobs.config import settings
from scrapejobs.errors import PlatformRequestError, PollTransportError, RunNotFoundError
from scrapejobs.models import ActorRunDescriptor


logger = logging.getLogger("scrape-clients")


def _unwrap(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        return {}
    data = body.get("data", body)
    return data if isinstance(data, dict) else {}


class _PlatformClient:
    """Credentials and base URL only. A fresh AsyncClient is opened per call."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout_s: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = httpx.Timeout(timeout_s)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _send(
        self,
        method: str,
        path: str,
        *,
        error_cls: type[PlatformRequestError] = PlatformRequestError,
        run_id: str = "",
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise error_cls(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404 and run_id:
            raise RunNotFoundError(run_id)
        if response.status_code < 200 or response.status_code >= 300:
            raise error_cls(
                f"http_{response.status_code}:{response.text[:240]}",
                status_code=response.status_code,
            )
        return response

    async def _request(
        self,
        method: str,
        path: str,
        *,
        error_cls: type[PlatformRequestError] = PlatformRequestError,
        run_id: str = "",
        **kwargs: Any,
    ) -> Any:
        response = await self._send(method, path, error_cls=error_cls, run_id=run_id, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise error_cls(f"invalid_json:{response.text[:240]}", status_code=response.status_code) from exc


class ActorPlatformClient(_PlatformClient):
    """Apify REST v2: start actor runs, read runs and dataset items."""

    async def start_run(self, actor_id: str, run_input: Dict[str, Any]) -> ActorRunDescriptor:
        """Submit a run.

        A 2xx answer whose body is not JSON, or whose fields have the wrong
        shape, comes back as an empty descriptor so validation treats the
        submission as ambiguous.
        """
        response = await self._send("POST", f"/v2/acts/{actor_id}/runs", json=run_input)
        try:
            data = _unwrap(response.json())
        except ValueError:
            logger.warning("Actor %s run response is not JSON: %s", actor_id, response.text[:240])
            return ActorRunDescriptor()
        logger.info("Actor %s run submitted: %s", actor_id, data.get("id"))
        try:
            return ActorRunDescriptor.model_validate(data)
        except ValidationError as exc:
            logger.warning("Actor %s run response is malformed: %s", actor_id, exc)
            return ActorRunDescriptor()

    async def get_run(self, run_id: str) -> ActorRunDescriptor:
        body = await self._request(
            "GET",
            f"/v2/actor-runs/{run_id}",
            error_cls=PollTransportError,
            run_id=run_id,
        )
        try:
            return ActorRunDescriptor.model_validate(_unwrap(body))
        except ValidationError as exc:
            raise PollTransportError(f"invalid_run_record:{run_id}") from exc

    async def get_dataset_items(self, dataset_id: str) -> List[Dict[str, Any]]:
        items = await self._request(
            "GET",
            f"/v2/datasets/{dataset_id}/items",
            params={"clean": "true", "format": "json"},
            error_cls=PollTransportError,
        )
        return items if isinstance(items, list) else []


class TaskPlatformClient(_PlatformClient):
    """Trigger.dev REST v3: read background task runs."""

    async def retrieve_run(self, run_id: str) -> Dict[str, Any]:
        body = await self._request(
            "GET",
            f"/api/v3/runs/{run_id}",
            error_cls=PollTransportError,
            run_id=run_id,
        )
        return body if isinstance(body, dict) else {}


_actor_client: Optional[ActorPlatformClient] = None
_task_client: Optional[TaskPlatformClient] = None


def get_actor_client() -> ActorPlatformClient:
    global _actor_client
    if _actor_client is None:
        _actor_client = ActorPlatformClient(
            settings.apify_base_url,
            settings.apify_token,
            settings.scrape_http_timeout_s,
        )
    return _actor_client


def get_task_client() -> TaskPlatformClient:
    global _task_client
    if _task_client is None:
        _task_client = TaskPlatformClient(
            settings.trigger_base_url,
            settings.trigger_secret_key,
            settings.scrape_http_timeout_s,
        )
    return _task_client
