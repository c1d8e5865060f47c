"""
Shared fixtures: platform clients wired to httpx.MockTransport handlers.
"""

from typing import Callable

import httpx
import pytest

from scrapejobs.clients import ActorPlatformClient, TaskPlatformClient


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_actor_client() -> Callable[[Handler], ActorPlatformClient]:
    def _make(handler: Handler) -> ActorPlatformClient:
        return ActorPlatformClient(
            "https://api.apify.test",
            "apify-token",
            5,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def make_task_client() -> Callable[[Handler], TaskPlatformClient]:
    def _make(handler: Handler) -> TaskPlatformClient:
        return TaskPlatformClient(
            "https://api.trigger.test",
            "tr_secret",
            5,
            transport=httpx.MockTransport(handler),
        )

    return _make
