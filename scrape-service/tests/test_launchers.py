import json
import logging

import httpx
import pytest

from scrapejobs.errors import InvalidHandleError, JobSubmissionError, PlatformRequestError
from scrapejobs.launchers import (
    FacebookAdapter,
    InstagramAdapter,
    ThreadsAdapter,
    TikTokAdapter,
    TwitterAdapter,
    YoutubeAdapter,
    build_launchers,
)
from scrapejobs.models import Platform, RunHandle
from tests.fakes import RecordingHandler


ACTOR = "apify~instagram-profile-scraper"
RUNS_PATH = f"/v2/acts/{ACTOR}/runs"


def _handler(run: dict, status_code: int = 201) -> RecordingHandler:
    return RecordingHandler({("POST", RUNS_PATH): (status_code, {"data": run})})


async def test_start_returns_handle(make_actor_client):
    handler = _handler({"id": "run_123", "defaultDatasetId": "ds_456", "status": "RUNNING"})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    handle = await launcher.start("@artistname")

    assert handle == RunHandle(run_id="run_123", dataset_id="ds_456")
    assert handle.model_dump(by_alias=True) == {"runId": "run_123", "datasetId": "ds_456"}
    sent = json.loads(handler.requests[0].content)
    assert sent["usernames"] == ["artistname"]
    assert handler.requests[0].headers["Authorization"] == "Bearer apify-token"


@pytest.mark.parametrize("raw", ["", "@", "   "])
async def test_start_invalid_handle_never_submits(make_actor_client, raw):
    handler = _handler({"id": "run_123", "defaultDatasetId": "ds_456", "status": "RUNNING"})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with pytest.raises(InvalidHandleError):
        await launcher.start(raw)

    assert handler.requests == []


async def test_start_dead_on_arrival_raises(make_actor_client):
    handler = _handler({"id": "run_789", "defaultDatasetId": "ds_999", "status": "ABORTED"})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with pytest.raises(JobSubmissionError):
        await launcher.start("artist")


async def test_start_ambiguous_returns_none(make_actor_client, caplog):
    handler = _handler({"id": None, "defaultDatasetId": "ds_1", "status": "RUNNING"})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with caplog.at_level(logging.WARNING):
        handle = await launcher.start("artist")

    assert handle is None
    assert "missing identifiers" in caplog.text


async def test_start_wrong_typed_run_id_is_ambiguous(make_actor_client, caplog):
    handler = _handler({"id": 123, "defaultDatasetId": "ds_1", "status": "RUNNING"})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with caplog.at_level(logging.WARNING):
        handle = await launcher.start("artist")

    assert handle is None
    assert "malformed" in caplog.text


async def test_start_non_json_success_is_ambiguous(make_actor_client, caplog):
    handler = RecordingHandler({("POST", RUNS_PATH): lambda request: httpx.Response(201, text="<html>ok</html>")})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with caplog.at_level(logging.WARNING):
        handle = await launcher.start("artist")

    assert handle is None
    assert "not JSON" in caplog.text


async def test_start_http_error_raises_platform_error(make_actor_client):
    handler = RecordingHandler({("POST", RUNS_PATH): (401, {"error": {"type": "user-or-token-not-found"}})})
    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with pytest.raises(PlatformRequestError) as exc_info:
        await launcher.start("artist")

    assert exc_info.value.status_code == 401


async def test_start_network_error_raises_platform_error(make_actor_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    launcher = InstagramAdapter(make_actor_client(handler), ACTOR)

    with pytest.raises(PlatformRequestError):
        await launcher.start("artist")


@pytest.mark.parametrize(
    "adapter_cls,expected",
    [
        (InstagramAdapter, {"usernames": ["artist"]}),
        (ThreadsAdapter, {"usernames": ["artist"]}),
        (FacebookAdapter, {"startUrls": [{"url": "https://www.facebook.com/artist"}]}),
        (TikTokAdapter, {"profiles": ["artist"]}),
        (TwitterAdapter, {"twitterHandles": ["artist"]}),
        (YoutubeAdapter, {"startUrls": [{"url": "https://www.youtube.com/@artist"}]}),
    ],
)
def test_build_input(make_actor_client, adapter_cls, expected):
    launcher = adapter_cls(make_actor_client(RecordingHandler({})), "actor")

    payload = launcher.build_input("artist")

    for key, value in expected.items():
        assert payload[key] == value


def test_build_launchers_covers_actor_platforms(make_actor_client):
    launchers = build_launchers(make_actor_client(RecordingHandler({})))

    assert set(launchers) == {
        Platform.INSTAGRAM,
        Platform.FACEBOOK,
        Platform.THREADS,
        Platform.TIKTOK,
        Platform.TWITTER,
        Platform.YOUTUBE,
    }
    assert all(launcher.platform == platform for platform, launcher in launchers.items())
