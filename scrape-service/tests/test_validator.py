import logging

import pytest

from scrapejobs.errors import InvalidHandleError, JobSubmissionError
from scrapejobs.models import ActorRunDescriptor, RunHandle
from scrapejobs.validator import ScrapeRunValidator, normalize_handle


@pytest.mark.parametrize("raw,expected", [("@artistname", "artistname"), ("  artist  ", "artist"), (" @ artist", "artist")])
def test_normalize_handle(raw, expected):
    assert normalize_handle(raw) == expected


@pytest.mark.parametrize("raw", ["", "@", "   ", None, " @ "])
def test_normalize_handle_rejects_empty(raw):
    with pytest.raises(InvalidHandleError):
        normalize_handle(raw)


def test_accept_running_run():
    descriptor = ActorRunDescriptor.model_validate({"id": "run_123", "defaultDatasetId": "ds_456", "status": "RUNNING"})

    handle = ScrapeRunValidator().accept(descriptor)

    assert handle == RunHandle(run_id="run_123", dataset_id="ds_456")


@pytest.mark.parametrize("status", ["FAILED", "ABORTED", "aborted"])
def test_accept_rejects_dead_run(status):
    descriptor = ActorRunDescriptor.model_validate({"id": "run_789", "defaultDatasetId": "ds_999", "status": status})

    with pytest.raises(JobSubmissionError) as exc_info:
        ScrapeRunValidator().accept(descriptor)

    assert exc_info.value.run_id == "run_789"
    assert "outstanding error" in str(exc_info.value)


@pytest.mark.parametrize(
    "raw",
    [
        {"id": None, "defaultDatasetId": "ds_1", "status": "RUNNING"},
        {"id": "run_1", "status": "RUNNING"},
        {},
    ],
)
def test_accept_missing_identifiers_is_soft_failure(raw, caplog):
    descriptor = ActorRunDescriptor.model_validate(raw)

    with caplog.at_level(logging.WARNING, logger="scrape-validator"):
        assert ScrapeRunValidator().accept(descriptor) is None

    assert "missing identifiers" in caplog.text


def test_missing_identifiers_checked_before_status():
    descriptor = ActorRunDescriptor.model_validate({"id": None, "defaultDatasetId": "ds_1", "status": "FAILED"})

    assert ScrapeRunValidator().accept(descriptor) is None
