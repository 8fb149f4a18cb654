import asyncio

import httpx
import pytest

from studyaid.modules.generation.classify import classify, error_status
from studyaid.modules.generation.models import AttemptOutcome
from tests.fakes import quota_error, server_error


def test_http_429_is_quota():
    assert classify(quota_error()) == AttemptOutcome.QUOTA


@pytest.mark.parametrize(
    "message",
    ["You exceeded your current quota", "Rate limit reached", "RESOURCE_EXHAUSTED"],
)
def test_quota_detected_from_message(message):
    assert classify(RuntimeError(message)) == AttemptOutcome.QUOTA


@pytest.mark.parametrize("status", [500, 503])
def test_server_errors_are_transient(status):
    assert classify(server_error(status)) == AttemptOutcome.TRANSIENT


def test_timeouts_are_transient():
    assert classify(asyncio.TimeoutError()) == AttemptOutcome.TRANSIENT
    assert classify(httpx.ReadTimeout("read timed out")) == AttemptOutcome.TRANSIENT
    assert classify(RuntimeError("Request timeout")) == AttemptOutcome.TRANSIENT


def test_quota_checked_before_transient():
    assert classify(RuntimeError("quota check timed out")) == AttemptOutcome.QUOTA


def test_other_errors_are_fatal():
    assert classify(server_error(400)) == AttemptOutcome.FATAL
    assert classify(ValueError("bad request")) == AttemptOutcome.FATAL


def test_error_status_reads_status_code():
    assert error_status(quota_error()) == 429
    assert error_status(ValueError("x")) is None
