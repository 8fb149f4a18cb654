import asyncio

import pytest
from pydantic_ai.messages import ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from studyaid.modules.generation import (
    GenerationFailed,
    GenerationKind,
    GenerationRequest,
    ModelResolver,
    QuotaExhausted,
    RetryController,
    RotationManager,
)
from studyaid.modules.generation.models import AttemptOutcome
from tests.fakes import FakeResolver, RecordingSleep, quota_error, server_error

REQUEST = GenerationRequest(prompt="p", kind=GenerationKind.FLASHCARDS)


def _setup(scripts, **kwargs):
    resolver = FakeResolver(scripts)
    rotation = RotationManager(list(scripts), resolver)
    sleep = RecordingSleep()
    retry = RetryController(rotation, sleep=sleep, **kwargs)
    handle = asyncio.run(rotation.current_handle())
    return retry, rotation, handle, sleep


def test_backoff_doubles():
    assert [RetryController.backoff_delay(n) for n in (1, 2, 3, 4)] == [2, 4, 8, 16]


def test_success_first_try():
    retry, _, handle, sleep = _setup({"a": ["hello"]})
    history = []
    assert asyncio.run(retry.execute(REQUEST, handle, history)) == "hello"
    assert sleep.delays == []
    assert [h.outcome for h in history] == [AttemptOutcome.SUCCESS]


def test_transient_errors_back_off_then_succeed():
    retry, _, handle, sleep = _setup({"a": [server_error(503), server_error(500), "done"]})
    assert asyncio.run(retry.execute(REQUEST, handle)) == "done"
    assert sleep.delays == [2, 4]
    assert handle.calls == 3


def test_transient_budget_exhausted():
    retry, rotation, handle, sleep = _setup({"a": [server_error(503)], "b": ["never"]})
    history = []
    with pytest.raises(GenerationFailed) as info:
        asyncio.run(retry.execute(REQUEST, handle, history))
    assert not isinstance(info.value, QuotaExhausted)
    assert handle.calls == 5
    assert sleep.delays == [2, 4, 8, 16]
    assert info.value.attempts == 5
    # transient failures never rotate
    assert rotation.rotation_count == 0
    assert len(history) == 5


def test_empty_response_is_retried():
    retry, _, handle, sleep = _setup({"a": ["   ", "text"]})
    assert asyncio.run(retry.execute(REQUEST, handle)) == "text"
    assert sleep.delays == [2]


def test_fatal_error_stops_immediately():
    retry, _, handle, sleep = _setup({"a": [ValueError("bad prompt")]})
    with pytest.raises(GenerationFailed) as info:
        asyncio.run(retry.execute(REQUEST, handle))
    assert handle.calls == 1
    assert sleep.delays == []
    assert "bad prompt" in info.value.message


def test_error_detail_truncated():
    retry, _, handle, _ = _setup({"a": [ValueError("x" * 400)]}, error_detail_chars=150)
    with pytest.raises(GenerationFailed) as info:
        asyncio.run(retry.execute(REQUEST, handle))
    assert "x" * 151 not in info.value.message
    assert "x" * 150 in info.value.message


def test_quota_rotates_and_resets_attempts():
    retry, rotation, handle, sleep = _setup(
        {
            "a": [server_error(503), server_error(503), quota_error()],
            "b": [server_error(503), server_error(503), server_error(503), server_error(503), "ok"],
        }
    )
    assert asyncio.run(retry.execute(REQUEST, handle)) == "ok"
    assert rotation.rotation_count == 1
    # a: 2, 4, then 1s pause; b gets a fresh budget: 2, 4, 8, 16
    assert sleep.delays == [2, 4, 1.0, 2, 4, 8, 16]


def test_single_key_quota_exhausted_without_rotation():
    retry, rotation, handle, sleep = _setup({"a": [quota_error()]})
    with pytest.raises(QuotaExhausted):
        asyncio.run(retry.execute(REQUEST, handle))
    assert handle.calls == 1
    assert rotation.rotation_count == 0
    assert sleep.delays == []


def test_all_keys_quota_exhausted_after_one_pass():
    retry, rotation, handle, sleep = _setup(
        {"a": [quota_error()], "b": [quota_error()], "c": [quota_error()]}
    )
    with pytest.raises(QuotaExhausted) as info:
        asyncio.run(retry.execute(REQUEST, handle))
    assert rotation.rotation_count == 2
    assert info.value.attempts == 3
    assert sleep.delays == [1.0, 1.0]


def test_call_timeout_counts_as_transient():
    class SlowHandle:
        credential_index = 0
        calls = 0

        async def generate_content(self, prompt):
            SlowHandle.calls += 1
            if SlowHandle.calls == 1:
                await asyncio.sleep(1)
            return "late but fine"

    resolver = FakeResolver({})
    rotation = RotationManager(["a"], resolver)
    sleep = RecordingSleep()
    retry = RetryController(rotation, call_timeout_sec=0.01, sleep=sleep)
    assert asyncio.run(retry.execute(REQUEST, SlowHandle())) == "late but fine"
    assert sleep.delays == [2]


def test_empty_agent_reply_backs_off_once_per_call():
    replies = [ModelResponse(parts=[]), ModelResponse(parts=[TextPart("recovered")])]
    model_calls = []

    def respond(messages, info: AgentInfo) -> ModelResponse:
        model_calls.append(len(messages))
        return replies.pop(0)

    resolver = ModelResolver(
        primary_model="gemini-2.5-flash",
        model_factory=lambda credential, name: FunctionModel(respond),
    )
    rotation = RotationManager(["a"], resolver)
    sleep = RecordingSleep()
    retry = RetryController(rotation, sleep=sleep)
    handle = asyncio.run(rotation.current_handle())
    history = []

    assert asyncio.run(retry.execute(REQUEST, handle, history)) == "recovered"
    assert len(model_calls) == 2
    assert sleep.delays == [2]
    assert [h.outcome for h in history] == [AttemptOutcome.TRANSIENT, AttemptOutcome.SUCCESS]
