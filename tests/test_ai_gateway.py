"""Tests for the AI gateway client and its retry state machine."""

from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from aura_stylist.core.ai_gateway import (
    AIGatewayClient,
    AttemptState,
    RetryPolicy,
    RetryTracker,
)
from aura_stylist.core.errors import (
    MalformedResponseError,
    QuotaExceeded,
    RateLimited,
    ServiceUnavailable,
)

GATEWAY_URL = "https://gateway.test/v1/chat/completions"


def _completion(text: str = '{"looks": []}') -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": text}}]})


class ScriptedGateway:
    """MockTransport handler replaying a fixed list of outcomes."""

    def __init__(self, outcomes: List[object]) -> None:
        self.outcomes = list(outcomes)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome, text="upstream error")
        return outcome


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def _client(gateway: ScriptedGateway, sleep: SleepRecorder, **kwargs) -> AIGatewayClient:
    kwargs.setdefault("policy", RetryPolicy(max_retries=2, delay_seconds=2.0))
    return AIGatewayClient(
        "test-key",
        url=GATEWAY_URL,
        model="google/gemini-2.5-pro",
        transport=httpx.MockTransport(gateway),
        sleep=sleep,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_two_server_errors_then_success_makes_three_attempts() -> None:
    gateway = ScriptedGateway([500, 503, _completion("hello")])
    sleep = SleepRecorder()

    text = await _client(gateway, sleep).complete("prompt")

    assert text == "hello"
    assert len(gateway.requests) == 3
    assert sleep.delays == [2.0, 2.0]


@pytest.mark.asyncio
async def test_rate_limit_fails_after_single_attempt() -> None:
    gateway = ScriptedGateway([429, _completion()])
    sleep = SleepRecorder()

    with pytest.raises(RateLimited):
        await _client(gateway, sleep).complete("prompt")

    assert len(gateway.requests) == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_payment_required_is_quota_exceeded_without_retry() -> None:
    gateway = ScriptedGateway([402, _completion()])
    sleep = SleepRecorder()

    with pytest.raises(QuotaExceeded):
        await _client(gateway, sleep).complete("prompt")

    assert len(gateway.requests) == 1


@pytest.mark.asyncio
async def test_exhausted_retries_surface_last_error() -> None:
    gateway = ScriptedGateway([500, 502, 504])
    sleep = SleepRecorder()

    with pytest.raises(ServiceUnavailable, match="504"):
        await _client(gateway, sleep).complete("prompt")

    assert len(gateway.requests) == 3
    assert sleep.delays == [2.0, 2.0]


@pytest.mark.asyncio
async def test_network_failure_is_retried() -> None:
    request = httpx.Request("POST", GATEWAY_URL)
    gateway = ScriptedGateway(
        [httpx.ConnectError("reset", request=request), _completion("ok")]
    )
    sleep = SleepRecorder()

    assert await _client(gateway, sleep).complete("prompt") == "ok"
    assert len(gateway.requests) == 2


@pytest.mark.asyncio
async def test_non_json_success_body_is_retried() -> None:
    gateway = ScriptedGateway(
        [
            httpx.Response(200, text="<html>gateway timeout</html>"),
            httpx.Response(200, text="<html>gateway timeout</html>"),
            _completion("ok"),
        ]
    )
    sleep = SleepRecorder()

    assert await _client(gateway, sleep).complete("prompt") == "ok"
    assert len(gateway.requests) == 3
    assert sleep.delays == [2.0, 2.0]


@pytest.mark.asyncio
async def test_internal_error_in_success_body_is_retried() -> None:
    internal = httpx.Response(
        200, json={"error": {"code": 500, "message": "Internal server error"}}
    )
    gateway = ScriptedGateway([internal, _completion("ok")])
    sleep = SleepRecorder()

    assert await _client(gateway, sleep).complete("prompt") == "ok"
    assert len(gateway.requests) == 2


@pytest.mark.asyncio
async def test_other_client_errors_are_retried_until_exhausted() -> None:
    gateway = ScriptedGateway([400, 400, 400])
    sleep = SleepRecorder()

    with pytest.raises(ServiceUnavailable):
        await _client(gateway, sleep).complete("prompt")

    assert len(gateway.requests) == 3


@pytest.mark.asyncio
async def test_zero_retries_means_one_attempt() -> None:
    gateway = ScriptedGateway([500, _completion()])
    sleep = SleepRecorder()
    client = _client(gateway, sleep, policy=RetryPolicy(max_retries=0))

    with pytest.raises(ServiceUnavailable):
        await client.complete("prompt")

    assert len(gateway.requests) == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_missing_api_key_short_circuits() -> None:
    gateway = ScriptedGateway([_completion()])
    client = AIGatewayClient(
        "", url=GATEWAY_URL, transport=httpx.MockTransport(gateway)
    )

    with pytest.raises(ServiceUnavailable, match="not configured"):
        await client.complete("prompt")

    assert gateway.requests == []


@pytest.mark.asyncio
async def test_success_without_content_is_malformed() -> None:
    gateway = ScriptedGateway([httpx.Response(200, json={"choices": []})])
    sleep = SleepRecorder()

    with pytest.raises(MalformedResponseError):
        await _client(gateway, sleep).complete("prompt")

    assert len(gateway.requests) == 1


@pytest.mark.asyncio
async def test_request_carries_bearer_and_sampling_parameters() -> None:
    gateway = ScriptedGateway([_completion()])

    await _client(gateway, SleepRecorder()).complete("Crie 3 looks")

    request = gateway.requests[0]
    body = json.loads(request.content)
    assert request.headers["Authorization"] == "Bearer test-key"
    assert body == {
        "model": "google/gemini-2.5-pro",
        "messages": [{"role": "user", "content": "Crie 3 looks"}],
        "max_tokens": 4000,
        "temperature": 0.75,
    }


def test_tracker_walks_retry_then_success() -> None:
    tracker = RetryTracker(policy=RetryPolicy(max_retries=1))

    tracker.begin_attempt()
    assert tracker.transient_failure(ServiceUnavailable("boom")) is AttemptState.RETRYING
    tracker.begin_attempt()
    tracker.succeed()

    assert tracker.state is AttemptState.SUCCESS
    assert tracker.attempts == 2
    assert str(tracker.last_error) == "boom"


def test_tracker_fails_when_budget_is_spent() -> None:
    tracker = RetryTracker(policy=RetryPolicy(max_retries=1))

    tracker.begin_attempt()
    tracker.transient_failure(ServiceUnavailable("first"))
    tracker.begin_attempt()
    state = tracker.transient_failure(ServiceUnavailable("second"))

    assert state is AttemptState.FAILED
    assert tracker.last_error.message == "second"


@pytest.mark.parametrize(
    "steps",
    [
        ["succeed"],
        ["begin_attempt", "begin_attempt"],
        ["begin_attempt", "succeed", "begin_attempt"],
    ],
)
def test_tracker_rejects_illegal_transitions(steps) -> None:
    tracker = RetryTracker(policy=RetryPolicy())

    with pytest.raises(RuntimeError, match="Illegal retry transition"):
        for step in steps:
            getattr(tracker, step)()


def test_terminal_failure_moves_straight_to_failed() -> None:
    tracker = RetryTracker(policy=RetryPolicy())

    tracker.begin_attempt()
    tracker.terminal_failure(RateLimited())

    assert tracker.state is AttemptState.FAILED
    assert tracker.attempts_remaining == 2
