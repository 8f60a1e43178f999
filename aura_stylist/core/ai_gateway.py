"""
Client for the OpenAI-compatible AI gateway used to generate look suggestions.

Attempts follow a small state machine:

    idle -> attempting -> success
                       -> retrying -> attempting ...
                       -> failed

Server errors, network failures and provider-internal errors are retried with
a fixed delay. Rate-limit (429) and quota (402) responses fail immediately.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from aura_stylist import config
from aura_stylist.config import logger
from aura_stylist.core.errors import (
    MalformedResponseError,
    QuotaExceeded,
    RateLimited,
    ServiceUnavailable,
    StylistError,
)


class AttemptState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 2
    delay_seconds: float = 2.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


_TRANSITIONS = {
    AttemptState.IDLE: {AttemptState.ATTEMPTING},
    AttemptState.ATTEMPTING: {
        AttemptState.SUCCESS,
        AttemptState.RETRYING,
        AttemptState.FAILED,
    },
    AttemptState.RETRYING: {AttemptState.ATTEMPTING},
    AttemptState.SUCCESS: set(),
    AttemptState.FAILED: set(),
}


@dataclass
class RetryTracker:
    """Attempt bookkeeping for one gateway call."""

    policy: RetryPolicy
    state: AttemptState = AttemptState.IDLE
    attempts: int = 0
    last_error: Optional[StylistError] = None
    history: list = field(default_factory=list)

    def _move(self, target: AttemptState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal retry transition: {self.state.value} -> {target.value}"
            )
        self.history.append((self.state, target))
        self.state = target

    @property
    def attempts_remaining(self) -> int:
        return self.policy.max_attempts - self.attempts

    def begin_attempt(self) -> None:
        self._move(AttemptState.ATTEMPTING)
        self.attempts += 1

    def succeed(self) -> None:
        self._move(AttemptState.SUCCESS)

    def transient_failure(self, error: StylistError) -> AttemptState:
        """Record a retryable error and move to retrying, or failed when exhausted."""
        self.last_error = error
        if self.attempts_remaining > 0:
            self._move(AttemptState.RETRYING)
        else:
            self._move(AttemptState.FAILED)
        return self.state

    def terminal_failure(self, error: StylistError) -> None:
        self.last_error = error
        self._move(AttemptState.FAILED)


class _TransientError(Exception):
    """Internal signal for a failure that may be retried."""


def _is_internal_error(body: Dict[str, Any]) -> bool:
    error = body.get("error")
    if not isinstance(error, dict):
        return False
    message = error.get("message")
    return error.get("code") == 500 or (
        isinstance(message, str) and "Internal" in message
    )


class AIGatewayClient:
    """Thin async client for chat completions with bounded retry."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        url: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.75,
        policy: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._api_key = api_key if api_key is not None else config.AI_GATEWAY_KEY
        self._url = url or config.AI_GATEWAY_URL
        self._model = model or config.AI_GATEWAY_MODEL
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._policy = policy or RetryPolicy(
            max_retries=config.AI_MAX_RETRIES,
            delay_seconds=config.AI_RETRY_DELAY_SECONDS,
        )
        self._timeout = timeout or config.AI_TIMEOUT_SECONDS
        self._transport = transport
        self._sleep = sleep

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    async def complete(self, prompt: str) -> str:
        """
        Send ``prompt`` to the gateway and return the completion text.

        Raises:
            ServiceUnavailable: If the key is missing or every attempt failed
            RateLimited: On a 429 response
            QuotaExceeded: On a 402 response
            MalformedResponseError: If a successful body has no completion text
        """
        if not self.configured:
            logger.error("AI gateway key not configured")
            raise ServiceUnavailable("AI service not configured")

        tracker = RetryTracker(policy=self._policy)
        payload = self._build_payload(prompt)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            while True:
                tracker.begin_attempt()
                try:
                    body = await self._attempt(client, payload, headers)
                except _TransientError as exc:
                    error = ServiceUnavailable(str(exc))
                    state = tracker.transient_failure(error)
                    logger.warning(
                        "AI gateway attempt failed",
                        extra={
                            "attempt": tracker.attempts,
                            "error": str(exc),
                            "next_state": state.value,
                        },
                    )
                    if state is AttemptState.FAILED:
                        raise error from exc
                    await self._sleep(self._policy.delay_seconds)
                    continue
                except (RateLimited, QuotaExceeded) as exc:
                    tracker.terminal_failure(exc)
                    logger.warning(
                        "AI gateway refused request",
                        extra={"attempt": tracker.attempts, "error": exc.code},
                    )
                    raise

                tracker.succeed()
                break

        logger.info(
            "AI gateway call succeeded",
            extra={"attempts": tracker.attempts, "model": self._model},
        )
        return self._extract_content(body)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        payload: Dict[str, Any],
        headers: Dict[str, str],
    ) -> Dict[str, Any]:
        try:
            response = await client.post(self._url, json=payload, headers=headers)
        except httpx.RequestError as exc:
            raise _TransientError(f"Network error calling AI gateway: {exc}") from exc

        if response.status_code == 429:
            raise RateLimited()
        if response.status_code == 402:
            raise QuotaExceeded()
        if not response.is_success:
            logger.error(
                "AI gateway error",
                extra={"status": response.status_code, "body": response.text[:500]},
            )
            raise _TransientError(f"AI Gateway error: {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise _TransientError("AI Gateway returned a non-JSON body") from exc

        if not isinstance(body, dict):
            raise _TransientError("AI Gateway returned an unexpected body")

        if _is_internal_error(body):
            raise _TransientError(
                f"AI Gateway internal error: {body['error'].get('message')}"
            )

        return body

    @staticmethod
    def _extract_content(body: Dict[str, Any]) -> str:
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError("Invalid AI response") from exc

        if not isinstance(content, str) or not content:
            logger.error("No content in AI response")
            raise MalformedResponseError("Invalid AI response")
        return content


__all__ = [
    "AIGatewayClient",
    "AttemptState",
    "RetryPolicy",
    "RetryTracker",
]
