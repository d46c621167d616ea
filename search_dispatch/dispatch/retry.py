"""
Bounded retry of a single provider call.

Provides:
- RetryPolicy: attempt limit and exponential backoff + jitter constants
- RetryExecutor: runs provider.search() under a Tenacity controller, retrying
  only failures classified TRANSIENT

Delay before retry n (1-based attempt that just failed):
    base_delay_ms * 2 ** (n - 1) + uniform(0, jitter_max_ms)
"""

from __future__ import annotations

import dataclasses
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

import tenacity
from tenacity import RetryCallState, retry_if_exception

from search_dispatch.providers.base.interfaces import SearchProvider
from search_dispatch.providers.base.models import SearchQuery, SearchResponse
from search_dispatch.providers.exceptions import DispatchError

from .cancellation import CancellationToken
from .classifier import is_transient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_ms: int = 1000
    jitter_max_ms: int = 500

    def delay_ms(self, attempt: int, rng: random.Random) -> float:
        """Backoff after the given failed attempt (1-based)."""
        return self.base_delay_ms * 2 ** (attempt - 1) + rng.uniform(0, self.jitter_max_ms)


class RetryExecutor:
    """
    Run one provider call with bounded retries.

    rng and sleep are injectable so backoff is deterministic under test:
    pass random.Random(seed) or an object whose random() returns 0 to remove jitter.
    sleep receives seconds.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        rng: Optional[random.Random] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._rng = rng or random.Random()
        self._sleep = sleep

    def run(
        self,
        provider: SearchProvider,
        query: SearchQuery,
        max_attempts: Optional[int] = None,
        token: Optional[CancellationToken] = None,
    ) -> SearchResponse:
        attempts = max_attempts if max_attempts is not None else self.policy.max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {attempts}")

        retrying = tenacity.Retrying(
            retry=retry_if_exception(is_transient),
            stop=tenacity.stop_after_attempt(attempts),
            wait=self._wait,
            sleep=self._sleeper(token),
            before_sleep=self._log_before_sleep(provider),
            reraise=True,
        )

        response: Optional[SearchResponse] = None
        for attempt in retrying:
            with attempt:
                if token is not None:
                    token.raise_if_cancelled()
                response = provider.search(query)

        if response is None:
            raise DispatchError("Dispatch failed")
        # The serving provider is authoritative, whatever the client reported
        return dataclasses.replace(response, provider=provider.provider_type)

    def _wait(self, retry_state: RetryCallState) -> float:
        return self.policy.delay_ms(retry_state.attempt_number, self._rng) / 1000.0

    def _sleeper(self, token: Optional[CancellationToken]) -> Callable[[float], None]:
        if self._sleep is None:
            return token.sleep if token is not None else time.sleep
        if token is None:
            return self._sleep

        def sleep(seconds: float) -> None:
            token.raise_if_cancelled()
            self._sleep(seconds)
            token.raise_if_cancelled()

        return sleep

    @staticmethod
    def _log_before_sleep(provider: SearchProvider) -> Callable[[RetryCallState], None]:
        name = getattr(provider.provider_type, "value", provider.provider_type)

        def hook(retry_state: RetryCallState) -> None:
            wait_ms = 0
            if retry_state.next_action is not None:
                wait_ms = int(retry_state.next_action.sleep * 1000)
            exc = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                "Transient failure from %s (attempt %d): %s; retrying in %d ms",
                name, retry_state.attempt_number, exc, wait_ms,
            )

        return hook
