# SPDX-License-Identifier: Apache-2.0
"""Exponential backoff timer with symmetric jitter."""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Awaitable, Callable


class BackoffTimer:
    """Retry clock for one logical request.

    The first deadline is ``initial`` seconds after construction. Each call to
    :meth:`advance` waits for the current deadline, multiplies the backoff
    (capped at ``maximum``) and schedules the next deadline at
    ``backoff * (1 + jitter * U(-1, 1))`` from now.

    Clock, random source and sleep are injectable so tests can drive the
    timer deterministically.
    """

    DEFAULT_INITIAL = 1.0
    DEFAULT_MULTIPLIER = 1.6
    DEFAULT_MAXIMUM = 120.0
    DEFAULT_JITTER = 0.23

    def __init__(
        self,
        initial: float = DEFAULT_INITIAL,
        multiplier: float = DEFAULT_MULTIPLIER,
        maximum: float = DEFAULT_MAXIMUM,
        jitter: float = DEFAULT_JITTER,
        clock: Callable[[], float] = time.monotonic,
        rand: Callable[[float, float], float] = random.uniform,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._multiplier = multiplier
        self._maximum = maximum
        self._jitter = jitter
        self._clock = clock
        self._rand = rand
        self._sleep = sleep

        self._num_retries = 0
        self._backoff = initial
        self._deadline = self._clock() + self._backoff

    @property
    def num_retries(self) -> int:
        """Number of completed :meth:`advance` calls."""
        return self._num_retries

    @property
    def current_backoff(self) -> float:
        """Current backoff interval in seconds, before jitter."""
        return self._backoff

    @property
    def deadline(self) -> float:
        return self._deadline

    def time_until_deadline(self) -> float:
        """Seconds remaining until the current deadline, never negative."""
        return max(self._deadline - self._clock(), 0.0)

    async def advance(self) -> None:
        """Sleep until the deadline, then schedule the next one."""
        await self._sleep(self.time_until_deadline())

        self._backoff = min(self._backoff * self._multiplier, self._maximum)
        self._deadline = self._clock() + self._backoff * (
            1 + self._jitter * self._rand(-1.0, 1.0)
        )
        self._num_retries += 1
