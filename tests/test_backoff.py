# SPDX-License-Identifier: Apache-2.0
"""Tests for the exponential backoff timer."""

from __future__ import annotations

import random

import pytest

from deepl_client.core.backoff import BackoffTimer


class FakeClock:
    """Clock that only moves when the timer sleeps."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_timer(clock: FakeClock, rand=None, **kwargs) -> BackoffTimer:
    seeded = random.Random(1234)
    return BackoffTimer(
        clock=clock,
        sleep=clock.sleep,
        rand=rand or seeded.uniform,
        **kwargs,
    )


class TestBackoffTimer:
    """Tests for BackoffTimer."""

    def test_initial_state(self) -> None:
        """A new timer has no retries and a deadline one backoff away."""
        clock = FakeClock()
        timer = make_timer(clock)

        assert timer.num_retries == 0
        assert timer.current_backoff == 1.0
        assert timer.deadline == 101.0
        assert timer.time_until_deadline() == 1.0

    def test_time_until_deadline_is_never_negative(self) -> None:
        """Time remaining clamps at zero once the deadline passed."""
        clock = FakeClock()
        timer = make_timer(clock)
        clock.now += 50

        assert timer.time_until_deadline() == 0.0

    @pytest.mark.asyncio
    async def test_first_wait_is_initial_backoff(self) -> None:
        """The first advance sleeps exactly the initial backoff."""
        clock = FakeClock()
        timer = make_timer(clock)

        await timer.advance()

        assert clock.sleeps == [1.0]
        assert timer.num_retries == 1
        assert timer.current_backoff == pytest.approx(1.6)

    @pytest.mark.asyncio
    async def test_backoff_grows_monotonically_up_to_maximum(self) -> None:
        """Backoff never decreases and settles at the maximum."""
        clock = FakeClock()
        timer = make_timer(clock)
        backoffs = [timer.current_backoff]

        for _ in range(20):
            await timer.advance()
            backoffs.append(timer.current_backoff)

        assert backoffs == sorted(backoffs)
        assert max(backoffs) == 120.0
        assert backoffs[-1] == 120.0
        assert timer.num_retries == 20

    @pytest.mark.asyncio
    async def test_waits_stay_within_jitter_bounds(self) -> None:
        """Each wait lies within backoff * (1 +/- jitter)."""
        clock = FakeClock()
        timer = make_timer(clock)

        for _ in range(15):
            expected = timer.current_backoff
            first = timer.num_retries == 0
            await timer.advance()
            wait = clock.sleeps[-1]
            if first:
                assert wait == pytest.approx(expected)
            else:
                assert expected * (1 - 0.23) - 1e-9 <= wait <= expected * (1 + 0.23) + 1e-9

    @pytest.mark.asyncio
    async def test_extreme_jitter_values(self) -> None:
        """Jitter draws of -1 and +1 hit the bounds exactly."""
        clock = FakeClock()
        timer = make_timer(clock, rand=lambda low, high: low)
        await timer.advance()
        await timer.advance()
        assert clock.sleeps[-1] == pytest.approx(1.6 * 0.77)

        clock = FakeClock()
        timer = make_timer(clock, rand=lambda low, high: high)
        await timer.advance()
        await timer.advance()
        assert clock.sleeps[-1] == pytest.approx(1.6 * 1.23)

    @pytest.mark.asyncio
    async def test_elapsed_time_shortens_the_wait(self) -> None:
        """Time spent on the request itself counts toward the deadline."""
        clock = FakeClock()
        timer = make_timer(clock)
        clock.now += 0.75

        await timer.advance()

        assert clock.sleeps == [pytest.approx(0.25)]

    @pytest.mark.asyncio
    async def test_custom_parameters(self) -> None:
        """Initial, multiplier and maximum are configurable."""
        clock = FakeClock()
        timer = make_timer(clock, initial=0.5, multiplier=2.0, maximum=3.0, jitter=0.0)

        for _ in range(4):
            await timer.advance()

        assert clock.sleeps == [0.5, 1.0, 2.0, 3.0]
        assert timer.current_backoff == 3.0
