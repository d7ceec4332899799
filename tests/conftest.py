"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Callable

import pytest

from stamp_health import ProbeIdentity


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingProbe:
    """Probe returning a fixed verdict and counting its invocations."""

    def __init__(self, result: bool = True, delay: float = 0.0) -> None:
        self.result = result
        self.delay = delay
        self.calls = 0

    async def probe(self) -> bool:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_probe() -> Callable[..., CountingProbe]:
    return CountingProbe


@pytest.fixture
def probes() -> dict[ProbeIdentity, CountingProbe]:
    return {identity: CountingProbe() for identity in ProbeIdentity}
