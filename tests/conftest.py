"""Shared fixtures for the payroll test-suite."""
from __future__ import annotations

import asyncio
import os

# Keep test runs from writing daily log files into the working tree.
os.environ.setdefault("LOG_DIR", "")

import pytest  # noqa: E402

from crm_payroll.core.config import PayrollSettings  # noqa: E402
from crm_payroll.services.distance import DistanceResolver, cache_key  # noqa: E402


class FakeDistanceProvider:
    """Distance provider returning canned one-way miles per coordinate pair."""

    def __init__(self, miles: float | None = 10.0, overrides: dict[str, float | None] | None = None) -> None:
        self.miles = miles
        self.overrides = overrides or {}
        self.calls: list[tuple[tuple[float, float], tuple[float, float]]] = []
        self.closed = False

    async def driving_miles(self, origin, destination):
        self.calls.append((origin, destination))
        key = cache_key(origin, destination)
        if key in self.overrides:
            return self.overrides[key]
        return self.miles

    async def aclose(self) -> None:
        self.closed = True


class GatedDistanceProvider:
    """Distance provider that blocks every lookup until ``release`` is set."""

    def __init__(self, miles: float = 7.5) -> None:
        self.miles = miles
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0
        self.cancelled = 0

    async def driving_miles(self, origin, destination):
        self.calls += 1
        self.started.set()
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        return self.miles


@pytest.fixture()
def payroll_settings() -> PayrollSettings:
    return PayrollSettings(maps_api_key="test-key")


@pytest.fixture()
def fake_provider() -> FakeDistanceProvider:
    return FakeDistanceProvider()


@pytest.fixture()
def resolver(fake_provider: FakeDistanceProvider) -> DistanceResolver:
    return DistanceResolver(fake_provider, max_concurrency=2)


@pytest.fixture()
def gated_provider() -> GatedDistanceProvider:
    return GatedDistanceProvider()
