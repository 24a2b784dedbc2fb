"""Driving distance lookups for mileage reimbursement.

``DistanceMatrixClient`` talks to the routing provider. ``DistanceResolver``
is created per payroll computation: it memoises results per coordinate pair,
shares in-flight lookups between concurrent callers and bounds how many
provider calls run at once. Every failure degrades to ``None``.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, Protocol

import httpx

from crm_payroll.core.config import PayrollSettings, get_settings
from crm_payroll.core.logger import get_logger

LOGGER = get_logger(__name__)

METERS_PER_MILE = 1609.344

Coordinate = tuple[float, float]
CoordinatePair = tuple[Coordinate, Coordinate]


def cache_key(origin: Coordinate, destination: Coordinate) -> str:
    """Key rounded to 4 decimal places (roughly 11 m)."""

    return (
        f"{origin[0]:.4f},{origin[1]:.4f}-"
        f"{destination[0]:.4f},{destination[1]:.4f}"
    )


def round_trip(one_way: float) -> float:
    return one_way * 2


class DistanceProvider(Protocol):
    async def driving_miles(self, origin: Coordinate, destination: Coordinate) -> float | None:
        ...


class DistanceMatrixClient:
    """Google Distance Matrix client returning one-way driving miles."""

    def __init__(
        self,
        settings: PayrollSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings().payroll
        self._client = client
        self._owns_client = client is None
        self._warned_missing_key = False

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.distance_timeout_seconds)
        return self._client

    async def driving_miles(self, origin: Coordinate, destination: Coordinate) -> float | None:
        api_key = self._settings.maps_api_key
        if not api_key:
            if not self._warned_missing_key:
                LOGGER.warning("Maps API key not configured; mileage will not be calculated")
                self._warned_missing_key = True
            return None

        params = {
            "origins": f"{origin[0]},{origin[1]}",
            "destinations": f"{destination[0]},{destination[1]}",
            "mode": "driving",
            "units": "imperial",
            "key": api_key,
        }
        try:
            response = await self._http().get(self._settings.distance_matrix_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            LOGGER.warning("Distance Matrix request failed: %s", exc)
            return None
        except ValueError as exc:
            LOGGER.warning("Distance Matrix returned invalid JSON: %s", exc)
            return None

        if data.get("status") != "OK":
            LOGGER.error("Distance Matrix API status: %s", data.get("status"))
            return None

        rows = data.get("rows") or [{}]
        elements = rows[0].get("elements") or [{}]
        element = elements[0]
        distance = element.get("distance") or {}
        if element.get("status") != "OK" or "value" not in distance:
            LOGGER.error("Distance Matrix element status: %s", element.get("status"))
            return None

        miles = float(distance["value"]) / METERS_PER_MILE
        return round(miles, 1)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


class DistanceResolver:
    """Request-scoped memoising front for a ``DistanceProvider``."""

    def __init__(
        self,
        provider: DistanceProvider | None,
        *,
        max_concurrency: int = 4,
    ) -> None:
        self._provider = provider
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._lookups: dict[str, asyncio.Future[float | None]] = {}

    @classmethod
    def from_settings(cls, settings: PayrollSettings | None = None) -> "DistanceResolver":
        cfg = settings or get_settings().payroll
        return cls(DistanceMatrixClient(cfg), max_concurrency=cfg.distance_max_concurrency)

    @property
    def lookup_count(self) -> int:
        return len(self._lookups)

    async def _lookup(self, origin: Coordinate, destination: Coordinate) -> float | None:
        async with self._semaphore:
            try:
                return await self._provider.driving_miles(origin, destination)
            except Exception:
                LOGGER.exception("Distance lookup failed for %s", cache_key(origin, destination))
                return None

    async def get_driving_distance(
        self,
        lat1: float | None,
        lon1: float | None,
        lat2: float | None,
        lon2: float | None,
    ) -> float | None:
        """One-way driving miles, or ``None`` when it cannot be computed."""

        if self._provider is None or None in (lat1, lon1, lat2, lon2):
            return None
        origin = (float(lat1), float(lon1))
        destination = (float(lat2), float(lon2))
        key = cache_key(origin, destination)
        lookup = self._lookups.get(key)
        if lookup is None or lookup.cancelled():
            lookup = asyncio.ensure_future(self._lookup(origin, destination))
            self._lookups[key] = lookup
        # A caller giving up must not cancel the lookup other callers share.
        return await asyncio.shield(lookup)

    async def resolve_many(self, pairs: Iterable[CoordinatePair]) -> dict[str, float | None]:
        """Resolve distinct pairs concurrently and warm the cache."""

        unique: dict[str, CoordinatePair] = {}
        for origin, destination in pairs:
            unique.setdefault(cache_key(origin, destination), (origin, destination))
        if not unique:
            return {}
        results = await asyncio.gather(
            *(
                self.get_driving_distance(origin[0], origin[1], destination[0], destination[1])
                for origin, destination in unique.values()
            )
        )
        return dict(zip(unique.keys(), results))

    async def aclose(self) -> None:
        pending = [lookup for lookup in self._lookups.values() if not lookup.done()]
        for lookup in pending:
            lookup.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        close = getattr(self._provider, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "DistanceResolver":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
