"""Shared test fixtures — the reference commuter inputs and a fake upstream."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from evgas_calculator.config import CalculatorInputs, Settings
from evgas_calculator.pricing import PriceResolver, RegionPriceCache

_AAA_CALIFORNIA_HTML = """
<html><body>
<h1 class="nati"><span>California</span> Average Gas Prices</h1>
<div class="tblwrap">
  <table class="table-mob">
    <thead><tr><th></th><th>Regular</th><th>Mid-Grade</th><th>Premium</th><th>Diesel</th></tr></thead>
    <tbody>
      <tr><td>Current Avg.</td><td>$4.812</td><td>$5.032</td><td>$5.201</td><td>$5.612</td></tr>
      <tr><td>Yesterday Avg.</td><td>$4.820</td><td>$5.040</td><td>$5.210</td><td>$5.620</td></tr>
    </tbody>
  </table>
</div>
</body></html>
"""

_AAA_NATIONAL_HTML = """
<html><body>
<h1 class="nati"><span>National</span> Average Gas Prices</h1>
<div class="tblwrap">
  <table class="table-mob">
    <thead><tr><th></th><th>Regular</th><th>Mid-Grade</th><th>Premium</th><th>Diesel</th></tr></thead>
    <tbody>
      <tr><td>Current Avg.</td><td>$3.187</td><td>$3.651</td><td>$4.003</td><td>$3.712</td></tr>
    </tbody>
  </table>
</div>
</body></html>
"""


def _zippopotam_payload(state: str, lat: str = "37.7725", lon: str = "-122.4147") -> dict:
    return {
        "post code": "94103",
        "country": "United States",
        "places": [
            {
                "place name": "San Francisco",
                "longitude": lon,
                "state": "California",
                "state abbreviation": state,
                "latitude": lat,
            }
        ],
    }


class FakeUpstream:
    """httpx.MockTransport handler routing by host and counting calls.

    Hosts without a route behave as unreachable (``httpx.ConnectError``).
    Route handlers may be sync or async.
    """

    ZIPPOPOTAM = "api.zippopotam.us"
    AAA = "gasprices.aaa.com"
    EIA = "api.eia.gov"
    NREL = "developer.nrel.gov"
    NOMINATIM = "nominatim.openstreetmap.org"

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.routes: dict[str, Callable[[httpx.Request], object]] = {}

    def route(self, host: str, handler: Callable[[httpx.Request], object]) -> None:
        self.routes[host] = handler

    def count(self, host: str) -> int:
        return sum(1 for r in self.calls if r.url.host == host)

    def __call__(self, request: httpx.Request):
        self.calls.append(request)
        handler = self.routes.get(request.url.host)
        if handler is None:
            raise httpx.ConnectError("unreachable", request=request)
        return handler(request)


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def inputs() -> CalculatorInputs:
    return CalculatorInputs(
        ev_efficiency=3.5,
        gas_efficiency=25,
        regular_gas_price=3.50,
        premium_gas_price=4.00,
        home_electricity_price=0.12,
        fast_charging_price=0.40,
        base_distance=30,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(eia_api_key="", nrel_api_key="TEST_KEY", cache_ttl_seconds=12 * 60 * 60)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock, settings: Settings) -> RegionPriceCache:
    return RegionPriceCache(ttl_seconds=settings.cache_ttl_seconds, clock=clock)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_resolver(settings: Settings, cache: RegionPriceCache, upstream: FakeUpstream):
    """Build a resolver wired to the fake upstream; settings may be overridden."""

    def _make(**overrides) -> PriceResolver:
        s = settings.model_copy(update=overrides) if overrides else settings
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        return PriceResolver(s, cache=cache, client=client)

    return _make


# ═══════════════════════════════════════════════════════════════════════════
# Canned upstream payloads
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def aaa_california_html() -> str:
    return _AAA_CALIFORNIA_HTML


@pytest.fixture
def aaa_national_html() -> str:
    return _AAA_NATIONAL_HTML


@pytest.fixture
def zippopotam_payload() -> Callable[..., dict]:
    """Builder for a one-place Zippopotam.us response."""
    return _zippopotam_payload


@pytest.fixture
def geocode_to() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Zippopotam handler that places every ZIP in ``state`` at ``lon``."""

    def _make(state: str, lon: str = "-122.4147"):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_zippopotam_payload(state, lon=lon))
        return handler

    return _make


@pytest.fixture
def aaa_pages() -> Callable[[httpx.Request], httpx.Response]:
    """AAA handler serving the California page for ?state=, else national."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("state"):
            return httpx.Response(200, text=_AAA_CALIFORNIA_HTML)
        return httpx.Response(200, text=_AAA_NATIONAL_HTML)

    return handler
