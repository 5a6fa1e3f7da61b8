"""Tests for the HTTP layer (api/server.py).

Covers:
  - Meta endpoints (/health, /, /schema, /inputs/defaults, /presets)
  - Calculation endpoints (/calculate, /parity, /parity/curve)
  - Price endpoints with a stub resolver (/prices, /prices/national, /reverse-geocode)
"""

from __future__ import annotations

import math

import pytest
from fastapi.testclient import TestClient

from evgas_calculator.api.server import _build_inputs, app, get_resolver
from evgas_calculator.models.prices import ElectricityRate, PriceLookupResult, PriceResult
from evgas_calculator.pricing.validation import (
    validate_coordinates,
    validate_zip_code,
)


class StubResolver:
    """Stands in for PriceResolver; records calls, no network."""

    def __init__(self, reverse_zip: str | None = "94103") -> None:
        self.reverse_zip = reverse_zip
        self.lookups: list[tuple[str, list[str]]] = []

    async def lookup(self, zip_code, kinds):
        zip_code = validate_zip_code(zip_code)
        self.lookups.append((zip_code, list(kinds)))
        return PriceLookupResult(
            zip_code=zip_code,
            region="CA",
            electricity=ElectricityRate(residential=0.22, source="Average for CA"),
        )

    async def national_gas_prices(self):
        return PriceResult(regular=3.187, premium=4.003, source="AAA National average")

    async def zip_from_coordinates(self, latitude, longitude):
        validate_coordinates(latitude, longitude)
        return self.reverse_zip


@pytest.fixture
def stub() -> StubResolver:
    return StubResolver()


@pytest.fixture
def client(stub: StubResolver):
    app.dependency_overrides[get_resolver] = lambda: stub
    yield TestClient(app)
    app.dependency_overrides.clear()


# ═══════════════════════════════════════════════════════════════════════════
# Meta endpoints
# ═══════════════════════════════════════════════════════════════════════════


class TestMeta:

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}

    def test_root(self, client):
        assert client.get("/").json()["start_here"] == "POST /calculate"

    def test_schema_lists_every_input(self, client):
        props = client.get("/schema").json()["properties"]
        assert set(props) == {
            "ev_efficiency", "gas_efficiency", "regular_gas_price", "premium_gas_price",
            "home_electricity_price", "fast_charging_price", "base_distance",
        }

    def test_defaults(self, client):
        d = client.get("/inputs/defaults").json()
        assert d["ev_efficiency"] == 3.5
        assert d["base_distance"] == 30

    def test_presets(self, client):
        data = client.get("/presets").json()
        assert len(data["ev"]) > 0
        assert len(data["gas"]) > 0
        assert all(p["efficiency"] > 0 for p in data["ev"] + data["gas"])


# ═══════════════════════════════════════════════════════════════════════════
# Calculation endpoints
# ═══════════════════════════════════════════════════════════════════════════


class TestCalculate:

    def test_defaults_only(self, client):
        r = client.post("/calculate", json={})
        assert r.status_code == 200
        body = r.json()
        yearly = body["results"]["yearly"]
        assert yearly["distance"] == 30 * 365
        assert math.isclose(yearly["gas_regular"]["total_cost"], 1533.0)
        assert body["summary"]["cheapest"] == "ev_home_charging"

    def test_partial_override(self, client):
        r = client.post("/calculate", json={
            "inputs": {"home_electricity_price": 0.60, "fast_charging_price": 0.60},
            "horizon": "monthly",
        })
        summary = r.json()["summary"]
        assert summary["horizon"] == "monthly"
        assert summary["distance"] == 900
        # 0.60 / 3.5 = 0.171 $/mi for both EV strategies, dearer than regular gas at 0.14
        assert summary["cheapest"] == "gas_regular"

    def test_negative_input_rejected(self, client):
        r = client.post("/calculate", json={"inputs": {"regular_gas_price": -1}})
        assert r.status_code == 422

    def test_unknown_horizon_rejected(self, client):
        r = client.post("/calculate", json={"horizon": "hourly"})
        assert r.status_code == 422

    def test_build_inputs_merges_over_defaults(self):
        inputs = _build_inputs({"ev_efficiency": 4.2})
        assert inputs.ev_efficiency == 4.2
        assert inputs.gas_efficiency == 25


class TestParity:

    def test_parity_rate(self, client):
        r = client.get("/parity", params={
            "gas_price": 3.50, "gas_efficiency": 25, "ev_efficiency": 3.5,
        })
        assert r.status_code == 200
        assert math.isclose(r.json()["parity_rate"], 0.49)

    def test_zero_efficiency_is_zero(self, client):
        r = client.get("/parity", params={
            "gas_price": 3.50, "gas_efficiency": 0, "ev_efficiency": 3.5,
        })
        assert r.json()["parity_rate"] == 0.0

    def test_missing_param(self, client):
        assert client.get("/parity", params={"gas_price": 3.5}).status_code == 422

    def test_curve(self, client):
        r = client.post("/parity/curve", json={"steps": 10})
        assert r.status_code == 200
        body = r.json()
        assert len(body["curve"]) == 11
        assert math.isclose(body["summary"]["parity_rate_regular"], 0.49)

    def test_curve_steps_bounded(self, client):
        assert client.post("/parity/curve", json={"steps": 0}).status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# Price endpoints
# ═══════════════════════════════════════════════════════════════════════════


class TestPrices:

    def test_lookup(self, client, stub):
        r = client.get("/prices", params={"zip": "94103", "kinds": "electricity"})
        assert r.status_code == 200
        body = r.json()
        assert body["region"] == "CA"
        assert body["electricity"]["source"] == "Average for CA"
        assert body["gas"] is None
        assert stub.lookups == [("94103", ["electricity"])]

    def test_default_kinds(self, client, stub):
        client.get("/prices", params={"zip": "94103"})
        assert stub.lookups[0][1] == ["electricity", "gas", "fast_charging"]

    def test_invalid_zip(self, client):
        r = client.get("/prices", params={"zip": "9410"})
        assert r.status_code == 400
        assert r.json() == {"detail": "Invalid ZIP code format"}

    def test_unknown_kind(self, client):
        r = client.get("/prices", params={"zip": "94103", "kinds": "diesel"})
        assert r.status_code == 422

    def test_national(self, client):
        assert client.get("/prices/national").json()["regular"] == 3.187


class TestReverseGeocode:

    def test_found(self, client):
        r = client.get("/reverse-geocode", params={"lat": 37.77, "lon": -122.41})
        assert r.json() == {"zip_code": "94103"}

    def test_out_of_range(self, client):
        r = client.get("/reverse-geocode", params={"lat": 95, "lon": -122.41})
        assert r.status_code == 400

    def test_not_found(self, client, stub):
        stub.reverse_zip = None
        r = client.get("/reverse-geocode", params={"lat": 51.5, "lon": -0.14})
        assert r.status_code == 404
        assert r.json()["detail"] == "ZIP code not found for this location"
