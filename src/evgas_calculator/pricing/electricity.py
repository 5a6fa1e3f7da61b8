"""Residential electricity rates — EIA retail-sales API with static fallbacks.

The EIA tier only runs when an API key is configured.  EIA reports price
in cents/kWh; we convert to $/kWh and round to the cent.
"""

from __future__ import annotations

import logging

import httpx

from evgas_calculator.config.settings import Settings
from evgas_calculator.models.prices import ElectricityRate, RegionInfo
from evgas_calculator.pricing.strategies import json_object

logger = logging.getLogger(__name__)

NATIONAL_ELECTRICITY_FALLBACK = ElectricityRate(
    residential=0.12,
    source="National average (fallback)",
)

# $/kWh, EIA historical state averages
STATIC_STATE_ELECTRICITY_RATES: dict[str, float] = {
    "AL": 0.12, "AK": 0.20, "AZ": 0.12, "AR": 0.10,
    "CA": 0.22, "CO": 0.12, "CT": 0.22, "DE": 0.13,
    "FL": 0.12, "GA": 0.11, "HI": 0.30, "ID": 0.10,
    "IL": 0.12, "IN": 0.12, "IA": 0.11, "KS": 0.12,
    "KY": 0.10, "LA": 0.10, "ME": 0.16, "MD": 0.14,
    "MA": 0.22, "MI": 0.15, "MN": 0.13, "MS": 0.11,
    "MO": 0.10, "MT": 0.11, "NE": 0.10, "NV": 0.11,
    "NH": 0.19, "NJ": 0.15, "NM": 0.12, "NY": 0.18,
    "NC": 0.11, "ND": 0.10, "OH": 0.12, "OK": 0.10,
    "OR": 0.11, "PA": 0.14, "RI": 0.20, "SC": 0.12,
    "SD": 0.11, "TN": 0.10, "TX": 0.11, "UT": 0.10,
    "VT": 0.17, "VA": 0.11, "WA": 0.10, "WV": 0.11,
    "WI": 0.14, "WY": 0.11, "DC": 0.13,
}


def static_state_electricity_rate(state_code: str, rate: float) -> ElectricityRate:
    return ElectricityRate(residential=round(rate, 2), source=f"Average for {state_code}")


def cents_to_dollars(cents_per_kwh: float) -> float:
    return round(cents_per_kwh / 100, 2)


class EIAElectricitySource:
    """Latest monthly residential price for a state from EIA open data."""

    name = "EIA residential rate"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._base_url = settings.eia_base_url.rstrip("/")
        self._api_key = settings.eia_api_key

    def cache_key(self, region: RegionInfo | None) -> str | None:
        if not self._api_key:
            return None
        if region is None or not region.state_code:
            return None
        return region.state_code.upper()

    async def fetch(self, region: RegionInfo | None) -> ElectricityRate | None:
        state = self.cache_key(region)
        if state is None:
            return None

        resp = await self._client.get(
            f"{self._base_url}/electricity/retail-sales/data/",
            params={
                "api_key": self._api_key,
                "frequency": "monthly",
                "data[0]": "price",
                "facets[stateid][]": state,
                "facets[sectorid][]": "RES",
                "sort[0][column]": "period",
                "sort[0][direction]": "desc",
                "length": 1,
            },
            headers={"Accept": "application/json"},
        )
        resp.raise_for_status()

        body = json_object(resp.json(), "EIA response")
        rows = json_object(body.get("response") or {}, "EIA response.response").get("data") or []
        if not isinstance(rows, list) or not rows:
            logger.debug("EIA: no data rows for %s", state)
            return None

        cents = float(json_object(rows[0], "EIA data row")["price"])
        if not cents > 0:
            logger.debug("EIA: unusable price %r for %s", rows[0]["price"], state)
            return None

        return ElectricityRate(
            residential=cents_to_dollars(cents),
            source=f"EIA average for {state}",
        )
