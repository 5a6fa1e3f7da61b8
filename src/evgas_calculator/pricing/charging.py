"""DC fast-charging prices — nearby stations from NREL, else regional bands."""

from __future__ import annotations

import logging
import re

import httpx

from evgas_calculator.config.settings import Settings
from evgas_calculator.models.prices import FastChargingPrice, NearestStation, RegionInfo
from evgas_calculator.pricing.strategies import json_object

logger = logging.getLogger(__name__)

DEFAULT_FAST_CHARGING_PRICE = 0.40

FAST_CHARGING_FALLBACK = FastChargingPrice(
    price=DEFAULT_FAST_CHARGING_PRICE,
    source="Average fast charging price (fallback)",
)

# Published per-kWh pricing typical for networks that don't list a rate
NETWORK_TYPICAL_PRICES: tuple[tuple[str, float], ...] = (
    ("tesla", 0.40),
    ("electrify", 0.37),
    ("chargepoint", 0.35),
)

# Stations quoting outside (0, 2) $/kWh are almost certainly session or
# per-minute fees, not energy prices.
_MAX_SANE_PRICE = 2.0
_NUMBER = re.compile(r"(\d+\.?\d*)")


def regional_fast_charging_price(longitude: float) -> float:
    """Longitude band estimate: West Coast highest, Midwest lowest."""
    if longitude < -110:
        return 0.45
    if longitude < -95:
        return 0.40
    if longitude < -85:
        return 0.35
    return 0.40


def _station_price(pricing: object) -> float | None:
    match = _NUMBER.search(str(pricing))
    if not match:
        return None
    price = float(match.group(1))
    return price if 0 < price < _MAX_SANE_PRICE else None


def average_station_price(stations: list[dict]) -> tuple[float | None, int]:
    """Average quoted $/kWh across stations.

    Returns (average rounded to the cent, number of stations with an
    explicit price).  Network typical prices only fill in while no
    explicit price has been seen yet.
    """
    prices: list[float] = []
    priced_stations = 0
    for station in stations:
        if not isinstance(station, dict):
            continue
        if station.get("ev_pricing"):
            price = _station_price(station["ev_pricing"])
            if price is not None:
                prices.append(price)
                priced_stations += 1

        network = str(station.get("ev_network") or "").lower()
        if network and not prices:
            for name, typical in NETWORK_TYPICAL_PRICES:
                if name in network:
                    prices.append(typical)
                    break

    if not prices:
        return None, 0
    return round(sum(prices) / len(prices), 2), priced_stations


def _nearest(stations: list[dict]) -> NearestStation | None:
    first = next((s for s in stations if isinstance(s, dict)), None)
    if first is None:
        return None
    distance = first.get("distance")
    return NearestStation(
        name=str(first.get("station_name") or ""),
        address=str(first.get("street_address") or ""),
        distance_miles=round(float(distance), 1) if distance is not None else None,
    )


class RegionalChargingEstimate:
    """Longitude-band tier for when no station data is available."""

    name = "Regional fast charging estimate"

    async def resolve(self, region: RegionInfo | None) -> FastChargingPrice | None:
        if region is None or region.longitude is None:
            return None
        return FastChargingPrice(
            price=regional_fast_charging_price(region.longitude),
            source="Regional average fast charging price",
        )


class NRELChargingSource:
    """Nearest public DC fast chargers from the NREL alt-fuel-stations API.

    Results are cached per half-degree grid cell (about 35 miles), well
    inside the 50-mile search radius, so nearby ZIPs share one entry.
    """

    name = "NREL nearby fast chargers"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._base_url = settings.nrel_base_url.rstrip("/")
        self._api_key = settings.nrel_api_key

    def cache_key(self, region: RegionInfo | None) -> str | None:
        if region is None or region.latitude is None or region.longitude is None:
            return None
        lat = round(region.latitude * 2) / 2
        lon = round(region.longitude * 2) / 2
        return f"{region.state_code or 'US'}@{lat:.1f},{lon:.1f}"

    async def fetch(self, region: RegionInfo | None) -> FastChargingPrice | None:
        if self.cache_key(region) is None:
            return None

        resp = await self._client.get(
            f"{self._base_url}/nearest.json",
            params={
                "api_key": self._api_key,
                "latitude": region.latitude,
                "longitude": region.longitude,
                "fuel_type": "ELEC",
                "ev_charging_level": "dc_fast",
                "status": "E",
                "limit": 10,
                "radius": 50,
            },
            headers={"Accept": "application/json"},
        )
        resp.raise_for_status()
        stations = json_object(resp.json(), "NREL response").get("fuel_stations") or []
        if not isinstance(stations, list):
            raise ValueError("NREL response: fuel_stations is not a list")
        logger.debug("NREL: %d stations near %s", len(stations), region.zip_code)

        if not stations:
            return FastChargingPrice(
                price=DEFAULT_FAST_CHARGING_PRICE,
                source="Average fast charging price (no stations found)",
            )

        average, priced = average_station_price(stations)
        if average is None:
            return FastChargingPrice(
                price=regional_fast_charging_price(region.longitude),
                source="Regional average fast charging price",
                station_count=len(stations),
                nearest_station=_nearest(stations),
            )

        if priced:
            plural = "s" if priced > 1 else ""
            source = f"Average from {priced} nearby fast charger{plural}"
        else:
            source = "Typical network pricing near you"
        return FastChargingPrice(
            price=average,
            source=source,
            station_count=len(stations),
            nearest_station=_nearest(stations),
        )
