"""Price lookup results — what the resolver hands back to callers.

Every value carries a ``source`` label naming the tier that produced it.
The label is shown to end users, so keep it readable.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


PriceKind = Literal["electricity", "gas", "fast_charging"]
ALL_PRICE_KINDS: tuple[PriceKind, ...] = ("electricity", "gas", "fast_charging")


class PriceResult(BaseModel):
    """Regular and premium fuel prices ($/gal) for one region."""

    regular: float = Field(ge=0)
    premium: float = Field(ge=0)
    source: str


class ElectricityRate(BaseModel):
    """Residential electricity rate ($/kWh), rounded to the cent."""

    residential: float = Field(ge=0)
    source: str


class NearestStation(BaseModel):
    name: str
    address: str = ""
    distance_miles: float | None = None


class FastChargingPrice(BaseModel):
    """Estimated DC fast-charging price ($/kWh) near a location."""

    price: float = Field(ge=0)
    source: str
    station_count: int = 0
    nearest_station: NearestStation | None = None


class RegionInfo(BaseModel):
    """Geocoded ZIP — state code plus coordinates when available."""

    zip_code: str
    state_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class PriceLookupResult(BaseModel):
    """Resolved prices for one ZIP.  Only requested kinds are populated."""

    zip_code: str
    region: str | None = None
    electricity: ElectricityRate | None = None
    gas: PriceResult | None = None
    fast_charging: FastChargingPrice | None = None
