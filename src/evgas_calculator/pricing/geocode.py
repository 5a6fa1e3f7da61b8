"""Postal geocoding — ZIP → state/coords (Zippopotam.us), coords → ZIP (Nominatim).

Lookups never raise on upstream trouble: a failed geocode returns None and
the resolver falls through to national prices.
"""

from __future__ import annotations

import logging
import re

import httpx

from evgas_calculator.config.settings import Settings
from evgas_calculator.models.prices import RegionInfo
from evgas_calculator.pricing.strategies import UPSTREAM_ERRORS, json_object
from evgas_calculator.pricing.validation import validate_coordinates

logger = logging.getLogger(__name__)

_FIVE_DIGITS = re.compile(r"^\d{5}$")


def _as_float(value: object) -> float | None:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


class ZipGeocoder:
    """ZIP → RegionInfo via the Zippopotam.us postal API."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._base_url = settings.zippopotam_base_url.rstrip("/")

    async def lookup(self, zip_code: str) -> RegionInfo | None:
        zip5 = zip_code[:5]
        try:
            resp = await self._client.get(
                f"{self._base_url}/us/{zip5}",
                headers={"Accept": "application/json"},
            )
            if resp.status_code == 404:
                logger.debug("Geocode: ZIP %s not found", zip5)
                return None
            resp.raise_for_status()
            places = json_object(resp.json(), "Zippopotam response").get("places") or []
            if not isinstance(places, list) or not places:
                logger.debug("Geocode: no places for ZIP %s", zip5)
                return None
            place = json_object(places[0], "Zippopotam place")
            state = place.get("state abbreviation") or place.get("state_abbreviation")
        except UPSTREAM_ERRORS as exc:
            logger.warning("Geocode failed for ZIP %s: %s", zip5, exc)
            return None

        return RegionInfo(
            zip_code=zip_code,
            state_code=str(state).upper() if state else None,
            latitude=_as_float(place.get("latitude")),
            longitude=_as_float(place.get("longitude")),
        )


async def reverse_geocode(
    client: httpx.AsyncClient,
    settings: Settings,
    latitude: float,
    longitude: float,
) -> str | None:
    """Coordinates → 5-digit ZIP, or None if the location has no usable postcode.

    Raises ``CoordinateValidationError`` for out-of-range input.
    """
    validate_coordinates(latitude, longitude)
    base_url = settings.nominatim_base_url.rstrip("/")
    try:
        resp = await client.get(
            f"{base_url}/reverse",
            params={
                "format": "json",
                "lat": latitude,
                "lon": longitude,
                "addressdetails": 1,
            },
            headers={"Accept": "application/json"},
        )
        resp.raise_for_status()
        address = json_object(resp.json(), "Nominatim response").get("address") or {}
        if not isinstance(address, dict):
            address = {}
    except UPSTREAM_ERRORS as exc:
        logger.warning("Reverse geocode failed for %.4f,%.4f: %s", latitude, longitude, exc)
        return None

    postcode = address.get("postcode")
    if not postcode:
        logger.debug("Reverse geocode: no postcode in %s", sorted(address))
        return None

    zip5 = re.sub(r"\s+", "", str(postcode))[:5]
    if not _FIVE_DIGITS.match(zip5):
        logger.debug("Reverse geocode: postcode %r is not a US ZIP", postcode)
        return None
    return zip5
