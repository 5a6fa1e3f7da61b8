"""Input validation for lookups — the only failures surfaced to users."""

from __future__ import annotations

import re

ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")


class ZipCodeValidationError(ValueError):
    """ZIP code is not 5 digits, optionally followed by ``-`` and 4 digits."""


class CoordinateValidationError(ValueError):
    """Latitude/longitude missing or out of range."""


def validate_zip_code(zip_code: str | None) -> str:
    """Return the trimmed ZIP or raise ``ZipCodeValidationError``."""
    if zip_code is None or not zip_code.strip():
        raise ZipCodeValidationError("ZIP code is required")
    trimmed = zip_code.strip()
    if not ZIP_PATTERN.match(trimmed):
        raise ZipCodeValidationError("Invalid ZIP code format")
    return trimmed


def is_valid_zip_code(zip_code: str | None) -> bool:
    try:
        validate_zip_code(zip_code)
    except ZipCodeValidationError:
        return False
    return True


def validate_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    if latitude != latitude or longitude != longitude:
        raise CoordinateValidationError("Invalid latitude or longitude")
    if not -90 <= latitude <= 90:
        raise CoordinateValidationError("Latitude must be between -90 and 90")
    if not -180 <= longitude <= 180:
        raise CoordinateValidationError("Longitude must be between -180 and 180")
    return latitude, longitude
