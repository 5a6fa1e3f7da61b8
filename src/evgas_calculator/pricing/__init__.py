"""Price resolution — geocoding, tiered price sources, region cache."""

from evgas_calculator.pricing.cache import NATIONAL_KEY, RegionPriceCache
from evgas_calculator.pricing.resolver import LookupSequencer, PriceResolver, build_http_client
from evgas_calculator.pricing.validation import (
    CoordinateValidationError,
    ZipCodeValidationError,
    is_valid_zip_code,
    validate_coordinates,
    validate_zip_code,
)

__all__ = [
    "NATIONAL_KEY",
    "RegionPriceCache",
    "LookupSequencer",
    "PriceResolver",
    "build_http_client",
    "CoordinateValidationError",
    "ZipCodeValidationError",
    "is_valid_zip_code",
    "validate_coordinates",
    "validate_zip_code",
]
