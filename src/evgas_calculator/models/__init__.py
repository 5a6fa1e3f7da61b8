"""Result models — calculation and price-lookup output contracts."""

from evgas_calculator.models.prices import (
    ElectricityRate,
    FastChargingPrice,
    NearestStation,
    PriceLookupResult,
    PriceResult,
    RegionInfo,
)
from evgas_calculator.models.results import (
    CalculationResults,
    ComparisonSummary,
    CostBreakdown,
    ParityPoint,
    ParitySummary,
    ScenarioResult,
)

__all__ = [
    "CalculationResults",
    "ComparisonSummary",
    "CostBreakdown",
    "ParityPoint",
    "ParitySummary",
    "ScenarioResult",
    "ElectricityRate",
    "FastChargingPrice",
    "NearestStation",
    "PriceLookupResult",
    "PriceResult",
    "RegionInfo",
]
