"""Result types — the contract between engine, API, and dashboard.

Every result is rebuilt from the current inputs on each calculation; none
of these objects is ever mutated after construction.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


StrategyKey = Literal["ev_home_charging", "ev_fast_charging", "gas_regular", "gas_premium"]
HorizonKey = Literal["daily", "weekly", "monthly", "yearly"]

STRATEGY_LABELS: dict[str, str] = {
    "ev_home_charging": "EV (Home)",
    "ev_fast_charging": "EV (Fast)",
    "gas_regular": "Gas (Regular)",
    "gas_premium": "Gas (Premium)",
}


# ═══════════════════════════════════════════════════════════════════════════
# Core cost results
# ═══════════════════════════════════════════════════════════════════════════

class CostBreakdown(BaseModel):
    """Cost of one energy-sourcing strategy over one distance."""

    cost_per_mile: float
    """Energy price ÷ efficiency ($/mi)."""

    total_cost: float
    """cost_per_mile × distance."""

    fuel_cost: float
    """Energy/fuel share of the total.  No fees or taxes are modelled yet,
    so this always equals ``total_cost``."""


class ScenarioResult(BaseModel):
    """All four strategies costed at the same distance."""

    distance: float
    ev_home_charging: CostBreakdown
    ev_fast_charging: CostBreakdown
    gas_regular: CostBreakdown
    gas_premium: CostBreakdown

    def breakdown(self, key: StrategyKey) -> CostBreakdown:
        return getattr(self, key)


class CalculationResults(BaseModel):
    """Scenarios for every time horizon.

    ``base_scenario`` duplicates ``daily`` so callers can address the
    user's base distance directly.
    """

    base_scenario: ScenarioResult
    daily: ScenarioResult
    weekly: ScenarioResult
    monthly: ScenarioResult
    yearly: ScenarioResult

    def horizon(self, key: HorizonKey) -> ScenarioResult:
        return getattr(self, key)


# ═══════════════════════════════════════════════════════════════════════════
# Break-even explorer
# ═══════════════════════════════════════════════════════════════════════════

class ParityPoint(BaseModel):
    """One point on the break-even line."""

    gas_price: float
    break_even_electricity_price: float


class ParitySummary(BaseModel):
    """Where EV charging and gas cost the same per mile."""

    parity_rate_regular: float
    """Electricity price ($/kWh) matching regular gas per mile."""
    parity_rate_premium: float
    """Electricity price ($/kWh) matching premium gas per mile."""

    home_margin_vs_regular: float
    """Gas-regular cpm − EV-home cpm.  Positive = EV cheaper."""
    home_margin_vs_premium: float
    fast_margin_vs_regular: float
    fast_margin_vs_premium: float


# ═══════════════════════════════════════════════════════════════════════════
# Summary dashboard
# ═══════════════════════════════════════════════════════════════════════════

class StrategyRow(BaseModel):
    key: StrategyKey
    label: str
    total_cost: float
    cost_per_mile: float


class ComparisonSummary(BaseModel):
    """Headline comparison at one horizon."""

    horizon: HorizonKey
    distance: float
    rows: list[StrategyRow]
    cheapest: StrategyKey
    most_expensive: StrategyKey
    baseline: StrategyKey
    gap_to_baseline: float
    """Baseline total − cheapest total ($)."""
    savings_pct_vs_baseline: float
    headline: str
