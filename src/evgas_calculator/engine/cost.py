"""Cost engine — per-mile and horizon costs for the four energy strategies.

Pure arithmetic: CalculatorInputs → CalculationResults.  Every function is
total over its numeric domain; division hazards return 0 instead of raising
so the UI can recompute on every keystroke without guarding.
"""

from __future__ import annotations

from evgas_calculator.config.inputs import CalculatorInputs
from evgas_calculator.models.results import CalculationResults, CostBreakdown, ScenarioResult

# Horizon → multiple of the base (daily) distance
HORIZON_MULTIPLIERS: dict[str, int] = {
    "daily": 1,
    "weekly": 7,
    "monthly": 30,
    "yearly": 365,
}


def cost_per_mile(energy_price: float, efficiency: float) -> float:
    """Energy price per unit ÷ miles per unit.  0 when efficiency ≤ 0."""
    if efficiency <= 0:
        return 0.0
    return energy_price / efficiency


def cost_breakdown(cost_per_mile: float, distance: float) -> CostBreakdown:
    """Scale a per-mile cost to a distance.  Linear; no fixed fees."""
    total_cost = cost_per_mile * distance
    return CostBreakdown(
        cost_per_mile=cost_per_mile,
        total_cost=total_cost,
        fuel_cost=total_cost,
    )


def compute_scenario(inputs: CalculatorInputs, distance: float) -> ScenarioResult:
    """Cost all four strategies at one distance."""
    ev_home_cpm = cost_per_mile(inputs.home_electricity_price, inputs.ev_efficiency)
    ev_fast_cpm = cost_per_mile(inputs.fast_charging_price, inputs.ev_efficiency)
    gas_regular_cpm = cost_per_mile(inputs.regular_gas_price, inputs.gas_efficiency)
    gas_premium_cpm = cost_per_mile(inputs.premium_gas_price, inputs.gas_efficiency)

    return ScenarioResult(
        distance=distance,
        ev_home_charging=cost_breakdown(ev_home_cpm, distance),
        ev_fast_charging=cost_breakdown(ev_fast_cpm, distance),
        gas_regular=cost_breakdown(gas_regular_cpm, distance),
        gas_premium=cost_breakdown(gas_premium_cpm, distance),
    )


def compute_all_scenarios(inputs: CalculatorInputs) -> CalculationResults:
    """Build every horizon from the base daily distance."""
    base = inputs.base_distance
    scenarios = {
        horizon: compute_scenario(inputs, base * multiple)
        for horizon, multiple in HORIZON_MULTIPLIERS.items()
    }
    return CalculationResults(
        base_scenario=compute_scenario(inputs, base),
        **scenarios,
    )


def electricity_parity_rate(
    gas_price: float,
    gas_efficiency: float,
    ev_efficiency: float,
) -> float:
    """Electricity price at which an EV costs the same per mile as gas.

    = (gas_price / gas_efficiency) × ev_efficiency
    """
    if gas_efficiency <= 0 or ev_efficiency <= 0:
        return 0.0
    return (gas_price / gas_efficiency) * ev_efficiency


def savings_percent(cheaper: float, more_expensive: float) -> float:
    """Percentage saved by choosing ``cheaper``.  0 when the base is 0."""
    if more_expensive == 0:
        return 0.0
    return ((more_expensive - cheaper) / more_expensive) * 100
