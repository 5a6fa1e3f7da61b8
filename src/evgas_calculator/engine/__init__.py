"""Engine — pure cost arithmetic, break-even analysis, summaries."""

from evgas_calculator.engine.cost import (
    HORIZON_MULTIPLIERS,
    compute_all_scenarios,
    compute_scenario,
    cost_breakdown,
    cost_per_mile,
    electricity_parity_rate,
    savings_percent,
)
from evgas_calculator.engine.breakeven import (
    build_parity_curve,
    compute_parity_summary,
    gas_parity_price,
)
from evgas_calculator.engine.summary import summarize

__all__ = [
    "HORIZON_MULTIPLIERS",
    "cost_per_mile",
    "cost_breakdown",
    "compute_scenario",
    "compute_all_scenarios",
    "electricity_parity_rate",
    "savings_percent",
    # Break-even explorer
    "gas_parity_price",
    "compute_parity_summary",
    "build_parity_curve",
    "summarize",
]
