"""Break-even explorer — parity rates, per-mile margins, and the parity line.

The parity line maps a gas price to the electricity price at which home
charging costs exactly the same per mile.  Points above the line favour
gas; points below favour the EV.
"""

from __future__ import annotations

import numpy as np

from evgas_calculator.config.inputs import CalculatorInputs
from evgas_calculator.engine.cost import cost_per_mile, electricity_parity_rate
from evgas_calculator.models.results import ParityPoint, ParitySummary

# Gas-price domain bounds for the parity line ($/gal)
MIN_GAS_PRICE = 0.5
MAX_GAS_PRICE = 12.0
MIN_GAS_CEILING = 3.0


def gas_parity_price(
    electricity_price: float,
    ev_efficiency: float,
    gas_efficiency: float,
) -> float:
    """Gas price at which a gas car costs the same per mile as the EV."""
    if ev_efficiency <= 0 or gas_efficiency <= 0:
        return 0.0
    return (electricity_price / ev_efficiency) * gas_efficiency


def compute_parity_summary(inputs: CalculatorInputs) -> ParitySummary:
    """Parity rates against both gas grades and per-mile margins."""
    ev_home = cost_per_mile(inputs.home_electricity_price, inputs.ev_efficiency)
    ev_fast = cost_per_mile(inputs.fast_charging_price, inputs.ev_efficiency)
    gas_regular = cost_per_mile(inputs.regular_gas_price, inputs.gas_efficiency)
    gas_premium = cost_per_mile(inputs.premium_gas_price, inputs.gas_efficiency)

    return ParitySummary(
        parity_rate_regular=electricity_parity_rate(
            inputs.regular_gas_price, inputs.gas_efficiency, inputs.ev_efficiency,
        ),
        parity_rate_premium=electricity_parity_rate(
            inputs.premium_gas_price, inputs.gas_efficiency, inputs.ev_efficiency,
        ),
        home_margin_vs_regular=gas_regular - ev_home,
        home_margin_vs_premium=gas_premium - ev_home,
        fast_margin_vs_regular=gas_regular - ev_fast,
        fast_margin_vs_premium=gas_premium - ev_fast,
    )


def gas_price_domain(inputs: CalculatorInputs) -> tuple[float, float]:
    """Gas-price range worth plotting around the current prices."""
    lowest = min(inputs.regular_gas_price, inputs.premium_gas_price)
    highest = max(inputs.regular_gas_price * 1.2, inputs.premium_gas_price * 1.2)
    low = max(MIN_GAS_PRICE, lowest * 0.6)
    high = min(MAX_GAS_PRICE, max(MIN_GAS_CEILING, highest * 1.3))
    return low, high


def build_parity_curve(inputs: CalculatorInputs, steps: int = 24) -> list[ParityPoint]:
    """Break-even electricity price for ``steps + 1`` evenly spaced gas prices."""
    low, high = gas_price_domain(inputs)
    ratio = (
        inputs.ev_efficiency / inputs.gas_efficiency
        if inputs.gas_efficiency > 0
        else 0.0
    )
    gas_prices = np.linspace(low, high, max(steps, 1) + 1)
    return [
        ParityPoint(
            gas_price=round(float(p), 4),
            break_even_electricity_price=round(float(p) * ratio, 4),
        )
        for p in gas_prices
    ]
