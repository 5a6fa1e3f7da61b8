"""EV vs Gas Cost Calculator — Streamlit dashboard.

Layout: sidebar inputs (presets, ZIP lookup, prices) → main area with the
summary metrics, the horizon table, and the break-even numbers.
Run with:
    streamlit run src/evgas_calculator/dashboard/app.py
"""

from __future__ import annotations

import asyncio

import pandas as pd
import streamlit as st

from evgas_calculator.config import (
    EV_PRESETS,
    GAS_PRESETS,
    CalculatorInputs,
    EfficiencyValue,
    get_settings,
)
from evgas_calculator.engine.breakeven import build_parity_curve, compute_parity_summary
from evgas_calculator.engine.cost import compute_all_scenarios
from evgas_calculator.engine.summary import summarize
from evgas_calculator.logging_setup import setup_logging
from evgas_calculator.models.prices import PriceLookupResult
from evgas_calculator.models.results import STRATEGY_LABELS, CalculationResults
from evgas_calculator.pricing import (
    PriceResolver,
    RegionPriceCache,
    ZipCodeValidationError,
)

_DEF = CalculatorInputs()

st.set_page_config(page_title="EV vs Gas Cost Calculator", page_icon="⚡", layout="wide")


# ---------------------------------------------------------------------------
# Process-wide cache, kept across Streamlit reruns
# ---------------------------------------------------------------------------
@st.cache_resource
def _price_cache() -> RegionPriceCache:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    return RegionPriceCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_entries=settings.cache_max_entries,
    )


async def _lookup(zip_code: str) -> PriceLookupResult:
    async with PriceResolver(get_settings(), cache=_price_cache()) as resolver:
        return await resolver.lookup(zip_code)


def _init_state() -> None:
    defaults = {
        "ev_eff": EfficiencyValue(value=_DEF.ev_efficiency),
        "gas_eff": EfficiencyValue(value=_DEF.gas_efficiency),
        "regular_gas_price": _DEF.regular_gas_price,
        "premium_gas_price": _DEF.premium_gas_price,
        "home_electricity_price": _DEF.home_electricity_price,
        "fast_charging_price": _DEF.fast_charging_price,
        "price_sources": {},
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _efficiency_input(label: str, state_key: str, step: float) -> float:
    """Number input that flips an auto-filled value to manual when edited."""
    current: EfficiencyValue = st.session_state[state_key]
    tag = " (Auto)" if current.origin == "auto" else ""
    value = st.sidebar.number_input(
        f"{label}{tag}", min_value=0.0, value=float(current.value), step=step,
    )
    if value != current.value:
        st.session_state[state_key] = current.edit(value)
    return value


def _horizon_table(results: CalculationResults) -> pd.DataFrame:
    rows = []
    for horizon in ("daily", "weekly", "monthly", "yearly"):
        scenario = results.horizon(horizon)
        row = {"Horizon": horizon.title(), "Miles": scenario.distance}
        for key, label in STRATEGY_LABELS.items():
            row[label] = scenario.breakdown(key).total_cost
        rows.append(row)
    return pd.DataFrame(rows).set_index("Horizon")


# ---------------------------------------------------------------------------
# Sidebar: inputs
# ---------------------------------------------------------------------------
_init_state()
st.sidebar.header("Vehicles")

ev_names = ["Custom"] + [p.name for p in EV_PRESETS]
ev_choice = st.sidebar.selectbox("EV preset", ev_names)
if ev_choice != "Custom" and st.sidebar.button("Use EV preset"):
    preset = next(p for p in EV_PRESETS if p.name == ev_choice)
    st.session_state["ev_eff"] = st.session_state["ev_eff"].apply_lookup(
        preset.efficiency, overwrite=True,
    )

gas_names = ["Custom"] + [p.name for p in GAS_PRESETS]
gas_choice = st.sidebar.selectbox("Gas preset", gas_names)
if gas_choice != "Custom" and st.sidebar.button("Use gas preset"):
    preset = next(p for p in GAS_PRESETS if p.name == gas_choice)
    st.session_state["gas_eff"] = st.session_state["gas_eff"].apply_lookup(
        preset.efficiency, overwrite=True,
    )

ev_efficiency = _efficiency_input("EV efficiency (mi/kWh)", "ev_eff", 0.1)
gas_efficiency = _efficiency_input("Gas efficiency (mpg)", "gas_eff", 1.0)

st.sidebar.header("Local prices")
zip_code = st.sidebar.text_input("ZIP code", placeholder="e.g. 94103")
if st.sidebar.button("Look up prices"):
    try:
        found = asyncio.run(_lookup(zip_code))
    except ZipCodeValidationError:
        st.sidebar.error("Invalid ZIP format. Use 5 digits or 5+4.")
    else:
        sources: dict[str, str] = {}
        if found.gas:
            st.session_state["regular_gas_price"] = found.gas.regular
            st.session_state["premium_gas_price"] = found.gas.premium
            sources["Gas"] = found.gas.source
        if found.electricity:
            st.session_state["home_electricity_price"] = found.electricity.residential
            sources["Electricity"] = found.electricity.source
        if found.fast_charging:
            st.session_state["fast_charging_price"] = found.fast_charging.price
            sources["Fast charging"] = found.fast_charging.source
        st.session_state["price_sources"] = sources

for label, source in st.session_state["price_sources"].items():
    st.sidebar.caption(f"{label}: {source}")

regular_gas_price = st.sidebar.number_input(
    "Regular gas ($/gal)", min_value=0.0, step=0.05, key="regular_gas_price",
)
premium_gas_price = st.sidebar.number_input(
    "Premium gas ($/gal)", min_value=0.0, step=0.05, key="premium_gas_price",
)
home_electricity_price = st.sidebar.number_input(
    "Home electricity ($/kWh)", min_value=0.0, step=0.01, key="home_electricity_price",
)
fast_charging_price = st.sidebar.number_input(
    "Fast charging ($/kWh)", min_value=0.0, step=0.01, key="fast_charging_price",
)

st.sidebar.header("Driving")
base_distance = st.sidebar.number_input(
    "Miles per day", min_value=0.0, value=_DEF.base_distance, step=1.0,
)
horizon = st.sidebar.selectbox("Summary horizon", ["daily", "weekly", "monthly", "yearly"], index=3)

# ---------------------------------------------------------------------------
# Main area: results
# ---------------------------------------------------------------------------
inputs = CalculatorInputs(
    ev_efficiency=ev_efficiency,
    gas_efficiency=gas_efficiency,
    regular_gas_price=regular_gas_price,
    premium_gas_price=premium_gas_price,
    home_electricity_price=home_electricity_price,
    fast_charging_price=fast_charging_price,
    base_distance=base_distance,
)
results = compute_all_scenarios(inputs)
summary = summarize(results, horizon=horizon)

st.title("EV vs Gas Cost Calculator")
st.markdown(f"**{summary.headline}**")

cols = st.columns(4)
for col, row in zip(cols, summary.rows):
    col.metric(row.label, f"${row.total_cost:,.2f}", f"{row.cost_per_mile * 100:.1f}¢/mi",
               delta_color="off")

st.subheader("Cost by horizon")
st.dataframe(_horizon_table(results).style.format("${:,.2f}", subset=list(STRATEGY_LABELS.values())))

st.subheader("Break-even")
parity = compute_parity_summary(inputs)
c1, c2 = st.columns(2)
c1.metric("Parity rate vs regular", f"${parity.parity_rate_regular:.2f}/kWh")
c2.metric("Parity rate vs premium", f"${parity.parity_rate_premium:.2f}/kWh")

with st.expander("Break-even line (gas $/gal → electricity $/kWh)"):
    curve = build_parity_curve(inputs)
    st.dataframe(pd.DataFrame([p.model_dump() for p in curve]))
