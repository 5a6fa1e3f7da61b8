"""Comparison summary — cheapest option, gap to a baseline, headline text."""

from __future__ import annotations

from evgas_calculator.engine.cost import savings_percent
from evgas_calculator.models.results import (
    STRATEGY_LABELS,
    CalculationResults,
    ComparisonSummary,
    HorizonKey,
    StrategyKey,
    StrategyRow,
)

_SCALE_LABELS: dict[str, str] = {
    "daily": "per day",
    "weekly": "per week",
    "monthly": "per month",
    "yearly": "per year",
}


def summarize(
    results: CalculationResults,
    horizon: HorizonKey = "yearly",
    baseline: StrategyKey = "gas_regular",
) -> ComparisonSummary:
    """Rank the four strategies at one horizon and compare to ``baseline``."""
    scenario = results.horizon(horizon)

    rows = [
        StrategyRow(
            key=key,
            label=label,
            total_cost=scenario.breakdown(key).total_cost,
            cost_per_mile=scenario.breakdown(key).cost_per_mile,
        )
        for key, label in STRATEGY_LABELS.items()
    ]
    # min()/max() keep the first row on ties, so EV-home wins a dead heat
    cheapest = min(rows, key=lambda r: r.total_cost)
    most_expensive = max(rows, key=lambda r: r.total_cost)
    base_row = next(r for r in rows if r.key == baseline)

    gap = base_row.total_cost - cheapest.total_cost
    pct = savings_percent(cheapest.total_cost, base_row.total_cost)

    scale = _SCALE_LABELS[horizon]
    if cheapest.key == base_row.key or gap <= 0:
        headline = f"{base_row.label} is already the cheapest option {scale}."
    else:
        headline = (
            f"{cheapest.label} saves ${gap:,.2f} {scale} "
            f"({pct:.0f}%) versus {base_row.label}."
        )

    return ComparisonSummary(
        horizon=horizon,
        distance=scenario.distance,
        rows=rows,
        cheapest=cheapest.key,
        most_expensive=most_expensive.key,
        baseline=baseline,
        gap_to_baseline=gap,
        savings_pct_vs_baseline=pct,
        headline=headline,
    )
