"""Calculator inputs — vehicle efficiency, energy prices, daily distance."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CalculatorInputs(BaseModel):
    """Everything the cost engine needs for one comparison.

    Efficiencies may be zero (e.g. a field the user has cleared); the engine
    treats a non-positive efficiency as "no cost" rather than failing.
    """

    ev_efficiency: float = Field(default=3.5, ge=0, description="EV efficiency (mi/kWh)")
    gas_efficiency: float = Field(default=25.0, ge=0, description="Gas vehicle efficiency (mpg)")
    regular_gas_price: float = Field(default=3.50, ge=0, description="Regular fuel price ($/gal)")
    premium_gas_price: float = Field(default=4.00, ge=0, description="Premium fuel price ($/gal)")
    home_electricity_price: float = Field(
        default=0.12, ge=0, description="Residential electricity rate for home charging ($/kWh)",
    )
    fast_charging_price: float = Field(
        default=0.40, ge=0, description="DC fast-charging price ($/kWh)",
    )
    base_distance: float = Field(default=30.0, ge=0, description="Miles driven per day")


EfficiencyOrigin = Literal["auto", "manual"]


class EfficiencyValue(BaseModel):
    """An efficiency figure tagged with where it came from.

    Values pre-filled from a vehicle lookup are ``auto``.  Once the user
    types over one it becomes ``manual`` and stays that way until a new
    lookup explicitly overwrites it.
    """

    value: float = Field(ge=0)
    origin: EfficiencyOrigin = "manual"

    @classmethod
    def auto(cls, value: float) -> EfficiencyValue:
        return cls(value=value, origin="auto")

    def edit(self, value: float) -> EfficiencyValue:
        """User typed a new value."""
        return EfficiencyValue(value=value, origin="manual")

    def apply_lookup(self, value: float, overwrite: bool = False) -> EfficiencyValue:
        """Merge a looked-up value.

        Manual values win unless ``overwrite`` is set (the user picked a
        new vehicle, which always replaces what was there).
        """
        if self.origin == "manual" and not overwrite:
            return self
        return EfficiencyValue.auto(value)


class InputProfile(BaseModel):
    """A saved set of inputs, as loaded from YAML or held by the dashboard."""

    name: str = Field(default="Default", description="Human label for this profile")
    zip_code: str | None = Field(default=None, description="ZIP used for the last price lookup")
    ev_efficiency_field: EfficiencyValue = Field(
        default_factory=lambda: EfficiencyValue(value=3.5),
    )
    gas_efficiency_field: EfficiencyValue = Field(
        default_factory=lambda: EfficiencyValue(value=25.0),
    )
    regular_gas_price: float = Field(default=3.50, ge=0)
    premium_gas_price: float = Field(default=4.00, ge=0)
    home_electricity_price: float = Field(default=0.12, ge=0)
    fast_charging_price: float = Field(default=0.40, ge=0)
    base_distance: float = Field(default=30.0, ge=0)

    def to_inputs(self) -> CalculatorInputs:
        return CalculatorInputs(
            ev_efficiency=self.ev_efficiency_field.value,
            gas_efficiency=self.gas_efficiency_field.value,
            regular_gas_price=self.regular_gas_price,
            premium_gas_price=self.premium_gas_price,
            home_electricity_price=self.home_electricity_price,
            fast_charging_price=self.fast_charging_price,
            base_distance=self.base_distance,
        )
