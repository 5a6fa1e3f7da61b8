"""Configuration models — calculator inputs, presets, runtime settings."""

from evgas_calculator.config.inputs import CalculatorInputs, EfficiencyValue, InputProfile
from evgas_calculator.config.presets import EV_PRESETS, GAS_PRESETS, VehiclePreset, find_preset
from evgas_calculator.config.settings import Settings, get_settings

__all__ = [
    "CalculatorInputs",
    "EfficiencyValue",
    "InputProfile",
    "VehiclePreset",
    "EV_PRESETS",
    "GAS_PRESETS",
    "find_preset",
    "Settings",
    "get_settings",
]
