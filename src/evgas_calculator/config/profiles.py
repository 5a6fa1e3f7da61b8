"""YAML input profiles — saved calculator setups under ``scenarios/``."""

from __future__ import annotations

from pathlib import Path

import yaml

from evgas_calculator.config.inputs import InputProfile


def load_profile(path: str | Path) -> InputProfile:
    """Load one profile from a YAML file.

    Efficiency fields may be given either as a bare number (treated as a
    manual entry) or as ``{value: ..., origin: auto|manual}``.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    for key in ("ev_efficiency_field", "gas_efficiency_field"):
        if isinstance(data.get(key), (int, float)):
            data[key] = {"value": data[key], "origin": "manual"}

    return InputProfile(**data)


def dump_profile(profile: InputProfile, path: str | Path) -> None:
    with open(path, "w") as f:
        yaml.safe_dump(profile.model_dump(), f, sort_keys=False)
