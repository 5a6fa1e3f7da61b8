"""Validation tests — calculator inputs, efficiency tagging, ZIP and coordinates."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from evgas_calculator.config import CalculatorInputs, EfficiencyValue, InputProfile, Settings
from evgas_calculator.pricing.validation import (
    CoordinateValidationError,
    ZipCodeValidationError,
    is_valid_zip_code,
    validate_coordinates,
    validate_zip_code,
)


# ═══════════════════════════════════════════════════════════════════════════
# CalculatorInputs
# ═══════════════════════════════════════════════════════════════════════════

class TestCalculatorInputs:

    def test_defaults_are_valid(self):
        i = CalculatorInputs()
        assert i.ev_efficiency == 3.5
        assert i.base_distance == 30

    @pytest.mark.parametrize(
        "field",
        [
            "ev_efficiency", "gas_efficiency", "regular_gas_price", "premium_gas_price",
            "home_electricity_price", "fast_charging_price", "base_distance",
        ],
    )
    def test_negative_rejected(self, field):
        with pytest.raises(ValidationError):
            CalculatorInputs(**{field: -0.01})

    def test_zero_efficiency_accepted(self):
        i = CalculatorInputs(ev_efficiency=0, gas_efficiency=0)
        assert i.ev_efficiency == 0


# ═══════════════════════════════════════════════════════════════════════════
# EfficiencyValue
# ═══════════════════════════════════════════════════════════════════════════

class TestEfficiencyValue:

    def test_auto_then_edit_becomes_manual(self):
        v = EfficiencyValue.auto(4.2)
        assert v.origin == "auto"
        edited = v.edit(4.0)
        assert edited.origin == "manual"
        assert edited.value == 4.0
        assert v.value == 4.2  # original untouched

    def test_manual_is_sticky_against_lookup(self):
        v = EfficiencyValue(value=3.9, origin="manual")
        assert v.apply_lookup(4.2) is v

    def test_explicit_overwrite_replaces_manual(self):
        v = EfficiencyValue(value=3.9, origin="manual").apply_lookup(4.2, overwrite=True)
        assert v.value == 4.2
        assert v.origin == "auto"

    def test_auto_accepts_lookup(self):
        v = EfficiencyValue.auto(3.5).apply_lookup(3.8)
        assert v == EfficiencyValue(value=3.8, origin="auto")

    def test_profile_to_inputs(self):
        p = InputProfile(ev_efficiency_field=EfficiencyValue.auto(4.2), base_distance=45)
        i = p.to_inputs()
        assert i.ev_efficiency == 4.2
        assert i.gas_efficiency == 25.0
        assert i.base_distance == 45


# ═══════════════════════════════════════════════════════════════════════════
# ZIP / coordinates
# ═══════════════════════════════════════════════════════════════════════════

class TestZipValidation:

    @pytest.mark.parametrize("zip_code", ["94103", "10001-1234", " 02139 ", "00000"])
    def test_valid(self, zip_code):
        assert validate_zip_code(zip_code) == zip_code.strip()
        assert is_valid_zip_code(zip_code)

    @pytest.mark.parametrize(
        "zip_code", ["", "   ", "1234", "123456", "abcde", "94103-12", "94103 1234", "9410a", None],
    )
    def test_invalid(self, zip_code):
        with pytest.raises(ZipCodeValidationError):
            validate_zip_code(zip_code)
        assert not is_valid_zip_code(zip_code)

    def test_is_value_error(self):
        assert issubclass(ZipCodeValidationError, ValueError)


class TestCoordinateValidation:

    def test_valid(self):
        assert validate_coordinates(37.77, -122.41) == (37.77, -122.41)
        assert validate_coordinates(-90, 180) == (-90, 180)

    @pytest.mark.parametrize(
        "lat,lon", [(91, 0), (-90.1, 0), (0, 180.5), (0, -181), (float("nan"), 0)],
    )
    def test_out_of_range(self, lat, lon):
        with pytest.raises(CoordinateValidationError):
            validate_coordinates(lat, lon)


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════

class TestSettings:

    @pytest.mark.parametrize(
        "given,expected",
        [("verbose", "DEBUG"), ("LITE", "WARNING"), ("info", "INFO"), (" error ", "ERROR")],
    )
    def test_log_level_aliases(self, given, expected):
        assert Settings(log_level=given).log_level == expected

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_log_format(self):
        assert Settings().log_format in ("text", "json")
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_cache_bounds(self):
        with pytest.raises(ValidationError):
            Settings(cache_max_entries=0)
