"""
Tests for reporting/number_format.py.

What we test
------------
1. Missing values — None, NaN and non-numeric input render as "N/A".
2. Accounting — two decimals, grouping, then the separator swap.
3. Auto / fixed — magnitude bands and the comma-decimal trim, including the
   scientific sub-path ("5,000e-5", "0,000e+").
4. Scientific — toExponential shape, explicit digits override.
5. Fallback types — plain stringification.
6. Pipeline steps — trim, swap and half-up rounding tested on their own.
7. Units and Portuguese type aliases.
"""

from __future__ import annotations

import math

import pytest

from model_insight.reporting.number_format import (
    NOT_AVAILABLE,
    format_number,
    plain_number,
    swap_separators,
    to_exponential,
    to_fixed,
    trim_decimal_comma,
)


# ── Missing values ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value", [None, float("nan"), "abc", object()])
def test_missing_or_non_numeric_is_not_available(value: object) -> None:
    assert format_number(value) == NOT_AVAILABLE == "N/A"


def test_not_available_ignores_unit() -> None:
    assert format_number(None, unit="kg") == "N/A"


def test_not_available_for_every_type() -> None:
    for type_ in ("auto", "fixed", "scientific", "accounting", "other"):
        assert format_number(math.nan, type=type_) == "N/A"


# ── Accounting ────────────────────────────────────────────────────────────────

def test_accounting_swaps_separators() -> None:
    """pt-BR renders 1.234,50; the swap turns it into 1,234.50."""
    assert format_number(1234.5, type="accounting") == "1,234.50"


def test_accounting_millions() -> None:
    assert format_number(1234567.891, type="accounting") == "1,234,567.89"


def test_accounting_negative() -> None:
    assert format_number(-1234.5, type="accounting") == "-1,234.50"


def test_accounting_small_value_keeps_two_decimals() -> None:
    assert format_number(0.5, type="accounting") == "0.50"
    assert format_number(0, type="accounting") == "0.00"


def test_accounting_portuguese_alias() -> None:
    assert format_number(1234.5, type="contabilistico") == "1,234.50"


def test_accounting_infinity_uses_symbol() -> None:
    assert format_number(math.inf, type="accounting") == "∞"
    assert format_number(-math.inf, type="accounting") == "-∞"


# ── Auto / fixed ──────────────────────────────────────────────────────────────

def test_auto_small_value_goes_scientific_and_is_trimmed() -> None:
    assert format_number(0.00005) == "5,000e-5"


def test_auto_zero_takes_scientific_path() -> None:
    """Zero is below 1e-4, and the trim eats the exponent digit."""
    assert format_number(0) == "0,000e+"
    assert format_number(0).startswith("0,000e+")


def test_auto_large_value_goes_scientific() -> None:
    assert format_number(1234567) == "1,235e+6"


def test_auto_two_decimals_above_one() -> None:
    assert format_number(1234.5) == "1234,5"
    assert format_number(3.14159) == "3,14"


def test_auto_whole_number_drops_fraction() -> None:
    assert format_number(100) == "100"
    assert format_number(10.0) == "10"


def test_auto_four_decimals_below_one() -> None:
    assert format_number(0.25) == "0,25"
    assert format_number(0.12345) == "0,1235"


def test_auto_negative() -> None:
    assert format_number(-2.5) == "-2,5"


def test_fixed_matches_auto() -> None:
    for value in (0.00005, 0.25, 1234.5, 5e7):
        assert format_number(value, type="fixed") == format_number(value)
        assert format_number(value, type="fixo") == format_number(value)


def test_auto_ignores_digits() -> None:
    assert format_number(50.0, digits=1) == "50"
    assert format_number(33.333333, digits=1) == "33,33"


def test_auto_infinity() -> None:
    assert format_number(math.inf) == "Infinity"
    assert format_number(-math.inf) == "-Infinity"


# ── Scientific ────────────────────────────────────────────────────────────────

def test_scientific_three_digits_by_default() -> None:
    assert format_number(1234567, type="scientific") == "1.235e+6"
    assert format_number(0.00005, type="scientific") == "5.000e-5"


def test_scientific_is_not_trimmed() -> None:
    assert format_number(0, type="scientific") == "0.000e+0"
    assert format_number(0.01, type="scientific") == "1.000e-2"


def test_scientific_digits_override() -> None:
    assert format_number(1234.5, digits=1, type="scientific") == "1.2e+3"


def test_scientific_portuguese_alias() -> None:
    assert format_number(0.05, type="cientifico") == "5.000e-2"


# ── Fallback ──────────────────────────────────────────────────────────────────

def test_unknown_type_is_plain_stringification() -> None:
    assert format_number(1234.5, type="percent") == "1234.5"
    assert format_number(3.0, type="percent") == "3"


def test_plain_number_shapes() -> None:
    assert plain_number(-7.0) == "-7"
    assert plain_number(0.1) == "0.1"
    assert plain_number(1e-7) == "1e-7"
    assert plain_number(1e21) == "1e+21"
    assert plain_number(0.000001) == "0.000001"


# ── Units ─────────────────────────────────────────────────────────────────────

def test_unit_appended_after_space() -> None:
    assert format_number(0.25, unit="kg") == "0,25 kg"
    assert format_number(1234.5, type="accounting", unit="R$") == "1,234.50 R$"


def test_empty_unit_is_ignored() -> None:
    assert format_number(2.5, unit="") == "2,5"


# ── Pipeline steps ────────────────────────────────────────────────────────────

def test_trim_decimal_comma_steps() -> None:
    assert trim_decimal_comma("1.50") == "1,5"
    assert trim_decimal_comma("2.00") == "2"
    assert trim_decimal_comma("0.2500") == "0,25"
    assert trim_decimal_comma("5.000e-5") == "5,000e-5"
    assert trim_decimal_comma("0.000e+0") == "0,000e+"


def test_trim_only_replaces_first_dot() -> None:
    assert trim_decimal_comma("1.2.3") == "1,2.3"


def test_swap_separators() -> None:
    assert swap_separators("1.234,50") == "1,234.50"
    assert swap_separators("1,234.50") == "1.234,50"
    assert swap_separators("12") == "12"


def test_to_fixed_rounds_half_up_on_exact_value() -> None:
    assert to_fixed(0.125, 2) == "0.13"     # exactly representable, rounds up
    assert to_fixed(1.005, 2) == "1.00"     # binary value is just below 1.005
    assert to_fixed(2.5, 0) == "3"


def test_to_exponential_shape() -> None:
    assert to_exponential(1.0) == "1.000e+0"
    assert to_exponential(-0.0) == "0.000e+0"
    assert to_exponential(123456.0, 2) == "1.23e+5"
    assert to_exponential(math.inf) == "Infinity"


def test_to_exponential_zero_has_zero_exponent() -> None:
    assert to_exponential(0.0) == "0.000e+0"
    assert to_exponential(0.0, 1) == "0.0e+0"
    assert to_exponential(0.0, 0) == "0e+0"
