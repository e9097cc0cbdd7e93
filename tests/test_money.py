"""Tests for money helpers"""
import pytest
from decimal import Decimal

from storefront.services.money import to_decimal, round_money, to_float


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "sNaN", float("inf"), Decimal("NaN")])
def test_non_finite_values_become_zero(value):
    assert to_decimal(value) == Decimal("0")


@pytest.mark.parametrize("value", [None, True, "abc", [1]])
def test_invalid_values_become_zero(value):
    assert to_decimal(value) == Decimal("0")


def test_float_keeps_cents():
    assert to_decimal(19.99) == Decimal("19.99")


def test_round_money():
    assert round_money("10.005") == Decimal("10.01")
    assert round_money("1e999") == Decimal("1e999")


def test_to_float():
    assert to_float(Decimal("250")) == 250.0
