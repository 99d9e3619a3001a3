"""Tests for amount parsing, rounding and formatting."""

import pytest
from decimal import Decimal

from finsight.utils.amount_parser import (
    format_amount,
    format_fixed,
    parse_amount,
    round_half_up,
    round_to_tenth,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123.45", Decimal("123.45")),
        ("R$ 123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("-50", Decimal("-50")),
        ("(75.10)", Decimal("-75.10")),
        ("R$ 1.234,56", Decimal("1234.56")),
        ("-1.234.567,8", Decimal("-1234567.8")),
        ("12,5", Decimal("12.5")),
        ("1,234", Decimal("1234")),
        ("1.234.567", Decimal("1234567")),
        (100, Decimal("100")),
        (0.1, Decimal("0.1")),
        (Decimal("9.99"), Decimal("9.99")),
    ],
)
def test_parse_amount(raw, expected):
    """Test parsing the supported amount spellings."""
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "  ", "abc", "1,23.45", "12.34,5,6", "1,2,3", "Infinity", float("nan"), True, None, [1]],
)
def test_parse_amount_rejects_invalid(raw):
    """Test that unparseable or non-finite amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(raw)


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.5, 3),
        (-2.5, -2),
        (-0.5, 0),
        (-1.5, -1),
        (2.4999, 2),
        (0.49999999999999994, 0),
        (-0.4, 0),
        (-0.6, -1),
        (Decimal("1234.56"), 1235),
        (Decimal("-7.5"), -7),
    ],
)
def test_round_half_up(value, expected):
    """Test that halves round towards positive infinity."""
    assert round_half_up(value) == expected


def test_round_to_tenth():
    assert round_to_tenth(3.333) == 3.3
    assert round_to_tenth(2.25) == 2.3


def test_format_fixed():
    assert format_fixed(40.00000000000001) == "40.0"
    assert format_fixed(Decimal("2.25")) == "2.3"
    assert format_fixed(7, places=2) == "7.00"


@pytest.mark.parametrize(
    "value, expected",
    [
        (2000, "2.000"),
        (1234.5, "1.234,5"),
        (0.125, "0,125"),
        (1234567.891, "1.234.567,891"),
        (-100, "-100"),
        (-0.0001, "0"),
        (0, "0"),
    ],
)
def test_format_amount(value, expected):
    """Test pt-BR grouping and trimmed decimals."""
    assert format_amount(value) == expected
