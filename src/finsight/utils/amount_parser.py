"""Amount parsing, rounding and formatting utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_DOWN, ROUND_HALF_UP
import re
from typing import Union

Number = Union[int, float, Decimal]

_GROUPED = {
    ",": re.compile(r"^[+-]?\d{1,3}(,\d{3})+$"),
    ".": re.compile(r"^[+-]?\d{1,3}(\.\d{3})+$"),
}


def parse_amount(amount: Union[str, Number]) -> Decimal:
    """Parse an amount into a Decimal.

    Numbers are accepted as-is. Strings may use various formats:
    - "123.45"
    - "R$ 123.45" / "$123.45"
    - "-123.45"
    - "1,234.56" / "1.234,56" (the later separator is the decimal one)
    - "12,5" (a lone comma is decimal unless it groups thousands)
    - "(123.45)" (negative in parentheses)

    Args:
        amount: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed
    """
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount '{amount}'")
    if isinstance(amount, Decimal):
        result = amount
    elif isinstance(amount, (int, float)):
        result = Decimal(str(amount))
    elif isinstance(amount, str):
        result = _parse_amount_string(amount)
    else:
        raise ValueError(f"Could not parse amount '{amount!r}'")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got '{amount}'")
    return result


def _parse_amount_string(amount_str: str) -> Decimal:
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str)
    amount_str = _normalize_separators(amount_str.strip())

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    return -amount if is_negative else amount


def _normalize_separators(text: str) -> str:
    comma, dot = text.rfind(","), text.rfind(".")
    if comma != -1 and dot != -1:
        decimal_sep = "," if comma > dot else "."
        group_sep = "." if decimal_sep == "," else ","
        integer, _, fraction = text.rpartition(decimal_sep)
        if not _GROUPED[group_sep].match(integer):
            raise ValueError(f"Ambiguous digit grouping in '{text}'")
        return integer.replace(group_sep, "") + "." + fraction

    for sep in (",", "."):
        if text.count(sep) > 1 or (sep == "," and _GROUPED[","].match(text)):
            if not _GROUPED[sep].match(text):
                raise ValueError(f"Ambiguous digit grouping in '{text}'")
            return text.replace(sep, "")

    return text.replace(",", ".")


def round_half_up(value: Number) -> int:
    """Round to the nearest integer with halves going towards +infinity.

    Matches the rounding every dashboard figure has always been shown with,
    so ``-2.5`` rounds to ``-2`` and ``2.5`` to ``3``.
    """
    exact = value if isinstance(value, Decimal) else Decimal(value)
    rounding = ROUND_HALF_UP if exact >= 0 else ROUND_HALF_DOWN
    return int(exact.to_integral_value(rounding=rounding))


def round_to_tenth(value: Number) -> float:
    """Round to one decimal place, halves towards +infinity."""
    return round_half_up(float(value) * 10) / 10


def format_fixed(value: Number, places: int = 1) -> str:
    """Fixed-point text of ``value`` with ties rounded away from zero."""
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def format_amount(value: Number) -> str:
    """Format an amount the pt-BR way, up to three decimals.

    ``1234.5`` becomes ``"1.234,5"`` and ``2000`` becomes ``"2.000"``.
    """
    quantized = Decimal(str(value)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    if quantized == 0:
        quantized = abs(quantized)
    text = f"{quantized:,.3f}"
    integer_part, fraction = text.split(".")
    fraction = fraction.rstrip("0")
    integer_part = integer_part.replace(",", ".")
    return f"{integer_part},{fraction}" if fraction else integer_part
