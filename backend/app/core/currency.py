"""
Guyana Dollar (GYD) formatting.

On-screen amounts use the en-GY convention: GY$ symbol, comma thousands
separator, exactly 2 decimal places (e.g. GY$1,234.56).
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

GYD_SYMBOL = "GY$"

_GYD_PATTERN = re.compile(r"^\s*(-)?\s*(?:GY\$|GYD)?\s*(-)?([0-9][0-9,]*(?:\.[0-9]+)?)\s*$")


def _to_cents(amount: float | Decimal) -> Decimal:
    return Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_gyd(amount: float | Decimal, include_symbol: bool = True) -> str:
    value = _to_cents(amount)
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.2f}"
    if include_symbol:
        return f"{sign}{GYD_SYMBOL}{body}"
    return f"{sign}{body}"


def parse_gyd(text: str) -> float:
    """Parse a formatted GYD amount back into a float rounded to cents."""
    match = _GYD_PATTERN.match(text or "")
    if not match:
        raise ValueError(f"Not a GYD amount: {text!r}")

    leading_minus, inner_minus, digits = match.groups()
    if leading_minus and inner_minus:
        raise ValueError(f"Not a GYD amount: {text!r}")

    try:
        value = _to_cents(Decimal(digits.replace(",", "")))
    except InvalidOperation as e:
        raise ValueError(f"Not a GYD amount: {text!r}") from e

    if leading_minus or inner_minus:
        value = -value
    return float(value)
