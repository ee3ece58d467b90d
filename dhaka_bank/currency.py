"""
Amount Handling Module

Parses user-entered amounts and formats balances for display.
NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional
import re


# Decimal places per ISO 4217 code; anything unlisted uses 2
CURRENCY_PRECISION = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "BDT": 2,
    "INR": 2,
    "JPY": 0,
}

# Largest accepted input is just under 10**MAX_INTEGER_DIGITS
MAX_INTEGER_DIGITS = 15

_STRIP_PATTERN = re.compile(r"[\s,$€£¥৳₹]")


def to_decimal(value: Any) -> Decimal:
    """Convert a value to Decimal without going through binary float"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_amount(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse an amount typed by the user.

    Thousands separators and a leading currency symbol are ignored.
    Returns None for blank, non-numeric, NaN, infinite or oversized input.
    """
    if text is None:
        return None

    cleaned = _STRIP_PATTERN.sub("", text)
    if not cleaned:
        return None

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None
    # adjusted() is the exponent of the most significant digit
    if amount and amount.adjusted() >= MAX_INTEGER_DIGITS:
        return None
    return amount


def format_amount(amount: Decimal, currency_code: str = "USD") -> str:
    """Format for display, e.g. ``USD 1,234.50``"""
    code = currency_code.upper()
    precision = CURRENCY_PRECISION.get(code, 2)
    try:
        rounded = to_decimal(amount).quantize(
            Decimal('0.1') ** precision,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation:
        # Too many digits for the context precision
        return f"{code} {amount}"
    if precision == 0:
        return f"{code} {rounded:,.0f}"
    return f"{code} {rounded:,.{precision}f}"
