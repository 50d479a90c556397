"""Currency helpers - all amounts are Decimal, rounded only when finalized"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Coerce int/str/float/Decimal/None to Decimal (None -> 0)"""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() avoids binary float artifacts (0.1 -> 0.1000000000000000055...)
    return Decimal(str(value))


def round_currency(value) -> Decimal:
    """Round to 2 decimal places, half away from zero"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
