from decimal import Decimal, ROUND_HALF_UP, getcontext, InvalidOperation
from typing import Any

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: Any) -> Decimal:
    """
    Converts store / JSON values to Decimal without going through
    binary float noise (floats are converted via their repr).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("Cannot convert bool to Decimal")
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from None
    raise ValueError("Cannot convert value to Decimal")
