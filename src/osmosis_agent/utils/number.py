"""Fixed-point conversion between display amounts and base-denomination integers.

On-chain amounts are integers in the token's smallest unit. Display amounts
carry `decimals` fractional digits (6 for OSMO, 18 for many EVM-bridged
tokens). Conversions here never go through binary floating point, and never
round up: overstating an input amount could make a transaction try to spend
more than the account holds.
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, InvalidOperation, localcontext
from typing import Union

from osmosis_agent.errors import InvalidNumberError

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Parse a number into an exact, finite Decimal.

    Floats are taken through their shortest round-trip string, so 1.23456
    becomes Decimal("1.23456") and not the binary expansion.

    Raises:
        InvalidNumberError: If the value is non-finite or not a number
    """
    if isinstance(value, bool):
        raise InvalidNumberError(f"Invalid number argument: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidNumberError(f"Invalid number argument: {value!r}")
    else:
        raise InvalidNumberError(f"Invalid number argument: {value!r}")

    if not result.is_finite():
        raise InvalidNumberError(f"Invalid number argument: {value!r}")

    return result


def to_base_units(amount: Number, decimals: int) -> int:
    """Convert a display amount to an integer in base denomination.

    Digits beyond `decimals` are cut off, not rounded.

    Example:
        to_base_units(1.23456, 4)  # 12345
        to_base_units(-0.5, 2)     # -50

    Args:
        amount: Human-readable amount
        decimals: Exponent of the display unit

    Returns:
        Signed integer amount in base units
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    value = to_decimal(amount)
    negative = value.is_signed()

    int_part, _, frac_part = format(abs(value), "f").partition(".")
    frac_part = frac_part[:decimals].ljust(decimals, "0")

    result = int(int_part + frac_part)
    return -result if negative else result


def to_display_units(amount: Union[int, str], decimals: int) -> Decimal:
    """Convert a base-denomination integer to its display amount.

    The decimal point is moved on the digit tuple, so the result is exact
    regardless of magnitude.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    sign, digits, exponent = Decimal(int(amount)).as_tuple()
    return Decimal((sign, digits, exponent - decimals))


def limit_decimals(amount: Number, max_decimals: int = 6) -> str:
    """Format a number with at most `max_decimals` fractional digits, floored.

    Example:
        limit_decimals(123.456, 2)       # "123.45"
        limit_decimals(100, 2)           # "100"
        limit_decimals(0.000123456, 0)   # "0"
    """
    value = to_decimal(amount)

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + max_decimals + 2)
        floored = value.quantize(Decimal(1).scaleb(-max_decimals), rounding=ROUND_FLOOR)

    text = format(floored, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        text = "0"
    return text


def _product_context_precision(amount: Decimal, factor: Decimal) -> int:
    # Enough digits for the exact product of the two operands.
    return len(amount.as_tuple().digits) + len(factor.as_tuple().digits) + 2


def mul_floor(amount: Union[int, str], factor: Decimal) -> int:
    """Multiply an integer amount by a factor and floor, exactly."""
    value = Decimal(int(amount))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _product_context_precision(value, factor))
        return int((value * factor).to_integral_value(rounding=ROUND_FLOOR))


def mul_ceil(amount: Union[int, str], factor: Decimal) -> int:
    """Multiply an integer amount by a factor and ceil, exactly."""
    value = Decimal(int(amount))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _product_context_precision(value, factor))
        return int((value * factor).to_integral_value(rounding=ROUND_CEILING))
