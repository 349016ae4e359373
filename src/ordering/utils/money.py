"""Fixed-point currency helpers."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce ``value`` to a two-place ``Decimal``.

    Floats go through ``str`` first so 10.1 becomes 10.10, not
    10.0999999999999996447286321199499070644378662109375.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
