"""Display formatting for shopping list amounts."""
import math

from mealcart.utilities.constants import DISPLAY_FRACTIONS, FRACTION_TOLERANCE


def round_amount(amount: float) -> float:
    return round(float(amount or 0), 2)


def format_amount(amount: float) -> str:
    """Render an amount for people: "3", "1 1/2", "2/3", "0.1".

    Integral values print as integers. Otherwise the value is rounded to two
    decimals and a fractional part close to a common kitchen fraction is
    shown as that fraction.
    """
    if float(amount).is_integer():
        return str(int(amount))
    rounded = round_amount(amount)
    if rounded.is_integer():
        return str(int(rounded))
    whole = math.floor(rounded)
    decimal = rounded - whole
    for value, label in DISPLAY_FRACTIONS:
        if abs(decimal - value) < FRACTION_TOLERANCE:
            return f"{whole} {label}" if whole > 0 else label
    return str(rounded)


__all__ = ['round_amount', 'format_amount']
