"""
Numeric helpers.

Python's built-in round() uses banker's rounding and float representation
(round(2.675, 2) == 2.67). Marks shown to students must round half up,
so both percentages and marks go through round_half_up().
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round a number half away from zero to the given number of decimal places.

    Uses the shortest repr of the float (via str) so that 8.55 rounds to 8.6.

    Args:
        value: Number to round
        digits: Decimal places to keep (0 = integer precision)

    Returns:
        Rounded value as float

    Examples:
        >>> round_half_up(8.55, 1)
        8.6
        >>> round_half_up(62.5)
        63.0
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
