"""
Formatting utilities for workload and share percentages.
"""

from decimal import Decimal, ROUND_HALF_UP

from lineplan.constants import DISPLAY_DECIMALS


def round_half_away_from_zero(value: float, decimals: int = DISPLAY_DECIMALS) -> float:
    """
    Round to a fixed number of decimals, halves away from zero.

    Uses the shortest decimal representation of the float, so 0.25 rounds
    to 0.3 and -0.25 to -0.3 (Python's round() would give 0.2).

    Args:
        value: Number to round
        decimals: Decimal places to keep

    Returns:
        Rounded value
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def format_percent(value: float, decimals: int = DISPLAY_DECIMALS) -> str:
    """Format a percentage for display, e.g. 98.87 -> '98.9%'."""
    return f"{round_half_away_from_zero(value, decimals):.{decimals}f}%"
