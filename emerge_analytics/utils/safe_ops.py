"""
Utility functions for handling None values and degenerate numbers.

This module provides functions to safely handle operations on potentially
None values and zero denominators, so analysis code can compute ratios
over empty data sets without raising.
"""

import math
from typing import Optional, Any


def safe_str(value: Any) -> str:
    """
    Safely convert any value to a string, handling None values.

    Args:
        value: Any value that might be None

    Returns:
        A string representation or empty string if None
    """
    if value is None:
        return ""
    return str(value)


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Divide two numbers, returning a default when the denominator is zero.

    Args:
        numerator: Dividend
        denominator: Divisor
        default: Value returned when the divisor is zero

    Returns:
        The quotient or the default
    """
    if not denominator:
        return default
    return numerator / denominator


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded toward positive infinity.

    Python's built-in round() uses banker's rounding (12.5 -> 12); report
    percentages must round 12.5 up to 13.

    Args:
        value: Number to round

    Returns:
        int: Rounded value
    """
    return int(math.floor(value + 0.5))


def safe_percentage(part: float, whole: float) -> int:
    """
    Compute round(part / whole * 100) with half-up rounding, 0 when whole is 0.

    Args:
        part: Numerator
        whole: Denominator

    Returns:
        int: Whole-number percentage
    """
    if not whole:
        return 0
    return round_half_up((part / whole) * 100)


def truncate_text(value: Optional[str], max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to max_length characters, appending a suffix when cut.

    Args:
        value: Text to truncate (None is treated as empty)
        max_length: Number of characters to keep
        suffix: Marker appended to truncated text

    Returns:
        str: Possibly truncated text
    """
    text = safe_str(value)
    if len(text) > max_length:
        return text[:max_length] + suffix
    return text
