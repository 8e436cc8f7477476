"""
Shared formatting utilities.

Provides centralized number parsing and display helpers for the agent's
display strings (scores, metrics, asset types).
"""

import math
import re
from typing import Any

# A complete decimal literal: "12", "-3.5", ".75", "1e3". No "inf"/"nan".
_DECIMAL_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")

# Leading numeric prefix: "7.5/10" -> "7.5", "8 (strong)" -> "8".
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_decimal(value: Any) -> float | None:
    """
    Parse a value that is entirely a decimal number.

    Partial matches ("7.5/10") and the special float spellings ("nan", "inf")
    are rejected.

    Args:
        value: Number or string

    Returns:
        Parsed float, or None if the value is not fully numeric

    Examples:
        >>> parse_decimal("10")
        10.0
        >>> parse_decimal("7.5/10") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str) and _DECIMAL_RE.match(value):
        return float(value)
    return None


def parse_leading_number(value: Any) -> float | None:
    """
    Parse the numeric prefix of a display string.

    Scores frequently arrive as "8.2/10" or "7 (Good)"; the leading number is
    what gets displayed.

    Examples:
        >>> parse_leading_number("8.2/10")
        8.2
        >>> parse_leading_number("Excellent") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    match = _LEADING_NUMBER_RE.match(value)
    if not match:
        return None
    return float(match.group(1))


def format_asset_type(asset_type: str) -> str:
    """
    Human-readable asset type ("mutual_fund" -> "mutual fund").

    Examples:
        >>> format_asset_type("mutual_fund")
        'mutual fund'
    """
    return asset_type.replace("_", " ")
