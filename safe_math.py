"""
Safe Math Utility - Numeric coercion for untyped API payloads

DexScreener and RugCheck return loosely typed JSON: numbers arrive as
ints, floats, numeric strings, null or not at all. These helpers turn
every such value into a concrete number so nothing downstream has to
deal with "possibly missing".
"""
import math
from typing import Union, Optional, Any


def safe_div(
    numerator: Union[int, float, None],
    denominator: Union[int, float, None],
    default: float = 0.0
) -> float:
    """
    Universal safe division helper.

    Handles:
    - Zero denominator
    - None/null values
    - Negative numbers (preserves sign)

    Args:
        numerator: Value to divide
        denominator: Value to divide by
        default: Return value if division impossible (default: 0.0)

    Returns:
        Division result or default value

    Examples:
        >>> safe_div(10, 2)
        5.0
        >>> safe_div(10, 0)
        0.0
        >>> safe_div(10, None, default=1.0)
        1.0
    """
    if numerator is None or denominator is None:
        return default

    if denominator == 0:
        return default

    try:
        return float(numerator) / float(denominator)
    except (TypeError, ValueError, ZeroDivisionError):
        return default


def safe_float(value: Any, default: float = 0.0) -> float:
    """
    Coerce an API value to float.

    Examples:
        >>> safe_float("12.5")
        12.5
        >>> safe_float(None)
        0.0
        >>> safe_float("n/a", default=-1.0)
        -1.0
        >>> safe_float("nan")
        0.0
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    # NaN and inf count as missing
    return result if math.isfinite(result) else default


def safe_int(value: Any, default: int = 0) -> int:
    """Coerce an API value to int (floats are truncated)."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def safe_get(payload: Optional[dict], *keys: str, default: Any = None) -> Any:
    """
    Walk nested dicts, returning default as soon as a level is missing
    or is not a dict.

    Examples:
        >>> safe_get({'volume': {'h24': 10}}, 'volume', 'h24')
        10
        >>> safe_get({'volume': None}, 'volume', 'h24', default=0)
        0
    """
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current
