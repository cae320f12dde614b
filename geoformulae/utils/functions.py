"""Module for miscellaneous multi-use functions"""

__all__ = [
    'is_numeric', 'round_half_up', 'to_fixed', 'to_float'
]

from decimal import Decimal, ROUND_HALF_UP
import math
from numbers import Real
from typing import Any

from geoformulae.exceptions import InvalidArgument


def is_numeric(value: Any) -> bool:
    """
    Test whether a value can be used as a finite-or-infinite real number. Booleans
    and blank strings are rejected, numeric strings are accepted.

    Args:
        value:
            The value to test

    Returns:
        bool
    """
    if isinstance(value, bool):
        return False

    if isinstance(value, Real):
        return not math.isnan(value)

    if isinstance(value, str):
        if not value.strip():
            return False
        try:
            return not math.isnan(float(value))
        except ValueError:
            return False

    return False


def to_float(value: Any, name: str = 'value') -> float:
    """
    Coerce a number (or numeric string) to float, raising InvalidArgument otherwise.

    Args:
        value:
            The value to be converted

        name:
            The name of the argument, used in the error message

    Returns:
        float
    """
    if not is_numeric(value):
        raise InvalidArgument(f'invalid {name} ‘{value}’')

    return float(value)


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    return float(to_fixed(value, precision))


def to_fixed(value: float, dp: int) -> str:
    """
    Formats a number with a fixed number of decimal places. The exact binary value
    is rounded, with ties going away from zero, so e.g. 0.5 becomes '1' and 2.5
    becomes '3' (python's own formatting would give '0' and '2').

    Args:
        value:
            The number to be formatted

        dp:
            Number of decimal places

    Returns:
        str
    """
    if not math.isfinite(value):
        return str(value)

    quantum = Decimal(1).scaleb(-dp)
    fixed = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if fixed == 0:
        # no negative zero
        fixed = abs(fixed)
    return f'{fixed:f}'
