"""
Parsing, formatting and wrapping of angles expressed in degrees, optionally as
degrees/minutes/seconds with a compass direction suffix.

Formatting uses the degree (U+00B0), prime (U+2032) and double prime (U+2033)
symbols, with a separator between the components which defaults to a narrow
no-break space (U+202F). The separator can be overridden per call, or for a
block of code with the `separator` context manager.
"""

__all__ = [
    'DEFAULT_SEPARATOR', 'compass_point', 'from_locale', 'get_separator', 'parse',
    'separator', 'to_brng', 'to_dms', 'to_lat', 'to_locale', 'to_lon',
    'wrap90', 'wrap180', 'wrap360',
]

from contextlib import contextmanager
from contextvars import ContextVar
import locale
import math
from numbers import Real
import re
from typing import Any, Iterator, Optional

from geoformulae.exceptions import InvalidRange
from geoformulae.utils.functions import is_numeric, to_fixed

DEFAULT_SEPARATOR = '\u202f'  # narrow no-break space

_SEPARATOR: ContextVar[str] = ContextVar('dms_separator', default=DEFAULT_SEPARATOR)

_NUMERIC = re.compile(r'^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$')
_NON_NUMERIC_GROUP = re.compile(r'[^0-9.,]+')
_COMPASS_SUFFIX = re.compile(r'[NSEW]$', re.IGNORECASE)
_NEGATIVE = re.compile(r'^-|[WS]$', re.IGNORECASE)

_DEFAULT_DP = {'d': 4, 'dm': 2, 'dms': 0}

_CARDINALS = (
    'N', 'NNE', 'NE', 'ENE',
    'E', 'ESE', 'SE', 'SSE',
    'S', 'SSW', 'SW', 'WSW',
    'W', 'WNW', 'NW', 'NNW',
)


def get_separator() -> str:
    """The separator currently in effect for formatted angles"""
    return _SEPARATOR.get()


@contextmanager
def separator(sep: str) -> Iterator[str]:
    """
    Temporarily set the separator used between degrees, minutes, seconds and the
    compass direction. The setting is local to the current thread/task.

    Example:
        >>> with separator(''):
        ...     to_lat(51.2, 'dms')
        '51°12′00″N'
    """
    token = _SEPARATOR.set(sep)
    try:
        yield sep
    finally:
        _SEPARATOR.reset(token)


def _to_number(part: str) -> float:
    if part == '':
        return 0.
    try:
        return float(part)
    except ValueError:
        return math.nan


def parse(dms: Any) -> float:
    """
    Parses a string representing degrees/minutes/seconds into numeric degrees.

    Accepts signed decimal degrees without a compass direction, or degrees/minutes/seconds
    with any non-numeric separators (including the ordinal indicator and ASCII or
    typographic quotes) and an optional trailing N/S/E/W. A leading '-' or a trailing
    S or W gives a negative result.

    Values which cannot be parsed give NaN rather than an error.

    Args:
        dms:
            A number, or a string such as '51°28′40.37″N' or '-0.0015'

    Returns:
        float
    """
    if isinstance(dms, bool) or dms is None:
        return math.nan

    if isinstance(dms, Real):
        return float(dms)

    if not isinstance(dms, str):
        return math.nan

    if _NUMERIC.match(dms):
        return float(dms)

    text = dms.strip()
    if text.startswith('-'):
        text = text[1:]
    stripped = _COMPASS_SUFFIX.sub('', text)
    parts = _NON_NUMERIC_GROUP.split(stripped)
    if parts and parts[-1] == '':
        # trailing symbol
        parts.pop()

    if not parts or parts == ['']:
        return math.nan

    values = [_to_number(x) for x in parts]
    if len(values) == 3:
        deg = values[0] / 1 + values[1] / 60 + values[2] / 3600
    elif len(values) == 2:
        deg = values[0] / 1 + values[1] / 60
    elif len(values) == 1:
        deg = values[0]
    else:
        return math.nan

    if _NEGATIVE.search(dms.strip()):
        deg = -deg

    return deg


def _coerce(deg: Any) -> Optional[float]:
    """Returns deg as a float, or None if it isn't a finite number"""
    if not is_numeric(deg):
        return None

    value = float(deg)
    if not math.isfinite(value):
        return None

    return value


def _pad(value: str, width: int) -> str:
    """Left-pads the integer part of a formatted number with zeros"""
    while float(value) < 10 ** (width - 1) and len(value.split('.')[0]) < width:
        value = '0' + value
    return value


def to_dms(
    deg: Any,
    fmt: str = 'd',
    dp: Optional[int] = None,
    sep: Optional[str] = None
) -> Optional[str]:
    """
    Converts decimal degrees to a deg/min/sec string. The result is unsigned, ready for
    a compass direction to be appended.

    Args:
        deg:
            Degrees to be formatted

        fmt: (str) (Default 'd')
            One of 'd', 'dm' or 'dms'; anything else is treated as 'd'

        dp: (int) (Default 4, 2 or 0 for 'd', 'dm', 'dms' respectively)
            Number of decimal places on the last component

        sep: (str)
            Separator between components; defaults to the current separator

    Returns:
        The formatted string, or None if deg is not a finite number
    """
    value = _coerce(deg)
    if value is None:
        return None

    if fmt not in _DEFAULT_DP:
        fmt = 'd'
    if dp is None:
        dp = _DEFAULT_DP[fmt]
    sep = get_separator() if sep is None else sep

    value = abs(value)

    if fmt == 'dm':
        d = math.floor(value)
        m = to_fixed((value * 60) % 60, dp)
        if float(m) == 60:
            # rounded up
            m = to_fixed(0, dp)
            d += 1
        return f'{d:03d}°{sep}{_pad(m, 2)}′'

    if fmt == 'dms':
        d = math.floor(value)
        m = math.floor((value * 3600) / 60) % 60
        s = to_fixed(value * 3600 % 60, dp)
        if float(s) == 60:
            s = to_fixed(0, dp)
            m += 1
        if m == 60:
            m = 0
            d += 1
        return f'{d:03d}°{sep}{m:02d}′{sep}{_pad(s, 2)}″'

    return f'{_pad(to_fixed(value, dp), 3)}°'


def to_lat(deg: Any, fmt: str = 'd', dp: Optional[int] = None, sep: Optional[str] = None) -> str:
    """
    Converts numeric degrees to a latitude string, e.g. '51°28′40.37″N'.

    Returns '–' if deg is not a number.
    """
    value = _coerce(deg)
    sep = get_separator() if sep is None else sep
    value = wrap90(value) if value is not None else None
    lat = to_dms(value, fmt, dp, sep)
    if lat is None:
        return '–'

    # latitudes only need two integer digits
    return lat[1:] + sep + ('S' if value < 0 else 'N')


def to_lon(deg: Any, fmt: str = 'd', dp: Optional[int] = None, sep: Optional[str] = None) -> str:
    """
    Converts numeric degrees to a longitude string, e.g. '000°00′05.31″W'.

    Returns '–' if deg is not a number.
    """
    value = _coerce(deg)
    sep = get_separator() if sep is None else sep
    value = wrap180(value) if value is not None else None
    lon = to_dms(value, fmt, dp, sep)
    if lon is None:
        return '–'

    return lon + sep + ('W' if value < 0 else 'E')


def to_brng(deg: Any, fmt: str = 'd', dp: Optional[int] = None, sep: Optional[str] = None) -> str:
    """
    Converts numeric degrees to a bearing string in the range 0°..360°, e.g. '024°'.

    Returns '–' if deg is not a number.
    """
    value = _coerce(deg)
    brng = to_dms(wrap360(value) if value is not None else None, fmt, dp, sep)
    if brng is None:
        return '–'

    # rounding may have taken us up to 360°
    return brng.replace('360', '0', 1)


def _locale_separators(thousands: Optional[str], decimal: Optional[str]):
    conv = locale.localeconv()
    if thousands is None:
        thousands = str(conv['thousands_sep'])
    if decimal is None:
        decimal = str(conv['decimal_point'])
    return thousands, decimal


def from_locale(text: str, thousands: Optional[str] = None, decimal: Optional[str] = None) -> str:
    """
    Converts a string with locale-specific thousands and decimal separators into one
    using ',' and '.' respectively, ready for `parse`.

    Args:
        text:
            The string to convert

        thousands: (str) (Default from the current locale)
            The locale's thousands separator

        decimal: (str) (Default from the current locale)
            The locale's decimal separator

    Returns:
        str
    """
    thousands, decimal = _locale_separators(thousands, decimal)
    if thousands:
        text = text.replace(thousands, '⁜')
    return text.replace(decimal, '.').replace('⁜', ',')


def to_locale(text: str, thousands: Optional[str] = None, decimal: Optional[str] = None) -> str:
    """
    Converts a string using ',' thousands and '.' decimal separators into the
    separators of a locale; the inverse of `from_locale`.
    """
    thousands, decimal = _locale_separators(thousands, decimal)
    text = re.sub(r',([0-9])', r'⁜\1', text)
    return text.replace('.', decimal).replace('⁜', thousands)


def compass_point(bearing: float, precision: int = 3) -> str:
    """
    Returns the compass point (to the given precision) for a bearing.

    Args:
        bearing:
            Bearing in degrees from north

        precision: (int) (Default 3)
            1 for cardinal points (N, E, S, W), 2 to add intercardinals (NE, ...),
            3 to add secondary intercardinals (NNE, ...)

    Returns:
        str
    """
    if precision not in (1, 2, 3):
        raise InvalidRange(f'invalid precision ‘{precision}’')

    bearing = wrap360(bearing)
    n = 4 * 2 ** (precision - 1)
    index = math.floor(bearing * n / 360 + 0.5) % n * 16 // n
    return _CARDINALS[index]


def wrap90(degrees: float) -> float:
    """
    Constrains degrees to the range -90..+90 (e.g. for latitude); -91 => -89, 91 => 89.

    Values already in range are returned unchanged.
    """
    if -90 <= degrees <= 90:
        return degrees

    # triangle wave: 4a/p * |(x - p/4) mod p - p/2| - a
    a, p = 90, 360
    return 4 * a / p * abs((((degrees - p / 4) % p) + p) % p - p / 2) - a


def wrap180(degrees: float) -> float:
    """
    Constrains degrees to the range (-180, +180] (e.g. for longitude); -181 => 179, 181 => -179.

    Values already in range are returned unchanged.
    """
    if -180 < degrees <= 180:
        return degrees

    # sawtooth wave: (2ax/p - p/2) mod p - a
    a, p = 180, 360
    wrapped = (((2 * a * degrees / p - p / 2) % p) + p) % p - a
    return 180. if wrapped == -180 else wrapped


def wrap360(degrees: float) -> float:
    """
    Constrains degrees to the range [0, 360) (e.g. for bearings); -1 => 359, 361 => 1.

    Values already in range are returned unchanged.
    """
    if 0 <= degrees < 360:
        return degrees

    # sawtooth wave with vertical offset: (2ax/p) mod p
    a, p = 180, 360
    return (((2 * a * degrees / p) % p) + p) % p
