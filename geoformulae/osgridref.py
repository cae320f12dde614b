"""
Ordnance Survey National Grid references, and conversions between grid references
and latitude/longitude points using the transverse Mercator projection of the OS
National Grid (Thomas/Redfearn series, as given in the OS 'Guide to coordinate
systems in Great Britain').

Grid references are always on the OSGB36 datum; points on other datums are
converted to OSGB36 before being projected.
"""

from __future__ import annotations

__all__ = ['LatLonOsGridRef', 'OsGridRef']

import math
import re
from typing import Any, Union

from geoformulae.datums import DATUMS, Datum, get_datum
from geoformulae.ellipsoidal_datum import LatLonDatum
from geoformulae.exceptions import InvalidGridRef, InvalidRange
from geoformulae.utils.functions import is_numeric, round_half_up, to_fixed
from geoformulae.utils.logging import LOGGER

# National Grid projection: Airy 1830, true origin 49°N 2°W
_NATIONAL_GRID = {
    'datum': DATUMS['OSGB36'],
    'F0': 0.9996012717,
    'phi0': math.radians(49),
    'lambda0': math.radians(-2),
    'E0': 400_000,
    'N0': -100_000,
}

_MAX_EASTING = 700_000
_MAX_NORTHING = 1_300_000

_NUMERIC_REF = re.compile(r'^(\d+(?:\.\d+)?),\s*(\d+(?:\.\d+)?)$')
_LETTERED_REF = re.compile(r'^([A-Z]{2})\s*([0-9]+)\s*([0-9]+)?$', re.IGNORECASE)
_LETTERED_REF_SPLIT = re.compile(r'^([A-Z]{2})\s*([0-9]+)\s+([0-9]+)$', re.IGNORECASE)


def _meridional_arc(phi: float, phi0: float, n: float, b: float, f0: float) -> float:
    """Length of the meridian from the true origin latitude to phi, scaled by F0"""
    n2, n3 = n * n, n * n * n
    ma = (1 + n + (5 / 4) * n2 + (5 / 4) * n3) * (phi - phi0)
    mb = (3 * n + 3 * n * n + (21 / 8) * n3) * math.sin(phi - phi0) * math.cos(phi + phi0)
    mc = ((15 / 8) * n2 + (15 / 8) * n3) * math.sin(2 * (phi - phi0)) * math.cos(2 * (phi + phi0))
    md = (35 / 24) * n3 * math.sin(3 * (phi - phi0)) * math.cos(3 * (phi + phi0))
    return b * f0 * (ma - mb + mc - md)


class OsGridRef:
    """
    An OS National Grid reference: easting and northing, in metres, from the false
    origin of the grid.

    Args:
        easting:
            Easting in metres, 0 to 700000

        northing:
            Northing in metres, 0 to 1300000

    Raises:
        InvalidGridRef: easting or northing is not numeric, or is outside the grid

    Example:
        >>> OsGridRef(651409, 313177).to_string(8)
        'TG 5140 1317'
    """

    def __init__(self, easting: Any, northing: Any):
        if not is_numeric(easting) or not 0 <= float(easting) <= _MAX_EASTING:
            raise InvalidGridRef(f'invalid easting ‘{easting}’')
        if not is_numeric(northing) or not 0 <= float(northing) <= _MAX_NORTHING:
            raise InvalidGridRef(f'invalid northing ‘{northing}’')

        self.easting = float(easting)
        self.northing = float(northing)

    def __eq__(self, other):
        if not isinstance(other, OsGridRef):
            return False
        return (self.easting, self.northing) == (other.easting, other.northing)

    def __hash__(self):
        return hash((self.easting, self.northing))

    def __repr__(self):
        return f'<OsGridRef({self.easting}, {self.northing})>'

    def __str__(self):
        return self.to_string()

    @classmethod
    def parse(cls, gridref: str) -> 'OsGridRef':
        """
        Parses a grid reference given either as a lettered reference with 2 to 10
        digits per coordinate ('TG 51409 13177', 'TG5140913177', 'SU 387 148'), or
        as a fully numeric comma-separated easting and northing ('651409,313177').

        Lettered references are given to the south-west corner of the grid square
        they describe, at metre precision.

        Raises:
            InvalidGridRef: the grid reference does not parse, or is outside the grid
        """
        text = str(gridref).strip()

        match = _NUMERIC_REF.match(text)
        if match:
            return cls(match.group(1), match.group(2))

        match = _LETTERED_REF_SPLIT.match(text) or _LETTERED_REF.match(text)
        if not match:
            raise InvalidGridRef(f'invalid grid reference ‘{gridref}’')

        letters, east_digits, north_digits = match.groups()
        if north_digits is None:
            # digits not separated: split half way
            half = len(east_digits) // 2
            east_digits, north_digits = east_digits[:half], east_digits[half:]

        # A->0, B->1, ... skipping 'I', which is not used on the grid
        l1, l2 = (ord(c) - ord('A') for c in letters.upper())
        l1 = l1 - 1 if l1 > 7 else l1
        l2 = l2 - 1 if l2 > 7 else l2

        # 100km square indices from the false origin (grid square SV)
        e100km = ((l1 - 2) % 5) * 5 + (l2 % 5)
        n100km = (19 - (l1 // 5) * 5) - (l2 // 5)

        if (
            l1 < 2 or not 0 <= e100km <= 6 or not 0 <= n100km <= 12 or
            len(east_digits) != len(north_digits) or len(east_digits) > 5
        ):
            raise InvalidGridRef(f'invalid grid reference ‘{gridref}’')

        easting = f'{e100km}{east_digits.ljust(5, "0")}'
        northing = f'{n100km}{north_digits.ljust(5, "0")}'
        return cls(easting, northing)

    def to_lat_lon(self, datum: Union[str, Datum] = 'WGS84') -> 'LatLonOsGridRef':
        """
        Converts this grid reference to a latitude/longitude point.

        Args:
            datum: (Default 'WGS84')
                Datum the point should be on; grid references are projected from
                OSGB36, and converted to the requested datum where it differs

        Returns:
            LatLonOsGridRef

        Example:
            >>> OsGridRef(651409.903, 313177.270).to_lat_lon('OSGB36').to_string('dms', 3)
            '52°39′27.253″N, 001°43′04.518″E'
        """
        datum = get_datum(datum)
        grid = _NATIONAL_GRID
        ellipsoid = grid['datum'].ellipsoid
        a, b = ellipsoid.a, ellipsoid.b
        f0, phi0, lambda0 = grid['F0'], grid['phi0'], grid['lambda0']
        e0, n0 = grid['E0'], grid['N0']

        e2 = 1 - (b * b) / (a * a)
        n = (a - b) / (a + b)

        easting, northing = self.easting, self.northing

        # iterate until the meridional arc error is under 0.01mm
        phi, m, iterations = phi0, 0.0, 0
        while True:
            phi = (northing - n0 - m) / (a * f0) + phi
            m = _meridional_arc(phi, phi0, n, b, f0)
            iterations += 1
            if abs(northing - n0 - m) < 0.00001:
                break
        LOGGER.debug('OS grid latitude converged after %d iterations', iterations)

        cos_phi, sin_phi = math.cos(phi), math.sin(phi)
        nu = a * f0 / math.sqrt(1 - e2 * sin_phi * sin_phi)
        rho = a * f0 * (1 - e2) / (1 - e2 * sin_phi * sin_phi) ** 1.5
        eta2 = nu / rho - 1

        tan_phi = math.tan(phi)
        tan2, tan4, tan6 = tan_phi ** 2, tan_phi ** 4, tan_phi ** 6
        sec_phi = 1 / cos_phi
        nu3, nu5, nu7 = nu ** 3, nu ** 5, nu ** 7

        vii = tan_phi / (2 * rho * nu)
        viii = tan_phi / (24 * rho * nu3) * (5 + 3 * tan2 + eta2 - 9 * tan2 * eta2)
        ix = tan_phi / (720 * rho * nu5) * (61 + 90 * tan2 + 45 * tan4)
        x = sec_phi / nu
        xi = sec_phi / (6 * nu3) * (nu / rho + 2 * tan2)
        xii = sec_phi / (120 * nu5) * (5 + 28 * tan2 + 24 * tan4)
        xiia = sec_phi / (5040 * nu7) * (61 + 662 * tan2 + 1320 * tan4 + 720 * tan6)

        de = easting - e0
        phi = phi - vii * de ** 2 + viii * de ** 4 - ix * de ** 6
        lam = lambda0 + x * de - xi * de ** 3 + xii * de ** 5 - xiia * de ** 7

        point = LatLonOsGridRef(math.degrees(phi), math.degrees(lam), 0, grid['datum'])
        if datum.name != grid['datum'].name:
            converted = point.convert_datum(datum)
            point = LatLonOsGridRef(converted.lat, converted.lon, converted.height, datum)

        return point

    def to_string(self, digits: int = 10) -> str:
        """
        String representation of this grid reference, to the given number of digits.

        Args:
            digits: (Default 10)
                Precision of the lettered reference, 2 to 16 (even), where 10 gives
                metre precision; 0 gives the fully numeric 'easting,northing' form,
                which keeps any decimals

        Returns:
            str

        Raises:
            InvalidRange: digits is not one of 0, 2, 4 ... 16

        Example:
            >>> OsGridRef(651409, 313177).to_string()
            'TG 51409 13177'
            >>> OsGridRef(651409, 313177).to_string(0)
            '651409,313177'
        """
        if (
            isinstance(digits, bool) or not isinstance(digits, int) or
            digits % 2 != 0 or not 0 <= digits <= 16
        ):
            raise InvalidRange(f'invalid precision ‘{digits}’')

        easting, northing = self.easting, self.northing

        if digits == 0:
            return f'{self._format_metres(easting)},{self._format_metres(northing)}'

        e100k, n100k = int(easting // 100_000), int(northing // 100_000)

        # numeric equivalents of the grid letters, compensating for the skipped 'I'
        l1 = (19 - n100k) - (19 - n100k) % 5 + (e100k + 10) // 5
        l2 = (19 - n100k) * 5 % 25 + e100k % 5
        l1 = l1 + 1 if l1 > 7 else l1
        l2 = l2 + 1 if l2 > 7 else l2
        letters = chr(l1 + ord('A')) + chr(l2 + ord('A'))

        half = digits // 2
        scale = 10 ** (5 - half)
        east = str(math.floor((easting % 100_000) / scale)).zfill(half)[-half:]
        north = str(math.floor((northing % 100_000) / scale)).zfill(half)[-half:]

        return f'{letters} {east} {north}'

    @staticmethod
    def _format_metres(value: float) -> str:
        """Metres padded to six whole digits, with mm decimals where not whole"""
        fixed = to_fixed(value, 3).rstrip('0').rstrip('.')
        whole, _, decimals = fixed.partition('.')
        whole = whole.zfill(6)
        return f'{whole}.{decimals}' if decimals else whole


class LatLonOsGridRef(LatLonDatum):
    """
    Latitude/longitude points on an ellipsoidal model earth, with datum, which can
    be converted to OS National Grid references.
    """

    def to_os_grid(self) -> OsGridRef:
        """
        Converts this point to an OS grid reference, rounded to mm precision. Points
        not on OSGB36 are first converted to it.

        Returns:
            OsGridRef

        Raises:
            InvalidGridRef: the point lies outside the extent of the grid

        Example:
            >>> LatLonOsGridRef(52.65798, 1.71605).to_os_grid().to_string()
            'TG 51409 13177'
        """
        grid = _NATIONAL_GRID
        point = self
        if self.datum.name != grid['datum'].name:
            point = self.convert_datum(grid['datum'])

        ellipsoid = grid['datum'].ellipsoid
        a, b = ellipsoid.a, ellipsoid.b
        f0, phi0, lambda0 = grid['F0'], grid['phi0'], grid['lambda0']
        e0, n0 = grid['E0'], grid['N0']

        phi, lam = math.radians(point.lat), math.radians(point.lon)

        e2 = 1 - (b * b) / (a * a)
        n = (a - b) / (a + b)

        cos_phi, sin_phi = math.cos(phi), math.sin(phi)
        nu = a * f0 / math.sqrt(1 - e2 * sin_phi * sin_phi)
        rho = a * f0 * (1 - e2) / (1 - e2 * sin_phi * sin_phi) ** 1.5
        eta2 = nu / rho - 1

        m = _meridional_arc(phi, phi0, n, b, f0)

        cos3, cos5 = cos_phi ** 3, cos_phi ** 5
        tan2 = math.tan(phi) ** 2
        tan4 = tan2 * tan2

        i = m + n0
        ii = (nu / 2) * sin_phi * cos_phi
        iii = (nu / 24) * sin_phi * cos3 * (5 - tan2 + 9 * eta2)
        iiia = (nu / 720) * sin_phi * cos5 * (61 - 58 * tan2 + tan4)
        iv = nu * cos_phi
        v = (nu / 6) * cos3 * (nu / rho - tan2)
        vi = (nu / 120) * cos5 * (5 - 18 * tan2 + tan4 + 14 * eta2 - 58 * tan2 * eta2)

        dl = lam - lambda0
        northing = i + ii * dl ** 2 + iii * dl ** 4 + iiia * dl ** 6
        easting = e0 + iv * dl + v * dl ** 3 + vi * dl ** 5

        northing = round_half_up(northing, 3)
        easting = round_half_up(easting, 3)

        origin = f'({to_fixed(point.lat, 6)},{to_fixed(point.lon, 6)}).to_os_grid()'
        if not 0 <= easting <= _MAX_EASTING:
            raise InvalidGridRef(f'invalid easting ‘{to_fixed(easting, 2)}’ from {origin}')
        if not 0 <= northing <= _MAX_NORTHING:
            raise InvalidGridRef(f'invalid northing ‘{to_fixed(northing, 2)}’ from {origin}')

        return OsGridRef(easting, northing)
