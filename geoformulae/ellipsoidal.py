"""
Geodetic (latitude/longitude/height) points on an ellipsoidal model of the earth, and
their earth-centred earth-fixed (cartesian) equivalents.

This module provides the core of the ellipsoidal models; datum, reference frame,
n-vector and Vincenty models build upon it.
"""

from __future__ import annotations

__all__ = ['Cartesian', 'LatLonEllipsoidal']

import math
from typing import Any, Dict, Optional, Union

from typing_extensions import Self

from geoformulae._base import LatLonBase
from geoformulae.ellipsoids import ELLIPSOIDS, Ellipsoid, get_ellipsoid
from geoformulae.parsers import parse_point
from geoformulae.utils.functions import to_fixed, to_float
from geoformulae.vector3d import Vector3d


def geodetic_to_cartesian(lat: float, lon: float, height: float, ellipsoid: Ellipsoid):
    """
    Converts geodetic latitude/longitude (radians) and height (metres) to earth-centred
    cartesian x/y/z (metres).
    """
    a, f = ellipsoid.a, ellipsoid.f

    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)

    e2 = 2 * f - f * f  # 1st eccentricity squared ≡ (a²-b²)/a²
    nu = a / math.sqrt(1 - e2 * sin_lat * sin_lat)  # radius of curvature in prime vertical

    x = (nu + height) * cos_lat * cos_lon
    y = (nu + height) * cos_lat * sin_lon
    z = (nu * (1 - e2) + height) * sin_lat

    return x, y, z


def cartesian_to_geodetic(x: float, y: float, z: float, ellipsoid: Ellipsoid):
    """
    Converts earth-centred cartesian x/y/z (metres) to geodetic latitude/longitude
    (radians) and height (metres), using Bowring's (1985) formulation for µm precision
    in concise form.
    """
    a, b, f = ellipsoid.a, ellipsoid.b, ellipsoid.f

    e2 = 2 * f - f * f  # 1st eccentricity squared ≡ (a²−b²)/a²
    eps2 = e2 / (1 - e2)  # 2nd eccentricity squared ≡ (a²−b²)/b²
    p = math.sqrt(x * x + y * y)  # distance from minor axis
    r = math.sqrt(p * p + z * z)  # polar radius

    if p == 0:
        # on the polar axis; the parametric latitude is undefined
        lat = math.copysign(math.pi / 2, z) if z != 0 else 0.
    else:
        # parametric latitude (Bowring eqn.17, replacing tanβ = z·a / p·b)
        tan_beta = (b * z) / (a * p) * (1 + eps2 * b / r)
        sin_beta = tan_beta / math.sqrt(1 + tan_beta * tan_beta)
        cos_beta = sin_beta / tan_beta if tan_beta != 0 else 1.

        # geodetic latitude (Bowring eqn.18: tanφ = z+ε²⋅b⋅sin³β / p−e²⋅cos³β)
        lat = math.atan2(z + eps2 * b * sin_beta ** 3, p - e2 * a * cos_beta ** 3)

    lon = math.atan2(y, x)

    # height above ellipsoid (Bowring eqn.7)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    nu = a / math.sqrt(1 - e2 * sin_lat * sin_lat)  # length of the normal terminated by the minor axis
    height = p * cos_lat + z * sin_lat - (a * a / nu)

    return lat, lon, height


class LatLonEllipsoidal(LatLonBase):
    """
    Latitude/longitude points on an ellipsoidal model earth, with height above the
    ellipsoid. The base model uses the WGS84 ellipsoid.
    """

    def __init__(self, lat: Any, lon: Any, height: Any = 0):
        super().__init__(lat, lon)
        self._height = to_float(height, 'height')

    @property
    def height(self) -> float:
        """Height in metres above the ellipsoid"""
        return self._height

    @height.setter
    def height(self, height: Any):
        self._height = to_float(height, 'height')

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The ellipsoid the point is defined on"""
        return ELLIPSOIDS['WGS84']

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.lat}, {self.lon}, {self.height})>'

    def _key(self) -> tuple:
        return super()._key() + (self.height, self.ellipsoid)

    @classmethod
    def parse(cls, *args: Any, **kwargs: Any) -> Self:
        """
        Creates a point from any of the supported point literals, optionally with
        a height:

            Class.parse(51.47788, -0.00147, 17)
            Class.parse('51.47788, -0.00147', 17)
            Class.parse({'lat': 52.205, 'lon': 0.119, 'height': 17})
            Class.parse({'type': 'Point', 'coordinates': [0.119, 52.205, 17]})

        Keyword arguments are passed on to the class constructor.

        Raises:
            InvalidArgument: the arguments do not describe a valid point
        """
        lat, lon, height = parse_point(*args)
        return cls(lat, lon, height or 0, **kwargs)

    def equals(self, point: LatLonBase) -> bool:
        """
        Checks if another point is equal to this point, to within machine precision,
        including height and ellipsoid.
        """
        if not super().equals(point):
            return False

        return (
            isinstance(point, LatLonEllipsoidal) and
            self.height == point.height and
            self.ellipsoid == point.ellipsoid
        )

    def to_cartesian(self) -> 'Cartesian':
        """
        Converts this point from geodetic latitude/longitude coordinates to geocentric
        cartesian (x/y/z) coordinates.

        Returns:
            Cartesian, with x, y, z in metres from earth centre
        """
        return Cartesian(*geodetic_to_cartesian(
            math.radians(self.lat), math.radians(self.lon), self.height, self.ellipsoid
        ))

    def to_geojson(self) -> Dict:
        """Converts this point to a GeoJSON Point object, with height if non-zero"""
        geojson = super().to_geojson()
        if self.height:
            geojson['coordinates'].append(self.height)
        return geojson

    def to_string(
        self,
        fmt: str = 'd',
        dp: Optional[int] = None,
        dp_height: Optional[int] = None
    ) -> str:
        """
        Returns a string representation of this point, formatted as degrees,
        degrees+minutes, degrees+minutes+seconds, or signed numeric degrees.

        Args:
            fmt: (str) (Default 'd')
                One of 'd', 'dm', 'dms', 'n'

            dp: (int) (Default 4 for 'd' and 'n', 2 for 'dm', 0 for 'dms')
                Number of decimal places to use

            dp_height: (int) (Default None)
                Number of decimal places to use for height; None omits the height

        Returns:
            str, e.g. '51.4778°N, 000.0015°W +17m'

        Raises:
            InvalidRange: unrecognised format
        """
        lat_lon = self._format_lat_lon(fmt, dp, ', ')
        if dp_height is None:
            return lat_lon

        sign = ' +' if self.height >= 0 else ' '
        return f'{lat_lon}{sign}{to_fixed(self.height, dp_height)}m'


class Cartesian(Vector3d):
    """
    Earth-centred earth-fixed (ECEF) cartesian coordinates, where x points to 0°N 0°E,
    y to 0°N 90°E and z to 90°N; all in metres.
    """

    def to_lat_lon(self, ellipsoid: Union[str, Ellipsoid] = 'WGS84') -> LatLonEllipsoidal:
        """
        Converts this cartesian point to a geodetic latitude/longitude point on the given
        ellipsoid.

        Args:
            ellipsoid: (Default 'WGS84')
                The ellipsoid (or its name) the resulting point is defined on

        Returns:
            LatLonEllipsoidal
        """
        lat, lon, height = cartesian_to_geodetic(self.x, self.y, self.z, get_ellipsoid(ellipsoid))
        return LatLonEllipsoidal(math.degrees(lat), math.degrees(lon), height)

    def to_string(self, dp: int = 0) -> str:
        """String representation of this point, e.g. '[3194419,3194419,4487348]'"""
        return super().to_string(dp)
