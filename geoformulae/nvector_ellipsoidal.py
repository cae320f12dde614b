"""
Vector-based geodesy on an ellipsoidal model of the earth: n-vectors with height,
and local north/east/down (NED) deltas between points.

An n-vector here is the unit vector normal to the ellipsoid at a point, with the
point's height above the ellipsoid carried alongside. Conversions from cartesian
coordinates use Gade's closed-form (non-iterative) solution.
"""

from __future__ import annotations

__all__ = ['CartesianNvector', 'LatLonNvectorEllipsoidal', 'Ned', 'NvectorEllipsoidal']

import math
from typing import Any, Optional, Union

import numpy as np

from geoformulae import dms
from geoformulae.datums import DATUMS, Datum, get_datum
from geoformulae.ellipsoidal import LatLonEllipsoidal, cartesian_to_geodetic, geodetic_to_cartesian
from geoformulae.ellipsoidal_datum import CartesianDatum, LatLonDatum
from geoformulae.exceptions import InvalidArgument
from geoformulae.utils.functions import to_fixed, to_float
from geoformulae.vector3d import Vector3d


def _ned_frame(nvector: Vector3d) -> np.ndarray:
    """
    Rotation matrix whose rows are the north, east and down axes of the local
    frame at the point with the given n-vector.
    """
    down = nvector.negate()
    east = Vector3d(0, 0, 1).cross(nvector).unit()
    north = east.cross(down)
    return np.array([north.to_array(), east.to_array(), down.to_array()])


class Ned:
    """
    North/east/down vector, in metres, in the local tangent plane of a point.

    Args:
        north:
            North component in metres

        east:
            East component in metres

        down:
            Down component in metres (below the tangent plane)

    Example:
        >>> Ned(110569, 111297, 1936).to_string()
        '[N:110569,E:111297,D:1936]'
    """

    def __init__(self, north: float, east: float, down: float):
        self.north = to_float(north, 'north')
        self.east = to_float(east, 'east')
        self.down = to_float(down, 'down')

    def __eq__(self, other):
        if not isinstance(other, Ned):
            return False
        return (self.north, self.east, self.down) == (other.north, other.east, other.down)

    def __hash__(self):
        return hash((self.north, self.east, self.down))

    def __repr__(self):
        return f'<Ned({self.north}, {self.east}, {self.down})>'

    def __str__(self):
        return self.to_string()

    @property
    def length(self) -> float:
        """Length of the delta, in metres"""
        return math.sqrt(self.north ** 2 + self.east ** 2 + self.down ** 2)

    @property
    def bearing(self) -> float:
        """Bearing of the delta, in degrees from north"""
        return dms.wrap360(math.degrees(math.atan2(self.east, self.north)))

    @property
    def elevation(self) -> float:
        """Elevation of the delta from the horizontal (-ve below), in degrees"""
        return -math.degrees(math.asin(self.down / self.length))

    @classmethod
    def from_distance_bearing_elevation(
        cls,
        distance: float,
        bearing: float,
        elevation: float
    ) -> 'Ned':
        """
        Creates a north/east/down vector from a distance (metres), a bearing and an
        elevation (degrees).
        """
        dist = to_float(distance, 'distance')
        theta = math.radians(to_float(bearing, 'bearing'))
        alpha = math.radians(to_float(elevation, 'elevation'))

        return cls(
            math.cos(theta) * dist * math.cos(alpha),
            math.sin(theta) * dist * math.cos(alpha),
            -math.sin(alpha) * dist,
        )

    def to_string(self, dp: int = 0) -> str:
        """String representation, e.g. '[N:-86127,E:-78901,D:1104]'"""
        return (
            f'[N:{to_fixed(self.north, dp)},E:{to_fixed(self.east, dp)},'
            f'D:{to_fixed(self.down, dp)}]'
        )


class LatLonNvectorEllipsoidal(LatLonDatum):
    """
    Latitude/longitude points on an ellipsoidal model earth, with height and datum,
    and n-vector based methods for north/east/down deltas between points.
    """

    def delta_to(self, point: LatLonEllipsoidal) -> Ned:
        """
        Calculates the north/east/down vector from this point to the given point,
        in the local tangent plane at this point.

        Args:
            point:
                The point the delta is to

        Returns:
            Ned

        Raises:
            InvalidArgument: point is not an ellipsoidal point

        Example:
            >>> a = LatLonNvectorEllipsoidal(49.66618, 3.45063, 99)
            >>> a.delta_to(LatLonNvectorEllipsoidal(48.88667, 2.37472, 64)).to_string()
            '[N:-86127,E:-78901,D:1104]'
        """
        if not isinstance(point, LatLonEllipsoidal):
            raise InvalidArgument(f'invalid point ‘{point}’')

        delta_c = point.to_cartesian().to_array() - self.to_cartesian().to_array()
        north, east, down = _ned_frame(self.to_nvector()) @ delta_c

        return Ned(float(north), float(east), float(down))

    def destination_point(self, delta: Ned) -> 'LatLonNvectorEllipsoidal':
        """
        Calculates the destination point given a north/east/down delta from this
        point.

        Raises:
            InvalidArgument: delta is not a Ned
        """
        if not isinstance(delta, Ned):
            raise InvalidArgument('delta is not a Ned object')

        # transposed rotation: ned -> ecef
        delta_c = _ned_frame(self.to_nvector()).T @ np.array([delta.north, delta.east, delta.down])
        x, y, z = self.to_cartesian().to_array() + delta_c

        return CartesianNvector(float(x), float(y), float(z), self.datum).to_lat_lon()

    def to_nvector(self) -> 'NvectorEllipsoidal':
        """Converts this point to an n-vector, with the point's height and datum"""
        phi, lam = math.radians(self.lat), math.radians(self.lon)
        return NvectorEllipsoidal(
            math.cos(phi) * math.cos(lam),
            math.cos(phi) * math.sin(lam),
            math.sin(phi),
            self.height,
            self.datum,
        )

    def to_cartesian(self) -> 'CartesianNvector':
        """Converts this point to geocentric cartesian coordinates, with n-vector support"""
        x, y, z = geodetic_to_cartesian(
            math.radians(self.lat), math.radians(self.lon), self.height, self.ellipsoid
        )
        return CartesianNvector(x, y, z, self.datum)


class NvectorEllipsoidal(Vector3d):
    """
    An n-vector on an ellipsoidal model earth: the unit normal to the ellipsoid,
    normalised at construction, with height above the ellipsoid and datum.

    Args:
        x, y, z:
            Components of the n-vector

        height: (Default 0)
            Height above the ellipsoid in metres

        datum: (Default 'WGS84')
            Datum name, or Datum record
    """

    def __init__(
        self,
        x: float,
        y: float,
        z: float,
        height: float = 0,
        datum: Union[str, Datum] = 'WGS84'
    ):
        unit = Vector3d(x, y, z).unit()
        super().__init__(unit.x, unit.y, unit.z)
        self.height = to_float(height, 'height')
        self.datum = get_datum(datum)

    def __repr__(self):
        return (
            f'<{self.__class__.__name__}({self.x}, {self.y}, {self.z}, {self.height}, '
            f'{self.datum.name})>'
        )

    def to_lat_lon(self) -> LatLonNvectorEllipsoidal:
        """Converts this n-vector to a latitude/longitude point"""
        lat = math.atan2(self.z, math.sqrt(self.x * self.x + self.y * self.y))
        lon = math.atan2(self.y, self.x)
        return LatLonNvectorEllipsoidal(math.degrees(lat), math.degrees(lon), self.height, self.datum)

    def to_cartesian(self) -> 'CartesianNvector':
        """Converts this n-vector to geocentric cartesian coordinates"""
        b, f = self.datum.ellipsoid.b, self.datum.ellipsoid.f
        x, y, z, h = self.x, self.y, self.z, self.height

        m = (1 - f) * (1 - f)  # (1−f)² = b²/a²
        n = b / math.sqrt(x * x / m + y * y / m + z * z)

        return CartesianNvector(n * x / m + x * h, n * y / m + y * h, n * z + z * h, self.datum)

    def to_string(self, dp: int = 3, dp_height: Optional[int] = None) -> str:
        """
        String representation of this n-vector, optionally with height,
        e.g. '[0.500,0.500,0.707+1m]'
        """
        text = f'{to_fixed(self.x, dp)},{to_fixed(self.y, dp)},{to_fixed(self.z, dp)}'
        if dp_height is not None:
            sign = '+' if self.height >= 0 else ''
            text += f'{sign}{to_fixed(self.height, dp_height)}m'
        return f'[{text}]'


class CartesianNvector(CartesianDatum):
    """Earth-centred earth-fixed cartesian coordinates, convertible to n-vectors"""

    def to_lat_lon(self, datum: Optional[Union[str, Datum]] = None) -> LatLonNvectorEllipsoidal:
        """Converts this cartesian point to latitude/longitude/height on its datum"""
        datum = get_datum(datum) if datum is not None else (self.datum or DATUMS['WGS84'])
        lat, lon, height = cartesian_to_geodetic(self.x, self.y, self.z, datum.ellipsoid)
        return LatLonNvectorEllipsoidal(math.degrees(lat), math.degrees(lon), height, datum)

    def to_nvector(self, datum: Optional[Union[str, Datum]] = None) -> NvectorEllipsoidal:
        """
        Converts this cartesian point to an n-vector, using Gade's closed-form
        solution ('A Non-singular Horizontal Position Representation', 2010).

        Args:
            datum: (Default None)
                The datum to use; the point's own datum (or WGS84) if not given

        Returns:
            NvectorEllipsoidal
        """
        datum = get_datum(datum) if datum is not None else (self.datum or DATUMS['WGS84'])
        a, f = datum.ellipsoid.a, datum.ellipsoid.f
        x, y, z = self.x, self.y, self.z

        e2 = 2 * f - f * f  # 1st eccentricity squared ≡ (a²−b²)/a²
        e4 = e2 * e2

        p = (x * x + y * y) / (a * a)
        q = z * z * (1 - e2) / (a * a)
        r = (p + q - e4) / 6
        s = (e4 * p * q) / (4 * r * r * r)
        t = (1 + s + math.sqrt(2 * s + s * s)) ** (1 / 3)
        u = r * (1 + t + 1 / t)
        v = math.sqrt(u * u + e4 * q)
        w = e2 * (u + v - q) / (2 * v)
        k = math.sqrt(u + v + w * w) - w
        d = k * math.sqrt(x * x + y * y) / (k + e2)

        scale = 1 / math.sqrt(d * d + z * z)
        height = (k + e2 - 1) / k * math.sqrt(d * d + z * z)

        return NvectorEllipsoidal(
            scale * k / (k + e2) * x,
            scale * k / (k + e2) * y,
            scale * z,
            height,
            datum,
        )
