"""
Latitude/longitude geodesy on a spherical model of the earth: great-circle distances,
bearings, destinations and intersections, rhumb lines, and polygon areas.

All formulae here are based on a spherical model of the earth, which is accurate to
within around 0.3%. The mean earth radius (6,371 km) is used unless otherwise given.
Angles are handled internally in radians and converted at the boundaries.
"""

from __future__ import annotations

__all__ = ['CrossingLongitudes', 'LatLonSpherical']

import math
from typing import Any, List, NamedTuple, Optional, Sequence

from geoformulae import dms
from geoformulae._base import LatLonBase
from geoformulae._const import (
    EARTH_RADIUS, EPSILON, METRES_TO_KM, METRES_TO_MILES, METRES_TO_NAUTICAL_MILES
)
from geoformulae.exceptions import InvalidArgument
from geoformulae.utils.functions import to_float

# Below this, the Mercator 'stretch' Δφ/Δψ is ill-conditioned (0/0); EPSILON is too small
_RHUMB_TOLERANCE = 1e-12


class CrossingLongitudes(NamedTuple):
    """The two longitudes at which a great circle crosses a parallel of latitude"""
    lon1: float
    lon2: float


def _haversine(phi1: float, lambda1: float, phi2: float, lambda2: float) -> float:
    """Angular distance (radians) between two points, by the haversine formula"""
    d_phi = phi2 - phi1
    d_lambda = lambda2 - lambda1
    a = (
        math.sin(d_phi / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _mercator_delta(phi1: float, phi2: float) -> float:
    """Δψ: difference in latitude on the 'stretched' Mercator projection"""
    return math.log(math.tan(phi2 / 2 + math.pi / 4) / math.tan(phi1 / 2 + math.pi / 4))


def _shorter_delta_lambda(d_lambda: float) -> float:
    """Takes the shorter rhumb line across the anti-meridian, if Δλ exceeds 180°"""
    if abs(d_lambda) > math.pi:
        return -(2 * math.pi - d_lambda) if d_lambda > 0 else 2 * math.pi + d_lambda
    return d_lambda


class LatLonSpherical(LatLonBase):
    """
    Latitude/longitude points on a spherical model earth, and methods for
    calculating distances, bearings, destinations, etc on (orthodromic) great-circle
    paths and (loxodromic) rhumb lines.

    Args:
        lat:
            Latitude in degrees north (wrapped to -90..+90)

        lon:
            Longitude in degrees east (wrapped to -180..+180)

    Example:
        >>> p = LatLonSpherical(52.205, 0.119)
    """

    metres_to_km = METRES_TO_KM
    metres_to_miles = METRES_TO_MILES
    metres_to_nautical_miles = METRES_TO_NAUTICAL_MILES

    def distance_to(self, point: Any, radius: float = EARTH_RADIUS) -> float:
        """
        Returns the distance along the surface of the earth from this point to the
        given point, using the haversine formula.

        Args:
            point:
                Destination point (or point literal)

            radius: (float) (Default 6371e3)
                Radius of the earth, in any unit; the result is in the same unit

        Returns:
            float

        Example:
            >>> LatLonSpherical(52.205, 0.119).distance_to(LatLonSpherical(48.857, 2.351))
            404279.164...
        """
        point = self._check_point(point)
        radius = to_float(radius, 'radius')

        return radius * _haversine(
            math.radians(self.lat), math.radians(self.lon),
            math.radians(point.lat), math.radians(point.lon)
        )

    def initial_bearing_to(self, point: Any) -> float:
        """
        Returns the initial bearing (forward azimuth) from this point to the given
        point, in degrees from north (0°..360°); NaN if the points coincide.
        """
        point = self._check_point(point)
        if self.equals(point):
            return math.nan

        phi1 = math.radians(self.lat)
        phi2 = math.radians(point.lat)
        d_lambda = math.radians(point.lon - self.lon)

        x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
        y = math.sin(d_lambda) * math.cos(phi2)

        return dms.wrap360(math.degrees(math.atan2(y, x)))

    def final_bearing_to(self, point: Any) -> float:
        """
        Returns the final bearing arriving at the given point from this point; the
        final bearing will differ from the initial bearing by varying degrees
        according to distance and latitude.
        """
        point = self._as_spherical(point)
        return dms.wrap360(point.initial_bearing_to(self) + 180)

    def midpoint_to(self, point: Any) -> 'LatLonSpherical':
        """Returns the midpoint along the great circle between this point and the given point"""
        point = self._check_point(point)

        phi1 = math.radians(self.lat)
        lambda1 = math.radians(self.lon)
        phi2 = math.radians(point.lat)
        d_lambda = math.radians(point.lon - self.lon)

        # cartesian vectors to the two points, this one on the prime meridian; the
        # midpoint lies along their sum
        ax, az = math.cos(phi1), math.sin(phi1)
        bx = math.cos(phi2) * math.cos(d_lambda)
        by = math.cos(phi2) * math.sin(d_lambda)
        bz = math.sin(phi2)

        cx, cy, cz = ax + bx, by, az + bz
        phi_m = math.atan2(cz, math.sqrt(cx * cx + cy * cy))
        lambda_m = lambda1 + math.atan2(cy, cx)

        return LatLonSpherical(math.degrees(phi_m), math.degrees(lambda_m))

    def intermediate_point_to(self, point: Any, fraction: float) -> 'LatLonSpherical':
        """
        Returns the point at the given fraction between this point and the given
        point.

        Args:
            point:
                Destination point (or point literal)

            fraction:
                Fraction between the two points (0 = this point, 1 = destination)

        Returns:
            LatLonSpherical
        """
        point = self._check_point(point)
        fraction = to_float(fraction, 'fraction')
        if self.equals(point):
            return LatLonSpherical(self.lat, self.lon)

        phi1, lambda1 = math.radians(self.lat), math.radians(self.lon)
        phi2, lambda2 = math.radians(point.lat), math.radians(point.lon)

        delta = _haversine(phi1, lambda1, phi2, lambda2)
        a = math.sin((1 - fraction) * delta) / math.sin(delta)
        b = math.sin(fraction * delta) / math.sin(delta)

        x = a * math.cos(phi1) * math.cos(lambda1) + b * math.cos(phi2) * math.cos(lambda2)
        y = a * math.cos(phi1) * math.sin(lambda1) + b * math.cos(phi2) * math.sin(lambda2)
        z = a * math.sin(phi1) + b * math.sin(phi2)

        phi3 = math.atan2(z, math.sqrt(x * x + y * y))
        lambda3 = math.atan2(y, x)

        return LatLonSpherical(math.degrees(phi3), math.degrees(lambda3))

    def destination_point(
        self,
        distance: float,
        bearing: float,
        radius: float = EARTH_RADIUS
    ) -> 'LatLonSpherical':
        """
        Returns the destination point from this point having travelled the given
        distance on the given initial bearing (bearing normally varies around the
        path followed).

        Args:
            distance:
                Distance travelled, in the same units as radius

            bearing:
                Initial bearing in degrees from north

            radius: (float) (Default 6371e3)
                Radius of the earth

        Returns:
            LatLonSpherical
        """
        delta = to_float(distance, 'distance') / to_float(radius, 'radius')
        theta = math.radians(to_float(bearing, 'bearing'))

        phi1, lambda1 = math.radians(self.lat), math.radians(self.lon)

        sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
        phi2 = math.asin(sin_phi2)
        y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
        x = math.cos(delta) - math.sin(phi1) * sin_phi2
        lambda2 = lambda1 + math.atan2(y, x)

        return LatLonSpherical(math.degrees(phi2), math.degrees(lambda2))

    @classmethod
    def intersection(
        cls,
        p1: Any,
        brng1: float,
        p2: Any,
        brng2: float
    ) -> Optional['LatLonSpherical']:
        """
        Returns the point of intersection of two paths defined by point and bearing.

        Args:
            p1:
                First point
            brng1:
                Initial bearing from first point
            p2:
                Second point
            brng2:
                Initial bearing from second point

        Returns:
            LatLonSpherical, or None if there are infinite or ambiguous intersections
        """
        p1 = cls._check_point(p1, 'p1')
        p2 = cls._check_point(p2, 'p2')
        theta13 = math.radians(to_float(brng1, 'brng1'))
        theta23 = math.radians(to_float(brng2, 'brng2'))

        phi1, lambda1 = math.radians(p1.lat), math.radians(p1.lon)
        phi2, lambda2 = math.radians(p2.lat), math.radians(p2.lon)
        d_phi, d_lambda = phi2 - phi1, lambda2 - lambda1

        # angular distance p1-p2
        delta12 = 2 * math.asin(math.sqrt(
            math.sin(d_phi / 2) ** 2 +
            math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        ))
        if abs(delta12) < EPSILON:
            return LatLonSpherical(p1.lat, p1.lon)

        # initial/final bearings between points, clamped against rounding errors
        cos_theta_a = (
            (math.sin(phi2) - math.sin(phi1) * math.cos(delta12)) /
            (math.sin(delta12) * math.cos(phi1))
        )
        cos_theta_b = (
            (math.sin(phi1) - math.sin(phi2) * math.cos(delta12)) /
            (math.sin(delta12) * math.cos(phi2))
        )
        theta_a = math.acos(min(max(cos_theta_a, -1), 1))
        theta_b = math.acos(min(max(cos_theta_b, -1), 1))

        theta12 = theta_a if math.sin(d_lambda) > 0 else 2 * math.pi - theta_a
        theta21 = 2 * math.pi - theta_b if math.sin(d_lambda) > 0 else theta_b

        alpha1 = theta13 - theta12  # angle 2-1-3
        alpha2 = theta21 - theta23  # angle 1-2-3

        if math.sin(alpha1) == 0 and math.sin(alpha2) == 0:
            return None  # infinite intersections
        if math.sin(alpha1) * math.sin(alpha2) < 0:
            return None  # ambiguous intersection (antipodal/360°)

        cos_alpha3 = (
            -math.cos(alpha1) * math.cos(alpha2) +
            math.sin(alpha1) * math.sin(alpha2) * math.cos(delta12)
        )
        delta13 = math.atan2(
            math.sin(delta12) * math.sin(alpha1) * math.sin(alpha2),
            math.cos(alpha2) + math.cos(alpha1) * cos_alpha3
        )

        phi3 = math.asin(min(max(
            math.sin(phi1) * math.cos(delta13) +
            math.cos(phi1) * math.sin(delta13) * math.cos(theta13), -1), 1
        ))
        d_lambda13 = math.atan2(
            math.sin(theta13) * math.sin(delta13) * math.cos(phi1),
            math.cos(delta13) - math.sin(phi1) * math.sin(phi3)
        )

        return LatLonSpherical(math.degrees(phi3), math.degrees(lambda1 + d_lambda13))

    def _track_angles(self, path_start: 'LatLonBase', path_end: 'LatLonBase', radius: float):
        delta13 = path_start.distance_to(self, radius) / radius
        theta13 = math.radians(path_start.initial_bearing_to(self))
        theta12 = math.radians(path_start.initial_bearing_to(path_end))
        return delta13, theta13, theta12

    def cross_track_distance_to(
        self,
        path_start: Any,
        path_end: Any,
        radius: float = EARTH_RADIUS
    ) -> float:
        """
        Returns the (signed) distance from this point to the great circle defined by
        a start point and an end point; negative to the left of the path.
        """
        path_start = self._as_spherical(path_start, 'path_start')
        path_end = self._as_spherical(path_end, 'path_end')
        radius = to_float(radius, 'radius')
        if self.equals(path_start):
            return 0.

        delta13, theta13, theta12 = self._track_angles(path_start, path_end, radius)
        delta_xt = math.asin(math.sin(delta13) * math.sin(theta13 - theta12))

        return delta_xt * radius

    def along_track_distance_to(
        self,
        path_start: Any,
        path_end: Any,
        radius: float = EARTH_RADIUS
    ) -> float:
        """
        Returns how far this point is along a path from the start point, heading
        towards the end point; i.e. the distance from the start point to the closest
        point on the path. Negative if the closest point lies behind the start.
        """
        path_start = self._as_spherical(path_start, 'path_start')
        path_end = self._as_spherical(path_end, 'path_end')
        radius = to_float(radius, 'radius')
        if self.equals(path_start):
            return 0.

        delta13, theta13, theta12 = self._track_angles(path_start, path_end, radius)
        delta_xt = math.asin(math.sin(delta13) * math.sin(theta13 - theta12))
        delta_at = math.acos(min(math.cos(delta13) / abs(math.cos(delta_xt)), 1))

        return delta_at * math.copysign(1, math.cos(theta12 - theta13)) * radius

    def max_latitude(self, bearing: float) -> float:
        """
        Returns the maximum latitude reached when travelling on a great circle on the
        given bearing from this point ('Clairaut's formula'). Negate the result for
        the minimum latitude (in the southern hemisphere).
        """
        theta = math.radians(to_float(bearing, 'bearing'))
        phi = math.radians(self.lat)

        return math.degrees(math.acos(abs(math.sin(theta) * math.cos(phi))))

    @classmethod
    def crossing_parallels(
        cls,
        point1: Any,
        point2: Any,
        latitude: float
    ) -> Optional[CrossingLongitudes]:
        """
        Returns the pair of meridians at which a great circle defined by two points
        crosses the given latitude.

        Returns:
            CrossingLongitudes, or None if the great circle doesn't reach the latitude
        """
        point1 = cls._check_point(point1, 'point1')
        point2 = cls._check_point(point2, 'point2')
        if point1.equals(point2):
            return None

        phi = math.radians(to_float(latitude, 'latitude'))
        phi1, lambda1 = math.radians(point1.lat), math.radians(point1.lon)
        phi2, lambda2 = math.radians(point2.lat), math.radians(point2.lon)
        d_lambda = lambda2 - lambda1

        x = math.sin(phi1) * math.cos(phi2) * math.cos(phi) * math.sin(d_lambda)
        y = (
            math.sin(phi1) * math.cos(phi2) * math.cos(phi) * math.cos(d_lambda) -
            math.cos(phi1) * math.sin(phi2) * math.cos(phi)
        )
        z = math.cos(phi1) * math.cos(phi2) * math.sin(phi) * math.sin(d_lambda)

        if z * z > x * x + y * y:
            return None  # great circle doesn't reach latitude

        lambda_m = math.atan2(-y, x)  # longitude at max latitude
        d_lambda_i = math.acos(z / math.sqrt(x * x + y * y))  # from lambda_m to intersections

        return CrossingLongitudes(
            dms.wrap180(math.degrees(lambda1 + lambda_m - d_lambda_i)),
            dms.wrap180(math.degrees(lambda1 + lambda_m + d_lambda_i)),
        )

    def rhumb_distance_to(self, point: Any, radius: float = EARTH_RADIUS) -> float:
        """Returns the distance travelling from this point to the given point along a rhumb line"""
        point = self._check_point(point)
        radius = to_float(radius, 'radius')

        phi1, phi2 = math.radians(self.lat), math.radians(point.lat)
        d_phi = phi2 - phi1
        d_lambda = _shorter_delta_lambda(math.radians(abs(point.lon - self.lon)))

        # on Mercator projection, longitude distances shrink by latitude; q is the 'stretch factor'
        d_psi = _mercator_delta(phi1, phi2)
        q = d_phi / d_psi if abs(d_psi) > _RHUMB_TOLERANCE else math.cos(phi1)

        # pythagoras on the stretched Mercator projection
        delta = math.sqrt(d_phi * d_phi + q * q * d_lambda * d_lambda)

        return delta * radius

    def rhumb_bearing_to(self, point: Any) -> float:
        """Returns the bearing from this point to the given point along a rhumb line; NaN if coincident"""
        point = self._check_point(point)
        if self.equals(point):
            return math.nan

        phi1, phi2 = math.radians(self.lat), math.radians(point.lat)
        d_lambda = _shorter_delta_lambda(math.radians(point.lon - self.lon))
        d_psi = _mercator_delta(phi1, phi2)

        return dms.wrap360(math.degrees(math.atan2(d_lambda, d_psi)))

    def rhumb_destination_point(
        self,
        distance: float,
        bearing: float,
        radius: float = EARTH_RADIUS
    ) -> 'LatLonSpherical':
        """
        Returns the destination point having travelled along a rhumb line from this
        point the given distance on the given bearing.
        """
        phi1, lambda1 = math.radians(self.lat), math.radians(self.lon)
        theta = math.radians(to_float(bearing, 'bearing'))
        delta = to_float(distance, 'distance') / to_float(radius, 'radius')

        d_phi = delta * math.cos(theta)
        phi2 = phi1 + d_phi

        # past the pole: reflect back
        if abs(phi2) > math.pi / 2:
            phi2 = math.pi - phi2 if phi2 > 0 else -math.pi - phi2

        d_psi = _mercator_delta(phi1, phi2)
        q = d_phi / d_psi if abs(d_psi) > _RHUMB_TOLERANCE else math.cos(phi1)

        lambda2 = lambda1 + delta * math.sin(theta) / q

        return LatLonSpherical(math.degrees(phi2), math.degrees(lambda2))

    def rhumb_midpoint_to(self, point: Any) -> 'LatLonSpherical':
        """Returns the loxodromic midpoint (along a rhumb line) between this point and the given point"""
        point = self._check_point(point)

        phi1, lambda1 = math.radians(self.lat), math.radians(self.lon)
        phi2, lambda2 = math.radians(point.lat), math.radians(point.lon)

        if abs(lambda2 - lambda1) > math.pi:
            lambda1 += 2 * math.pi  # crossing anti-meridian

        phi3 = (phi1 + phi2) / 2
        f1 = math.tan(math.pi / 4 + phi1 / 2)
        f2 = math.tan(math.pi / 4 + phi2 / 2)
        f3 = math.tan(math.pi / 4 + phi3 / 2)

        try:
            lambda3 = (
                ((lambda2 - lambda1) * math.log(f3) + lambda1 * math.log(f2) - lambda2 * math.log(f1)) /
                math.log(f2 / f1)
            )
        except ZeroDivisionError:
            lambda3 = math.nan

        if not math.isfinite(lambda3):
            lambda3 = (lambda1 + lambda2) / 2  # parallel of latitude

        return LatLonSpherical(math.degrees(phi3), math.degrees(lambda3))

    @classmethod
    def area_of(cls, polygon: Sequence[Any], radius: float = EARTH_RADIUS) -> float:
        """
        Calculates the area of a spherical polygon where the sides of the polygon
        are great circle arcs joining the vertices, using Karney's trapezium
        method. The polygon may be open or closed (first vertex repeated), concave,
        or enclose a pole.

        Args:
            polygon:
                The vertices of the polygon

            radius: (float) (Default 6371e3)
                Radius of the earth

        Returns:
            float, area in units of radius squared

        Example:
            >>> triangle = [LatLonSpherical(0, 0), LatLonSpherical(1, 0), LatLonSpherical(0, 1)]
            >>> LatLonSpherical.area_of(triangle)
            6181527888.64...
        """
        radius = to_float(radius, 'radius')
        vertices: List[LatLonBase] = [cls._check_point(x, 'vertex') for x in polygon]
        if len(vertices) < 3:
            raise InvalidArgument('polygon must have at least 3 vertices')

        if not vertices[0].equals(vertices[-1]):
            vertices.append(vertices[0])

        excess = 0.  # spherical excess in steradians
        for start, end in zip(vertices, vertices[1:]):
            phi1 = math.radians(start.lat)
            phi2 = math.radians(end.lat)
            d_lambda = math.radians(end.lon - start.lon)
            excess += 2 * math.atan2(
                math.tan(d_lambda / 2) * (math.tan(phi1 / 2) + math.tan(phi2 / 2)),
                1 + math.tan(phi1 / 2) * math.tan(phi2 / 2)
            )

        if cls._is_pole_enclosed_by(vertices):
            excess = abs(excess) - 2 * math.pi

        return abs(excess * radius * radius)

    @classmethod
    def _is_pole_enclosed_by(cls, vertices: List[LatLonBase]) -> bool:
        """
        Whether a closed polygon encloses a pole: the sum of course deltas around
        a pole is 0° rather than the normal ±360°.
        """
        vertices = [cls._as_spherical(x) for x in vertices]

        total = 0.
        prev_brng = vertices[0].initial_bearing_to(vertices[1])
        for start, end in zip(vertices, vertices[1:]):
            init_brng = start.initial_bearing_to(end)
            final_brng = start.final_bearing_to(end)
            total += (init_brng - prev_brng + 540) % 360 - 180
            total += (final_brng - init_brng + 540) % 360 - 180
            prev_brng = final_brng

        init_brng = vertices[0].initial_bearing_to(vertices[1])
        total += (init_brng - prev_brng + 540) % 360 - 180

        # TODO: edges passing over a pole, e.g. (85,90), (85,0), (85,-90), are not detected reliably
        return abs(total) < 90

    @classmethod
    def _as_spherical(cls, point: Any, name: str = 'point') -> 'LatLonSpherical':
        point = cls._check_point(point, name)
        if isinstance(point, LatLonSpherical):
            return point
        return LatLonSpherical(point.lat, point.lon)

    def to_string(self, fmt: str = 'd', dp: Optional[int] = None) -> str:
        """
        Returns a string representation of this point, formatted as degrees,
        degrees+minutes, degrees+minutes+seconds, or signed numeric degrees.

        Args:
            fmt: (str) (Default 'd')
                One of 'd', 'dm', 'dms', 'n'

            dp: (int) (Default 4 for 'd' and 'n', 2 for 'dm', 0 for 'dms')
                Number of decimal places to use

        Returns:
            str, e.g. '51.4778°N, 000.0015°W', or '51.4778,-0.0015' for 'n'

        Raises:
            InvalidRange: unrecognised format
        """
        return self._format_lat_lon(fmt, dp, ',')
