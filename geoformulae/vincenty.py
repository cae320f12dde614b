"""
Geodesics on an ellipsoidal model of the earth, by Vincenty's direct and inverse
solutions ('Direct and Inverse Solutions of Geodesics on the Ellipsoid with
application of nested equations', Survey Review, 1975).

Vincenty's solutions are accurate to within 0.5 mm, and iterate to convergence.
Nearly-antipodal points may fail to converge; the core solutions raise
NotConverged for these, which the LatLonVincenty convenience methods log and
present as NaN.
"""

from __future__ import annotations

__all__ = ['LatLonVincenty', 'VincentyDirect', 'VincentyInverse', 'vincenty_direct', 'vincenty_inverse']

import math
from typing import NamedTuple, Optional

from geoformulae import dms
from geoformulae._const import EPSILON, VINCENTY_CONVERGENCE, VINCENTY_MAX_ITERATIONS
from geoformulae.ellipsoidal import LatLonEllipsoidal
from geoformulae.ellipsoidal_datum import LatLonDatum
from geoformulae.ellipsoids import Ellipsoid
from geoformulae.exceptions import InvalidArgument, InvalidRange, NotConverged
from geoformulae.utils.functions import round_half_up, to_float
from geoformulae.utils.logging import LOGGER


class VincentyInverse(NamedTuple):
    """
    Solution of the inverse problem.

    Attributes:
        distance: length of the geodesic, metres
        initial_azimuth: azimuth at the first point, radians; NaN for coincident points
        final_azimuth: azimuth at the second point, radians; NaN for coincident points
        iterations: number of iterations taken to converge
    """
    distance: float
    initial_azimuth: float
    final_azimuth: float
    iterations: int


class VincentyDirect(NamedTuple):
    """
    Solution of the direct problem.

    Attributes:
        lat: latitude of the destination, radians
        lon: longitude of the destination, radians
        final_azimuth: azimuth at the destination, radians
        iterations: number of iterations taken to converge
    """
    lat: float
    lon: float
    final_azimuth: float
    iterations: int


def _reduced_latitude(phi: float, f: float):
    """cosU, sinU of the reduced latitude U, where tanU = (1−f)·tanφ"""
    tan_u = (1 - f) * math.tan(phi)
    cos_u = 1 / math.sqrt(1 + tan_u * tan_u)
    return cos_u, tan_u * cos_u


def _a_b(cos_sq_alpha: float, a: float, b: float):
    """Vincenty's A and B coefficients"""
    u_sq = cos_sq_alpha * (a * a - b * b) / (b * b)
    big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    return big_a, big_b


def _delta_sigma(big_b: float, sin_sigma: float, cos_sigma: float, cos2_sigma_m: float) -> float:
    return big_b * sin_sigma * (
        cos2_sigma_m + big_b / 4 * (
            cos_sigma * (-1 + 2 * cos2_sigma_m * cos2_sigma_m) -
            big_b / 6 * cos2_sigma_m * (-3 + 4 * sin_sigma * sin_sigma) *
            (-3 + 4 * cos2_sigma_m * cos2_sigma_m)
        )
    )


def vincenty_inverse(
    phi1: float,
    lambda1: float,
    phi2: float,
    lambda2: float,
    ellipsoid: Ellipsoid
) -> VincentyInverse:
    """
    Solves the inverse geodesic problem: the distance between two points, and the
    azimuths of the geodesic at each end.

    Args:
        phi1, lambda1:
            Latitude and longitude of the first point, radians

        phi2, lambda2:
            Latitude and longitude of the second point, radians

        ellipsoid:
            The ellipsoid the points are on

    Returns:
        VincentyInverse

    Raises:
        NotConverged: λ > π, or the iteration limit was reached (typically for
            nearly-antipodal points)
    """
    a, b, f = ellipsoid.a, ellipsoid.b, ellipsoid.f

    big_l = lambda2 - lambda1  # difference in longitude
    cos_u1, sin_u1 = _reduced_latitude(phi1, f)
    cos_u2, sin_u2 = _reduced_latitude(phi2, f)

    antipodal = abs(big_l) > math.pi / 2 or abs(phi2 - phi1) > math.pi / 2

    lam = big_l  # difference in longitude on the auxiliary sphere
    sin_lam = cos_lam = 0.
    sigma = math.pi if antipodal else 0.
    sin_sigma = 0.
    cos_sigma = -1. if antipodal else 1.
    sin_sq_sigma = 0.
    cos2_sigma_m = 1.
    cos_sq_alpha = 1.

    iterations = 0
    while True:
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        sin_sq_sigma = (
            (cos_u2 * sin_lam) ** 2 +
            (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
        )
        if abs(sin_sq_sigma) < 1e-24:
            break  # coincident or antipodal points

        sin_sigma = math.sqrt(sin_sq_sigma)
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha * sin_alpha

        # on the equatorial line cos²α = 0
        cos2_sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha if cos_sq_alpha != 0 else 0.

        c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = big_l + (1 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (cos2_sigma_m + c * cos_sigma * (-1 + 2 * cos2_sigma_m * cos2_sigma_m))
        )

        check = abs(lam) - math.pi if antipodal else abs(lam)
        if check > math.pi:
            raise NotConverged('λ > π')

        if abs(lam - lam_prev) <= VINCENTY_CONVERGENCE:
            break

        iterations += 1
        if iterations >= VINCENTY_MAX_ITERATIONS:
            raise NotConverged('Vincenty formula failed to converge')

    LOGGER.debug('vincenty inverse converged after %d iterations', iterations)

    big_a, big_b = _a_b(cos_sq_alpha, a, b)
    distance = b * big_a * (sigma - _delta_sigma(big_b, sin_sigma, cos_sigma, cos2_sigma_m))

    if abs(distance) < EPSILON:
        return VincentyInverse(distance, math.nan, math.nan, iterations)

    # exactly antipodal points (sin²σ = 0) have a meridional geodesic
    if abs(sin_sq_sigma) < EPSILON:
        alpha1, alpha2 = 0., math.pi
    else:
        alpha1 = math.atan2(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        alpha2 = math.atan2(cos_u1 * sin_lam, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam)

    return VincentyInverse(distance, alpha1, alpha2, iterations)


def vincenty_direct(
    phi1: float,
    lambda1: float,
    alpha1: float,
    distance: float,
    ellipsoid: Ellipsoid
) -> VincentyDirect:
    """
    Solves the direct geodesic problem: the destination reached from a point
    travelling a given distance on a given initial azimuth.

    Args:
        phi1, lambda1:
            Latitude and longitude of the start point, radians

        alpha1:
            Initial azimuth, radians

        distance:
            Distance along the geodesic, metres

        ellipsoid:
            The ellipsoid the point is on

    Returns:
        VincentyDirect; the destination longitude is normalised to -π..+π

    Raises:
        NotConverged: the iteration limit was reached
    """
    a, b, f = ellipsoid.a, ellipsoid.b, ellipsoid.f
    s = distance

    sin_alpha1, cos_alpha1 = math.sin(alpha1), math.cos(alpha1)
    cos_u1, sin_u1 = _reduced_latitude(phi1, f)
    tan_u1 = (1 - f) * math.tan(phi1)

    sigma1 = math.atan2(tan_u1, cos_alpha1)  # angular distance on the sphere from the equator to P1
    sin_alpha = cos_u1 * sin_alpha1  # azimuth of the geodesic at the equator
    cos_sq_alpha = 1 - sin_alpha * sin_alpha

    big_a, big_b = _a_b(cos_sq_alpha, a, b)

    sigma = s / (b * big_a)
    iterations = 0
    while True:
        cos2_sigma_m = math.cos(2 * sigma1 + sigma)
        sin_sigma, cos_sigma = math.sin(sigma), math.cos(sigma)
        sigma_prev = sigma
        sigma = s / (b * big_a) + _delta_sigma(big_b, sin_sigma, cos_sigma, cos2_sigma_m)

        if abs(sigma - sigma_prev) <= VINCENTY_CONVERGENCE:
            break

        iterations += 1
        if iterations >= VINCENTY_MAX_ITERATIONS:
            raise NotConverged('Vincenty formula failed to converge')

    LOGGER.debug('vincenty direct converged after %d iterations', iterations)

    x = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
    phi2 = math.atan2(
        sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
        (1 - f) * math.sqrt(sin_alpha * sin_alpha + x * x)
    )
    lam = math.atan2(sin_sigma * sin_alpha1, cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1)
    c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
    big_l = lam - (1 - c) * f * sin_alpha * (
        sigma + c * sin_sigma * (cos2_sigma_m + c * cos_sigma * (-1 + 2 * cos2_sigma_m * cos2_sigma_m))
    )
    lambda2 = math.radians(dms.wrap180(math.degrees(lambda1 + big_l)))
    alpha2 = math.atan2(sin_alpha, -x)

    return VincentyDirect(phi2, lambda2, alpha2, iterations)


class LatLonVincenty(LatLonDatum):
    """
    Latitude/longitude points on an ellipsoidal model earth, with methods for
    geodesic distances, bearings and destinations using Vincenty's solutions.
    The ellipsoid is that of the point's datum (WGS84 by default).

    Points must be on the surface of the ellipsoid (height 0).

    Example:
        >>> le, jog = LatLonVincenty(50.06632, -5.71475), LatLonVincenty(58.64402, -3.07009)
        >>> le.distance_to(jog)
        969954.166
    """

    def _check_surface(self, point: Optional[LatLonEllipsoidal] = None):
        if self.height != 0 or (point is not None and point.height != 0):
            raise InvalidRange('point must be on the surface of the ellipsoid')

    def inverse(self, point: LatLonEllipsoidal) -> VincentyInverse:
        """
        Solves the inverse problem between this point and the given point, on this
        point's ellipsoid.

        Raises:
            InvalidArgument: point is not an ellipsoidal point
            InvalidRange: either point has a non-zero height
            NotConverged: the solution failed to converge
        """
        if not isinstance(point, LatLonEllipsoidal):
            raise InvalidArgument(f'invalid point ‘{point}’')
        self._check_surface(point)

        return vincenty_inverse(
            math.radians(self.lat), math.radians(self.lon),
            math.radians(point.lat), math.radians(point.lon),
            self.ellipsoid
        )

    def direct(self, distance: float, initial_bearing: float) -> VincentyDirect:
        """
        Solves the direct problem from this point, on this point's ellipsoid.

        Raises:
            InvalidArgument: distance or bearing is not numeric
            InvalidRange: this point has a non-zero height
            NotConverged: the solution failed to converge
        """
        distance = to_float(distance, 'distance')
        initial_bearing = to_float(initial_bearing, 'bearing')
        self._check_surface()

        return vincenty_direct(
            math.radians(self.lat), math.radians(self.lon),
            math.radians(initial_bearing), distance, self.ellipsoid
        )

    def _inverse_or_nan(self, point: LatLonEllipsoidal, field: str) -> float:
        try:
            return getattr(self.inverse(point), field)
        except NotConverged as exc:
            LOGGER.warning(
                'vincenty inverse from %s to %s did not converge (%s); returning NaN',
                self.to_string(), point.to_string(), exc
            )
            return math.nan

    def distance_to(self, point: LatLonEllipsoidal) -> float:
        """
        Returns the distance in metres along the geodesic between this point and
        the given point, to 1 mm precision; NaN if the solution fails to converge.
        """
        distance = self._inverse_or_nan(point, 'distance')
        return round_half_up(distance, 3) if math.isfinite(distance) else distance

    def initial_bearing_to(self, point: LatLonEllipsoidal) -> float:
        """
        Returns the initial bearing in degrees from north (0.001″ precision) of the
        geodesic from this point to the given point; NaN for coincident points or
        if the solution fails to converge.
        """
        return self._to_bearing(self._inverse_or_nan(point, 'initial_azimuth'))

    def final_bearing_to(self, point: LatLonEllipsoidal) -> float:
        """
        Returns the final bearing in degrees from north (0.001″ precision) of the
        geodesic arriving at the given point; NaN for coincident points or if the
        solution fails to converge.
        """
        return self._to_bearing(self._inverse_or_nan(point, 'final_azimuth'))

    @staticmethod
    def _to_bearing(azimuth: float) -> float:
        if math.isnan(azimuth):
            return azimuth
        return round_half_up(dms.wrap360(math.degrees(azimuth)), 7)

    def destination_point(self, distance: float, initial_bearing: float) -> 'LatLonVincenty':
        """
        Returns the destination point having travelled the given distance (metres)
        along a geodesic on the given initial bearing from this point.
        """
        if to_float(distance, 'distance') == 0:
            return LatLonVincenty(self.lat, self.lon, 0, self.datum)

        result = self.direct(distance, initial_bearing)
        return LatLonVincenty(math.degrees(result.lat), math.degrees(result.lon), 0, self.datum)

    def final_bearing_on(self, distance: float, initial_bearing: float) -> float:
        """
        Returns the final bearing having travelled the given distance along a
        geodesic on the given initial bearing from this point; NaN for zero distance.
        """
        if to_float(distance, 'distance') == 0:
            return math.nan

        return self._to_bearing(self.direct(distance, initial_bearing).final_azimuth)

    def intermediate_point_to(self, point: LatLonEllipsoidal, fraction: float) -> LatLonEllipsoidal:
        """
        Returns the point at the given fraction along the geodesic between this
        point and the given point.

        Args:
            point:
                Destination point

            fraction:
                Fraction between the two points (0 = this point, 1 = destination)

        Returns:
            LatLonVincenty
        """
        fraction = to_float(fraction, 'fraction')
        if fraction == 0:
            return self
        if fraction == 1:
            return point

        inverse = self.inverse(point)
        if math.isnan(inverse.initial_azimuth):
            return self

        return self.destination_point(
            inverse.distance * fraction, math.degrees(inverse.initial_azimuth)
        )

