"""
Vector-based spherical geodesy, using n-vectors: unit vectors normal to the earth's
surface. N-vectors make many calculations much simpler than the equivalent
trigonometry, and are free of the singularities latitude/longitude suffers at the
poles and the anti-meridian.

Paths may be given either by a start point and a bearing, or by a start point and
an end point; wherever an argument is named `..._brng_end`, either form is
accepted.
"""

from __future__ import annotations

__all__ = ['LatLonNvectorSpherical', 'NvectorSpherical']

import math
from typing import Any, List, Optional, Sequence, Union

from geoformulae import dms
from geoformulae._base import LatLonBase
from geoformulae._const import (
    EARTH_RADIUS, METRES_TO_KM, METRES_TO_MILES, METRES_TO_NAUTICAL_MILES
)
from geoformulae.exceptions import InvalidArgument
from geoformulae.utils.functions import to_float
from geoformulae.vector3d import Vector3d

BearingOrPoint = Union[float, LatLonBase]

_NORTH_POLE = Vector3d(0, 0, 1)


class LatLonNvectorSpherical(LatLonBase):
    """
    Latitude/longitude points on a spherical model earth, with n-vector based
    methods for calculating distances, bearings, intersections, areas, etc.

    Args:
        lat:
            Latitude in degrees north

        lon:
            Longitude in degrees east
    """

    metres_to_km = METRES_TO_KM
    metres_to_miles = METRES_TO_MILES
    metres_to_nautical_miles = METRES_TO_NAUTICAL_MILES

    def to_nvector(self) -> 'NvectorSpherical':
        """
        Converts this point to an n-vector (normal to the earth's surface); a
        right-handed vector with x -> 0°E,0°N, y -> 90°E,0°N, z -> 90°N.
        """
        phi, lam = math.radians(self.lat), math.radians(self.lon)
        return NvectorSpherical(
            math.cos(phi) * math.cos(lam),
            math.cos(phi) * math.sin(lam),
            math.sin(phi),
        )

    def great_circle(self, bearing: float) -> Vector3d:
        """
        Vector normal to the great circle obtained by heading on the given bearing
        from this point. Direction of the vector is such that the initial bearing
        vector b = c × n, where n is the n-vector representing this point.
        """
        phi, lam = math.radians(self.lat), math.radians(self.lon)
        theta = math.radians(to_float(bearing, 'bearing'))

        return Vector3d(
            math.sin(lam) * math.cos(theta) - math.sin(phi) * math.cos(lam) * math.sin(theta),
            -math.cos(lam) * math.cos(theta) - math.sin(phi) * math.sin(lam) * math.sin(theta),
            math.cos(phi) * math.sin(theta),
        )

    @classmethod
    def _as_nvector_point(cls, point: Any, name: str = 'point') -> 'LatLonNvectorSpherical':
        point = cls._check_point(point, name)
        if isinstance(point, LatLonNvectorSpherical):
            return point
        return LatLonNvectorSpherical(point.lat, point.lon)

    @classmethod
    def _path_circle(cls, start: 'LatLonNvectorSpherical', brng_end: BearingOrPoint) -> Vector3d:
        """Great circle through a start point and either an end point or a bearing"""
        if isinstance(brng_end, LatLonBase):
            end = cls._as_nvector_point(brng_end)
            return start.to_nvector().cross(end.to_nvector())
        return start.great_circle(brng_end)

    def distance_to(self, point: Any, radius: float = EARTH_RADIUS) -> float:
        """
        Returns the great-circle distance from this point to the given point.

        Args:
            point:
                Destination point

            radius: (float) (Default 6371e3)
                Radius of the earth, in any unit

        Returns:
            float, in the same units as radius
        """
        point = self._as_nvector_point(point)
        radius = to_float(radius, 'radius')

        n1, n2 = self.to_nvector(), point.to_nvector()
        # tanδ = |n₁×n₂| / n₁⋅n₂
        delta = math.atan2(n1.cross(n2).length, n1.dot(n2))

        return delta * radius

    def initial_bearing_to(self, point: Any) -> float:
        """
        Returns the initial bearing from this point to the given point, in degrees
        from north; NaN if the points coincide.
        """
        point = self._as_nvector_point(point)
        if self.equals(point):
            return math.nan

        p1, p2 = self.to_nvector(), point.to_nvector()
        c1 = p1.cross(p2)  # great circle through p1 & p2
        c2 = p1.cross(_NORTH_POLE)  # great circle through p1 & north pole

        # bearing is the signed angle between c1 & c2
        return dms.wrap360(math.degrees(c1.angle_to(c2, p1)))

    def final_bearing_to(self, point: Any) -> float:
        """Returns the final bearing arriving at the given point from this point"""
        point = self._as_nvector_point(point)
        return dms.wrap360(point.initial_bearing_to(self) + 180)

    def midpoint_to(self, point: Any) -> 'LatLonNvectorSpherical':
        """Returns the midpoint between this point and the given point"""
        point = self._as_nvector_point(point)
        mid = self.to_nvector().plus(point.to_nvector())
        return NvectorSpherical(mid.x, mid.y, mid.z).to_lat_lon()

    def intermediate_point_to(self, point: Any, fraction: float) -> 'LatLonNvectorSpherical':
        """
        Returns the point at the given fraction along the great circle between this
        point and the given point.
        """
        point = self._as_nvector_point(point)
        fraction = to_float(fraction, 'fraction')

        n1, n2 = self.to_nvector(), point.to_nvector()
        delta = math.atan2(n1.cross(n2).length, n1.dot(n2))
        delta_i = delta * fraction

        # direction vector, perpendicular to n1 in the plane of n2
        d = n1.cross(n2).unit().cross(n1)
        interpolated = n1.times(math.cos(delta_i)).plus(d.times(math.sin(delta_i)))

        return NvectorSpherical(interpolated.x, interpolated.y, interpolated.z).to_lat_lon()

    def intermediate_point_on_chord_to(self, point: Any, fraction: float) -> 'LatLonNvectorSpherical':
        """
        Returns the point at the given fraction along the straight line (chord)
        between this point and the given point, projected onto the earth's surface.
        Faster than `intermediate_point_to`, but the result is not evenly spaced
        along the great circle.
        """
        point = self._as_nvector_point(point)
        fraction = to_float(fraction, 'fraction')

        n1, n2 = self.to_nvector(), point.to_nvector()
        interpolated = n1.plus(n2.minus(n1).times(fraction))

        return NvectorSpherical(interpolated.x, interpolated.y, interpolated.z).to_lat_lon()

    def destination_point(
        self,
        distance: float,
        bearing: float,
        radius: float = EARTH_RADIUS
    ) -> 'LatLonNvectorSpherical':
        """
        Returns the destination point from this point having travelled the given
        distance on the given initial bearing.
        """
        n1 = self.to_nvector()
        delta = to_float(distance, 'distance') / to_float(radius, 'radius')
        theta = math.radians(to_float(bearing, 'bearing'))

        east = _NORTH_POLE.cross(n1).unit()
        north = n1.cross(east)
        direction = north.times(math.cos(theta)).plus(east.times(math.sin(theta)))

        n2 = n1.times(math.cos(delta)).plus(direction.times(math.sin(delta)))

        return NvectorSpherical(n2.x, n2.y, n2.z).to_lat_lon()

    @classmethod
    def intersection(
        cls,
        path1_start: Any,
        path1_brng_end: BearingOrPoint,
        path2_start: Any,
        path2_brng_end: BearingOrPoint
    ) -> 'LatLonNvectorSpherical':
        """
        Returns the point of intersection of two paths, each defined by a start
        point and either an end point or an initial bearing.

        Of the two antipodal candidate intersections, a path given by bearing picks
        the one it is heading towards; if both paths are given by end points, the
        candidate nearer to the mean of all four points is returned.

        Returns:
            LatLonNvectorSpherical
        """
        path1_start = cls._as_nvector_point(path1_start, 'path1_start')
        path2_start = cls._as_nvector_point(path2_start, 'path2_start')
        path1_brng_end = cls._check_brng_end(path1_brng_end, 'path1_brng_end')
        path2_brng_end = cls._check_brng_end(path2_brng_end, 'path2_brng_end')

        if path1_start.equals(path2_start):
            return LatLonNvectorSpherical(path1_start.lat, path1_start.lon)

        p1, p2 = path1_start.to_nvector(), path2_start.to_nvector()
        c1 = cls._path_circle(path1_start, path1_brng_end)
        c2 = cls._path_circle(path2_start, path2_brng_end)

        # the two antipodal candidates
        i1 = c1.cross(c2)
        i2 = c2.cross(c1)

        by_bearing1 = not isinstance(path1_brng_end, LatLonBase)
        by_bearing2 = not isinstance(path2_brng_end, LatLonBase)

        # c×p⋅i1 +ve means the bearing from p points towards i1
        if by_bearing1 and by_bearing2:
            dir1 = math.copysign(1, c1.cross(p1).dot(i1))
            dir2 = math.copysign(1, c2.cross(p2).dot(i1))
            if dir1 + dir2 == 2:
                intersection = i1
            elif dir1 + dir2 == -2:
                intersection = i2
            else:
                # heading apart: take the intersection beyond the midpoint of p1 & p2
                intersection = i2 if p1.plus(p2).dot(i1) > 0 else i1

        elif by_bearing1:
            intersection = i1 if c1.cross(p1).dot(i1) > 0 else i2

        elif by_bearing2:
            intersection = i1 if c2.cross(p2).dot(i1) > 0 else i2

        else:
            mid = (
                p1.plus(p2)
                .plus(cls._as_nvector_point(path1_brng_end).to_nvector())
                .plus(cls._as_nvector_point(path2_brng_end).to_nvector())
            )
            intersection = i1 if mid.dot(i1) > 0 else i2

        return NvectorSpherical(intersection.x, intersection.y, intersection.z).to_lat_lon()

    @staticmethod
    def _check_brng_end(brng_end: Any, name: str) -> BearingOrPoint:
        if isinstance(brng_end, LatLonBase):
            return brng_end
        return to_float(brng_end, name)

    def cross_track_distance_to(
        self,
        path_start: Any,
        path_brng_end: BearingOrPoint,
        radius: float = EARTH_RADIUS
    ) -> float:
        """
        Returns the (signed) distance from this point to the great circle defined by
        a start point and an end point or bearing; negative to the left of the path.
        """
        path_start = self._as_nvector_point(path_start, 'path_start')
        path_brng_end = self._check_brng_end(path_brng_end, 'path_brng_end')
        radius = to_float(radius, 'radius')
        if self.equals(path_start):
            return 0.

        gc = self._path_circle(path_start, path_brng_end)
        alpha = gc.angle_to(self.to_nvector()) - math.pi / 2

        return alpha * radius

    def along_track_distance_to(
        self,
        path_start: Any,
        path_brng_end: BearingOrPoint,
        radius: float = EARTH_RADIUS
    ) -> float:
        """
        Returns how far this point is along a path from the start point, heading on
        a bearing or towards an end point; i.e. the distance from the start point to
        the closest point on the path.
        """
        path_start = self._as_nvector_point(path_start, 'path_start')
        path_brng_end = self._check_brng_end(path_brng_end, 'path_brng_end')
        radius = to_float(radius, 'radius')

        gc = self._path_circle(path_start, path_brng_end)
        along_track = gc.cross(self.to_nvector()).cross(gc)  # c × p × c
        alpha = path_start.to_nvector().angle_to(along_track, gc)

        return alpha * radius

    def nearest_point_on_segment(self, point1: Any, point2: Any) -> 'LatLonNvectorSpherical':
        """
        Returns the closest point on the great circle segment between point1 and
        point2 to this point; if this point is beyond the extent of the segment,
        the closer endpoint is returned.
        """
        point1 = self._as_nvector_point(point1, 'point1')
        point2 = self._as_nvector_point(point2, 'point2')

        if self.is_within_extent(point1, point2) and not point1.equals(point2):
            n0, n1, n2 = self.to_nvector(), point1.to_nvector(), point2.to_nvector()
            c1 = n1.cross(n2)  # great circle through p1, p2
            c2 = n0.cross(c1)  # great circle through p0 normal to c1
            n = c1.cross(c2)  # nearest point on c1 to n0
            return NvectorSpherical(n.x, n.y, n.z).to_lat_lon()

        closer = point1 if self.distance_to(point1) < self.distance_to(point2) else point2
        return LatLonNvectorSpherical(closer.lat, closer.lon)

    def is_within_extent(self, point1: Any, point2: Any) -> bool:
        """
        Returns whether this point is within the extent of a line segment joining
        point1 and point2, i.e. whether a perpendicular from this point to the great
        circle through the segment would fall within the segment.
        """
        point1 = self._as_nvector_point(point1, 'point1')
        point2 = self._as_nvector_point(point2, 'point2')
        if point1.equals(point2):
            return self.equals(point1)  # null segment

        n0, n1, n2 = self.to_nvector(), point1.to_nvector(), point2.to_nvector()

        # δ10⋅δ12 is +ve if p0 is on the p2 side of p1, similarly δ20⋅δ21
        extent1 = n0.minus(n1).dot(n2.minus(n1))
        extent2 = n0.minus(n2).dot(n1.minus(n2))
        same_hemisphere = n0.dot(n1) >= 0 and n0.dot(n2) >= 0

        return extent1 >= 0 and extent2 >= 0 and same_hemisphere

    @classmethod
    def triangulate(
        cls,
        point1: Any,
        bearing1: float,
        point2: Any,
        bearing2: float
    ) -> 'LatLonNvectorSpherical':
        """
        Locates a point given two known locations and bearings from those locations.
        """
        circles = []
        for point, bearing, name in ((point1, bearing1, 'point1'), (point2, bearing2, 'point2')):
            n = cls._as_nvector_point(point, name).to_nvector()
            theta = math.radians(to_float(bearing, 'bearing'))
            east = _NORTH_POLE.cross(n).unit()
            north = n.cross(east)
            direction = north.times(math.cos(theta)).plus(east.times(math.sin(theta)))
            circles.append(n.cross(direction))

        ni = circles[0].cross(circles[1])
        return NvectorSpherical(ni.x, ni.y, ni.z).to_lat_lon()

    @classmethod
    def trilaterate(
        cls,
        point1: Any,
        distance1: float,
        point2: Any,
        distance2: float,
        point3: Any,
        distance3: float,
        radius: float = EARTH_RADIUS
    ) -> Optional['LatLonNvectorSpherical']:
        """
        Locates a point given three known locations and the distances from those
        locations.

        Returns:
            LatLonNvectorSpherical, or None if there is no solution (e.g. coincident
            points)
        """
        radius = to_float(radius, 'radius')
        n1 = cls._as_nvector_point(point1, 'point1').to_nvector()
        n2 = cls._as_nvector_point(point2, 'point2').to_nvector()
        n3 = cls._as_nvector_point(point3, 'point3').to_nvector()
        delta1 = to_float(distance1, 'distance1') / radius
        delta2 = to_float(distance2, 'distance2') / radius
        delta3 = to_float(distance3, 'distance3') / radius

        # x,y coordinate system with origin at n1, x axis n1->n2
        e_x = n2.minus(n1).unit()
        i = e_x.dot(n3.minus(n1))  # x component of n1->n3
        e_y = n3.minus(n1).minus(e_x.times(i)).unit()
        d = n2.minus(n1).length
        j = e_y.dot(n3.minus(n1))  # y component of n1->n3

        try:
            x = (delta1 * delta1 - delta2 * delta2 + d * d) / (2 * d)
            y = (delta1 * delta1 - delta3 * delta3 + i * i + j * j) / (2 * j) - x * i / j
        except ZeroDivisionError:
            return None

        if not (math.isfinite(x) and math.isfinite(y)):
            return None

        # z component ignored; points assumed to be at the same height
        n = n1.plus(e_x.times(x)).plus(e_y.times(y))
        return NvectorSpherical(n.x, n.y, n.z).to_lat_lon()

    def is_enclosed_by(self, polygon: Sequence[Any]) -> bool:
        """
        Tests whether this point is enclosed by the polygon defined by a set of
        points, by angle summation: on a sphere the angles subtended at an enclosed
        point sum to nearly 2π, at an exterior point to nearly zero. The polygon may
        be open or closed, concave, or enclose a pole.

        Raises:
            InvalidArgument: polygon contains something other than points
        """
        vertices = [self._as_nvector_point(x, 'vertex') for x in polygon]
        if len(vertices) < 3:
            return False

        p = self.to_nvector()
        to_vertex = [p.minus(x.to_nvector()) for x in vertices]
        to_vertex.append(to_vertex[0])

        total = sum(a.angle_to(b, p) for a, b in zip(to_vertex, to_vertex[1:]))

        return abs(total) > math.pi

    @classmethod
    def area_of(cls, polygon: Sequence[Any], radius: float = EARTH_RADIUS) -> float:
        """
        Calculates the area of a spherical polygon where the sides of the polygon
        are great circle arcs joining the vertices (Girard's theorem).

        Args:
            polygon:
                The vertices of the polygon; may be open or closed

            radius: (float) (Default 6371e3)
                Radius of the earth

        Returns:
            float, in units of radius squared
        """
        radius = to_float(radius, 'radius')
        vertices = [cls._as_nvector_point(x, 'vertex') for x in polygon]
        if len(vertices) < 3:
            raise InvalidArgument('polygon must have at least 3 vertices')

        # great circle for each segment, ignoring the final vertex of a closed polygon
        circles: List[Vector3d] = []
        for idx, vertex in enumerate(vertices):
            following = vertices[(idx + 1) % len(vertices)]
            if vertex.equals(following):
                continue
            circles.append(vertex.to_nvector().cross(following.to_nvector()))

        n = len(circles)
        n1 = vertices[0].to_nvector()

        # cw/ccw interior angles are π−α or π+α where α is the angle between circles;
        # use the first vertex as plane normal for the sign of α
        total_alpha = sum(
            circles[idx].angle_to(circles[(idx + 1) % n], n1) for idx in range(n)
        )
        total_theta = n * math.pi - abs(total_alpha)

        excess = total_theta - (n - 2) * math.pi  # spherical excess, steradians
        return excess * radius * radius

    @classmethod
    def centre_of(cls, polygon: Sequence[Any]) -> 'LatLonNvectorSpherical':
        """
        Calculates the centre of a spherical polygon where the sides of the polygon
        are great circle arcs joining the vertices; for a simple polygon this is the
        centre of mass.
        """
        vertices = [cls._as_nvector_point(x, 'vertex') for x in polygon]

        centre = Vector3d(0, 0, 0)
        vertex_sum = Vector3d(0, 0, 0)
        for idx, vertex in enumerate(vertices):
            a = vertex.to_nvector()
            b = vertices[(idx + 1) % len(vertices)].to_nvector()
            centre = centre.plus(a.cross(b).unit().times(a.angle_to(b) / 2))  # a×b / |a×b| ⋅ θab/2
            vertex_sum = vertex_sum.plus(a)

        # pointing away from the vertices (clockwise polygon): negate; a single vertex
        # can sit exactly perpendicular to the centre, so test against their sum
        if centre.dot(vertex_sum) < 0:
            centre = centre.negate()

        return NvectorSpherical(centre.x, centre.y, centre.z).to_lat_lon()

    center_of = centre_of

    @classmethod
    def mean_of(cls, points: Sequence[Any]) -> 'LatLonNvectorSpherical':
        """Calculates the geographic mean of a set of points"""
        mean = Vector3d(0, 0, 0)
        for point in points:
            mean = mean.plus(cls._as_nvector_point(point).to_nvector())

        return NvectorSpherical(mean.x, mean.y, mean.z).to_lat_lon()

    def to_string(self, fmt: str = 'd', dp: Optional[int] = None) -> str:
        """
        Returns a string representation of this point, formatted as degrees,
        degrees+minutes, degrees+minutes+seconds, or signed numeric degrees
        ('n', e.g. '51.4778,-0.0015').

        Raises:
            InvalidRange: unrecognised format
        """
        return self._format_lat_lon(fmt, dp, ',')


class NvectorSpherical(Vector3d):
    """
    An n-vector on a spherical model earth: a unit vector normal to the surface.
    Components are normalised at construction.
    """

    def __init__(self, x: float, y: float, z: float):
        unit = Vector3d(x, y, z).unit()
        super().__init__(unit.x, unit.y, unit.z)

    def to_lat_lon(self) -> LatLonNvectorSpherical:
        """Converts this n-vector to a latitude/longitude point"""
        lat = math.atan2(self.z, math.sqrt(self.x * self.x + self.y * self.y))
        lon = math.atan2(self.y, self.x)
        return LatLonNvectorSpherical(math.degrees(lat), math.degrees(lon))

    def great_circle(self, bearing: float) -> Vector3d:
        """
        Vector normal to the great circle obtained by heading on the given bearing
        from the point represented by this n-vector.
        """
        theta = math.radians(to_float(bearing, 'bearing'))
        east = _NORTH_POLE.cross(self)
        north = self.cross(east)

        return north.times(math.sin(theta) / north.length).minus(
            east.times(math.cos(theta) / east.length)
        )
