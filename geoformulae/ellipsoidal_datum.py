"""
Ellipsoidal points with a geodetic datum, and conversions between datums using
7-parameter Helmert transforms.

Datum conversions are approximate: Helmert transforms between historical datums
are generally accurate to within a few metres. Conversions go through WGS84 unless
either end of the conversion is WGS84.
"""

from __future__ import annotations

__all__ = ['CartesianDatum', 'LatLonDatum']

import math
from typing import Any, Optional, Union

from typing_extensions import Self

from geoformulae.datums import DATUMS, Datum, get_datum
from geoformulae.ellipsoidal import (
    Cartesian, LatLonEllipsoidal, cartesian_to_geodetic, geodetic_to_cartesian
)
from geoformulae.ellipsoids import Ellipsoid
from geoformulae.exceptions import InvalidArgument
from geoformulae.helmert import HelmertParams, apply_transform, datum_transform
from geoformulae.parsers import parse_point


class LatLonDatum(LatLonEllipsoidal):
    """
    Latitude/longitude points on an ellipsoidal model earth, with height and a
    geodetic datum (WGS84 unless otherwise given).

    Args:
        lat:
            Geodetic latitude in degrees

        lon:
            Longitude in degrees

        height: (Default 0)
            Height above the ellipsoid in metres

        datum: (Default 'WGS84')
            Datum name, or Datum record from geoformulae.datums.DATUMS
    """

    def __init__(
        self,
        lat: Any,
        lon: Any,
        height: Any = 0,
        datum: Union[str, Datum] = 'WGS84'
    ):
        super().__init__(lat, lon, height)
        self._datum = get_datum(datum)

    @property
    def datum(self) -> Datum:
        """The point's datum"""
        return self._datum

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The ellipsoid of the point's datum"""
        return self._datum.ellipsoid

    def __repr__(self):
        return (
            f'<{self.__class__.__name__}({self.lat}, {self.lon}, {self.height}, '
            f'{self.datum.name})>'
        )

    def _key(self) -> tuple:
        return super()._key() + (self.datum.name,)

    @classmethod
    def parse(cls, *args: Any, datum: Union[str, Datum] = 'WGS84') -> Self:
        """
        Creates a point from any of the supported point literals, with optional
        height and datum:

            LatLonDatum.parse('51.47736, 0.0000', 0, datum='OSGB36')

        Raises:
            InvalidArgument: the arguments do not describe a valid point
            UnrecognisedDatum: datum is not in the datum table
        """
        lat, lon, height = parse_point(*args)
        return cls(lat, lon, height or 0, datum)

    def equals(self, point) -> bool:
        """Checks if another point is equal to this point, including datum"""
        if not super().equals(point):
            return False

        return isinstance(point, LatLonDatum) and self.datum == point.datum

    def convert_datum(self, to_datum: Union[str, Datum]) -> 'LatLonDatum':
        """
        Converts this point to a (geodetic) latitude/longitude on a different datum.

        Args:
            to_datum:
                Datum name, or Datum record, the point is to be converted to

        Returns:
            LatLonDatum on the new datum

        Raises:
            UnrecognisedDatum: to_datum is not in the datum table

        Example:
            >>> greenwich = LatLonDatum(51.47788, -0.00147)
            >>> str(greenwich.convert_datum('OSGB36'))
            '51.4774°N, 000.0001°E'
        """
        to_datum = get_datum(to_datum)
        return self.to_cartesian().convert_datum(to_datum).to_lat_lon()

    def to_cartesian(self) -> 'CartesianDatum':
        """
        Converts this point to geocentric cartesian (x/y/z) coordinates on the same
        datum.

        Returns:
            CartesianDatum
        """
        x, y, z = geodetic_to_cartesian(
            math.radians(self.lat), math.radians(self.lon), self.height, self.ellipsoid
        )
        return CartesianDatum(x, y, z, self.datum)


class CartesianDatum(Cartesian):
    """
    Earth-centred earth-fixed (ECEF) cartesian coordinates with a geodetic datum.

    Args:
        x, y, z:
            Coordinates in metres from earth centre

        datum: (Default None)
            Datum name, or Datum record, the coordinates are defined on
    """

    def __init__(self, x: Any, y: Any, z: Any, datum: Optional[Union[str, Datum]] = None):
        super().__init__(x, y, z)
        self._datum = None if datum is None else get_datum(datum)

    @property
    def datum(self) -> Optional[Datum]:
        """The datum the coordinates are defined on, if any"""
        return self._datum

    @datum.setter
    def datum(self, datum: Union[str, Datum]):
        self._datum = get_datum(datum)

    def __repr__(self):
        name = self.datum.name if self.datum else None
        return f'<{self.__class__.__name__}({self.x}, {self.y}, {self.z}, {name})>'

    def to_lat_lon(self, datum: Optional[Union[str, Datum]] = None) -> LatLonDatum:
        """
        Converts this cartesian point to latitude/longitude/height on the point's
        datum, or on the given datum, or on WGS84 if neither is set.

        Note the coordinates are not transformed: a datum given here merely names
        the datum the x/y/z are on.

        Returns:
            LatLonDatum

        Raises:
            UnrecognisedDatum: datum is not in the datum table
        """
        if datum is not None:
            datum = get_datum(datum)
        else:
            datum = self.datum or DATUMS['WGS84']

        lat, lon, height = cartesian_to_geodetic(self.x, self.y, self.z, datum.ellipsoid)
        return LatLonDatum(math.degrees(lat), math.degrees(lon), height, datum)

    def convert_datum(self, to_datum: Union[str, Datum]) -> 'CartesianDatum':
        """
        Converts this cartesian point to a different datum, using a Helmert
        transform via WGS84.

        Args:
            to_datum:
                Datum name, or Datum record, the point is to be converted to

        Returns:
            CartesianDatum on the new datum

        Raises:
            InvalidArgument: this point has no datum
            UnrecognisedDatum: to_datum is not in the datum table
        """
        to_datum = get_datum(to_datum)
        if self.datum is None:
            raise InvalidArgument('cartesian coordinate has no datum')

        if self.datum.name == 'WGS84':
            return self._apply(to_datum.transform, to_datum)

        if to_datum.name == 'WGS84':
            return self._apply(self.datum.transform.negate(), to_datum)

        # neither end is WGS84: go via WGS84
        return self.convert_datum('WGS84')._apply(to_datum.transform, to_datum)

    def _apply(self, params: HelmertParams, datum: Datum) -> 'CartesianDatum':
        x, y, z = apply_transform(tuple(self), datum_transform(params))
        return CartesianDatum(x, y, z, datum)
