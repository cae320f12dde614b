"""
Base class declarations for geoformulae points
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from typing_extensions import Self

from geoformulae import dms
from geoformulae._const import EPSILON
from geoformulae.exceptions import InvalidArgument, InvalidRange
from geoformulae.parsers import parse_point
from geoformulae.utils.functions import to_fixed, to_float

_FORMATS = ('d', 'dm', 'dms', 'n')


def check_format(fmt: str) -> str:
    """Validates a point string format; one of 'd', 'dm', 'dms' or 'n'"""
    if fmt not in _FORMATS:
        raise InvalidRange(f'invalid format ‘{fmt}’')
    return fmt


class LatLonBase(ABC):
    """
    A latitude/longitude point, with latitude wrapped to -90..+90 and longitude to
    -180..+180. Points are treated as values: operations return new points.
    """

    def __init__(self, lat: Any, lon: Any):
        self._lat = dms.wrap90(to_float(lat, 'lat'))
        self._lon = dms.wrap180(to_float(lon, 'lon'))

    @property
    def lat(self) -> float:
        """Latitude in degrees north from equator (including aliases latitude)"""
        return self._lat

    @lat.setter
    def lat(self, lat: Any):
        self._lat = dms.wrap90(to_float(lat, 'lat'))

    latitude = lat

    @property
    def lon(self) -> float:
        """Longitude in degrees east from international reference meridian"""
        return self._lon

    @lon.setter
    def lon(self, lon: Any):
        self._lon = dms.wrap180(to_float(lon, 'lon'))

    longitude = lon
    lng = lon

    def __eq__(self, other):
        if not isinstance(other, LatLonBase):
            return False

        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.lat}, {self.lon})>'

    def __str__(self):
        return self.to_string()

    def _key(self) -> tuple:
        """Attributes which identify the point, for equality and hashing"""
        return self.__class__, self.lat, self.lon

    @property
    def __geo_interface__(self) -> Dict:
        return self.to_geojson()

    @classmethod
    def _check_point(cls, point: Any, name: str = 'point') -> 'LatLonBase':
        """Ensures an argument is a point, parsing point literals into points of this class"""
        if isinstance(point, LatLonBase):
            return point

        if isinstance(point, (tuple, list)):
            return cls.parse(*point)

        if isinstance(point, (str, Mapping)):
            return cls.parse(point)

        raise InvalidArgument(f'invalid {name} ‘{point}’')

    @classmethod
    def parse(cls, *args: Any) -> Self:
        """
        Creates a point from any of the supported point literals:

            Class.parse(52.205, 0.119)
            Class.parse('52.205', '0.119')
            Class.parse('52°12′18.0″N', '000°07′08.4″E')
            Class.parse('52.205, 0.119')
            Class.parse({'lat': 52.205, 'lon': 0.119})
            Class.parse({'type': 'Point', 'coordinates': [0.119, 52.205]})

        Raises:
            InvalidArgument: the arguments do not describe a valid point
        """
        lat, lon, _ = parse_point(*args)
        return cls(lat, lon)

    def equals(self, point: 'LatLonBase') -> bool:
        """
        Checks if another point is equal to this point, to within machine precision.

        Raises:
            InvalidArgument: point is not a point
        """
        point = self._check_point(point)
        return (
            abs(self.lat - point.lat) <= EPSILON and
            abs(self.lon - point.lon) <= EPSILON
        )

    def to_geojson(self) -> Dict:
        """Converts this point to a GeoJSON Point object"""
        return {'type': 'Point', 'coordinates': [self.lon, self.lat]}

    def _format_lat_lon(self, fmt: str, dp: Optional[int], numeric_separator: str) -> str:
        check_format(fmt)
        if fmt == 'n':
            dp = 4 if dp is None else dp
            return f'{to_fixed(self.lat, dp)}{numeric_separator}{to_fixed(self.lon, dp)}'

        return f'{dms.to_lat(self.lat, fmt, dp)}, {dms.to_lon(self.lon, fmt, dp)}'

    @abstractmethod
    def to_string(self, fmt: str = 'd', dp: Optional[int] = None) -> str:
        """
        String representation of the point, formatted as degrees ('d'), degrees+minutes
        ('dm'), degrees+minutes+seconds ('dms'), or signed numeric degrees ('n').
        """
