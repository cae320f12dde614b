"""Module for parsing the various literal forms of a point into latitude/longitude/height"""

__all__ = [
    'GeoJsonPoint', 'LatLonPair', 'LatLonString', 'PointLiteral', 'PointMapping',
    'classify_point', 'parse_point', 'resolve_point',
]

import json
import math
from typing import Any, Mapping, NamedTuple, Optional, Tuple, Union

from geoformulae.dms import parse as parse_dms, wrap90, wrap180
from geoformulae.exceptions import InvalidArgument


class LatLonPair(NamedTuple):
    """Separate latitude and longitude, as numbers or deg/min/sec strings"""
    lat: Any
    lon: Any
    height: Any = None


class LatLonString(NamedTuple):
    """A single comma-separated 'lat, lon' string"""
    text: str
    height: Any = None


class PointMapping(NamedTuple):
    """
    A mapping with any of the keys lat/latitude, lon/lng/longitude, and
    optionally height
    """
    mapping: Mapping
    height: Any = None


class GeoJsonPoint(NamedTuple):
    """A GeoJSON Point, with coordinates [lon, lat] or [lon, lat, height]"""
    geojson: Mapping
    height: Any = None


PointLiteral = Union[LatLonPair, LatLonString, PointMapping, GeoJsonPoint]


def _describe(args) -> str:
    return ','.join(
        json.dumps(x, default=str) if isinstance(x, Mapping) else str(x)
        for x in args
    )


def classify_point(*args: Any) -> PointLiteral:
    """
    Identifies which literal form a set of arguments takes.

    Accepted forms are:
        lat, lon[, height]
        'lat, lon'[, height]
        {'lat': lat, 'lon': lon[, 'height': height]}[, height]
        {'type': 'Point', 'coordinates': [lon, lat[, height]]}[, height]

    Returns:
        PointLiteral

    Raises:
        InvalidArgument: no arguments, or arguments of none of the above forms
    """
    if not args:
        raise InvalidArgument('invalid (empty) point')

    if args[0] is None:
        raise InvalidArgument('invalid (null) point')

    first, rest = args[0], args[1:]

    if isinstance(first, Mapping):
        if len(rest) > 1:
            raise InvalidArgument(f'invalid point ‘{_describe(args)}’')
        if first.get('type') == 'Point' and isinstance(first.get('coordinates'), (list, tuple)):
            return GeoJsonPoint(first, *rest)
        return PointMapping(first, *rest)

    if isinstance(first, str) and (not rest or len(rest) == 1 and ',' in first):
        return LatLonString(first, *rest)

    if 2 <= len(args) <= 3:
        return LatLonPair(*args)

    raise InvalidArgument(f'invalid point ‘{_describe(args)}’')


def resolve_point(literal: PointLiteral) -> Tuple[float, float, Optional[float]]:
    """
    Converts a point literal into numeric latitude/longitude/height. Latitude is
    wrapped to -90..+90, longitude to -180..+180.

    Returns:
        (latitude, longitude, height); height is None if the literal has none

    Raises:
        InvalidArgument: the latitude, longitude or height do not parse
    """
    lat: Any = None
    lon: Any = None
    height = literal.height

    if isinstance(literal, LatLonPair):
        lat, lon = literal.lat, literal.lon
        source = _describe([x for x in literal if x is not None])

    elif isinstance(literal, LatLonString):
        parts = literal.text.split(',')
        if len(parts) == 2:
            lat, lon = parts
        source = literal.text

    elif isinstance(literal, GeoJsonPoint):
        coords = list(literal.geojson['coordinates'])
        if len(coords) >= 2:
            lon, lat = coords[:2]
        if len(coords) > 2 and height is None:
            height = coords[2]
        source = _describe([literal.geojson])

    else:
        mapping = literal.mapping
        for key in ('latitude', 'lat'):
            if mapping.get(key) is not None:
                lat = mapping[key]
        for key in ('longitude', 'lng', 'lon'):
            if mapping.get(key) is not None:
                lon = mapping[key]
        if height is None:
            height = mapping.get('height')
        source = _describe([mapping])

    lat, lon = wrap90(parse_dms(lat)), wrap180(parse_dms(lon))
    if math.isnan(lat) or math.isnan(lon):
        raise InvalidArgument(f'invalid point ‘{source}’')

    if height is not None:
        parsed_height = parse_dms(height)
        if math.isnan(parsed_height):
            raise InvalidArgument(f'invalid height ‘{height}’')
        height = parsed_height

    return lat, lon, height


def parse_point(*args: Any) -> Tuple[float, float, Optional[float]]:
    """
    Parses a point given in any of the forms accepted by `classify_point`.

    Returns:
        (latitude, longitude, height); height is None if none was given
    """
    return resolve_point(classify_point(*args))
