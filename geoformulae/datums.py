"""
Geodetic datums: an ellipsoid plus the 7-parameter Helmert transform which takes
WGS84 cartesian coordinates onto the datum.

Sources: ED50 epsg.io/1311, ETRS89 epsg.io/1149, Irl1975 epsg.io/1954,
OSGB36 epsg.io/1314.
"""

__all__ = ['DATUMS', 'Datum', 'get_datum']

from types import MappingProxyType
from typing import Mapping, NamedTuple, Union

from geoformulae.ellipsoids import ELLIPSOIDS, Ellipsoid
from geoformulae.exceptions import UnrecognisedDatum
from geoformulae.helmert import HelmertParams


class Datum(NamedTuple):
    """
    A geodetic datum.

    Attributes:
        name: table key of the datum
        ellipsoid: the datum's ellipsoid
        transform: WGS84 -> datum; tx, ty, tz in metres, s in ppm, rx, ry, rz in arc-seconds
    """
    name: str
    ellipsoid: Ellipsoid
    transform: HelmertParams


def _datum(name: str, ellipsoid: str, *transform: float) -> Datum:
    return Datum(name, ELLIPSOIDS[ellipsoid], HelmertParams(*transform))


DATUMS: Mapping[str, Datum] = MappingProxyType({
    x.name: x for x in (
        _datum('ED50', 'Intl1924', 89.5, 93.8, 123.1, -1.2, 0.0, 0.0, 0.156),
        _datum('ETRS89', 'GRS80', 0, 0, 0, 0, 0, 0, 0),
        _datum('Irl1975', 'AiryModified', -482.530, 130.596, -564.557, -8.150, 1.042, 0.214, 0.631),
        _datum('NAD27', 'Clarke1866', 8, -160, -176, 0, 0, 0, 0),
        _datum('NAD83', 'GRS80', 0.9956, -1.9103, -0.5215, -0.00062, 0.025915, 0.009426, 0.011599),
        _datum('NTF', 'Clarke1880IGN', 168, 60, -320, 0, 0, 0, 0),
        _datum('OSGB36', 'Airy1830', -446.448, 125.157, -542.060, 20.4894, -0.1502, -0.2470, -0.8421),
        _datum('Potsdam', 'Bessel1841', -582, -105, -414, -8.3, 1.04, 0.35, -3.08),
        _datum('TokyoJapan', 'Bessel1841', 148, -507, -685, 0, 0, 0, 0),
        _datum('WGS72', 'WGS72', 0, 0, -4.5, -0.22, 0, 0, 0.554),
        _datum('WGS84', 'WGS84', 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
    )
})


def get_datum(datum: Union[str, Datum]) -> Datum:
    """
    Look up a datum by name. Datum records are checked against the table.

    Args:
        datum:
            A datum name (e.g. 'OSGB36') or Datum record

    Returns:
        Datum

    Raises:
        UnrecognisedDatum: the datum is not in the datum table
    """
    if isinstance(datum, Datum):
        if DATUMS.get(datum.name) != datum:
            raise UnrecognisedDatum(f'unrecognised datum ‘{datum.name}’')
        return datum

    if isinstance(datum, str) and datum in DATUMS:
        return DATUMS[datum]

    raise UnrecognisedDatum(f'unrecognised datum ‘{datum}’')
