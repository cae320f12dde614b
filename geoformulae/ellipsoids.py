"""
Ellipsoid parameters; the ellipsoids underlying the datums and reference frames
supported by geoformulae.
"""

__all__ = ['ELLIPSOIDS', 'Ellipsoid', 'get_ellipsoid']

from types import MappingProxyType
from typing import Mapping, NamedTuple, Union

from geoformulae.exceptions import InvalidArgument


class Ellipsoid(NamedTuple):
    """
    An oblate ellipsoid of revolution.

    Attributes:
        name: table key of the ellipsoid
        a: semi-major axis (metres)
        b: semi-minor axis (metres)
        f: flattening
    """
    name: str
    a: float
    b: float
    f: float

    @property
    def e2(self) -> float:
        """First eccentricity squared"""
        return 2 * self.f - self.f * self.f


ELLIPSOIDS: Mapping[str, Ellipsoid] = MappingProxyType({
    x.name: x for x in (
        Ellipsoid('WGS84', 6378137, 6356752.314245, 1 / 298.257223563),
        Ellipsoid('Airy1830', 6377563.396, 6356256.909, 1 / 299.3249646),
        Ellipsoid('AiryModified', 6377340.189, 6356034.448, 1 / 299.3249646),
        Ellipsoid('Bessel1841', 6377397.155, 6356078.962822, 1 / 299.15281285),
        Ellipsoid('Clarke1866', 6378206.4, 6356583.8, 1 / 294.978698214),
        Ellipsoid('Clarke1880IGN', 6378249.2, 6356515.0, 1 / 293.466021294),
        Ellipsoid('GRS80', 6378137, 6356752.314140, 1 / 298.257222101),
        Ellipsoid('Intl1924', 6378388, 6356911.946128, 1 / 297),
        Ellipsoid('WGS72', 6378135, 6356750.52, 1 / 298.26),
    )
})


def get_ellipsoid(ellipsoid: Union[str, Ellipsoid]) -> Ellipsoid:
    """
    Look up an ellipsoid by name; Ellipsoid records are returned as-is.

    Raises:
        InvalidArgument: the name is not a known ellipsoid
    """
    if isinstance(ellipsoid, Ellipsoid):
        return ellipsoid

    try:
        return ELLIPSOIDS[ellipsoid]
    except (KeyError, TypeError) as exc:
        raise InvalidArgument(f'unrecognised ellipsoid ‘{ellipsoid}’') from exc
