"""
Helmert transformations: the shift/scale/rotate kernel shared by datum
(7-parameter) and reference frame (14-parameter) conversions.

The kernel uses the small-angle approximation of the rotation matrix,

    | x′ |   | tx |   |  S  -rz  ry |   | x |
    | y′ | = | ty | + |  rz  S  -rx | · | y |
    | z′ |   | tz |   | -ry  rx  S  |   | z |

and differs between datums and reference frames only in the units of the
stored parameters.
"""

__all__ = [
    'HelmertParams', 'apply_transform', 'datum_transform', 'frame_transform',
]

import math
from typing import NamedTuple, Tuple

import numpy as np

_MAS_TO_RADIANS = math.pi / 180 / 3600 / 1000
_ARCSEC_TO_RADIANS = math.pi / 180 / 3600


class HelmertParams(NamedTuple):
    """
    Helmert transform parameters, in the units of the table they come from:
    metres / ppm / arc-seconds for datums, millimetres / ppb / milli-arc-seconds
    for reference frames.
    """
    tx: float
    ty: float
    tz: float
    s: float
    rx: float
    ry: float
    rz: float

    def negate(self) -> 'HelmertParams':
        """The parameters of the inverse transform"""
        return HelmertParams(*(-x for x in self))


# Normalised transform: translation (metres), scale factor, rotation (radians)
NormalisedTransform = Tuple[np.ndarray, float, np.ndarray]


def datum_transform(params: HelmertParams) -> NormalisedTransform:
    """
    Normalises 7-parameter datum transform parameters (metres, ppm, arc-seconds).

    Args:
        params:
            The datum transform parameters

    Returns:
        translation (metres), scale factor (1 + s), rotations (radians)
    """
    translation = np.array([params.tx, params.ty, params.tz])
    scale = 1 + params.s / 1e6
    rotation = np.array([params.rx, params.ry, params.rz]) * _ARCSEC_TO_RADIANS
    return translation, scale, rotation


def frame_transform(params: HelmertParams, rates: HelmertParams, dt: float) -> NormalisedTransform:
    """
    Normalises 14-parameter reference frame transform parameters (millimetres, ppb,
    milli-arc-seconds, and their annual rates) for an observation `dt` years after
    the epoch of the transform.

    Args:
        params:
            The transform parameters at the epoch of the transform

        rates:
            Annual rates of change of the parameters

        dt:
            Observation epoch less the transform's epoch, in years

    Returns:
        translation (metres), scale factor (1 + s), rotations (radians)
    """
    t = np.array(params[:3]) / 1000
    t_rate = np.array(rates[:3]) / 1000
    r = np.array(params[4:]) * _MAS_TO_RADIANS
    r_rate = np.array(rates[4:]) * _MAS_TO_RADIANS

    translation = t + t_rate * dt
    rotation = r + r_rate * dt
    scale = 1 + params.s / 1e9 + rates.s / 1e9 * dt
    return translation, scale, rotation


def apply_transform(
    xyz: Tuple[float, float, float],
    transform: NormalisedTransform
) -> Tuple[float, float, float]:
    """
    Applies a normalised Helmert transform to an earth-centred cartesian point.

    Args:
        xyz:
            The x, y, z coordinates of the point (metres)

        transform:
            translation, scale and rotation, as returned by `datum_transform` or
            `frame_transform`

    Returns:
        The transformed x, y, z (metres)
    """
    translation, scale, (rx, ry, rz) = transform
    matrix = np.array([
        [scale, -rz, ry],
        [rz, scale, -rx],
        [-ry, rx, scale],
    ])
    x2, y2, z2 = translation + matrix @ np.array(xyz, dtype=float)
    return float(x2), float(y2), float(z2)
