"""
Terrestrial reference frames (ITRF realisations, WGS84 realisations, ETRF2000,
NAD83, GDA94) and the 14-parameter Helmert transforms between them.

The transform table is sparse and directed. The route between every pair of frames
is resolved once, at import time, so that a conversion only has to look it up:

    * frames with the same name need no transform;
    * ITRF <-> WGS84 realisations agree at the centimetre level and are treated as
      the identity;
    * a tabulated transform is used directly, or reversed if only the opposite
      direction is tabulated;
    * otherwise the conversion is chained through one intermediate frame.

Sources: ITRF2014 - itrf.ign.fr/doc_ITRF/Transfo-ITRF2014_ITRFs.txt,
ITRF2008 - itrf.ensg.ign.fr/doc_ITRF/Transfo-ITRF2008_ITRFs.txt,
NAD83 - Soler & Snay 2004, ETRF2000 - EUREF TN 1 (Boucher & Altamimi),
GDA94 - Dawson & Woods 2010, with rotations negated from its coordinate frame
rotation convention.
"""

__all__ = [
    'HelmertTransform', 'REFERENCE_FRAMES', 'ReferenceFrame', 'TRANSFORMS',
    'get_frame', 'is_identity', 'transform_path',
]

from itertools import product
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Optional, Tuple, Union

from geoformulae.ellipsoids import ELLIPSOIDS, Ellipsoid
from geoformulae.exceptions import NotAvailable, UnrecognisedFrame
from geoformulae.helmert import HelmertParams
from geoformulae.utils.logging import LOGGER


class ReferenceFrame(NamedTuple):
    """
    A terrestrial reference frame.

    Attributes:
        name: table key of the frame
        epoch: reference epoch (decimal year)
        ellipsoid: the ellipsoid geodetic coordinates in this frame are based on
    """
    name: str
    epoch: float
    ellipsoid: Ellipsoid


class HelmertTransform(NamedTuple):
    """
    A directed 14-parameter Helmert transform between two reference frames.

    Attributes:
        from_frame: name of the source frame
        to_frame: name of the target frame
        epoch: reference epoch of the parameters (decimal year)
        params: tx, ty, tz (mm), s (ppb), rx, ry, rz (mas)
        rates: annual rates of change of params
    """
    from_frame: str
    to_frame: str
    epoch: float
    params: HelmertParams
    rates: HelmertParams

    def reverse(self) -> 'HelmertTransform':
        """The transform in the opposite direction"""
        return HelmertTransform(
            self.to_frame, self.from_frame, self.epoch,
            self.params.negate(), self.rates.negate()
        )


REFERENCE_FRAMES: Mapping[str, ReferenceFrame] = MappingProxyType({
    x.name: x for x in (
        ReferenceFrame('ITRF2014', 2010.0, ELLIPSOIDS['GRS80']),
        ReferenceFrame('ITRF2008', 2005.0, ELLIPSOIDS['GRS80']),
        ReferenceFrame('ITRF2005', 2000.0, ELLIPSOIDS['GRS80']),
        ReferenceFrame('ITRF2000', 1997.0, ELLIPSOIDS['GRS80']),
        ReferenceFrame('ITRF93', 1988.0, ELLIPSOIDS['GRS80']),
        ReferenceFrame('ITRF91', 1988.0, ELLIPSOIDS['GRS80']),
        ReferenceFrame('WGS84g1762', 2005.0, ELLIPSOIDS['WGS84']),
        ReferenceFrame('WGS84g1674', 2005.0, ELLIPSOIDS['WGS84']),
        ReferenceFrame('WGS84g1150', 2001.0, ELLIPSOIDS['WGS84']),
        ReferenceFrame('ETRF2000', 2005.0, ELLIPSOIDS['GRS80']),  # ETRF2000(R08)
        ReferenceFrame('NAD83', 1997.0, ELLIPSOIDS['GRS80']),  # CORS96
        ReferenceFrame('GDA94', 1994.0, ELLIPSOIDS['GRS80']),
    )
})


def _tx(key: str, epoch: float, params, rates) -> HelmertTransform:
    from_frame, to_frame = key.split('→')
    return HelmertTransform(
        from_frame, to_frame, epoch, HelmertParams(*params), HelmertParams(*rates)
    )


# params / rates:   tx, ty, tz (mm), s (ppb), rx, ry, rz (mas)
TRANSFORMS: Mapping[str, HelmertTransform] = MappingProxyType({
    f'{x.from_frame}→{x.to_frame}': x for x in (
        _tx('ITRF2014→ITRF2008', 2010.0,
            [1.6, 1.9, 2.4, -0.02, 0, 0, 0],
            [0.0, 0.0, -0.1, 0.03, 0, 0, 0]),
        _tx('ITRF2014→ITRF2005', 2010.0,
            [2.6, 1.0, -2.3, 0.92, 0, 0, 0],
            [0.3, 0.0, -0.1, 0.03, 0, 0, 0]),
        _tx('ITRF2014→ITRF2000', 2010.0,
            [0.7, 1.2, -26.1, 2.12, 0, 0, 0],
            [0.1, 0.1, -1.9, 0.11, 0, 0, 0]),
        _tx('ITRF2014→ITRF93', 2010.0,
            [-50.4, 3.3, -60.2, 4.29, -2.81, -3.38, 0.40],
            [-2.8, -0.1, -2.5, 0.12, -0.11, -0.19, 0.07]),
        _tx('ITRF2014→ITRF91', 2010.0,
            [27.4, 15.5, -76.8, 4.49, 0, 0, 0.26],
            [0.1, -0.5, -3.3, 0.12, 0, 0, 0.02]),
        _tx('ITRF2014→ETRF2000', 2000.0,
            [53.7, 51.2, -55.1, 1.02, 0.891, 5.390, -8.712],
            [0.1, 0.1, -1.9, 0.11, 0.081, 0.490, -0.792]),
        _tx('ITRF2008→ITRF2005', 2000.0,
            [-2.0, -0.9, -4.7, 0.94, 0, 0, 0],
            [0.3, 0.0, 0.0, 0.00, 0, 0, 0]),
        _tx('ITRF2008→ITRF2000', 2000.0,
            [-1.9, -1.7, -10.5, 1.34, 0, 0, 0],
            [0.1, 0.1, -1.8, 0.08, 0, 0, 0]),
        _tx('ITRF2008→ETRF2000', 2000.0,
            [52.1, 49.3, -58.5, 1.34, 0.891, 5.390, -8.712],
            [0.1, 0.1, -1.8, 0.08, 0.081, 0.490, -0.792]),
        _tx('ITRF2008→GDA94', 1994.0,
            [-84.68, -19.42, 32.01, 9.710, 0.4254, -2.2578, -2.4015],
            [1.42, 1.34, 0.90, 0.109, -1.5461, -1.1820, -1.1551]),
        _tx('ITRF2005→ITRF2000', 2000.0,
            [0.1, -0.8, -5.8, 0.40, 0, 0, 0],
            [-0.2, 0.1, -1.8, 0.08, 0, 0, 0]),
        _tx('ITRF2005→ETRF2000', 2000.0,
            [54.1, 50.2, -53.8, 0.40, 0.891, 5.390, -8.712],
            [-0.2, 0.1, -1.8, 0.08, 0.081, 0.490, -0.792]),
        _tx('ITRF2005→GDA94', 1994.0,
            [-79.73, -6.86, 38.03, 6.636, 0.0351, -2.1211, -2.1411],
            [2.25, -0.62, -0.56, 0.294, -1.4707, -1.1443, -1.1701]),
        _tx('ITRF2000→ETRF2000', 2000.0,
            [54.0, 51.0, -48.0, 0, 0.891, 5.390, -8.712],
            [0.0, 0.0, 0.0, 0, 0.081, 0.490, -0.792]),
        _tx('ITRF2000→NAD83', 1997.0,
            [995.6, -1901.3, -521.5, 0.62, 25.915, 9.426, 11.599],
            [0.7, -0.7, 0.5, -0.18, 0.067, -0.757, -0.051]),
        _tx('ITRF2000→GDA94', 1994.0,
            [-45.91, -29.85, -20.37, 7.070, 1.6705, -0.4594, -1.9356],
            [-4.66, 3.55, 11.24, 0.249, -1.7454, -1.4868, -1.2240]),
    )
})


def get_frame(frame: Union[str, ReferenceFrame]) -> ReferenceFrame:
    """
    Look up a reference frame by name. ReferenceFrame records are checked against
    the table.

    Args:
        frame:
            A frame name (e.g. 'ITRF2014') or ReferenceFrame record

    Returns:
        ReferenceFrame

    Raises:
        UnrecognisedFrame: the frame is not in the reference frame table
    """
    if isinstance(frame, ReferenceFrame):
        if REFERENCE_FRAMES.get(frame.name) != frame:
            raise UnrecognisedFrame(f'unrecognised reference frame ‘{frame.name}’')
        return frame

    if isinstance(frame, str) and frame in REFERENCE_FRAMES:
        return REFERENCE_FRAMES[frame]

    raise UnrecognisedFrame(f'unrecognised reference frame ‘{frame}’')


def is_identity(from_frame: str, to_frame: str) -> bool:
    """Whether a conversion between two frames leaves coordinates unchanged"""
    if from_frame == to_frame:
        return True

    return (
        (from_frame.startswith('ITRF') and to_frame.startswith('WGS84')) or
        (from_frame.startswith('WGS84') and to_frame.startswith('ITRF'))
    )


def _single_step(from_frame: str, to_frame: str) -> Optional[HelmertTransform]:
    """The tabulated transform between two frames, reversed if need be"""
    forward = TRANSFORMS.get(f'{from_frame}→{to_frame}')
    if forward is not None:
        return forward

    reverse = TRANSFORMS.get(f'{to_frame}→{from_frame}')
    if reverse is not None:
        return reverse.reverse()

    return None


def _resolve(from_frame: str, to_frame: str) -> Optional[Tuple[HelmertTransform, ...]]:
    """
    Finds the sequence of transforms converting one frame to another.

    Returns:
        A tuple of transforms (empty for the identity), or None if no route exists
    """
    if is_identity(from_frame, to_frame):
        return ()

    step = _single_step(from_frame, to_frame)
    if step is not None:
        return (step,)

    for intermediate in REFERENCE_FRAMES:
        if intermediate in (from_frame, to_frame):
            continue

        step1 = _single_step(from_frame, intermediate)
        step2 = _single_step(intermediate, to_frame)
        if step1 is not None and step2 is not None:
            return step1, step2

    return None


_PATHS: Dict[Tuple[str, str], Optional[Tuple[HelmertTransform, ...]]] = {
    (a, b): _resolve(a, b) for a, b in product(REFERENCE_FRAMES, repeat=2)
}
LOGGER.debug(
    'resolved %d reference frame routes (%d unavailable)',
    len(_PATHS), sum(1 for x in _PATHS.values() if x is None)
)


def transform_path(
    from_frame: Union[str, ReferenceFrame],
    to_frame: Union[str, ReferenceFrame]
) -> Tuple[HelmertTransform, ...]:
    """
    The transforms to apply, in order, to convert coordinates between two frames.

    Args:
        from_frame:
            The frame coordinates are defined in

        to_frame:
            The frame coordinates are to be converted to

    Returns:
        A tuple of one or two transforms; empty if the conversion is the identity

    Raises:
        UnrecognisedFrame: either frame is not in the reference frame table
        NotAvailable: no direct or single-hop transform exists
    """
    from_name, to_name = get_frame(from_frame).name, get_frame(to_frame).name
    path = _PATHS[(from_name, to_name)]
    if path is None:
        raise NotAvailable(f'no transform available from {from_name} to {to_name}')

    return path
