"""
Ellipsoidal points within a terrestrial reference frame (TRF), and conversions
between reference frames using 14-parameter (time-dependent) Helmert transforms.

Coordinates in a dynamic reference frame also carry an observation epoch: the
decimal year at which the coordinates were observed. The epoch defaults to the
reference epoch of the frame, and is carried unchanged through conversions.
"""

from __future__ import annotations

__all__ = ['CartesianReferenceFrame', 'LatLonReferenceFrame']

import math
from typing import Any, Optional, Union

from typing_extensions import Self

from geoformulae.ellipsoidal import (
    Cartesian, LatLonEllipsoidal, cartesian_to_geodetic, geodetic_to_cartesian
)
from geoformulae.ellipsoids import Ellipsoid
from geoformulae.exceptions import InvalidArgument
from geoformulae.helmert import apply_transform, frame_transform
from geoformulae.parsers import parse_point
from geoformulae.reference_frames import (
    ReferenceFrame, get_frame, is_identity, transform_path
)
from geoformulae.utils.functions import is_numeric
from geoformulae.utils.logging import LOGGER, warn_once

FrameLike = Union[str, ReferenceFrame]


def _check_epoch(epoch: Any) -> Optional[float]:
    if epoch is None:
        return None

    if not is_numeric(epoch):
        raise InvalidArgument(f'invalid epoch ‘{epoch}’')

    return float(epoch)


def _frame_label(frame: ReferenceFrame, epoch: float) -> str:
    """'NAME', or 'NAME@epoch' where the epoch differs from the frame's own"""
    if epoch == frame.epoch:
        return frame.name
    return f'{frame.name}@{float(epoch)}'


class LatLonReferenceFrame(LatLonEllipsoidal):
    """
    Latitude/longitude points on an ellipsoidal model earth, with height, a
    reference frame (ITRF2014 unless otherwise given) and an observation epoch.

    Args:
        lat:
            Geodetic latitude in degrees

        lon:
            Longitude in degrees

        height: (Default 0)
            Height above the ellipsoid in metres

        reference_frame: (Default 'ITRF2014')
            Frame name, or ReferenceFrame record from
            geoformulae.reference_frames.REFERENCE_FRAMES

        epoch: (Default None)
            Observation epoch as a decimal year, e.g. 2018.25; defaults to the
            reference epoch of the frame
    """

    def __init__(
        self,
        lat: Any,
        lon: Any,
        height: Any = 0,
        reference_frame: FrameLike = 'ITRF2014',
        epoch: Optional[float] = None,
    ):
        frame = get_frame(reference_frame)
        epoch = _check_epoch(epoch)
        super().__init__(lat, lon, height)
        self._reference_frame = frame
        self._epoch = epoch

    @property
    def reference_frame(self) -> ReferenceFrame:
        """The point's reference frame"""
        return self._reference_frame

    @property
    def epoch(self) -> float:
        """Observation epoch; the frame's reference epoch if none was given"""
        return self._epoch if self._epoch is not None else self._reference_frame.epoch

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The ellipsoid of the point's reference frame"""
        return self._reference_frame.ellipsoid

    def __repr__(self):
        return (
            f'<{self.__class__.__name__}({self.lat}, {self.lon}, {self.height}, '
            f'{self.reference_frame.name}, {self.epoch})>'
        )

    def _key(self) -> tuple:
        return super()._key() + (self.reference_frame.name, self.epoch)

    @classmethod
    def parse(
        cls,
        *args: Any,
        reference_frame: FrameLike = 'ITRF2014',
        epoch: Optional[float] = None,
    ) -> Self:
        """
        Creates a point from any of the supported point literals, with optional
        height, reference frame and observation epoch:

            LatLonReferenceFrame.parse('51.47788, -0.00147', 17, reference_frame='ETRF2000')

        Raises:
            InvalidArgument: the arguments do not describe a valid point, or the
                epoch is not numeric
            UnrecognisedFrame: reference_frame is not in the frame table
        """
        lat, lon, height = parse_point(*args)
        return cls(lat, lon, height or 0, reference_frame, epoch)

    def convert_reference_frame(
        self,
        to_frame: FrameLike,
        epoch: Optional[float] = None
    ) -> 'LatLonReferenceFrame':
        """
        Converts this point to a different reference frame.

        Args:
            to_frame:
                Frame name, or ReferenceFrame record, to convert to

            epoch: (Default None)
                Observation epoch to use for the conversion, if not the point's own

        Returns:
            LatLonReferenceFrame

        Raises:
            UnrecognisedFrame: to_frame is not in the frame table
            NotAvailable: there is no direct or single-hop route between the frames
        """
        cartesian = self.to_cartesian()
        return cartesian.convert_reference_frame(to_frame, epoch).to_lat_lon()

    def to_cartesian(self) -> 'CartesianReferenceFrame':
        """
        Converts this point to geocentric cartesian (x/y/z) coordinates in the same
        reference frame and epoch.
        """
        x, y, z = geodetic_to_cartesian(
            math.radians(self.lat), math.radians(self.lon), self.height, self.ellipsoid
        )
        return CartesianReferenceFrame(x, y, z, self.reference_frame, self._epoch)

    def to_string(
        self,
        fmt: str = 'd',
        dp: Optional[int] = None,
        dp_height: Optional[int] = None,
        reference_frame: bool = False,
    ) -> str:
        """
        Returns a string representation of this point, optionally with the
        reference frame and (if it differs from the frame's) the epoch appended,
        e.g. '51.4779°N, 000.0015°W (ITRF2000@2012.0)'.

        Args:
            fmt: (str) (Default 'd')
                One of 'd', 'dm', 'dms', 'n'

            dp: (int) (Default None)
                Number of decimal places to use

            dp_height: (int) (Default None)
                Number of decimal places to use for height; None omits the height

            reference_frame: (bool) (Default False)
                Whether to append the reference frame

        Returns:
            str
        """
        text = super().to_string(fmt, dp, dp_height)
        if not reference_frame:
            return text
        return f'{text} ({_frame_label(self.reference_frame, self.epoch)})'


class CartesianReferenceFrame(Cartesian):
    """
    Earth-centred earth-fixed (ECEF) cartesian coordinates within a reference
    frame, with an observation epoch.

    Args:
        x, y, z:
            Coordinates in metres from earth centre

        reference_frame: (Default None)
            Frame name, or ReferenceFrame record, the coordinates are in

        epoch: (Default None)
            Observation epoch as a decimal year; defaults to the reference epoch
            of the frame
    """

    def __init__(
        self,
        x: Any,
        y: Any,
        z: Any,
        reference_frame: Optional[FrameLike] = None,
        epoch: Optional[float] = None,
    ):
        frame = None if reference_frame is None else get_frame(reference_frame)
        epoch = _check_epoch(epoch)
        super().__init__(x, y, z)
        self._reference_frame = frame
        self._epoch = epoch

    @property
    def reference_frame(self) -> Optional[ReferenceFrame]:
        """The frame the coordinates are in, if any"""
        return self._reference_frame

    @reference_frame.setter
    def reference_frame(self, reference_frame: FrameLike):
        self._reference_frame = get_frame(reference_frame)

    @property
    def epoch(self) -> Optional[float]:
        """Observation epoch; the frame's reference epoch if none was given"""
        if self._epoch is not None:
            return self._epoch
        return self._reference_frame.epoch if self._reference_frame else None

    @epoch.setter
    def epoch(self, epoch: float):
        self._epoch = _check_epoch(epoch)

    def __repr__(self):
        name = self.reference_frame.name if self.reference_frame else None
        return f'<{self.__class__.__name__}({self.x}, {self.y}, {self.z}, {name}, {self.epoch})>'

    def to_lat_lon(self) -> LatLonReferenceFrame:
        """
        Converts this cartesian point to latitude/longitude/height on the ellipsoid
        of its reference frame.

        Raises:
            InvalidArgument: the point has no reference frame
        """
        if self.reference_frame is None:
            raise InvalidArgument('cartesian reference frame not defined')

        lat, lon, height = cartesian_to_geodetic(
            self.x, self.y, self.z, self.reference_frame.ellipsoid
        )
        return LatLonReferenceFrame(
            math.degrees(lat), math.degrees(lon), height, self.reference_frame, self._epoch
        )

    def convert_reference_frame(
        self,
        to_frame: FrameLike,
        epoch: Optional[float] = None
    ) -> 'CartesianReferenceFrame':
        """
        Converts this cartesian point to a different reference frame, using
        tabulated Helmert transforms (reversed or chained through one intermediate
        frame where necessary). The observation epoch is unchanged.

        Args:
            to_frame:
                Frame name, or ReferenceFrame record, to convert to

            epoch: (Default None)
                Observation epoch to use for the conversion, if not the point's own

        Returns:
            CartesianReferenceFrame

        Raises:
            InvalidArgument: this point has no reference frame
            UnrecognisedFrame: to_frame is not in the frame table
            NotAvailable: there is no direct or single-hop route between the frames
        """
        to_frame = get_frame(to_frame)
        if self.reference_frame is None:
            raise InvalidArgument('cartesian coordinate has no reference frame')

        epoch = self.epoch if epoch is None else _check_epoch(epoch)
        from_frame = self.reference_frame

        if from_frame.name != to_frame.name and is_identity(from_frame.name, to_frame.name):
            warn_once(
                'treating %s -> %s as the identity transform; '
                'ITRF and WGS84 realisations agree at the centimetre level',
                from_frame.name, to_frame.name
            )

        xyz = tuple(self)
        for step in transform_path(from_frame, to_frame):
            LOGGER.debug(
                'applying %s -> %s at epoch %s (transform epoch %s)',
                step.from_frame, step.to_frame, epoch, step.epoch
            )
            xyz = apply_transform(xyz, frame_transform(step.params, step.rates, epoch - step.epoch))

        x, y, z = xyz
        return CartesianReferenceFrame(x, y, z, to_frame, epoch)

    def to_string(self, dp: int = 0) -> str:
        """
        String representation of this point, with its reference frame (and epoch,
        if it differs from the frame's), e.g. '[3980574,-102,4966830](ITRF2000)'.
        """
        text = super().to_string(dp)
        if self.reference_frame is None:
            return text
        return f'{text}({_frame_label(self.reference_frame, self.epoch)})'
