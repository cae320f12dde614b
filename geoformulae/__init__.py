
from geoformulae._version import __version__  # noqa: F401
from geoformulae.utils.logging import LOGGER
from geoformulae import dms
from geoformulae.datums import DATUMS, Datum
from geoformulae.ellipsoids import ELLIPSOIDS, Ellipsoid
from geoformulae.ellipsoidal import Cartesian, LatLonEllipsoidal
from geoformulae.ellipsoidal_datum import CartesianDatum, LatLonDatum
from geoformulae.ellipsoidal_referenceframe import CartesianReferenceFrame, LatLonReferenceFrame
from geoformulae.exceptions import (
    GeodesyError, InvalidArgument, InvalidGridRef, InvalidRange, NotAvailable,
    NotConverged, UnrecognisedDatum, UnrecognisedFrame
)
from geoformulae.nvector_ellipsoidal import (
    CartesianNvector, LatLonNvectorEllipsoidal, Ned, NvectorEllipsoidal
)
from geoformulae.nvector_spherical import LatLonNvectorSpherical, NvectorSpherical
from geoformulae.osgridref import LatLonOsGridRef, OsGridRef
from geoformulae.reference_frames import REFERENCE_FRAMES, ReferenceFrame
from geoformulae.spherical import LatLonSpherical
from geoformulae.vector3d import Vector3d
from geoformulae.vincenty import LatLonVincenty

__all__ = [
    'Cartesian',
    'CartesianDatum',
    'CartesianNvector',
    'CartesianReferenceFrame',
    'DATUMS',
    'Datum',
    'ELLIPSOIDS',
    'Ellipsoid',
    'GeodesyError',
    'InvalidArgument',
    'InvalidGridRef',
    'InvalidRange',
    'LatLonDatum',
    'LatLonEllipsoidal',
    'LatLonNvectorEllipsoidal',
    'LatLonNvectorSpherical',
    'LatLonOsGridRef',
    'LatLonReferenceFrame',
    'LatLonSpherical',
    'LatLonVincenty',
    'Ned',
    'NotAvailable',
    'NotConverged',
    'NvectorEllipsoidal',
    'NvectorSpherical',
    'OsGridRef',
    'REFERENCE_FRAMES',
    'ReferenceFrame',
    'UnrecognisedDatum',
    'UnrecognisedFrame',
    'Vector3d',
    'dms',
    'LOGGER',
]
