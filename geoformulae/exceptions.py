"""
Errors raised by geoformulae. Every error derives from GeodesyError as well as
from the builtin exception a caller would reach for first (TypeError for bad
arguments, ValueError for bad values).
"""

__all__ = [
    'GeodesyError', 'InvalidArgument', 'InvalidGridRef', 'InvalidRange',
    'NotAvailable', 'NotConverged', 'UnrecognisedDatum', 'UnrecognisedFrame',
]


class GeodesyError(Exception):
    """Base class for all geoformulae errors"""


class InvalidArgument(GeodesyError, TypeError):
    """A non-numeric value, wrong operand type, or unparseable point literal"""


class InvalidRange(GeodesyError, ValueError):
    """An argument outside of the set of values an operation accepts"""


class UnrecognisedDatum(GeodesyError, ValueError):
    """A datum that does not match any entry in the datum table"""


class UnrecognisedFrame(GeodesyError, ValueError):
    """A reference frame that does not match any entry in the frame table"""


class NotAvailable(GeodesyError, ValueError):
    """No direct or single-hop transform exists between two reference frames"""


class NotConverged(GeodesyError, ArithmeticError):
    """An iterative solution failed to converge"""


class InvalidGridRef(GeodesyError, ValueError):
    """A grid reference that does not parse, or lies outside the grid"""
