"""
3-d vector manipulation routines, shared by the n-vector models and the
earth-centred earth-fixed (cartesian) coordinate models.
"""

__all__ = ['Vector3d']

import math
from typing import Iterator, Optional

import numpy as np

from geoformulae.exceptions import InvalidArgument
from geoformulae.utils.functions import to_fixed, to_float


class Vector3d:
    """
    A 3-d vector; with x, y, z components in arbitrary units (typically metres for
    earth-centred cartesian points, or unitless for n-vectors).
    """

    def __init__(self, x: float, y: float, z: float):
        self.x = to_float(x, 'x')
        self.y = to_float(y, 'y')
        self.z = to_float(z, 'z')

    def __eq__(self, other):
        if not isinstance(other, Vector3d):
            return False

        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.x}, {self.y}, {self.z})>'

    def __str__(self):
        return self.to_string()

    def __add__(self, other: 'Vector3d') -> 'Vector3d':
        return self.plus(other)

    def __sub__(self, other: 'Vector3d') -> 'Vector3d':
        return self.minus(other)

    def __mul__(self, scalar: float) -> 'Vector3d':
        return self.times(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> 'Vector3d':
        return self.divided_by(scalar)

    def __neg__(self) -> 'Vector3d':
        return self.negate()

    @staticmethod
    def _check_vector(v, name: str = 'operand') -> 'Vector3d':
        if not isinstance(v, Vector3d):
            raise InvalidArgument(f'invalid {name} ‘{v}’; expected a Vector3d')
        return v

    @property
    def length(self) -> float:
        """Length (magnitude or norm) of this vector"""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def to_array(self) -> np.ndarray:
        """The vector as a numpy array [x, y, z]"""
        return np.array([self.x, self.y, self.z])

    def plus(self, v: 'Vector3d') -> 'Vector3d':
        """Adds supplied vector to this vector"""
        v = self._check_vector(v)
        return Vector3d(self.x + v.x, self.y + v.y, self.z + v.z)

    def minus(self, v: 'Vector3d') -> 'Vector3d':
        """Subtracts supplied vector from this vector"""
        v = self._check_vector(v)
        return Vector3d(self.x - v.x, self.y - v.y, self.z - v.z)

    def times(self, scalar: float) -> 'Vector3d':
        """Multiplies this vector by a scalar value"""
        s = to_float(scalar, 'scalar')
        return Vector3d(self.x * s, self.y * s, self.z * s)

    def divided_by(self, scalar: float) -> 'Vector3d':
        """Divides this vector by a scalar value"""
        s = to_float(scalar, 'scalar')
        return Vector3d(self.x / s, self.y / s, self.z / s)

    def dot(self, v: 'Vector3d') -> float:
        """Multiplies this vector by the supplied vector using dot (scalar) product"""
        v = self._check_vector(v)
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: 'Vector3d') -> 'Vector3d':
        """Multiplies this vector by the supplied vector using cross (vector) product"""
        v = self._check_vector(v)
        return Vector3d(
            self.y * v.z - self.z * v.y,
            self.z * v.x - self.x * v.z,
            self.x * v.y - self.y * v.x,
        )

    def negate(self) -> 'Vector3d':
        """Negates a vector to point in the opposite direction"""
        return Vector3d(-self.x, -self.y, -self.z)

    def unit(self) -> 'Vector3d':
        """
        Normalizes this vector to a unit vector. A zero vector, or one which is
        already a unit vector, is returned unchanged.
        """
        norm = self.length
        if norm in (0, 1):
            return self

        return Vector3d(self.x / norm, self.y / norm, self.z / norm)

    def angle_to(self, v: 'Vector3d', n: Optional['Vector3d'] = None) -> float:
        """
        Calculates the angle between this vector and the supplied vector.

        Args:
            v:
                The vector whose angle is to be determined from this vector

            n: (Vector3d) (Optional)
                Plane normal: if supplied, the angle is signed +ve if this->v is
                clockwise looking along n, -ve in the opposite direction

        Returns:
            Angle in radians, in the range 0..π or, if n is supplied, -π..+π
        """
        v = self._check_vector(v)
        if n is not None:
            self._check_vector(n, 'plane normal')

        # sign of the angle, by whether this×v lies along or against n
        sign = 1 if n is None or self.cross(v).dot(n) >= 0 else -1

        sin_theta = self.cross(v).length * sign
        cos_theta = self.dot(v)

        return math.atan2(sin_theta, cos_theta)

    def rotate_around(self, axis: 'Vector3d', angle: float) -> 'Vector3d':
        """
        Rotates this point around an axis by a specified angle. The result is the
        rotated unit vector.

        Args:
            axis:
                The axis being rotated around

            angle:
                The angle of rotation, in radians (clockwise looking along the axis)

        Returns:
            Vector3d
        """
        axis = self._check_vector(axis, 'axis')
        theta = to_float(angle, 'angle')

        p = self.unit()
        a = axis.unit()

        s, c = math.sin(theta), math.cos(theta)
        t = 1 - c
        x, y, z = a.x, a.y, a.z

        # axis-angle rotation matrix
        rotation = np.array([
            [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
            [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
            [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
        ])

        return Vector3d(*(rotation @ p.to_array()))

    def to_string(self, dp: int = 3) -> str:
        """String representation of this vector, e.g. '[1.000,2.000,3.000]'"""
        return f'[{to_fixed(self.x, dp)},{to_fixed(self.y, dp)},{to_fixed(self.z, dp)}]'
