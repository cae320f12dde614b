
import math

import numpy as np
import pytest

from geoformulae.exceptions import InvalidArgument
from geoformulae.vector3d import Vector3d


def test_vector3d_init():
    v = Vector3d(0.267, 0.535, 0.802)
    assert (v.x, v.y, v.z) == (0.267, 0.535, 0.802)

    v = Vector3d('1', '2.5', '-3')
    assert (v.x, v.y, v.z) == (1., 2.5, -3.)

    with pytest.raises(InvalidArgument):
        Vector3d('x', 'y', 'z')

    with pytest.raises(TypeError):
        Vector3d(1, 2, None)


def test_vector3d_dunders():
    v123 = Vector3d(1, 2, 3)
    assert v123 == Vector3d(1., 2., 3.)
    assert v123 != Vector3d(3, 2, 1)
    assert v123 != (1, 2, 3)
    assert len({v123, Vector3d(1, 2, 3), Vector3d(3, 2, 1)}) == 2
    assert tuple(v123) == (1., 2., 3.)
    assert repr(v123) == '<Vector3d(1.0, 2.0, 3.0)>'
    assert str(v123) == '[1.000,2.000,3.000]'


def test_vector3d_arithmetic():
    v123 = Vector3d(1, 2, 3)
    v321 = Vector3d(3, 2, 1)

    assert v123.plus(v321) == Vector3d(4, 4, 4)
    assert v123.minus(v321) == Vector3d(-2, 0, 2)
    assert v123.times(2) == Vector3d(2, 4, 6)
    assert v123.times('2') == Vector3d(2, 4, 6)
    assert v123.divided_by(2) == Vector3d(0.5, 1, 1.5)
    assert v123.dot(v321) == 10
    assert v123.cross(v321) == Vector3d(-4, 8, -4)
    assert v123.negate() == Vector3d(-1, -2, -3)

    # operators
    assert v123 + v321 == Vector3d(4, 4, 4)
    assert v123 - v321 == Vector3d(-2, 0, 2)
    assert v123 * 2 == Vector3d(2, 4, 6)
    assert 2 * v123 == Vector3d(2, 4, 6)
    assert v123 / 2 == Vector3d(0.5, 1, 1.5)
    assert -v123 == Vector3d(-1, -2, -3)


def test_vector3d_arithmetic_errors():
    v123 = Vector3d(1, 2, 3)
    v321 = Vector3d(3, 2, 1)

    with pytest.raises(InvalidArgument):
        v123.plus(1)

    with pytest.raises(InvalidArgument):
        v123.minus(1)

    with pytest.raises(InvalidArgument):
        v123.times('x')

    with pytest.raises(InvalidArgument):
        v123.divided_by('x')

    with pytest.raises(InvalidArgument):
        v123.dot(1)

    with pytest.raises(InvalidArgument):
        v123.cross(1)

    with pytest.raises(InvalidArgument):
        v123.angle_to(1)

    with pytest.raises(InvalidArgument):
        v123.angle_to(v321, 'x')

    with pytest.raises(InvalidArgument):
        v123.rotate_around(1, 0.5)


def test_vector3d_length_unit():
    v123 = Vector3d(1, 2, 3)
    assert v123.length == 3.7416573867739413
    assert v123.unit().to_string() == '[0.267,0.535,0.802]'
    assert v123.unit().length == pytest.approx(1.)

    # zero vectors are left alone
    assert Vector3d(0, 0, 0).unit() == Vector3d(0, 0, 0)


def test_vector3d_angle_to():
    v123 = Vector3d(1, 2, 3)
    v321 = Vector3d(3, 2, 1)

    assert math.degrees(v123.angle_to(v321)) == pytest.approx(44.415, abs=5e-4)
    assert math.degrees(v123.angle_to(v321, v123.cross(v321))) == pytest.approx(44.415, abs=5e-4)
    assert math.degrees(v123.angle_to(v321, v321.cross(v123))) == pytest.approx(-44.415, abs=5e-4)
    assert math.degrees(v123.angle_to(v321, v123)) == pytest.approx(44.415, abs=5e-4)


def test_vector3d_rotate_around():
    v123 = Vector3d(1, 2, 3)
    rotated = v123.rotate_around(Vector3d(0, 0, 1), math.pi / 2)
    assert rotated.to_string() == '[-0.535,0.267,0.802]'


def test_vector3d_to_array():
    assert np.array_equal(Vector3d(1, 2, 3).to_array(), np.array([1., 2., 3.]))


def test_vector3d_to_string():
    v123 = Vector3d(1, 2, 3)
    assert v123.to_string() == '[1.000,2.000,3.000]'
    assert v123.to_string(6) == '[1.000000,2.000000,3.000000]'
    assert v123.to_string(0) == '[1,2,3]'
