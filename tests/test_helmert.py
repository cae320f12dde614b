
import math

import numpy as np
import pytest

from geoformulae.helmert import HelmertParams, apply_transform, datum_transform, frame_transform


def test_helmert_params_negate():
    params = HelmertParams(1, -2, 3, -4, 5, -6, 7)
    assert params.negate() == HelmertParams(-1, 2, -3, 4, -5, 6, -7)
    assert params.negate().negate() == params


def test_datum_transform():
    translation, scale, rotation = datum_transform(HelmertParams(1, 2, 3, 10, 3600, 0, -3600))
    assert np.array_equal(translation, np.array([1., 2., 3.]))
    assert scale == 1 + 10 / 1e6
    assert rotation == pytest.approx(np.array([math.radians(1), 0, -math.radians(1)]))


def test_frame_transform():
    params = HelmertParams(1000, 2000, 3000, 10, 1000, 0, 0)
    rates = HelmertParams(100, 0, 0, 1, 0, 0, 1000)

    translation, scale, rotation = frame_transform(params, rates, 0)
    assert translation == pytest.approx(np.array([1, 2, 3]))
    assert scale == 1 + 10 / 1e9
    assert rotation == pytest.approx(np.array([math.radians(1 / 3600), 0, 0]))

    translation, scale, rotation = frame_transform(params, rates, 10)
    assert translation == pytest.approx(np.array([2, 2, 3]))
    assert scale == pytest.approx(1 + 20 / 1e9, abs=1e-15)
    assert rotation == pytest.approx(np.array([math.radians(1 / 3600), 0, math.radians(10 / 3600)]))


def test_apply_transform():
    identity = datum_transform(HelmertParams(0, 0, 0, 0, 0, 0, 0))
    assert apply_transform((1., 2., 3.), identity) == (1., 2., 3.)

    shift = datum_transform(HelmertParams(10, -10, 5, 0, 0, 0, 0))
    assert apply_transform((1., 2., 3.), shift) == (11., -8., 8.)

    scaled = datum_transform(HelmertParams(0, 0, 0, 1e6, 0, 0, 0))
    assert apply_transform((1., 2., 3.), scaled) == (2., 4., 6.)

    # small-angle rotation about z
    rz = datum_transform(HelmertParams(0, 0, 0, 0, 0, 0, 1))
    x, y, z = apply_transform((6378137., 0., 0.), rz)
    assert x == 6378137.
    assert y == pytest.approx(6378137 * math.radians(1 / 3600))
    assert z == 0

    result = apply_transform((1, 2, 3), shift)
    assert all(isinstance(v, float) for v in result)
