
import pytest

from geoformulae.exceptions import NotAvailable, UnrecognisedFrame
from geoformulae.reference_frames import (
    REFERENCE_FRAMES, TRANSFORMS, ReferenceFrame, get_frame, is_identity, transform_path
)


def test_reference_frame_table():
    assert REFERENCE_FRAMES['ITRF2014'].epoch == 2010.0
    assert REFERENCE_FRAMES['ITRF2014'].ellipsoid.name == 'GRS80'
    assert REFERENCE_FRAMES['WGS84g1762'].ellipsoid.name == 'WGS84'
    assert 'ITRF2014→ITRF2008' in TRANSFORMS

    with pytest.raises(TypeError):
        REFERENCE_FRAMES['ITRF2014'] = None


def test_get_frame():
    assert get_frame('NAD83') is REFERENCE_FRAMES['NAD83']
    assert get_frame(REFERENCE_FRAMES['NAD83']) is REFERENCE_FRAMES['NAD83']

    with pytest.raises(UnrecognisedFrame):
        get_frame('ITRF1900')

    with pytest.raises(UnrecognisedFrame):
        get_frame(None)

    with pytest.raises(ValueError):
        get_frame(0)

    # records must match the table
    bogus = ReferenceFrame('ITRF2014', 2000.0, REFERENCE_FRAMES['ITRF2014'].ellipsoid)
    with pytest.raises(UnrecognisedFrame):
        get_frame(bogus)


def test_is_identity():
    assert is_identity('ITRF2000', 'ITRF2000')
    assert is_identity('ITRF2014', 'WGS84g1762')
    assert is_identity('WGS84g1150', 'ITRF2008')
    assert not is_identity('ITRF2014', 'ITRF2008')
    assert not is_identity('WGS84g1762', 'NAD83')


def test_transform_path():
    assert transform_path('ITRF2000', 'ITRF2000') == ()
    assert transform_path('ITRF2014', 'WGS84g1674') == ()

    # direct
    path = transform_path('ITRF2014', 'ITRF2008')
    assert len(path) == 1
    assert path[0] is TRANSFORMS['ITRF2014→ITRF2008']

    # reversed
    path = transform_path('ITRF2008', 'ITRF2014')
    assert len(path) == 1
    assert (path[0].from_frame, path[0].to_frame) == ('ITRF2008', 'ITRF2014')
    assert path[0].params.tx == -1.6
    assert path[0].rates.s == -0.03
    assert path[0].epoch == 2010.0

    # chained through an intermediate frame
    path = transform_path('NAD83', 'ITRF2014')
    assert [(x.from_frame, x.to_frame) for x in path] == [
        ('NAD83', 'ITRF2000'),
        ('ITRF2000', 'ITRF2014'),
    ]

    with pytest.raises(NotAvailable):
        transform_path('WGS84g1762', 'NAD83')

    with pytest.raises(UnrecognisedFrame):
        transform_path('ITRF2014', 'ITRF1900')
