
import pytest

from geoformulae.ellipsoidal_referenceframe import CartesianReferenceFrame, LatLonReferenceFrame
from geoformulae.exceptions import InvalidArgument, NotAvailable, UnrecognisedFrame
from geoformulae.reference_frames import REFERENCE_FRAMES


def test_latlon_reference_frame_init():
    p = LatLonReferenceFrame(0, 0, 0, 'ITRF2014', 2000.0)
    assert p.to_string() == '00.0000°N, 000.0000°E'
    assert p.epoch == 2000.0

    p = LatLonReferenceFrame(0, 0)
    assert p.reference_frame.name == 'ITRF2014'
    assert p.epoch == 2010.0
    assert p.ellipsoid.name == 'GRS80'

    p = LatLonReferenceFrame(51.47788, -0.00147, 0, REFERENCE_FRAMES['ITRF2000'])
    assert p.to_string() == '51.4779°N, 000.0015°W'

    with pytest.raises(UnrecognisedFrame):
        LatLonReferenceFrame(0, 0, 0, None)

    with pytest.raises(InvalidArgument, match='invalid epoch ‘xxx’'):
        LatLonReferenceFrame(0, 0, 0, 'ITRF2014', 'xxx')


def test_latlon_reference_frame_parse():
    assert LatLonReferenceFrame.parse(
        51.47788, -0.00147, 17, reference_frame='ETRF2000'
    ).to_string() == '51.4779°N, 000.0015°W'
    assert LatLonReferenceFrame.parse(
        '51.47788, -0.00147', 17, reference_frame='ETRF2000'
    ).to_string() == '51.4779°N, 000.0015°W'
    assert LatLonReferenceFrame.parse(
        {'lat': 52.205, 'lon': 0.119}, 17, reference_frame='ETRF2000'
    ).to_string() == '52.2050°N, 000.1190°E'

    p = LatLonReferenceFrame.parse(51.47788, -0.00147, 17, reference_frame='ITRF2000')
    assert p.height == 17
    assert p.to_string('d', 4, None, True) == '51.4779°N, 000.0015°W (ITRF2000)'

    p = LatLonReferenceFrame.parse(
        '51.47788, -0.00147', 17, reference_frame='ITRF2000', epoch=2012.0
    )
    assert p.to_string('d', 4, None, True) == '51.4779°N, 000.0015°W (ITRF2000@2012.0)'

    with pytest.raises(InvalidArgument, match='invalid \\(empty\\) point'):
        LatLonReferenceFrame.parse()

    with pytest.raises(UnrecognisedFrame):
        LatLonReferenceFrame.parse(0, 0, 0, reference_frame=0)


def test_latlon_reference_frame_to_string():
    p = LatLonReferenceFrame(51.47788, -0.00147, 42, 'ITRF2014')
    assert p.to_string() == '51.4779°N, 000.0015°W'
    assert p.to_string('dms') == '51°28′40″N, 000°00′05″W'
    assert p.to_string('dms', 0, 0) == '51°28′40″N, 000°00′05″W +42m'
    assert repr(p) == '<LatLonReferenceFrame(51.47788, -0.00147, 42.0, ITRF2014, 2010.0)>'


def test_latlon_reference_frame_eq():
    assert LatLonReferenceFrame(1, 2) == LatLonReferenceFrame(1, 2)
    assert LatLonReferenceFrame(1, 2) != LatLonReferenceFrame(1, 2, 0, 'ITRF2008')
    assert LatLonReferenceFrame(1, 2) != LatLonReferenceFrame(1, 2, 0, 'ITRF2014', 2020)


def test_convert_reference_frame():
    p = LatLonReferenceFrame(51.47788, -0.00147, 0, 'ITRF2000')
    assert p.convert_reference_frame('ETRF2000').to_string('d', 8) == '51.47787826°N, 000.00147125°W'

    # no-op
    p = LatLonReferenceFrame(0, 0, 0, 'ITRF2000')
    assert p.convert_reference_frame('ITRF2000').to_string() == '00.0000°N, 000.0000°E'

    # chained via ITRF2000, and back again
    nad83 = LatLonReferenceFrame(0, 0, 0, 'NAD83')
    itrf2014 = nad83.convert_reference_frame('ITRF2014')
    assert itrf2014.reference_frame.name == 'ITRF2014'
    round_trip = itrf2014.convert_reference_frame('NAD83')
    assert round_trip.lat == pytest.approx(0, abs=1e-8)
    assert round_trip.lon == pytest.approx(0, abs=1e-8)
    assert round_trip.height == pytest.approx(0, abs=1e-3)

    with pytest.raises(UnrecognisedFrame):
        LatLonReferenceFrame(0, 0).convert_reference_frame('ITRF1900')

    with pytest.raises(NotAvailable):
        LatLonReferenceFrame(0, 0, 0, 'WGS84g1762').convert_reference_frame('NAD83')


def test_convert_reference_frame_identity_warning(caplog):
    p = LatLonReferenceFrame(10, 20, 0, 'ITRF2008')
    converted = p.convert_reference_frame('WGS84g1150')
    assert converted.reference_frame.name == 'WGS84g1150'
    assert 'ITRF2008 -> WGS84g1150' in caplog.text


def test_dawson_woods_gda94():
    itrf2005 = LatLonReferenceFrame.parse(
        '23°40′12.41482″S, 133°53′7.86712″E', 603.2562,
        reference_frame='ITRF2005', epoch=2010.4559
    )
    gda94 = itrf2005.convert_reference_frame('GDA94', 2010.4559)
    assert gda94.to_cartesian().to_string(4) == (
        '[-4052051.7614,4212836.1945,-2545106.0146](GDA94@2010.4559)'
    )
    assert gda94.to_string('dms', 5, 4, True) == (
        '23°40′12.44582″S, 133°53′07.84795″E +603.3361m (GDA94@2010.4559)'
    )

    itrf2005_2 = gda94.convert_reference_frame('ITRF2005', 2010.4559)
    assert itrf2005_2.to_string('dms', 5, 4, True) == (
        '23°40′12.41482″S, 133°53′07.86712″E +603.2562m (ITRF2005@2010.4559)'
    )


def test_meades_ranch():
    nad83 = LatLonReferenceFrame.parse(
        '39 13 26.71220N, 098 32 31.74540E', 573.961,
        reference_frame='NAD83', epoch=2010.0
    )
    assert nad83.to_cartesian().to_string(3) == (
        '[-734972.563,4893188.492,4011982.811](NAD83@2010.0)'
    )


def test_cartesian_reference_frame_init():
    c = CartesianReferenceFrame(1, 2, 3)
    assert c.reference_frame is None
    assert c.epoch is None
    assert c.to_string() == '[1,2,3]'

    c = CartesianReferenceFrame(1, 2, 3, 'ITRF2000')
    assert c.epoch == 1997.0

    with pytest.raises(InvalidArgument, match='invalid epoch ‘last year’'):
        CartesianReferenceFrame(1, 2, 3, 'ITRF2000', 'last year')

    with pytest.raises(UnrecognisedFrame):
        CartesianReferenceFrame(1, 2, 3, 'ITRF1900')


def test_cartesian_reference_frame_setters():
    c = CartesianReferenceFrame(1, 2, 3)
    c.reference_frame = 'ITRF2014'
    assert c.reference_frame.name == 'ITRF2014'
    c.epoch = 2020.5
    assert c.epoch == 2020.5
    assert c.to_string() == '[1,2,3](ITRF2014@2020.5)'

    with pytest.raises(UnrecognisedFrame):
        c.reference_frame = 'ITRF1900'

    with pytest.raises(InvalidArgument):
        c.epoch = 'last year'


def test_cartesian_reference_frame_to_lat_lon():
    c = CartesianReferenceFrame(4027893.924, 307041.993, 4919474.294, 'ITRF2000')
    assert c.to_lat_lon().to_string() == '50.7978°N, 004.3592°E'
    assert c.to_lat_lon().reference_frame.name == 'ITRF2000'

    with pytest.raises(InvalidArgument, match='cartesian reference frame not defined'):
        CartesianReferenceFrame(4027893.924, 307041.993, 4919474.294).to_lat_lon()


def test_cartesian_convert_reference_frame():
    c = CartesianReferenceFrame(1, 2, 3, 'ITRF2000')
    assert c.convert_reference_frame('ITRF2000').to_string() == '[1,2,3](ITRF2000)'

    c = CartesianReferenceFrame(3980574.247, -102.127, 4966830.065, 'ITRF2000')
    assert c.convert_reference_frame('ETRF2000').to_string(3) == (
        '[3980574.395,-102.214,4966829.941](ETRF2000@1997.0)'
    )

    with pytest.raises(InvalidArgument):
        CartesianReferenceFrame(1, 2, 3).convert_reference_frame('ITRF2014')


def test_euref_permanent_network():
    # ITRF2000(2012.0) -> ETRF2000(2012.0)
    c = CartesianReferenceFrame(4027894.006, 307045.600, 4919474.910, 'ITRF2000', 2012.0)
    assert c.convert_reference_frame('ETRF2000').to_string(4) == (
        '[4027894.3559,307045.2508,4919474.6447](ETRF2000@2012.0)'
    )

    # ITRF2014(2012.0) -> ETRF2000(2012.0)
    c = CartesianReferenceFrame(4027894.006, 307045.600, 4919474.910, 'ITRF2014', 2012.0)
    assert c.convert_reference_frame('ETRF2000').to_string(4) == (
        '[4027894.3662,307045.2530,4919474.6263](ETRF2000@2012.0)'
    )

    # ITRF2005(2007.0) -> ITRF91(2007.0), back to ITRF2014 then on to ITRF91
    c = CartesianReferenceFrame(4027894.006, 307045.600, 4919474.910, 'ITRF2005', 2007.0)
    assert c.convert_reference_frame('ITRF91').to_string(4) == (
        '[4027894.0444,307045.6209,4919474.8613](ITRF91@2007.0)'
    )


def test_onsala_observatory():
    # ITRF2000 -> ITRF93 chains through ITRF2014
    c = CartesianReferenceFrame(3370658.37800, 711877.31400, 5349787.08600, 'ITRF2000', 2017.0)
    assert c.convert_reference_frame('ITRF93', 2017.0).to_string(5) == (
        '[3370658.18892,711877.42369,5349787.12430](ITRF93@2017.0)'
    )
