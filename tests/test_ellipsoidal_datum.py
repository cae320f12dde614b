
import pytest

from geoformulae.datums import DATUMS
from geoformulae.ellipsoidal_datum import CartesianDatum, LatLonDatum
from geoformulae.exceptions import InvalidArgument, UnrecognisedDatum


def test_latlon_datum_init():
    p = LatLonDatum(53.3444, -6.2577, 17, 'Irl1975')
    assert p.to_string() == '53.3444°N, 006.2577°W'
    assert p.datum is DATUMS['Irl1975']
    assert p.ellipsoid.name == 'AiryModified'
    assert repr(p) == '<LatLonDatum(53.3444, -6.2577, 17.0, Irl1975)>'

    assert LatLonDatum(0, 0).datum.name == 'WGS84'
    assert LatLonDatum(0, 0, 0, DATUMS['OSGB36']).datum.name == 'OSGB36'

    with pytest.raises(UnrecognisedDatum, match='unrecognised datum ‘None’'):
        LatLonDatum(0, 0, 0, None)


def test_latlon_datum_parse():
    p = LatLonDatum.parse('51.47736, 0.0000', 0, datum='OSGB36')
    assert p.to_string() == '51.4774°N, 000.0000°E'
    assert p.datum.name == 'OSGB36'

    assert LatLonDatum.parse(51.47736, 0, 12).height == 12
    assert LatLonDatum.parse('45N, 45E').datum.name == 'WGS84'

    with pytest.raises(UnrecognisedDatum, match='unrecognised datum ‘None’'):
        LatLonDatum.parse('0, 0', 0, datum=None)


def test_latlon_datum_equals():
    p1 = LatLonDatum(51.47788, -0.00147, 1, 'WGS84')
    p2 = LatLonDatum(51.47788, -0.00147, 1, 'WGS84')
    assert p1 is not p2
    assert p1.equals(p2)
    assert p1 == p2
    assert not p1.equals(LatLonDatum(0, -0.00147, 1))
    assert not p1.equals(LatLonDatum(51.47788, 0, 1))
    assert not p1.equals(LatLonDatum(51.47788, -0.00147, 99))
    assert not p1.equals(LatLonDatum(51.47788, -0.00147, 1, 'Irl1975'))
    assert p1 != LatLonDatum(51.47788, -0.00147, 1, 'Irl1975')

    with pytest.raises(InvalidArgument, match='invalid point ‘None’'):
        p1.equals(None)


def test_convert_datum_greenwich():
    greenwich = LatLonDatum(51.47788, -0.00147)
    osgb36 = greenwich.convert_datum('OSGB36')
    assert osgb36.datum.name == 'OSGB36'
    assert osgb36.to_string() == '51.4774°N, 000.0001°E'
    assert osgb36.to_string('d', 6) == '51.477364°N, 000.000150°E'
    assert osgb36.convert_datum('WGS84').to_string('d', 5) == '51.47788°N, 000.00147°W'

    assert greenwich.convert_datum(DATUMS['OSGB36']) == osgb36

    with pytest.raises(UnrecognisedDatum, match='unrecognised datum ‘None’'):
        LatLonDatum(51, 0).convert_datum(None)


def test_convert_datum_petroleum_operations_notices():
    p = LatLonDatum(53, 1, 50)
    assert p.convert_datum('OSGB36').to_string('dms', 3, 2) == '52°59′58.719″N, 001°00′06.490″E +3.99m'
    assert p.convert_datum('ED50').to_string('dms', 3, 2) == '53°00′02.887″N, 001°00′05.101″E +2.72m'

    round_trip = p.convert_datum('OSGB36').convert_datum('ED50').convert_datum('WGS84')
    assert round_trip.to_string('d', 4, 1) == '53.0000°N, 001.0000°E +50.0m'


def test_latlon_datum_to_cartesian():
    c = LatLonDatum.parse('45N, 45E').to_cartesian()
    assert isinstance(c, CartesianDatum)
    assert c.datum.name == 'WGS84'
    assert c.to_string() == '[3194419,3194419,4487348]'

    c = LatLonDatum(45, 45, 0, 'OSGB36').to_cartesian()
    assert c.datum.name == 'OSGB36'


def test_cartesian_datum():
    c = CartesianDatum(3194419, 3194419, 4487348)
    assert c.datum is None
    assert c.to_lat_lon().to_string() == '45.0000°N, 045.0000°E'
    assert c.to_lat_lon().datum.name == 'WGS84'
    assert c.to_lat_lon('OSGB36').datum.name == 'OSGB36'
    assert repr(c) == '<CartesianDatum(3194419.0, 3194419.0, 4487348.0, None)>'

    c.datum = 'ED50'
    assert c.datum.name == 'ED50'
    assert c.to_lat_lon().datum.name == 'ED50'

    with pytest.raises(UnrecognisedDatum, match='unrecognised datum ‘xx’'):
        c.to_lat_lon('xx')

    with pytest.raises(UnrecognisedDatum):
        c.datum = 'xx'


def test_cartesian_datum_to_lat_lon_convert():
    c = CartesianDatum(4027893.924, 307041.993, 4919474.294)
    assert c.to_lat_lon().convert_datum('OSGB36').to_string() == '50.7971°N, 004.3612°E'


def test_cartesian_convert_datum():
    wgs84 = LatLonDatum(53, 1, 50).to_cartesian()
    osgb36 = wgs84.convert_datum('OSGB36')
    assert osgb36.datum.name == 'OSGB36'

    back = osgb36.convert_datum('WGS84')
    assert back.datum.name == 'WGS84'
    assert back.x == pytest.approx(wgs84.x, abs=0.01)
    assert back.y == pytest.approx(wgs84.y, abs=0.01)
    assert back.z == pytest.approx(wgs84.z, abs=0.01)

    # neither end WGS84
    ed50 = osgb36.convert_datum('ED50')
    assert ed50.datum.name == 'ED50'
    assert ed50 == osgb36.convert_datum('WGS84').convert_datum('ED50')

    with pytest.raises(InvalidArgument, match='cartesian coordinate has no datum'):
        CartesianDatum(1, 2, 3).convert_datum('OSGB36')
