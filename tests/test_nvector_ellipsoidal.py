
import pytest

from geoformulae.exceptions import InvalidArgument
from geoformulae.nvector_ellipsoidal import (
    CartesianNvector, LatLonNvectorEllipsoidal as LatLon, Ned, NvectorEllipsoidal
)


def test_delta_to_example():
    delta = LatLon(49.66618, 3.45063, 99).delta_to(LatLon(48.88667, 2.37472, 64))
    assert delta.to_string() == '[N:-86127,E:-78901,D:1104]'
    assert f'{delta.length:.3f}' == '116809.178'
    assert f'{delta.bearing:.3f}' == '222.493'
    assert f'{delta.elevation:.4f}' == '-0.5416'

    delta = Ned.from_distance_bearing_elevation(116809.178, 222.493, -0.5416)
    assert LatLon(49.66618, 3.45063, 99).destination_point(delta).to_string() == '48.8867°N, 002.3747°E'


def test_ned():
    ned = Ned(110569, 111297, 1936)
    assert ned.to_string() == '[N:110569,E:111297,D:1936]'
    assert str(ned) == '[N:110569,E:111297,D:1936]'
    assert ned == Ned(110569., 111297., 1936.)
    assert ned != Ned(110569, 111297, 1937)
    assert repr(ned) == '<Ned(110569.0, 111297.0, 1936.0)>'

    assert Ned.from_distance_bearing_elevation(
        116809.178, 222.493, -0.5416
    ).to_string() == '[N:-86127,E:-78901,D:1104]'

    with pytest.raises(InvalidArgument, match='invalid north ‘x’'):
        Ned('x', 0, 0)


def test_nvector_ellipsoidal():
    assert LatLon(45, 45).to_nvector().to_string(4) == '[0.5000,0.5000,0.7071]'

    nvector = NvectorEllipsoidal(0.5000, 0.5000, 0.707107)
    assert nvector.to_lat_lon().to_string() == '45.0000°N, 045.0000°E'
    assert nvector.to_cartesian().to_string() == '[3194419,3194419,4487349]'
    assert nvector.datum.name == 'WGS84'
    assert NvectorEllipsoidal(0.5000, 0.5000, 0.7071).to_string() == '[0.500,0.500,0.707]'
    assert NvectorEllipsoidal(0.5000, 0.5000, 0.7071, 1).to_string(6, 0) == '[0.500002,0.500002,0.707103+1m]'

    assert NvectorEllipsoidal(1, 0, 0).to_string(2) == '[1.00,0.00,0.00]'
    assert NvectorEllipsoidal(1, 0, 0).to_string(2, 2) == '[1.00,0.00,0.00+0.00m]'
    assert NvectorEllipsoidal(1, 0, 0, 1).to_string(3, 2) == '[1.000,0.000,0.000+1.00m]'
    assert NvectorEllipsoidal(1, 0, 0, -1).to_string(3, 2) == '[1.000,0.000,0.000-1.00m]'


def test_cartesian_nvector():
    assert CartesianNvector(3980581, 97, 4966825).to_nvector().to_string(4) == '[0.6228,0.0000,0.7824]'


@pytest.mark.parametrize('lat,lon,cartesian,nvector,latlon', [
    (0, 0, '[6378137,0,0]', '[1.000,0.000,0.000]', '00.0000°N, 000.0000°E'),
    (0, 90, '[0,6378137,0]', '[0.000,1.000,0.000]', '00.0000°N, 090.0000°E'),
    (90, 0, '[0,0,6356752]', '[0.000,0.000,1.000]', '90.0000°N, 000.0000°E'),
    (45, 45, '[3194419,3194419,4487348]', '[0.500,0.500,0.707]', '45.0000°N, 045.0000°E'),
    (-45, -45, '[3194419,-3194419,-4487348]', '[0.500,-0.500,-0.707]', '45.0000°S, 045.0000°W'),
])
def test_conversions(lat, lon, cartesian, nvector, latlon):
    point = LatLon(lat, lon)
    assert point.to_cartesian().to_string() == cartesian
    assert point.to_cartesian().to_lat_lon().to_string() == latlon
    assert point.to_nvector().to_string() == nvector
    assert point.to_nvector().to_lat_lon().to_string() == latlon
    assert point.to_nvector().to_cartesian().to_string() == cartesian
    assert point.to_cartesian().to_nvector().to_string() == nvector


@pytest.mark.parametrize('nvector,cartesian', [
    (NvectorEllipsoidal(1, 0, 0), '[6378137,0,0]'),
    (NvectorEllipsoidal(0, 1, 0), '[0,6378137,0]'),
    (NvectorEllipsoidal(0, 0, 1), '[0,0,6356752]'),
    (NvectorEllipsoidal(1, 0, 0, 100), '[6378237,0,0]'),
    (NvectorEllipsoidal(0, 0, 1, 100), '[0,0,6356852]'),
    (NvectorEllipsoidal(0.5, 0.5, 0.7071), '[3194434,3194434,4487327]'),
    (NvectorEllipsoidal(0.5, 0.5, 0.7071, 100), '[3194484,3194484,4487398]'),
])
def test_nvector_to_cartesian(nvector, cartesian):
    assert nvector.to_cartesian().to_string() == cartesian


@pytest.mark.parametrize('start,end,delta', [
    ((0, 0), (1, 1), '[N:110569,E:111297,D:1936]'),
    ((0, 0), (10, 1), '[N:1100249,E:109634,D:97221]'),
    ((0, 0), (1, 10), '[N:110569,E:1107384,D:97848]'),
    ((30, 0), (31, 1), '[N:111272,E:95499,D:1689]'),
    ((30, 0), (40, 1), '[N:1104162,E:85390,D:97241]'),
    ((30, 0), (31, 10), '[N:152421,E:950201,D:72962]'),
    ((0, 30), (1, 31), '[N:110569,E:111297,D:1936]'),
    ((30, 30), (31, 40), '[N:152421,E:950201,D:72962]'),
    ((89, 0), (90, 0), '[N:111688,E:0,D:975]'),
    ((90, 0), (89, 0), '[N:-111688,E:0,D:975]'),
    ((0, 0), (45, 45), '[N:4487348,E:3194419,D:3183718]'),
])
def test_delta_to(start, end, delta):
    assert LatLon(*start).delta_to(LatLon(*end)).to_string() == delta


@pytest.mark.parametrize('start,delta,end', [
    ((0, 0), Ned(110569, 111297, 1936), '01.0000°N, 001.0000°E'),
    ((0, 0), Ned(1100249, 109634, 97221), '10.0000°N, 001.0000°E'),
    ((30, 0), Ned(152421, 950201, 72962), '31.0000°N, 010.0000°E'),
    ((30, 30), Ned(1104162, 85390, 97241), '40.0000°N, 031.0000°E'),
    ((89, 0), Ned(111688, 0, 975), '90.0000°N, 000.0000°E'),
    ((90, 0), Ned(-111688, 0, 975), '89.0000°N, 000.0000°E'),
    ((0, 0), Ned(4487348, 3194419, 3183718), '45.0000°N, 045.0000°E'),
])
def test_destination_point(start, delta, end):
    assert LatLon(*start).destination_point(delta).to_string() == end


def test_delta_without_height():
    a, b = LatLon(49.66618, 3.45063), LatLon(48.88667, 2.37472)
    delta = a.delta_to(b)
    assert delta.to_string() == '[N:-86126,E:-78900,D:1069]'
    assert f'{delta.length:.3f}' == '116807.681'
    assert f'{delta.elevation:.4f}' == '-0.5245'
    assert Ned.from_distance_bearing_elevation(
        delta.length, delta.bearing, delta.elevation
    ).to_string() == '[N:-86126,E:-78900,D:1069]'


def test_failures():
    with pytest.raises(InvalidArgument, match='invalid point ‘None’'):
        LatLon(0, 0).delta_to(None)

    with pytest.raises(InvalidArgument, match='delta is not a Ned object'):
        LatLon(0, 0).destination_point(None)


def test_navlab_examples():
    # A and B to delta
    delta = LatLon(1, 2, 3).delta_to(LatLon(4, 5, 6))
    assert delta.to_string(3) == '[N:331730.863,E:332998.501,D:17398.304]'
    assert f'{delta.length:.3f}' == '470357.384'
    assert f'{delta.bearing:.3f}' == '45.109'
    assert f'{delta.elevation:.4f}' == '-2.1198'

    # ECEF-vector to geodetic latitude
    cartesian = CartesianNvector(0.9 * 6371e3, -1.0 * 6371e3, 1.1 * 6371e3)
    assert cartesian.to_lat_lon().to_string('d', 3, 3) == '39.379°N, 048.013°W +4702059.834m'

    # geodetic latitude to ECEF-vector
    assert LatLon(1, 2, 3).to_cartesian().to_string(3) == '[6373290.277,222560.201,110568.827]'
