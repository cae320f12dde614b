
import math

import pytest

from geoformulae import dms
from geoformulae.ellipsoids import ELLIPSOIDS
from geoformulae.exceptions import InvalidArgument, InvalidRange, NotConverged
from geoformulae.vincenty import LatLonVincenty as LatLon, vincenty_direct, vincenty_inverse

CIRCUMFERENCE_MERIDIONAL = 40007862.918


@pytest.fixture
def le():
    return LatLon(50.06632, -5.71475)


@pytest.fixture
def jog():
    return LatLon(58.64402, -3.07009)


def test_uk(le, jog):
    dist, brng_init, brng_final = 969954.166, 9.1418775, 11.2972204

    assert le.distance_to(jog) == dist
    assert le.initial_bearing_to(jog) == brng_init
    assert le.final_bearing_to(jog) == brng_final
    assert le.destination_point(dist, brng_init).to_string('d') == jog.to_string('d')
    assert le.final_bearing_on(dist, brng_init) == brng_final
    assert le.intermediate_point_to(jog, 0) == le
    assert le.intermediate_point_to(jog, 1) == jog
    assert le.intermediate_point_to(jog, 0.5).to_string() == '54.3639°N, 004.5304°W'

    with pytest.raises(InvalidArgument, match='invalid point ‘None’'):
        le.distance_to(None)

    with pytest.raises(InvalidArgument, match='invalid point ‘None’'):
        le.initial_bearing_to(None)

    with pytest.raises(InvalidArgument, match='invalid point ‘None’'):
        le.final_bearing_to(None)


def test_destination():
    p = LatLon(-37.95103, 144.42487)
    assert p.destination_point(54972.271, 306.86816).to_string() == '37.6528°S, 143.9265°E'
    assert f'{p.final_bearing_on(54972.271, 306.86816):.4f}' == '307.1736'

    dest = p.destination_point(54972.271, 306.86816)
    assert isinstance(dest, LatLon)
    assert dest.datum.name == 'WGS84'

    # the destination supports the same methods
    p1 = LatLon(1, 1)
    assert p1.destination_point(1, 0).distance_to(p1) == 1


def test_rainsford():
    # international ellipsoid
    p1 = LatLon(dms.parse('37°19′54.95367″N'), 0, 0, 'ED50')
    p2 = LatLon(dms.parse('26°07′42.83946″N'), dms.parse('041°28′35.50729″'), 0, 'ED50')
    assert f'{p1.distance_to(p2):.3f}' == '4085966.703'
    assert dms.to_brng(p1.initial_bearing_to(p2), 'dms', 5) == '095°27′59.63076″'
    assert dms.to_brng(p1.final_bearing_to(p2), 'dms', 5) == '118°05′58.96176″'
    assert p1.destination_point(
        4085966.703, dms.parse('095°27′59.63089″')
    ).to_string('dms', 5) == '26°07′42.83945″N, 041°28′35.50730″E'

    # Bessel ellipsoid
    p1 = LatLon(dms.parse('55°45′00.00000″N'), 0, 0, 'Potsdam')
    p2 = LatLon(dms.parse('33°26′00.00000″S'), dms.parse('108°13′00.00000″'))
    assert f'{p1.distance_to(p2):.3f}' == '14110526.170'
    assert p1.destination_point(
        14110526.170, dms.parse('096°36′08.79960″')
    ).to_string('dms', 5) == '33°26′00.00001″S, 108°13′00.00001″E'


def test_geoscience_australia():
    flinders_peak = LatLon(dms.parse('37°57′03.72030″S'), dms.parse('144°25′29.52440″E'))
    buninyong = LatLon(dms.parse('37°39′10.15610″S'), dms.parse('143°55′35.38390″E'))
    dist, az_fwd, az_rev = 54972.271, '306°52′05.37″', '127°10′25.07″'

    assert flinders_peak.distance_to(buninyong) == dist
    assert dms.to_brng(flinders_peak.initial_bearing_to(buninyong), 'dms', 2) == az_fwd
    assert dms.to_brng(flinders_peak.final_bearing_to(buninyong) - 180, 'dms', 2) == az_rev
    assert flinders_peak.destination_point(
        dist, dms.parse(az_fwd)
    ).to_string('d') == buninyong.to_string('d')
    assert dms.to_brng(flinders_peak.final_bearing_on(dist, dms.parse(az_fwd)) - 180, 'dms', 2) == az_rev


def test_antipodal(caplog):
    assert LatLon(0, 0).distance_to(LatLon(0.5, 179.5)) == 19936288.579
    assert LatLon(0, 0).distance_to(LatLon(0, 180)) == pytest.approx(CIRCUMFERENCE_MERIDIONAL / 2, abs=1e-3)
    assert LatLon(0, 0).initial_bearing_to(LatLon(0, 180)) == 0
    assert LatLon(90, 0).distance_to(LatLon(-90, 0)) == pytest.approx(CIRCUMFERENCE_MERIDIONAL / 2, abs=1e-3)
    assert LatLon(90, 0).initial_bearing_to(LatLon(-90, 0)) == 0

    # convergence failures
    assert math.isnan(LatLon(0, 0).distance_to(LatLon(0.5, 179.7)))
    assert math.isnan(LatLon(0, 0).initial_bearing_to(LatLon(0.5, 179.7)))
    assert math.isnan(LatLon(0, 0).final_bearing_to(LatLon(0.5, 179.7)))
    assert math.isnan(LatLon(5, 0).distance_to(LatLon(-5.1, 179.4)))
    assert 'did not converge' in caplog.text


def test_not_converged():
    wgs84 = ELLIPSOIDS['WGS84']
    with pytest.raises(NotConverged):
        vincenty_inverse(0, 0, math.radians(0.5), math.radians(179.7), wgs84)

    with pytest.raises(NotConverged):
        LatLon(0, 0).inverse(LatLon(0.5, 179.7))


@pytest.mark.parametrize('lat_lon,distance', [
    ((0.00001, 0.00001), 1.569),
    ((0.000001, 0.000001), 0.157),
    ((0.0000001, 0.0000001), 0.016),
    ((0.00000001, 0.00000001), 0.002),
    ((0.000000001, 0.000000001), 0.0),
])
def test_small_distances(lat_lon, distance):
    assert LatLon(0, 0).distance_to(LatLon(*lat_lon)) == distance


def test_coincident(le):
    assert le.distance_to(le) == 0
    assert math.isnan(le.initial_bearing_to(le))
    assert math.isnan(le.final_bearing_to(le))
    assert le.destination_point(0, 0).to_string('d', 6) == le.to_string('d', 6)
    assert math.isnan(le.final_bearing_on(0, 0))
    assert LatLon(0, 0).distance_to(LatLon(0, 1)) == 111319.491


def test_antimeridian():
    assert LatLon(30, 120).distance_to(LatLon(30, -120)) == 10825924.089


@pytest.mark.parametrize('p1,p2', [
    ((30, 30), (60, 60)),
    ((60, 60), (30, 30)),
    ((30, 60), (60, 30)),
    ((30, -30), (60, -60)),
    ((60, -30), (30, -60)),
    ((-30, -30), (-60, -60)),
    ((-60, -60), (-30, -30)),
    ((-30, 30), (-60, 60)),
    ((-60, 30), (-30, 60)),
])
def test_quadrants(p1, p2):
    assert LatLon(*p1).distance_to(LatLon(*p2)) == 4015703.021


def test_surface_only(jog):
    le = LatLon(50.06632, -5.71475, 1)
    message = 'point must be on the surface of the ellipsoid'

    with pytest.raises(InvalidRange, match=message):
        le.distance_to(jog)

    with pytest.raises(InvalidRange, match=message):
        le.initial_bearing_to(jog)

    with pytest.raises(InvalidRange, match=message):
        le.final_bearing_to(jog)

    with pytest.raises(InvalidRange, match=message):
        le.destination_point(1, 0)

    with pytest.raises(InvalidRange, match=message):
        le.final_bearing_on(1, 0)


def test_osgb36_ellipsoid():
    le = LatLon(50.065716, -5.713824, 0, 'OSGB36')
    jog = LatLon(58.644399, -3.068521)
    dist, brng_init = 969982.014, 9.1428517

    assert le.distance_to(jog) == dist
    assert le.initial_bearing_to(jog) == brng_init
    assert le.destination_point(dist, brng_init).to_string('d', 6) == '58.644399°N, 003.068521°W'
    assert le.destination_point(dist, brng_init).datum.name == 'OSGB36'


def test_strings():
    assert LatLon('52.205', '0.119').distance_to(LatLon('48.857', '2.351')) == 404607.806


def test_core_solutions(le, jog):
    wgs84 = ELLIPSOIDS['WGS84']
    inverse = vincenty_inverse(
        math.radians(le.lat), math.radians(le.lon),
        math.radians(jog.lat), math.radians(jog.lon),
        wgs84,
    )
    assert inverse.distance == pytest.approx(969954.166, abs=1e-3)
    assert math.degrees(inverse.initial_azimuth) == pytest.approx(9.1418775, abs=1e-7)
    assert inverse.iterations > 0
    assert le.inverse(jog) == inverse

    direct = vincenty_direct(
        math.radians(le.lat), math.radians(le.lon), inverse.initial_azimuth, inverse.distance, wgs84
    )
    assert math.degrees(direct.lat) == pytest.approx(jog.lat, abs=1e-9)
    assert math.degrees(direct.lon) == pytest.approx(jog.lon, abs=1e-9)
    assert math.degrees(direct.final_azimuth) == pytest.approx(11.2972204, abs=1e-7)
    via_point = le.direct(inverse.distance, math.degrees(inverse.initial_azimuth))
    assert via_point.lat == pytest.approx(direct.lat, abs=1e-12)
    assert via_point.lon == pytest.approx(direct.lon, abs=1e-12)
