# Copyright 2026 Martin Junius
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Golden values for the total solar eclipse 2026-08-12 as seen from Mallorca,
computed with the astropy builtin ephemeris. Slow, deselect with -m "not slow".
"""

import pytest
from astropy.coordinates import AltAz, SkyCoord, TETE
from astropy.time import Time
import astropy.units as u

from eclipseclasses import Body, EclipseKind, EphemerisError, NoEclipseFound, Observer
from ephemeris import AstropyEphemeris
from eclipsesearch import search_local_solar_eclipse
from eclipsetiming import resolve_eclipse_timing
from suncoverage import compute_coverage, sun_moon_geometry
from sunposition import sun_horizontal_position


pytestmark = pytest.mark.slow

MALLORCA = Observer(latitude=39.6953, longitude=3.0176)
SEARCH_START = Time("2026-08-12T00:00:00", scale="utc")
# Published maximum eclipse for Mallorca
PEAK = Time("2026-08-12T18:31:49", scale="utc")


@pytest.fixture(scope="module")
def ephem():
    return AstropyEphemeris("builtin")


@pytest.fixture(scope="module")
def timing(ephem):
    return resolve_eclipse_timing(SEARCH_START, MALLORCA, ephem)


def test_peak_time(timing):
    assert abs((timing.peak_time - PEAK).to_value(u.min)) < 3.0
    assert Time("2026-08-12T17:00:00") < timing.peak_time < Time("2026-08-12T19:00:00")


def test_kind_and_ordering(timing):
    assert timing.kind in (EclipseKind.TOTAL, EclipseKind.PARTIAL)
    assert timing.start_time < timing.peak_time < timing.end_time
    if timing.kind == EclipseKind.TOTAL:
        assert timing.has_totality
        assert timing.start_time < timing.totality_start_time < timing.peak_time
        assert timing.peak_time < timing.totality_end_time < timing.end_time
        assert timing.totality_duration.to_value(u.s) < 120


def test_coverage_at_peak(timing, ephem):
    assert compute_coverage(timing.peak_time, MALLORCA, ephem) == pytest.approx(timing.obscuration, abs=1e-3)


def test_coverage_outside_eclipse(timing, ephem):
    assert compute_coverage(timing.start_time - 10 * u.min, MALLORCA, ephem) == 0.0
    assert compute_coverage(timing.end_time + 10 * u.min, MALLORCA, ephem) == 0.0
    assert compute_coverage(timing.peak_time - 365 * u.day, MALLORCA, ephem) == 0.0


def test_sun_distance(ephem):
    sun = ephem.equatorial_position(Body.SUN, PEAK, MALLORCA)
    assert 1.01 < sun.distance_au < 1.017
    moon = ephem.equatorial_position(Body.MOON, PEAK, MALLORCA)
    assert 0.0023 < moon.distance_au < 0.0028


def test_geometry_at_peak(timing, ephem):
    geometry = sun_moon_geometry(timing.peak_time, MALLORCA, ephem)
    assert geometry.phase == timing.kind
    assert geometry.separation < 0.05


def test_sun_low_in_the_west(timing, ephem):
    sun = sun_horizontal_position(timing.peak_time, MALLORCA, ephem)
    assert 0.0 < sun.elevation_degrees < 20.0
    assert 260.0 < sun.azimuth_degrees < 300.0


def test_horizontal_matches_altaz(ephem):
    loc = MALLORCA.location
    ra, dec = 5.5, 21.0
    hor = ephem.horizontal_position(PEAK, MALLORCA, ra, dec)
    coord = SkyCoord(ra=ra * u.hourangle, dec=dec * u.deg, frame=TETE(obstime=PEAK, location=loc))
    altaz = coord.transform_to(AltAz(obstime=PEAK, location=loc))
    assert hor.altitude_degrees == pytest.approx(altaz.alt.degree, abs=0.05)
    assert hor.azimuth_degrees == pytest.approx(altaz.az.degree, abs=0.05)


def test_unknown_body(ephem):
    with pytest.raises(EphemerisError):
        ephem.equatorial_position("pluto", PEAK, MALLORCA)


def test_no_eclipse_within_horizon(ephem):
    with pytest.raises(NoEclipseFound):
        search_local_solar_eclipse("2026-08-13T00:00:00", MALLORCA, "builtin", horizon_years=0.1)
