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

"""Shared fixtures: deterministic fake ephemeris with the moon crossing a fixed sun."""

import math

import pytest
from astropy.time import Time
import astropy.units as u

from eclipseclasses import (
    Body,
    EclipseEvent,
    EclipseKind,
    EphemerisError,
    HorizontalPosition,
    LocalSolarEclipse,
    NoEclipseFound,
    Observer,
    TopocentricPosition,
)
from eclipsegeom import AU_KM, MOON_RADIUS_KM, SUN_RADIUS_KM, circle_overlap, eclipse_phase


# Conjunction of the fake moon with the fake sun
T0 = Time("2026-08-12T18:00:00", scale="utc")
# Relative moon motion (degrees/hour)
SPEED = 0.5

# Moon distances giving a larger / smaller moon disk than the sun at 1 au
MOON_DIST_TOTAL = 0.0024
MOON_DIST_ANNULAR = 0.0027


class FakeEphemeris:
    """Sun fixed at RA=0h DEC=0, moon moving along the equator through it."""

    def __init__(self, moon_distance_au=MOON_DIST_TOTAL, moon_dec=0.0, no_eclipse=False):
        self.moon_distance_au = moon_distance_au
        self.moon_dec = moon_dec
        self.no_eclipse = no_eclipse
        self.calls = []

    def hours(self, time):
        return (Time(time, scale="utc") - T0).to_value(u.hour)

    def equatorial_position(self, body, time, observer):
        self.calls.append(("equatorial", body))
        if body == Body.SUN:
            return TopocentricPosition(ra_hours=0.0, dec_degrees=0.0, distance_au=1.0)
        if body == Body.MOON:
            ra = (self.hours(time) * SPEED / 15.0) % 24.0
            return TopocentricPosition(ra_hours=ra, dec_degrees=self.moon_dec,
                                       distance_au=self.moon_distance_au)
        raise EphemerisError(f"unknown body {body}")

    def horizontal_position(self, time, observer, ra_hours, dec_degrees):
        self.calls.append(("horizontal", ra_hours, dec_degrees))
        return HorizontalPosition(azimuth_degrees=-30.0, altitude_degrees=observer.latitude - 45.0)

    def radii(self):
        r_sun = math.degrees(math.asin(SUN_RADIUS_KM / AU_KM))
        r_moon = math.degrees(math.asin(MOON_RADIUS_KM / (self.moon_distance_au * AU_KM)))
        return r_sun, r_moon

    def search_local_solar_eclipse(self, search_start, observer):
        r_sun, r_moon = self.radii()
        if self.no_eclipse or Time(search_start, scale="utc") > T0 or abs(self.moon_dec) >= r_sun + r_moon:
            raise NoEclipseFound("no eclipse in fake ephemeris")

        def event(h):
            return EclipseEvent(time=T0 + h * u.hour, altitude=30.0)

        # Small angle contacts along the moon track
        h_partial = math.sqrt((r_sun + r_moon) ** 2 - self.moon_dec ** 2) / SPEED
        kind = eclipse_phase(r_sun, r_moon, abs(self.moon_dec))
        c2 = c3 = None
        if kind != EclipseKind.PARTIAL:
            h_central = math.sqrt((r_sun - r_moon) ** 2 - self.moon_dec ** 2) / SPEED
            c2, c3 = event(-h_central), event(h_central)
        return LocalSolarEclipse(kind=kind,
                                 obscuration=circle_overlap(r_sun, r_moon, abs(self.moon_dec)),
                                 partial_begin=event(-h_partial), peak=event(0.0),
                                 partial_end=event(h_partial),
                                 total_begin=c2, total_end=c3)


@pytest.fixture
def observer():
    return Observer(latitude=39.6953, longitude=3.0176)


@pytest.fixture
def fake_total():
    return FakeEphemeris(MOON_DIST_TOTAL)


@pytest.fixture
def fake_annular():
    return FakeEphemeris(MOON_DIST_ANNULAR)


@pytest.fixture
def fake_partial():
    return FakeEphemeris(MOON_DIST_TOTAL, moon_dec=0.3)
