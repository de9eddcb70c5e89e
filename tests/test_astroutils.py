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

import pytest
from astropy.coordinates import EarthLocation
from astropy.time import Time
import astropy.units as u

from eclipseclasses import Observer
from astroutils import get_location, location_to_string, observer_from_location, time_to_string


class TestGetLocation:

    def test_lon_lat(self):
        observer = get_location("3.0176 39.6953")
        assert observer == Observer(latitude=39.6953, longitude=3.0176)

    def test_lon_lat_height_comma(self):
        observer = get_location("-3.7, 42.34, 860")
        assert observer.longitude == -3.7
        assert observer.latitude == 42.34
        assert observer.elevation == 860.0

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            get_location("200 39")
        with pytest.raises(ValueError):
            get_location("3 95")

    def test_named_from_config(self):
        assert get_location("Mallorca") == Observer(latitude=39.6953, longitude=3.0176)


class TestObserver:

    def test_negative_elevation(self):
        with pytest.raises(ValueError):
            Observer(latitude=0.0, longitude=0.0, elevation=-1.0)

    def test_location_roundtrip(self):
        observer = Observer(latitude=39.6953, longitude=3.0176, elevation=100.0)
        loc = observer.location
        assert isinstance(loc, EarthLocation)
        back = observer_from_location(loc)
        assert back.latitude == pytest.approx(39.6953)
        assert back.longitude == pytest.approx(3.0176)
        assert back.elevation == pytest.approx(100.0, abs=1e-3)

    def test_west_longitude(self):
        loc = EarthLocation.from_geodetic(lon=-70.0 * u.deg, lat=-30.0 * u.deg, height=2000 * u.m)
        assert observer_from_location(loc).longitude == pytest.approx(-70.0)


def test_location_to_string():
    text = location_to_string(Observer(latitude=39.6953, longitude=3.0176))
    assert text == "lon=3.0176 lat=39.6953 height=0m"


def test_time_to_string():
    assert time_to_string(Time("2026-08-12T18:31:49", scale="utc")) == "2026-08-12 18:31:49.000 UTC"
