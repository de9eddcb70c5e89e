#!/usr/bin/env python

# Copyright 2024-2026 Martin Junius
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

# ChangeLog
# Version 0.1 / 2025-01-27
#       Utility functions moved to this module
# Version 0.2 / 2026-10-13
#       get_location() returns Observer, named locations from config,
#       signed longitude, optional height, raises ValueError instead of exit

import re

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.coordinates import EarthLocation
from astropy.coordinates import errors
from astropy.time        import Time
import astropy.units as u

# Local modules
from verbose import verbose, warning, error
from jsonconfig import config
from eclipseclasses import Observer


VERSION = "0.2 / 2026-10-13"
AUTHOR  = "Martin Junius"
NAME    = "astroutils"



def observer_from_location(loc: EarthLocation) -> Observer:
    """
    Convert astropy EarthLocation to Observer

    :param loc: location
    :type loc: EarthLocation
    :return: observer
    :rtype: Observer
    """
    geo = loc.to_geodetic()
    return Observer(latitude=float(geo.lat.degree), longitude=float(geo.lon.wrap_at(180*u.deg).degree),
                    elevation=max(float(geo.height.to_value(u.m)), 0.0))



def get_location(name: str) -> Observer:
    """
    Try to interpret location name as "LON LAT [HEIGHT]", named location
    from config, or astropy site name

    :param name: location name
    :type name: str
    :return: observer
    :rtype: Observer
    """
    m = re.match(r'^\s*([+-]?[0-9.]+)[\s,]+([+-]?[0-9.]+)(?:[\s,]+([0-9.]+))?\s*$', name)
    if m:
        lon, lat = float(m.group(1)), float(m.group(2))
        height = float(m.group(3)) if m.group(3) else 0.0
        verbose(f"location {lon=} {lat=} {height=}")
        return Observer(latitude=lat, longitude=lon, elevation=height)

    locations = { k.lower(): v for k, v in (config.get("locations") or {}).items() }
    if name.lower() in locations:
        lon, lat, height = locations[name.lower()]
        verbose(f"location {name} from config")
        return Observer(latitude=lat, longitude=lon, elevation=height)

    try:
        loc = EarthLocation.of_site(name)
    except errors.UnknownSiteException as e:
        ic(e)
        raise ValueError(f"named location {name} not found") from e
    verbose(f"location {name} from astropy site database")
    return observer_from_location(loc)



def location_to_string(observer: Observer) -> str:
    return f"lon={observer.longitude:.4f} lat={observer.latitude:.4f} height={observer.elevation:.0f}m"


def time_to_string(time: Time) -> str:
    return f"{Time(time).utc.iso} UTC"



if __name__ == "__main__":
    error("no main() function")
