#!/usr/bin/env python

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

# ChangeLog
# Version 0.1 / 2026-10-14
#       Sun azimuth/elevation for observer location and time

VERSION     = "0.1 / 2026-10-14"
AUTHOR      = "Martin Junius"
NAME        = "sunposition"
DESCRIPTION = "Sun azimuth and elevation"

import sys
import argparse

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.time import Time

# Local modules
from verbose import verbose, warning, error, message
from eclipseclasses import Body, Observer, SunDirection, EphemerisError
from ephemeris import Ephemeris, get_ephemeris
from astroutils import get_location, time_to_string



def sun_horizontal_position(time: Time, observer: Observer, ephemeris: Ephemeris=None) -> SunDirection:
    """
    Sun azimuth (clockwise from north) and elevation, no refraction

    :param time: time of observation
    :type time: Time
    :param observer: observer location
    :type observer: Observer
    :param ephemeris: ephemeris, defaults to get_ephemeris()
    :type ephemeris: Ephemeris, optional
    :return: sun direction in degrees
    :rtype: SunDirection
    """
    ephemeris = ephemeris or get_ephemeris()
    sun = ephemeris.equatorial_position(Body.SUN, time, observer)
    hor = ephemeris.horizontal_position(time, observer, sun.ra_hours, sun.dec_degrees)
    ic(sun, hor)
    return SunDirection(azimuth_degrees=hor.azimuth_degrees % 360.0,
                        elevation_degrees=hor.altitude_degrees)



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = DESCRIPTION,
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-t", "--time", help="time (UTC), default now")
    arg.add_argument("-l", "--location", default="mallorca", help="coordinates or named location, default mallorca")

    args = arg.parse_args()

    if args.debug:
        ic.enable()
        ic(sys.version_info, args)
    if args.verbose:
        verbose.set_prog(NAME)
        verbose.enable()

    time = Time(args.time, scale="utc") if args.time else Time.now()
    try:
        observer = get_location(args.location)
        message(f"{time_to_string(time)}  sun {sun_horizontal_position(time, observer)}")
    except (ValueError, EphemerisError) as e:
        error(str(e))



if __name__ == "__main__":
    main()
