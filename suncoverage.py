#!/usr/bin/env python

# Copyright 2025-2026 Martin Junius
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
#       Sun coverage by the moon for location/time, based on sun_moon()
#       from eclipse.py
# Version 0.2 / 2026-10-16
#       Coverage samples for caller supplied times
# Version 0.3 / 2026-10-19
#       Renamed to suncoverage, avoids clash with coverage.py

VERSION     = "0.3 / 2026-10-19"
AUTHOR      = "Martin Junius"
NAME        = "suncoverage"
DESCRIPTION = "Fraction of the sun covered by the moon"

import sys
import argparse
from typing import Iterable, List

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.time import Time
import numpy as np

# Local modules
from verbose import verbose, warning, error, message
from eclipseclasses import Body, Observer, CoverageSample, SunMoonGeometry, EphemerisError
from eclipsegeom import angular_separation, angular_radius, circle_overlap, eclipse_magnitude, eclipse_phase
from eclipsegeom import SUN_RADIUS_KM, MOON_RADIUS_KM
from ephemeris import Ephemeris, get_ephemeris
from astroutils import get_location, time_to_string



def sun_moon_geometry(time: Time, observer: Observer, ephemeris: Ephemeris=None) -> SunMoonGeometry:
    """
    Apparent sun and moon disks for observer location and time

    Parameters
    ----------
    time : Time
        Time of observation
    observer : Observer
        Observer location
    ephemeris : Ephemeris, optional
        Ephemeris, by default get_ephemeris()

    Returns
    -------
    SunMoonGeometry
        Separation, radii, coverage, magnitude, phase
    """
    ephemeris = ephemeris or get_ephemeris()
    sun  = ephemeris.equatorial_position(Body.SUN, time, observer)
    moon = ephemeris.equatorial_position(Body.MOON, time, observer)

    sep    = float(angular_separation(sun.ra_hours, sun.dec_degrees, moon.ra_hours, moon.dec_degrees))
    r_sun  = float(angular_radius(SUN_RADIUS_KM, sun.distance_au))
    r_moon = float(angular_radius(MOON_RADIUS_KM, moon.distance_au))
    ic(sun, moon, sep, r_sun, r_moon)

    return SunMoonGeometry(separation=sep, sun_radius=r_sun, moon_radius=r_moon,
                           coverage=circle_overlap(r_sun, r_moon, sep),
                           magnitude=eclipse_magnitude(r_sun, r_moon, sep),
                           phase=eclipse_phase(r_sun, r_moon, sep))


def compute_coverage(time: Time, observer: Observer, ephemeris: Ephemeris=None) -> float:
    """
    Fraction of the sun's disk area covered by the moon

    Parameters
    ----------
    time : Time
        Time of observation
    observer : Observer
        Observer location
    ephemeris : Ephemeris, optional
        Ephemeris, by default get_ephemeris()

    Returns
    -------
    float
        Coverage 0 .. 1
    """
    return sun_moon_geometry(time, observer, ephemeris).coverage



def sample_times(start: Time, end: Time, samples: int) -> Time:
    """
    Uniformly spaced times from start to end, both included

    :param start: start time
    :type start: Time
    :param end: end time
    :type end: Time
    :param samples: number of samples, >= 2
    :type samples: int
    :return: array of times
    :rtype: Time
    """
    if samples < 2:
        raise ValueError(f"number of samples {samples} must be >= 2")
    start = Time(start, scale="utc")
    end   = Time(end, scale="utc")
    return start + (end - start) * np.linspace(0, 1, samples)


def coverage_samples(times: Iterable[Time], observer: Observer, ephemeris: Ephemeris=None) -> List[CoverageSample]:
    """
    Coverage for caller supplied times

    :param times: times
    :type times: Iterable[Time]
    :param observer: observer location
    :type observer: Observer
    :param ephemeris: ephemeris, defaults to get_ephemeris()
    :type ephemeris: Ephemeris, optional
    :return: coverage samples
    :rtype: List[CoverageSample]
    """
    ephemeris = ephemeris or get_ephemeris()
    return [ CoverageSample(time=t, coverage=compute_coverage(t, observer, ephemeris)) for t in times ]


def max_coverage(samples: Iterable[CoverageSample]) -> float:
    return max((s.coverage for s in samples), default=0.0)



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = DESCRIPTION,
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-l", "--location", default="mallorca", help="coordinates or named location, default mallorca")
    arg.add_argument("time", nargs="+", help="time(s) (UTC)")

    args = arg.parse_args()

    if args.debug:
        ic.enable()
        ic(sys.version_info, args)
    if args.verbose:
        verbose.set_prog(NAME)
        verbose.enable()

    try:
        observer = get_location(args.location)
        for t in args.time:
            time = Time(t, scale="utc")
            message(f"{time_to_string(time)}  {sun_moon_geometry(time, observer)}")
    except (ValueError, EphemerisError) as e:
        error(str(e))



if __name__ == "__main__":
    main()
