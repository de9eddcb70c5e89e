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
# Version 0.1 / 2026-10-13
#       Ephemeris interface for sun/moon positions and eclipse search,
#       implementation with astropy
# Version 0.2 / 2026-10-15
#       Horizontal coordinates from apparent sidereal time, astropy errors
#       are raised as EphemerisError

VERSION     = "0.2 / 2026-10-15"
AUTHOR      = "Martin Junius"
NAME        = "ephemeris"
DESCRIPTION = "Sun/moon ephemeris for eclipse calculations"

import sys
import argparse
from typing import Protocol

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.coordinates import TETE
from astropy.coordinates import get_body
from astropy.time        import Time
from astropy.utils       import iers
import astropy.units as u
import numpy as np

# Local modules
from verbose import verbose, warning, error, message
from jsonconfig import config
from eclipseclasses import Body, Observer, TopocentricPosition, HorizontalPosition, LocalSolarEclipse
from eclipseclasses import EphemerisError
from eclipsesearch import search_local_solar_eclipse



class Ephemeris(Protocol):
    """
    Interface of the ephemeris used by the eclipse calculations
    """

    def equatorial_position(self, body: Body, time: Time, observer: Observer) -> TopocentricPosition:
        """Apparent topocentric RA/DEC of date and distance of body"""
        ...

    def horizontal_position(self, time: Time, observer: Observer,
                            ra_hours: float, dec_degrees: float) -> HorizontalPosition:
        """Convert RA/DEC of date to Az/Alt, no refraction"""
        ...

    def search_local_solar_eclipse(self, search_start: Time, observer: Observer) -> LocalSolarEclipse:
        """Next solar eclipse visible at observer location, raises NoEclipseFound"""
        ...



class AstropyEphemeris:
    """
    Ephemeris implementation using astropy get_body()
    """

    def __init__(self, ephemeris: str=None):
        """
        Create ephemeris object, applies IERS settings from config

        :param ephemeris: solar system ephemeris, "builtin", "de440", ..., defaults to config
        :type ephemeris: str, optional
        """
        self.ephemeris = ephemeris or config.get("ephemeris")
        iers.conf.auto_download = config.get("iers", "auto_download")
        iers.conf.iers_degraded_accuracy = config.get("iers", "degraded_accuracy")
        verbose(f"using {self.ephemeris} ephemeris")


    def equatorial_position(self, body: Body, time: Time, observer: Observer) -> TopocentricPosition:
        try:
            body = Body(body)
            time = Time(time, scale="utc")
            loc  = observer.location
            # get_body() includes light travel time, GCRS includes aberration
            coord = get_body(body.value, time, loc, ephemeris=self.ephemeris)
            tete  = coord.transform_to(TETE(obstime=time, location=loc))
        except (ValueError, KeyError, IndexError) as e:
            raise EphemerisError(f"{body} position at {time} failed: {e}") from e
        ic(body, time, tete)
        return TopocentricPosition(ra_hours=float(tete.ra.hour),
                                   dec_degrees=float(tete.dec.degree),
                                   distance_au=float(tete.distance.to_value(u.au)))


    def horizontal_position(self, time: Time, observer: Observer,
                            ra_hours: float, dec_degrees: float) -> HorizontalPosition:
        try:
            time = Time(time, scale="utc")
            lst  = time.sidereal_time("apparent", longitude=observer.longitude*u.deg)
        except (ValueError, IndexError) as e:
            raise EphemerisError(f"sidereal time at {time} failed: {e}") from e

        # Hour angle
        ha  = np.radians(lst.hour * 15 - ra_hours * 15)
        dec = np.radians(dec_degrees)
        lat = np.radians(observer.latitude)
        alt = np.asin(np.clip(np.sin(lat) * np.sin(dec) + np.cos(lat) * np.cos(dec) * np.cos(ha), -1, 1))
        # Azimuth clockwise from north
        az  = np.arctan2(-np.cos(dec) * np.sin(ha),
                         np.sin(dec) * np.cos(lat) - np.cos(dec) * np.sin(lat) * np.cos(ha))
        ic(lst, ha, alt, az)
        return HorizontalPosition(azimuth_degrees=float(np.degrees(az) % 360.0),
                                  altitude_degrees=float(np.degrees(alt)))


    def search_local_solar_eclipse(self, search_start: Time, observer: Observer) -> LocalSolarEclipse:
        try:
            return search_local_solar_eclipse(search_start, observer, self.ephemeris)
        except (ValueError, KeyError, IndexError) as e:
            raise EphemerisError(f"eclipse search from {search_start} failed: {e}") from e



# Default ephemeris object, stateless
_default_ephemeris = None

def get_ephemeris() -> Ephemeris:
    """
    Get default ephemeris object

    :return: ephemeris
    :rtype: Ephemeris
    """
    global _default_ephemeris
    if _default_ephemeris is None:
        _default_ephemeris = AstropyEphemeris()
    return _default_ephemeris



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = DESCRIPTION,
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-t", "--time", help="time (UTC), default now")
    arg.add_argument("-e", "--ephemeris", help="use EPHEMERIS, default from config")
    arg.add_argument("lon", type=float, help="longitude (deg)")
    arg.add_argument("lat", type=float, help="latitude (deg)")

    args = arg.parse_args()

    if args.debug:
        ic.enable()
        ic(sys.version_info, args)
    if args.verbose:
        verbose.set_prog(NAME)
        verbose.enable()

    ephem = AstropyEphemeris(args.ephemeris)
    time = Time(args.time) if args.time else Time.now()
    try:
        observer = Observer(latitude=args.lat, longitude=args.lon)
        for body in Body:
            pos = ephem.equatorial_position(body, time, observer)
            hor = ephem.horizontal_position(time, observer, pos.ra_hours, pos.dec_degrees)
            message(f"{body.value:4s} RA={pos.ra_hours:.5f}h DEC={pos.dec_degrees:.4f} dist={pos.distance_au:.6f}au"
                    f"  Az={hor.azimuth_degrees:.3f} Alt={hor.altitude_degrees:.3f}")
    except (ValueError, EphemerisError) as e:
        error(str(e))



if __name__ == "__main__":
    main()
