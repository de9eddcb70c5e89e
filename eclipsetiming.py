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
#       Eclipse start, max, end and totality times for observer location

VERSION     = "0.1 / 2026-10-14"
AUTHOR      = "Martin Junius"
NAME        = "eclipsetiming"
DESCRIPTION = "Local solar eclipse timing"

import sys
import argparse

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.time import Time
import astropy.units as u

# Local modules
from verbose import verbose, warning, error, message
from eclipseclasses import Observer, EclipseKind, EclipseTiming, EphemerisError, NoEclipseFound
from ephemeris import Ephemeris, get_ephemeris
from astroutils import get_location, location_to_string, time_to_string



def resolve_eclipse_timing(search_start, observer: Observer, ephemeris: Ephemeris=None) -> EclipseTiming:
    """
    Timing of the next solar eclipse visible from observer location

    Parameters
    ----------
    search_start : Time or anything accepted by Time()
        Start date for search
    observer : Observer
        Observer location
    ephemeris : Ephemeris, optional
        Ephemeris, by default get_ephemeris()

    Returns
    -------
    EclipseTiming
        Start, peak, end, totality times, obscuration, kind

    Raises
    ------
    NoEclipseFound
        If the ephemeris search doesn't find an eclipse
    """
    ephemeris = ephemeris or get_ephemeris()
    eclipse = ephemeris.search_local_solar_eclipse(search_start, observer)
    if eclipse is None:
        raise NoEclipseFound(f"no solar eclipse found for {observer} after {search_start}")
    ic(eclipse)

    # Annular phase isn't totality
    totality = eclipse.kind == EclipseKind.TOTAL and eclipse.total_begin and eclipse.total_end
    return EclipseTiming(start_time=eclipse.partial_begin.time,
                         peak_time=eclipse.peak.time,
                         end_time=eclipse.partial_end.time,
                         totality_start_time=eclipse.total_begin.time if totality else None,
                         totality_end_time=eclipse.total_end.time if totality else None,
                         obscuration=eclipse.obscuration,
                         kind=eclipse.kind)



def timing_to_string(timing: EclipseTiming) -> str:
    lines = [ f"{timing.kind} solar eclipse, obscuration {timing.obscuration:.4f}",
              f"C1  {time_to_string(timing.start_time)}" ]
    if timing.has_totality:
        lines.append(f"C2  {time_to_string(timing.totality_start_time)}")
    lines.append(f"MAX {time_to_string(timing.peak_time)}")
    if timing.has_totality:
        lines.append(f"C3  {time_to_string(timing.totality_end_time)}")
    lines.append(f"C4  {time_to_string(timing.end_time)}")
    lines.append(f"duration {timing.duration.to(u.min):.1f}")
    if timing.has_totality:
        lines.append(f"totality {timing.totality_duration.to(u.s):.1f}")
    return "\n".join(lines)



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = DESCRIPTION,
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-t", "--time", help="search start time (UTC), default now")
    arg.add_argument("-l", "--location", default="mallorca", help="coordinates or named location, default mallorca")

    args = arg.parse_args()

    if args.debug:
        ic.enable()
        ic(sys.version_info, args)
    if args.verbose:
        verbose.set_prog(NAME)
        verbose.enable()

    try:
        observer = get_location(args.location)
        message(f"location {location_to_string(observer)}")
        timing = resolve_eclipse_timing(args.time or Time.now(), observer)
    except (ValueError, EphemerisError, NoEclipseFound) as e:
        error(str(e))
    message.print_lines(timing_to_string(timing))



if __name__ == "__main__":
    main()
