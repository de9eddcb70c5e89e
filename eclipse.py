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
# Version 0.1 / 2025-10-16
#       Started some solar eclipse related calculations, compute separation
#       and eclipse phase type for location/time, search for contact times
#       in +/- 2h interval around max eclipse
# Version 0.2 / 2025-10-16
#       Use scipy minimize() and root_scalar() to find contact times, faster
# Version 0.3 / 2026-10-16
#       Calculations moved to modules eclipsesearch, coverage, eclipsetiming,
#       sunposition, this is now the command line frontend, search for next
#       eclipse from time, coverage at time, coverage curve as CSV
# Version 0.4 / 2026-10-17
#       Test case TSE 2026 Mallorca replaces Burgos

VERSION = "0.4 / 2026-10-17"
AUTHOR  = "Martin Junius"
NAME    = "eclipse"

import sys
import argparse
from typing import Tuple

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.time import Time

# Local modules
from verbose import verbose, warning, error, message
from jsonconfig import config
from eclipseclasses import Observer, EphemerisError, NoEclipseFound
from ephemeris import AstropyEphemeris
from suncoverage import sun_moon_geometry, sample_times, coverage_samples, max_coverage
from eclipsetiming import resolve_eclipse_timing, timing_to_string
from sunposition import sun_horizontal_position
from astroutils import get_location, location_to_string, time_to_string
from csvoutput import CSVOutput, COVERAGE_FIELDS



# Command line options
class Options:
    observer: Observer = None       # -l --location
    samples: int = None             # -n --samples
    csv: str = None                 # -o --csv



def test_tse2026() -> Tuple[Observer, Time]:
    """
    Get location and search start time for test case: solar eclipse 12 Aug 2026, Mallorca

    Returns
    -------
    Tuple[Observer, Time]
        Location and search start time
    """
    # Test case TSE 2026 @ Mallorca, Spain
    #
    # 39.6953° N  3.0176° E
    #
    # Maximum eclipse (MAX) : 2026/08/12 18:31:49 UTC
    observer = Observer(latitude=39.6953, longitude=3.0176)
    time = Time("2026-08-12T00:00:00", scale="utc")
    ic(observer, time)
    return observer, time



def eclipse_report(search_start: Time, ephem: AstropyEphemeris) -> None:
    """
    Search next eclipse and output timing, optionally coverage curve

    :param search_start: start time for search
    :type search_start: Time
    :param ephem: ephemeris
    :type ephem: AstropyEphemeris
    """
    observer = Options.observer
    verbose("searching next solar eclipse ... (takes some time)")
    timing = resolve_eclipse_timing(search_start, observer, ephem)
    message.print_lines(timing_to_string(timing))

    sun = sun_horizontal_position(timing.peak_time, observer, ephem)
    message(f"sun at MAX {sun}")

    if Options.csv:
        times = sample_times(timing.start_time, timing.end_time, Options.samples)
        samples = coverage_samples(times, observer, ephem)
        verbose(f"coverage curve {len(samples)} samples, max {max_coverage(samples):.4f}")
        csv_output = CSVOutput(fields=COVERAGE_FIELDS)
        csv_output.add_samples(samples)
        csv_output.write(Options.csv)


def coverage_report(time: Time, ephem: AstropyEphemeris) -> None:
    """
    Output sun/moon geometry and sun position at time

    :param time: time of observation
    :type time: Time
    :param ephem: ephemeris
    :type ephem: AstropyEphemeris
    """
    observer = Options.observer
    geometry = sun_moon_geometry(time, observer, ephem)
    sun = sun_horizontal_position(time, observer, ephem)
    message(f"time {time_to_string(time)}")
    message(geometry)
    message(f"sun {sun}")



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = "Solar eclipse timing and coverage",
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-t", "--time", help="search start time (UTC), default now")
    arg.add_argument("-l", "--location", help="coordinates \"LON LAT [HEIGHT]\" or named location")
    arg.add_argument("-e", "--ephemeris", help="use EPHEMERIS, default from config")
    arg.add_argument("-c", "--coverage", metavar="TIME", help="coverage and sun position at TIME (UTC)")
    arg.add_argument("-n", "--samples", type=int, help="number of coverage curve samples, default from config")
    arg.add_argument("-o", "--csv", help="write coverage curve to CSV file, \"-\" for stdout")
    arg.add_argument("-C", "--config", help="read CONFIG file")
    arg.add_argument("--tse2026", action="store_true", help="test case TSE 12 Aug 2026, Mallorca")

    args = arg.parse_args()

    if args.debug:
        ic.enable()
        ic(sys.version_info)
        ic(args)
    if args.verbose:
        verbose.set_prog(NAME)
        verbose.enable()

    try:
        if args.config:
            config.read_config(args.config)
        config.info()

        # Location and time
        observer = None
        time = None
        if args.tse2026:
            observer, time = test_tse2026()
        if args.location:
            observer = get_location(args.location)
        if observer is None:
            error("no location specified")
        Options.observer = observer
        Options.samples  = args.samples or config.get("coverage", "samples")
        Options.csv      = args.csv
        message(f"location {location_to_string(observer)}")

        if args.time:
            time = Time(args.time, scale="utc")
        elif time is None:
            time = Time.now()

        ephem = AstropyEphemeris(args.ephemeris)

        if args.coverage:
            coverage_report(Time(args.coverage, scale="utc"), ephem)
        else:
            eclipse_report(time, ephem)
    except (FileNotFoundError, ValueError, EphemerisError, NoEclipseFound) as e:
        error(str(e))



if __name__ == "__main__":
    main()
