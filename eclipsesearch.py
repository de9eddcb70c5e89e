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
# Version 0.1 / 2025-10-16
#       Started some solar eclipse related calculations, compute separation
#       and eclipse phase type for location/time, search for contact times
#       in +/- 2h interval around max eclipse
# Version 0.2 / 2025-10-16
#       Use scipy minimize() and root_scalar() to find contact times, faster
# Version 0.3 / 2026-10-13
#       Contact time search moved from eclipse.py to this module, search
#       for the next new moon with a possible eclipse, works for annular
#       eclipses, sun altitude at contact times, minimize_scalar() with
#       offset in hours instead of JD
# Version 0.4 / 2026-10-16
#       Search horizon, skip eclipses with the sun below the horizon

VERSION     = "0.4 / 2026-10-16"
AUTHOR      = "Martin Junius"
NAME        = "eclipsesearch"
DESCRIPTION = "Search for local solar eclipses"

import sys
import argparse
from typing import Tuple, Iterator, Callable

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.coordinates import AltAz, EarthLocation
from astropy.coordinates import get_body
from astropy.time        import Time
import astropy.units as u
import numpy as np

# SciPy
from scipy import optimize

# Local modules
from verbose import verbose, warning, error, message
from jsonconfig import config
from eclipseclasses import Observer, EclipseKind, EclipseEvent, LocalSolarEclipse
from eclipseclasses import EphemerisError, NoEclipseFound
from eclipsegeom import angular_radius, circle_overlap, SUN_RADIUS_KM, MOON_RADIUS_KM, AU_KM


# Earth equatorial radius, GRS 80/WGS 84 value
R_EARTH_KM = 6378.137
# Upper bound of the geocentric sun-moon separation at new moon for any
# solar eclipse: moon parallax + sun radius + moon radius
MAX_ECLIPSE_LIMIT = 1.6         # degrees
# Upper bound of the geocentric relative moon-sun motion
MAX_RELATIVE_SPEED = 0.7        # degrees/hour
# Max distance of a contact from max eclipse
MAX_CONTACT_HOURS = 12



def sun_moon_disks(time: Time, loc: EarthLocation=None, ephemeris: str="builtin") -> Tuple[float, float, float]:
    """
    Separation and apparent radii of sun and moon

    Parameters
    ----------
    time : Time
        Time, scalar or array
    loc : EarthLocation, optional
        Observer location, by default None = geocentric
    ephemeris : str, optional
        Solar system ephemeris, by default "builtin"

    Returns
    -------
    Tuple[float, float, float]
        Separation, sun radius, moon radius (degrees)
    """
    sun  = get_body("sun", time, loc, ephemeris=ephemeris)
    moon = get_body("moon", time, loc, ephemeris=ephemeris)
    sep    = sun.separation(moon).degree
    r_sun  = angular_radius(SUN_RADIUS_KM, sun.distance.to_value(u.au))
    r_moon = angular_radius(MOON_RADIUS_KM, moon.distance.to_value(u.au))
    return sep, r_sun, r_moon


def eclipse_limit(time: Time, ephemeris: str="builtin") -> Tuple[float, float]:
    """
    Geocentric sun-moon separation and max separation for a solar eclipse
    visible anywhere on Earth

    Parameters
    ----------
    time : Time
        Time
    ephemeris : str, optional
        Solar system ephemeris, by default "builtin"

    Returns
    -------
    Tuple[float, float]
        Separation, eclipse limit (degrees)
    """
    sun  = get_body("sun", time, ephemeris=ephemeris)
    moon = get_body("moon", time, ephemeris=ephemeris)
    moon_dist_au = moon.distance.to_value(u.au)
    parallax = np.degrees(np.asin(R_EARTH_KM / (moon_dist_au * AU_KM)))
    limit = (parallax + angular_radius(SUN_RADIUS_KM, sun.distance.to_value(u.au))
                      + angular_radius(MOON_RADIUS_KM, moon_dist_au))
    return sun.separation(moon).degree, limit



def new_moons(t_start: Time, t_end: Time, ephemeris: str="builtin",
              step_hours: float=6.0, chunk_days: float=365.0) -> Iterator[Tuple[Time, float, float]]:
    """
    Search new moons (min geocentric sun-moon separation) which might be
    solar eclipses

    Parameters
    ----------
    t_start : Time
        Start time
    t_end : Time
        End time
    ephemeris : str, optional
        Solar system ephemeris, by default "builtin"
    step_hours : float, optional
        Grid step for the coarse search, by default 6.0
    chunk_days : float, optional
        Interval for vectorized computation, by default 365.0

    Yields
    ------
    Iterator[Tuple[Time, float, float]]
        New moon time, geocentric separation, eclipse limit (degrees)
    """
    # Min separation on grid with larger values can't be an eclipse
    max_grid_sep = np.hypot(MAX_ECLIPSE_LIMIT, MAX_RELATIVE_SPEED * step_hours / 2)

    t0 = t_start
    while t0 < t_end:
        t1 = min(t0 + chunk_days * u.day, t_end)
        n = int(np.ceil((t1 - t0).to_value(u.hour) / step_hours))
        grid = t0 + np.arange(-1, n + 2) * step_hours * u.hour
        sun  = get_body("sun", grid, ephemeris=ephemeris)
        moon = get_body("moon", grid, ephemeris=ephemeris)
        elong = sun.separation(moon).degree
        idx = np.nonzero((elong[1:-1] < elong[:-2]) & (elong[1:-1] <= elong[2:]))[0] + 1
        ic(t0.isot, t1.isot, idx)

        for i in idx:
            if elong[i] > max_grid_sep:
                continue
            t_grid = grid[i]
            sol = optimize.minimize_scalar(lambda h: eclipse_limit(t_grid + h * u.hour, ephemeris)[0],
                                           bounds=(-step_hours, step_hours), method="bounded",
                                           options={"xatol": 1e-3})
            t_nm = t_grid + sol.x * u.hour
            if not t0 <= t_nm < t1:
                continue
            sep, limit = eclipse_limit(t_nm, ephemeris)
            verbose(f"new moon {t_nm.iso} separation {sep:.3f} deg, eclipse limit {limit:.3f} deg")
            yield t_nm, sep, limit

        t0 = t1



def find_contact(func: Callable[[float], float], h_max: float, direction: int, xtol: float) -> float:
    """
    Find contact time as root of func, walking away from max eclipse hour by hour
    until the contact is bracketed

    Parameters
    ----------
    func : Callable[[float], float]
        Contact function, < 0 at h_max
    h_max : float
        Max eclipse (hours)
    direction : int
        -1 = search before max, +1 = search after max
    xtol : float
        Tolerance (hours)

    Returns
    -------
    float
        Contact time (hours)
    """
    h = h_max
    for _ in range(MAX_CONTACT_HOURS):
        h_out = h + direction
        if func(h_out) >= 0:
            a, b = sorted((h, h_out))
            return optimize.brentq(func, a, b, xtol=xtol)
        h = h_out
    raise EphemerisError(f"no contact found within {MAX_CONTACT_HOURS} h of max eclipse")



def local_circumstances(t_nm: Time, loc: EarthLocation, ephemeris: str="builtin",
                        window_hours: float=6.0, tolerance_s: float=0.05) -> LocalSolarEclipse:
    """
    Local circumstances of a solar eclipse near new moon

    Parameters
    ----------
    t_nm : Time
        New moon time
    loc : EarthLocation
        Observer location
    ephemeris : str, optional
        Solar system ephemeris, by default "builtin"
    window_hours : float, optional
        Search window for max eclipse around new moon, by default 6.0
    tolerance_s : float, optional
        Tolerance of contact times (seconds), by default 0.05

    Returns
    -------
    LocalSolarEclipse
        Eclipse, None if no eclipse at location or sun below horizon
    """
    xtol = tolerance_s / 3600

    def disks(h: float) -> Tuple[float, float, float]:
        return sun_moon_disks(t_nm + h * u.hour, loc, ephemeris)

    # min = MAX  root = C1/C4  root = C2/C3 T or A
    def sep(h: float) -> float:
        return disks(h)[0]

    def partial(h: float) -> float:
        s, r_sun, r_moon = disks(h)
        return s - (r_sun + r_moon)

    def central(h: float) -> float:
        s, r_sun, r_moon = disks(h)
        return s - abs(r_sun - r_moon)

    sol_max = optimize.minimize_scalar(sep, bounds=(-window_hours, window_hours), method="bounded",
                                       options={"xatol": xtol})
    h_max = sol_max.x
    s, r_sun, r_moon = disks(h_max)
    ic(sol_max, s, r_sun, r_moon)
    if s >= r_sun + r_moon:
        verbose(f"no eclipse at location, min separation {s:.3f} deg")
        return None

    h_c1 = find_contact(partial, h_max, -1, xtol)
    h_c4 = find_contact(partial, h_max, +1, xtol)
    h_c2 = h_c3 = None
    kind = EclipseKind.PARTIAL
    if s < abs(r_sun - r_moon):
        kind = EclipseKind.TOTAL if r_moon > r_sun else EclipseKind.ANNULAR
        h_c2 = optimize.brentq(central, h_c1, h_max, xtol=xtol)
        h_c3 = optimize.brentq(central, h_max, h_c4, xtol=xtol)
    obscuration = circle_overlap(float(r_sun), float(r_moon), float(s))

    # Sun altitude at all contact times, no refraction
    hours = [ h for h in (h_c1, h_c2, h_max, h_c3, h_c4) if h is not None ]
    times = (t_nm + np.array(hours) * u.hour).utc
    sun_altaz = get_body("sun", times, loc, ephemeris=ephemeris).transform_to(AltAz(obstime=times, location=loc))
    events = [ EclipseEvent(time=t, altitude=float(alt)) for t, alt in zip(times, sun_altaz.alt.degree) ]
    ic(kind, obscuration, events)

    if events[0].altitude <= 0 and events[-1].altitude <= 0:
        verbose(f"{kind} eclipse {events[0].time.iso} - {events[-1].time.iso} not visible, sun below horizon")
        return None

    if kind == EclipseKind.PARTIAL:
        c1, cmax, c4 = events
        c2 = c3 = None
    else:
        c1, c2, cmax, c3, c4 = events
    return LocalSolarEclipse(kind=kind, obscuration=obscuration,
                             partial_begin=c1, peak=cmax, partial_end=c4,
                             total_begin=c2, total_end=c3)



def search_local_solar_eclipse(search_start, observer: Observer, ephemeris: str=None,
                               horizon_years: float=None) -> LocalSolarEclipse:
    """
    Search for the next solar eclipse visible from observer location

    Parameters
    ----------
    search_start : Time or anything accepted by Time()
        Start time for search (UTC)
    observer : Observer
        Observer location
    ephemeris : str, optional
        Solar system ephemeris, by default from config
    horizon_years : float, optional
        Max search interval, by default from config

    Returns
    -------
    LocalSolarEclipse
        Local circumstances of the eclipse

    Raises
    ------
    NoEclipseFound
        If there is no visible eclipse within the search horizon
    """
    ephemeris     = ephemeris or config.get("ephemeris")
    horizon_years = horizon_years or config.get("search", "horizon_years")
    t_start = Time(search_start, scale="utc")
    t_end   = t_start + horizon_years * 365.25 * u.day
    loc     = observer.location
    verbose(f"searching solar eclipse {t_start.iso} - {t_end.iso} for {observer}")

    for t_nm, sep, limit in new_moons(t_start, t_end, ephemeris,
                                      step_hours=config.get("search", "step_hours"),
                                      chunk_days=config.get("search", "chunk_days")):
        if sep > limit:
            continue
        eclipse = local_circumstances(t_nm, loc, ephemeris,
                                      window_hours=config.get("search", "peak_window_hours"),
                                      tolerance_s=config.get("search", "contact_tolerance_s"))
        if eclipse:
            return eclipse

    raise NoEclipseFound(f"no solar eclipse visible from {observer} within {horizon_years} years after {t_start.iso}")



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = DESCRIPTION,
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-t", "--time", help="search start time (UTC), default now")
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

    try:
        observer = Observer(latitude=args.lat, longitude=args.lon)
        eclipse = search_local_solar_eclipse(args.time or Time.now(), observer, args.ephemeris)
    except (ValueError, EphemerisError, NoEclipseFound) as e:
        error(str(e))

    message(f"{eclipse.kind} eclipse, obscuration {eclipse.obscuration:.4f}")
    for label, event in (("C1", eclipse.partial_begin), ("C2", eclipse.total_begin), ("MAX", eclipse.peak),
                         ("C3", eclipse.total_end), ("C4", eclipse.partial_end)):
        if event:
            message(f"{label:3s} {event.time.iso}  sun alt {event.altitude:6.2f} deg")



if __name__ == "__main__":
    main()
