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
# Version 0.1 / 2026-10-12
#       Sun/moon disk geometry moved from eclipse.py to this module,
#       separation, angular radius, circle overlap (obscuration)
# Version 0.2 / 2026-10-14
#       Phase type fixed for annular eclipses, added magnitude

VERSION     = "0.2 / 2026-10-14"
AUTHOR      = "Martin Junius"
NAME        = "eclipsegeom"
DESCRIPTION = "Sun and moon disk geometry"

import sys
import argparse

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

import numpy as np

# Local modules
from verbose import verbose, warning, error, message
from eclipseclasses import EclipseKind


# 1 au in km, IAU 2012
AU_KM = 149597870.7
# Sun and moon radius in km
SUN_RADIUS_KM  = 696340.0
MOON_RADIUS_KM = 1737.4



def angular_separation(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
    """
    Angular separation of two points on the sphere, spherical law of cosines

    Parameters
    ----------
    ra1, dec1 : float
        RA (hours) and DEC (degrees) of 1st point
    ra2, dec2 : float
        RA (hours) and DEC (degrees) of 2nd point

    Returns
    -------
    float
        Separation in degrees
    """
    ra1  = np.radians(np.asarray(ra1) * 15)
    ra2  = np.radians(np.asarray(ra2) * 15)
    dec1 = np.radians(dec1)
    dec2 = np.radians(dec2)
    cos_sep = np.sin(dec1) * np.sin(dec2) + np.cos(dec1) * np.cos(dec2) * np.cos(ra1 - ra2)
    return np.degrees(np.acos(np.clip(cos_sep, -1, 1)))


def angular_radius(radius_km: float, distance_au: float) -> float:
    """
    Apparent angular radius of a sphere

    Parameters
    ----------
    radius_km : float
        Radius in km
    distance_au : float
        Distance in au

    Returns
    -------
    float
        Angular radius in degrees
    """
    return np.degrees(np.asin(np.clip(radius_km / (np.asarray(distance_au) * AU_KM), -1, 1)))



def circle_overlap(r1: float, r2: float, d: float) -> float:
    """
    Fraction of circle 1 (sun) covered by circle 2 (moon)

    Parameters
    ----------
    r1 : float
        Radius of circle 1
    r2 : float
        Radius of circle 2
    d : float
        Distance of circle centers, same unit as radii

    Returns
    -------
    float
        Covered fraction of circle 1 area, 0 .. 1
    """
    # Degenerate disks never cover or get covered
    if r1 <= 0 or r2 <= 0:
        return 0.0
    # Disjoint
    if d >= r1 + r2:
        return 0.0
    # One inside the other
    if d <= abs(r1 - r2):
        if r2 >= r1:
            return 1.0
        return float((r2 / r1)**2)

    # Lens-shaped intersection, d1/d2 = distance of centers from the chord
    r1_sq = r1 * r1
    r2_sq = r2 * r2
    d1 = (r1_sq - r2_sq + d * d) / (2 * d)
    d2 = d - d1
    area = (r1_sq * np.acos(np.clip(d1 / r1, -1, 1)) - d1 * np.sqrt(max(r1_sq - d1 * d1, 0.0))
          + r2_sq * np.acos(np.clip(d2 / r2, -1, 1)) - d2 * np.sqrt(max(r2_sq - d2 * d2, 0.0)))
    coverage = min(1.0, area / (np.pi * r1_sq))
    ic(r1, r2, d, d1, d2, area, coverage)
    return float(np.clip(coverage, 0.0, 1.0))



def eclipse_magnitude(r_sun: float, r_moon: float, sep: float) -> float:
    """
    Eclipse magnitude, fraction of the sun's diameter covered by the moon

    :param r_sun: sun radius
    :type r_sun: float
    :param r_moon: moon radius
    :type r_moon: float
    :param sep: separation
    :type sep: float
    :return: magnitude, 0 outside eclipse
    :rtype: float
    """
    if r_sun <= 0:
        return 0.0
    return float(max((r_sun + r_moon - sep) / (2 * r_sun), 0.0))


def eclipse_phase(r_sun: float, r_moon: float, sep: float) -> EclipseKind:
    """
    Eclipse phase at a single instant

    :param r_sun: sun radius
    :type r_sun: float
    :param r_moon: moon radius
    :type r_moon: float
    :param sep: separation
    :type sep: float
    :return: phase, None if no eclipse
    :rtype: EclipseKind
    """
    if sep >= r_sun + r_moon:
        return None
    if sep <= abs(r_sun - r_moon):
        return EclipseKind.TOTAL if r_moon >= r_sun else EclipseKind.ANNULAR
    return EclipseKind.PARTIAL



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = DESCRIPTION,
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("r_sun", type=float, help="sun radius (arcmin)")
    arg.add_argument("r_moon", type=float, help="moon radius (arcmin)")
    arg.add_argument("sep", type=float, help="separation (arcmin)")

    args = arg.parse_args()

    if args.debug:
        ic.enable()
        ic(sys.version_info, args)
    if args.verbose:
        verbose.set_prog(NAME)
        verbose.enable()

    coverage  = circle_overlap(args.r_sun, args.r_moon, args.sep)
    magnitude = eclipse_magnitude(args.r_sun, args.r_moon, args.sep)
    phase     = eclipse_phase(args.r_sun, args.r_moon, args.sep)
    message(f"coverage {coverage:.4f} magnitude {magnitude:.4f} phase {phase or '-'}")



if __name__ == "__main__":
    main()
