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
# Version 0.1 / 2026-10-12
#       Dataclasses and exceptions for solar eclipse timing and coverage
# Version 0.2 / 2026-10-15
#       Validation for Observer and EclipseTiming, added SunMoonGeometry

VERSION     = "0.2 / 2026-10-15"
AUTHOR      = "Martin Junius"
NAME        = "eclipseclasses"
DESCRIPTION = "Dataclasses for solar eclipse calculations"

from dataclasses import dataclass
from enum import Enum

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# AstroPy
from astropy.coordinates import EarthLocation
from astropy.time        import Time, TimeDelta
import astropy.units as u



# Exceptions
class EphemerisError(Exception):
    """Ephemeris computation failed (unknown body, time out of range, ...)"""


class NoEclipseFound(Exception):
    """No local solar eclipse found within the search horizon"""



# Enums
class Body(Enum):
    """Bodies known to the ephemeris, values are astropy get_body() names"""
    SUN  = "sun"
    MOON = "moon"


class EclipseKind(Enum):
    """Solar eclipse type"""
    PARTIAL = "partial"
    ANNULAR = "annular"
    TOTAL   = "total"

    def __str__(self):
        return self.value



# Dataclasses
@dataclass(frozen=True)
class Observer:
    """Observer location on Earth"""
    latitude: float             # degrees, -90 .. 90
    longitude: float            # degrees, -180 .. 180
    elevation: float = 0.0      # meters above ellipsoid, >= 0

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude {self.latitude} out of range [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude {self.longitude} out of range [-180, 180]")
        if not self.elevation >= 0.0:
            raise ValueError(f"elevation {self.elevation} must be >= 0")

    @property
    def location(self) -> EarthLocation:
        return EarthLocation.from_geodetic(lon=self.longitude*u.deg, lat=self.latitude*u.deg,
                                           height=self.elevation*u.m)

    def __str__(self):
        return f"lat={self.latitude:.4f} lon={self.longitude:.4f} height={self.elevation:.0f}m"


@dataclass(frozen=True)
class TopocentricPosition:
    """Apparent topocentric equatorial coordinates of date"""
    ra_hours: float             # right ascension, 0 .. 24
    dec_degrees: float          # declination, -90 .. 90
    distance_au: float          # observer-body distance


@dataclass(frozen=True)
class HorizontalPosition:
    """Horizontal coordinates, no refraction"""
    azimuth_degrees: float      # clockwise from north
    altitude_degrees: float


@dataclass(frozen=True)
class SunDirection:
    """Sun direction for camera orientation"""
    azimuth_degrees: float      # 0 .. 360, clockwise from north
    elevation_degrees: float    # -90 .. 90

    def __str__(self):
        return f"Az={self.azimuth_degrees:.3f} Alt={self.elevation_degrees:.3f}"


@dataclass(frozen=True)
class EclipseEvent:
    """Contact time with sun altitude"""
    time: Time
    altitude: float             # sun altitude (degrees) at time


@dataclass(frozen=True)
class LocalSolarEclipse:
    """Local solar eclipse as found by the ephemeris search"""
    kind: EclipseKind
    obscuration: float          # peak obscuration 0 .. 1
    partial_begin: EclipseEvent # C1
    peak: EclipseEvent          # MAX
    partial_end: EclipseEvent   # C4
    total_begin: EclipseEvent = None    # C2, total or annular phase
    total_end: EclipseEvent = None      # C3


@dataclass(frozen=True)
class EclipseTiming:
    """Characteristic times of a local solar eclipse"""
    start_time: Time
    peak_time: Time
    end_time: Time
    obscuration: float
    kind: EclipseKind
    totality_start_time: Time = None
    totality_end_time: Time = None

    def __post_init__(self):
        if (self.totality_start_time is None) != (self.totality_end_time is None):
            raise ValueError("totality start and end time must both be set or both be None")
        if self.has_totality:
            times = [ self.start_time, self.totality_start_time, self.peak_time,
                      self.totality_end_time, self.end_time ]
        else:
            times = [ self.start_time, self.peak_time, self.end_time ]
        for t1, t2 in zip(times[:-1], times[1:]):
            if t1 > t2:
                raise ValueError(f"eclipse times out of order: {t1.isot} > {t2.isot}")
        if not 0.0 <= self.obscuration <= 1.0:
            raise ValueError(f"obscuration {self.obscuration} out of range [0, 1]")

    @property
    def has_totality(self) -> bool:
        return self.totality_start_time is not None

    @property
    def duration(self) -> TimeDelta:
        return self.end_time - self.start_time

    @property
    def totality_duration(self) -> TimeDelta:
        if not self.has_totality:
            return None
        return self.totality_end_time - self.totality_start_time


@dataclass(frozen=True)
class CoverageSample:
    """Single point of the obscuration curve"""
    time: Time
    coverage: float             # 0 .. 1

    def __str__(self):
        return f"{self.time.isot} {self.coverage:.4f}"


@dataclass(frozen=True)
class SunMoonGeometry:
    """Apparent sun/moon disks at one instant, all angles in degrees"""
    separation: float           # center distance
    sun_radius: float
    moon_radius: float
    coverage: float             # obscuration 0 .. 1
    magnitude: float            # fraction of sun diameter covered
    phase: EclipseKind = None   # None = no eclipse

    def __str__(self):
        return (f"separation {self.separation*60:.3f}' sun radius {self.sun_radius*60:.3f}' "
                f"moon radius {self.moon_radius*60:.3f}' coverage {self.coverage:.4f} "
                f"magnitude {self.magnitude:.4f} phase {self.phase or '-'}")
