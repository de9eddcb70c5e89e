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

"""Tests for sun/moon disk geometry."""

import math

import numpy as np
import pytest

from eclipseclasses import EclipseKind
from eclipsegeom import (
    angular_radius,
    angular_separation,
    circle_overlap,
    eclipse_magnitude,
    eclipse_phase,
    AU_KM,
    SUN_RADIUS_KM,
)


class TestAngularSeparation:

    def test_along_equator(self):
        assert angular_separation(0.0, 0.0, 1.0, 0.0) == pytest.approx(15.0)

    def test_to_pole(self):
        assert angular_separation(3.0, 0.0, 17.0, 90.0) == pytest.approx(90.0)

    def test_same_point_no_nan(self):
        """Rounding of cos(sep) slightly above 1 is clamped."""
        sep = angular_separation(5.123456, 23.4567, 5.123456, 23.4567)
        assert not math.isnan(sep)
        assert sep == pytest.approx(0.0, abs=1e-5)

    def test_wrap_at_24h(self):
        assert angular_separation(23.99, 0.0, 0.01, 0.0) == pytest.approx(0.3)

    def test_arrays(self):
        sep = angular_separation(np.array([0.0, 0.0]), 0.0, np.array([1.0, 2.0]), 0.0)
        assert sep == pytest.approx([15.0, 30.0])


class TestAngularRadius:

    def test_sun_at_1_au(self):
        assert angular_radius(SUN_RADIUS_KM, 1.0) == pytest.approx(0.26670, abs=1e-4)

    def test_moon_mean_distance(self):
        assert angular_radius(1737.4, 384400.0 / AU_KM) == pytest.approx(0.25897, abs=1e-4)

    def test_inside_sphere_clamped(self):
        assert angular_radius(SUN_RADIUS_KM, SUN_RADIUS_KM / AU_KM / 2) == pytest.approx(90.0)


class TestCircleOverlap:

    def test_concentric_equal(self):
        assert circle_overlap(1.0, 1.0, 0.0) == 1.0

    def test_disjoint(self):
        assert circle_overlap(1.0, 1.0, 2.0) == 0.0
        assert circle_overlap(0.27, 0.26, 5.0) == 0.0

    def test_moon_larger_covers_sun(self):
        assert circle_overlap(0.2667, 0.2773, 0.005) == 1.0

    def test_moon_inside_sun(self):
        assert circle_overlap(1.0, 0.5, 0.2) == pytest.approx(0.25)

    def test_lens(self):
        # Two unit circles at distance 1: (2*pi/3 - sqrt(3)/2) / pi
        assert circle_overlap(1.0, 1.0, 1.0) == pytest.approx(0.3910022, abs=1e-6)

    def test_lens_limits_continuous(self):
        r1, r2 = 0.2667, 0.2773
        assert circle_overlap(r1, r2, (r1 + r2) * (1 - 1e-9)) == pytest.approx(0.0, abs=1e-6)
        assert circle_overlap(r1, r2, (r2 - r1) * (1 + 1e-9)) == pytest.approx(1.0, abs=1e-6)

    def test_degenerate_radius(self):
        assert circle_overlap(0.0, 1.0, 0.5) == 0.0
        assert circle_overlap(1.0, -1.0, 0.5) == 0.0

    @pytest.mark.parametrize("d", np.linspace(0.0, 0.6, 61))
    def test_range(self, d):
        assert 0.0 <= circle_overlap(0.2667, 0.2500, d) <= 1.0

    def test_decreasing_with_distance(self):
        values = [ circle_overlap(0.2667, 0.2773, d) for d in np.linspace(0.0, 0.6, 61) ]
        assert all(a >= b for a, b in zip(values[:-1], values[1:]))


class TestMagnitudeAndPhase:

    def test_magnitude_central(self):
        assert eclipse_magnitude(0.25, 0.26, 0.0) == pytest.approx(1.02)

    def test_magnitude_outside(self):
        assert eclipse_magnitude(0.25, 0.26, 1.0) == 0.0

    def test_phase(self):
        assert eclipse_phase(0.2667, 0.2773, 1.0) is None
        assert eclipse_phase(0.2667, 0.2773, 0.3) == EclipseKind.PARTIAL
        assert eclipse_phase(0.2667, 0.2773, 0.001) == EclipseKind.TOTAL
        assert eclipse_phase(0.2667, 0.2500, 0.001) == EclipseKind.ANNULAR
