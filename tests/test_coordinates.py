"""Tests for equatorial, horizontal and screen coordinate transforms."""

import math

import pytest

from parallax.astro.coordinates import (
    angular_separation,
    equatorial_to_horizontal,
    hour_angle,
    horizontal_to_equatorial,
    horizontal_to_screen,
)
from parallax.models import EquatorialCoord, HorizontalCoord, ObserverLocation

ARCSEC = math.radians(1.0 / 3600.0)


@pytest.fixture
def mid_latitude_observer():
    return ObserverLocation.from_degrees(30.6717, -104.0217)


class TestModels:
    """Coordinate value types."""

    def test_ra_normalized(self):
        eq = EquatorialCoord(ra=-0.1, dec=0.0)
        assert 0.0 <= eq.ra < 2.0 * math.pi
        assert eq.ra == pytest.approx(2.0 * math.pi - 0.1)

    def test_tiny_negative_ra_stays_below_two_pi(self):
        eq = EquatorialCoord(ra=-1e-18, dec=0.0)
        assert 0.0 <= eq.ra < 2.0 * math.pi

    def test_dec_clamped(self):
        eq = EquatorialCoord.from_degrees(10.0, 95.0)
        assert eq.dec == pytest.approx(math.pi / 2.0)

    def test_degree_round_trip(self):
        eq = EquatorialCoord.from_degrees(88.793, 7.407)
        assert eq.ra_deg == pytest.approx(88.793)
        assert eq.dec_deg == pytest.approx(7.407)


class TestEquatorialToHorizontal:
    """RA/Dec to Alt/Az."""

    def test_star_on_meridian_at_zenith(self, mid_latitude_observer):
        """Dec equal to latitude with zero hour angle is the zenith."""
        eq = EquatorialCoord(ra=1.0, dec=mid_latitude_observer.latitude)
        hz = equatorial_to_horizontal(eq, mid_latitude_observer, 1.0)
        assert hz.alt_deg == pytest.approx(90.0, abs=1e-6)

    def test_pole_altitude_equals_latitude(self, mid_latitude_observer):
        pole = EquatorialCoord.from_degrees(0.0, 90.0)
        for lst in (0.0, 1.5, 3.0, 5.5):
            hz = equatorial_to_horizontal(pole, mid_latitude_observer, lst)
            assert hz.alt_deg == pytest.approx(30.6717, abs=1e-6)
            assert min(hz.az_deg, 360.0 - hz.az_deg) == pytest.approx(0.0, abs=1e-6)

    def test_rising_equatorial_star_is_due_east(self):
        """On the equator, a Dec 0 star six hours before transit rises due east."""
        observer = ObserverLocation.from_degrees(0.0, 0.0)
        eq = EquatorialCoord(ra=math.pi / 2.0, dec=0.0)
        hz = equatorial_to_horizontal(eq, observer, 0.0)
        assert hz.alt_deg == pytest.approx(0.0, abs=1e-9)
        assert hz.az_deg == pytest.approx(90.0, abs=1e-9)

    def test_setting_star_is_west(self):
        observer = ObserverLocation.from_degrees(0.0, 0.0)
        eq = EquatorialCoord(ra=0.0, dec=0.0)
        hz = equatorial_to_horizontal(eq, observer, math.pi / 2.0)
        assert hz.az_deg == pytest.approx(270.0, abs=1e-9)

    def test_azimuth_range(self, mid_latitude_observer):
        for i in range(24):
            eq = EquatorialCoord(ra=i * 0.26, dec=math.radians(-40.0 + i * 3.0))
            hz = equatorial_to_horizontal(eq, mid_latitude_observer, 2.0)
            assert 0.0 <= hz.az < 2.0 * math.pi
            assert -math.pi / 2.0 <= hz.alt <= math.pi / 2.0

    def test_hour_angle_normalized(self):
        assert hour_angle(0.5, 1.0) == pytest.approx(2.0 * math.pi - 0.5)


class TestHorizontalToEquatorial:
    """Inverse transform."""

    @pytest.mark.parametrize("ra_deg", [0.0, 45.0, 133.0, 270.0, 359.5])
    @pytest.mark.parametrize("dec_deg", [-25.0, 0.0, 7.407, 60.0, 85.0])
    def test_round_trip_above_minus_ten_degrees(self, mid_latitude_observer, ra_deg, dec_deg):
        lst = 2.2
        eq = EquatorialCoord.from_degrees(ra_deg, dec_deg)
        hz = equatorial_to_horizontal(eq, mid_latitude_observer, lst)
        if hz.alt_deg < -10.0:
            pytest.skip("below the documented round-trip range")

        back = horizontal_to_equatorial(hz, mid_latitude_observer, lst)
        assert angular_separation(eq, back) < 10.0 * ARCSEC


class TestScreenProjection:
    """Gnomonic projection onto the normalized screen."""

    def test_pointing_centre_projects_to_origin(self):
        pointing = HorizontalCoord.from_degrees(45.0, 120.0)
        x, y = horizontal_to_screen(pointing, pointing, math.radians(30.0))
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(0.0, abs=1e-12)

    def test_east_of_centre_is_positive_x(self):
        pointing = HorizontalCoord.from_degrees(0.0, 90.0)
        star = HorizontalCoord.from_degrees(0.0, 95.0)
        x, y = horizontal_to_screen(star, pointing, math.radians(30.0))
        assert x > 0.0
        assert y == pytest.approx(0.0, abs=1e-12)

    def test_above_centre_is_positive_y(self):
        pointing = HorizontalCoord.from_degrees(30.0, 180.0)
        star = HorizontalCoord.from_degrees(35.0, 180.0)
        x, y = horizontal_to_screen(star, pointing, math.radians(30.0))
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y > 0.0

    def test_half_fov_maps_to_edge(self):
        fov = math.radians(20.0)
        pointing = HorizontalCoord.from_degrees(0.0, 180.0)
        star = HorizontalCoord.from_degrees(0.0, 189.999)
        x, _ = horizontal_to_screen(star, pointing, fov)
        assert x == pytest.approx(1.0, abs=1e-3)

    def test_outside_margin_is_none(self):
        pointing = HorizontalCoord.from_degrees(45.0, 0.0)
        star = HorizontalCoord.from_degrees(45.0, 90.0)
        assert horizontal_to_screen(star, pointing, math.radians(20.0)) is None

    def test_behind_observer_is_none(self):
        """Opposite direction is rejected even with a huge FOV."""
        pointing = HorizontalCoord.from_degrees(10.0, 0.0)
        star = HorizontalCoord.from_degrees(10.0, 180.0)
        assert horizontal_to_screen(star, pointing, math.radians(170.0)) is None

    def test_corner_beyond_unit_square_is_none(self):
        """Within the margin cone but past the screen corner."""
        fov = math.radians(20.0)
        pointing = HorizontalCoord.from_degrees(0.0, 180.0)
        star = HorizontalCoord.from_degrees(9.9, 190.5)
        assert horizontal_to_screen(star, pointing, fov) is None


class TestAngularSeparation:
    def test_poles(self):
        north = EquatorialCoord.from_degrees(0.0, 90.0)
        south = EquatorialCoord.from_degrees(0.0, -90.0)
        assert angular_separation(north, south) == pytest.approx(math.pi)

    def test_ra_wrap(self):
        a = EquatorialCoord.from_degrees(359.5, 0.0)
        b = EquatorialCoord.from_degrees(0.5, 0.0)
        assert math.degrees(angular_separation(a, b)) == pytest.approx(1.0)
