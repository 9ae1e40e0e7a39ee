"""Tests for the star render pipeline."""

import math

import numpy as np
import pytest

from parallax.astro.coordinates import horizontal_to_equatorial
from parallax.atmosphere import AtmosphericModel
from parallax.models import OBSERVING_SITES, HorizontalCoord, SpectralClass, Star
from parallax.renderer import (
    build_render_records,
    camera_magnitude_limit,
    magnitude_to_brightness,
    spectral_class_color,
)

LST = 1.0


@pytest.fixture
def observer():
    return OBSERVING_SITES["mcdonald"].location


@pytest.fixture
def pointing():
    return HorizontalCoord.from_degrees(45.0, 120.0)


def star_at(observer, hz, star_id=1, v_magnitude=0.0, color_bv=1.2):
    position = horizontal_to_equatorial(hz, observer, LST)
    return Star(id=star_id, position=position, v_magnitude=v_magnitude, color_bv=color_bv)


class TestBrightness:
    def test_reference_star_is_full(self):
        assert float(magnitude_to_brightness(-1.5)) == pytest.approx(1.0, abs=1e-3)

    def test_zero_magnitude(self):
        assert float(magnitude_to_brightness(0.0)) == pytest.approx(1.0 / 3.98)

    def test_clipped_for_very_bright(self):
        assert float(magnitude_to_brightness(-4.6)) == 1.0

    def test_array_input(self):
        result = magnitude_to_brightness(np.array([0.0, 5.0, 30.0]))
        assert result.shape == (3,)
        assert result[1] == pytest.approx(0.01 / 3.98)
        assert np.all(np.diff(result) < 0)


class TestCameraLimit:
    def test_naked_eye(self):
        assert camera_magnitude_limit(60.0) == pytest.approx(6.5)

    def test_ten_times_narrower(self):
        assert camera_magnitude_limit(6.0) == pytest.approx(11.5)

    def test_capped(self):
        assert camera_magnitude_limit(0.001) == 20.0


class TestColor:
    def test_hot_star_bluer_than_cool_star(self):
        hot = spectral_class_color(SpectralClass.B)
        cool = spectral_class_color(SpectralClass.M)
        assert hot[2] > cool[2]
        assert cool[0] >= cool[2]

    def test_star_color_follows_spectral_class(self, observer, pointing):
        position = horizontal_to_equatorial(pointing, observer, LST)
        m_dwarf = Star(id=1, position=position, v_magnitude=5.0, spectral_class=SpectralClass.M)
        assert m_dwarf.color() == spectral_class_color(SpectralClass.M)

    def test_record_carries_star_color(self, observer, pointing):
        position = horizontal_to_equatorial(pointing, observer, LST)
        b_star = Star(id=1, position=position, v_magnitude=1.0, spectral_class=SpectralClass.B)
        records = build_render_records([b_star], observer, LST, pointing, math.radians(20.0), 6.5)
        assert records[0].rgb == b_star.color()
        assert records[0].rgb[2] > records[0].rgb[0]


class TestBuildRecords:
    def test_star_at_pointing_is_centred(self, observer, pointing):
        records = build_render_records([star_at(observer, pointing)], observer, LST, pointing, math.radians(20.0), 6.5)
        assert len(records) == 1
        assert records[0].x == pytest.approx(0.0, abs=1e-6)
        assert records[0].y == pytest.approx(0.0, abs=1e-6)
        assert records[0].brightness == pytest.approx(1.0 / 3.98)
        assert records[0].color_index == 1.2

    def test_offset_star_lands_right_and_up(self, observer, pointing):
        hz = HorizontalCoord.from_degrees(48.0, 124.0)
        records = build_render_records([star_at(observer, hz)], observer, LST, pointing, math.radians(20.0), 6.5)
        assert records[0].x > 0.0
        assert records[0].y > 0.0

    def test_faint_star_dropped(self, observer, pointing):
        faint = star_at(observer, pointing, v_magnitude=8.0)
        assert build_render_records([faint], observer, LST, pointing, math.radians(20.0), 6.5) == []

    def test_below_horizon_dropped(self, observer):
        low_pointing = HorizontalCoord.from_degrees(2.0, 90.0)
        below = star_at(observer, HorizontalCoord.from_degrees(-1.0, 90.0))
        assert build_render_records([below], observer, LST, low_pointing, math.radians(30.0), 6.5) == []

    def test_off_screen_dropped(self, observer, pointing):
        far = star_at(observer, HorizontalCoord.from_degrees(45.0, 200.0))
        assert build_render_records([far], observer, LST, pointing, math.radians(20.0), 6.5) == []

    def test_input_order_kept(self, observer, pointing):
        stars = [
            star_at(observer, pointing, star_id=1, v_magnitude=3.0),
            star_at(observer, HorizontalCoord.from_degrees(46.0, 121.0), star_id=2, v_magnitude=1.0),
        ]
        records = build_render_records(stars, observer, LST, pointing, math.radians(20.0), 6.5)
        assert records[0].brightness < records[1].brightness

    def test_atmosphere_dims_stars(self, observer, pointing):
        star = star_at(observer, pointing)
        fov = math.radians(20.0)
        clear = build_render_records([star], observer, LST, pointing, fov, 6.5)
        dimmed = build_render_records(
            [star], observer, LST, pointing, fov, 6.5, AtmosphericModel(OBSERVING_SITES["backyard"].conditions)
        )
        assert dimmed[0].brightness < clear[0].brightness
