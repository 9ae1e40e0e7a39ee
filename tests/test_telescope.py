"""Tests for the telescope and detector model."""

import math

import pytest

from parallax.errors import TelescopeNotFoundError
from parallax.optics import (
    TELESCOPES,
    Detector,
    Telescope,
    get_telescope,
    make_1m_reflector,
    make_refractor_100mm,
    make_sct_8inch,
)


@pytest.fixture
def reflector():
    return make_1m_reflector()


class TestPresets:
    def test_reflector_specs(self, reflector):
        assert reflector.aperture_mm == 1000.0
        assert reflector.focal_length_mm == 8000.0
        assert reflector.central_obstruction == 0.20
        assert reflector.detector.pixel_width == 4096
        assert reflector.detector.quantum_efficiency == 0.95

    def test_sct_specs(self):
        sct = make_sct_8inch()
        assert sct.aperture_mm == 203.2
        assert sct.detector.bit_depth == 12
        assert sct.detector.pixel_height == 2080

    def test_refractor_defaults(self):
        scope = make_refractor_100mm()
        assert scope.aperture_mm == 100.0
        assert scope.detector == Detector()

    def test_registry(self):
        assert set(TELESCOPES) == {"refractor_100mm", "sct_8inch", "reflector_1m"}
        assert get_telescope("Reflector-1m") == make_1m_reflector()

    def test_unknown_telescope(self):
        with pytest.raises(TelescopeNotFoundError, match="hubble"):
            get_telescope("hubble")

    def test_invalid_obstruction(self):
        with pytest.raises(ValueError, match="obstruction"):
            Telescope(central_obstruction=1.2)

    def test_frozen(self, reflector):
        with pytest.raises(AttributeError):
            reflector.aperture_mm = 500.0


class TestOptics:
    def test_f_ratio(self, reflector):
        assert reflector.f_ratio() == 8.0

    def test_pixel_scale(self, reflector):
        assert reflector.pixel_scale() == pytest.approx(13.5 / 8000.0 * 206.265)

    def test_field_of_view(self, reflector):
        width, height = reflector.field_of_view()
        assert width == pytest.approx(0.3960, abs=1e-4)
        assert width == height

    def test_diffraction_limit(self, reflector):
        """1.22 lambda/D for 550 nm through 1 m is about 0.138 arcsec."""
        assert reflector.diffraction_limit_arcsec() == pytest.approx(0.1384, abs=1e-4)
        assert make_refractor_100mm().diffraction_limit_arcsec() == pytest.approx(1.384, abs=1e-3)

    def test_collecting_area_subtracts_obstruction(self, reflector):
        assert reflector.collecting_area_cm2() == pytest.approx(math.pi / 4.0 * (100.0**2 - 20.0**2))


class TestPhotometry:
    def test_photon_flux_zero_point(self, reflector):
        area_m2 = reflector.collecting_area_cm2() * 1e-4
        expected = 3.63e10 * area_m2 * 0.95 * 0.85
        assert reflector.photon_flux(0.0) == pytest.approx(expected)

    def test_five_magnitudes_is_factor_100(self, reflector):
        assert reflector.photon_flux(0.0) / reflector.photon_flux(5.0) == pytest.approx(100.0)

    def test_flux_scales_with_exposure(self, reflector):
        assert reflector.photon_flux(10.0, 60.0) == pytest.approx(60.0 * reflector.photon_flux(10.0, 1.0))

    def test_snr_decreases_with_magnitude(self, reflector):
        values = [reflector.snr(mag, 60.0) for mag in (10, 14, 18, 22, 26)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_snr_grows_with_exposure(self, reflector):
        assert reflector.snr(20.0, 300.0) > reflector.snr(20.0, 30.0)

    def test_bright_source_is_shot_noise_limited(self, reflector):
        """SNR approaches sqrt(signal) for bright sources."""
        signal = reflector.photon_flux(5.0, 10.0)
        assert reflector.snr(5.0, 10.0) == pytest.approx(math.sqrt(signal), rel=1e-3)

    def test_darker_sky_helps(self, reflector):
        assert reflector.snr(22.0, 60.0, sky_bg_mag=22.0) > reflector.snr(22.0, 60.0, sky_bg_mag=18.0)

    def test_zero_exposure(self, reflector):
        """No signal and only read noise gives zero SNR."""
        assert reflector.snr(10.0, 0.0) == 0.0

    def test_limiting_magnitude_hits_snr_five(self, reflector):
        limit = reflector.limiting_magnitude(60.0, 21.0, 2.0)
        assert reflector.snr(limit, 60.0, 21.0, 2.0) == pytest.approx(5.0, rel=1e-6)

    def test_bigger_telescope_goes_deeper(self, reflector):
        assert reflector.limiting_magnitude(60.0) > make_sct_8inch().limiting_magnitude(60.0)

    def test_limiting_magnitude_bounds(self, reflector):
        limit = reflector.limiting_magnitude(1e6, 30.0, 0.1)
        assert 1.0 <= limit <= 30.0
