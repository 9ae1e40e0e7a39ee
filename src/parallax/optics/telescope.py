"""Telescope and detector models: optics, photon counts and SNR."""

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

from ..errors import TelescopeNotFoundError

ARCSEC_PER_RADIAN = 180.0 / math.pi * 3600.0
# Photons/s/m^2 in V band for a V=0 source
V_ZERO_POINT_FLUX = 3.63e10
LIMITING_SNR = 5.0


@dataclass(frozen=True)
class Detector:
    name: str = "Generic CCD"
    pixel_width: int = 2048
    pixel_height: int = 2048
    pixel_size_um: float = 9.0
    read_noise_e: float = 5.0
    dark_current_e_s: float = 0.002
    quantum_efficiency: float = 0.85
    bit_depth: int = 16
    gain: float = 1.0
    is_cooled: bool = True


@dataclass(frozen=True)
class Telescope:
    """Optical tube plus detector.

    Attributes:
        aperture_mm: Clear aperture diameter
        focal_length_mm: Effective focal length
        central_obstruction: Obstruction diameter as a fraction of the aperture
        reflectivity: Combined mirror and lens throughput
    """

    name: str = "Generic Refractor"
    aperture_mm: float = 100.0
    focal_length_mm: float = 1000.0
    central_obstruction: float = 0.0
    reflectivity: float = 1.0
    detector: Detector = field(default_factory=Detector)

    def __post_init__(self):
        if self.aperture_mm <= 0.0 or self.focal_length_mm <= 0.0:
            raise ValueError("Aperture and focal length must be positive")
        if not 0.0 <= self.central_obstruction < 1.0:
            raise ValueError(f"Central obstruction must be in [0, 1), got {self.central_obstruction}")

    def f_ratio(self) -> float:
        return self.focal_length_mm / self.aperture_mm

    def pixel_scale(self) -> float:
        """Plate scale in arcsec per pixel."""
        return self.detector.pixel_size_um / self.focal_length_mm * 206.265

    def field_of_view(self) -> Tuple[float, float]:
        """Detector field of view (width, height) in degrees."""
        scale = self.pixel_scale()
        return (
            scale * self.detector.pixel_width / 3600.0,
            scale * self.detector.pixel_height / 3600.0,
        )

    def diffraction_limit_arcsec(self, wavelength_nm: float = 550.0) -> float:
        """Rayleigh criterion 1.22 lambda / D in arcsec."""
        return 1.22 * (wavelength_nm * 1e-9) / (self.aperture_mm * 1e-3) * ARCSEC_PER_RADIAN

    def collecting_area_cm2(self) -> float:
        d_cm = self.aperture_mm / 10.0
        obstruction_cm = d_cm * self.central_obstruction
        return math.pi / 4.0 * (d_cm * d_cm - obstruction_cm * obstruction_cm)

    def photon_flux(self, v_magnitude: float, exposure_s: float = 1.0) -> float:
        """Detected photo-electrons from a V-magnitude source over an exposure."""
        area_m2 = self.collecting_area_cm2() * 1e-4
        flux = V_ZERO_POINT_FLUX * 10.0 ** (-0.4 * v_magnitude)
        return flux * area_m2 * self.detector.quantum_efficiency * self.reflectivity * exposure_s

    def snr(
        self,
        v_magnitude: float,
        exposure_s: float,
        sky_bg_mag: float = 21.0,
        seeing_arcsec: float = 2.0,
    ) -> float:
        """Point-source signal-to-noise ratio.

        Noise sums source shot noise, sky in the PSF area, read noise and
        dark current over the PSF pixels in quadrature.

        Args:
            v_magnitude: Apparent magnitude of the source
            exposure_s: Exposure time in seconds
            sky_bg_mag: Sky surface brightness in mag/arcsec^2
            seeing_arcsec: Seeing FWHM in arcsec

        Returns:
            SNR, 0.0 when there is no noise at all
        """
        signal = self.photon_flux(v_magnitude, exposure_s)

        psf_fwhm = max(seeing_arcsec, self.diffraction_limit_arcsec())
        psf_area_arcsec2 = math.pi / (4.0 * math.log(2.0)) * psf_fwhm * psf_fwhm
        scale = self.pixel_scale()
        psf_pixels = max(psf_area_arcsec2 / (scale * scale), 1.0)

        sky_variance = self.photon_flux(sky_bg_mag, exposure_s) * psf_area_arcsec2
        read_variance = self.detector.read_noise_e**2 * psf_pixels
        dark_variance = self.detector.dark_current_e_s * exposure_s * psf_pixels

        noise = math.sqrt(signal + sky_variance + read_variance + dark_variance)
        return signal / noise if noise > 0.0 else 0.0

    def limiting_magnitude(self, exposure_s: float, sky_bg_mag: float = 21.0, seeing_arcsec: float = 2.0) -> float:
        """Faintest magnitude reaching SNR 5, by bisection over [1, 30]."""
        lo, hi = 1.0, 30.0
        for _ in range(64):
            mid = (lo + hi) * 0.5
            if self.snr(mid, exposure_s, sky_bg_mag, seeing_arcsec) >= LIMITING_SNR:
                lo = mid
            else:
                hi = mid
        return (lo + hi) * 0.5


def make_refractor_100mm() -> Telescope:
    return Telescope()


def make_sct_8inch() -> Telescope:
    """Amateur 8-inch Schmidt-Cassegrain with a monochrome CMOS camera."""
    return Telescope(
        name='8" Schmidt-Cassegrain',
        aperture_mm=203.2,
        focal_length_mm=2032.0,
        central_obstruction=0.34,
        reflectivity=0.88,
        detector=Detector(
            name="Monochrome CMOS",
            pixel_width=3096,
            pixel_height=2080,
            pixel_size_um=6.45,
            read_noise_e=3.5,
            dark_current_e_s=0.001,
            quantum_efficiency=0.90,
            bit_depth=12,
            gain=0.5,
        ),
    )


def make_1m_reflector() -> Telescope:
    """Professional 1-metre reflector with a cooled scientific CCD."""
    return Telescope(
        name="1-metre Research Reflector",
        aperture_mm=1000.0,
        focal_length_mm=8000.0,
        central_obstruction=0.20,
        reflectivity=0.85,
        detector=Detector(
            name="Cooled Scientific CCD",
            pixel_width=4096,
            pixel_height=4096,
            pixel_size_um=13.5,
            read_noise_e=4.0,
            dark_current_e_s=0.0005,
            quantum_efficiency=0.95,
            bit_depth=16,
            gain=1.1,
        ),
    )


TELESCOPES: Dict[str, Callable[[], Telescope]] = {
    "refractor_100mm": make_refractor_100mm,
    "sct_8inch": make_sct_8inch,
    "reflector_1m": make_1m_reflector,
}


def get_telescope(telescope_id: str) -> Telescope:
    """Build a telescope preset by registry key.

    Raises:
        TelescopeNotFoundError: If the key is unknown
    """
    key = telescope_id.strip().lower().replace("-", "_")
    if key not in TELESCOPES:
        raise TelescopeNotFoundError(telescope_id, list(TELESCOPES.keys()))
    return TELESCOPES[key]()
