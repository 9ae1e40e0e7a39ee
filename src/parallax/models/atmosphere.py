from dataclasses import dataclass

# Bortle class -> zenith sky background [mag/arcsec²] (Schaefer 1998, Cinzano et al. 2001)
BORTLE_SKY_BACKGROUND = {
    1: 22.0,
    2: 21.7,
    3: 21.4,
    4: 21.0,
    5: 20.4,
    6: 19.3,
    7: 18.5,
    8: 17.5,
    9: 16.5,
}


def bortle_to_sky_background(bortle: int) -> float:
    """Zenith sky brightness for a Bortle class, clamped to 1..9."""
    return BORTLE_SKY_BACKGROUND[min(max(int(bortle), 1), 9)]


@dataclass(frozen=True)
class AtmosphericConditions:
    seeing_arcsec: float = 2.0
    extinction_coeff: float = 0.20
    bortle_scale: int = 4
    humidity_pct: float = 40.0
    temperature_c: float = 15.0
    pressure_hpa: float = 1013.25
    wind_ms: float = 3.0
    transparency: float = 0.9

    def __post_init__(self):
        if not 1 <= self.bortle_scale <= 9:
            raise ValueError(f"Bortle scale must be in 1..9, got {self.bortle_scale}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(
                f"Transparency must be in [0, 1], got {self.transparency}"
            )
        if self.seeing_arcsec < 0.0:
            raise ValueError("Seeing must be non-negative")
        if self.extinction_coeff < 0.0:
            raise ValueError("Extinction coefficient must be non-negative")

    def fried_parameter_cm(self) -> float:
        """Fried parameter r₀ at 500 nm [cm] from seeing FWHM ≈ 0.98 λ / r₀."""
        fwhm_rad = self.seeing_arcsec * 4.848e-6
        if fwhm_rad <= 0.0:
            return 20.0
        return 0.98 * 5e-7 / fwhm_rad * 100.0

    def sky_background(self) -> float:
        return bortle_to_sky_background(self.bortle_scale)
