"""Atmospheric effects on ground-based observation.

Every function is total: altitudes at or below the horizon return defined
boundary values instead of raising.
"""

import math

from ..models.atmosphere import AtmosphericConditions

MAX_AIRMASS = 40.0
REFRACTION_MIN_ALTITUDE_DEG = 0.5
AIRGLOW_HORIZON_MAG = 0.5
SEEING_AIRMASS_EXPONENT = 0.6


def airmass(alt_deg: float) -> float:
    """Relative atmospheric path length (Pickering 2002).

    Args:
        alt_deg: Altitude above the horizon in degrees

    Returns:
        Airmass, 1.0 at the zenith, capped at 40 at or below the horizon
    """
    if alt_deg <= 0.0:
        return MAX_AIRMASS
    x = 1.0 / math.sin(math.radians(alt_deg + 244.0 / (165.0 + 47.0 * alt_deg**1.1)))
    return min(x, MAX_AIRMASS)


class AtmosphericModel:
    """Extinction, seeing, refraction and sky brightness for one set of conditions."""

    def __init__(self, conditions: AtmosphericConditions | None = None):
        self._conditions = conditions or AtmosphericConditions()

    @property
    def conditions(self) -> AtmosphericConditions:
        return self._conditions

    @staticmethod
    def airmass(alt_deg: float) -> float:
        return airmass(alt_deg)

    def extinction_mag(self, alt_deg: float) -> float:
        """Magnitudes lost to the atmosphere at the given altitude."""
        c = self._conditions
        return c.extinction_coeff * c.transparency * airmass(alt_deg)

    def apparent_magnitude(self, true_mag: float, alt_deg: float) -> float:
        return true_mag + self.extinction_mag(alt_deg)

    def effective_seeing(self, alt_deg: float) -> float:
        """Seeing FWHM [arcsec] at altitude; Kolmogorov turbulence scales as X^(3/5)."""
        return self._conditions.seeing_arcsec * airmass(alt_deg) ** SEEING_AIRMASS_EXPONENT

    def refraction_arcsec(self, apparent_alt_deg: float) -> float:
        """Atmospheric refraction at an observed altitude (Saemundsson 1986).

        The formula is not valid near the horizon, so 0 is returned below 0.5°.

        Args:
            apparent_alt_deg: Observed altitude in degrees

        Returns:
            Refraction in arcseconds
        """
        if apparent_alt_deg < REFRACTION_MIN_ALTITUDE_DEG:
            return 0.0
        c = self._conditions
        correction = (c.pressure_hpa / 1010.0) * (283.0 / (273.0 + c.temperature_c))
        r_arcmin = 1.02 / math.tan(
            math.radians(apparent_alt_deg + 10.3 / (apparent_alt_deg + 5.11))
        )
        return max(r_arcmin * correction * 60.0, 0.0)

    def sky_background(self, alt_deg: float) -> float:
        """Sky brightness [mag/arcsec²]; airglow brightens it toward the horizon."""
        airglow = AIRGLOW_HORIZON_MAG * (1.0 - alt_deg / 90.0)
        return self._conditions.sky_background() - airglow
