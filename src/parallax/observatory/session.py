"""Observing session: a site, an instrument and a simulated clock."""

import logging
from typing import Optional

from ..astro.coordinates import equatorial_to_horizontal
from ..astro.time_system import lmst
from ..atmosphere.model import AtmosphericModel
from ..models.coords import EquatorialCoord, HorizontalCoord
from ..models.discovery import Observation
from ..models.site import ObservingSite
from ..models.star import Star
from ..optics.telescope import Telescope

logger = logging.getLogger(__name__)

DEFAULT_MIN_ALTITUDE_DEG = 15.0
DEFAULT_EXPOSURE_S = 60.0


class ObservingSession:
    """Combines site, telescope and time into one observing context.

    Derived quantities (LST, alt/az, airmass) are recomputed on every call
    from the current Julian Date; nothing is cached.

    Args:
        site: Observing site with its atmospheric conditions
        telescope: Instrument in use
        julian_date: Session start time as a Julian Date (UTC)
        min_altitude_deg: Default altitude cut for ``is_visible``
    """

    def __init__(
        self,
        site: ObservingSite,
        telescope: Telescope,
        julian_date: float,
        min_altitude_deg: float = DEFAULT_MIN_ALTITUDE_DEG,
    ):
        self._site = site
        self._telescope = telescope
        self._atmosphere = AtmosphericModel(site.conditions)
        self._jd = julian_date
        self.min_altitude_deg = min_altitude_deg

    @property
    def site(self) -> ObservingSite:
        return self._site

    @property
    def telescope(self) -> Telescope:
        return self._telescope

    @property
    def atmosphere(self) -> AtmosphericModel:
        return self._atmosphere

    @property
    def julian_date(self) -> float:
        return self._jd

    def advance_time(self, hours: float) -> None:
        self._jd += hours / 24.0
        logger.debug("Session clock advanced %.3f h to JD %.6f", hours, self._jd)

    def lst(self) -> float:
        """Local mean sidereal time in radians."""
        return lmst(self._jd, self._site.location.longitude)

    def to_horizontal(self, eq: EquatorialCoord) -> HorizontalCoord:
        return equatorial_to_horizontal(eq, self._site.location, self.lst())

    def is_visible(self, eq: EquatorialCoord, min_alt_deg: Optional[float] = None) -> bool:
        if min_alt_deg is None:
            min_alt_deg = self.min_altitude_deg
        return self.to_horizontal(eq).alt_deg >= min_alt_deg

    def airmass(self, eq: EquatorialCoord) -> float:
        return self._atmosphere.airmass(self.to_horizontal(eq).alt_deg)

    def limiting_magnitude(self, eq: EquatorialCoord, exposure_s: float = DEFAULT_EXPOSURE_S) -> float:
        """Faintest magnitude detectable at SNR 5 toward ``eq``."""
        alt_deg = self.to_horizontal(eq).alt_deg
        sky_bg = self._atmosphere.sky_background(alt_deg)
        seeing = self._atmosphere.effective_seeing(alt_deg)
        return self._telescope.limiting_magnitude(exposure_s, sky_bg, seeing)

    def snr(self, eq: EquatorialCoord, v_magnitude: float, exposure_s: float = DEFAULT_EXPOSURE_S) -> float:
        """SNR of a source at ``eq`` after extinction, sky and seeing.

        Args:
            eq: Source position
            v_magnitude: Magnitude above the atmosphere
            exposure_s: Exposure time in seconds

        Returns:
            Signal-to-noise ratio of the point source
        """
        alt_deg = self.to_horizontal(eq).alt_deg
        app_mag = self._atmosphere.apparent_magnitude(v_magnitude, alt_deg)
        sky_bg = self._atmosphere.sky_background(alt_deg)
        seeing = self._atmosphere.effective_seeing(alt_deg)
        return self._telescope.snr(app_mag, exposure_s, sky_bg, seeing)

    def observe(self, star: Star, exposure_s: float = DEFAULT_EXPOSURE_S) -> Observation:
        """Take an exposure of ``star`` at the current time."""
        snr = self.snr(star.position, star.v_magnitude, exposure_s)
        return Observation(
            julian_date=self._jd,
            target=star.position,
            snr=snr,
            v_magnitude=star.v_magnitude,
            exposure_s=exposure_s,
        )
