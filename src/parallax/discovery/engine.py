"""Detection thresholds, confirmation workflow and discovery-method formulas."""

import dataclasses
import logging
import math
from enum import Enum
from typing import List, Sequence

from ..models.discovery import Discovery, DiscoveryType, Observation
from ..models.star import Star
from ..optics.telescope import Telescope

logger = logging.getLogger(__name__)

DETECTION_SNR_THRESHOLD = 5.0
DISCOVERY_SNR_THRESHOLD = 7.0
REQUIRED_CONFIRMATIONS = 3

DEFAULT_PARALLAX_EPOCHS = 6
# Earth radius / Solar radius
EARTH_TO_SOLAR_RADIUS = 0.00916
UNDETECTABLE_PLANET_RADIUS = 99.0


class DiscoveryState(Enum):
    CANDIDATE = "candidate"
    PARTIALLY_CONFIRMED = "partially confirmed"
    CONFIRMED = "confirmed"


def parallax_detection_limit_mas(telescope: Telescope, n_epochs: int = DEFAULT_PARALLAX_EPOCHS) -> float:
    """Smallest measurable parallax in milliarcseconds.

    Each epoch measures position to about a tenth of the diffraction limit,
    improving as sqrt(n_epochs).
    """
    return telescope.diffraction_limit_arcsec() * 100.0 / math.sqrt(n_epochs)


def can_measure_parallax(star: Star, telescope: Telescope, n_epochs: int = DEFAULT_PARALLAX_EPOCHS) -> bool:
    if star.parallax_mas <= 0.0:
        return False
    return star.parallax_mas > parallax_detection_limit_mas(telescope, n_epochs)


def transit_depth(r_planet_re: float, r_star_rs: float) -> float:
    """Fractional flux drop for a planet (Earth radii) crossing a star (Solar radii)."""
    ratio = r_planet_re * EARTH_TO_SOLAR_RADIUS / r_star_rs
    return ratio * ratio


def minimum_detectable_planet_radius(photometric_snr: float, star_radius_rs: float = 1.0) -> float:
    """Smallest planet radius (Earth radii) whose transit depth exceeds 1/SNR.

    Args:
        photometric_snr: Photometric signal-to-noise ratio
        star_radius_rs: Host star radius in Solar radii

    Returns:
        Planet radius in Earth radii, 99.0 when SNR is not positive
    """
    if photometric_snr <= 0.0:
        return UNDETECTABLE_PLANET_RADIUS
    min_depth = 1.0 / photometric_snr
    return math.sqrt(min_depth) * star_radius_rs / EARTH_TO_SOLAR_RADIUS


class DiscoveryEngine:
    """Registry of candidate discoveries and their confirmation state.

    Confirmation is a one-way latch: counts only grow, and once a discovery
    is confirmed it stays confirmed.
    """

    def __init__(self):
        self._discoveries: List[Discovery] = []

    @property
    def discoveries(self) -> Sequence[Discovery]:
        return tuple(self._discoveries)

    def new_discovery(
        self,
        object_id: int,
        name: str,
        type: DiscoveryType = DiscoveryType.DIRECT_DETECTION,
        jd: float = 0.0,
    ) -> Discovery:
        discovery = Discovery(object_id=object_id, name=name, type=type, jd_discovery=jd)
        self._discoveries.append(discovery)
        logger.info("New %s candidate: %s (id %d)", type.display_name, name, object_id)
        return discovery

    def record_observation(self, discovery: Discovery, observation: Observation) -> bool:
        """Append an observation and advance the confirmation state.

        Args:
            discovery: Discovery being followed up
            observation: New observation; its detection flag is set here

        Returns:
            True if this observation added a confirmation
        """
        observation = dataclasses.replace(
            observation, is_detection=observation.snr >= DETECTION_SNR_THRESHOLD
        )
        discovery.observations.append(observation)

        if observation.snr < DISCOVERY_SNR_THRESHOLD:
            return False

        discovery.n_confirmations += 1
        if discovery.n_confirmations >= REQUIRED_CONFIRMATIONS and not discovery.confirmed:
            discovery.confirmed = True
            logger.info("%s confirmed after %d observations", discovery.name, len(discovery.observations))
        return True

    @staticmethod
    def is_confirmed(discovery: Discovery) -> bool:
        return discovery.n_confirmations >= REQUIRED_CONFIRMATIONS

    @staticmethod
    def state_of(discovery: Discovery) -> DiscoveryState:
        if discovery.confirmed or discovery.n_confirmations >= REQUIRED_CONFIRMATIONS:
            return DiscoveryState.CONFIRMED
        if discovery.n_confirmations > 0:
            return DiscoveryState.PARTIALLY_CONFIRMED
        return DiscoveryState.CANDIDATE
