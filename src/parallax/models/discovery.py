from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .coords import EquatorialCoord


class DiscoveryType(Enum):
    DIRECT_DETECTION = "Direct Detection"
    TRANSIT_METHOD = "Transit Method"
    PARALLAX_SHIFT = "Parallax Shift"
    SPECTROSCOPIC = "Spectroscopic"
    ASTROMETRIC = "Astrometric"
    PHOTOMETRIC_VARIABLE = "Photometric Variable"
    SUPERNOVA = "Supernova"
    COMET = "Comet"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class Observation:
    julian_date: float
    target: EquatorialCoord
    snr: float
    v_magnitude: float
    exposure_s: float
    is_detection: bool = False


@dataclass
class Discovery:
    """Mutable only through DiscoveryEngine.record_observation."""

    object_id: int
    name: str
    type: DiscoveryType = DiscoveryType.DIRECT_DETECTION
    jd_discovery: float = 0.0
    n_confirmations: int = 0
    observations: List[Observation] = field(default_factory=list)
    confirmed: bool = False
