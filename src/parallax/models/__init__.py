from .coords import EquatorialCoord, HorizontalCoord, ObserverLocation, normalize_radians
from .star import SpectralClass, Star, blackbody_color, bv_from_spectral_class, spectral_class_from_bv
from .atmosphere import AtmosphericConditions, bortle_to_sky_background
from .site import ObservingSite, OBSERVING_SITES
from .discovery import Discovery, DiscoveryType, Observation

__all__ = [
    "EquatorialCoord",
    "HorizontalCoord",
    "ObserverLocation",
    "normalize_radians",
    "SpectralClass",
    "Star",
    "blackbody_color",
    "bv_from_spectral_class",
    "spectral_class_from_bv",
    "AtmosphericConditions",
    "bortle_to_sky_background",
    "ObservingSite",
    "OBSERVING_SITES",
    "Discovery",
    "DiscoveryType",
    "Observation",
]
