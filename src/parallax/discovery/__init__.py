from .engine import (
    DETECTION_SNR_THRESHOLD,
    DISCOVERY_SNR_THRESHOLD,
    REQUIRED_CONFIRMATIONS,
    DiscoveryEngine,
    DiscoveryState,
    can_measure_parallax,
    minimum_detectable_planet_radius,
    parallax_detection_limit_mas,
    transit_depth,
)

__all__ = [
    "DETECTION_SNR_THRESHOLD",
    "DISCOVERY_SNR_THRESHOLD",
    "REQUIRED_CONFIRMATIONS",
    "DiscoveryEngine",
    "DiscoveryState",
    "can_measure_parallax",
    "minimum_detectable_planet_radius",
    "parallax_detection_limit_mas",
    "transit_depth",
]
