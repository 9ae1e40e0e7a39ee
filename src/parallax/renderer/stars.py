"""Star field render hand-off: sky positions to screen-space records."""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..astro.coordinates import equatorial_to_horizontal, horizontal_to_screen
from ..atmosphere.model import AtmosphericModel
from ..models.coords import HorizontalCoord, ObserverLocation
from ..models.star import SpectralClass, Star, blackbody_color, effective_temperature

# Pogson brightness of a mag -1.5 star, mapped to full intensity
REFERENCE_BRIGHTNESS = 3.98

REFERENCE_FOV_DEG = 60.0
NAKED_EYE_LIMIT_MAG = 6.5
MAX_MAGNITUDE_LIMIT = 20.0


@dataclass(frozen=True)
class StarRenderRecord:
    """One star ready for drawing.

    Attributes:
        x: Horizontal screen coordinate in [-1, 1]
        y: Vertical screen coordinate in [-1, 1]
        brightness: Normalized intensity in [0, 1]
        color_index: B-V colour index
        rgb: Blackbody colour of the star's spectral class
    """

    x: float
    y: float
    brightness: float
    color_index: float
    rgb: Tuple[float, float, float] = (1.0, 1.0, 1.0)


def magnitude_to_brightness(magnitude: np.ndarray) -> np.ndarray:
    """Convert apparent magnitude to normalized brightness.

    Brightness follows B = 10^(-0.4 * magnitude), divided by the brightness
    of a mag -1.5 star and clipped to [0, 1].

    Args:
        magnitude: Apparent V magnitude(s)

    Returns:
        Brightness in [0, 1] (higher = brighter)
    """
    raw = 10.0 ** (-0.4 * np.asarray(magnitude, dtype=np.float64))
    return np.clip(raw / REFERENCE_BRIGHTNESS, 0.0, 1.0)


def camera_magnitude_limit(fov_deg: float) -> float:
    """Faintest magnitude worth drawing at a field of view.

    6.5 at a 60° view, five magnitudes deeper per factor of ten narrower,
    clamped to 20.
    """
    limit = NAKED_EYE_LIMIT_MAG + 5.0 * math.log10(REFERENCE_FOV_DEG / fov_deg)
    return min(limit, MAX_MAGNITUDE_LIMIT)


def spectral_class_color(spectral_class: SpectralClass) -> Tuple[float, float, float]:
    return blackbody_color(effective_temperature(spectral_class))


def build_render_records(
    stars: Iterable[Star],
    observer: ObserverLocation,
    lst: float,
    pointing: HorizontalCoord,
    fov_rad: float,
    mag_limit: float,
    atmosphere: Optional[AtmosphericModel] = None,
) -> List[StarRenderRecord]:
    """Run the per-frame star pipeline.

    Stars fainter than ``mag_limit`` or below the horizon are dropped, the
    rest are projected around ``pointing``. With an atmosphere, brightness
    uses the extincted magnitude.

    Args:
        stars: Candidate stars, typically a catalog query result
        observer: Observer location
        lst: Local sidereal time in radians
        pointing: View centre in horizontal coordinates
        fov_rad: Full field of view in radians
        mag_limit: Faintest catalog magnitude to draw
        atmosphere: Optional atmosphere for extinction

    Returns:
        Render records in input order
    """
    positions = []
    magnitudes = []
    colors = []

    for star in stars:
        if star.v_magnitude > mag_limit:
            continue

        hz = equatorial_to_horizontal(star.position, observer, lst)
        if hz.alt < 0.0:
            continue

        screen = horizontal_to_screen(hz, pointing, fov_rad)
        if screen is None:
            continue

        mag = star.v_magnitude
        if atmosphere is not None:
            mag = atmosphere.apparent_magnitude(mag, hz.alt_deg)

        positions.append(screen)
        magnitudes.append(mag)
        colors.append((star.color_bv, star.color()))

    if not positions:
        return []

    brightness = magnitude_to_brightness(np.array(magnitudes))
    return [
        StarRenderRecord(x=x, y=y, brightness=float(b), color_index=bv, rgb=rgb)
        for (x, y), b, (bv, rgb) in zip(positions, brightness, colors)
    ]
