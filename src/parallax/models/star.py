import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .coords import EquatorialCoord


class SpectralClass(Enum):
    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"
    L = "L"
    T = "T"
    Y = "Y"
    WR = "WR"
    UNKNOWN = "?"


# Approximate effective temperature [K] per class
EFFECTIVE_TEMPERATURE_K = {
    SpectralClass.O: 40000.0,
    SpectralClass.B: 20000.0,
    SpectralClass.A: 8500.0,
    SpectralClass.F: 6500.0,
    SpectralClass.G: 5500.0,
    SpectralClass.K: 4000.0,
    SpectralClass.M: 3000.0,
    SpectralClass.L: 1700.0,
    SpectralClass.T: 900.0,
    SpectralClass.Y: 400.0,
    SpectralClass.WR: 50000.0,
    SpectralClass.UNKNOWN: 5778.0,
}

# Upper B-V bound for each main-sequence class, hottest first
_BV_CLASS_BOUNDS = (
    (-0.30, SpectralClass.O),
    (-0.02, SpectralClass.B),
    (0.30, SpectralClass.A),
    (0.58, SpectralClass.F),
    (0.81, SpectralClass.G),
    (1.40, SpectralClass.K),
)
_BV_O_LOWER = -0.40
_BV_M_UPPER = 2.00
DEFAULT_COLOR_BV = 0.65


def effective_temperature(spectral_class: SpectralClass) -> float:
    return EFFECTIVE_TEMPERATURE_K[spectral_class]


def spectral_class_from_bv(color_bv: float) -> SpectralClass:
    """Estimate main-sequence spectral class from a B-V colour index."""
    for upper, spectral_class in _BV_CLASS_BOUNDS:
        if color_bv < upper:
            return spectral_class
    return SpectralClass.M


def bv_from_spectral_class(spectral_class: SpectralClass) -> float:
    """Typical B-V for a class, the midpoint of its band.

    The O band is taken to start at -0.40 and the M band to end at 2.00.
    Sub-stellar classes share the M value and Wolf-Rayet stars the O value.
    An unknown class gets the solar-like default.
    """
    if spectral_class in (SpectralClass.L, SpectralClass.T, SpectralClass.Y):
        spectral_class = SpectralClass.M
    elif spectral_class == SpectralClass.WR:
        spectral_class = SpectralClass.O

    lower = _BV_O_LOWER
    for upper, band_class in _BV_CLASS_BOUNDS:
        if band_class == spectral_class:
            return (lower + upper) / 2.0
        lower = upper
    if spectral_class == SpectralClass.M:
        return (lower + _BV_M_UPPER) / 2.0
    return DEFAULT_COLOR_BV


def blackbody_color(temperature_k: float) -> Tuple[float, float, float]:
    """Approximate RGB colour of a blackbody (Tanner Helland fit), each in [0, 1]."""
    t = min(max(temperature_k, 1000.0), 40000.0) / 100.0

    if t <= 66.0:
        r = 1.0
        g = (99.4708025861 * math.log(t) - 161.1195681661) / 255.0
    else:
        r = 329.698727446 * (t - 60.0) ** -0.1332047592 / 255.0
        g = 288.1221695283 * (t - 60.0) ** -0.0755148492 / 255.0

    if t >= 66.0:
        b = 1.0
    elif t <= 19.0:
        b = 0.0
    else:
        b = (138.5177312231 * math.log(t - 10.0) - 305.0447927307) / 255.0

    return tuple(min(max(c, 0.0), 1.0) for c in (r, g, b))


@dataclass(frozen=True)
class Star:
    """A single star, real or procedural.

    When ``distance_pc`` is positive the parallax is always 1000 / distance,
    and a missing absolute magnitude is derived from the distance modulus.
    """

    id: int
    position: EquatorialCoord
    v_magnitude: float
    name: Optional[str] = None
    distance_pc: float = 0.0
    abs_magnitude: Optional[float] = None
    parallax_mas: float = 0.0
    spectral_class: SpectralClass = SpectralClass.UNKNOWN
    color_bv: float = DEFAULT_COLOR_BV
    proper_motion_ra: float = 0.0
    proper_motion_dec: float = 0.0
    is_variable: bool = False
    is_procedural: bool = False

    def __post_init__(self):
        if self.distance_pc > 0.0:
            object.__setattr__(self, "parallax_mas", 1000.0 / self.distance_pc)
            if self.abs_magnitude is None:
                object.__setattr__(
                    self,
                    "abs_magnitude",
                    distance_modulus_abs_magnitude(self.v_magnitude, self.distance_pc),
                )

    def color(self) -> Tuple[float, float, float]:
        return blackbody_color(effective_temperature(self.spectral_class))


def distance_modulus_abs_magnitude(apparent_mag: float, distance_pc: float) -> float:
    """M = m - 5 log10(d / 10pc)."""
    return apparent_mag - 5.0 * math.log10(distance_pc / 10.0)


def distance_modulus_apparent_magnitude(abs_mag: float, distance_pc: float) -> float:
    """m = M + 5 log10(d / 10pc)."""
    return abs_mag + 5.0 * math.log10(distance_pc / 10.0)
