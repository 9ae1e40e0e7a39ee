import math
from dataclasses import dataclass

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi


def normalize_radians(angle: float) -> float:
    """Normalize an angle to [0, 2π)."""
    angle = angle % TWO_PI
    # x % 2π can round up to exactly 2π for tiny negative x
    if angle >= TWO_PI:
        return 0.0
    return angle


@dataclass(frozen=True)
class EquatorialCoord:
    """Right ascension / declination (J2000), both in radians.

    RA is normalized to [0, 2π) and Dec clamped to [-π/2, π/2] on creation.
    """

    ra: float
    dec: float

    def __post_init__(self):
        object.__setattr__(self, "ra", normalize_radians(self.ra))
        object.__setattr__(self, "dec", min(max(self.dec, -HALF_PI), HALF_PI))

    @classmethod
    def from_degrees(cls, ra_deg: float, dec_deg: float) -> "EquatorialCoord":
        return cls(ra=math.radians(ra_deg), dec=math.radians(dec_deg))

    @property
    def ra_deg(self) -> float:
        return math.degrees(self.ra)

    @property
    def dec_deg(self) -> float:
        return math.degrees(self.dec)


@dataclass(frozen=True)
class HorizontalCoord:
    """Altitude / azimuth in radians. Azimuth is north-based, east = π/2."""

    alt: float
    az: float

    @classmethod
    def from_degrees(cls, alt_deg: float, az_deg: float) -> "HorizontalCoord":
        return cls(alt=math.radians(alt_deg), az=math.radians(az_deg))

    @property
    def alt_deg(self) -> float:
        return math.degrees(self.alt)

    @property
    def az_deg(self) -> float:
        return math.degrees(self.az)


@dataclass(frozen=True)
class ObserverLocation:
    """Geographic position in radians, north and east positive."""

    latitude: float
    longitude: float

    @classmethod
    def from_degrees(cls, lat_deg: float, lon_deg: float) -> "ObserverLocation":
        return cls(latitude=math.radians(lat_deg), longitude=math.radians(lon_deg))

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)
