"""Equatorial, horizontal and screen-plane coordinate transforms.

All angles are radians. Azimuth is measured from north through east.
"""

import math
from typing import Optional, Tuple

from ..models.coords import (
    EquatorialCoord,
    HorizontalCoord,
    ObserverLocation,
    normalize_radians,
)

# Stars further than this fraction of the FOV from the pointing are rejected
# before projection. Slightly above the half-diagonal of a square field (0.707).
SCREEN_MARGIN_FRACTION = 0.75


def _clamp_unit(value: float) -> float:
    return min(max(value, -1.0), 1.0)


def hour_angle(local_sidereal_time_rad: float, ra_rad: float) -> float:
    """Hour angle H = LST - RA, normalized to [0, 2π)."""
    return normalize_radians(local_sidereal_time_rad - ra_rad)


def equatorial_to_horizontal(
    eq: EquatorialCoord,
    observer: ObserverLocation,
    local_sidereal_time_rad: float,
) -> HorizontalCoord:
    """Convert RA/Dec to altitude/azimuth for a given local sidereal time.

    sin(alt) = sin(dec) sin(lat) + cos(dec) cos(lat) cos(H)
    az = atan2(-cos(dec) sin(H), sin(dec) cos(lat) - cos(dec) sin(lat) cos(H))

    Args:
        eq: Equatorial position of the object
        observer: Observer geographic location
        local_sidereal_time_rad: Local mean sidereal time

    Returns:
        Horizontal coordinates with azimuth in [0, 2π)
    """
    ha = local_sidereal_time_rad - eq.ra

    sin_dec = math.sin(eq.dec)
    cos_dec = math.cos(eq.dec)
    sin_lat = math.sin(observer.latitude)
    cos_lat = math.cos(observer.latitude)
    cos_ha = math.cos(ha)
    sin_ha = math.sin(ha)

    sin_alt = sin_dec * sin_lat + cos_dec * cos_lat * cos_ha
    alt = math.asin(_clamp_unit(sin_alt))

    az_y = -cos_dec * sin_ha
    az_x = sin_dec * cos_lat - cos_dec * sin_lat * cos_ha
    az = normalize_radians(math.atan2(az_y, az_x))

    return HorizontalCoord(alt=alt, az=az)


def horizontal_to_equatorial(
    hz: HorizontalCoord,
    observer: ObserverLocation,
    local_sidereal_time_rad: float,
) -> EquatorialCoord:
    """Convert altitude/azimuth back to RA/Dec (inverse of the above).

    Args:
        hz: Horizontal position of the object
        observer: Observer geographic location
        local_sidereal_time_rad: Local mean sidereal time

    Returns:
        Equatorial coordinates with RA in [0, 2π)
    """
    sin_alt = math.sin(hz.alt)
    cos_alt = math.cos(hz.alt)
    sin_az = math.sin(hz.az)
    cos_az = math.cos(hz.az)
    sin_lat = math.sin(observer.latitude)
    cos_lat = math.cos(observer.latitude)

    sin_dec = sin_alt * sin_lat + cos_alt * cos_lat * cos_az
    dec = math.asin(_clamp_unit(sin_dec))

    ha_y = -cos_alt * sin_az
    ha_x = sin_alt * cos_lat - cos_alt * sin_lat * cos_az
    ha = math.atan2(ha_y, ha_x)

    return EquatorialCoord(ra=normalize_radians(local_sidereal_time_rad - ha), dec=dec)


def horizontal_to_screen(
    star: HorizontalCoord,
    pointing: HorizontalCoord,
    fov_rad: float,
    margin: float = SCREEN_MARGIN_FRACTION,
) -> Optional[Tuple[float, float]]:
    """Project a horizontal position onto the normalized screen plane.

    Uses a gnomonic tangent-plane projection centred on ``pointing`` and
    scaled so that fov/2 maps to the screen edge.

    Args:
        star: Horizontal coordinates of the star
        pointing: Horizontal coordinates of the view centre
        fov_rad: Full angular field of view
        margin: Reject stars separated by more than margin × fov

    Returns:
        (x, y) in [-1, 1], or None if the star is off-screen
    """
    delta_az = star.az - pointing.az

    sin_alt_s = math.sin(star.alt)
    cos_alt_s = math.cos(star.alt)
    sin_alt_p = math.sin(pointing.alt)
    cos_alt_p = math.cos(pointing.alt)
    cos_daz = math.cos(delta_az)
    sin_daz = math.sin(delta_az)

    cos_sep = sin_alt_s * sin_alt_p + cos_alt_s * cos_alt_p * cos_daz
    separation = math.acos(_clamp_unit(cos_sep))

    if separation > fov_rad * margin:
        return None

    # Behind the tangent plane: the projection is undefined
    if cos_sep <= 0.0:
        return None

    dx = cos_alt_s * sin_daz
    dy = sin_alt_s * cos_alt_p - cos_alt_s * sin_alt_p * cos_daz

    scale = 1.0 / math.tan(fov_rad * 0.5)
    x = dx / cos_sep * scale
    y = dy / cos_sep * scale

    if abs(x) > 1.0 or abs(y) > 1.0:
        return None

    return (x, y)


def angular_separation(a: EquatorialCoord, b: EquatorialCoord) -> float:
    """Great-circle separation between two equatorial positions [radians]."""
    cos_c = math.sin(a.dec) * math.sin(b.dec) + math.cos(a.dec) * math.cos(
        b.dec
    ) * math.cos(a.ra - b.ra)
    return math.acos(_clamp_unit(cos_c))
