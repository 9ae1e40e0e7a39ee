"""Astronomical time: Julian Date and mean sidereal time.

Julian Date conversion follows Meeus, *Astronomical Algorithms* ch. 7 and
sidereal time uses the IAU 1982 GMST polynomial. All functions are pure and
total over roughly 1800-2200 CE; angles are returned in radians.
"""

import math
from datetime import datetime, timedelta, timezone

from ..errors import TimeParseError
from ..models.coords import normalize_radians

J2000_JD = 2451545.0
UNIX_EPOCH_JD = 2440587.5
DAYS_PER_CENTURY = 36525.0


def to_julian_date(dt: datetime) -> float:
    """Convert a civil date/time (UTC) to Julian Date.

    Args:
        dt: Civil date/time. Naive values are interpreted as UTC.

    Returns:
        Julian Date
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    year = dt.year
    month = dt.month

    # January and February count as months 13 and 14 of the previous year
    if month <= 2:
        year -= 1
        month += 12

    a = year // 100
    b = 2 - a + a // 4

    seconds = dt.second + dt.microsecond / 1e6
    day_fraction = (dt.hour + dt.minute / 60.0 + seconds / 3600.0) / 24.0

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + dt.day
        + day_fraction
        + b
        - 1524.5
    )


def from_julian_date(jd: float) -> datetime:
    """Convert a Julian Date back to a UTC civil date/time.

    Args:
        jd: Julian Date (positive)

    Returns:
        Timezone-aware UTC datetime
    """
    jd_plus = jd + 0.5
    z = math.floor(jd_plus)
    f = jd_plus - z

    a = z
    if z >= 2299161:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - alpha // 4

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    # Carry the day fraction through timedelta so 59.9999 s never becomes 60 s
    midnight = datetime(year, month, day, tzinfo=timezone.utc)
    return midnight + timedelta(microseconds=round(f * 86400.0 * 1e6))


def julian_centuries(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (jd - J2000_JD) / DAYS_PER_CENTURY


def gmst(jd: float) -> float:
    """Greenwich Mean Sidereal Time in radians, in [0, 2π).

    Args:
        jd: Julian Date (UT)

    Returns:
        GMST angle in radians
    """
    t = julian_centuries(jd)
    d = jd - J2000_JD

    gmst_deg = (
        280.46061837
        + 360.98564736629 * d
        + 0.000387933 * t * t
        - (t * t * t) / 38710000.0
    )

    return normalize_radians(math.radians(gmst_deg % 360.0))


def lmst(jd: float, longitude_rad: float) -> float:
    """Local Mean Sidereal Time in radians, in [0, 2π).

    Args:
        jd: Julian Date (UT)
        longitude_rad: Observer longitude, east positive

    Returns:
        LMST angle in radians
    """
    return normalize_radians(gmst(jd) + longitude_rad)


def now_as_jd() -> float:
    """Current system clock as a Julian Date."""
    now = datetime.now(timezone.utc)
    return UNIX_EPOCH_JD + now.timestamp() / 86400.0


def parse_utc_time(utc_time: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing 'Z' means UTC.

    Naive timestamps are taken as UTC.

    Raises:
        TimeParseError: If utc_time cannot be parsed
    """
    text = utc_time.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise TimeParseError(utc_time)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
