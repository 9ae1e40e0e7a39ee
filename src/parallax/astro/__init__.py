from .time_system import (
    J2000_JD,
    from_julian_date,
    gmst,
    julian_centuries,
    lmst,
    now_as_jd,
    parse_utc_time,
    to_julian_date,
)
from .coordinates import (
    angular_separation,
    equatorial_to_horizontal,
    horizontal_to_equatorial,
    horizontal_to_screen,
)

__all__ = [
    "J2000_JD",
    "from_julian_date",
    "gmst",
    "julian_centuries",
    "lmst",
    "now_as_jd",
    "parse_utc_time",
    "to_julian_date",
    "angular_separation",
    "equatorial_to_horizontal",
    "horizontal_to_equatorial",
    "horizontal_to_screen",
]
