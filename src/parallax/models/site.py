from dataclasses import dataclass, field

from .atmosphere import AtmosphericConditions
from .coords import ObserverLocation


@dataclass(frozen=True)
class ObservingSite:
    name: str
    location: ObserverLocation
    elevation_m: float = 0.0
    conditions: AtmosphericConditions = field(default_factory=AtmosphericConditions)
    timezone_offset_h: int = 0


OBSERVING_SITES = {
    "mauna_kea": ObservingSite(
        name="Mauna Kea Observatory",
        location=ObserverLocation.from_degrees(19.8207, -155.4681),
        elevation_m=4205.0,
        conditions=AtmosphericConditions(
            seeing_arcsec=0.5,
            extinction_coeff=0.10,
            bortle_scale=1,
            transparency=0.98,
        ),
        timezone_offset_h=-10,
    ),
    "mcdonald": ObservingSite(
        name="McDonald Observatory",
        location=ObserverLocation.from_degrees(30.6717, -104.0217),
        elevation_m=2070.0,
        conditions=AtmosphericConditions(
            seeing_arcsec=1.2,
            extinction_coeff=0.15,
            bortle_scale=2,
            humidity_pct=30.0,
            temperature_c=8.0,
            pressure_hpa=790.0,
            transparency=0.95,
        ),
        timezone_offset_h=-6,
    ),
    "backyard": ObservingSite(
        name="Backyard Observatory",
        location=ObserverLocation.from_degrees(51.5, -0.1),
        elevation_m=10.0,
        conditions=AtmosphericConditions(
            seeing_arcsec=3.0,
            extinction_coeff=0.30,
            bortle_scale=7,
            humidity_pct=70.0,
            transparency=0.75,
        ),
        timezone_offset_h=0,
    ),
}
