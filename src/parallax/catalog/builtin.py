"""Built-in table of bright and nearby Hipparcos stars."""

from ..models.coords import EquatorialCoord
from ..models.star import SpectralClass, Star
from .star_catalog import StarCatalog

# (HIP, name, RA deg, Dec deg, distance pc, V mag, B-V, spectral class)
BRIGHT_STARS = (
    (87937, "Barnard's Star", 269.452, 4.693, 1.83, 9.54, 1.57, SpectralClass.M),
    (32349, "Sirius", 101.287, -16.716, 2.64, -1.46, 0.00, SpectralClass.A),
    (70890, "Proxima Centauri", 217.429, -62.679, 1.30, 11.13, 1.82, SpectralClass.M),
    (71683, "Alpha Centauri A", 219.902, -60.834, 1.34, -0.01, 0.71, SpectralClass.G),
    (71681, "Alpha Centauri B", 219.902, -60.834, 1.34, 1.33, 0.88, SpectralClass.K),
    (24436, "Rigel", 78.634, -8.202, 264.0, 0.18, -0.03, SpectralClass.B),
    (27989, "Betelgeuse", 88.793, 7.407, 197.0, 0.42, 1.85, SpectralClass.M),
    (49669, "Regulus", 152.093, 11.967, 77.5, 1.35, -0.11, SpectralClass.B),
    (65474, "Spica", 201.298, -11.161, 250.0, 0.97, -0.23, SpectralClass.B),
    (69673, "Arcturus", 213.915, 19.182, 11.3, -0.05, 1.23, SpectralClass.K),
    (91262, "Vega", 279.235, 38.784, 7.68, 0.03, 0.00, SpectralClass.A),
    (97649, "Altair", 297.696, 8.868, 5.13, 0.76, 0.22, SpectralClass.A),
    (113368, "Fomalhaut", 344.413, -29.622, 7.69, 1.16, 0.09, SpectralClass.A),
    (11767, "Polaris", 37.954, 89.264, 133.0, 1.97, 0.60, SpectralClass.F),
    (80763, "Antares", 247.352, -26.432, 170.0, 1.06, 1.83, SpectralClass.M),
    (37279, "Procyon", 114.827, 5.225, 3.51, 0.34, 0.42, SpectralClass.F),
    (30438, "Canopus", 95.988, -52.696, 310.0, -0.72, 0.15, SpectralClass.A),
    (9884, "Achernar", 24.429, -57.237, 44.0, 0.46, -0.16, SpectralClass.B),
    (68702, "Hadar", 210.956, -60.373, 161.0, 0.61, -0.23, SpectralClass.B),
    (60718, "Acrux", 186.650, -63.099, 321.0, 0.76, -0.24, SpectralClass.B),
    (25336, "Aldebaran", 68.980, 16.509, 20.0, 0.87, 1.54, SpectralClass.K),
    (36850, "Castor", 113.650, 31.889, 15.6, 1.58, 0.03, SpectralClass.A),
    (37826, "Pollux", 116.329, 28.026, 10.3, 1.14, 1.00, SpectralClass.K),
    (102098, "Deneb", 310.358, 45.280, 802.0, 1.25, 0.09, SpectralClass.A),
)


def builtin_stars() -> list[Star]:
    return [
        Star(
            id=hip,
            name=name,
            position=EquatorialCoord.from_degrees(ra_deg, dec_deg),
            distance_pc=distance_pc,
            v_magnitude=v_mag,
            color_bv=color_bv,
            spectral_class=spectral_class,
        )
        for hip, name, ra_deg, dec_deg, distance_pc, v_mag, color_bv, spectral_class in BRIGHT_STARS
    ]


def load_builtin() -> StarCatalog:
    """Catalog of the built-in bright stars; parallax and M_V come from distance."""
    return StarCatalog(builtin_stars())
