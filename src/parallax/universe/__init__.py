from .procedural import (
    PcgRng,
    ProceduralGenerator,
    abs_magnitude_from_spectral_class,
    sample_kroupa_mass,
    spectral_class_from_mass,
)

__all__ = [
    "PcgRng",
    "ProceduralGenerator",
    "abs_magnitude_from_spectral_class",
    "sample_kroupa_mass",
    "spectral_class_from_mass",
]
