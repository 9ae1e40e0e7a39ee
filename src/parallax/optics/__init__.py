from .telescope import (
    TELESCOPES,
    Detector,
    Telescope,
    get_telescope,
    make_1m_reflector,
    make_refractor_100mm,
    make_sct_8inch,
)

__all__ = [
    "TELESCOPES",
    "Detector",
    "Telescope",
    "get_telescope",
    "make_1m_reflector",
    "make_refractor_100mm",
    "make_sct_8inch",
]
