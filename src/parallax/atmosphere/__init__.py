from .model import AtmosphericModel, airmass
from .provider import get_site, get_site_atmosphere, get_site_conditions

__all__ = [
    "AtmosphericModel",
    "airmass",
    "get_site",
    "get_site_atmosphere",
    "get_site_conditions",
]
