from ..errors import SiteNotFoundError
from ..models.atmosphere import AtmosphericConditions
from ..models.site import OBSERVING_SITES, ObservingSite
from .model import AtmosphericModel


def get_site(site_name: str) -> ObservingSite:
    """Look up an observing site preset.

    Args:
        site_name: Site key (case-insensitive, spaces or dashes allowed)

    Returns:
        ObservingSite preset

    Raises:
        SiteNotFoundError: If site_name is not recognized
    """
    site_key = site_name.strip().lower().replace(" ", "_").replace("-", "_")
    site = OBSERVING_SITES.get(site_key)

    if site is None:
        raise SiteNotFoundError(site_name, list(OBSERVING_SITES.keys()))

    return site


def get_site_conditions(site_name: str) -> AtmosphericConditions:
    return get_site(site_name).conditions


def get_site_atmosphere(site_name: str) -> AtmosphericModel:
    return AtmosphericModel(get_site_conditions(site_name))
