"""Star catalog storage, ingestion and file formats."""

from .builtin import load_builtin
from .loader import (
    CatalogLoadResult,
    StarEntry,
    load_bright_star_csv,
    load_catalog_csv,
    load_hipparcos_csv,
    star_from_entry,
)
from .plxcat import load_plxcat
from .star_catalog import StarCatalog

__all__ = [
    "CatalogLoadResult",
    "StarCatalog",
    "StarEntry",
    "load_bright_star_csv",
    "load_builtin",
    "load_catalog_csv",
    "load_hipparcos_csv",
    "load_plxcat",
    "star_from_entry",
]
