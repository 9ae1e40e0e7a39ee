"""In-memory star catalog with a 1° (RA, Dec) grid index.

Stars live in a single list (the arena); grid buckets hold arena indices.
The index is built at insertion time and stars are immutable afterwards.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..models.coords import EquatorialCoord
from ..models.star import Star
from .loader import StarEntry, star_from_entry

logger = logging.getLogger(__name__)

GRID_RESOLUTION_DEG = 1.0
RA_CELLS = int(360.0 / GRID_RESOLUTION_DEG)
DEC_CELLS = int(180.0 / GRID_RESOLUTION_DEG)

CellKey = Tuple[int, int]


def cell_for_position(position: EquatorialCoord) -> CellKey:
    """Grid cell containing a position; the poles fold into the edge rows."""
    ra_cell = int(math.floor(math.degrees(position.ra) / GRID_RESOLUTION_DEG)) % RA_CELLS
    dec_cell = int(math.floor((math.degrees(position.dec) + 90.0) / GRID_RESOLUTION_DEG))
    return ra_cell, min(max(dec_cell, 0), DEC_CELLS - 1)


class StarCatalog:
    """Spatially indexed collection of stars answering cone + magnitude queries."""

    def __init__(self, stars: Iterable[Star] = ()):
        self._stars: List[Star] = []
        self._grid: Dict[CellKey, List[int]] = {}
        self.extend(stars)

    @classmethod
    def from_entries(cls, entries: Iterable[StarEntry]) -> "StarCatalog":
        return cls(star_from_entry(entry) for entry in entries)

    def __len__(self) -> int:
        return len(self._stars)

    @property
    def stars(self) -> Sequence[Star]:
        return tuple(self._stars)

    def add_star(self, star: Star) -> int:
        """Append a star and index it. Returns its arena index."""
        index = len(self._stars)
        self._stars.append(star)
        self._grid.setdefault(cell_for_position(star.position), []).append(index)
        return index

    def extend(self, stars: Iterable[Star]) -> None:
        for star in stars:
            self.add_star(star)

    def rebuild_index(self) -> None:
        self._grid.clear()
        for index, star in enumerate(self._stars):
            self._grid.setdefault(cell_for_position(star.position), []).append(index)

    def _candidate_cells(self, center: EquatorialCoord, radius_deg: float) -> List[CellKey]:
        span = int(math.ceil(radius_deg / GRID_RESOLUTION_DEG)) + 1
        center_ra, center_dec = cell_for_position(center)

        # RA cells shrink by cos(dec); widen the RA span for the highest |dec| in the box
        max_abs_dec = abs(math.degrees(center.dec)) + radius_deg
        ra_span = RA_CELLS
        if max_abs_dec < 90.0 - GRID_RESOLUTION_DEG:
            ra_span = int(math.ceil(span / math.cos(math.radians(max_abs_dec))))
        if 2 * ra_span + 1 >= RA_CELLS:
            ra_offsets = range(RA_CELLS)
            center_ra = 0
        else:
            ra_offsets = range(-ra_span, ra_span + 1)

        cells = []
        seen = set()
        for d_ra in ra_offsets:
            ra_cell = (center_ra + d_ra) % RA_CELLS
            for d_dec in range(-span, span + 1):
                dec_cell = min(max(center_dec + d_dec, 0), DEC_CELLS - 1)
                key = (ra_cell, dec_cell)
                if key not in seen:
                    seen.add(key)
                    cells.append(key)
        return cells

    def query(
        self,
        center: EquatorialCoord,
        radius_deg: float,
        mag_limit: float = 99.0,
    ) -> List[Star]:
        """Stars within ``radius_deg`` of ``center`` and no fainter than ``mag_limit``.

        The grid is only a coarse pre-filter; every result is checked against
        the exact great-circle separation.

        Args:
            center: Field centre
            radius_deg: Search radius in degrees
            mag_limit: Faintest V magnitude to return

        Returns:
            Catalog stars sorted brightest first
        """
        if radius_deg < 0.0:
            return []

        indices = []
        for key in self._candidate_cells(center, radius_deg):
            indices.extend(self._grid.get(key, ()))
        if not indices:
            return []
        # Arena order, so magnitude ties keep insertion order
        indices.sort()

        candidates = [self._stars[i] for i in indices]
        ra = np.fromiter((s.position.ra for s in candidates), dtype=np.float64, count=len(candidates))
        dec = np.fromiter((s.position.dec for s in candidates), dtype=np.float64, count=len(candidates))
        mag = np.fromiter((s.v_magnitude for s in candidates), dtype=np.float64, count=len(candidates))

        cos_sep = np.sin(center.dec) * np.sin(dec) + np.cos(center.dec) * np.cos(dec) * np.cos(ra - center.ra)
        separation_deg = np.degrees(np.arccos(np.clip(cos_sep, -1.0, 1.0)))

        mask = (separation_deg <= radius_deg) & (mag <= mag_limit)
        selected = np.flatnonzero(mask)
        order = selected[np.argsort(mag[selected], kind="stable")]
        logger.debug("Cone query r=%.3f deg: %d candidates, %d matches", radius_deg, len(candidates), len(order))

        return [candidates[i] for i in order]

    def find_by_id(self, star_id: int) -> Optional[Star]:
        for star in self._stars:
            if star.id == star_id:
                return star
        return None

    def find_by_name(self, name: str) -> Optional[Star]:
        """First star whose name matches case-insensitively."""
        wanted = name.casefold()
        for star in self._stars:
            if star.name is not None and star.name.casefold() == wanted:
                return star
        return None
