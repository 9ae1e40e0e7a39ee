"""CSV star catalog ingestion.

Two five-column layouts are supported, each with a mandatory header row:

    Name,RA_deg,Dec_deg,Vmag,BV     (bright-star list, id = data row number)
    HIP,RA_deg,Dec_deg,Vmag,BV      (Hipparcos subset, id = HIP number)

Malformed rows are skipped and reported; an unreadable, empty or header-only
file yields a failed ``CatalogLoadResult`` rather than an exception.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..errors import CatalogLoadError
from ..models.coords import EquatorialCoord
from ..models.star import Star, spectral_class_from_bv

logger = logging.getLogger(__name__)

EXPECTED_FIELD_COUNT = 5
BRIGHT_STAR_HEADER = ("name", "ra_deg", "dec_deg", "vmag", "bv")
HIPPARCOS_HEADER = ("hip", "ra_deg", "dec_deg", "vmag", "bv")

COLUMNS = ("id", "ra_deg", "dec_deg", "vmag", "bv")
NUMERIC_COLUMNS = COLUMNS[1:]
# Stands in for a row with too many fields; cannot occur in a text CSV field
OVERLONG_MARKER = "\x00overlong"


@dataclass(frozen=True)
class StarEntry:
    """One catalog row, coordinates already in radians."""

    ra: float
    dec: float
    mag_v: float
    color_bv: float
    catalog_id: int
    name: Optional[str] = None


@dataclass
class CatalogLoadResult:
    entries: List[StarEntry] = field(default_factory=list)
    skipped: int = 0
    warnings: List[str] = field(default_factory=list)
    error: Optional[CatalogLoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failure(path: Path, reason: str) -> CatalogLoadResult:
    error = CatalogLoadError(str(path), reason)
    logger.error("Catalog load failed: %s (%s)", path, reason)
    return CatalogLoadResult(error=error)


def _read_rows(path: Path) -> Tuple[pd.DataFrame, List[int]]:
    """Read every line as five string columns, indexed by file line number.

    The header is parsed as an ordinary row and dropped, so pandas never
    mistakes a long first data row for an index column. Rows with too many
    fields go through ``on_bad_lines`` and come back as marker rows, which
    keeps later rows on their own line numbers.
    """
    overlong: List[int] = []

    def flag_overlong(bad_line: List[str]) -> List[str]:
        overlong.append(len(bad_line))
        return [OVERLONG_MARKER] + [""] * (EXPECTED_FIELD_COUNT - 1)

    frame = pd.read_csv(
        path,
        header=None,
        names=list(COLUMNS),
        dtype=object,
        keep_default_na=False,
        skip_blank_lines=False,
        engine="python",
        encoding="utf-8",
        on_bad_lines=flag_overlong,
    )
    frame.index = frame.index + 1
    return frame.iloc[1:], overlong


def _row_number_ids(frame: pd.DataFrame) -> pd.Series:
    # Data row n sits on line n + 1
    return pd.Series(frame.index - 1, index=frame.index, dtype="float64")


def _hip_ids(frame: pd.DataFrame) -> pd.Series:
    hip = pd.to_numeric(frame["id"], errors="coerce")
    return hip.where(np.isfinite(hip) & (hip >= 0) & (hip == np.floor(hip)))


def _load_csv(
    path: Path,
    row_ids: Callable[[pd.DataFrame], pd.Series],
    keep_name: bool,
) -> CatalogLoadResult:
    """Shared reader for both layouts.

    Args:
        path: CSV file path
        row_ids: Maps the row frame to catalog ids, NaN where the id is invalid
        keep_name: Store the first column as the star name
    """
    try:
        if path.stat().st_size == 0:
            return _failure(path, "file is empty")
        frame, overlong = _read_rows(path)
    except pd.errors.EmptyDataError:
        return _failure(path, "header only, no data")
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        return _failure(path, f"cannot read file ({exc})")

    if frame.empty:
        return _failure(path, "header only, no data")

    blank = frame.fillna("").astype(str).apply("".join, axis=1).str.strip() == ""
    is_overlong = frame["id"] == OVERLONG_MARKER
    field_counts = frame.notna().sum(axis=1)
    is_short = ~blank & ~is_overlong & (field_counts != EXPECTED_FIELD_COUNT)

    numeric = frame[list(NUMERIC_COLUMNS)].apply(pd.to_numeric, errors="coerce")
    finite = np.isfinite(numeric.to_numpy(dtype=np.float64)).all(axis=1)
    ids = row_ids(frame)
    is_unparsable = ~blank & ~is_overlong & ~is_short & (ids.isna() | ~finite)

    problems = {}
    for line_number, got in zip(frame.index[is_overlong], overlong):
        problems[line_number] = f"expected {EXPECTED_FIELD_COUNT} fields, got {got}"
    for line_number, got in field_counts[is_short].items():
        problems[line_number] = f"expected {EXPECTED_FIELD_COUNT} fields, got {got}"
    for line_number in frame.index[is_unparsable]:
        problems[line_number] = f"unparsable value in '{','.join(map(str, frame.loc[line_number]))}'"

    result = CatalogLoadResult()
    for line_number in sorted(problems):
        message = f"line {line_number}: {problems[line_number]}"
        logger.warning("Skipping malformed catalog row in %s: %s", path, message)
        result.warnings.append(message)
    result.skipped = len(problems)

    good = ~blank & ~is_overlong & ~is_short & ~is_unparsable
    rows = numeric[good]
    for catalog_id, first, ra_deg, dec_deg, mag_v, color_bv in zip(
        ids[good], frame.loc[good, "id"], rows["ra_deg"], rows["dec_deg"], rows["vmag"], rows["bv"]
    ):
        name = str(first).strip() if keep_name else None
        result.entries.append(
            StarEntry(
                ra=math.radians(ra_deg),
                dec=math.radians(dec_deg),
                mag_v=float(mag_v),
                color_bv=float(color_bv),
                catalog_id=int(catalog_id),
                name=name or None,
            )
        )

    if not result.entries:
        reason = "header only, no data" if blank.all() else "no valid star rows"
        failed = _failure(path, reason)
        failed.skipped = result.skipped
        failed.warnings = result.warnings
        return failed

    if result.skipped:
        logger.warning("Skipped %d malformed lines in %s", result.skipped, path)
    logger.info("Loaded %d stars from %s", len(result.entries), path)

    return result


def load_bright_star_csv(path: str | Path) -> CatalogLoadResult:
    """Load a ``Name,RA_deg,Dec_deg,Vmag,BV`` file; ids are 1-based row numbers."""
    return _load_csv(Path(path), _row_number_ids, keep_name=True)


def load_hipparcos_csv(path: str | Path) -> CatalogLoadResult:
    """Load a ``HIP,RA_deg,Dec_deg,Vmag,BV`` file; ids are HIP numbers."""
    return _load_csv(Path(path), _hip_ids, keep_name=False)


def _read_header(path: Path) -> Optional[Tuple[str, ...]]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            header = handle.readline()
    except (OSError, UnicodeDecodeError):
        return None
    return tuple(column.strip().lower() for column in header.split(","))


def load_catalog_csv(path: str | Path) -> CatalogLoadResult:
    """Load either CSV layout, choosing by the header's first column.

    Unknown headers are treated as the bright-star layout.
    """
    path = Path(path)
    header = _read_header(path)
    if header is None:
        return _failure(path, "cannot read file")
    if header and header[0] == HIPPARCOS_HEADER[0]:
        return load_hipparcos_csv(path)
    return load_bright_star_csv(path)


def star_from_entry(entry: StarEntry) -> Star:
    """Convert a loaded row into a catalog Star (distance unknown)."""
    return Star(
        id=entry.catalog_id,
        name=entry.name,
        position=EquatorialCoord(ra=entry.ra, dec=entry.dec),
        v_magnitude=entry.mag_v,
        color_bv=entry.color_bv,
        spectral_class=spectral_class_from_bv(entry.color_bv),
    )
