"""Binary ``.plxcat`` star catalog format.

Layout (little-endian):

- 64-byte header: magic ``PLX_CAT\\0``, version, entry count, entry size,
  HEALPix nside, index offset, data offset, zero padding.
- Pixel index: 16-byte entries (offset, count, reserved) sorted by pixel id.
- Star records: 32 bytes each, see ``RECORD_DTYPE``.

Readers map the file with ``numpy.memmap`` so concurrent readers share one
read-only mapping.
"""

import logging
import math
from pathlib import Path
from typing import Iterable, Union

import numpy as np

from ..errors import PlxCatFormatError
from ..models.coords import EquatorialCoord
from ..models.star import SpectralClass, Star
from .star_catalog import StarCatalog

logger = logging.getLogger(__name__)

MAGIC = b"PLX_CAT\x00"
FORMAT_VERSION = 1
MAGNITUDE_SCALE = 1000.0

FLAG_VARIABLE = 0x01
FLAG_PROCEDURAL = 0x02

HEADER_DTYPE = np.dtype(
    [
        ("magic", "S8"),
        ("version", "<u4"),
        ("entry_count", "<u8"),
        ("entry_size", "<u4"),
        ("healpix_nside", "<u4"),
        ("index_offset", "<u8"),
        ("data_offset", "<u8"),
        ("reserved", "V20"),
    ]
)

INDEX_ENTRY_DTYPE = np.dtype(
    [
        ("offset", "<u8"),
        ("count", "<u4"),
        ("reserved", "<u4"),
    ]
)

RECORD_DTYPE = np.dtype(
    [
        ("ra", "<f8"),
        ("dec", "<f8"),
        ("mag_v", "<i2"),
        ("color_bv", "<i2"),
        ("parallax_mas", "<f2"),
        ("spectral_code", "u1"),
        ("flags", "u1"),
        ("source_id", "<u4"),
        ("reserved", "V4"),
    ]
)

# Stable on-disk ordering of spectral codes
SPECTRAL_CODES = tuple(SpectralClass)

PathLike = Union[str, Path]


def _to_fixed_point(values: np.ndarray) -> np.ndarray:
    scaled = np.round(np.asarray(values, dtype=np.float64) * MAGNITUDE_SCALE)
    info = np.iinfo(np.int16)
    return np.clip(scaled, info.min, info.max).astype("<i2")


def encode_records(stars: Iterable[Star]) -> np.ndarray:
    """Pack stars into a structured array of 32-byte records.

    Magnitudes and B-V are stored as int16 thousandths, so values are
    limited to +/-32.767 with 0.001 mag resolution.
    """
    stars = list(stars)
    records = np.zeros(len(stars), dtype=RECORD_DTYPE)
    if not stars:
        return records

    records["ra"] = [s.position.ra for s in stars]
    records["dec"] = [s.position.dec for s in stars]
    records["mag_v"] = _to_fixed_point([s.v_magnitude for s in stars])
    records["color_bv"] = _to_fixed_point([s.color_bv for s in stars])
    records["parallax_mas"] = np.array([s.parallax_mas for s in stars], dtype=np.float64).astype("<f2")
    records["spectral_code"] = [SPECTRAL_CODES.index(s.spectral_class) for s in stars]
    records["flags"] = [
        (FLAG_VARIABLE if s.is_variable else 0) | (FLAG_PROCEDURAL if s.is_procedural else 0)
        for s in stars
    ]
    records["source_id"] = [s.id & 0xFFFFFFFF for s in stars]
    return records


def decode_records(records: np.ndarray, source: PathLike = "<records>") -> list[Star]:
    """Rebuild ``Star`` objects from packed records.

    Distances are recovered from the stored parallax; names are not stored.

    Args:
        records: Structured array of ``RECORD_DTYPE``
        source: File the records came from, used in error messages

    Raises:
        PlxCatFormatError: If a record carries an unknown spectral code
    """
    codes = np.asarray(records["spectral_code"])
    bad = np.flatnonzero(codes >= len(SPECTRAL_CODES))
    if bad.size:
        raise PlxCatFormatError(
            str(source), f"record {int(bad[0])} has unknown spectral code {int(codes[bad[0]])}"
        )

    stars = []
    for record in records:
        parallax = float(record["parallax_mas"])
        flags = int(record["flags"])
        stars.append(
            Star(
                id=int(record["source_id"]),
                position=EquatorialCoord(float(record["ra"]), float(record["dec"])),
                v_magnitude=int(record["mag_v"]) / MAGNITUDE_SCALE,
                color_bv=int(record["color_bv"]) / MAGNITUDE_SCALE,
                distance_pc=1000.0 / parallax if parallax > 0 and math.isfinite(parallax) else 0.0,
                spectral_class=SPECTRAL_CODES[int(record["spectral_code"])],
                is_variable=bool(flags & FLAG_VARIABLE),
                is_procedural=bool(flags & FLAG_PROCEDURAL),
            )
        )
    return stars


def write_plxcat(path: PathLike, stars: Iterable[Star], nside: int = 1) -> int:
    """Write stars to a ``.plxcat`` file with a single-pixel index.

    Args:
        path: Destination file
        stars: Stars to store, written in iteration order
        nside: HEALPix resolution recorded in the header

    Returns:
        Number of records written
    """
    records = encode_records(stars)

    index = np.zeros(1, dtype=INDEX_ENTRY_DTYPE)
    index_offset = HEADER_DTYPE.itemsize
    data_offset = index_offset + index.nbytes
    index["offset"] = data_offset
    index["count"] = len(records)

    header = np.zeros(1, dtype=HEADER_DTYPE)
    header["magic"] = MAGIC
    header["version"] = FORMAT_VERSION
    header["entry_count"] = len(records)
    header["entry_size"] = RECORD_DTYPE.itemsize
    header["healpix_nside"] = nside
    header["index_offset"] = index_offset
    header["data_offset"] = data_offset

    with open(path, "wb") as f:
        f.write(header.tobytes())
        f.write(index.tobytes())
        f.write(records.tobytes())

    logger.info("Wrote %d records to %s", len(records), path)
    return len(records)


def read_header(path: PathLike) -> np.void:
    """Read and validate the 64-byte header.

    Raises:
        PlxCatFormatError: If the file is truncated or the header is invalid
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            raw = f.read(HEADER_DTYPE.itemsize)
    except OSError as e:
        raise PlxCatFormatError(str(path), str(e)) from e

    if len(raw) < HEADER_DTYPE.itemsize:
        raise PlxCatFormatError(str(path), "file is shorter than the 64-byte header")

    header = np.frombuffer(raw, dtype=HEADER_DTYPE)[0]
    # numpy strips trailing NULs from S fields
    if header["magic"] != MAGIC.rstrip(b"\x00"):
        raise PlxCatFormatError(str(path), "bad magic")
    if int(header["version"]) != FORMAT_VERSION:
        raise PlxCatFormatError(str(path), f"unsupported version {int(header['version'])}")
    if int(header["entry_size"]) != RECORD_DTYPE.itemsize:
        raise PlxCatFormatError(str(path), f"entry size {int(header['entry_size'])} != {RECORD_DTYPE.itemsize}")

    index_offset = int(header["index_offset"])
    data_offset = int(header["data_offset"])
    if index_offset < HEADER_DTYPE.itemsize:
        raise PlxCatFormatError(str(path), f"index offset {index_offset} overlaps the header")
    if data_offset < index_offset:
        raise PlxCatFormatError(str(path), f"data offset {data_offset} precedes index offset {index_offset}")

    expected_size = data_offset + int(header["entry_count"]) * RECORD_DTYPE.itemsize
    if path.stat().st_size < expected_size:
        raise PlxCatFormatError(str(path), "file is truncated")
    return header


def read_index(path: PathLike) -> np.ndarray:
    header = read_header(path)
    count = (int(header["data_offset"]) - int(header["index_offset"])) // INDEX_ENTRY_DTYPE.itemsize
    if count == 0:
        return np.zeros(0, dtype=INDEX_ENTRY_DTYPE)
    return np.memmap(path, dtype=INDEX_ENTRY_DTYPE, mode="r", offset=int(header["index_offset"]), shape=(count,))


def read_records(path: PathLike) -> np.ndarray:
    """Map the star records of a ``.plxcat`` file read-only."""
    header = read_header(path)
    count = int(header["entry_count"])
    if count == 0:
        return np.zeros(0, dtype=RECORD_DTYPE)
    return np.memmap(path, dtype=RECORD_DTYPE, mode="r", offset=int(header["data_offset"]), shape=(count,))


def load_plxcat(path: PathLike) -> StarCatalog:
    """Load every record of a ``.plxcat`` file into an indexed catalog."""
    stars = decode_records(read_records(path), source=path)
    logger.info("Loaded %d stars from %s", len(stars), path)
    return StarCatalog(stars)
