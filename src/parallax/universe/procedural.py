"""Deterministic procedural star field generation.

Same master seed and tile always yield the same stars. Each star draws from
its own RNG stream keyed on its id, so a star's properties do not depend on
how many stars were generated before it.
"""

import logging
import math
from typing import List

from ..models.coords import EquatorialCoord
from ..models.star import SpectralClass, Star, bv_from_spectral_class, distance_modulus_apparent_magnitude

logger = logging.getLogger(__name__)

MASK_64 = 0xFFFFFFFFFFFFFFFF
MASK_32 = 0xFFFFFFFF

PCG_MULTIPLIER = 6364136223846793005
TILE_RA_MIX = 6364136223846793005
TILE_DEC_MIX = 1442695040888963407

KROUPA_MASS_MIN = 0.1
KROUPA_MASS_BREAK = 0.5
KROUPA_MASS_MAX = 150.0
KROUPA_ALPHA_LOW = 1.3
KROUPA_ALPHA_HIGH = 2.3

DISTANCE_MIN_PC = 10.0
DISTANCE_MAX_PC = 5000.0

# Rough galactic plane offset in declination
GALACTIC_PLANE_DEC_OFFSET_DEG = 28.0

_MASS_CLASS_THRESHOLDS = (
    (16.0, SpectralClass.O),
    (2.1, SpectralClass.B),
    (1.4, SpectralClass.A),
    (1.04, SpectralClass.F),
    (0.8, SpectralClass.G),
    (0.45, SpectralClass.K),
    (0.08, SpectralClass.M),
)

ABS_MAGNITUDE_BY_CLASS = {
    SpectralClass.O: -5.0,
    SpectralClass.B: -1.5,
    SpectralClass.A: 2.0,
    SpectralClass.F: 3.5,
    SpectralClass.G: 5.0,
    SpectralClass.K: 6.5,
    SpectralClass.M: 9.0,
    SpectralClass.L: 14.0,
}
DEFAULT_ABS_MAGNITUDE = 5.0


class PcgRng:
    """PCG-XSH-RR generator: 64-bit state, 32-bit output."""

    def __init__(self, seed: int, stream: int = 1):
        self._state = (seed + (stream | 1)) & MASK_64
        self._inc = ((stream << 1) | 1) & MASK_64
        self.next_u32()

    def next_u32(self) -> int:
        old = self._state
        self._state = (old * PCG_MULTIPLIER + self._inc) & MASK_64
        xorshifted = (((old >> 18) ^ old) >> 27) & MASK_32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK_32

    def next_double(self) -> float:
        """Uniform in [0, 1)."""
        return self.next_u32() / 4294967296.0

    def next_in_range(self, lo: float, hi: float) -> float:
        return lo + self.next_double() * (hi - lo)

    def next_uint(self, n: int) -> int:
        """Integer in [0, n)."""
        return self.next_u32() % n


def _segment_weight(lo: float, hi: float, alpha: float) -> float:
    return (hi ** (1.0 - alpha) - lo ** (1.0 - alpha)) / (1.0 - alpha)


def _sample_power_law(u: float, lo: float, hi: float, alpha: float) -> float:
    base = lo ** (1.0 - alpha)
    top = hi ** (1.0 - alpha)
    return (base + u * (top - base)) ** (1.0 / (1.0 - alpha))


def sample_kroupa_mass(rng: PcgRng) -> float:
    """Draw a stellar mass in solar masses from the Kroupa (2001) IMF.

    Two power-law segments, 0.1-0.5 with alpha 1.3 and 0.5-150 with alpha
    2.3. One draw picks the segment by its normalisation weight, a second
    inverts that segment's CDF.
    """
    w_low = _segment_weight(KROUPA_MASS_MIN, KROUPA_MASS_BREAK, KROUPA_ALPHA_LOW)
    w_high = _segment_weight(KROUPA_MASS_BREAK, KROUPA_MASS_MAX, KROUPA_ALPHA_HIGH)
    frac_low = w_low / (w_low + w_high)

    if rng.next_double() < frac_low:
        return _sample_power_law(rng.next_double(), KROUPA_MASS_MIN, KROUPA_MASS_BREAK, KROUPA_ALPHA_LOW)
    return _sample_power_law(rng.next_double(), KROUPA_MASS_BREAK, KROUPA_MASS_MAX, KROUPA_ALPHA_HIGH)


def spectral_class_from_mass(mass_solar: float) -> SpectralClass:
    for threshold, spectral_class in _MASS_CLASS_THRESHOLDS:
        if mass_solar >= threshold:
            return spectral_class
    return SpectralClass.L


def abs_magnitude_from_spectral_class(spectral_class: SpectralClass) -> float:
    """Main-sequence absolute V magnitude for a spectral class."""
    return ABS_MAGNITUDE_BY_CLASS.get(spectral_class, DEFAULT_ABS_MAGNITUDE)


class ProceduralGenerator:
    """Seeded generator filling sky tiles with synthetic stars.

    Args:
        master_seed: Universe seed; the same seed gives the same universe
        mag_limit: Faintest apparent V magnitude kept
    """

    def __init__(self, master_seed: int, mag_limit: float = 12.0):
        self.master_seed = master_seed & MASK_64
        self.mag_limit = mag_limit

    def tile_seed(self, tile_ra: int, tile_dec: int) -> int:
        h = self.master_seed
        h ^= ((tile_ra + 0xFFFF) * TILE_RA_MIX) & MASK_64
        h ^= ((tile_dec + 0xFFFF) * TILE_DEC_MIX) & MASK_64
        return h

    @staticmethod
    def stellar_density(ra_deg: float, dec_deg: float) -> float:
        """Stars per square degree, densest near a crude galactic plane proxy."""
        b_approx = abs(dec_deg + GALACTIC_PLANE_DEC_OFFSET_DEG)
        return 500.0 * math.exp(-b_approx / 25.0) + 30.0

    def tile_base_id(self, tile_ra: int, tile_dec: int) -> int:
        base = (((tile_ra + 0x8000) & MASK_64) << 20) | ((tile_dec + 0x8000) & MASK_64)
        return (base * 1_000_000 + self.master_seed) & MASK_64

    def generate_star(self, ra_deg: float, dec_deg: float, dist_pc: float, star_id: int) -> Star:
        """Generate one star from its own id-keyed stream."""
        rng = PcgRng(self.master_seed ^ star_id)

        mass = sample_kroupa_mass(rng)
        spectral_class = spectral_class_from_mass(mass)
        abs_mag = abs_magnitude_from_spectral_class(spectral_class) + rng.next_in_range(-0.5, 0.5)
        v_mag = distance_modulus_apparent_magnitude(abs_mag, dist_pc)
        is_variable = rng.next_uint(20) == 0

        return Star(
            id=star_id,
            position=EquatorialCoord.from_degrees(ra_deg, dec_deg),
            v_magnitude=v_mag,
            distance_pc=dist_pc,
            abs_magnitude=abs_mag,
            spectral_class=spectral_class,
            color_bv=bv_from_spectral_class(spectral_class),
            is_variable=is_variable,
            is_procedural=True,
        )

    def generate_tile(self, tile_ra_deg: float, tile_dec_deg: float, tile_size_deg: float) -> List[Star]:
        """Generate the stars of one tile.

        Args:
            tile_ra_deg: RA of the tile's left edge in degrees; values 360
                apart name the same tile
            tile_dec_deg: Dec of the tile's bottom edge in degrees
            tile_size_deg: Side length of the tile in degrees

        Returns:
            Stars no fainter than ``mag_limit``, in generation order
        """
        n_ra_tiles = int(math.ceil(360.0 / tile_size_deg))
        tile_ra_deg = tile_ra_deg % 360.0
        tile_ra = int(math.floor(tile_ra_deg / tile_size_deg)) % n_ra_tiles
        tile_dec = int(math.floor(tile_dec_deg / tile_size_deg))
        rng = PcgRng(self.tile_seed(tile_ra, tile_dec))

        density = self.stellar_density(tile_ra_deg, tile_dec_deg)
        n_stars = int(density * tile_size_deg * tile_size_deg)
        n_stars = int(n_stars * (0.8 + rng.next_double() * 0.4))

        base_id = self.tile_base_id(tile_ra, tile_dec)
        log_min = math.log10(DISTANCE_MIN_PC)
        log_max = math.log10(DISTANCE_MAX_PC)

        stars = []
        for i in range(n_stars):
            ra = tile_ra_deg + rng.next_double() * tile_size_deg
            dec = tile_dec_deg + rng.next_double() * tile_size_deg
            dec = min(max(dec, -90.0), 90.0)
            ra = math.fmod(ra + 360.0, 360.0)
            dist_pc = 10.0 ** rng.next_in_range(log_min, log_max)

            star = self.generate_star(ra, dec, dist_pc, (base_id + i) & MASK_64)
            if star.v_magnitude <= self.mag_limit:
                stars.append(star)

        logger.debug(
            "Tile (%d, %d): %d generated, %d kept at V <= %.1f",
            tile_ra,
            tile_dec,
            n_stars,
            len(stars),
            self.mag_limit,
        )
        return stars

    def generate_field(self, center: EquatorialCoord, radius_deg: float, tile_size_deg: float = 1.0) -> List[Star]:
        """Stars of every aligned tile overlapping a circular field.

        Tiles are enumerated over the field's Dec band; RA spans the whole
        circle near the poles. Stars outside the field are kept, so the
        result is the union of whole tiles.
        """
        center_ra_deg = center.ra_deg
        center_dec_deg = center.dec_deg

        dec_lo = max(center_dec_deg - radius_deg, -90.0)
        dec_hi = min(center_dec_deg + radius_deg, 90.0)
        dec_tiles = range(
            int(math.floor(dec_lo / tile_size_deg)),
            int(math.floor(min(dec_hi, 90.0 - 1e-9) / tile_size_deg)) + 1,
        )

        max_abs_dec = max(abs(dec_lo), abs(dec_hi))
        n_ra_tiles = int(math.ceil(360.0 / tile_size_deg))
        if max_abs_dec >= 89.0:
            ra_tiles = range(n_ra_tiles)
        else:
            ra_half = radius_deg / math.cos(math.radians(max_abs_dec))
            first = int(math.floor((center_ra_deg - ra_half) / tile_size_deg))
            last = int(math.floor((center_ra_deg + ra_half) / tile_size_deg))
            if last - first + 1 >= n_ra_tiles:
                ra_tiles = range(n_ra_tiles)
            else:
                ra_tiles = range(first, last + 1)

        stars: List[Star] = []
        seen = set()
        for tile_dec in dec_tiles:
            for tile_ra in ra_tiles:
                wrapped = tile_ra % n_ra_tiles
                if (wrapped, tile_dec) in seen:
                    continue
                seen.add((wrapped, tile_dec))
                stars.extend(self.generate_tile(wrapped * tile_size_deg, tile_dec * tile_size_deg, tile_size_deg))

        logger.info("Generated %d procedural stars around RA %.2f, Dec %.2f", len(stars), center_ra_deg, center_dec_deg)
        return stars
