"""Tests for deterministic procedural star generation."""

import math

import pytest

from parallax.models import EquatorialCoord, SpectralClass, bv_from_spectral_class, spectral_class_from_bv
from parallax.universe import (
    PcgRng,
    ProceduralGenerator,
    abs_magnitude_from_spectral_class,
    sample_kroupa_mass,
    spectral_class_from_mass,
)

SEED = 0xDEADBEEFCAFEBABE


@pytest.fixture
def generator():
    return ProceduralGenerator(SEED, mag_limit=12.0)


class TestPcgRng:
    """PCG-XSH-RR generator."""

    def test_same_seed_same_sequence(self):
        a = PcgRng(12345)
        b = PcgRng(12345)
        assert [a.next_u32() for _ in range(20)] == [b.next_u32() for _ in range(20)]

    def test_different_seeds_differ(self):
        a = PcgRng(1)
        b = PcgRng(2)
        assert [a.next_u32() for _ in range(5)] != [b.next_u32() for _ in range(5)]

    def test_different_streams_differ(self):
        a = PcgRng(99, stream=1)
        b = PcgRng(99, stream=2)
        assert [a.next_u32() for _ in range(5)] != [b.next_u32() for _ in range(5)]

    def test_outputs_are_32_bit(self):
        rng = PcgRng(SEED)
        for _ in range(1000):
            assert 0 <= rng.next_u32() < 2**32

    def test_huge_seed_wraps(self):
        """Seeds beyond 64 bits behave like their low 64 bits."""
        a = PcgRng(2**64 + 7)
        b = PcgRng(7)
        assert a.next_u32() == b.next_u32()

    def test_double_range(self):
        rng = PcgRng(7)
        values = [rng.next_double() for _ in range(2000)]
        assert all(0.0 <= v < 1.0 for v in values)
        assert 0.4 < sum(values) / len(values) < 0.6

    def test_range_and_uint(self):
        rng = PcgRng(8)
        for _ in range(500):
            assert -0.5 <= rng.next_in_range(-0.5, 0.5) < 0.5
            assert 0 <= rng.next_uint(20) < 20


class TestInitialMassFunction:
    def test_mass_bounds(self):
        rng = PcgRng(3)
        masses = [sample_kroupa_mass(rng) for _ in range(2000)]
        assert all(0.1 <= m <= 150.0 for m in masses)

    def test_low_mass_stars_dominate(self):
        rng = PcgRng(4)
        masses = [sample_kroupa_mass(rng) for _ in range(4000)]
        low = sum(1 for m in masses if m < 0.5)
        assert low / len(masses) > 0.5

    @pytest.mark.parametrize(
        "mass,expected",
        [
            (40.0, SpectralClass.O),
            (16.0, SpectralClass.O),
            (5.0, SpectralClass.B),
            (2.1, SpectralClass.B),
            (1.5, SpectralClass.A),
            (1.1, SpectralClass.F),
            (1.0, SpectralClass.G),
            (0.5, SpectralClass.K),
            (0.2, SpectralClass.M),
            (0.05, SpectralClass.L),
        ],
    )
    def test_spectral_class_from_mass(self, mass, expected):
        assert spectral_class_from_mass(mass) == expected

    def test_abs_magnitude_anchors(self):
        assert abs_magnitude_from_spectral_class(SpectralClass.O) == -5.0
        assert abs_magnitude_from_spectral_class(SpectralClass.G) == 5.0
        assert abs_magnitude_from_spectral_class(SpectralClass.L) == 14.0
        assert abs_magnitude_from_spectral_class(SpectralClass.WR) == 5.0


class TestProceduralGenerator:
    def test_tile_seed_mixing(self, generator):
        mask = 2**64 - 1
        expected = SEED ^ (((3 + 0xFFFF) * 6364136223846793005) & mask) ^ (((-2 + 0xFFFF) * 1442695040888963407) & mask)
        assert generator.tile_seed(3, -2) == expected

    def test_tile_seeds_differ(self, generator):
        assert generator.tile_seed(0, 0) != generator.tile_seed(1, 0)
        assert generator.tile_seed(0, 0) != generator.tile_seed(0, 1)

    def test_stellar_density(self):
        assert ProceduralGenerator.stellar_density(0.0, -28.0) == pytest.approx(530.0)
        assert ProceduralGenerator.stellar_density(0.0, 80.0) == pytest.approx(500.0 * math.exp(-108.0 / 25.0) + 30.0)

    def test_same_tile_is_identical(self, generator):
        first = generator.generate_tile(81.8, -7.4, 4.0)
        second = ProceduralGenerator(SEED, mag_limit=12.0).generate_tile(81.8, -7.4, 4.0)
        assert len(first) > 0
        assert first == second

    def test_different_seed_differs(self):
        a = ProceduralGenerator(1).generate_tile(10.0, 10.0, 2.0)
        b = ProceduralGenerator(2).generate_tile(10.0, 10.0, 2.0)
        assert [s.v_magnitude for s in a] != [s.v_magnitude for s in b]

    def test_tiles_have_disjoint_ids(self, generator):
        a = generator.generate_tile(10.0, 10.0, 2.0)
        b = generator.generate_tile(12.0, 10.0, 2.0)
        c = generator.generate_tile(10.0, 12.0, 2.0)
        ids = [s.id for s in a + b + c]
        assert len(ids) == len(set(ids))

    def test_stars_inside_tile(self, generator):
        for star in generator.generate_tile(80.0, -8.0, 2.0):
            assert 80.0 <= star.position.ra_deg <= 82.0
            assert -8.0 <= star.position.dec_deg <= -6.0

    def test_magnitude_limit(self):
        bright = ProceduralGenerator(SEED, mag_limit=8.0).generate_tile(80.0, -8.0, 2.0)
        faint = ProceduralGenerator(SEED, mag_limit=12.0).generate_tile(80.0, -8.0, 2.0)
        assert all(s.v_magnitude <= 8.0 for s in bright)
        assert len(bright) < len(faint)
        assert set(s.id for s in bright) <= set(s.id for s in faint)

    def test_star_properties(self, generator):
        stars = generator.generate_tile(80.0, -8.0, 2.0)
        for star in stars:
            assert star.is_procedural
            assert 10.0 <= star.distance_pc <= 5000.0
            assert star.parallax_mas == pytest.approx(1000.0 / star.distance_pc)
            expected_v = star.abs_magnitude + 5.0 * math.log10(star.distance_pc / 10.0)
            assert star.v_magnitude == pytest.approx(expected_v)

    def test_generate_star_independent_of_order(self, generator):
        """A star is a pure function of seed, id and position."""
        a = generator.generate_star(10.0, 20.0, 100.0, 555)
        generator.generate_tile(0.0, 0.0, 1.0)
        b = generator.generate_star(10.0, 20.0, 100.0, 555)
        assert a == b

    def test_some_variables(self, generator):
        stars = generator.generate_tile(-3.0, -30.0, 3.0)
        assert any(s.is_variable for s in stars)
        assert not all(s.is_variable for s in stars)

    def test_negative_ra_tile_wraps(self, generator):
        for star in generator.generate_tile(-1.0, 0.0, 1.0):
            assert 359.0 <= star.position.ra_deg < 360.0

    def test_full_turn_of_ra_is_same_tile(self, generator):
        assert generator.generate_tile(360.0, 10.0, 1.0) == generator.generate_tile(0.0, 10.0, 1.0)
        assert generator.generate_tile(-359.0, 10.0, 1.0) == generator.generate_tile(1.0, 10.0, 1.0)

    def test_colour_matches_spectral_class(self, generator):
        stars = generator.generate_tile(80.0, -8.0, 2.0)
        assert len(stars) > 0
        main_sequence = set("OBAFGKM")
        for star in stars:
            assert star.color_bv == bv_from_spectral_class(star.spectral_class)
            if star.spectral_class.value in main_sequence:
                assert spectral_class_from_bv(star.color_bv) == star.spectral_class

    @pytest.mark.parametrize(
        "spectral_class, expected",
        [
            (SpectralClass.O, -0.35),
            (SpectralClass.G, 0.695),
            (SpectralClass.M, 1.70),
            (SpectralClass.L, 1.70),
            (SpectralClass.WR, -0.35),
            (SpectralClass.UNKNOWN, 0.65),
        ],
    )
    def test_bv_band_midpoints(self, spectral_class, expected):
        assert bv_from_spectral_class(spectral_class) == pytest.approx(expected)

    def test_generate_field_covers_tiles(self, generator):
        centre = EquatorialCoord.from_degrees(83.8, -5.4)
        field = generator.generate_field(centre, 1.0, tile_size_deg=1.0)
        expected = []
        for tile_dec in range(-7, -4):
            for tile_ra in range(82, 85):
                expected.extend(generator.generate_tile(float(tile_ra), float(tile_dec), 1.0))
        assert sorted(s.id for s in field) == sorted(s.id for s in expected)

    def test_generate_field_at_pole(self, generator):
        centre = EquatorialCoord.from_degrees(0.0, 90.0)
        field = generator.generate_field(centre, 0.5, tile_size_deg=1.0)
        assert all(s.position.dec_deg >= 89.0 for s in field)
        ra_values = [s.position.ra_deg for s in field]
        assert max(ra_values) - min(ra_values) > 300.0
