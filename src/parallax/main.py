import argparse
import logging
import math
import sys
from datetime import datetime, timezone

from . import __version__
from .astro.time_system import parse_utc_time, to_julian_date
from .atmosphere.provider import get_site
from .catalog import StarCatalog, load_builtin, load_catalog_csv, load_plxcat
from .config import settings
from .discovery import (
    DiscoveryEngine,
    can_measure_parallax,
    minimum_detectable_planet_radius,
    parallax_detection_limit_mas,
)
from .errors import ParallaxError, PlxCatFormatError, TimeParseError, handle_error, print_error
from .models import OBSERVING_SITES, DiscoveryType
from .observatory import ObservingSession
from .optics import TELESCOPES, get_telescope
from .renderer import build_render_records, camera_magnitude_limit
from .report import build_status_report, format_star_readout, format_status_report
from .universe import ProceduralGenerator

logger = logging.getLogger(__name__)

QUERY_MAG_LIMIT = 11.0
FOLLOW_UP_NIGHTS = 3
TRANSIT_EXPOSURE_S = 300.0
M_DWARF_RADIUS_RS = 0.2


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Simulate a night of ground-based observation from a real or preset site."
    )
    parser.add_argument(
        "--utc-time",
        type=str,
        default=None,
        help="ISO-8601 UTC timestamp (default: current time)",
    )
    parser.add_argument(
        "--site",
        type=str,
        default=settings.site,
        help=f"Observing site preset, one of {', '.join(OBSERVING_SITES)} (default: {settings.site})",
    )
    parser.add_argument(
        "--telescope",
        type=str,
        default=settings.telescope,
        help=f"Telescope preset, one of {', '.join(TELESCOPES)} (default: {settings.telescope})",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=str(settings.catalog_path) if settings.catalog_path else None,
        help="CSV or .plxcat star catalog (default: built-in bright star table)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.universe_seed,
        help="Universe seed for procedural stars",
    )
    parser.add_argument(
        "--target",
        type=str,
        default=settings.target,
        help=f"Catalog star name to observe (default: {settings.target})",
    )
    parser.add_argument(
        "--exposure",
        type=float,
        default=settings.exposure_s,
        help="Exposure time in seconds",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Render field of view in degrees (default: twice the detector field)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log diagnostics to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def load_catalog(catalog_path: str | None) -> StarCatalog:
    """Load a CSV or .plxcat catalog, falling back to the built-in stars on failure."""
    if catalog_path is None:
        return load_builtin()

    if catalog_path.endswith(".plxcat"):
        try:
            return load_plxcat(catalog_path)
        except PlxCatFormatError as e:
            logger.error("Binary catalog rejected, using built-in stars: %s", e.message)
            print_error(e)
            return load_builtin()

    result = load_catalog_csv(catalog_path)
    if not result.ok:
        logger.error("Catalog load failed, using built-in stars: %s", result.error.reason)
        print_error(result.error)
        return load_builtin()

    if result.skipped:
        print(f"  Skipped {result.skipped} malformed rows")
    return StarCatalog.from_entries(result.entries)


def run_simulation(
    utc_time: str | None = None,
    site_id: str = "mcdonald",
    telescope_id: str = "reflector_1m",
    catalog_path: str | None = None,
    seed: int = 0xDEADBEEFCAFEBABE,
    target_name: str = "Betelgeuse",
    exposure_s: float = 60.0,
    fov_deg: float | None = None,
) -> int:
    """Run one observing session and print its reports.

    Args:
        utc_time: ISO-8601 UTC timestamp (None for now)
        site_id: Observing site preset key
        telescope_id: Telescope preset key
        catalog_path: Optional CSV or .plxcat catalog path
        seed: Universe seed for procedural stars
        target_name: Catalog star to observe
        exposure_s: Exposure time in seconds
        fov_deg: Render field of view in degrees

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        if utc_time is None:
            start = datetime.now(timezone.utc)
        else:
            start = parse_utc_time(utc_time)
        jd_start = to_julian_date(start)

        site = get_site(site_id)
        telescope = get_telescope(telescope_id)

        print(f"Parallax {__version__}")
        print()

        print("Loading star catalog...")
        catalog = load_catalog(catalog_path)
        print(f"  Loaded {len(catalog)} catalog stars")

        target = catalog.find_by_name(target_name)
        if target is None:
            target = load_builtin().find_by_name(target_name)
        if target is None:
            raise ParallaxError(
                f"Target star '{target_name}' not found",
                suggestions=[
                    "Use a star name from the catalog, e.g. Betelgeuse, Sirius or Vega",
                    "Hipparcos catalogs carry no names; targets fall back to the built-in table",
                ],
            )

        tile_size = settings.tile_size_deg
        generator = ProceduralGenerator(seed, mag_limit=settings.procedural_mag_limit)
        tile_ra = target.position.ra_deg - tile_size / 2.0
        tile_dec = target.position.dec_deg - tile_size / 2.0
        procedural = generator.generate_tile(tile_ra, tile_dec, tile_size)
        catalog.extend(procedural)
        print(f"  Generated {len(procedural)} procedural stars (V<{generator.mag_limit:g})")
        print()

        session = ObservingSession(site, telescope, jd_start, min_altitude_deg=settings.min_altitude_deg)
        fov_w, fov_h = telescope.field_of_view()

        print(f"Observatory: {site.name}")
        print(f"  Location: {site.location.latitude_deg:.4f}°, {site.location.longitude_deg:.4f}°")
        print(f"  Elevation: {site.elevation_m:.0f} m")
        print(f"Telescope: {telescope.name}")
        print(f"  Aperture: {telescope.aperture_mm:.1f} mm, f/{telescope.f_ratio():.1f}")
        print(f"  Pixel scale: {telescope.pixel_scale():.3f} arcsec/pixel")
        print(f"  FOV: {fov_w:.3f} x {fov_h:.3f} degrees")
        print(f"  Diffraction limit: {telescope.diffraction_limit_arcsec():.3f} arcsec")
        print()

        query_radius = max(fov_w, fov_h) * 0.6
        field_stars = catalog.query(target.position, query_radius, mag_limit=QUERY_MAG_LIMIT)
        print(f"Query: {len(field_stars)} stars within {query_radius:.2f} deg of {target.name} (V<{QUERY_MAG_LIMIT:g})")

        visible = session.is_visible(target.position)
        target_snr = session.snr(target.position, target.v_magnitude, exposure_s)
        print(f"{target.name} status:")
        print(f"  Above {session.min_altitude_deg:g} deg altitude: {'Yes' if visible else 'No'}")
        print(f"  SNR ({exposure_s:g}s exposure): {target_snr:.1f}")
        print()

        if fov_deg is None:
            fov_deg = max(fov_w, fov_h) * 2.0
        records = build_render_records(
            field_stars,
            site.location,
            session.lst(),
            session.to_horizontal(target.position),
            math.radians(fov_deg),
            camera_magnitude_limit(fov_deg),
            atmosphere=session.atmosphere,
        )
        print(f"Render: {len(records)} stars on screen in a {fov_deg:.2f} deg field")
        print()

        report = build_status_report(session, target.position, target_snr)
        print(format_status_report(report))
        print(format_star_readout(target, session, exposure_s))
        print()

        run_discovery_demo(catalog, session, target, exposure_s)

        regenerated = generator.generate_tile(tile_ra, tile_dec, tile_size)
        same = [(s.id, s.v_magnitude) for s in regenerated] == [(s.id, s.v_magnitude) for s in procedural]
        print(f"Determinism check, same tile and seed: {'PASS' if same else 'FAIL'}")

        return 0

    except TimeParseError as e:
        return handle_error(e, "parsing UTC time")
    except ParallaxError as e:
        return handle_error(e)
    except Exception as e:
        return handle_error(e, "running observing session")


def run_discovery_demo(catalog: StarCatalog, session: ObservingSession, target, exposure_s: float) -> None:
    """Parallax and transit limits plus a few nights of follow-up on the target."""
    telescope = session.telescope
    print("--- Discovery ---")

    barnard = catalog.find_by_name("Barnard's Star") or load_builtin().find_by_name("Barnard's Star")
    if barnard is not None:
        limit = parallax_detection_limit_mas(telescope)
        measurable = can_measure_parallax(barnard, telescope)
        print(f"Barnard's Star parallax: {barnard.parallax_mas:.1f} mas")
        print(f"Parallax detection limit (6 epochs): {limit:.3f} mas")
        print(f"Measurable: {'Yes' if measurable else 'No'}")

        transit_snr = session.snr(barnard.position, barnard.v_magnitude, TRANSIT_EXPOSURE_S)
        radius = minimum_detectable_planet_radius(transit_snr, M_DWARF_RADIUS_RS)
        print(f"Min detectable planet radius ({TRANSIT_EXPOSURE_S:g}s): {radius:.2f} Earth radii")

    engine = DiscoveryEngine()
    discovery = engine.new_discovery(target.id, target.name, DiscoveryType.PHOTOMETRIC_VARIABLE, session.julian_date)
    follow_up = ObservingSession(session.site, telescope, session.julian_date, session.min_altitude_deg)
    for _ in range(FOLLOW_UP_NIGHTS):
        engine.record_observation(discovery, follow_up.observe(target, exposure_s))
        follow_up.advance_time(24.0)
    print(
        f"Follow-up of {target.name}: {discovery.n_confirmations} confirmations, "
        f"{engine.state_of(discovery).value}"
    )
    print()


def main():
    """CLI entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    exit_code = run_simulation(
        utc_time=args.utc_time,
        site_id=args.site,
        telescope_id=args.telescope,
        catalog_path=args.catalog,
        seed=args.seed,
        target_name=args.target,
        exposure_s=args.exposure,
        fov_deg=args.fov,
    )

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
