"""Console status panel and star readout text."""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..models.coords import EquatorialCoord

if TYPE_CHECKING:
    from ..models.star import Star
    from ..observatory.session import ObservingSession

PANEL_WIDTH = 64
LABEL_WIDTH = 22
PARSECS_TO_LIGHT_YEARS = 3.2616


@dataclass(frozen=True)
class StatusReport:
    """Snapshot of the observing state toward one target."""

    site_name: str
    julian_date: float
    lst_hours: float
    target_ra_deg: float
    target_dec_deg: float
    altitude_deg: float
    azimuth_deg: float
    airmass: float
    telescope_name: str
    aperture_mm: float
    f_ratio: float
    pixel_scale_arcsec: float
    seeing_arcsec: float
    extinction_mag: float
    sky_background: float
    snr: float


def build_status_report(session: "ObservingSession", target: EquatorialCoord, snr: float) -> StatusReport:
    """Collect the status panel values for a target.

    Args:
        session: Active observing session
        target: Target position
        snr: SNR to display, usually from ``session.snr``

    Returns:
        StatusReport at the session's current time
    """
    hz = session.to_horizontal(target)
    atmosphere = session.atmosphere
    telescope = session.telescope

    return StatusReport(
        site_name=session.site.name,
        julian_date=session.julian_date,
        lst_hours=math.degrees(session.lst()) / 15.0,
        target_ra_deg=target.ra_deg,
        target_dec_deg=target.dec_deg,
        altitude_deg=hz.alt_deg,
        azimuth_deg=hz.az_deg,
        airmass=atmosphere.airmass(hz.alt_deg),
        telescope_name=telescope.name,
        aperture_mm=telescope.aperture_mm,
        f_ratio=telescope.f_ratio(),
        pixel_scale_arcsec=telescope.pixel_scale(),
        seeing_arcsec=atmosphere.effective_seeing(hz.alt_deg),
        extinction_mag=atmosphere.extinction_mag(hz.alt_deg),
        sky_background=atmosphere.sky_background(hz.alt_deg),
        snr=snr,
    )


def _format_panel(title: str, sections: List[List[Tuple[str, str]]]) -> str:
    lines = ["=" * PANEL_WIDTH, f"| {title}", "-" * PANEL_WIDTH]
    for i, rows in enumerate(sections):
        if i > 0:
            lines.append("-" * PANEL_WIDTH)
        lines.extend(f"| {label:<{LABEL_WIDTH}} : {value}" for label, value in rows)
    lines.append("=" * PANEL_WIDTH)
    return "\n".join(lines)


def format_status_report(report: StatusReport) -> str:
    return _format_panel(
        "PARALLAX OBSERVATORY CONSOLE",
        [
            [
                ("Site", report.site_name),
                ("JD", f"{report.julian_date:.5f}"),
                ("LST", f"{report.lst_hours:.4f} h"),
            ],
            [
                ("Target RA", f"{report.target_ra_deg:.4f} deg"),
                ("Target Dec", f"{report.target_dec_deg:.4f} deg"),
                ("Azimuth", f"{report.azimuth_deg:.2f} deg"),
                ("Altitude", f"{report.altitude_deg:.2f} deg"),
                ("Airmass", f"{report.airmass:.3f}"),
            ],
            [
                ("Telescope", report.telescope_name),
                ("Aperture", f"{report.aperture_mm:.1f} mm"),
                ("F-ratio", f"f/{report.f_ratio:.1f}"),
                ("Pixel scale", f'{report.pixel_scale_arcsec:.3f} "/px'),
            ],
            [
                ("Seeing", f"{report.seeing_arcsec:.2f} arcsec FWHM"),
                ("Extinction", f"{report.extinction_mag:.3f} mag"),
                ("Sky bg", f"{report.sky_background:.1f} mag/arcsec^2"),
                ("SNR", f"{report.snr:.1f}"),
            ],
        ],
    )


def _fmt_optional(value: Optional[float], precision: int) -> str:
    return "n/a" if value is None else f"{value:.{precision}f}"


def format_star_readout(star: "Star", session: "ObservingSession", exposure_s: float = 60.0) -> str:
    """Catalog record of a star with its current altitude and SNR."""
    hz = session.to_horizontal(star.position)
    snr = session.snr(star.position, star.v_magnitude, exposure_s)

    if star.distance_pc > 0.0:
        distance = f"{star.distance_pc:.2f} pc  ({star.distance_pc * PARSECS_TO_LIGHT_YEARS:.2f} ly)"
    else:
        distance = "unknown"

    return _format_panel(
        "STAR CATALOG RECORD",
        [
            [
                ("Name", star.name or "(unnamed)"),
                ("Catalog ID", str(star.id)),
                ("RA (J2000)", f"{star.position.ra_deg:.4f} deg"),
                ("Dec (J2000)", f"{star.position.dec_deg:.4f} deg"),
                ("V magnitude", f"{star.v_magnitude:.2f}"),
                ("Abs magnitude", _fmt_optional(star.abs_magnitude, 2)),
                ("Distance", distance),
                ("Parallax", f"{star.parallax_mas:.3f} mas"),
                ("Spectral", star.spectral_class.value),
                ("Variable", "Yes" if star.is_variable else "No"),
            ],
            [
                ("Altitude", f"{hz.alt_deg:.2f} deg"),
                ("Azimuth", f"{hz.az_deg:.2f} deg"),
                (f"SNR ({exposure_s:.0f}s)", f"{snr:.1f}"),
            ],
        ],
    )
