from .status import StatusReport, build_status_report, format_star_readout, format_status_report

__all__ = ["StatusReport", "build_status_report", "format_star_readout", "format_status_report"]
