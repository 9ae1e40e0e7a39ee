"""Error handling utilities for the observatory simulator."""

import sys
from typing import Optional


class ParallaxError(Exception):
    """Base exception for simulator-specific errors."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        """Initialize with message and optional suggestions.

        Args:
            message: Error description
            suggestions: Optional list of actionable suggestions
        """
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with suggestions."""
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class CatalogLoadError(ParallaxError):
    """Describes why a catalog file could not be loaded.

    Loaders return this inside a failed result instead of raising it.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        message = f"Could not load catalog '{path}': {reason}"
        suggestions = [
            "Check that the file exists and is readable",
            "Expected header: Name,RA_deg,Dec_deg,Vmag,BV or HIP,RA_deg,Dec_deg,Vmag,BV",
            "Omit --catalog to fall back to the built-in bright star table",
        ]
        super().__init__(message, suggestions)


class SiteNotFoundError(ParallaxError):
    """Raised when an observing site identifier is not recognized."""

    def __init__(self, site_id: str, available_sites: list[str]):
        message = f"Unknown observing site: '{site_id}'"
        suggestions = [
            f"Available sites: {', '.join(sorted(available_sites))}",
            "Site names are case-insensitive",
        ]
        super().__init__(message, suggestions)


class TelescopeNotFoundError(ParallaxError):
    """Raised when a telescope preset identifier is not recognized."""

    def __init__(self, telescope_id: str, available_telescopes: list[str]):
        message = f"Unknown telescope preset: '{telescope_id}'"
        suggestions = [
            f"Available telescopes: {', '.join(sorted(available_telescopes))}",
        ]
        super().__init__(message, suggestions)


class TimeParseError(ParallaxError):
    """Raised when UTC time cannot be parsed."""

    def __init__(self, utc_time: str):
        message = f"Invalid UTC time format: '{utc_time}'"
        suggestions = [
            "Use ISO-8601 format with 'Z' suffix for UTC (e.g., '2024-11-15T18:00:00Z')",
            "Omit --utc-time to use the current time",
        ]
        super().__init__(message, suggestions)


class PlxCatFormatError(ParallaxError):
    """Raised when a binary .plxcat file does not match the format contract."""

    def __init__(self, path: str, reason: str):
        message = f"Invalid .plxcat file '{path}': {reason}"
        suggestions = [
            "Regenerate the file with parallax.catalog.plxcat.write_plxcat",
        ]
        super().__init__(message, suggestions)


def print_error(error: Exception) -> None:
    """Print error to stderr with formatted output.

    Args:
        error: Exception to print
    """
    print(f"Error: {error}", file=sys.stderr)

    if isinstance(error, ParallaxError):
        if error.suggestions:
            print(file=sys.stderr)


def handle_error(error: Exception, context: Optional[str] = None) -> int:
    """Handle an error with optional context and return exit code.

    Args:
        error: Exception that occurred
        context: Optional description of what was being attempted

    Returns:
        Exit code (1 for error)
    """
    if context:
        print(f"Error while {context}:", file=sys.stderr)

    print_error(error)

    import traceback

    if not isinstance(error, ParallaxError):
        traceback.print_exc()

    return 1
