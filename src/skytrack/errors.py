"""Error types raised by skytrack."""

from typing import Optional


class SkytrackError(Exception):
    """Base exception for skytrack-specific errors."""

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


class InvalidTransformError(SkytrackError):
    """Raised when a frame or center pair has no registered transform."""

    def __init__(self, source: str, target: str, kind: str = "frame"):
        self.source = source
        self.target = target
        self.kind = kind
        message = f"No {kind} transform registered from {source} to {target}"
        suggestions = [
            f"Check has_{kind}_transform({source}, {target}) before transforming",
            "Horizontal coordinates are only reachable through to_horizontal()",
            "Bodycentric positions are only reachable through to_bodycentric()",
        ]
        super().__init__(message, suggestions)


class RootNotBracketedError(SkytrackError):
    """Raised when root refinement is asked to work on an interval without a sign change."""

    def __init__(self, start: float, end: float, f_start: float, f_end: float):
        self.start = start
        self.end = end
        message = (
            f"Root not bracketed in [{start!r}, {end!r}]: "
            f"f(start)={f_start:.6g}, f(end)={f_end:.6g}"
        )
        suggestions = [
            "The function must change sign between the interval endpoints",
            "Use a finer scan step if the function is sampled too coarsely",
        ]
        super().__init__(message, suggestions)


class UnsupportedQueryError(SkytrackError):
    """Raised when a target variant cannot answer a query."""

    def __init__(self, query: str, target_name: str):
        message = f"Query '{query}' is not supported for target '{target_name}'"
        suggestions = [
            "Range and azimuth-extremum queries are only available for solar-system bodies",
            "Use above_threshold()/below_threshold() and intersect the results instead",
        ]
        super().__init__(message, suggestions)


class DegenerateGeometryError(SkytrackError):
    """Raised when a geometric quantity is undefined (e.g. cos(dec) = 0)."""


class UnknownBodyError(SkytrackError, ValueError):
    """Raised when a body identifier is not recognized."""

    def __init__(self, body_id: str, available_bodies: list[str]):
        message = f"Unknown body: '{body_id}'"
        suggestions = [
            f"Available bodies: {', '.join(sorted(available_bodies))}",
            "Check spelling (body names are case-insensitive)",
        ]
        super().__init__(message, suggestions)


class StarNotFoundError(SkytrackError, ValueError):
    """Raised when a star is not in the built-in catalog."""

    def __init__(self, name: str, available_stars: list[str]):
        message = f"Unknown star: '{name}'"
        suggestions = [
            f"Available stars: {', '.join(sorted(available_stars))}",
            "Create a FixedDirection for stars outside the built-in catalog",
        ]
        super().__init__(message, suggestions)


class TimeParseError(SkytrackError, ValueError):
    """Raised when UTC time cannot be parsed."""

    def __init__(self, utc_time: str):
        message = f"Invalid UTC time format: '{utc_time}'"
        suggestions = [
            "Use ISO-8601 format with 'Z' suffix for UTC (e.g., '2024-01-15T18:00:00Z')",
        ]
        super().__init__(message, suggestions)


class ConvergenceWarning(UserWarning):
    """Issued when an iterative solver stops at its iteration limit."""
