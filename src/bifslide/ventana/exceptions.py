"""Exceptions raised while recognizing Ventana slides.

Every failure carries a ``kind`` that tells the caller how to react:

- ``format-not-supported``: the file is not a Ventana slide; other format
  detectors may be tried.
- ``bad-data``: the file is a Ventana slide but is malformed; other
  detectors should not be tried.
- ``io``: an associated image could not be read.
"""

from pathlib import Path


class VentanaError(Exception):
    """Base exception for all Ventana recognition errors."""

    kind: str = "error"

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize error with optional path context.

        Args:
            message: Human-readable error description.
            path: Path to the slide file that caused the error.
        """
        self.path = Path(path) if path else None
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with path context if available."""
        if self.path:
            return f"{self.message} (path: {self.path})"
        return self.message


class FormatNotSupportedError(VentanaError):
    """Raised when the container is not a Ventana slide.

    This error is raised when:
    - The first directory is not tiled
    - The level-0 XML packet is missing or lacks the iScan marker
    - The embedded XML cannot be parsed
    """

    kind = "format-not-supported"


class BadDataError(VentanaError):
    """Raised when a Ventana slide is malformed.

    This error is raised when:
    - The XML does not contain exactly one iScan element
    - A pyramid level uses an unreadable or unsupported compression
    - No pyramid levels were found
    """

    kind = "bad-data"


class AssociatedImageError(VentanaError):
    """Raised when a label or thumbnail directory cannot be read."""

    kind = "io"
