"""Exceptions raised by container implementations."""

from pathlib import Path


class ContainerError(Exception):
    """Base exception for container errors."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else None
        self.message = message
        super().__init__(f"{message} (path: {self.path})" if self.path else message)


class ContainerOpenError(ContainerError):
    """Raised when a file cannot be opened as a TIFF container.

    This error is raised when:
    - The file does not exist
    - The file is not a TIFF or BigTIFF file
    - The TIFF header or first directory is corrupt
    """


class DirectoryError(ContainerError):
    """Raised when a container directory cannot be selected."""
