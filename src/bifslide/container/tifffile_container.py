"""TIFF container implementation wrapping tifffile.

This module provides the TifffileContainer class that exposes a
``tifffile.TiffFile`` through the directory-cursor interface expected by
the vendor drivers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import tifffile

from bifslide.container.exceptions import ContainerOpenError, DirectoryError

if TYPE_CHECKING:
    from types import TracebackType

TAG_IMAGE_DESCRIPTION = 270
TAG_COMPRESSION = 259
TAG_XML_PACKET = 700


class TifffileContainer:
    """Directory-addressable view of a TIFF or BigTIFF file.

    The cursor starts at the first directory.

    Usage:
        with TifffileContainer("/path/to/slide.bif") as container:
            while True:
                print(container.current_directory(), container.image_width())
                if not container.read_directory():
                    break

    Attributes:
        path: Path to the opened file.
    """

    __slots__ = ("_directory", "_path", "_tiff")

    def __init__(self, path: str | Path) -> None:
        """Open a TIFF file.

        Args:
            path: Path to the TIFF file.

        Raises:
            ContainerOpenError: If the file doesn't exist or cannot be
                parsed by tifffile.
        """
        self._path = Path(path).resolve()
        self._directory = 0
        self._tiff: tifffile.TiffFile | None

        if not self._path.exists():
            raise ContainerOpenError("File not found", path=self._path)

        try:
            self._tiff = tifffile.TiffFile(self._path)
        except (tifffile.TiffFileError, ValueError, OSError) as e:
            raise ContainerOpenError(
                f"Failed to open TIFF: {e}", path=self._path
            ) from e

        if len(self._tiff.pages) == 0:
            self._tiff.close()
            self._tiff = None
            raise ContainerOpenError("TIFF has no directories", path=self._path)

    @property
    def path(self) -> Path:
        """Return the path to the TIFF file."""
        return self._path

    def _ensure_open(self) -> tifffile.TiffFile:
        tiff = self._tiff
        if tiff is None:
            raise DirectoryError("TIFF is closed", path=self._path)
        return tiff

    def _page(self) -> tifffile.TiffPage:
        tiff = self._ensure_open()
        page = tiff.pages[self._directory]
        if not isinstance(page, tifffile.TiffPage):
            page = page.aspage()
        return page

    def _tag_value(self, code: int) -> Any:
        tag = self._page().tags.get(code)
        if tag is None:
            return None
        return tag.value

    def current_directory(self) -> int:
        return self._directory

    def directory_count(self) -> int:
        """Return the number of directories in the file."""
        return len(self._ensure_open().pages)

    def read_directory(self) -> bool:
        if self._directory + 1 >= self.directory_count():
            return False
        self._directory += 1
        return True

    def set_directory(self, index: int) -> None:
        if index < 0 or index >= self.directory_count():
            raise DirectoryError(f"No such directory: {index}", path=self._path)
        self._directory = index

    def is_tiled(self) -> bool:
        return bool(self._page().is_tiled)

    def image_width(self) -> int | None:
        value = self._page().imagewidth
        return int(value) if value else None

    def image_length(self) -> int | None:
        value = self._page().imagelength
        return int(value) if value else None

    def tile_width(self) -> int | None:
        value = self._page().tilewidth
        return int(value) if value else None

    def tile_length(self) -> int | None:
        value = self._page().tilelength
        return int(value) if value else None

    def image_description(self) -> str | None:
        return _as_text(self._tag_value(TAG_IMAGE_DESCRIPTION))

    def compression(self) -> int | None:
        value = self._tag_value(TAG_COMPRESSION)
        if value is None:
            return None
        return int(value)

    def xml_packet(self) -> bytes | None:
        return _as_bytes(self._tag_value(TAG_XML_PACKET))

    def is_codec_configured(self, compression: int) -> bool:
        return compression in tifffile.TIFF.DECOMPRESSORS

    def close(self) -> None:
        """Close the file and release resources."""
        if self._tiff is None:
            return
        self._tiff.close()
        self._tiff = None

    def __enter__(self) -> TifffileContainer:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and close the file."""
        self.close()

    def __repr__(self) -> str:
        """Return string representation."""
        return f"TifffileContainer(path={self._path!r}, directory={self._directory})"


def _as_text(value: Any) -> str | None:
    """Decode a string or byte tag value, dropping trailing NULs."""
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.rstrip(b"\x00").decode("utf-8", errors="replace")
    elif not isinstance(value, str):
        return None
    return value


def _as_bytes(value: Any) -> bytes | None:
    """Return a byte tag value undecoded, dropping trailing NULs.

    The XML declaration inside the packet names its encoding, so decoding
    is left to the XML parser.
    """
    if isinstance(value, str):
        value = value.encode("utf-8")
    elif not isinstance(value, bytes):
        return None
    return value.rstrip(b"\x00")
