"""Protocol for directory-addressable image containers.

A container is a sequence of directories (TIFF IFDs) with a cursor that
points at the current one. Tag accessors read from the current directory
and return None when the tag is absent.
"""

from typing import Protocol


class TiffContainer(Protocol):
    """Protocol implemented by TIFF-like containers.

    Implementations are not thread-safe: the directory cursor is shared
    state, so callers must serialize access per open container.
    """

    def current_directory(self) -> int:
        """Return the index of the current directory."""
        ...

    def read_directory(self) -> bool:
        """Advance to the next directory; return False if there is none."""
        ...

    def set_directory(self, index: int) -> None:
        """Move the cursor to directory ``index``."""
        ...

    def is_tiled(self) -> bool:
        """Return True if the current directory uses a tiled layout."""
        ...

    def image_width(self) -> int | None:
        """Return the ImageWidth tag of the current directory."""
        ...

    def image_length(self) -> int | None:
        """Return the ImageLength tag of the current directory."""
        ...

    def tile_width(self) -> int | None:
        """Return the TileWidth tag of the current directory."""
        ...

    def tile_length(self) -> int | None:
        """Return the TileLength tag of the current directory."""
        ...

    def image_description(self) -> str | None:
        """Return the ImageDescription tag of the current directory."""
        ...

    def compression(self) -> int | None:
        """Return the Compression tag of the current directory."""
        ...

    def xml_packet(self) -> bytes | None:
        """Return the raw XMLPacket (XMP) tag of the current directory."""
        ...

    def is_codec_configured(self, compression: int) -> bool:
        """Return True if tiles compressed with ``compression`` can be decoded."""
        ...
