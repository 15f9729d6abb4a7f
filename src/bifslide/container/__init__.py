"""Container layer for bifslide.

Provides the directory-cursor interface the vendor drivers read from, and
an implementation backed by the tifffile library.

Example:
    from bifslide.container import TifffileContainer

    with TifffileContainer("slide.bif") as container:
        print(container.is_tiled(), container.image_width())
"""

from bifslide.container.exceptions import (
    ContainerError,
    ContainerOpenError,
    DirectoryError,
)
from bifslide.container.protocol import TiffContainer
from bifslide.container.tifffile_container import TifffileContainer

__all__ = [
    "ContainerError",
    "ContainerOpenError",
    "DirectoryError",
    "TiffContainer",
    "TifffileContainer",
]
