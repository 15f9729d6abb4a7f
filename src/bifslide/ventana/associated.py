"""Registration of label and thumbnail directories as associated images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bifslide.utils.logging import get_logger
from bifslide.ventana.exceptions import AssociatedImageError

if TYPE_CHECKING:
    from bifslide.container import TiffContainer
    from bifslide.ventana.types import AssociatedImageRegistry

logger = get_logger(__name__)


@dataclass(frozen=True)
class TiffAssociatedImage:
    """Handle to an associated image stored in its own directory.

    Attributes:
        name: Associated image name (e.g., "label", "thumbnail").
        directory: Container directory holding the image.
        width: Pixel width.
        height: Pixel height.
    """

    name: str
    directory: int
    width: int
    height: int

    @property
    def dimensions(self) -> tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)


def add_associated_image(
    registry: AssociatedImageRegistry | None,
    name: str | None,
    container: TiffContainer,
) -> bool:
    """Register the current directory of ``container`` as an associated image.

    Args:
        registry: Associated image sink; None validates the directory
            without recording it.
        name: Image name. Falls back to the directory's ImageDescription
            when None.
        container: Container positioned at the image directory.

    Returns:
        True if an image was registered (or would have been, without a
        registry), False if the directory has no usable name.

    Raises:
        AssociatedImageError: If the image dimensions cannot be read or the
            name is already registered.
    """
    if name is None:
        name = container.image_description()
    if not name:
        return False

    directory = container.current_directory()
    width = container.image_width()
    height = container.image_length()
    if width is None or height is None:
        raise AssociatedImageError(f"Can't read dimensions of directory {directory}")

    if registry is None:
        return True
    if name in registry:
        raise AssociatedImageError(f"Duplicate associated image: {name}")

    registry[name] = TiffAssociatedImage(
        name=name, directory=directory, width=width, height=height
    )
    logger.debug(
        "Registered associated image",
        name=name,
        directory=directory,
        width=width,
        height=height,
    )
    return True
