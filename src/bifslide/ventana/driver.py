"""Ventana BigTIFF format driver.

Confirms that a TIFF container is a Ventana slide, collects its pyramid
levels and metadata, and hands the ordered levels to a tiled backend.

Associated images registered before a later failure stay registered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from bifslide.backend import QuickHash, TiffPyramid, TiffPyramidBackend, TiledBackend
from bifslide.config import Settings
from bifslide.container import TifffileContainer
from bifslide.utils.logging import (
    clear_correlation_context,
    get_logger,
    set_correlation_context,
)
from bifslide.ventana.classifier import classify
from bifslide.ventana.exceptions import FormatNotSupportedError, VentanaError
from bifslide.ventana.ordering import order_levels

if TYPE_CHECKING:
    from bifslide.container import TiffContainer
    from bifslide.ventana.associated import TiffAssociatedImage
    from bifslide.ventana.types import AssociatedImageRegistry, PropertyMap

logger = get_logger(__name__)


def try_ventana(
    container: TiffContainer,
    quickhash: QuickHash | None,
    properties: PropertyMap | None = None,
    associated_images: AssociatedImageRegistry | None = None,
    backend: TiledBackend | None = None,
    *,
    settings: Settings | None = None,
) -> bool:
    """Recognize ``container`` as a Ventana slide.

    Args:
        container: Open container positioned at its first directory.
        quickhash: Running content hash, passed to the backend untouched.
        properties: Property sink; None for detection only.
        associated_images: Associated image sink; None for detection only.
        backend: Tiled backend receiving the ordered levels; None skips
            the handoff.
        settings: Settings override; defaults to the global settings.

    Returns:
        True when the container is a Ventana slide.

    Raises:
        FormatNotSupportedError: If the container is not a Ventana slide.
        BadDataError: If the container is a malformed Ventana slide.
        AssociatedImageError: If the label or thumbnail can't be read.
    """
    try:
        levels = classify(container, properties, associated_images, settings=settings)
        level_directories = order_levels(levels)
    except VentanaError as e:
        logger.debug("Ventana detection failed", kind=e.kind, error=e.message)
        raise

    if backend is not None:
        backend.add_tiff_ops(
            container, level_directories[0], level_directories, quickhash
        )

    logger.info(
        "Ventana slide recognized",
        level_count=len(level_directories),
        base_directory=level_directories[0],
    )
    return True


@dataclass(frozen=True)
class VentanaSlide:
    """Result of opening a Ventana slide.

    Attributes:
        path: Path to the slide file.
        properties: Vendor and standard properties.
        associated_images: Label and thumbnail handles by name.
        pyramid: Pyramid levels, largest first.
    """

    path: Path
    properties: dict[str, str] = field(default_factory=dict)
    associated_images: dict[str, TiffAssociatedImage] = field(default_factory=dict)
    pyramid: TiffPyramid | None = None

    @property
    def level_directories(self) -> tuple[int, ...]:
        """Return the directory of each pyramid level, largest first."""
        if self.pyramid is None:
            return ()
        return self.pyramid.level_directories


def detect(path: str | Path, *, settings: Settings | None = None) -> bool:
    """Return True if the file at ``path`` is a Ventana slide.

    Only format mismatches map to False; malformed Ventana slides and
    unreadable files raise.

    Raises:
        BadDataError: If the file is a malformed Ventana slide.
        AssociatedImageError: If the label or thumbnail can't be read.
        ContainerOpenError: If the file can't be opened as a TIFF.
    """
    set_correlation_context(slide_path=str(path))
    try:
        with TifffileContainer(path) as container:
            return try_ventana(container, None, settings=settings)
    except FormatNotSupportedError:
        return False
    finally:
        clear_correlation_context()


def open_slide(
    path: str | Path,
    quickhash: QuickHash | None = None,
    *,
    settings: Settings | None = None,
) -> VentanaSlide:
    """Open a Ventana slide and collect its properties, images and pyramid.

    Raises:
        FormatNotSupportedError: If the file is not a Ventana slide.
        BadDataError: If the file is a malformed Ventana slide.
        AssociatedImageError: If the label or thumbnail can't be read.
        ContainerOpenError: If the file can't be opened as a TIFF.
    """
    properties: dict[str, str] = {}
    associated_images: dict[str, TiffAssociatedImage] = {}
    backend = TiffPyramidBackend()

    set_correlation_context(slide_path=str(path))
    try:
        with TifffileContainer(path) as container:
            try_ventana(
                container,
                quickhash,
                properties,
                associated_images,
                backend,
                settings=settings,
            )
            slide_path = container.path
    finally:
        clear_correlation_context()

    return VentanaSlide(
        path=slide_path,
        properties=properties,
        associated_images=associated_images,
        pyramid=backend.pyramid,
    )
