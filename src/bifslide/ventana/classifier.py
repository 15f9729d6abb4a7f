"""Directory classification for Ventana BigTIFF slides.

Ventana slides store the label image in directory 0 and the thumbnail in
directory 1. Pyramid levels are the remaining tiled directories whose
ImageDescription carries a ``level=<n>`` token; anything else (e.g. an
overview image) is ignored. The level-0 directory holds the XML packet
that confirms the format and carries the scan metadata.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bifslide.config import Settings
from bifslide.config import settings as default_settings
from bifslide.utils.logging import get_logger
from bifslide.ventana.associated import add_associated_image
from bifslide.ventana.exceptions import (
    AssociatedImageError,
    BadDataError,
    FormatNotSupportedError,
)
from bifslide.ventana.keyvalue import find_value
from bifslide.ventana.types import (
    FORMAT_MARKER,
    PROPERTY_NAME_VENDOR,
    VENDOR,
    AssociatedImageRegistry,
    Level,
    PropertyMap,
)
from bifslide.ventana.xpath import parse_scan_info

if TYPE_CHECKING:
    from bifslide.container import TiffContainer

logger = get_logger(__name__)

# Associated images live at fixed directory positions
ASSOCIATED_IMAGE_SLOTS: dict[int, str] = {
    0: "label",
    1: "thumbnail",
}

BASE_LEVEL = "0"


def associated_image_slot(directory: int) -> str | None:
    """Return the associated image name stored at ``directory``, if any."""
    return ASSOCIATED_IMAGE_SLOTS.get(directory)


class DirectoryClassifier:
    """Walks a container and collects its pyramid levels.

    A classifier instance handles one classification run; it records
    whether the level-0 metadata has already been parsed.
    """

    def __init__(
        self,
        container: TiffContainer,
        properties: PropertyMap | None = None,
        associated_images: AssociatedImageRegistry | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._container = container
        self._properties = properties
        self._associated_images = associated_images
        self._settings = settings or default_settings
        self._metadata_parsed = False

    def classify(self) -> list[Level]:
        """Classify every directory from the current one to the last.

        Returns:
            Pyramid levels in directory order.

        Raises:
            FormatNotSupportedError: If the container is not tiled or the
                level-0 directory does not identify a Ventana slide.
            BadDataError: If a level uses an unreadable compression or the
                scan metadata is malformed.
            AssociatedImageError: If the label or thumbnail can't be read.
        """
        container = self._container
        if not container.is_tiled():
            raise FormatNotSupportedError("TIFF is not tiled")

        if self._properties is not None:
            self._properties[PROPERTY_NAME_VENDOR] = VENDOR

        levels: list[Level] = []
        while True:
            level = self._classify_current()
            if level is not None:
                levels.append(level)
            if not container.read_directory():
                break
        return levels

    def _classify_current(self) -> Level | None:
        container = self._container
        directory = container.current_directory()
        log = logger.bind(directory=directory)

        if not container.is_tiled():
            log.debug("Skipping untiled directory")
            return None

        width = container.image_width()
        if width is None:
            log.debug("Skipping directory without width")
            return None

        slot = associated_image_slot(directory)
        if slot is not None:
            try:
                add_associated_image(self._associated_images, slot, container)
            except AssociatedImageError as e:
                raise AssociatedImageError(
                    f"Can't read associated {slot} image: {e.message}", path=e.path
                ) from e
            log.debug("Directory is associated image", name=slot)
            return None

        description = container.image_description()
        if description is None:
            log.debug("Skipping directory without description")
            return None

        level_value = find_value(description, "level")
        if level_value is None:
            log.debug("Skipping directory without level", description=description)
            return None

        self._check_compression(directory)

        if level_value == BASE_LEVEL:
            self._read_metadata(directory)

        log.debug("Found pyramid level", level=level_value, width=width)
        return Level(directory=directory, width=width)

    def _check_compression(self, directory: int) -> None:
        compression = self._container.compression()
        if compression is None:
            raise BadDataError("Can't read compression scheme")
        if not self._container.is_codec_configured(compression):
            raise BadDataError(f"Unsupported TIFF compression: {compression}")
        logger.debug(
            "Compression supported", directory=directory, compression=compression
        )

    def _read_metadata(self, directory: int) -> None:
        xml = self._container.xml_packet()
        if xml is None or FORMAT_MARKER not in xml:
            raise FormatNotSupportedError("Not a Ventana slide")

        if self._metadata_parsed:
            logger.warning("Ignoring duplicate level 0 metadata", directory=directory)
            return

        parse_scan_info(
            xml,
            self._properties,
            require_core=self._settings.REQUIRE_CORE_METADATA,
        )
        self._metadata_parsed = True


def classify(
    container: TiffContainer,
    properties: PropertyMap | None = None,
    associated_images: AssociatedImageRegistry | None = None,
    *,
    settings: Settings | None = None,
) -> list[Level]:
    """Classify the directories of ``container`` and return its pyramid levels.

    The container must be positioned at its first directory. See
    DirectoryClassifier.classify for the errors raised.
    """
    classifier = DirectoryClassifier(
        container, properties, associated_images, settings=settings
    )
    return classifier.classify()
