"""Type definitions for the Ventana driver.

Property names follow the OpenSlide convention: vendor-specific keys are
prefixed with ``ventana.`` and the standard keys with ``openslide.``.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bifslide.ventana.associated import TiffAssociatedImage

PropertyMap = MutableMapping[str, str]
AssociatedImageRegistry = MutableMapping[str, "TiffAssociatedImage"]

# Standard property names
PROPERTY_NAME_VENDOR = "openslide.vendor"
PROPERTY_NAME_OBJECTIVE_POWER = "openslide.objective-power"
PROPERTY_NAME_MPP_X = "openslide.mpp-x"
PROPERTY_NAME_MPP_Y = "openslide.mpp-y"

# Value of openslide.vendor for slides recognized by this driver
VENDOR = "ventana"

# Location of the scan-info node inside the level-0 XML packet
ISCAN_XPATH = "/EncodeInfo/SlideInfo/iScan"

# Substring of the level-0 XML packet that identifies a Ventana slide
FORMAT_MARKER = b"<iScan"

# Ventana property name -> iScan attribute
ISCAN_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("ventana.magnification", "Magnification"),
    ("ventana.resolution", "ScanRes"),
    ("ventana.device-model", "UnitNumber"),
    ("ventana.build-version", "BuildVersion"),
    ("ventana.build-date", "BuildDate"),
    ("ventana.slide-annotation", "SlideAnnotation"),
    ("ventana.show-label", "ShowLabel"),
    ("ventana.label-boundary", "LabelBoundary"),
    ("ventana.z-layers", "Z-layers"),
    ("ventana.z-spacing", "Z-spacing"),
    ("ventana.focus-mode", "FocusMode"),
    ("ventana.focus-quality", "FocusQuality"),
    ("ventana.scan-mode", "ScanMode"),
)


@dataclass(frozen=True)
class Level:
    """A pyramid level found while walking the container.

    Attributes:
        directory: Index of the container directory holding the level.
        width: Pixel width of the level.
    """

    directory: int
    width: int
