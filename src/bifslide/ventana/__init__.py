"""Ventana BigTIFF (BIF) format driver.

This package recognizes Ventana iScan slides stored as tiled BigTIFF
files: it classifies container directories into pyramid levels and
associated images, extracts iScan scan metadata from the level-0 XML
packet, and hands the ordered levels to a tiled backend.

Key Components:
    - try_ventana: Recognize an open container and hand off its pyramid
    - open_slide: Open a file and collect properties, images and pyramid
    - detect: Cheap yes/no format check for a file
    - find_value: ``key=value`` tokenizer for ImageDescription tags

Example:
    from bifslide.ventana import open_slide

    slide = open_slide("slide.bif")
    print(slide.properties["openslide.objective-power"])
    print(slide.level_directories)
"""

from bifslide.ventana.associated import TiffAssociatedImage, add_associated_image
from bifslide.ventana.classifier import (
    DirectoryClassifier,
    associated_image_slot,
    classify,
)
from bifslide.ventana.driver import VentanaSlide, detect, open_slide, try_ventana
from bifslide.ventana.exceptions import (
    AssociatedImageError,
    BadDataError,
    FormatNotSupportedError,
    VentanaError,
)
from bifslide.ventana.keyvalue import find_value, parse_description
from bifslide.ventana.ordering import order_levels
from bifslide.ventana.types import Level
from bifslide.ventana.xpath import XPathMetadataReader, parse_scan_info

__all__ = [
    "AssociatedImageError",
    "BadDataError",
    "DirectoryClassifier",
    "FormatNotSupportedError",
    "Level",
    "TiffAssociatedImage",
    "VentanaError",
    "VentanaSlide",
    "XPathMetadataReader",
    "add_associated_image",
    "associated_image_slot",
    "classify",
    "detect",
    "find_value",
    "open_slide",
    "order_levels",
    "parse_description",
    "parse_scan_info",
    "try_ventana",
]
