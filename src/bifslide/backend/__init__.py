"""Generic tiled backend that receives recognized pyramids."""

from bifslide.backend.tiff import TiffPyramidBackend
from bifslide.backend.types import PyramidLevel, QuickHash, TiffPyramid, TiledBackend

__all__ = [
    "PyramidLevel",
    "QuickHash",
    "TiffPyramid",
    "TiffPyramidBackend",
    "TiledBackend",
]
