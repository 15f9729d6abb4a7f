"""Generic tiled-TIFF backend.

Records the pyramid geometry a vendor driver hands over. Tile decoding is
left to whichever reader consumes the resulting TiffPyramid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bifslide.backend.types import PyramidLevel, QuickHash, TiffPyramid
from bifslide.container import DirectoryError
from bifslide.utils.logging import get_logger

if TYPE_CHECKING:
    from bifslide.container import TiffContainer

logger = get_logger(__name__)


class TiffPyramidBackend:
    """TiledBackend that collects level geometry into a TiffPyramid.

    Attributes:
        pyramid: The pyramid from the last handoff, or None.
    """

    def __init__(self) -> None:
        self.pyramid: TiffPyramid | None = None

    def add_tiff_ops(
        self,
        container: TiffContainer,
        base_directory: int,
        level_directories: list[int],
        quickhash: QuickHash | None,
    ) -> None:
        """Read the geometry of each level and store it as ``self.pyramid``.

        The container cursor is left on ``base_directory``.

        Raises:
            ValueError: If ``level_directories`` is empty or does not start
                with ``base_directory``.
            DirectoryError: If a level lacks dimensions or tile geometry.
        """
        if not level_directories:
            raise ValueError("level_directories must not be empty")
        if level_directories[0] != base_directory:
            raise ValueError(
                f"Base directory {base_directory} is not the first level "
                f"({level_directories[0]})"
            )

        levels: list[PyramidLevel] = []
        base_width: int | None = None
        for directory in level_directories:
            container.set_directory(directory)
            width = container.image_width()
            height = container.image_length()
            tile_width = container.tile_width()
            tile_height = container.tile_length()
            if width is None or height is None:
                raise DirectoryError(f"Can't read dimensions of directory {directory}")
            if tile_width is None or tile_height is None:
                raise DirectoryError(f"Directory {directory} is not tiled")
            if base_width is None:
                base_width = width
            levels.append(
                PyramidLevel(
                    directory=directory,
                    width=width,
                    height=height,
                    tile_width=tile_width,
                    tile_height=tile_height,
                    downsample=base_width / width,
                )
            )
        container.set_directory(base_directory)

        self.pyramid = TiffPyramid(levels=tuple(levels), quickhash=quickhash)
        logger.debug(
            "Registered tiled pyramid",
            base_directory=base_directory,
            level_count=len(levels),
        )
