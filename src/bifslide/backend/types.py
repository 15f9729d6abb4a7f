"""Type definitions for the tiled backend handoff."""

from dataclasses import dataclass, field
from typing import Protocol

from bifslide.container import TiffContainer


class QuickHash(Protocol):
    """Running content hash threaded through to the backend.

    ``hashlib`` hash objects satisfy this protocol.
    """

    def update(self, data: bytes, /) -> None:
        """Feed ``data`` into the hash."""
        ...


class TiledBackend(Protocol):
    """Protocol for the generic tiled-TIFF backend.

    A vendor driver hands over the ordered pyramid directories once a
    slide has been recognized; the backend is responsible for tile reads.
    """

    def add_tiff_ops(
        self,
        container: TiffContainer,
        base_directory: int,
        level_directories: list[int],
        quickhash: QuickHash | None,
    ) -> None:
        """Take ownership of the pyramid described by ``level_directories``.

        Args:
            container: The open container.
            base_directory: Directory of the highest-resolution level.
            level_directories: Level directories, largest first.
            quickhash: Running content hash, passed through untouched.
        """
        ...


@dataclass(frozen=True)
class PyramidLevel:
    """Geometry of one pyramid level.

    Attributes:
        directory: Container directory holding the level.
        width: Pixel width.
        height: Pixel height.
        tile_width: Tile width in pixels.
        tile_height: Tile height in pixels.
        downsample: Base width divided by this level's width.
    """

    directory: int
    width: int
    height: int
    tile_width: int
    tile_height: int
    downsample: float


@dataclass(frozen=True)
class TiffPyramid:
    """Pyramid handed to the tiled backend.

    Attributes:
        levels: Levels ordered from highest to lowest resolution.
        quickhash: Content hash object received with the handoff.
    """

    levels: tuple[PyramidLevel, ...]
    quickhash: QuickHash | None = field(default=None, compare=False)

    @property
    def level_count(self) -> int:
        """Return number of levels."""
        return len(self.levels)

    @property
    def base(self) -> PyramidLevel:
        """Return the highest-resolution level."""
        return self.levels[0]

    @property
    def level_directories(self) -> tuple[int, ...]:
        """Return the directory of each level, largest first."""
        return tuple(level.directory for level in self.levels)

    @property
    def level_dimensions(self) -> tuple[tuple[int, int], ...]:
        """Return (width, height) of each level."""
        return tuple((level.width, level.height) for level in self.levels)
