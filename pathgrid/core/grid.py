"""Tile map that the search driver walks over."""

from __future__ import annotations

from typing import List, Optional, Protocol

from .point import Point, chebyshev


# character representations of tiles
TILE_WALL = "#"
TILE_FLOOR = " "
TILE_SOURCE = "@"
TILE_TARGET = "X"
TILE_PATH = "."

TILES = frozenset({TILE_WALL, TILE_FLOOR, TILE_SOURCE, TILE_TARGET, TILE_PATH})


class GridLike(Protocol):
    """What the search driver needs from a grid."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def tile(self, point: Point) -> str: ...

    def is_valid_move(self, src: Point, dst: Point) -> bool: ...


class Grid:
    """Rectangular tile map stored row by row."""

    def __init__(self, width: int, height: int, fill: str = TILE_FLOOR) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        if fill not in TILES:
            raise ValueError(f"Unknown tile: {fill!r}")
        self._width = width
        self._height = height
        self._tiles: List[List[str]] = [
            [fill for _ in range(width)] for _ in range(height)
        ]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # ------------------------------------------------------------------
    # Tile access
    # ------------------------------------------------------------------
    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self._width and 0 <= point.y < self._height

    def _check(self, point: Point) -> None:
        if not self.in_bounds(point):
            raise IndexError(
                f"{point} outside {self._width}x{self._height} grid"
            )

    def tile(self, point: Point) -> str:
        """Return the tile at ``point``. Raises ``IndexError`` out of bounds."""
        self._check(point)
        return self._tiles[point.y][point.x]

    def set_tile(self, point: Point, tile: str) -> None:
        self._check(point)
        if tile not in TILES:
            raise ValueError(f"Unknown tile: {tile!r}")
        self._tiles[point.y][point.x] = tile

    def is_wall(self, point: Point) -> bool:
        return self.tile(point) == TILE_WALL

    def rows(self) -> List[str]:
        return ["".join(row) for row in self._tiles]

    def copy(self) -> "Grid":
        other = Grid(self._width, self._height)
        other._tiles = [list(row) for row in self._tiles]
        return other

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def _find(self, tile: str) -> Optional[Point]:
        for y, row in enumerate(self._tiles):
            for x, value in enumerate(row):
                if value == tile:
                    return Point(x, y)
        return None

    @property
    def source(self) -> Optional[Point]:
        """First ``@`` tile in row order, if any."""
        return self._find(TILE_SOURCE)

    @property
    def target(self) -> Optional[Point]:
        """First ``X`` tile in row order, if any."""
        return self._find(TILE_TARGET)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def is_valid_move(self, src: Point, dst: Point) -> bool:
        """Return ``True`` if a single step from ``src`` to ``dst`` is allowed.

        ``dst`` must be an in-bounds, non-wall neighbour of ``src``. A
        diagonal step is also refused when either cell it would cut past is a
        wall. ``src`` itself must be in bounds.
        """

        self._check(src)
        return (
            chebyshev(src, dst) == 1
            and self.in_bounds(dst)
            and self._tiles[dst.y][dst.x] != TILE_WALL
            # no cutting around corners
            and self._tiles[dst.y][src.x] != TILE_WALL
            and self._tiles[src.y][dst.x] != TILE_WALL
        )

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"


__all__ = [
    "Grid",
    "GridLike",
    "TILE_WALL",
    "TILE_FLOOR",
    "TILE_SOURCE",
    "TILE_TARGET",
    "TILE_PATH",
    "TILES",
]
