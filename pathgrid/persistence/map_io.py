"""Plain-text grid maps: one line per row, one character per tile."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..core.grid import (
    Grid,
    TILE_FLOOR,
    TILE_PATH,
    TILE_TARGET,
    TILES,
)
from ..core.point import Point

logger = logging.getLogger(__name__)


class MapFormatError(ValueError):
    """Raised when map text cannot be turned into a grid."""


def parse_map(text: str) -> Grid:
    """Return a :class:`Grid` built from ``text``.

    Short rows are padded with floor. Path marks left by :func:`mark_path`
    read back as floor.
    """

    lines = [line.rstrip("\r\n") for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise MapFormatError("map is empty")

    width = max(len(line) for line in lines)
    if width == 0:
        raise MapFormatError("map is empty")
    grid = Grid(width, len(lines))
    for y, line in enumerate(lines):
        for x, glyph in enumerate(line):
            if glyph not in TILES:
                raise MapFormatError(f"unknown tile {glyph!r} at ({x}, {y})")
            if glyph == TILE_PATH:
                glyph = TILE_FLOOR
            grid.set_tile(Point(x, y), glyph)
    return grid


def load_map(path: str | Path) -> Grid:
    """Read a map file from ``path``."""

    p = Path(path)
    grid = parse_map(p.read_text(encoding="utf-8"))
    logger.debug("Loaded %r from %s", grid, p)
    return grid


def dump_map(grid: Grid, path: str | Path | None = None) -> str:
    """Return ``grid`` as text and write it to ``path`` when given."""

    text = "\n".join(grid.rows()) + "\n"
    if path is not None:
        p = Path(path)
        if not p.parent.exists():
            p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return text


def mark_path(grid: Grid, path: Optional[Iterable[Point]]) -> Grid:
    """Return a copy of ``grid`` with ``.`` on each path cell before the target."""

    marked = grid.copy()
    if not path:
        return marked
    for point in path:
        if marked.tile(point) == TILE_TARGET:
            continue
        marked.set_tile(point, TILE_PATH)
    return marked


__all__ = ["MapFormatError", "parse_map", "load_map", "dump_map", "mark_path"]
