"""A* route finding over an 8-connected tile grid.

Uses an octile distance heuristic, which never overestimates the remaining
cost under the same integer move costs. Once a cell is closed its g-score is
final, so stale duplicates left in the frontier are skipped when popped
rather than removed when a better route to their cell turns up.
"""

from __future__ import annotations

import logging
import math
import time
from collections import Counter
from dataclasses import dataclass, field
from random import Random
from typing import Callable, List, Optional, Sequence

from ..config import CONFIG, Config, check_costs
from ..core.grid import GridLike
from ..core.point import MOVES, Point, add, distance, equals, is_cardinal
from ..core.skip_pq import SkipPriorityQueue
from ..utils.observer import log_event, record_search

logger = logging.getLogger(__name__)


class SearchLimitExceeded(RuntimeError):
    """Raised when a bounded search runs out of expansions."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"search stopped after {limit} expansions")
        self.limit = limit


@dataclass
class SearchStats:
    """Counters collected during one search."""

    pushes: int = 0
    pops: int = 0
    stale_pops: int = 0
    expansions: int = 0
    closures: Counter = field(default_factory=Counter)


@dataclass
class SearchResult:
    """Outcome of :func:`search`. ``path`` is ``None`` when unreachable."""

    path: Optional[List[Point]]
    cost: Optional[int]
    stats: SearchStats

    @property
    def found(self) -> bool:
        return self.path is not None


def move_cost(move: Point, cost_cardinal: int, cost_diagonal: int) -> int:
    """Return the cost of a unit ``move``."""

    if is_cardinal(move):
        return cost_cardinal
    return cost_diagonal


def path_cost(
    path: Sequence[Point],
    source: Point,
    cost_cardinal: int | None = None,
    cost_diagonal: int | None = None,
) -> int:
    """Sum the move costs along ``path`` starting from ``source``."""

    if cost_cardinal is None:
        cost_cardinal = CONFIG.search.cost_cardinal
    if cost_diagonal is None:
        cost_diagonal = CONFIG.search.cost_diagonal

    total = 0
    previous = source
    for point in path:
        step = Point(point.x - previous.x, point.y - previous.y)
        total += move_cost(step, cost_cardinal, cost_diagonal)
        previous = point
    return total


class _CellTable:
    """Per-cell search state in flat lists indexed by ``y * width + x``."""

    def __init__(self, width: int, height: int) -> None:
        size = width * height
        self.width = width
        self.came_from: List[Optional[Point]] = [None] * size
        self.g_score: List[float] = [math.inf] * size
        self.closed: List[bool] = [False] * size

    def index(self, point: Point) -> int:
        return point.y * self.width + point.x


def _reconstruct(cells: _CellTable, source: Point, target: Point) -> List[Point]:
    """Return the path from ``source`` to ``target``, excluding ``source``."""

    length = 0
    current = target
    while not equals(current, source):
        length += 1
        current = cells.came_from[cells.index(current)]

    path: List[Point] = [source] * length
    current = target
    for i in range(length - 1, -1, -1):
        path[i] = current
        current = cells.came_from[cells.index(current)]
    return path


def search(
    grid: GridLike,
    source: Point,
    target: Point,
    *,
    cost_cardinal: int | None = None,
    cost_diagonal: int | None = None,
    heuristic: Callable[[Point, Point], int] | None = None,
    rng: Random | None = None,
    max_expansions: int | None = None,
    config: Config | None = None,
) -> SearchResult:
    """Find the cheapest route from ``source`` to ``target`` on ``grid``.

    Parameters
    ----------
    grid:
        Collaborator providing ``width``, ``height`` and ``is_valid_move``.
    source, target:
        In-bounds endpoints. Out of bounds endpoints raise ``ValueError``.
    cost_cardinal, cost_diagonal:
        Integer move costs, defaulting to the ``search`` config section. A
        diagonal step must cost between one and two cardinal steps, otherwise
        ``ValueError`` is raised.
    heuristic:
        Estimate of the remaining cost. Defaults to :func:`distance` with the
        move costs, which is admissible for them.
    rng:
        Random source for the frontier queue's levels. Defaults to a
        generator seeded from the ``queue`` config section.
    max_expansions:
        Optional cap on closed cells. Reaching it before the goal raises
        :class:`SearchLimitExceeded`.
    config:
        Source of the defaults above. Falls back to the loaded ``config.yaml``.

    Returns
    -------
    SearchResult
        ``path`` lists every step after ``source`` up to and including
        ``target``, or is ``None`` if no route exists.
    """

    width, height = grid.width, grid.height
    for name, point in (("source", source), ("target", target)):
        if not (0 <= point.x < width and 0 <= point.y < height):
            raise ValueError(f"{name} {point} outside {width}x{height} grid")

    cfg = config if config is not None else CONFIG
    if cost_cardinal is None:
        cost_cardinal = cfg.search.cost_cardinal
    if cost_diagonal is None:
        cost_diagonal = cfg.search.cost_diagonal
    check_costs(cost_cardinal, cost_diagonal)
    if max_expansions is None:
        max_expansions = cfg.search.max_expansions
    if heuristic is None:
        def heuristic(a: Point, b: Point) -> int:
            return distance(a, b, cost_cardinal, cost_diagonal)
    if rng is None:
        rng = Random(cfg.queue.seed)

    started = time.perf_counter()
    logger.debug("Searching %s -> %s on %sx%s grid", source, target, width, height)

    stats = SearchStats()
    cells = _CellTable(width, height)
    open_set = SkipPriorityQueue(
        rng, cfg.queue.probability, cfg.queue.max_level
    )

    cells.g_score[cells.index(source)] = 0
    open_set.insert(source, 0)
    stats.pushes += 1

    path: Optional[List[Point]] = None
    cost: Optional[int] = None

    while not open_set.is_empty():
        current = open_set.pop_min().payload
        stats.pops += 1
        cur = cells.index(current)

        if cells.closed[cur]:
            stats.stale_pops += 1
            logger.debug("Skipping stale entry for %s", current)
            continue

        cells.closed[cur] = True
        stats.closures[current] += 1

        if equals(current, target):
            path = _reconstruct(cells, source, target)
            cost = int(cells.g_score[cur])
            break

        if max_expansions is not None and stats.expansions >= max_expansions:
            logger.info(
                "Search %s -> %s hit the %s expansion limit", source, target, max_expansions
            )
            raise SearchLimitExceeded(max_expansions)
        stats.expansions += 1

        for move in MOVES:
            neighbour = add(current, move)
            if not grid.is_valid_move(current, neighbour):
                continue

            g_score = cells.g_score[cur] + move_cost(move, cost_cardinal, cost_diagonal)
            nb = cells.index(neighbour)
            if g_score < cells.g_score[nb]:
                cells.came_from[nb] = current
                cells.g_score[nb] = g_score
                if not cells.closed[nb]:
                    open_set.insert(neighbour, int(g_score + heuristic(neighbour, target)))
                    stats.pushes += 1

    elapsed = time.perf_counter() - started
    record_search(elapsed)
    if path is None:
        logger.info(
            "No path %s -> %s (%s expansions)", source, target, stats.expansions
        )
        log_event("no_path", {"source": source, "target": target})
    else:
        logger.info(
            "Path %s -> %s cost=%s steps=%s (%s expansions, %s stale)",
            source,
            target,
            cost,
            len(path),
            stats.expansions,
            stats.stale_pops,
        )
        log_event(
            "path_found",
            {"source": source, "target": target, "cost": cost, "steps": len(path)},
        )
    return SearchResult(path=path, cost=cost, stats=stats)


def find_path(
    grid: GridLike, source: Point, target: Point, **kwargs
) -> Optional[List[Point]]:
    """Return the cheapest route from ``source`` to ``target`` or ``None``.

    The route excludes ``source`` and ends with ``target``. Keyword
    arguments are passed through to :func:`search`.
    """

    return search(grid, source, target, **kwargs).path


__all__ = [
    "find_path",
    "search",
    "move_cost",
    "path_cost",
    "SearchResult",
    "SearchStats",
    "SearchLimitExceeded",
]
