import heapq
import math
from typing import Dict

import pytest

from pathgrid.core.point import MOVES, Point, add
from pathgrid.persistence.map_io import parse_map
from pathgrid.search.astar import move_cost
from pathgrid.utils import observer


@pytest.fixture(autouse=True)
def _clean_observer():
    observer.reset()
    yield
    observer.reset()


@pytest.fixture
def make_grid():
    """Build a grid from rows of tile characters."""

    def _make(*rows: str):
        return parse_map("\n".join(rows))

    return _make


def _dijkstra(grid, source: Point, cost_cardinal: int = 70, cost_diagonal: int = 99) -> Dict[Point, int]:
    dist: Dict[Point, int] = {source: 0}
    heap = [(0, source.x, source.y)]
    while heap:
        d, x, y = heapq.heappop(heap)
        current = Point(x, y)
        if d > dist.get(current, math.inf):
            continue
        for move in MOVES:
            neighbour = add(current, move)
            if not grid.is_valid_move(current, neighbour):
                continue
            nd = d + move_cost(move, cost_cardinal, cost_diagonal)
            if nd < dist.get(neighbour, math.inf):
                dist[neighbour] = nd
                heapq.heappush(heap, (nd, neighbour.x, neighbour.y))
    return dist


@pytest.fixture
def dijkstra():
    """Exact single-source costs by brute force, for checking A* results."""

    return _dijkstra
