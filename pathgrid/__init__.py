"""A* route finding on tile grids with a skip-list frontier."""

from .core.point import Point
from .core.grid import Grid
from .core.skip_pq import SkipPriorityQueue, EmptyQueueError
from .search.astar import find_path, search, SearchResult, SearchLimitExceeded

__all__ = [
    "Point",
    "Grid",
    "SkipPriorityQueue",
    "EmptyQueueError",
    "find_path",
    "search",
    "SearchResult",
    "SearchLimitExceeded",
]
