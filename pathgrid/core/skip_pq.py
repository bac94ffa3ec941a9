"""Ascending priority queue built on a skip list.

Entries are ordered by priority with ``0`` as the lowest. An entry inserted
with a priority equal to existing entries goes behind them, so ties leave the
queue in insertion order. Only the minimum entry can be read or removed.
There is no decrease-key: callers insert a better-priority duplicate and
discard stale duplicates when they come off the front.

Nodes live in an arena of parallel lists addressed by integer index. Index
``0`` is the head sentinel, whose level always equals the highest level of
any node in the queue. Forward links are lists of optional indices, one per
level of the node.
"""

from __future__ import annotations

import logging
from random import Random
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

HEAD = 0
NEXT = 0


class EmptyQueueError(IndexError):
    """Raised when reading the minimum of an empty queue is required."""


class QueueEntry(NamedTuple):
    """A payload together with its priority."""

    priority: int
    payload: Any


class SkipPriorityQueue:
    """Skip list priority queue with an explicit random source.

    Parameters
    ----------
    rng:
        Generator used to draw node levels. Supplying a seeded
        :class:`random.Random` makes the layout reproducible.
    probability:
        Chance of promoting a node one more level. ``P(level = L)`` is
        ``probability ** (L - 1) * (1 - probability)``.
    max_level:
        Upper bound on node levels.
    seed:
        Seed for a fresh generator when ``rng`` is not given.
    """

    def __init__(
        self,
        rng: Random | None = None,
        probability: float = 0.5,
        max_level: int = 32,
        *,
        seed: int | None = None,
    ) -> None:
        if not 0.0 < probability < 1.0:
            raise ValueError("probability must be in (0, 1)")
        if max_level < 1:
            raise ValueError("max_level must be at least 1")
        self._rng = rng if rng is not None else Random(seed)
        self.probability = probability
        self.max_level = max_level

        # head sentinel; its priority is never compared
        self._priority: List[int] = [-1]
        self._payload: List[Any] = [None]
        self._forward: List[List[Optional[int]]] = [[None]]
        self._free: List[int] = []
        self._size = 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _random_level(self) -> int:
        level = 1
        while level < self.max_level and self._rng.random() < self.probability:
            level += 1
        return level

    def _alloc(self, payload: Any, priority: int, level: int) -> int:
        """Return the index of a fresh, unlinked node."""
        links: List[Optional[int]] = [None] * level
        if self._free:
            index = self._free.pop()
            self._priority[index] = priority
            self._payload[index] = payload
            self._forward[index] = links
            return index
        self._priority.append(priority)
        self._payload.append(payload)
        self._forward.append(links)
        return len(self._forward) - 1

    def _release(self, index: int) -> None:
        self._payload[index] = None
        self._forward[index] = []
        self._free.append(index)

    def _set_level(self, new_level: int) -> None:
        """Grow or prune the head's forward links to ``new_level``."""
        head = self._forward[HEAD]
        old_level = len(head)
        if new_level > old_level:
            head.extend([None] * (new_level - old_level))
        else:
            del head[new_level:]
        logger.debug("Queue level %s -> %s", old_level, new_level)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def level(self) -> int:
        """Current level of the head sentinel."""
        return len(self._forward[HEAD])

    def insert(self, payload: Any, priority: int) -> None:
        """Insert ``payload`` behind every entry with priority <= ``priority``."""

        if priority < 0:
            raise ValueError(f"priority must be non-negative, got {priority}")

        level = self._random_level()
        node = self._alloc(payload, priority, level)
        if level > self.level:
            self._set_level(level)

        # walk down from the top level, stopping each level just before the
        # first node whose priority is not strictly less than ``priority``
        current = HEAD
        for i in range(self.level - 1, -1, -1):
            successor = self._forward[current][i]
            while successor is not None and self._priority[successor] < priority:
                current = successor
                successor = self._forward[current][i]
            if i < level:
                self._forward[node][i] = successor
                self._forward[current][i] = node

        self._size += 1

    def is_empty(self) -> bool:
        return self._forward[HEAD][NEXT] is None

    def peek_min(self) -> Optional[QueueEntry]:
        """Return the minimum entry without removing it, or ``None``."""

        node = self._forward[HEAD][NEXT]
        if node is None:
            return None
        return QueueEntry(self._priority[node], self._payload[node])

    def remove_min(self) -> QueueEntry:
        """Remove and return the minimum entry.

        Raises :class:`EmptyQueueError` if the queue holds no entries.
        """

        node = self._forward[HEAD][NEXT]
        if node is None:
            raise EmptyQueueError("remove_min on an empty queue")

        # the minimum node is first on every level it belongs to
        head = self._forward[HEAD]
        for i, successor in enumerate(self._forward[node]):
            head[i] = successor

        new_level = self.level
        while new_level > 1 and head[new_level - 1] is None:
            new_level -= 1
        if new_level < self.level:
            self._set_level(new_level)

        entry = QueueEntry(self._priority[node], self._payload[node])
        self._release(node)
        self._size -= 1
        return entry

    pop_min = remove_min

    def clear(self) -> None:
        """Drop every entry and reset the head to level 1."""

        self._priority = [-1]
        self._payload = [None]
        self._forward = [[None]]
        self._free = []
        self._size = 0

    def levels(self) -> List[List[int]]:
        """Return the priorities along each level's chain, bottom level first."""

        chains: List[List[int]] = []
        for i in range(self.level):
            chain: List[int] = []
            node = self._forward[HEAD][i]
            while node is not None:
                chain.append(self._priority[node])
                node = self._forward[node][i]
            chains.append(chain)
        return chains

    def nodes(self) -> Iterator[Dict[str, Any]]:
        """Yield a plain description of each linked node in queue order."""

        yield {
            "index": HEAD,
            "priority": None,
            "payload": None,
            "forward": list(self._forward[HEAD]),
        }
        node = self._forward[HEAD][NEXT]
        while node is not None:
            yield {
                "index": node,
                "priority": self._priority[node],
                "payload": self._payload[node],
                "forward": list(self._forward[node]),
            }
            node = self._forward[node][NEXT]

    def __iter__(self) -> Iterator[QueueEntry]:
        node = self._forward[HEAD][NEXT]
        while node is not None:
            yield QueueEntry(self._priority[node], self._payload[node])
            node = self._forward[node][NEXT]

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"SkipPriorityQueue(size={self._size}, level={self.level})"


__all__ = ["SkipPriorityQueue", "QueueEntry", "EmptyQueueError"]
