"""Helpers for dumping grid and queue state to JSON for offline inspection."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict

from ..core.grid import Grid
from ..core.skip_pq import SkipPriorityQueue


def serialize(obj: Any) -> Any:
    """Recursively convert ``obj`` into JSON-serialisable data."""

    if is_dataclass(obj):
        return {k: serialize(v) for k, v in asdict(obj).items()}
    if isinstance(obj, dict):
        return {str(k): serialize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [serialize(v) for v in obj]
    return obj


def queue_to_dict(queue: SkipPriorityQueue) -> Dict[str, Any]:
    """Serialize ``queue`` into a dictionary describing its node arena."""

    return {
        "size": len(queue),
        "level": queue.level,
        "nodes": [serialize(node) for node in queue.nodes()],
    }


def grid_to_dict(grid: Grid) -> Dict[str, Any]:
    """Serialize ``grid`` into a dictionary."""

    source = grid.source
    target = grid.target
    return {
        "width": grid.width,
        "height": grid.height,
        "rows": grid.rows(),
        "source": serialize(source) if source is not None else None,
        "target": serialize(target) if target is not None else None,
    }


def dump_state(data: Dict[str, Any], path: str | Path) -> None:
    """Write ``data`` to ``path`` as indented JSON."""

    p = Path(path)
    if not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2)


__all__ = ["serialize", "queue_to_dict", "grid_to_dict", "dump_state"]
