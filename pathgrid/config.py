"""Simple configuration loader for pathgrid."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class SearchConfig:
    """Move costs and limits for the A* driver."""

    cost_cardinal: int = 70
    cost_diagonal: int = 99
    max_expansions: Optional[int] = None


@dataclass
class QueueConfig:
    """Skip list tuning for the frontier queue."""

    probability: float = 0.5
    max_level: int = 32
    seed: Optional[int] = 7907


@dataclass
class LoggingConfig:
    """Root and per-module log levels."""

    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    search: SearchConfig
    queue: QueueConfig
    logging: LoggingConfig


def check_costs(cost_cardinal: int, cost_diagonal: int) -> None:
    """Reject move costs for which the 8-way distance overestimates.

    The distance stays a lower bound only while a diagonal step costs at least
    one cardinal step and at most two.
    """

    if cost_cardinal <= 0:
        raise ValueError("search.cost_cardinal must be positive")
    if cost_diagonal < cost_cardinal:
        raise ValueError("search.cost_diagonal must be >= search.cost_cardinal")
    if cost_diagonal > 2 * cost_cardinal:
        raise ValueError("search.cost_diagonal must be <= 2 * search.cost_cardinal")


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`, validating values."""

    search_data = data.get("search", {}) or {}
    max_expansions = search_data.get("max_expansions")
    search = SearchConfig(
        cost_cardinal=int(search_data.get("cost_cardinal", 70)),
        cost_diagonal=int(search_data.get("cost_diagonal", 99)),
        max_expansions=int(max_expansions) if max_expansions is not None else None,
    )
    check_costs(search.cost_cardinal, search.cost_diagonal)
    if search.max_expansions is not None and search.max_expansions <= 0:
        raise ValueError("search.max_expansions must be positive or null")

    queue_data = data.get("queue", {}) or {}
    seed = queue_data.get("seed", 7907)
    queue = QueueConfig(
        probability=float(queue_data.get("probability", 0.5)),
        max_level=int(queue_data.get("max_level", 32)),
        seed=int(seed) if seed is not None else None,
    )
    if not 0.0 < queue.probability < 1.0:
        raise ValueError("queue.probability must be in (0, 1)")
    if queue.max_level < 1:
        raise ValueError("queue.max_level must be at least 1")

    logging_data = data.get("logging", {}) or {}
    logging_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels=dict(logging_data.get("module_levels") or {}),
    )

    return Config(search=search, queue=queue, logging=logging_cfg)


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "CONFIG_PATH",
    "Config",
    "SearchConfig",
    "QueueConfig",
    "LoggingConfig",
    "check_costs",
    "load_config",
]
