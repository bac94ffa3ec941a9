from pathlib import Path

import pytest
import yaml

from pathgrid.config import (
    CONFIG,
    LoggingConfig,
    QueueConfig,
    SearchConfig,
    _parse_config,
    check_costs,
    load_config,
)
from pathgrid.core.grid import Grid
from pathgrid.core.point import Point, distance


def test_config_module_loads_config():
    assert isinstance(CONFIG.search, SearchConfig)
    assert isinstance(CONFIG.queue, QueueConfig)
    assert isinstance(CONFIG.logging, LoggingConfig)
    assert CONFIG.search.cost_cardinal == 70
    assert CONFIG.search.cost_diagonal == 99
    assert CONFIG.queue.probability == 0.5


def test_config_file_contains_keys():
    data = yaml.safe_load(Path("config.yaml").read_text())
    assert data["search"]["cost_cardinal"] == 70
    assert data["search"]["cost_diagonal"] == 99
    assert data["queue"]["seed"] == 7907
    assert data["logging"]["global_level"] == "INFO"


def test_missing_file_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path / "nope.yaml")
    assert cfg.search.cost_cardinal == 70
    assert cfg.search.max_expansions is None
    assert cfg.queue.max_level == 32
    assert cfg.logging.module_levels == {}


def test_values_are_read_from_file(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "search:\n"
        "  cost_cardinal: 1\n"
        "  cost_diagonal: 1\n"
        "  max_expansions: 500\n"
        "queue:\n"
        "  seed: null\n"
        "logging:\n"
        "  global_level: debug\n"
        "  module_levels:\n"
        "    pathgrid.core.skip_pq: WARNING\n"
    )
    cfg = load_config(path)
    assert (cfg.search.cost_cardinal, cfg.search.cost_diagonal) == (1, 1)
    assert cfg.search.max_expansions == 500
    assert cfg.queue.seed is None
    assert cfg.logging.global_level == "DEBUG"
    assert cfg.logging.module_levels == {"pathgrid.core.skip_pq": "WARNING"}


@pytest.mark.parametrize(
    "text",
    [
        "search:\n  cost_cardinal: 0\n",
        "search:\n  cost_cardinal: 70\n  cost_diagonal: 50\n",
        "search:\n  cost_cardinal: 1\n  cost_diagonal: 5\n",
        "search:\n  cost_cardinal: 70\n  cost_diagonal: 141\n",
        "search:\n  max_expansions: 0\n",
        "queue:\n  probability: 1.5\n",
        "queue:\n  max_level: 0\n",
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    with pytest.raises(ValueError):
        load_config(path)


def test_diagonal_cost_bounded_by_two_cardinal_steps(dijkstra):
    check_costs(70, 70)
    check_costs(70, 140)
    with pytest.raises(ValueError):
        _parse_config({"search": {"cost_cardinal": 1, "cost_diagonal": 5}})

    # with 1/5 costs two cardinal steps beat a diagonal, so the 8-way
    # distance would overestimate what the search can actually pay
    exact = dijkstra(Grid(3, 3), Point(0, 0), 1, 5)
    assert exact[Point(2, 2)] == 4
    assert distance(Point(0, 0), Point(2, 2), 1, 5) == 10
