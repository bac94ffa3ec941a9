"""Command line entry point: solve a text map and print the route."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from random import Random
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import CONFIG, CONFIG_PATH, Config, load_config
from .core.point import chebyshev
from .persistence.map_io import MapFormatError, dump_map, load_map, mark_path
from .search.astar import SearchLimitExceeded, search

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_PATH = 1
EXIT_BAD_INPUT = 2
EXIT_LIMIT = 3


def configure_logging(cfg: Config = CONFIG) -> None:
    """Apply the root and per-module log levels from ``cfg``."""

    numeric_level = getattr(logging, cfg.logging.global_level, logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)

    for module_name, level_str in cfg.logging.module_levels.items():
        module_numeric_level = getattr(logging, str(level_str).upper(), None)
        if isinstance(module_numeric_level, int):
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


configure_logging()


def bootstrap(config_path: str | Path | None = None) -> Config:
    """Load ``.env`` and the config file, then set up logging."""

    env_path = Path(".env")
    if env_path.exists(): load_dotenv(env_path)

    if config_path is None:
        config_path = os.getenv("PATHGRID_CONFIG") or CONFIG_PATH
    cfg = load_config(Path(config_path))
    configure_logging(cfg)
    logger.debug("[Bootstrap] Config loaded from %s", config_path)
    return cfg


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathgrid",
        description="Find the cheapest route between '@' and 'X' on a text map.",
    )
    parser.add_argument("map", type=Path, help="map file to solve")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--seed", type=int, default=None, help="seed for the frontier queue")
    parser.add_argument(
        "--heuristic",
        choices=("octile", "chebyshev"),
        default="octile",
        help="remaining-cost estimate",
    )
    parser.add_argument("--max-expansions", type=int, default=None)
    parser.add_argument("--quiet", action="store_true", help="print only the summary line")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = bootstrap(args.config)

    try:
        grid = load_map(args.map)
    except (FileNotFoundError, MapFormatError) as exc:
        logger.error("Cannot read map %s: %s", args.map, exc)
        return EXIT_BAD_INPUT

    source, target = grid.source, grid.target
    if source is None or target is None:
        logger.error("Map %s needs both a '@' source and an 'X' target", args.map)
        return EXIT_BAD_INPUT

    cost_cardinal = cfg.search.cost_cardinal
    cost_diagonal = cfg.search.cost_diagonal
    heuristic = None
    if args.heuristic == "chebyshev":
        def heuristic(a, b):
            return cost_cardinal * chebyshev(a, b)

    seed = args.seed if args.seed is not None else cfg.queue.seed
    max_expansions = args.max_expansions
    if max_expansions is None:
        max_expansions = cfg.search.max_expansions

    try:
        result = search(
            grid,
            source,
            target,
            cost_cardinal=cost_cardinal,
            cost_diagonal=cost_diagonal,
            heuristic=heuristic,
            rng=Random(seed),
            max_expansions=max_expansions,
            config=cfg,
        )
    except SearchLimitExceeded as exc:
        logger.error("%s", exc)
        return EXIT_LIMIT

    if result.path is None:
        print("no path")
        return EXIT_NO_PATH

    if not args.quiet:
        print(dump_map(mark_path(grid, result.path)), end="")
    print(f"cost={result.cost} steps={len(result.path)}")
    return EXIT_OK


__all__ = ["bootstrap", "configure_logging", "main"]


if __name__ == "__main__":
    raise SystemExit(main())
