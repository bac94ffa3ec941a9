from pathlib import Path

import pytest

from pathgrid import main as cli


MAP = (
    "#######\n"
    "#@  # #\n"
    "#   # #\n"
    "#    X#\n"
    "#######\n"
)


@pytest.fixture
def map_file(tmp_path: Path) -> Path:
    path = tmp_path / "map.txt"
    path.write_text(MAP)
    return path


def test_solves_map_and_prints_route(map_file: Path, capsys):
    assert cli.main([str(map_file)]) == cli.EXIT_OK
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "cost=338 steps=4"
    assert out[:-1] == [
        "#######",
        "#@  # #",
        "# . # #",
        "#  ..X#",
        "#######",
    ]


def test_quiet_prints_summary_only(map_file: Path, capsys):
    assert cli.main([str(map_file), "--quiet", "--seed", "3"]) == cli.EXIT_OK
    assert capsys.readouterr().out == "cost=338 steps=4\n"


def test_chebyshev_heuristic_same_cost(map_file: Path, capsys):
    assert cli.main([str(map_file), "--quiet", "--heuristic", "chebyshev"]) == cli.EXIT_OK
    assert capsys.readouterr().out == "cost=338 steps=4\n"


def test_no_path_exit_code(tmp_path: Path, capsys):
    path = tmp_path / "split.txt"
    path.write_text("@#X\n #\n")
    assert cli.main([str(path)]) == cli.EXIT_NO_PATH
    assert capsys.readouterr().out == "no path\n"


def test_bad_input_exit_codes(tmp_path: Path):
    assert cli.main([str(tmp_path / "missing.txt")]) == cli.EXIT_BAD_INPUT

    no_target = tmp_path / "no_target.txt"
    no_target.write_text("@  \n")
    assert cli.main([str(no_target)]) == cli.EXIT_BAD_INPUT

    garbage = tmp_path / "garbage.txt"
    garbage.write_text("@?X\n")
    assert cli.main([str(garbage)]) == cli.EXIT_BAD_INPUT


def test_expansion_limit_exit_code(map_file: Path):
    assert cli.main([str(map_file), "--max-expansions", "1"]) == cli.EXIT_LIMIT


def test_config_from_environment(map_file: Path, tmp_path: Path, monkeypatch, capsys):
    cfg = tmp_path / "unit.yaml"
    cfg.write_text("search:\n  cost_cardinal: 1\n  cost_diagonal: 1\n")
    monkeypatch.setenv("PATHGRID_CONFIG", str(cfg))
    assert cli.main([str(map_file), "--quiet"]) == cli.EXIT_OK
    assert capsys.readouterr().out == "cost=4 steps=4\n"
