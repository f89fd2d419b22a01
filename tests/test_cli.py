# tests/test_cli.py
import os

from gridpath.cli import main
from gridpath.grid import load_grid


def test_runs_every_strategy_on_open_board():
    assert main(['--rows', '10', '--cols', '12', '--algorithm', 'all']) == 0


def test_maze_is_saved_and_reloadable(tmp_path):
    output_dir = str(tmp_path / "out")
    code = main(['--rows', '15', '--cols', '21', '--maze', '--seed', '3',
                 '--algorithm', 'astar', '--save-grid', '--output-dir', output_dir])

    assert code == 0
    saved = os.path.join(output_dir, "grid_15x21_seed3.json")
    assert os.path.exists(saved)

    grid = load_grid(saved)
    assert grid.shape == (15, 21)
    assert main(['--grid-file', saved, '--algorithm', 'bfs']) == 0


def test_visualize_writes_png(tmp_path):
    output_dir = str(tmp_path / "viz")
    code = main(['--rows', '8', '--cols', '10', '--algorithm', 'dfs',
                 '--visualize', '--output-dir', output_dir])

    assert code == 0
    assert os.path.exists(os.path.join(output_dir, "search_8x10_dfs.png"))


def test_bad_grid_size_returns_error_code():
    assert main(['--rows', '0', '--cols', '5']) == 2


def test_maze_on_tiny_grid_returns_error_code():
    assert main(['--rows', '2', '--cols', '5', '--maze']) == 2
