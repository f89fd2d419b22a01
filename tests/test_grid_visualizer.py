# tests/test_grid_visualizer.py
import matplotlib.pyplot as plt
import pytest

from gridpath.grid import Grid
from gridpath.grid_solver import astar, bfs, dfs, dijkstra
from gridpath.grid_visualizer import END, PATH, START, VISITED, WALL, WEIGHTED, GridVisualizer


@pytest.fixture
def grid():
    return Grid.from_text("""
        S.#..
        .5#..
        ....E
    """)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_grid_image_codes(grid):
    visualizer = GridVisualizer()
    result = bfs(grid)
    image = visualizer.grid_image(grid, result)

    assert image[grid.start] == START
    assert image[grid.end] == END
    assert image[0, 2] == WALL
    for pos in result.path[1:-1]:
        assert image[pos] == PATH
    assert image[0, 4] in (VISITED, 0)

    plain = visualizer.grid_image(grid)
    assert plain[1, 1] == WEIGHTED


def test_visualize_search_saves_figure(grid, tmp_path):
    save_path = tmp_path / "search.png"
    fig = GridVisualizer(figsize=(4, 4)).visualize_search(
        grid, dijkstra(grid), save_path=str(save_path), show_plot=False)

    assert save_path.exists()
    assert "Dijkstra" in fig.axes[0].get_title()


def test_visualize_grid_returns_figure(grid):
    fig = GridVisualizer(figsize=(4, 4)).visualize_grid(grid, title="Board", show_plot=False)
    assert fig.axes[0].get_title().startswith("Board")


def test_compare_algorithms_draws_one_panel_per_strategy(grid, tmp_path):
    results = {name: fn(grid) for name, fn in
               (('bfs', bfs), ('dfs', dfs), ('dijkstra', dijkstra), ('astar', astar))}
    save_path = tmp_path / "comparison.png"

    fig = GridVisualizer(figsize=(6, 6)).compare_algorithms(
        grid, results, save_path=str(save_path), show_plot=False)

    assert len(fig.axes) == 4
    assert save_path.exists()


def test_compare_algorithms_needs_results(grid):
    with pytest.raises(ValueError):
        GridVisualizer().compare_algorithms(grid, {}, show_plot=False)
