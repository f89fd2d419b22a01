# tests/test_maze_generator.py
import random

import numpy as np
import pytest

from gridpath.grid import Grid, GridError, GridTooSmallError, UnreachableEndpointError
from gridpath.grid_config import GridConfig
from gridpath.grid_solver import bfs
from gridpath.maze_generator import MazeGenerator, generate_maze


def _border_mask(shape):
    mask = np.zeros(shape, dtype=bool)
    mask[0, :] = mask[-1, :] = True
    mask[:, 0] = mask[:, -1] = True
    return mask


def _assert_maze_invariants(source: Grid, maze: Grid):
    assert maze.shape == source.shape
    assert maze.start == source.start
    assert maze.end == source.end
    assert not maze.is_wall(maze.start)
    assert not maze.is_wall(maze.end)
    assert (maze.weights == 1).all()

    # Outer ring stays wall everywhere except on the endpoints themselves
    border = _border_mask(maze.shape)
    for row, col in np.argwhere(border):
        if (row, col) not in (maze.start, maze.end):
            assert maze.is_wall((row, col)), f"border cell ({row}, {col}) was carved"

    # Each endpoint keeps at least one open interior neighbor
    for pos in (maze.start, maze.end):
        interior = [n for n in maze.neighbors(pos) if not border[n]]
        assert any(not maze.is_wall(n) for n in interior)


@pytest.mark.parametrize("seed", range(6))
def test_maze_invariants_on_odd_grid(seed):
    grid = Grid.empty(21, 31, start=(1, 1), end=(19, 29))
    maze = generate_maze(grid, seed=seed)

    _assert_maze_invariants(grid, maze)
    assert maze.walls.sum() > 0


@pytest.mark.parametrize("seed", range(6))
def test_maze_invariants_on_default_board(seed):
    grid = Grid.from_config(GridConfig(rows=30, cols=50))
    maze = MazeGenerator(GridConfig(seed=seed)).generate_maze(grid)

    _assert_maze_invariants(grid, maze)


@pytest.mark.parametrize("seed", range(6))
def test_lattice_endpoints_are_connected(seed):
    grid = Grid.empty(21, 31, start=(1, 1), end=(19, 29))
    maze = generate_maze(grid, seed=seed)

    assert bfs(maze).found


@pytest.mark.parametrize("seed", range(50))
def test_three_row_grid_is_connected(seed):
    grid = Grid.empty(3, 11, start=(1, 2), end=(1, 8))
    maze = generate_maze(grid, seed=seed)

    _assert_maze_invariants(grid, maze)
    assert bfs(maze).found


@pytest.mark.parametrize("seed", range(10))
def test_default_board_is_connected(seed):
    grid = Grid.from_config(GridConfig())
    maze = MazeGenerator(GridConfig(seed=seed)).generate_maze(grid)

    assert bfs(maze).found


@pytest.mark.parametrize("seed", range(40))
def test_random_endpoints_including_border_are_connected(seed):
    rng = random.Random(seed)
    rows, cols = rng.randrange(3, 16), rng.randrange(4, 16)
    # Any cell except the four corners
    cells = [(r, c) for r in range(rows) for c in range(cols)
             if r not in (0, rows - 1) or c not in (0, cols - 1)]
    start, end = rng.sample(cells, 2)
    grid = Grid.empty(rows, cols, start=start, end=end)

    maze = generate_maze(grid, seed=seed)

    _assert_maze_invariants(grid, maze)
    assert bfs(maze).found


def test_border_endpoint_off_the_lattice_is_connected():
    grid = Grid.empty(13, 7, start=(4, 1), end=(12, 0))
    maze = generate_maze(grid, seed=2)

    _assert_maze_invariants(grid, maze)
    assert bfs(maze).found


def test_connected_layout_is_not_recarved():
    grid = Grid.empty(21, 31, start=(1, 1), end=(19, 29))
    maze = generate_maze(grid, seed=0)
    walls = maze.walls.copy()

    generator = MazeGenerator(rng=random.Random(0))
    assert generator._connect_endpoints(walls, maze.start, maze.end) == 0
    assert (walls == maze.walls).all()


def test_corner_endpoint_is_rejected():
    grid = Grid.empty(9, 9, start=(0, 0), end=(4, 4))
    with pytest.raises(UnreachableEndpointError):
        generate_maze(grid, seed=0)


def test_endpoints_on_border_stay_open():
    grid = Grid.empty(11, 11, start=(0, 5), end=(10, 5))
    maze = generate_maze(grid, seed=4)

    _assert_maze_invariants(grid, maze)
    assert not maze.is_wall((1, 5))
    assert not maze.is_wall((9, 5))


def test_same_seed_gives_same_layout():
    grid = Grid.empty(15, 25, start=(7, 5), end=(7, 20))

    first = generate_maze(grid, seed=123)
    second = MazeGenerator(rng=random.Random(123)).generate_maze(grid)
    third = generate_maze(grid, rng=random.Random(123))

    assert first == second == third


def test_different_seeds_give_different_layouts():
    grid = Grid.empty(15, 25, start=(7, 5), end=(7, 20))
    assert generate_maze(grid, seed=1) != generate_maze(grid, seed=2)


def test_generation_resets_weights_and_leaves_input_alone():
    grid = Grid.empty(9, 9, start=(1, 1), end=(7, 7)).with_weight((4, 4), 15).with_wall((2, 3))
    before = grid.to_text()

    maze = generate_maze(grid, seed=0)

    assert (maze.weights == 1).all()
    assert grid.to_text() == before


def test_explicit_endpoints_override_grid_flags():
    grid = Grid.empty(11, 11, start=(1, 1), end=(9, 9))
    maze = generate_maze(grid, start=(3, 3), end=(7, 7), seed=5)

    assert maze.start == (3, 3)
    assert maze.end == (7, 7)
    assert not maze.is_wall((3, 3))
    assert not maze.is_wall((7, 7))


@pytest.mark.parametrize("shape", [(2, 10), (10, 2), (1, 1)])
def test_grid_without_interior_is_rejected(shape):
    grid = Grid.empty(*shape, start=(0, 0), end=(shape[0] - 1, shape[1] - 1))
    with pytest.raises(GridTooSmallError):
        generate_maze(grid, seed=0)


def test_missing_endpoints_are_rejected():
    with pytest.raises(GridError):
        generate_maze(Grid.empty(9, 9), seed=0)
