"""
Maze Generator

Rewrites a grid's wall layout with a recursive-backtracking maze. Passages
are carved between lattice cells at odd coordinates so parallel corridors
stay one wall apart. Start and end are kept open, and a final pass carves
the fewest walls needed to join them when the carving left them apart.
"""

import logging
import random
from collections import deque
from typing import List, Optional, Tuple

import numpy as np

from .grid import Grid, GridError, GridTooSmallError, Position, UnreachableEndpointError
from .grid_config import GridConfig

logger = logging.getLogger(__name__)


class MazeGenerator:
    """
    Generates mazes using randomized depth-first backtracking.

    The randomness source is injectable: pass an explicit random.Random, or
    let the generator build one from config.seed.
    """

    def __init__(self, config: Optional[GridConfig] = None, rng: Optional[random.Random] = None):
        self.config = config if config is not None else GridConfig.from_module()
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        # Lattice steps: right, down, left, up
        self.lattice_directions = [(0, 2), (2, 0), (0, -2), (-2, 0)]
        # Endpoint clearing: right, down, left, up
        self.directions = [(0, 1), (1, 0), (0, -1), (-1, 0)]

    @staticmethod
    def _is_interior(row: int, col: int, rows: int, cols: int) -> bool:
        """Inside the outermost ring of cells."""
        return 0 < row < rows - 1 and 0 < col < cols - 1

    def _get_unvisited_neighbors(self, row: int, col: int, visited: np.ndarray) -> List[Tuple[int, int]]:
        """Lattice cells two steps away that are interior and not yet visited."""
        rows, cols = visited.shape
        neighbors = []
        for dr, dc in self.lattice_directions:
            nr, nc = row + dr, col + dc
            if self._is_interior(nr, nc, rows, cols) and not visited[nr, nc]:
                neighbors.append((nr, nc))
        return neighbors

    def _random_lattice_index(self, size: int) -> int:
        """Random odd coordinate in [1, size - 2]."""
        return self.rng.randrange(max((size - 2) // 2, 1)) * 2 + 1

    def _clear_around(self, walls: np.ndarray, pos: Position) -> None:
        """Open the interior cells orthogonally adjacent to pos."""
        rows, cols = walls.shape
        row, col = pos
        for dr, dc in self.directions:
            nr, nc = row + dr, col + dc
            if self._is_interior(nr, nc, rows, cols):
                walls[nr, nc] = False

    def _connect_endpoints(self, walls: np.ndarray, start: Position, end: Position) -> int:
        """
        Carve the cheapest corridor from start to end, if they are apart.

        0-1 breadth-first search over interior cells plus the two endpoints:
        stepping onto an open cell is free, stepping onto a wall costs one.
        The walls on the cheapest route are opened, so an already connected
        layout is left untouched. Border cells other than the endpoints are
        never carved.

        Returns:
            Number of walls carved
        """
        rows, cols = walls.shape
        endpoints = (start, end)

        cost = {start: 0}
        parent = {start: None}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current == end:
                break

            for dr, dc in self.directions:
                nr, nc = current[0] + dr, current[1] + dc
                if not (0 <= nr < rows and 0 <= nc < cols):
                    continue
                if (nr, nc) not in endpoints and not self._is_interior(nr, nc, rows, cols):
                    continue

                step = int(walls[nr, nc])
                new_cost = cost[current] + step
                if (nr, nc) not in cost or new_cost < cost[(nr, nc)]:
                    cost[(nr, nc)] = new_cost
                    parent[(nr, nc)] = current
                    if step:
                        queue.append((nr, nc))
                    else:
                        queue.appendleft((nr, nc))

        if end not in cost:
            raise UnreachableEndpointError(
                f"Cannot connect start {start} to end {end}: an endpoint is surrounded by border cells")

        carved = 0
        node = end
        while node is not None:
            if walls[node]:
                walls[node] = False
                carved += 1
            node = parent[node]
        return carved

    def generate_maze(self, grid: Grid, start: Optional[Position] = None,
                      end: Optional[Position] = None) -> Grid:
        """
        Build a maze with the same dimensions as grid.

        Args:
            grid: Grid whose size (and, by default, endpoints) to use
            start: Start position, defaults to the grid's start
            end: End position, defaults to the grid's end

        Returns:
            New Grid with the carved wall layout, unit weights, and start and
            end unchanged, open and connected

        Raises:
            UnreachableEndpointError: an endpoint sits in a corner, so no
                interior cell can reach it
        """
        start = grid.start if start is None else start
        end = grid.end if end is None else end
        if start is None or end is None:
            raise GridError("Maze generation needs a start and an end position")
        start = grid.check_position(start, "start", allow_wall=True)
        end = grid.check_position(end, "end", allow_wall=True)

        rows, cols = grid.shape
        if rows < 3 or cols < 3:
            raise GridTooSmallError(f"Maze generation needs at least a 3x3 grid, got {rows}x{cols}")

        logger.info(f"Generating {rows}x{cols} maze...")
        endpoints = (start, end)

        # Start with every cell as a wall, except the endpoints
        walls = np.ones((rows, cols), dtype=bool)
        walls[start] = False
        walls[end] = False
        visited = np.zeros((rows, cols), dtype=bool)

        start_row = self._random_lattice_index(rows)
        start_col = self._random_lattice_index(cols)
        if (start_row, start_col) in endpoints:
            start_row, start_col = 1, 1

        stack = [(start_row, start_col)]
        visited[start_row, start_col] = True
        walls[start_row, start_col] = False

        while stack:
            current_row, current_col = stack[-1]
            unvisited_neighbors = self._get_unvisited_neighbors(current_row, current_col, visited)

            if unvisited_neighbors:
                next_row, next_col = self.rng.choice(unvisited_neighbors)
                wall_row = current_row + (next_row - current_row) // 2
                wall_col = current_col + (next_col - current_col) // 2
                visited[next_row, next_col] = True

                # Never carve through an endpoint; the neighbor stays a wall
                if (wall_row, wall_col) in endpoints or (next_row, next_col) in endpoints:
                    continue

                walls[wall_row, wall_col] = False
                walls[next_row, next_col] = False
                stack.append((next_row, next_col))
            else:
                stack.pop()

        self._clear_around(walls, start)
        self._clear_around(walls, end)

        # Extra openings add loops, so the result is no longer a perfect maze
        num_extra = (rows * cols) // self.config.extra_carve_divisor
        for _ in range(num_extra):
            row = self.rng.randrange(rows - 2) + 1
            col = self.rng.randrange(cols - 2) + 1
            if (row, col) not in endpoints:
                walls[row, col] = False

        carved = self._connect_endpoints(walls, start, end)
        if carved:
            logger.info(f"Carved {carved} walls to connect start {start} and end {end}")

        maze = Grid(walls, start=start, end=end)
        logger.info(f"Generated maze with {int(walls.sum())} walls and {num_extra} extra openings")
        return maze


def generate_maze(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None,
                  rng: Optional[random.Random] = None, seed: Optional[int] = None) -> Grid:
    """Generate a maze for grid; pass rng or seed for a reproducible layout."""
    if rng is None:
        rng = random.Random(seed)
    return MazeGenerator(rng=rng).generate_maze(grid, start, end)
