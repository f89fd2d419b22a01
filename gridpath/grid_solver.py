"""
Grid Solver

Four interchangeable search strategies over a weighted Grid:
breadth-first, depth-first, Dijkstra (uniform cost) and A* (Manhattan
heuristic). Every strategy returns the order in which cells were settled
and the path it found, so callers can replay the exploration.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .frontier import PriorityFrontier
from .grid import Grid, GridError, Position, UnknownAlgorithmError, manhattan_distance

logger = logging.getLogger(__name__)

ALGORITHMS = {
    'bfs': 'solve_bfs',
    'dfs': 'solve_dfs',
    'dijkstra': 'solve_dijkstra',
    'astar': 'solve_astar',
}

# Direction mappings for offset conversion
DIRECTION_VECTORS = {
    (-1, 0): 'up',
    (0, 1): 'right',
    (1, 0): 'down',
    (0, -1): 'left',
}


@dataclass
class SearchResult:
    """Settle order and path produced by one search."""
    visited_order: List[Position] = field(default_factory=list)
    path: List[Position] = field(default_factory=list)
    algorithm: str = ''

    @property
    def found(self) -> bool:
        """An empty path is the only signal that end was unreachable."""
        return len(self.path) > 0

    @property
    def num_moves(self) -> int:
        return max(len(self.path) - 1, 0)


class GridSolver:
    """
    Solves a Grid snapshot with one of the search strategies.

    The solver keeps no state between calls: every solve_* method allocates
    its own frontier, predecessor table and settle order.
    """

    def __init__(self, grid: Grid):
        self.grid = grid

    def _open_neighbors(self, pos: Position) -> List[Position]:
        """Non-wall 4-neighbors in down, up, right, left order."""
        return [n for n in self.grid.neighbors(pos) if not self.grid.is_wall(n)]

    def _check_endpoints(self, start: Optional[Position], end: Optional[Position]):
        if start is None:
            start = self.grid.start
        if end is None:
            end = self.grid.end
        if start is None or end is None:
            raise GridError("Grid has no start or end position and none was given")
        return (self.grid.check_position(start, "start"),
                self.grid.check_position(end, "end"))

    @staticmethod
    def _reconstruct_path(parent: Dict[Position, Optional[Position]],
                          start: Position, end: Position) -> List[Position]:
        """Walk predecessors back from end; empty if end was never reached."""
        if end not in parent:
            return []

        path = []
        node = end
        while node is not None:
            path.append(node)
            node = parent[node]
        path.reverse()

        if not path or path[0] != start:
            return []
        return path

    def _finish(self, name: str, visited_order: List[Position], parent,
                start: Position, end: Position) -> SearchResult:
        path = self._reconstruct_path(parent, start, end)
        logger.debug(f"{name}: settled {len(visited_order)} cells, path length {len(path)}")
        return SearchResult(visited_order=visited_order, path=path, algorithm=name)

    def solve_bfs(self, start: Optional[Position] = None,
                  end: Optional[Position] = None) -> SearchResult:
        """
        Breadth-first search. Weights are ignored.

        Cells are marked discovered when enqueued, so each enters the queue
        once and the first time end is dequeued its path has the fewest
        edges.
        """
        start, end = self._check_endpoints(start, end)

        queue = deque([start])
        discovered = {start}
        parent = {start: None}
        visited_order = []

        while queue:
            current = queue.popleft()
            if self.grid.is_wall(current):
                continue

            visited_order.append(current)
            if current == end:
                break

            for neighbor in self._open_neighbors(current):
                if neighbor not in discovered:
                    discovered.add(neighbor)
                    parent[neighbor] = current
                    queue.append(neighbor)

        return self._finish('bfs', visited_order, parent, start, end)

    def solve_dfs(self, start: Optional[Position] = None,
                  end: Optional[Position] = None) -> SearchResult:
        """
        Depth-first search. Finds a path when one exists, not the shortest.

        Neighbors are pushed in reverse so they pop in down, up, right, left
        order.
        """
        start, end = self._check_endpoints(start, end)

        stack = [start]
        discovered = {start}
        parent = {start: None}
        visited_order = []

        while stack:
            current = stack.pop()
            if self.grid.is_wall(current):
                continue

            visited_order.append(current)
            if current == end:
                break

            for neighbor in reversed(self._open_neighbors(current)):
                if neighbor not in discovered:
                    discovered.add(neighbor)
                    parent[neighbor] = current
                    stack.append(neighbor)

        return self._finish('dfs', visited_order, parent, start, end)

    def solve_dijkstra(self, start: Optional[Position] = None,
                       end: Optional[Position] = None) -> SearchResult:
        """
        Uniform-cost search. Entering a cell costs that cell's weight.

        Improved distances push a fresh frontier entry; stale entries are
        dropped when they surface for an already settled cell.
        """
        start, end = self._check_endpoints(start, end)

        dist = np.full(self.grid.shape, np.inf)
        dist[start] = 0
        parent = {start: None}
        settled = set()
        visited_order = []

        frontier = PriorityFrontier()
        frontier.push(start, 0)

        while frontier:
            current, current_dist = frontier.pop()
            if current in settled:
                continue
            if self.grid.is_wall(current):
                continue

            settled.add(current)
            visited_order.append(current)
            if current == end:
                break

            for neighbor in self._open_neighbors(current):
                if neighbor in settled:
                    continue
                alt = current_dist + self.grid.weight_of(neighbor)
                if alt < dist[neighbor]:
                    dist[neighbor] = alt
                    parent[neighbor] = current
                    frontier.push(neighbor, alt)

        return self._finish('dijkstra', visited_order, parent, start, end)

    def solve_astar(self, start: Optional[Position] = None,
                    end: Optional[Position] = None) -> SearchResult:
        """
        A* search with a Manhattan distance heuristic.

        Every cell weight is at least 1, so Manhattan distance never
        overestimates the remaining cost and the path is cost-optimal.
        A cheaper route to a queued cell re-keys its entry instead of adding
        another one.
        """
        start, end = self._check_endpoints(start, end)

        g_score = np.full(self.grid.shape, np.inf)
        g_score[start] = 0
        parent = {start: None}
        settled = set()
        visited_order = []

        frontier = PriorityFrontier()
        frontier.push(start, manhattan_distance(start, end))

        while frontier:
            current, _ = frontier.pop()
            if current in settled:
                continue
            if self.grid.is_wall(current):
                continue

            settled.add(current)
            visited_order.append(current)
            if current == end:
                break

            for neighbor in self._open_neighbors(current):
                if neighbor in settled:
                    continue
                tentative_g = g_score[current] + self.grid.weight_of(neighbor)
                if tentative_g < g_score[neighbor]:
                    parent[neighbor] = current
                    g_score[neighbor] = tentative_g
                    frontier.replace(neighbor, tentative_g + manhattan_distance(neighbor, end))

        return self._finish('astar', visited_order, parent, start, end)

    def solve(self, start: Optional[Position] = None, end: Optional[Position] = None,
              algorithm: str = 'bfs') -> SearchResult:
        """
        Solve with the named strategy.

        Args:
            start: Start position, defaults to the grid's start
            end: End position, defaults to the grid's end
            algorithm: 'bfs', 'dfs', 'dijkstra', or 'astar'

        Returns:
            SearchResult with the settle order and the path (empty if end is
            unreachable)
        """
        if algorithm not in ALGORITHMS:
            raise UnknownAlgorithmError(
                f"Unknown algorithm: {algorithm}. Use {', '.join(repr(a) for a in ALGORITHMS)}.")
        return getattr(self, ALGORITHMS[algorithm])(start, end)


def bfs(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None) -> SearchResult:
    return GridSolver(grid).solve_bfs(start, end)


def dfs(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None) -> SearchResult:
    return GridSolver(grid).solve_dfs(start, end)


def dijkstra(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None) -> SearchResult:
    return GridSolver(grid).solve_dijkstra(start, end)


def astar(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None) -> SearchResult:
    return GridSolver(grid).solve_astar(start, end)


def solve(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None,
          algorithm: str = 'bfs') -> SearchResult:
    return GridSolver(grid).solve(start, end, algorithm)


def path_cost(grid: Grid, path: Sequence[Position]) -> int:
    """Total cost of a path: the weight of every cell entered after start."""
    return sum(grid.weight_of(pos) for pos in path[1:])


def path_to_offsets(path: Sequence[Position]) -> List[str]:
    """
    Convert a path of positions to a sequence of movement directions.

    Args:
        path: List of (row, col) positions

    Returns:
        List of direction strings ('up', 'down', 'left', 'right')
    """
    offsets = []
    for i in range(1, len(path)):
        prev_row, prev_col = path[i - 1]
        curr_row, curr_col = path[i]

        offset = (curr_row - prev_row, curr_col - prev_col)
        if offset not in DIRECTION_VECTORS:
            raise ValueError(f"Invalid move from {path[i - 1]} to {path[i]}")
        offsets.append(DIRECTION_VECTORS[offset])

    return offsets


def validate_path(grid: Grid, path: Sequence[Position], start: Position, end: Position) -> bool:
    """
    Check that a path runs from start to end through adjacent, open,
    non-repeating cells.
    """
    if not path:
        return False

    if tuple(path[0]) != tuple(start) or tuple(path[-1]) != tuple(end):
        return False

    if len(set(map(tuple, path))) != len(path):
        return False

    for i, pos in enumerate(path):
        if not grid.in_bounds(pos) or grid.is_wall(pos):
            return False
        if i > 0 and manhattan_distance(path[i - 1], pos) != 1:
            return False

    return True


def compare_algorithms(grid: Grid, start: Optional[Position] = None, end: Optional[Position] = None,
                       algorithms: Sequence[str] = ('bfs', 'dfs', 'dijkstra', 'astar')) -> Dict:
    """
    Solve the same grid with several strategies.

    Returns:
        Dictionary keyed by algorithm name with the SearchResult and its
        summary statistics
    """
    solver = GridSolver(grid)
    start_pos, end_pos = solver._check_endpoints(start, end)
    solutions = {}

    for algorithm in algorithms:
        result = solver.solve(start_pos, end_pos, algorithm)
        solutions[algorithm] = {
            'result': result,
            'visited_count': len(result.visited_order),
            'path_length': len(result.path),
            'num_moves': result.num_moves,
            'path_cost': path_cost(grid, result.path) if result.found else None,
            'is_valid': validate_path(grid, result.path, start_pos, end_pos),
        }
        logger.info(f"{algorithm}: visited {len(result.visited_order)}, "
                    f"path length {len(result.path)}, cost {solutions[algorithm]['path_cost']}")

    return solutions
