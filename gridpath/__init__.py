"""
Grid pathfinding: four search strategies and a maze generator over a
weighted 2D grid.
"""

from .grid import (
    DIRECTIONS,
    EmptyGridError,
    Grid,
    GridError,
    GridTooSmallError,
    Node,
    Position,
    PositionOutOfBoundsError,
    UnknownAlgorithmError,
    UnreachableEndpointError,
    WallPositionError,
    load_grid,
    manhattan_distance,
    save_grid,
)
from .grid_config import GridConfig
from .grid_solver import (
    ALGORITHMS,
    GridSolver,
    SearchResult,
    astar,
    bfs,
    compare_algorithms,
    dfs,
    dijkstra,
    path_cost,
    path_to_offsets,
    solve,
    validate_path,
)
from .maze_generator import MazeGenerator, generate_maze

__version__ = "0.1.0"
