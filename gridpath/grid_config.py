"""
Grid Configuration

Default board settings plus the GridConfig dataclass used by the generator,
the solvers and the command line.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

rows = 30
cols = 50
seed = None
algorithm = "bfs"  # "bfs", "dfs", "dijkstra", or "astar"
output_dir = "grid_output"

# Weights the board editor cycles through when a weighted cell is clicked
weight_cycle = (1, 5, 10, 15)

# One extra random carve per this many cells after the backtracking pass
extra_carve_divisor = 50

ALGORITHM_NAMES = ("bfs", "dfs", "dijkstra", "astar")


@dataclass
class GridConfig:
    """Configuration for building, generating and solving a grid."""
    rows: int = rows
    cols: int = cols
    seed: Optional[int] = seed
    algorithm: str = algorithm
    start_pos: Optional[Tuple[int, int]] = None  # (row, col), None for default placement
    end_pos: Optional[Tuple[int, int]] = None    # (row, col), None for default placement
    output_dir: str = output_dir
    extra_carve_divisor: int = extra_carve_divisor

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Invalid grid size: {self.rows}x{self.cols}")
        if self.algorithm not in ALGORITHM_NAMES:
            raise ValueError(f"Invalid algorithm: {self.algorithm}. Choose one of {', '.join(ALGORITHM_NAMES)}.")
        if self.extra_carve_divisor <= 0:
            raise ValueError(f"Invalid extra_carve_divisor: {self.extra_carve_divisor}")

    @classmethod
    def from_module(cls) -> "GridConfig":
        """Build a config from the module-level defaults."""
        return cls(
            rows=rows,
            cols=cols,
            seed=seed,
            algorithm=algorithm,
            output_dir=output_dir,
            extra_carve_divisor=extra_carve_divisor,
        )

    def default_start(self) -> Tuple[int, int]:
        """Start sits on the middle row, a fifth of the way in."""
        if self.start_pos is not None:
            return tuple(self.start_pos)
        return self.rows // 2, int(self.cols * 0.2)

    def default_end(self) -> Tuple[int, int]:
        """End sits on the middle row, four fifths of the way in."""
        if self.end_pos is not None:
            return tuple(self.end_pos)
        return self.rows // 2, int(self.cols * 0.8)
