"""
Grid Model

Immutable snapshot of a rectangular board of weighted cells. Walls and
weights live in two read-only numpy layers; start and end are positions.
Every editing operation returns a new Grid.
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .grid_config import GridConfig, weight_cycle

Position = Tuple[int, int]  # (row, col)

# Movement order: down, up, right, left. Neighbor processing (and so every
# tie-break) depends on it.
DIRECTIONS: Tuple[Position, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GridError(ValueError):
    """Base class for malformed grid input."""


class EmptyGridError(GridError):
    """Grid has zero rows or zero columns."""


class PositionOutOfBoundsError(GridError):
    """A position lies outside the grid."""


class WallPositionError(GridError):
    """An endpoint was placed on a wall cell."""


class GridTooSmallError(GridError):
    """Grid has no interior to carve a maze in."""


class UnreachableEndpointError(GridError):
    """An endpoint is boxed in by border cells and cannot join the maze."""


class UnknownAlgorithmError(ValueError):
    """Requested search strategy does not exist."""


@dataclass(frozen=True)
class Node:
    """Read-only view of a single cell."""
    position: Position
    is_start: bool = False
    is_end: bool = False
    is_wall: bool = False
    weight: int = 1

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def col(self) -> int:
        return self.position[1]


def manhattan_distance(a: Position, b: Position) -> int:
    """|drow| + |dcol| between two positions."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _as_position(pos: Sequence[int]) -> Position:
    row, col = pos
    if int(row) != row or int(col) != col:
        raise ValueError(f"Coordinates must be integers, got {tuple(pos)!r}")
    return int(row), int(col)


class Grid:
    """
    Rectangular, row-major board of Nodes.

    The wall and weight layers are frozen numpy arrays, so a Grid can be
    handed to any number of searches without being copied.
    """

    def __init__(self, walls, weights=None,
                 start: Optional[Position] = None, end: Optional[Position] = None):
        walls = np.array(walls, dtype=bool)
        if walls.ndim != 2 or walls.shape[0] == 0 or walls.shape[1] == 0:
            raise EmptyGridError(f"Grid must have at least one row and one column, got shape {walls.shape}")

        if weights is None:
            weights = np.ones(walls.shape, dtype=int)
        else:
            weights = np.array(weights, dtype=int)
        if weights.shape != walls.shape:
            raise GridError(f"Weight layer shape {weights.shape} does not match wall layer shape {walls.shape}")
        if (weights < 1).any():
            raise GridError(f"Cell weights must be >= 1, got minimum {int(weights.min())}")

        self._walls = walls
        self._weights = weights
        self.start = None if start is None else self.check_position(start, "start", allow_wall=True)
        self.end = None if end is None else self.check_position(end, "end", allow_wall=True)

        # A wall node is never an endpoint
        for pos in (self.start, self.end):
            if pos is not None:
                self._walls[pos] = False

        self._walls.flags.writeable = False
        self._weights.flags.writeable = False

    # ---------- Construction ----------

    @classmethod
    def empty(cls, rows: int, cols: int,
              start: Optional[Position] = None, end: Optional[Position] = None) -> "Grid":
        """Open board with unit weights."""
        if rows <= 0 or cols <= 0:
            raise EmptyGridError(f"Grid must have at least one row and one column, got {rows}x{cols}")
        return cls(np.zeros((rows, cols), dtype=bool), start=start, end=end)

    @classmethod
    def from_config(cls, config: GridConfig) -> "Grid":
        """Open board sized and seeded with endpoints from a GridConfig."""
        return cls.empty(config.rows, config.cols,
                         start=config.default_start(), end=config.default_end())

    @classmethod
    def from_text(cls, text: Union[str, Iterable[str]]) -> "Grid":
        """
        Parse a text board.

        '#' wall, 'S' start, 'E' end, '.' open cell, '1'-'9' open cell with
        that weight. Rows must all have the same length.
        """
        if isinstance(text, str):
            lines = [line.strip() for line in text.strip().splitlines()]
        else:
            lines = [line.strip() for line in text]
        lines = [line for line in lines if line]
        if not lines:
            raise EmptyGridError("Text grid has no rows")

        width = len(lines[0])
        walls = np.zeros((len(lines), width), dtype=bool)
        weights = np.ones((len(lines), width), dtype=int)
        start = end = None

        for r, line in enumerate(lines):
            if len(line) != width:
                raise GridError(f"Row {r} has length {len(line)}, expected {width}")
            for c, ch in enumerate(line):
                if ch == '#':
                    walls[r, c] = True
                elif ch == 'S':
                    start = (r, c)
                elif ch == 'E':
                    end = (r, c)
                elif ch.isdigit() and ch != '0':
                    weights[r, c] = int(ch)
                elif ch != '.':
                    raise GridError(f"Unknown cell symbol {ch!r} at ({r}, {c})")

        return cls(walls, weights, start=start, end=end)

    # ---------- Shape and lookups ----------

    @property
    def rows(self) -> int:
        return self._walls.shape[0]

    @property
    def cols(self) -> int:
        return self._walls.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._walls.shape

    @property
    def walls(self) -> np.ndarray:
        """Read-only boolean wall layer, indexed [row, col]."""
        return self._walls

    @property
    def weights(self) -> np.ndarray:
        """Read-only integer weight layer, indexed [row, col]."""
        return self._weights

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_wall(self, pos: Position) -> bool:
        return bool(self._walls[pos[0], pos[1]])

    def weight_of(self, pos: Position) -> int:
        return int(self._weights[pos[0], pos[1]])

    def node(self, pos: Position) -> Node:
        pos = self.check_position(pos, allow_wall=True)
        return Node(
            position=pos,
            is_start=pos == self.start,
            is_end=pos == self.end,
            is_wall=self.is_wall(pos),
            weight=self.weight_of(pos),
        )

    def nodes(self) -> Iterator[Node]:
        """All nodes, row-major."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.node((row, col))

    def neighbors(self, pos: Position) -> List[Position]:
        """In-bounds 4-neighbors of pos in DIRECTIONS order, walls included."""
        row, col = pos
        out = []
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                out.append((nr, nc))
        return out

    def open_cells(self) -> List[Position]:
        """Positions of all non-wall cells, row-major."""
        return [(int(r), int(c)) for r, c in np.argwhere(~self._walls)]

    def check_position(self, pos: Sequence[int], name: str = "position",
                       allow_wall: bool = False) -> Position:
        """Return pos as a (row, col) tuple, or raise if it is unusable."""
        try:
            pos = _as_position(pos)
        except (TypeError, ValueError):
            raise PositionOutOfBoundsError(f"Invalid {name}: {pos!r}")
        if not self.in_bounds(pos):
            raise PositionOutOfBoundsError(
                f"Invalid {name} position: {pos} outside {self.rows}x{self.cols} grid")
        if not allow_wall and self.is_wall(pos):
            raise WallPositionError(f"Invalid {name} position: {pos} is a wall")
        return pos

    # ---------- Editing (each returns a new Grid) ----------

    def _replace(self, walls=None, weights=None, start=None, end=None) -> "Grid":
        return Grid(
            self._walls if walls is None else walls,
            self._weights if weights is None else weights,
            start=self.start if start is None else start,
            end=self.end if end is None else end,
        )

    def _is_endpoint(self, pos: Position) -> bool:
        return pos == self.start or pos == self.end

    def with_wall(self, pos: Position, is_wall: bool = True) -> "Grid":
        """Set or clear a wall. Endpoints cannot become walls."""
        pos = self.check_position(pos, allow_wall=True)
        if self._is_endpoint(pos):
            return self
        walls = self._walls.copy()
        walls[pos] = is_wall
        return self._replace(walls=walls)

    def toggle_wall(self, pos: Position) -> "Grid":
        pos = self.check_position(pos, allow_wall=True)
        return self.with_wall(pos, not self.is_wall(pos))

    def with_start(self, pos: Position) -> "Grid":
        """Move the start. Refused (no-op) when pos is the end."""
        pos = self.check_position(pos, "start", allow_wall=True)
        if pos == self.end:
            return self
        return self._replace(start=pos)

    def with_end(self, pos: Position) -> "Grid":
        """Move the end. Refused (no-op) when pos is the start."""
        pos = self.check_position(pos, "end", allow_wall=True)
        if pos == self.start:
            return self
        return self._replace(end=pos)

    def with_weight(self, pos: Position, weight: int) -> "Grid":
        pos = self.check_position(pos, allow_wall=True)
        if weight < 1:
            raise GridError(f"Cell weights must be >= 1, got {weight}")
        weights = self._weights.copy()
        weights[pos] = weight
        return self._replace(weights=weights)

    def cycle_weight(self, pos: Position) -> "Grid":
        """
        Step a cell through the editor's weight cycle (1, 5, 10, 15, back to 1).

        Weights outside the cycle reset to 1. Endpoints and walls are left
        untouched.
        """
        pos = self.check_position(pos, allow_wall=True)
        if self._is_endpoint(pos) or self.is_wall(pos):
            return self
        current = self.weight_of(pos)
        if current in weight_cycle and current != weight_cycle[-1]:
            next_weight = weight_cycle[weight_cycle.index(current) + 1]
        else:
            next_weight = weight_cycle[0]
        return self.with_weight(pos, next_weight)

    def cleared(self) -> "Grid":
        """Clear the board: no walls, unit weights, endpoints kept."""
        return Grid(np.zeros(self.shape, dtype=bool), start=self.start, end=self.end)

    # ---------- Rendering ----------

    def to_text(self) -> str:
        """Text rendering; the inverse of from_text for weights below 10."""
        lines = []
        for row in range(self.rows):
            chars = []
            for col in range(self.cols):
                pos = (row, col)
                weight = self.weight_of(pos)
                if pos == self.start:
                    chars.append('S')
                elif pos == self.end:
                    chars.append('E')
                elif self.is_wall(pos):
                    chars.append('#')
                elif weight == 1:
                    chars.append('.')
                elif weight < 10:
                    chars.append(str(weight))
                else:
                    chars.append('+')
            lines.append(''.join(chars))
        return '\n'.join(lines)

    def to_dict(self) -> Dict:
        return {
            'config': {
                'rows': self.rows,
                'cols': self.cols,
                'start_pos': None if self.start is None else list(self.start),
                'end_pos': None if self.end is None else list(self.end),
            },
            'walls': self._walls.astype(int).tolist(),
            'weights': self._weights.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Grid":
        config = data['config']
        start = config.get('start_pos')
        end = config.get('end_pos')
        return cls(
            data['walls'],
            data.get('weights'),
            start=None if start is None else tuple(start),
            end=None if end is None else tuple(end),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.start == other.start and self.end == other.end
                and np.array_equal(self._walls, other._walls)
                and np.array_equal(self._weights, other._weights))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Grid(rows={self.rows}, cols={self.cols}, start={self.start}, end={self.end}, "
                f"walls={int(self._walls.sum())})")


def save_grid(grid: Grid, filename: str, output_dir: str = "grid_output") -> str:
    """Save grid data to a JSON file and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, filename)

    with open(filepath, 'w') as f:
        json.dump(grid.to_dict(), f, indent=2)

    return filepath


def load_grid(filepath: str) -> Grid:
    """Load a grid saved by save_grid."""
    with open(filepath, 'r') as f:
        return Grid.from_dict(json.load(f))
