"""
Grid Visualization

Static matplotlib renderings of a grid, of one search result (settled cells
plus the path) and of several strategies side by side.
"""

import logging
import math
from typing import Dict, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from .grid import Grid
from .grid_solver import SearchResult

logger = logging.getLogger(__name__)

# Cell codes used in the rendered image
PASSAGE, WALL, WEIGHTED, VISITED, PATH, START, END = range(7)


class GridVisualizer:
    """
    Grid and search visualization.
    """

    def __init__(self, figsize: Tuple[int, int] = (12, 8), dpi: int = 100):
        self.figsize = figsize
        self.dpi = dpi

        # Color schemes
        self.colors = {
            'passage': '#ECF0F1',        # Light gray
            'wall': '#2C3E50',           # Dark blue-gray
            'weighted': '#D5B895',       # Sand
            'visited': '#85C1E9',        # Light blue
            'path': '#F4D03F',           # Yellow
            'start': '#27AE60',          # Green
            'end': '#E74C3C',            # Red
            'grid_lines': '#BDC3C7',     # Light gray
            'weight_labels': '#34495E'   # Dark gray
        }
        self.cmap = ListedColormap([
            self.colors['passage'], self.colors['wall'], self.colors['weighted'],
            self.colors['visited'], self.colors['path'], self.colors['start'], self.colors['end'],
        ])

        self.titles = {
            'bfs': 'BFS (unweighted, shortest)',
            'dfs': 'DFS (unweighted, not shortest)',
            'dijkstra': 'Dijkstra (weighted, shortest)',
            'astar': 'A* (weighted, shortest)',
        }

    def grid_image(self, grid: Grid, result: Optional[SearchResult] = None) -> np.ndarray:
        """Integer image of the grid, one cell code per position."""
        image = np.full(grid.shape, PASSAGE, dtype=int)
        image[grid.weights > 1] = WEIGHTED
        image[grid.walls] = WALL

        if result is not None:
            for row, col in result.visited_order:
                image[row, col] = VISITED
            for row, col in result.path:
                image[row, col] = PATH

        # Endpoints drawn last so they stay visible
        if grid.start is not None:
            image[grid.start] = START
        if grid.end is not None:
            image[grid.end] = END
        return image

    def _draw_grid(self, ax, grid: Grid, result: Optional[SearchResult] = None,
                   show_grid: bool = True, show_weights: bool = True):
        """Draw the grid cells, weight labels and (optionally) a path line."""
        ax.imshow(self.grid_image(grid, result), cmap=self.cmap, vmin=0, vmax=6,
                  origin='upper', interpolation='nearest')

        if show_grid:
            for r in range(grid.rows + 1):
                ax.axhline(y=r - 0.5, color=self.colors['grid_lines'], linewidth=0.5, alpha=0.5)
            for c in range(grid.cols + 1):
                ax.axvline(x=c - 0.5, color=self.colors['grid_lines'], linewidth=0.5, alpha=0.5)

        if show_weights:
            fontsize = 7 if max(grid.shape) <= 30 else 5
            for row, col in np.argwhere((grid.weights > 1) & ~grid.walls):
                ax.text(col, row, str(grid.weights[row, col]), ha='center', va='center',
                        fontsize=fontsize, color=self.colors['weight_labels'], zorder=4)

        if result is not None and len(result.path) > 1:
            rows = [pos[0] for pos in result.path]
            cols = [pos[1] for pos in result.path]
            ax.plot(cols, rows, color=self.colors['end'], linewidth=2, alpha=0.7, zorder=3)

        ax.set_xlim(-0.5, grid.cols - 0.5)
        ax.set_ylim(grid.rows - 0.5, -0.5)
        ax.set_aspect('equal')
        ax.axis('off')

    def _finish(self, fig, save_path: Optional[str], show_plot: bool):
        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, bbox_inches='tight', dpi=self.dpi)
            logger.info(f"Grid visualization saved to: {save_path}")

        if show_plot:
            plt.show()

        return fig

    def visualize_grid(self, grid: Grid, title: str = "Grid",
                       save_path: Optional[str] = None,
                       show_grid: bool = True,
                       show_plot: bool = True) -> plt.Figure:
        """
        Visualize a grid without any search overlay.

        Args:
            grid: Grid to draw
            title: Plot title
            save_path: Path to save the visualization
            show_grid: Whether to show grid lines
            show_plot: Whether to display the plot

        Returns:
            matplotlib Figure object
        """
        fig, ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)
        self._draw_grid(ax, grid, show_grid=show_grid)
        ax.set_title(f"{title}\nSize: {grid.rows}x{grid.cols}", fontsize=14, pad=20)
        return self._finish(fig, save_path, show_plot)

    def visualize_search(self, grid: Grid, result: SearchResult,
                         title: Optional[str] = None,
                         save_path: Optional[str] = None,
                         show_grid: bool = True,
                         show_plot: bool = True) -> plt.Figure:
        """
        Visualize a grid with the cells a search settled and the path it found.

        Args:
            grid: Grid that was searched
            result: SearchResult from one of the solvers
            title: Plot title (auto-generated if None)
            save_path: Path to save the visualization
            show_grid: Whether to show grid lines
            show_plot: Whether to display the plot

        Returns:
            matplotlib Figure object
        """
        if title is None:
            name = self.titles.get(result.algorithm, result.algorithm or 'Search')
            outcome = f"path {len(result.path)} cells" if result.found else "no path"
            title = f"{name}\nVisited: {len(result.visited_order)}, {outcome}"

        fig, ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)
        self._draw_grid(ax, grid, result, show_grid=show_grid)
        ax.set_title(title, fontsize=14, pad=20)
        return self._finish(fig, save_path, show_plot)

    def compare_algorithms(self, grid: Grid, results: Dict[str, SearchResult],
                           save_path: Optional[str] = None,
                           show_plot: bool = True) -> plt.Figure:
        """Draw one subplot per strategy on the same grid."""
        if not results:
            raise ValueError("No search results to compare")

        n = len(results)
        ncols = min(n, 2)
        nrows = math.ceil(n / ncols)
        fig, axes = plt.subplots(nrows, ncols, figsize=self.figsize, dpi=self.dpi, squeeze=False)

        for ax, (algorithm, result) in zip(axes.ravel(), results.items()):
            self._draw_grid(ax, grid, result, show_grid=False, show_weights=False)
            name = self.titles.get(algorithm, algorithm)
            ax.set_title(f"{name}\nVisited: {len(result.visited_order)}, path: {len(result.path)}",
                         fontsize=10)

        # Hide unused subplots
        for ax in axes.ravel()[n:]:
            ax.axis('off')

        fig.suptitle(f"Algorithm comparison ({grid.rows}x{grid.cols})", fontsize=14)
        return self._finish(fig, save_path, show_plot)
