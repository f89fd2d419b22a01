"""
Command line entry point: build or load a grid, optionally carve a maze,
run one or all search strategies and report what they explored.
"""

import argparse
import logging
import os
import sys
import time

from . import grid_config
from .grid import Grid, GridError, load_grid, save_grid
from .grid_config import ALGORITHM_NAMES, GridConfig
from .grid_solver import compare_algorithms
from .maze_generator import MazeGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search a weighted grid with BFS, DFS, Dijkstra or A*",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('--rows', type=int, default=grid_config.rows,
                        help='Number of grid rows')
    parser.add_argument('--cols', type=int, default=grid_config.cols,
                        help='Number of grid columns')
    parser.add_argument('--seed', type=int, default=grid_config.seed,
                        help='Random seed for maze generation')
    parser.add_argument('--algorithm', type=str, default=grid_config.algorithm,
                        choices=list(ALGORITHM_NAMES) + ['all'],
                        help='Search strategy to run')
    parser.add_argument('--maze', action='store_true',
                        help='Carve a maze into the grid before searching')
    parser.add_argument('--grid-file', type=str, default=None,
                        help='Load the grid from a JSON file saved with --save-grid')
    parser.add_argument('--save-grid', action='store_true',
                        help='Save the grid as JSON in the output directory')
    parser.add_argument('--output-dir', type=str, default=grid_config.output_dir,
                        help='Directory for saved grids, images and logs')
    parser.add_argument('--visualize', action='store_true',
                        help='Save a PNG rendering of the search in the output directory')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    return parser


def setup_logging(level: str, output_dir: str = None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        log_file = os.path.join(output_dir, f"gridpath_{time.strftime('%Y%m%d-%H%M%S')}.log")
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def main(argv=None) -> int:
    """Parse arguments, run the requested searches and log a summary."""
    parser = build_parser()
    args = parser.parse_args(argv)

    writes_files = args.save_grid or args.visualize
    setup_logging(args.log_level, args.output_dir if writes_files else None)

    try:
        algorithm = args.algorithm if args.algorithm != 'all' else grid_config.algorithm
        config = GridConfig(rows=args.rows, cols=args.cols, seed=args.seed,
                            algorithm=algorithm, output_dir=args.output_dir)
        if args.grid_file:
            grid = load_grid(args.grid_file)
        else:
            grid = Grid.from_config(config)

        logging.info("=" * 50)
        logging.info("Configuration:")
        for key, value in vars(args).items():
            logging.info(f"  {key}: {value}")
        logging.info("-" * 50)

        if args.maze:
            grid = MazeGenerator(config).generate_maze(grid)

        algorithms = ALGORITHM_NAMES if args.algorithm == 'all' else (args.algorithm,)
        solutions = compare_algorithms(grid, algorithms=algorithms)
    except (GridError, ValueError) as e:
        logging.error(f"Error: {e}")
        return 2

    for name, solution in solutions.items():
        outcome = (f"path {solution['path_length']} cells, {solution['num_moves']} moves, "
                   f"cost {solution['path_cost']}") if solution['path_length'] else "no path"
        logging.info(f"{name:>8}: visited {solution['visited_count']} cells, {outcome}")

    if args.save_grid:
        filename = f"grid_{grid.rows}x{grid.cols}{'_seed' + str(args.seed) if args.seed is not None else ''}.json"
        filepath = save_grid(grid, filename, args.output_dir)
        logging.info(f"Grid saved to: {filepath}")

    if args.visualize:
        from .grid_visualizer import GridVisualizer

        visualizer = GridVisualizer()
        results = {name: solution['result'] for name, solution in solutions.items()}
        if len(results) == 1:
            name, result = next(iter(results.items()))
            save_path = os.path.join(args.output_dir, f"search_{grid.rows}x{grid.cols}_{name}.png")
            visualizer.visualize_search(grid, result, save_path=save_path, show_plot=False)
        else:
            save_path = os.path.join(args.output_dir, f"comparison_{grid.rows}x{grid.cols}.png")
            visualizer.compare_algorithms(grid, results, save_path=save_path, show_plot=False)

    return 0


if __name__ == "__main__":
    sys.exit(main())
