"""Command-line host for running a universe in the terminal."""

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.errors import LifeGridError
from ..core.patterns import PatternLibrary
from ..core.seeding import RandomSeed
from ..core.simulation import Simulation
from ..core.universe import Universe

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Configuration for a single terminal run."""

    width: int = 64
    height: int = 64
    population_rate: float = 0.5
    seed: Optional[int] = None
    pattern: Optional[str] = None
    pattern_row: Optional[int] = None
    pattern_col: Optional[int] = None
    max_generations: int = 1000
    animate: bool = False
    delay: float = 0.1
    show_grid: bool = False
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        return cls(
            width=args.width,
            height=args.height,
            population_rate=args.population,
            seed=args.seed,
            pattern=args.pattern,
            pattern_row=args.pattern_row,
            pattern_col=args.pattern_col,
            max_generations=args.max_generations,
            animate=args.animate,
            delay=args.delay,
            show_grid=args.show_grid,
            verbose=args.verbose,
        )


class CLILifeGrid:
    """Command-line interface for running universes."""

    def __init__(self):
        self.pattern_library = PatternLibrary()

    def build_universe(self, config: RunConfig) -> Universe:
        """Create the starting universe described by ``config``.

        A named pattern is centred unless an explicit offset is given;
        otherwise the grid is seeded randomly.

        Raises:
            KeyError: If the pattern name is unknown
        """
        if config.pattern:
            pattern = self.pattern_library.get_pattern(config.pattern)
            if pattern is None:
                raise KeyError(config.pattern)

            pattern_height, pattern_width = pattern.get_size()
            offset_row = config.pattern_row
            offset_col = config.pattern_col
            if offset_row is None:
                offset_row = max(0, (config.height - pattern_height) // 2)
            if offset_col is None:
                offset_col = max(0, (config.width - pattern_width) // 2)

            if config.verbose:
                print(f"Loading pattern '{pattern.name}' at ({offset_row}, {offset_col})")

            universe = Universe(config.width, config.height)
            pattern.apply_to_universe(universe, offset_row, offset_col)
            return universe

        if config.verbose:
            print(f"Generating random population (rate: {config.population_rate:.2%})")

        return Universe(config.width, config.height, RandomSeed(config.population_rate, seed=config.seed))

    def run_simulation(self, config: RunConfig) -> Tuple[int, str, dict]:
        """Run a universe until it stabilises or reaches the generation limit.

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        universe = self.build_universe(config)
        simulation = Simulation(universe)
        initial_population = universe.population

        if config.verbose:
            print(f"Initialized {config.width}x{config.height} universe")
            print(f"Initial population: {initial_population} cells")

        if config.show_grid:
            print("\nInitial grid:")
            print(self._format_universe(universe), end="")

        start_time = time.time()

        if config.animate:
            final_generation, reason = self._animate(simulation, config)
        else:
            final_generation, reason = simulation.run_until_stable(config.max_generations)

        duration = time.time() - start_time

        stats = simulation.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if config.show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_universe(universe), end="")

        return final_generation, reason, stats

    def _animate(self, simulation: Simulation, config: RunConfig) -> Tuple[int, str]:
        """Print one frame per generation, sleeping ``delay`` seconds between frames."""
        for _ in range(config.max_generations):
            simulation.step()
            print(f"\x1b[H\x1b[2JGeneration {simulation.generation}  Population {simulation.population}")
            print(self._format_universe(simulation.universe), end="")

            if simulation.population == 0:
                return simulation.generation, "extinction"
            if simulation.cycle_detected:
                return simulation.generation, "cycle"

            time.sleep(config.delay)

        return simulation.generation, "max_generations"

    def _format_universe(self, universe: Universe, max_size: int = 80) -> str:
        """Render a universe, skipping grids too large for a terminal."""
        if universe.width > max_size or universe.height > max_size:
            return f"[Grid too large to display: {universe.width}x{universe.height}]\n"
        return universe.render()

    def list_patterns(self) -> None:
        """Print all available patterns organized by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                height, width = pattern.get_size()
                print(f"  {name:<24} {width}x{height}  {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="lifegrid",
        description="Run Conway's Game of Life on a toroidal grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lifegrid --width 40 --height 20 --seed 7 --show-grid
  lifegrid --pattern Glider --width 16 --height 16 --animate
  lifegrid --list-patterns
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=64, help="Grid width (default: 64)")
    parser.add_argument("-H", "--height", type=int, default=64, help="Grid height (default: 64)")
    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.5,
        help="Probability that a randomly seeded cell starts alive (default: 0.5)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible starting grid")

    parser.add_argument("-P", "--pattern", type=str, help="Start from a named pattern instead of a random grid")
    parser.add_argument("--pattern-row", type=int, help="Row offset for the pattern (default: centred)")
    parser.add_argument("--pattern-col", type=int, help="Column offset for the pattern (default: centred)")

    parser.add_argument(
        "-g",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum generations to run (default: 1000)",
    )
    parser.add_argument("--animate", action="store_true", help="Print every generation as it is computed")
    parser.add_argument(
        "--delay",
        type=float,
        default=0.1,
        help="Seconds between animation frames (default: 0.1)",
    )
    parser.add_argument("-s", "--show-grid", action="store_true", help="Display the initial and final grids")
    parser.add_argument("--list-patterns", action="store_true", help="List all available patterns and exit")

    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress and detailed statistics")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics (default: WARNING, INFO with --verbose)",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s, Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats.get("duration_seconds", 0),
                stats.get("generations_per_second", 0),
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments, printing every problem found."""
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.pattern_row is not None and args.pattern_row < 0:
        errors.append("Pattern row offset must be non-negative")

    if args.pattern_col is not None and args.pattern_col < 0:
        errors.append("Pattern column offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def configure_logging(args: argparse.Namespace) -> None:
    level = args.log_level or ("INFO" if args.verbose else "WARNING")
    logging.basicConfig(level=getattr(logging, level), format="%(asctime)s %(name)s %(levelname)s: %(message)s")


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    cli = CLILifeGrid()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(cli.pattern_library.list_patterns())}")
        return 1

    config = RunConfig.from_args(args)

    try:
        final_generation, reason, stats = cli.run_simulation(config)
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except LifeGridError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}")
        return 1

    print_results(final_generation, reason, stats, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
