"""Command-line interface for running Game of Life simulations."""

import argparse
import sys
import time
from typing import List, Optional, Tuple

from ..core.config import SimulationConfig, build_config
from ..core.engine import BACKENDS, create_engine
from ..core.errors import InputOutputError, LifeError
from ..core.liveset import LiveSet
from ..core.metrics import MetricsCollector, RunMetrics
from ..core.patterns import PatternLibrary
from ..core.seed import read_seed, read_seed_file
from ..core.serializer import TickWriter, write_life106
from ..core.simulation import Simulation
from ..core.world import Coordinate, parse_integer


def _log(message: str) -> None:
    # stdout may carry the Life 1.06 output
    print(message, file=sys.stderr)


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self) -> None:
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def load_seed(
        self,
        config: SimulationConfig,
        pattern: Optional[str] = None,
        pattern_x: int = 0,
        pattern_y: int = 0,
    ) -> List[Coordinate]:
        """Load the seed generation.

        The seed comes from a built-in pattern if one is named, otherwise
        from the configured input file, otherwise from stdin.

        Args:
            config: Run configuration
            pattern: Optional pattern name
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement

        Returns:
            Seed coordinates

        Raises:
            InputOutputError: If the seed cannot be read or lies outside the world
        """
        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                available = ", ".join(self.pattern_library.list_patterns())
                raise InputOutputError(f"Pattern '{pattern}' not found. Available patterns: {available}")

            cells = loaded_pattern.translated(pattern_x, pattern_y)
            for coord in cells:
                if not config.world.contains(coord):
                    raise InputOutputError(f"Pattern cell {coord} lies outside the world {config.world.describe()}")
            return cells

        if config.input_file:
            return read_seed_file(config.input_file, config.world)

        return read_seed(sys.stdin, config.world)

    def run_simulation(
        self,
        config: SimulationConfig,
        seed_cells: List[Coordinate],
        verbose: bool = False,
    ) -> Tuple[LiveSet, RunMetrics]:
        """Run a simulation and write its output.

        Every generation, including the seed, is written to the per-tick
        directory when one is configured. The final generation goes to the
        output file, or stdout.

        Args:
            config: Run configuration
            seed_cells: Live coordinates of generation 0
            verbose: Print progress updates to stderr

        Returns:
            Tuple of (final generation, run metrics)
        """
        engine = create_engine(
            config.world, config.rules, backend=config.backend, workers=config.workers, device=config.device
        )
        simulation = Simulation(config.world, config.rules, seed_cells, engine=engine)

        tick_writer = None
        if config.output_directory:
            tick_writer = TickWriter(config.output_directory, config.ticks)

        if verbose:
            _log(f"World: {config.world.describe()}")
            _log(f"Rules: {config.rules.notation}, backend: {config.backend}")
            _log(f"Initial population: {simulation.population} cells")
            _log(f"Running {config.ticks} ticks...")

        collector = MetricsCollector()
        collector.start(simulation)
        report_every = max(1, config.ticks // 10)

        def on_generation(tick: int, cells: LiveSet) -> None:
            if tick_writer:
                tick_writer.write(tick, cells)
            collector.update(tick, cells)
            if verbose and tick > 0 and (tick % report_every == 0 or tick == config.ticks):
                _log(f"Tick {tick}/{config.ticks}: population {cells.population}, tracked cells {len(cells)}")

        final = simulation.run(config.ticks, on_generation)
        metrics = collector.finish()

        self.write_output(final, config.output_file)

        return final, metrics

    def write_output(self, live_set: LiveSet, output_file: Optional[str] = None) -> None:
        """Write the final generation to a file (truncating it) or stdout."""
        if not output_file:
            write_life106(live_set, sys.stdout)
            return

        try:
            with open(output_file, "w") as f:
                write_life106(live_set, f)
        except OSError as e:
            raise InputOutputError(f"Error opening output file {output_file}: {e}") from e

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="sparselife",
        description="Run Conway's Game of Life on a sparse 64-bit world and write Life 1.06 output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Seed input holds one "(x,y)" coordinate per line, or a Life 1.06 document.

Examples:
  # Run 10 ticks of a seed file, final generation to stdout
  sparselife --input seed.txt

  # Run 100 ticks of a glider on a 20x20 hard-edged world, every tick to ticks/
  sparselife --pattern Glider --ticks 100 --world "0:19;0:19" --nowrap --outdir ticks

  # HighLife rules (B36/S23)
  sparselife --input seed.txt --newlife 3,6 --exlife 2,3

  # Settings from a JSON configuration file, overridden by flags
  sparselife --configuration run.json --ticks 50
        """,
    )

    # Input and output
    parser.add_argument("-c", "--configuration", type=str, help="Path to JSON configuration file to use")

    parser.add_argument("-i", "--input", type=str, help="Input file to use rather than stdin")

    parser.add_argument("-o", "--output", type=str, help="Output file to use rather than stdout")

    parser.add_argument("-d", "--outdir", type=str, help="Output directory to write every tick into")

    # Simulation configuration
    parser.add_argument("-t", "--ticks", type=parse_integer, help="Number of ticks to run (default: 10)")

    parser.add_argument(
        "--nowrap",
        action="store_true",
        help="Disable wrapping the world around at the edges",
    )

    parser.add_argument(
        "-w",
        "--world",
        type=str,
        help="World dimensions in 'min-x:max-x;min-y:max-y' format (default: full 64-bit range)",
    )

    parser.add_argument(
        "--newlife",
        type=str,
        help="Neighbor counts that make new life spawn, comma separated (default: 3)",
    )

    parser.add_argument(
        "--exlife",
        type=str,
        help="Neighbor counts that keep existing life alive, comma separated (default: 2,3)",
    )

    # Pattern seeding
    parser.add_argument("--pattern", type=str, help="Seed with a built-in pattern instead of input")

    parser.add_argument("--pattern-x", type=parse_integer, default=0, help="X offset for pattern placement (default: 0)")

    parser.add_argument("--pattern-y", type=parse_integer, default=0, help="Y offset for pattern placement (default: 0)")

    parser.add_argument("--list-patterns", action="store_true", help="List all available patterns and exit")

    # Engine configuration
    parser.add_argument(
        "--backend",
        type=str,
        choices=list(BACKENDS),
        help="Tick engine: sparse (any world) or dense (small finite worlds) (default: sparse)",
    )

    parser.add_argument("--workers", type=parse_integer, help="Threads for the sparse engine (default: 1)")

    parser.add_argument(
        "--device",
        type=str,
        choices=["cpu", "cuda"],
        help="Device for the dense engine (default: cpu)",
    )

    # Reporting
    parser.add_argument("--metrics", type=str, help="Write run metrics to this JSON file")

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress information to stderr",
    )

    return parser


def print_results(metrics: RunMetrics) -> None:
    """Print run statistics to stderr."""
    _log(f"\nSimulation completed after {metrics.ticks} ticks")
    _log(f"  Population: {metrics.initial_population} -> {metrics.final_population}")
    _log(
        f"  Min/max/mean population: {metrics.min_population}/{metrics.max_population}/"
        f"{metrics.avg_population:.1f}"
    )
    if metrics.bounding_box:
        bbox = metrics.bounding_box
        _log(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]})")
    _log(f"  Largest live set: {metrics.max_tracked_cells} entries")
    _log(f"  Duration: {metrics.duration:.3f} seconds ({metrics.ticks_per_second:.0f} ticks/second)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    try:
        config = build_config(args)
        seed_cells = cli.load_seed(config, args.pattern, args.pattern_x, args.pattern_y)

        start_time = time.time()
        _, metrics = cli.run_simulation(config, seed_cells, verbose=args.verbose)

        if args.metrics:
            MetricsCollector.to_json(metrics, args.metrics)

        if args.verbose:
            print_results(metrics)
            _log(f"Overall runtime: {time.time() - start_time:.2f}s")

        return 0

    except LifeError as e:
        _log(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        _log("\nSimulation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
