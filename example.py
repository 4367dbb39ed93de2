#!/usr/bin/env python3
"""
Example usage of the sparselife package.
"""

import sys

from sparselife import PatternLibrary, RuleSet, Simulation, World
from sparselife.core.serializer import write_life106


def main():
    """Demonstrate programmatic usage of the sparselife package."""
    # A small wrapping world
    world = World(0, 19, 0, 19)

    # Load a pattern
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    sim = Simulation(world, RuleSet(), glider.translated(8, 8))

    print(f"World: {world.describe()}")
    print(f"Initial population: {sim.population}")
    print()

    # Run simulation for 8 generations
    def show(tick, cells):
        print(f"Generation {tick}: population {cells.population}, tracked cells {len(cells)}")

    final = sim.run(8, show)

    print()
    print("Final generation:")
    write_life106(final, sys.stdout)


if __name__ == "__main__":
    main()
