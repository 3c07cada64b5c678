#!/usr/bin/env python3
"""
Example of embedding the engine in a host loop.
"""

import random

from lifegrid import PatternLibrary, RandomSeed, Simulation, Universe
from lifegrid.frontends import host


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Host-owned universe seeded from the host's own entropy source
    rng = random.Random(2024)
    universe = host.construct(16, 8, RandomSeed(source=lambda: rng.random() < 0.3))

    for _ in range(3):
        host.tick(universe)
        # The buffer must be fetched again after every tick
        buffer = host.cells_ptr(universe)
        print(f"Generation {universe.generation}: {sum(buffer)} live cells")

    # Click-to-toggle style edit between ticks
    host.toggle_cell(universe, 0, 0)

    # Pattern placement and bookkeeping via Simulation
    glider = PatternLibrary().get_pattern("Glider")
    universe = Universe(10, 10, glider.to_seed(1, 1))
    simulation = Simulation(universe)

    print("Initial state:")
    print(universe)

    final_generation, reason = simulation.run_until_stable(max_generations=200)
    print(f"Stopped at generation {final_generation}: {reason}")

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        if key != "population_history":
            print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
