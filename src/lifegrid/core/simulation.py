"""Simulation driver that adds history and cycle detection on top of a universe."""

import logging
from collections import deque
from typing import Any, Deque, Dict, Tuple

import numpy as np

from .universe import Universe

logger = logging.getLogger(__name__)


class Simulation:
    """Steps a :class:`Universe` while tracking population and repeated states.

    The driver never decides when to step; the host calls :meth:`step` (or one
    of the run helpers) whenever it wants a new generation.
    """

    def __init__(self, universe: Universe, history_size: int = 100, state_window: int = 1000) -> None:
        """Initialize the driver.

        Args:
            universe: The universe to advance
            history_size: Number of population samples kept
            state_window: Number of past generations remembered for cycle detection
        """
        self.universe = universe
        self._population_history: Deque[int] = deque(maxlen=history_size)
        self._state_history: Deque[bytes] = deque()
        self._state_window = state_window
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self.universe.generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.universe.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the universe by one generation."""
        # The pre-tick state is recorded so a return to it is seen after the tick
        self._record_state()
        self.universe.tick()
        self._update_population_history()
        self._check_for_cycle()

    def run(self, generations: int) -> None:
        """Advance a fixed number of generations."""
        for _ in range(generations):
            self.step()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run until the universe dies out, repeats a state, or hits the limit.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            # An empty grid also repeats itself, so extinction takes precedence
            if self.population == 0:
                logger.info("Extinction at generation %d", self.generation)
                return self.generation, "extinction"

            if self._cycle_detected:
                logger.info(
                    "Cycle of length %d detected at generation %d", self._cycle_length, self.generation
                )
                return self.generation, "cycle"

        return self.generation, "max_generations"

    def clear_cycle_detection(self) -> None:
        """Forget remembered states.

        Call this after editing cells by hand, since earlier generations no
        longer describe the same trajectory.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over the recent window."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict[str, Any]:
        """Get a snapshot of simulation statistics."""
        return {
            "generation": self.generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": self.population_history,
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": (self.universe.width, self.universe.height),
            "population_density": self.population / (self.universe.width * self.universe.height),
        }

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _record_state(self) -> None:
        if self._cycle_detected:
            return

        state = self.universe.cells.tobytes()
        # Only the first occurrence matters for the cycle start
        if state not in self._seen_states:
            self._seen_states[state] = self.generation
            self._state_history.append(state)

        while len(self._state_history) > self._state_window:
            old_state = self._state_history.popleft()
            self._seen_states.pop(old_state, None)

    def _check_for_cycle(self) -> None:
        if self._cycle_detected:
            return

        first_occurrence = self._seen_states.get(self.universe.cells.tobytes())
        if first_occurrence is not None:
            self._cycle_detected = True
            self._cycle_length = self.generation - first_occurrence
            self._cycle_start_generation = first_occurrence
