"""Trial schedule of the local planning benchmark: obstacle densities and trial numbers."""

from __future__ import annotations

import math
from typing import Iterator, Tuple

DEFAULT_NUM_TRIALS = 100
MIN_DENSITY = 0.05
MAX_DENSITY = 0.50
DENSITY_INCREMENT = 0.05


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def density_schedule(
    num_trials: int = DEFAULT_NUM_TRIALS,
    min_density: float = MIN_DENSITY,
    max_density: float = MAX_DENSITY,
    increment: float = DENSITY_INCREMENT,
) -> Iterator[Tuple[int, float]]:
    """Yield ``(trial_number, density)`` pairs for a benchmark run.

    The densities run from ``min_density`` to ``max_density`` in steps of
    ``increment``; the trials are shared out evenly between them, and any
    remainder that does not fill a whole round is dropped. Trial numbers
    start at zero and double as the random seed of each trial.
    """
    if increment <= 0.0:
        raise ValueError("density increment must be positive")
    num_densities = _round_half_away((max_density - min_density) / increment) + 1
    if num_densities <= 0:
        raise ValueError("max density must not be below min density")

    trials_per_density = num_trials // num_densities
    trial_number = 0
    for density_index in range(num_densities):
        density = min_density + density_index * increment
        for _ in range(trials_per_density):
            yield trial_number, density
            trial_number += 1