"""Particle-based search for an intermediate goal in a distance field."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .constraints import PhysicalConstraints
from .trajectory_point import rand_m_to_n

GridIndex = Tuple[int, int, int]

_PATH_STEP = 10


def _neighbor_offsets() -> List[GridIndex]:
    faces = [(-1, 0, 0), (1, 0, 0), (0, -1, 0), (0, 1, 0), (0, 0, -1), (0, 0, 1)]
    edges = [
        (-1, -1, 0), (-1, 1, 0), (1, -1, 0), (1, 1, 0),
        (-1, 0, -1), (-1, 0, 1), (1, 0, -1), (1, 0, 1),
        (0, -1, -1), (0, -1, 1), (0, 1, -1), (0, 1, 1),
    ]
    corners = [
        (x, y, z) for x in (-1, 1) for y in (-1, 1) for z in (-1, 1)
    ]
    return faces + edges + corners


_NEIGHBOR_OFFSETS = _neighbor_offsets()


@dataclass
class EsdfVoxel:
    """Distance to the nearest obstacle, and whether the voxel was observed."""

    distance: float = 0.0
    observed: bool = False


class EsdfGrid:
    """A sparse grid of distance-field voxels indexed by integer coordinates."""

    def __init__(self, voxel_size: float) -> None:
        if voxel_size <= 0.0:
            raise ValueError("voxel size must be positive")
        self.voxel_size = voxel_size
        self._voxels: Dict[GridIndex, EsdfVoxel] = {}

    def index_of(self, point: Sequence[float]) -> GridIndex:
        """Index of the voxel containing ``point``."""
        x, y, z = (math.floor(float(c) / self.voxel_size) for c in point)
        return (x, y, z)

    def center_of(self, index: Sequence[int]) -> np.ndarray:
        """Centre point of the voxel at ``index``."""
        return (np.asarray(index, dtype=float) + 0.5) * self.voxel_size

    def voxel(self, index: Sequence[int]) -> Optional[EsdfVoxel]:
        """The voxel at ``index``, or None where the grid holds none."""
        return self._voxels.get(_as_index(index))

    def set_voxel(self, index: Sequence[int], voxel: EsdfVoxel) -> None:
        """Store ``voxel`` at ``index``."""
        self._voxels[_as_index(index)] = voxel


def _as_index(index: Sequence[int]) -> GridIndex:
    x, y, z = (int(c) for c in index)
    return (x, y, z)


@dataclass
class ShotgunParameters:
    """Tuning of the particle search."""

    max_step_size: float = 1.0
    take_large_steps: bool = False
    # Probabilities of following the goal or the gradient; the rest is random.
    probability_follow_goal: float = 0.25
    probability_follow_gradient: float = 0.25
    robot_radius_inflation: float = 0.1


class Decision(enum.Enum):
    """What a particle does at one step."""

    FOLLOW_GOAL = 0
    FOLLOW_GRADIENT = 1
    RANDOM = 2


@dataclass
class ShotgunResult:
    """Best point reached, and the coarse path of the particle that reached it."""

    best_goal: np.ndarray
    path: List[np.ndarray] = field(default_factory=list)


class ShotgunPlanner:
    """Shoots random particles through free space toward a goal."""

    def __init__(
        self, params: Optional[ShotgunParameters] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.params = params if params is not None else ShotgunParameters()
        self.constraints = PhysicalConstraints()
        self._rng = rng if rng is not None else random.Random()
        self._esdf_map: Optional[EsdfGrid] = None

    def set_physical_constraints(self, constraints: PhysicalConstraints) -> None:
        """Use ``constraints``, with the robot radius inflated by the parameters."""
        self.constraints = replace(
            constraints,
            robot_radius=constraints.robot_radius + self.params.robot_radius_inflation,
        )

    def set_esdf_map(self, esdf_map: EsdfGrid) -> None:
        """Associate the distance field to search in."""
        if esdf_map is None:
            raise ValueError("an ESDF map is required")
        self._esdf_map = esdf_map

    def set_seed(self, seed: int) -> None:
        """Reseed the random generator."""
        self._rng.seed(seed)

    def select_decision(self, n_particle: int) -> Decision:
        """Choose a move; the first particle always heads for the goal."""
        if n_particle == 0:
            return Decision.FOLLOW_GOAL
        probability = rand_m_to_n(0.0, 1.0, self._rng)
        if probability < self.params.probability_follow_goal:
            return Decision.FOLLOW_GOAL
        if probability < (
            self.params.probability_follow_goal + self.params.probability_follow_gradient
        ):
            return Decision.FOLLOW_GRADIENT
        return Decision.RANDOM

    def _valid_neighbors(
        self, grid: EsdfGrid, current: GridIndex, last: Optional[GridIndex], step: int
    ) -> Iterator[GridIndex]:
        for dx, dy, dz in _NEIGHBOR_OFFSETS:
            neighbor = (current[0] + dx, current[1] + dy, current[2] + dz)
            voxel = grid.voxel(neighbor)
            if (
                voxel is None
                or not voxel.observed
                or voxel.distance < self.constraints.robot_radius
            ):
                continue
            if step > 0 and neighbor == last:
                continue
            yield neighbor

    def shoot_particles(
        self,
        num_particles: int,
        max_steps: int,
        start: Sequence[float],
        goal: Sequence[float],
    ) -> ShotgunResult:
        """Run the particles and return the point closest to the goal."""
        grid = self._esdf_map
        if grid is None:
            raise RuntimeError("no ESDF map set")

        start_index = grid.index_of(start)
        goal_index = grid.index_of(goal)

        best_distance = math.inf
        best_index = start_index
        best_path: List[GridIndex] = []
        last_index: Optional[GridIndex] = None

        for n_particle in range(num_particles):
            exit_loop = False
            current = start_index
            current_path = [start_index]
            for step in range(max_steps):
                neighbors = list(self._valid_neighbors(grid, current, last_index, step))
                if not neighbors:
                    break
                last_index = current
                decision = self.select_decision(n_particle)

                if decision is Decision.FOLLOW_GOAL:
                    best_goal_distance = math.inf
                    for neighbor in neighbors:
                        distance = math.dist(goal_index, neighbor)
                        if distance < best_goal_distance:
                            best_goal_distance = distance
                            current = neighbor
                    # Within a voxel of the goal.
                    if best_goal_distance < 1.0:
                        exit_loop = True
                        break
                elif decision is Decision.FOLLOW_GRADIENT:
                    highest = 0.0
                    for neighbor in neighbors:
                        distance = grid.voxel(neighbor).distance
                        if distance > highest:
                            highest = distance
                            current = neighbor
                else:
                    choice = rand_m_to_n(0.0, len(neighbors) - 1.0, self._rng)
                    current = neighbors[math.floor(choice + 0.5)]

                if step % _PATH_STEP == 0:
                    current_path.append(current)

            distance = math.dist(goal_index, current)
            if distance < best_distance:
                best_distance = distance
                best_index = current
                best_path = current_path + [current]
            if exit_loop:
                break

        if best_index == goal_index:
            best_goal = np.asarray(goal, dtype=float).copy()
        else:
            best_goal = grid.center_of(best_index)
        return ShotgunResult(
            best_goal=best_goal, path=[grid.center_of(index) for index in best_path]
        )