"""Synthetic worlds, yaw assignment and result output for the local planning benchmark."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import Iterable, List, MutableSequence, Sequence

import numpy as np

from .trajectory_point import TrajectoryPoint, rand_m_to_n

# Obstacles stay this far from the edges of the world, so start and goal are free.
_FREE_SPACE_BOUNDS = (4.0, 4.0, 4.0)
_MIN_HEIGHT = 2.0
_MAX_HEIGHT = 5.0
_MIN_RADIUS = 0.25
_MAX_RADIUS = 1.0
_MIN_VELOCITY_NORM = 1e-6

RESULTS_HEADER = (
    "#trial,seed,density,robot_radius,v_max,a_max,local_method,planning_"
    "success,is_collision_free,is_feasible,num_replans,distance_from_"
    "goal,computation_time_sec,total_path_time_sec,total_path_length_m,"
    "straight_line_path_length_m"
)


class LocalPlanningMethod(enum.IntEnum):
    """Local planners that the benchmark can run."""

    STRAIGHT_LINE = 0
    LOCO = 1


@dataclass
class LocalBenchmarkResult:
    """Outcome of one local planning trial."""

    trial_number: int = 0
    seed: int = 0
    density: float = 0.0
    robot_radius_m: float = 0.0
    v_max: float = 0.0
    a_max: float = 0.0
    local_planning_method: LocalPlanningMethod = LocalPlanningMethod.STRAIGHT_LINE
    planning_success: bool = False
    is_collision_free: bool = False
    is_feasible: bool = False
    num_replans: int = 0
    distance_from_goal: float = 0.0
    computation_time_sec: float = 0.0
    total_path_time_sec: float = 0.0
    total_path_length_m: float = 0.0
    straight_line_path_length_m: float = 0.0


@dataclass
class Cylinder:
    """An upright cylindrical obstacle; ``position`` is its centre."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius: float = 0.0
    height: float = 0.0

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float).reshape(3).copy()


def set_yaw_from_velocity(
    default_yaw: float, path: MutableSequence[TrajectoryPoint]
) -> None:
    """Point every sample along its velocity; samples at rest get ``default_yaw``."""
    for point in path:
        if np.linalg.norm(point.velocity) > _MIN_VELOCITY_NORM:
            point.set_from_yaw(math.atan2(point.velocity[1], point.velocity[0]))
        else:
            point.set_from_yaw(default_yaw)


def generate_cylinders(
    size: Sequence[float], density: float, rng: random.Random
) -> List[Cylinder]:
    """Place random cylinders standing on the floor of a world of ``size``.

    ``density`` is the number of obstacles per square metre of the area left
    once a free margin is kept along every edge.
    """
    size_x, size_y = float(size[0]), float(size[1])
    free_x, free_y = _FREE_SPACE_BOUNDS[0], _FREE_SPACE_BOUNDS[1]
    usable_area = (size_x - 2 * free_x) * (size_y - 2 * free_y)
    num_objects = math.floor(density * usable_area)

    cylinders = []
    for _ in range(num_objects):
        # Size first: the height fixes the centre's z.
        height = rand_m_to_n(_MIN_HEIGHT, _MAX_HEIGHT, rng)
        radius = rand_m_to_n(_MIN_RADIUS, _MAX_RADIUS, rng)
        x = rand_m_to_n(free_x, size_x - free_x, rng)
        y = rand_m_to_n(free_y, size_y - free_y, rng)
        cylinders.append(
            Cylinder(position=np.array([x, y, height / 2.0]), radius=radius, height=height)
        )
    return cylinders


def _format_result(result: LocalBenchmarkResult) -> str:
    return "%d,%d,%f,%f,%f,%f,%d,%d,%d,%d,%d,%f,%f,%f,%f,%f" % (
        result.trial_number,
        result.seed,
        result.density,
        result.robot_radius_m,
        result.v_max,
        result.a_max,
        int(result.local_planning_method),
        int(result.planning_success),
        int(result.is_collision_free),
        int(result.is_feasible),
        result.num_replans,
        result.distance_from_goal,
        result.computation_time_sec,
        result.total_path_time_sec,
        result.total_path_length_m,
        result.straight_line_path_length_m,
    )


def write_local_results(results: Iterable[LocalBenchmarkResult], filename) -> None:
    """Write ``results`` as comma-separated lines under a commented header."""
    with open(filename, "w", encoding="utf-8") as stream:
        stream.write(RESULTS_HEADER + "\n")
        for result in results:
            stream.write(_format_result(result) + "\n")