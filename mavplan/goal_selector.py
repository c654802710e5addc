"""Selection of intermediate goals when the direct route is blocked."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from .trajectory_point import TrajectoryPoint, rand_m_to_n

GainFunction = Callable[[TrajectoryPoint, int], float]
GridIndex = Tuple[int, int, int]

_CLOSE_ENOUGH = 0.1  # meters
_MIN_WEIGHT = 1e-6


class Strategy(enum.Enum):
    """How the next intermediate goal is chosen."""

    NO_INTERMEDIATE_GOAL = 0
    RANDOM = 1
    LOCAL_EXPLORATION = 2


_STRATEGY_NAMES = {
    "none": Strategy.NO_INTERMEDIATE_GOAL,
    "random": Strategy.RANDOM,
    "local": Strategy.LOCAL_EXPLORATION,
    "local_exploration": Strategy.LOCAL_EXPLORATION,
}


@dataclass
class GoalPointSelectorParameters:
    """Tuning of the goal selector."""

    strategy: Strategy = Strategy.NO_INTERMEDIATE_GOAL
    # For all random-based selectors.
    random_sample_range: float = 5.0
    # For random sampling in general.
    max_random_tries: int = 100
    # For the exploration strategy.
    num_exploration_samples: int = 15
    exp_modulus: int = 20
    w_exploration: float = 1.0
    w_goal: float = 0.5


@dataclass
class TsdfVoxel:
    """Truncated signed distance and its integration weight."""

    distance: float = 0.0
    weight: float = 0.0


class TsdfGrid:
    """A sparse grid of TSDF voxels looked up by position."""

    def __init__(self, voxel_size: float) -> None:
        if voxel_size <= 0.0:
            raise ValueError("voxel size must be positive")
        self.voxel_size = voxel_size
        self._voxels: Dict[GridIndex, TsdfVoxel] = {}

    def _index(self, point: Sequence[float]) -> GridIndex:
        x, y, z = (math.floor(float(c) / self.voxel_size) for c in point)
        return (x, y, z)

    def voxel_at(self, point: Sequence[float]) -> Optional[TsdfVoxel]:
        """The voxel containing ``point``, or None where none is stored."""
        return self._voxels.get(self._index(point))

    def set_voxel_at(self, point: Sequence[float], voxel: TsdfVoxel) -> None:
        """Store ``voxel`` in the cell containing ``point``."""
        self._voxels[self._index(point)] = voxel


class GoalPointSelector:
    """Chooses the next goal to track when planning toward a global goal fails."""

    def __init__(
        self,
        params: Optional[GoalPointSelectorParameters] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.params = params if params is not None else GoalPointSelectorParameters()
        self._rng = rng if rng is not None else random.Random()
        self._tsdf_map: Optional[TsdfGrid] = None
        self._gain_function: Optional[GainFunction] = None

    def set_parameters_from_mapping(self, params: Mapping[str, Any]) -> None:
        """Read ``goal_selector_strategy`` and ``goal_selector_range``."""
        name = params.get("goal_selector_strategy", "none")
        try:
            self.params.strategy = _STRATEGY_NAMES[name]
        except KeyError:
            raise ValueError(f"invalid goal selector strategy: {name}") from None
        self.params.random_sample_range = float(
            params.get("goal_selector_range", self.params.random_sample_range)
        )

    def set_tsdf_map(
        self, tsdf_map: Optional[TsdfGrid], gain_function: Optional[GainFunction] = None
    ) -> None:
        """Associate the map and the exploration gain ``gain_function(pose, modulus)``."""
        self._tsdf_map = tsdf_map
        self._gain_function = gain_function

    def select_next_goal(
        self,
        global_goal: TrajectoryPoint,
        current_goal: TrajectoryPoint,
        current_pose: TrajectoryPoint,
    ) -> Optional[TrajectoryPoint]:
        """Return the next goal to track, or None if there is none to switch to."""
        strategy = self.params.strategy
        if strategy is Strategy.NO_INTERMEDIATE_GOAL:
            return None

        # Whatever the strategy: when tracking something else, go back to the
        # global goal first.
        if np.linalg.norm(current_goal.position - global_goal.position) > _CLOSE_ENOUGH:
            return global_goal.copy()

        if strategy is Strategy.RANDOM:
            return self.select_random_pose(current_pose, self.params.random_sample_range)

        if self._tsdf_map is None:
            return None
        return self._select_local_exploration_goal(global_goal, current_pose)

    def select_random_pose(
        self, input_pose: TrajectoryPoint, range_meters: float
    ) -> TrajectoryPoint:
        """A pose at a random direction and distance up to ``range_meters``,
        with a random yaw."""
        theta = rand_m_to_n(0.0, math.pi * 2.0, self._rng)
        phi = rand_m_to_n(-math.pi / 2.0, math.pi / 2.0, self._rng)
        r = rand_m_to_n(0.0, range_meters, self._rng)
        offset = np.array(
            [
                r * math.cos(theta) * math.cos(phi),
                r * math.sin(phi),
                r * math.sin(theta) * math.cos(phi),
            ]
        )
        yaw = rand_m_to_n(-math.pi, math.pi, self._rng)
        sampled = TrajectoryPoint(position=input_pose.position + offset)
        sampled.set_from_yaw(yaw)
        return sampled

    def select_random_free_pose(
        self, input_pose: TrajectoryPoint, range_meters: float
    ) -> Optional[TrajectoryPoint]:
        """A random pose in observed free space, or None if none was found."""
        pose, found = self._sample_free_pose(input_pose, range_meters)
        return pose if found else None

    def _sample_free_pose(
        self, input_pose: TrajectoryPoint, range_meters: float
    ) -> Tuple[TrajectoryPoint, bool]:
        pose = TrajectoryPoint()
        if self._tsdf_map is None:
            return pose, False
        for _ in range(self.params.max_random_tries):
            pose = self.select_random_pose(input_pose, range_meters)
            voxel = self._tsdf_map.voxel_at(pose.position)
            if voxel is not None and voxel.weight >= _MIN_WEIGHT and voxel.distance > 0.0:
                return pose, True
        return pose, False

    def _exploration_gain(self, pose: TrajectoryPoint) -> float:
        if self._gain_function is None:
            return 0.0
        return float(self._gain_function(pose, self.params.exp_modulus))

    def _select_local_exploration_goal(
        self, global_goal: TrajectoryPoint, current_pose: TrajectoryPoint
    ) -> TrajectoryPoint:
        params = self.params
        max_goal_dist = (
            float(np.linalg.norm(global_goal.position - current_pose.position))
            + params.random_sample_range
        )
        best_gain = 0.0
        best_point = TrajectoryPoint()

        for _ in range(params.num_exploration_samples):
            sampled, _ = self._sample_free_pose(current_pose, params.random_sample_range)
            exploration_gain = self._exploration_gain(sampled)

            travel_ray = sampled.position - current_pose.position
            sampled.set_from_yaw(math.atan2(travel_ray[1], travel_ray[0]))

            # Normalised so that scores are comparable across ranges.
            goal_gain = (
                max_goal_dist - float(np.linalg.norm(global_goal.position - sampled.position))
            ) / max_goal_dist

            total_gain = params.w_exploration * exploration_gain + params.w_goal * goal_gain
            if total_gain >= best_gain:
                best_gain = total_gain
                best_point = sampled
        return best_point