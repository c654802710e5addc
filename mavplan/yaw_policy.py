"""Yaw assignment policies for sampled trajectories."""

from __future__ import annotations

import enum
import math
from typing import Iterable, List, MutableSequence, Optional, Sequence, Tuple

import numpy as np

from .constraints import PhysicalConstraints
from .trajectory_point import TrajectoryPoint

_MIN_VELOCITY_NORM = 0.1
_FACING_EPSILON = 1e-4


class PolicyType(enum.Enum):
    """How the yaw of each trajectory point is chosen."""

    FROM_PLAN = 0
    VELOCITY_VECTOR = 1
    ANTICIPATE_VELOCITY_VECTOR = 2
    POINT_FACING = 3
    CONSTANT = 4


def _velocity_xy(point: TrajectoryPoint) -> Tuple[float, float]:
    return float(point.velocity[0]), float(point.velocity[1])


def _norm(vector: Tuple[float, float]) -> float:
    return math.hypot(vector[0], vector[1])


def _search_moving(
    initial: Tuple[float, float], points: Iterable[TrajectoryPoint]
) -> Tuple[float, float]:
    """Walk ``points`` until a horizontal velocity that is not near zero."""
    velocity = initial
    for point in points:
        if not _norm(velocity) < _MIN_VELOCITY_NORM:
            break
        velocity = _velocity_xy(point)
    return velocity


class YawPolicy:
    """Assigns yaw angles to a path, optionally limiting the yaw rate."""

    def __init__(
        self,
        policy: PolicyType = PolicyType.FROM_PLAN,
        constant_yaw: float = 0.0,
        facing_point: Optional[Sequence[float]] = None,
    ) -> None:
        self.policy = policy
        self.constant_yaw = constant_yaw
        self.facing_point = (
            np.zeros(3) if facing_point is None else np.asarray(facing_point, dtype=float)
        )
        self._sampling_dt = -1.0
        self._yaw_rate_max = -1.0

    @property
    def sampling_dt(self) -> float:
        """Time between consecutive path samples, in seconds."""
        return self._sampling_dt

    @sampling_dt.setter
    def sampling_dt(self, value: float) -> None:
        if value <= 0.0:
            raise ValueError("sampling dt must be non-zero and positive")
        self._sampling_dt = value

    @property
    def yaw_rate_max(self) -> float:
        """Maximum yaw rate in rad/s; negative means unlimited."""
        return self._yaw_rate_max

    @yaw_rate_max.setter
    def yaw_rate_max(self, value: float) -> None:
        if value <= 0.0:
            raise ValueError("max yaw rate must be positive")
        self._yaw_rate_max = value

    def set_physical_constraints(self, constraints: PhysicalConstraints) -> None:
        """Take the sampling dt and yaw-rate limit from ``constraints``."""
        self._sampling_dt = constraints.sampling_dt
        self._yaw_rate_max = constraints.yaw_rate_max

    def deactivate_max_yaw_rate(self) -> None:
        """Remove the yaw-rate limit."""
        self._yaw_rate_max = -1.0

    def feasible_yaw(self, last_yaw: float, desired_yaw: float) -> float:
        """Step from ``last_yaw`` toward ``desired_yaw`` within the rate limit."""
        if self._yaw_rate_max < 0:
            return desired_yaw
        if self._sampling_dt < 0:
            raise ValueError("sampling dt has to be set")
        delta = math.fmod(desired_yaw - last_yaw, 2 * math.pi)
        if delta < -math.pi:
            delta += 2 * math.pi
        elif delta > math.pi:
            delta -= 2 * math.pi

        max_step = self._yaw_rate_max * self._sampling_dt
        if abs(delta) > max_step:
            direction = 1.0 if delta > 0.0 else -1.0
            return last_yaw + direction * max_step
        return desired_yaw

    def apply_policy_in_place(self, path: MutableSequence[TrajectoryPoint]) -> None:
        """Overwrite the orientation of every point of ``path``."""
        if not path:
            return
        if self.policy is PolicyType.VELOCITY_VECTOR:
            self._apply_velocity_vector(path)
        elif self.policy is PolicyType.ANTICIPATE_VELOCITY_VECTOR:
            self._apply_anticipate_velocity_vector(path)
        elif self.policy is PolicyType.POINT_FACING:
            self._apply_point_facing(path)
        elif self.policy is PolicyType.CONSTANT:
            self._apply_constant(path)

    def apply_policy(self, path: Sequence[TrajectoryPoint]) -> List[TrajectoryPoint]:
        """Return a copy of ``path`` with the policy applied."""
        result = [point.copy() for point in path]
        self.apply_policy_in_place(result)
        return result

    def _set(self, point: TrajectoryPoint, last_yaw: float, desired_yaw: float) -> float:
        yaw = self.feasible_yaw(last_yaw, desired_yaw)
        point.set_from_yaw(yaw)
        return yaw

    def _apply_velocity_vector(self, path: MutableSequence[TrajectoryPoint]) -> None:
        last_yaw = path[0].yaw
        for index, point in enumerate(path):
            velocity = _velocity_xy(point)
            if _norm(velocity) > _MIN_VELOCITY_NORM:
                desired = math.atan2(velocity[1], velocity[0])
            else:
                velocity = _search_moving(velocity, path[index + 1:])
                if _norm(velocity) > _MIN_VELOCITY_NORM:
                    desired = math.atan2(velocity[1], velocity[0])
                else:
                    desired = last_yaw
            last_yaw = self._set(point, last_yaw, desired)

    def _apply_anticipate_velocity_vector(
        self, path: MutableSequence[TrajectoryPoint]
    ) -> None:
        initial_yaw = path[0].yaw
        last_yaw = initial_yaw
        valid_last_yaw = False
        for index, point in reversed(list(enumerate(path))):
            velocity = _velocity_xy(point)
            if _norm(velocity) > _MIN_VELOCITY_NORM:
                desired = math.atan2(velocity[1], velocity[0])
                if not valid_last_yaw:
                    last_yaw = desired
                valid_last_yaw = True
            else:
                velocity = _search_moving(velocity, reversed(path[: index + 1]))
                if _norm(velocity) > _MIN_VELOCITY_NORM:
                    desired = math.atan2(velocity[1], velocity[0])
                else:
                    desired = last_yaw
            last_yaw = self._set(point, last_yaw, desired)

        # Forward pass so that the initial yaw is kept and the rate respected.
        path[0].set_from_yaw(initial_yaw)
        last_yaw = initial_yaw
        for point in path:
            last_yaw = self._set(point, last_yaw, point.yaw)

    def _apply_point_facing(self, path: MutableSequence[TrajectoryPoint]) -> None:
        last_yaw = path[0].yaw
        for point in path:
            facing = self.facing_point - point.position
            desired = last_yaw
            if abs(facing[0]) > _FACING_EPSILON or abs(facing[1]) > _FACING_EPSILON:
                desired = math.atan2(facing[1], facing[0])
            last_yaw = self._set(point, last_yaw, desired)

    def _apply_constant(self, path: MutableSequence[TrajectoryPoint]) -> None:
        last_yaw = self.constant_yaw
        for point in path:
            last_yaw = self._set(point, last_yaw, self.constant_yaw)