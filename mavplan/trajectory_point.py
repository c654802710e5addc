"""Trajectory points and helpers for sampled paths."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import MutableSequence, Sequence

import numpy as np


def _vector(values=None) -> np.ndarray:
    if values is None:
        return np.zeros(3)
    return np.asarray(values, dtype=float).reshape(3).copy()


@dataclass
class TrajectoryPoint:
    """A single sampled state of a vehicle along a trajectory.

    The orientation is a unit quaternion stored as (w, x, y, z).
    """

    position: np.ndarray = field(default_factory=_vector)
    velocity: np.ndarray = field(default_factory=_vector)
    acceleration: np.ndarray = field(default_factory=_vector)
    orientation: np.ndarray = field(
        default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0])
    )
    time_from_start_ns: int = 0

    def __post_init__(self) -> None:
        self.position = _vector(self.position)
        self.velocity = _vector(self.velocity)
        self.acceleration = _vector(self.acceleration)
        self.orientation = np.asarray(self.orientation, dtype=float).reshape(4).copy()
        self.time_from_start_ns = int(self.time_from_start_ns)

    def set_from_yaw(self, yaw: float) -> None:
        """Set the orientation to a pure rotation of ``yaw`` radians about z."""
        half = yaw / 2.0
        self.orientation = np.array([math.cos(half), 0.0, 0.0, math.sin(half)])

    @property
    def yaw(self) -> float:
        """Heading angle about the z axis, in radians."""
        w, x, y, z = self.orientation
        return math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))

    def copy(self) -> "TrajectoryPoint":
        """Return an independent copy of this point."""
        return TrajectoryPoint(
            position=self.position,
            velocity=self.velocity,
            acceleration=self.acceleration,
            orientation=self.orientation,
            time_from_start_ns=self.time_from_start_ns,
        )


def compute_path_length(path: Sequence[TrajectoryPoint]) -> float:
    """Total Euclidean length of a sampled path."""
    return float(
        sum(
            np.linalg.norm(current.position - previous.position)
            for previous, current in zip(path, path[1:])
        )
    )


def rand_m_to_n(m: float, n: float, rng: random.Random) -> float:
    """Draw a uniform random number between ``m`` and ``n``."""
    return rng.uniform(m, n)


def retime_monotonically_increasing(trajectory: MutableSequence[TrajectoryPoint]) -> None:
    """Make timestamps evenly spaced, using the first positive step as the dt."""
    if not trajectory:
        return
    current_time_ns = trajectory[0].time_from_start_ns
    dt_ns = 0
    for point in trajectory[1:]:
        if dt_ns <= 0:
            dt_ns = point.time_from_start_ns - current_time_ns
        current_time_ns += dt_ns
        point.time_from_start_ns = current_time_ns


def retime_with_start_time_and_dt(
    start_time_ns: int, dt_ns: int, trajectory: MutableSequence[TrajectoryPoint]
) -> None:
    """Assign timestamps starting at ``start_time_ns`` and ``dt_ns`` apart."""
    for index, point in enumerate(trajectory):
        point.time_from_start_ns = start_time_ns + index * dt_ns