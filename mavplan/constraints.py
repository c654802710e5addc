"""Physical limits shared by all planners."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass
class PhysicalConstraints:
    """Speed, acceleration, yaw-rate and size limits of the vehicle."""

    v_max: float = 1.0  # m/s
    a_max: float = 2.0  # m/s^2
    yaw_rate_max: float = math.pi / 4.0  # rad/s
    robot_radius: float = 1.0  # m
    sampling_dt: float = 0.01  # s

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "PhysicalConstraints":
        """Build constraints, taking any known keys from ``params``."""
        names = {f.name for f in fields(cls)}
        return cls(**{key: float(value) for key, value in params.items() if key in names})