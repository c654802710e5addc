"""Visualization markers for paths and waypoints."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field, replace
from typing import List, Sequence, Tuple

from .colors import Color
from .trajectory_point import TrajectoryPoint

Point = Tuple[float, float, float]

_MAX_SAMPLES = 1000
_MAX_MAGNITUDE = 1.0e4
_MARKER_ALPHA = 0.75


class MarkerType(enum.IntEnum):
    """Marker shapes, numbered as in the usual visualization message."""

    ARROW = 0
    CUBE = 1
    SPHERE = 2
    CYLINDER = 3
    LINE_STRIP = 4
    LINE_LIST = 5
    CUBE_LIST = 6
    SPHERE_LIST = 7
    POINTS = 8
    TEXT_VIEW_FACING = 9


@dataclass
class Marker:
    """A drawable marker made of a list of points."""

    ns: str = ""
    id: int = 0
    type: MarkerType = MarkerType.ARROW
    frame_id: str = ""
    stamp: float = 0.0
    color: Color = field(default_factory=Color)
    scale: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    points: List[Point] = field(default_factory=list)


def _as_point(point: TrajectoryPoint) -> Point:
    x, y, z = (float(v) for v in point.position)
    return (x, y, z)


def _base_marker(marker_type, frame_id, color, name, scale) -> Marker:
    return Marker(
        ns=name,
        type=marker_type,
        frame_id=frame_id,
        stamp=time.time(),
        color=replace(color, a=_MARKER_ALPHA),
        scale=(scale, scale, scale),
    )


def create_marker_for_path(
    path: Sequence[TrajectoryPoint], frame_id: str, color: Color, name: str, scale: float
) -> Marker:
    """Line-strip marker of a path, subsampled by powers of ten to at most
    about a thousand points; points far out of bounds are dropped."""
    marker = _base_marker(MarkerType.LINE_STRIP, frame_id, color, name, scale)
    subsample = 1
    while len(path) // subsample > _MAX_SAMPLES:
        subsample *= 10
    for count, point in enumerate(path, start=1):
        if count % subsample != 0:
            continue
        if point.position.max() > _MAX_MAGNITUDE or point.position.min() < -_MAX_MAGNITUDE:
            continue
        marker.points.append(_as_point(point))
    return marker


def create_marker_for_waypoints(
    path: Sequence[TrajectoryPoint], frame_id: str, color: Color, name: str, scale: float
) -> Marker:
    """Sphere-list marker with one sphere per waypoint."""
    marker = _base_marker(MarkerType.SPHERE_LIST, frame_id, color, name, scale)
    marker.points = [_as_point(point) for point in path]
    return marker