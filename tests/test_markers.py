import pytest

from mavplan.colors import Color
from mavplan.markers import (
    Marker,
    MarkerType,
    create_marker_for_path,
    create_marker_for_waypoints,
)
from mavplan.trajectory_point import TrajectoryPoint

COLOR = Color(0.2, 0.4, 0.6, 1.0)


def _path(n):
    return [TrajectoryPoint(position=[i, 0.0, 1.0]) for i in range(n)]


def test_path_marker_header_and_style():
    marker = create_marker_for_path(_path(3), "map", COLOR, "loco", 0.1)
    assert marker.type == MarkerType.LINE_STRIP
    assert marker.frame_id == "map"
    assert marker.ns == "loco"
    assert marker.scale == (0.1, 0.1, 0.1)
    assert marker.color == Color(0.2, 0.4, 0.6, 0.75)
    assert marker.stamp > 0


def test_short_path_keeps_all_points():
    path = _path(5)
    marker = create_marker_for_path(path, "map", COLOR, "p", 0.1)
    assert marker.points == [tuple(p.position) for p in path]


def test_long_path_is_subsampled():
    marker = create_marker_for_path(_path(2500), "map", COLOR, "p", 0.1)
    assert len(marker.points) == 250
    assert marker.points[0] == (9.0, 0.0, 1.0)
    assert len(marker.points) <= 1000


def test_out_of_bounds_points_are_dropped():
    path = _path(3) + [TrajectoryPoint(position=[0.0, -2.0e4, 0.0])]
    path.append(TrajectoryPoint(position=[5.0e4, 0.0, 0.0]))
    marker = create_marker_for_path(path, "map", COLOR, "p", 0.1)
    assert marker.points == [tuple(p.position) for p in path[:3]]


def test_empty_path_gives_no_points():
    assert create_marker_for_path([], "map", COLOR, "p", 0.1).points == []


def test_waypoint_marker_keeps_every_point():
    path = _path(1500) + [TrajectoryPoint(position=[5.0e4, 0.0, 0.0])]
    marker = create_marker_for_waypoints(path, "odom", COLOR, "goal", 0.2)
    assert marker.type == MarkerType.SPHERE_LIST
    assert len(marker.points) == len(path)
    assert marker.color.a == 0.75
    assert marker.scale == (0.2, 0.2, 0.2)


def test_input_color_is_not_modified():
    create_marker_for_path(_path(2), "map", COLOR, "p", 0.1)
    assert COLOR.a == 1.0


def test_marker_defaults():
    marker = Marker()
    assert marker.points == []
    assert marker.type == MarkerType.ARROW