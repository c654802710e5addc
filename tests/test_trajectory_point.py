import math
import random

import numpy as np
import pytest

from mavplan.trajectory_point import (
    TrajectoryPoint,
    compute_path_length,
    rand_m_to_n,
    retime_monotonically_increasing,
    retime_with_start_time_and_dt,
)


def _path(positions, times=None):
    times = times or [0] * len(positions)
    return [TrajectoryPoint(position=p, time_from_start_ns=t) for p, t in zip(positions, times)]


@pytest.mark.parametrize("yaw", [0.0, 0.5, -1.2, 3.0])
def test_yaw_round_trip(yaw):
    point = TrajectoryPoint()
    point.set_from_yaw(yaw)
    assert point.yaw == pytest.approx(yaw)
    assert np.linalg.norm(point.orientation) == pytest.approx(1.0)


def test_default_orientation_has_zero_yaw():
    assert TrajectoryPoint().yaw == 0.0


def test_copy_is_independent():
    point = TrajectoryPoint(position=[1, 2, 3])
    clone = point.copy()
    clone.position[0] = 10.0
    assert point.position[0] == 1.0


def test_path_length_empty_and_single():
    assert compute_path_length([]) == 0.0
    assert compute_path_length(_path([[1, 2, 3]])) == 0.0


def test_path_length_sums_segments():
    path = _path([[0, 0, 0], [3, 4, 0], [3, 4, 12]])
    assert compute_path_length(path) == pytest.approx(17.0)


def test_path_length_not_less_than_straight_line():
    rng = random.Random(3)
    positions = [[rng.uniform(-5, 5) for _ in range(3)] for _ in range(20)]
    path = _path(positions)
    straight = np.linalg.norm(np.array(positions[-1]) - np.array(positions[0]))
    assert compute_path_length(path) >= straight


def test_rand_m_to_n_bounds_and_determinism():
    first = [rand_m_to_n(-2.0, 5.0, random.Random(7)) for _ in range(3)]
    second = [rand_m_to_n(-2.0, 5.0, random.Random(7)) for _ in range(3)]
    assert first == second
    rng = random.Random(1)
    values = [rand_m_to_n(-2.0, 5.0, rng) for _ in range(500)]
    assert all(-2.0 <= v <= 5.0 for v in values)


def test_retime_monotonically_increasing_uses_first_step():
    path = _path([[0, 0, 0]] * 4, [100, 110, 125, 127])
    retime_monotonically_increasing(path)
    times = [p.time_from_start_ns for p in path]
    assert times[0] == 100
    assert np.all(np.diff(times) == times[1] - times[0])


def test_retime_monotonically_increasing_empty():
    path = []
    retime_monotonically_increasing(path)
    assert path == []


def test_retime_with_start_time_and_dt():
    path = _path([[0, 0, 0]] * 5, [9, 9, 9, 9, 9])
    retime_with_start_time_and_dt(1000, 50, path)
    times = [p.time_from_start_ns for p in path]
    assert times[0] == 1000
    assert set(np.diff(times)) == {50}