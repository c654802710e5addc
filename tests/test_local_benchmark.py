import math
import random

import pytest

from mavplan.local_benchmark import (
    RESULTS_HEADER,
    Cylinder,
    LocalBenchmarkResult,
    LocalPlanningMethod,
    generate_cylinders,
    set_yaw_from_velocity,
    write_local_results,
)
from mavplan.trajectory_point import TrajectoryPoint


def test_yaw_follows_velocity():
    path = [
        TrajectoryPoint(velocity=[0.0, 2.0, 0.0]),
        TrajectoryPoint(velocity=[-1.0, 0.0, 0.5]),
    ]
    set_yaw_from_velocity(0.3, path)
    assert path[0].yaw == pytest.approx(math.pi / 2)
    assert abs(path[1].yaw) == pytest.approx(math.pi)


def test_yaw_default_for_stationary_points():
    path = [TrajectoryPoint(), TrajectoryPoint(velocity=[1e-8, 0.0, 0.0])]
    set_yaw_from_velocity(0.7, path)
    assert [p.yaw for p in path] == pytest.approx([0.7, 0.7])


def test_yaw_empty_path():
    path = []
    set_yaw_from_velocity(1.0, path)
    assert path == []


def test_cylinders_within_bounds():
    size = (15.0, 15.0, 5.0)
    cylinders = generate_cylinders(size, 0.5, random.Random(3))
    assert cylinders
    for cylinder in cylinders:
        assert 4.0 <= cylinder.position[0] <= 11.0
        assert 4.0 <= cylinder.position[1] <= 11.0
        assert 2.0 <= cylinder.height <= 5.0
        assert 0.25 <= cylinder.radius <= 1.0
        assert cylinder.position[2] == pytest.approx(cylinder.height / 2.0)


def test_cylinder_count():
    cylinders = generate_cylinders((10.0, 10.0, 5.0), 1.0, random.Random(0))
    assert len(cylinders) == 4


def test_zero_density_gives_no_cylinders():
    assert generate_cylinders((15.0, 15.0, 5.0), 0.0, random.Random(0)) == []


def test_cylinders_deterministic_with_seed():
    first = generate_cylinders((15.0, 15.0, 5.0), 0.3, random.Random(42))
    second = generate_cylinders((15.0, 15.0, 5.0), 0.3, random.Random(42))
    assert len(first) == len(second)
    for a, b in zip(first, second):
        assert list(a.position) == list(b.position)
        assert (a.radius, a.height) == (b.radius, b.height)


def test_more_density_more_cylinders():
    sparse = generate_cylinders((15.0, 15.0, 5.0), 0.1, random.Random(1))
    dense = generate_cylinders((15.0, 15.0, 5.0), 0.4, random.Random(1))
    assert len(dense) > len(sparse)


def test_cylinder_position_is_copied():
    position = [1.0, 2.0, 3.0]
    cylinder = Cylinder(position=position, radius=0.5, height=2.0)
    position[0] = 9.0
    assert cylinder.position[0] == 1.0


def test_write_results_round_trip(tmp_path):
    result = LocalBenchmarkResult(
        trial_number=7,
        seed=7,
        density=0.25,
        robot_radius_m=0.5,
        v_max=1.0,
        a_max=2.0,
        local_planning_method=LocalPlanningMethod.LOCO,
        planning_success=True,
        is_collision_free=True,
        is_feasible=False,
        num_replans=12,
        distance_from_goal=0.125,
        computation_time_sec=1.5,
        total_path_time_sec=10.25,
        total_path_length_m=13.0,
        straight_line_path_length_m=12.5,
    )
    filename = tmp_path / "results.csv"
    write_local_results([result, LocalBenchmarkResult()], filename)
    lines = filename.read_text(encoding="utf-8").splitlines()
    assert lines[0] == RESULTS_HEADER
    assert len(lines) == 3
    fields = lines[1].split(",")
    assert len(fields) == len(RESULTS_HEADER.split(","))
    assert [int(f) for f in fields[:2]] == [7, 7]
    assert [float(f) for f in fields[2:6]] == [0.25, 0.5, 1.0, 2.0]
    assert [int(f) for f in fields[6:11]] == [
        int(LocalPlanningMethod.LOCO), 1, 1, 0, 12,
    ]
    assert [float(f) for f in fields[11:]] == [0.125, 1.5, 10.25, 13.0, 12.5]
    assert lines[2].startswith("0,0,0.000000,")


def test_header_starts_with_comment():
    assert RESULTS_HEADER.startswith("#trial,seed,density")
    assert RESULTS_HEADER.endswith("straight_line_path_length_m")


def test_write_to_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        write_local_results([], tmp_path / "missing" / "results.csv")