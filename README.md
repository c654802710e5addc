# mavplan

Building blocks for planning paths of micro aerial vehicles (MAVs) through a
voxel distance map, along with the bookkeeping for benchmarking local
planners.

## Installation

```
pip install mavplan
```

Install the test extra to run the test suite:

```
pip install "mavplan[test]"
pytest
```

## What is inside

- `mavplan.trajectory_point`: `TrajectoryPoint` (`position`, `velocity`,
  `acceleration`, `orientation` as a `(w, x, y, z)` quaternion,
  `time_from_start_ns`) with `set_from_yaw`, a `yaw` property and `copy`;
  plus `compute_path_length`, `rand_m_to_n`,
  `retime_monotonically_increasing` and `retime_with_start_time_and_dt`.
- `mavplan.constraints`: `PhysicalConstraints` (`v_max`, `a_max`,
  `yaw_rate_max`, `robot_radius`, `sampling_dt`), which can be built from a
  mapping with `PhysicalConstraints.from_mapping`; unknown keys are ignored.
- `mavplan.colors`: `Color` and `percent_to_rainbow_color`, which maps a
  fraction onto a rainbow hue and wraps every 1.0.
- `mavplan.semaphore`: a counting `Semaphore` with `notify`, `wait_for`
  that takes a timeout in seconds, and `shutdown`, which releases every
  waiter without granting a unit.
- `mavplan.markers`: `Marker`, `MarkerType`, `create_marker_for_path` (a line
  strip, subsampled by powers of ten to about 1000 points, dropping points
  beyond ±1e4) and `create_marker_for_waypoints` (a sphere list).
- `mavplan.resampling`: `resample_waypoints_from_visibility_graph` splits a
  waypoint path into segments of equal duration, given a function that
  returns the travel time between two positions.
- `mavplan.recolor`: `TrajectoryRecolor` collects path markers, giving each
  a rainbow colour by arrival order, a thin line width and a running id.
- `mavplan.yaw_policy`: `YawPolicy` with the `PolicyType` modes
  `FROM_PLAN`, `VELOCITY_VECTOR`, `ANTICIPATE_VELOCITY_VECTOR`,
  `POINT_FACING` and `CONSTANT`. A yaw-rate limit is applied when set;
  `deactivate_max_yaw_rate` removes it.
- `mavplan.shotgun`: a sparse distance-field grid (`EsdfGrid`, `EsdfVoxel`)
  and the particle-based `ShotgunPlanner`, which returns a `ShotgunResult`
  holding the reachable point closest to a goal and the coarse path to it.
- `mavplan.goal_selector`: `GoalPointSelector` with the `Strategy` modes
  `NO_INTERMEDIATE_GOAL`, `RANDOM` and `LOCAL_EXPLORATION`, working over a
  sparse `TsdfGrid`; the exploration gain is a function you pass in.
- `mavplan.local_benchmark`: `LocalBenchmarkResult`, `LocalPlanningMethod`,
  `Cylinder`, `generate_cylinders` (random obstacle worlds of a given
  density), `set_yaw_from_velocity` and `write_local_results` (CSV output
  under a commented header line).
- `mavplan.local_schedule`: `density_schedule`, which yields
  `(trial_number, density)` pairs sharing the trials out evenly across
  obstacle densities.

## Example

```python
from mavplan.trajectory_point import TrajectoryPoint, compute_path_length
from mavplan.yaw_policy import PolicyType, YawPolicy

path = [
    TrajectoryPoint(position=(float(i), 0.0, 1.0), velocity=(1.0, 1.0, 0.0))
    for i in range(5)
]

policy = YawPolicy(PolicyType.VELOCITY_VECTOR)
policy.apply_policy_in_place(path)  # no yaw-rate limit is set

print(compute_path_length(path))  # 4.0
print(round(path[-1].yaw, 6))     # 0.785398, i.e. 45 degrees
```

Searching a distance field for an intermediate goal:

```python
from mavplan.constraints import PhysicalConstraints
from mavplan.shotgun import EsdfGrid, EsdfVoxel, ShotgunPlanner

grid = EsdfGrid(voxel_size=0.5)
for x in range(10):
    grid.set_voxel((x, 0, 0), EsdfVoxel(distance=2.0, observed=True))

planner = ShotgunPlanner()
planner.set_physical_constraints(PhysicalConstraints(robot_radius=0.5))
planner.set_esdf_map(grid)
result = planner.shoot_particles(10, 400, start=(0.1, 0.1, 0.1), goal=(4.9, 0.1, 0.1))
print(result.best_goal)
```

## What this package does not do

- It has no command-line program, node or service; everything is used as a
  library from Python code.
- It does not build or load maps. `EsdfGrid` and `TsdfGrid` are sparse
  containers that you fill yourself; there is no sensor integration, no
  meshing and no map file format.
- It does not include global planners or trajectory optimizers, and does not
  run a benchmark end to end: it supplies the world generation, schedules,
  path checks and result files around such planners.
- It does not display anything. Markers are plain data objects; drawing them
  and any interactive panel are left to the caller.