"""Resampling of waypoint lists into evenly timed segments."""

from __future__ import annotations

from typing import Callable, List, Sequence

import numpy as np

from .trajectory_point import TrajectoryPoint

SegmentTime = Callable[[np.ndarray, np.ndarray], float]


def resample_waypoints_from_visibility_graph(
    num_segments: int,
    waypoints: Sequence[TrajectoryPoint],
    segment_time: SegmentTime,
) -> List[TrajectoryPoint]:
    """Split a waypoint path into ``num_segments`` pieces of equal duration.

    ``segment_time(start, end)`` gives the travel time between two positions.
    The result has ``num_segments + 1`` points, starting and ending with the
    original first and last waypoints.
    """
    if len(waypoints) < 2:
        raise ValueError("at least two waypoints are required")
    if num_segments < 1:
        raise ValueError("num_segments must be at least 1")

    segment_times = [
        segment_time(previous.position, current.position)
        for previous, current in zip(waypoints, waypoints[1:])
    ]
    total_time = sum(segment_times)
    if total_time <= 0.0:
        raise ValueError("waypoints must take a positive time to traverse")

    time_per_segment = total_time / num_segments
    time_so_far = 0.0
    input_index = 0
    output_index = 1
    result = [waypoints[0]]

    while output_index < num_segments:
        target_time = time_per_segment * output_index
        if time_so_far >= target_time:
            previous = waypoints[input_index - 1].position
            direction = waypoints[input_index].position - previous
            magnitude = 1.0 - (time_so_far - target_time) / segment_times[input_index - 1]
            result.append(TrajectoryPoint(position=previous + magnitude * direction))
            output_index += 1
        elif input_index < len(segment_times):
            time_so_far += segment_times[input_index]
            input_index += 1
        else:
            break

    result.append(waypoints[-1])
    return result