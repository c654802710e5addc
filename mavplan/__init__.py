"""Planning utilities for micro aerial vehicles: trajectory points, yaw policies, distance-field particle search, goal selection, markers and local benchmark bookkeeping."""

__version__ = "0.1.0"