"""Recolouring of successive planned paths along a rainbow scale."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from .colors import percent_to_rainbow_color
from .markers import Marker


class TrajectoryRecolor:
    """Accumulates incoming path markers, colouring each by arrival order."""

    def __init__(self, max_plans: int = 50) -> None:
        self.max_plans = max_plans
        self.counter = 0
        self.marker_cache: List[Marker] = []

    def recolor(self, markers: Iterable[Marker]) -> List[Marker]:
        """Add recoloured copies of ``markers`` to the cache and return it."""
        for marker in markers:
            color = replace(percent_to_rainbow_color(self.counter / self.max_plans), a=0.5)
            self.marker_cache.append(
                replace(
                    marker,
                    color=color,
                    scale=(0.025, 0.025, 0.025),
                    id=self.counter,
                    points=list(marker.points),
                )
            )
            self.counter += 1
        if self.counter > self.max_plans:
            self.counter %= self.max_plans
        return list(self.marker_cache)