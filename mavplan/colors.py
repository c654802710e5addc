"""RGBA colours and a rainbow colour scale."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


def percent_to_rainbow_color(h: float) -> Color:
    """Map a fraction to a fully saturated rainbow colour; wraps every 1.0."""
    s = 1.0
    v = 1.0
    h -= math.floor(h)
    h *= 6
    i = math.floor(h)
    f = h - i
    if i % 2 == 0:
        f = 1 - f
    m = v * (1 - s)
    n = v * (1 - s * f)

    if i in (0, 6):
        r, g, b = v, n, m
    elif i == 1:
        r, g, b = n, v, m
    elif i == 2:
        r, g, b = m, v, n
    elif i == 3:
        r, g, b = m, n, v
    elif i == 4:
        r, g, b = n, m, v
    elif i == 5:
        r, g, b = v, m, n
    else:
        r, g, b = 1.0, 0.5, 0.5
    return Color(r, g, b, 0.5)