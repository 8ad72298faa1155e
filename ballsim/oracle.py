"""
Time-of-impact for ball pairs and ball/wall pairs.

Both functions are pure: they read the current positions and velocities and
return the time until first contact assuming constant velocity, or None when
no contact lies ahead.
"""

from enum import IntEnum
from typing import Optional

import numpy as np

from ballsim.world import Ball


class Wall(IntEnum):
    LEFT = 0
    RIGHT = 1
    BOTTOM = 2
    TOP = 3

    @property
    def axis(self) -> int:
        """0 for walls crossed along x, 1 for walls crossed along y."""
        return 0 if self in (Wall.LEFT, Wall.RIGHT) else 1


def collision_time(a: Ball, b: Ball) -> Optional[float]:
    """
    Squared centre distance over time is A·t² + B·t + C with
    A = |Δv|², B = 2·Δp·Δv, C = |Δp|².  Contact is where it equals d².
    """
    d_sq = (a.radius + b.radius)**2
    dx = a.x - b.x
    dy = a.y - b.y
    dvx = a.vx - b.vx
    dvy = a.vy - b.vy

    A = dvx**2 + dvy**2
    if A == 0.0:
        return None

    half_B = dx * dvx + dy * dvy
    C = dx**2 + dy**2

    # Not closing: distance² is convex in t, so it only grows from here
    if half_B >= 0.0:
        return None

    # Closest approach never gets within d
    if C - half_B**2 / A >= d_sq:
        return None

    # Already interpenetrating (rounding) and still closing: contact is now
    if C < d_sq:
        return 0.0

    disc_sqrt = np.sqrt(half_B**2 - A * (C - d_sq))
    roots = [t for t in ((-half_B - disc_sqrt) / A, (-half_B + disc_sqrt) / A) if t >= 0.0]
    if not roots:
        return None
    return float(min(roots))


def wall_time(ball: Ball, wall: Wall, width: float, height: float) -> Optional[float]:
    """Time until the ball's centre reaches the wall's limit line r / dim-r-1."""
    # depth: how far the centre is past the limit line (negative while inside)
    # outward: velocity component pointing through the wall
    wall = Wall(wall)
    if wall is Wall.LEFT:
        depth, outward = ball.radius - ball.x, -ball.vx
    elif wall is Wall.RIGHT:
        depth, outward = ball.x - (width - ball.radius - 1), ball.vx
    elif wall is Wall.BOTTOM:
        depth, outward = ball.radius - ball.y, -ball.vy
    else:
        depth, outward = ball.y - (height - ball.radius - 1), ball.vy

    if outward == 0.0:
        return None
    t = -depth / outward
    if t > 0.0 and np.isfinite(t):
        return float(t)
    # On or past the line (rounding) and still heading out: contact is now
    if depth >= 0.0 and outward > 0.0:
        return 0.0
    return None
