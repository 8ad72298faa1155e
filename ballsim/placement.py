"""
Initial scattering of balls by rejection sampling.

Each ball gets an integer radius from the configured range, a position drawn
until it clears every ball already placed, a per-axis velocity with random
sign, and a colour. The random source is always passed in.
"""

import logging
from typing import List, Tuple

import numpy as np

from ballsim.config import SimConfig
from ballsim.errors import PlacementError
from ballsim.world import Ball, World

logger = logging.getLogger(__name__)


def box_conflict(x: float, y: float, r: float, other: Ball) -> bool:
    """Axis-aligned box test; conservative w.r.t. true circle overlap."""
    reach = r + other.radius
    return abs(x - other.x) <= reach and abs(y - other.y) <= reach


def circle_conflict(x: float, y: float, r: float, other: Ball) -> bool:
    reach = r + other.radius
    return (x - other.x)**2 + (y - other.y)**2 <= reach * reach


def _random_color(rng: np.random.RandomState,
                  background: Tuple[int, int, int]) -> Tuple[int, int, int]:
    color = tuple(rng.randint(0, 256, size=3).tolist())
    while color == tuple(background):
        color = tuple(rng.randint(0, 256, size=3).tolist())
    return color


def _signed_speed(rng: np.random.RandomState, speed_range: Tuple[float, float]) -> float:
    sign = rng.choice([-1.0, 1.0])
    return float(sign * rng.uniform(*speed_range))


def place_balls(config: SimConfig, rng: np.random.RandomState) -> World:
    """Scatter config.n_balls non-overlapping balls into a fresh World.

    Raises PlacementError if one ball needs more than config.max_attempts
    position draws.
    """
    conflicts = circle_conflict if config.exact_placement else box_conflict
    r_min, r_max = config.radius_range
    balls: List[Ball] = []
    total_attempts = 0

    for i in range(config.n_balls):
        r = float(rng.randint(int(r_min), int(r_max) + 1))

        attempts = 0
        while True:
            attempts += 1
            if attempts > config.max_attempts:
                raise PlacementError(i, config.max_attempts)
            x = rng.uniform(r, config.width - r - 1)
            y = rng.uniform(r, config.height - r - 1)
            if not any(conflicts(x, y, r, other) for other in balls):
                break
        total_attempts += attempts

        vx = _signed_speed(rng, config.speed_range)
        vy = _signed_speed(rng, config.speed_range)
        if config.random_color:
            color = _random_color(rng, config.background_color)
        else:
            color = tuple(config.ball_color)

        ball = Ball(x=float(x), y=float(y), vx=vx, vy=vy, radius=r,
                    mass=config.mass_law.mass(r), color=color, ball_id=i)
        logger.debug("placed ball %d at (%.1f, %.1f) r=%g after %d attempts",
                     i, ball.x, ball.y, r, attempts)
        balls.append(ball)

    logger.info("placed %d balls in %dx%d arena (%d position draws)",
                len(balls), config.width, config.height, total_attempts)
    return World(width=config.width, height=config.height, balls=balls)
