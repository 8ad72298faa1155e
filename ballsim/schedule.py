"""
Cached times-to-event for every ball pair and every ball/wall pair.

Times are stored relative to the current instant inside a frame, with inf
meaning "no event ahead". Only the upper triangle (i < j) of the pair table
is used.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ballsim.oracle import Wall, collision_time, wall_time
from ballsim.world import World


class EventKind(Enum):
    PAIR = 'pair'
    WALL = 'wall'


@dataclass(frozen=True)
class Event:
    time: float
    kind: EventKind
    first: int
    second: Optional[int] = None
    wall: Optional[Wall] = None


def _or_inf(t: Optional[float]) -> float:
    return np.inf if t is None else t


class EventSchedule:
    def __init__(self, n_balls: int):
        self.n_balls = n_balls
        self.pair_times = np.full((n_balls, n_balls), np.inf)
        self.wall_times = np.full((n_balls, len(Wall)), np.inf)

    def rebuild(self, world: World):
        """Recompute every entry from the world as it is now."""
        self.pair_times.fill(np.inf)
        for i in range(self.n_balls):
            for j in range(i + 1, self.n_balls):
                self.pair_times[i, j] = _or_inf(collision_time(world.balls[i], world.balls[j]))
        for i in range(self.n_balls):
            self._refresh_walls(world, i)

    def earliest(self, limit: float) -> Optional[Event]:
        """
        Soonest cached event with time <= limit, or None.

        Ties: a pair event beats a wall event; within a table the lowest
        row-major index wins.
        """
        pair_event = None
        if self.n_balls > 1:
            flat = int(np.argmin(self.pair_times))
            t = self.pair_times.flat[flat]
            if t <= limit:
                i, j = divmod(flat, self.n_balls)
                pair_event = Event(float(t), EventKind.PAIR, i, second=j)

        wall_event = None
        if self.n_balls > 0:
            flat = int(np.argmin(self.wall_times))
            t = self.wall_times.flat[flat]
            if t <= limit:
                i, w = divmod(flat, len(Wall))
                wall_event = Event(float(t), EventKind.WALL, i, wall=Wall(w))

        if pair_event is None:
            return wall_event
        if wall_event is None or pair_event.time <= wall_event.time:
            return pair_event
        return wall_event

    def age(self, dt: float):
        """Shift every cached time by the dt just consumed."""
        self.pair_times -= dt
        self.wall_times -= dt

    def clear_pair(self, i: int, j: int):
        self.pair_times[min(i, j), max(i, j)] = np.inf

    def refresh_ball(self, world: World, i: int, skip_partner: Optional[int] = None,
                     skip_wall: Optional[Wall] = None):
        """
        Recompute every entry involving ball i after its velocity changed.

        The entry for the pair (i, skip_partner) or the wall skip_wall is
        cleared instead: that contact was just resolved.
        """
        balls = world.balls
        for j in range(self.n_balls):
            if j == i:
                continue
            lo, hi = min(i, j), max(i, j)
            if j == skip_partner:
                self.pair_times[lo, hi] = np.inf
            else:
                self.pair_times[lo, hi] = _or_inf(collision_time(balls[lo], balls[hi]))
        self._refresh_walls(world, i)
        if skip_wall is not None:
            self.wall_times[i, skip_wall] = np.inf

    def _refresh_walls(self, world: World, i: int):
        ball = world.balls[i]
        for wall in Wall:
            self.wall_times[i, wall] = _or_inf(wall_time(ball, wall, world.width, world.height))
