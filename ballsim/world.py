"""
Arena state: balls plus the fixed arena dimensions.

- Balls are addressed by their index in World.balls, fixed after placement
- Units are pixels and seconds
- Colour is carried for the renderer and never read by the physics
"""

import copy
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


@dataclass
class Ball:
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    mass: float
    color: Tuple[int, int, int] = (0, 0, 0)
    ball_id: int = 0

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy])

    @velocity.setter
    def velocity(self, v: np.ndarray):
        self.vx, self.vy = float(v[0]), float(v[1])

    @property
    def speed(self) -> float:
        return np.sqrt(self.vx**2 + self.vy**2)

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * (self.vx**2 + self.vy**2)

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])

    @property
    def full_state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy, self.radius, self.mass])


@dataclass
class World:
    width: float
    height: float
    balls: List[Ball] = field(default_factory=list)

    def __len__(self):
        return len(self.balls)

    def snapshot(self) -> 'World':
        return copy.deepcopy(self)

    # State access

    def get_state(self) -> np.ndarray:
        """(n_balls, 4) → [x, y, vx, vy]"""
        return np.array([b.state for b in self.balls]).reshape(-1, 4)

    def get_full_state(self) -> np.ndarray:
        """(n_balls, 6) → [x, y, vx, vy, radius, mass]"""
        return np.array([b.full_state for b in self.balls]).reshape(-1, 6)

    @property
    def radii(self) -> np.ndarray:
        return np.array([b.radius for b in self.balls])

    @property
    def masses(self) -> np.ndarray:
        return np.array([b.mass for b in self.balls])

    @property
    def colors(self) -> List[Tuple[int, int, int]]:
        return [b.color for b in self.balls]

    # Conserved quantities

    def total_kinetic_energy(self) -> float:
        return sum(b.kinetic_energy for b in self.balls)

    def total_momentum(self) -> np.ndarray:
        px = sum(b.mass * b.vx for b in self.balls)
        py = sum(b.mass * b.vy for b in self.balls)
        return np.array([px, py])

    # Geometric invariants

    def min_gap(self) -> float:
        """Smallest centre distance minus radius sum over all pairs (inf for n < 2)."""
        gap = np.inf
        n = len(self.balls)
        for i in range(n):
            for j in range(i + 1, n):
                bi, bj = self.balls[i], self.balls[j]
                dist = np.sqrt((bj.x - bi.x)**2 + (bj.y - bi.y)**2)
                gap = min(gap, dist - (bi.radius + bj.radius))
        return gap

    def is_contained(self, tol: float = 1e-6) -> bool:
        for b in self.balls:
            if not (b.radius - tol <= b.x <= self.width - b.radius - 1 + tol):
                return False
            if not (b.radius - tol <= b.y <= self.height - b.radius - 1 + tol):
                return False
        return True
