import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

import pytest

from ballsim.config import MassLaw, SimConfig
from ballsim.world import Ball, World


def make_ball(x, y, vx=0.0, vy=0.0, radius=10.0, ball_id=0, mass_law=MassLaw.AREA,
              color=(0, 0, 0)):
    return Ball(x=x, y=y, vx=vx, vy=vy, radius=radius, mass=mass_law.mass(radius),
                color=color, ball_id=ball_id)


@pytest.fixture
def small_config():
    return SimConfig(width=400, height=300, fps=30, duration=2, n_balls=10,
                     radius_range=(10, 20), speed_range=(80.0, 130.0))


@pytest.fixture
def head_on_world():
    return World(width=400, height=200, balls=[
        make_ball(100.0, 100.0, vx=50.0, ball_id=0),
        make_ball(200.0, 100.0, vx=-50.0, ball_id=1),
    ])
