import numpy as np

from ballsim.renderer import Renderer
from ballsim.world import World
from tests.conftest import make_ball


def test_render_shape_and_colors():
    world = World(width=100, height=80, balls=[
        make_ball(50.0, 50.0, radius=10.0, color=(255, 0, 0)),
    ])
    frame = Renderer(100, 80, background_color=(0, 0, 255)).render(world)
    assert frame.shape == (80, 100, 3)
    assert frame.dtype == np.uint8
    assert frame.flags['C_CONTIGUOUS']
    # arena y points up: centre row is 80 - 1 - 50
    assert tuple(frame[29, 50]) == (255, 0, 0)
    assert tuple(frame[0, 0]) == (0, 0, 255)
    assert tuple(frame[79, 99]) == (0, 0, 255)


def test_render_clears_previous_frame():
    renderer = Renderer(60, 60, background_color=(255, 255, 255))
    ball = make_ball(20.0, 20.0, radius=5.0)
    world = World(width=60, height=60, balls=[ball])
    renderer.render(world)
    ball.x = 40.0
    frame = renderer.render(world)
    assert tuple(frame[39, 20]) == (255, 255, 255)
    assert tuple(frame[39, 40]) == (0, 0, 0)
