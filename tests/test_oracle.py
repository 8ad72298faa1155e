import pytest

from ballsim.oracle import Wall, collision_time, wall_time
from tests.conftest import make_ball


class TestCollisionTime:
    def test_head_on(self):
        a = make_ball(100.0, 100.0, vx=50.0)
        b = make_ball(200.0, 100.0, vx=-50.0)
        assert collision_time(a, b) == pytest.approx(0.8)

    def test_symmetric_in_arguments(self):
        a = make_ball(100.0, 100.0, vx=30.0, vy=5.0)
        b = make_ball(180.0, 110.0, vx=-20.0, radius=15.0)
        assert collision_time(a, b) == pytest.approx(collision_time(b, a))

    def test_one_ball_at_rest(self):
        a = make_ball(0.0, 0.0, vx=10.0)
        b = make_ball(50.0, 0.0)
        # gap of 30 closed at 10 px/s
        assert collision_time(a, b) == pytest.approx(3.0)

    def test_passes_by(self):
        a = make_ball(100.0, 100.0, vx=50.0)
        b = make_ball(200.0, 150.0, vx=-50.0)
        assert collision_time(a, b) is None

    def test_no_relative_motion(self):
        a = make_ball(100.0, 100.0, vx=40.0, vy=-10.0)
        b = make_ball(130.0, 100.0, vx=40.0, vy=-10.0)
        assert collision_time(a, b) is None

    def test_moving_apart(self):
        a = make_ball(100.0, 100.0, vx=-50.0)
        b = make_ball(200.0, 100.0, vx=50.0)
        assert collision_time(a, b) is None

    def test_touching_and_separating(self):
        a = make_ball(100.0, 100.0, vx=-10.0)
        b = make_ball(120.0, 100.0, vx=10.0)
        assert collision_time(a, b) is None

    def test_overlapping_and_closing_reports_now(self):
        a = make_ball(100.0, 100.0, vx=10.0)
        b = make_ball(119.0, 100.0, vx=-10.0)
        assert collision_time(a, b) == 0.0

    def test_oblique_contact_distance(self):
        a = make_ball(0.0, 0.0, vx=10.0, vy=10.0, radius=5.0)
        b = make_ball(40.0, 30.0, radius=5.0)
        t = collision_time(a, b)
        assert t is not None
        dx = (a.x + a.vx * t) - b.x
        dy = (a.y + a.vy * t) - b.y
        assert (dx**2 + dy**2) ** 0.5 == pytest.approx(10.0)


class TestWallTime:
    W, H = 200, 100

    def test_each_wall(self):
        ball = make_ball(50.0, 60.0, vx=-40.0, vy=30.0)
        assert wall_time(ball, Wall.LEFT, self.W, self.H) == pytest.approx(1.0)
        assert wall_time(ball, Wall.RIGHT, self.W, self.H) is None
        assert wall_time(ball, Wall.BOTTOM, self.W, self.H) is None
        assert wall_time(ball, Wall.TOP, self.W, self.H) == pytest.approx(29.0 / 30.0)

    def test_right_and_bottom(self):
        ball = make_ball(150.0, 40.0, vx=39.0, vy=-15.0)
        assert wall_time(ball, Wall.RIGHT, self.W, self.H) == pytest.approx(1.0)
        assert wall_time(ball, Wall.BOTTOM, self.W, self.H) == pytest.approx(2.0)

    def test_zero_velocity_component(self):
        ball = make_ball(50.0, 50.0, vx=0.0, vy=10.0)
        assert wall_time(ball, Wall.LEFT, self.W, self.H) is None
        assert wall_time(ball, Wall.RIGHT, self.W, self.H) is None

    def test_leaving_the_wall(self):
        ball = make_ball(10.0, 50.0, vx=40.0)
        assert wall_time(ball, Wall.LEFT, self.W, self.H) is None

    def test_at_or_past_wall_heading_out_is_immediate(self):
        at_line = make_ball(10.0, 50.0, vx=-40.0)
        past_line = make_ball(189.0 + 1e-9, 50.0, vx=40.0)
        assert wall_time(at_line, Wall.LEFT, self.W, self.H) == 0.0
        assert wall_time(past_line, Wall.RIGHT, self.W, self.H) == 0.0

    def test_accepts_plain_index(self):
        ball = make_ball(50.0, 60.0, vx=-40.0)
        assert wall_time(ball, 0, self.W, self.H) == pytest.approx(1.0)

    def test_wall_axis(self):
        assert Wall.LEFT.axis == Wall.RIGHT.axis == 0
        assert Wall.BOTTOM.axis == Wall.TOP.axis == 1
