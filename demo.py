"""
Quick demo: watch the balls bounce.
Run: python demo.py
Press Q or close window to exit.
"""
import numpy as np

from ballsim.config import SimConfig
from ballsim.placement import place_balls
from ballsim.renderer import Renderer
from ballsim.stepper import Stepper
import ballsim as B

# Smaller arena than the video defaults so the window fits on screen
config = SimConfig(width=960, height=540, n_balls=12, radius_range=(20, 45),
                   random_color=True).validate()
world = place_balls(config, np.random.RandomState(B.SEED))
stepper = Stepper(world, fps=config.fps)

print(f"Balls: {len(world)}  energy: {world.total_kinetic_energy():.1f}")

renderer = Renderer(config.width, config.height, config.background_color)
renderer.play((stepper.step() for _ in range(config.n_frames)), fps=config.fps, scale=1.0)

print(f"Collisions: {len(stepper.collision_log)}")
print(f"Energy after {stepper.frame} frames: {world.total_kinetic_energy():.1f}")
