# ── Central defaults (tune here, not scattered across files) ──

# Arena (pixels)
WIDTH = 1920
HEIGHT = 1080

# Video
FPS = 60
DURATION = 60
BG_COLOR = (255, 255, 255)
BALL_COLOR = (0, 0, 0)

# Balls
N_BALLS = 25
RADIUS_RANGE = (50, 100)
SPEED_RANGE = (80.0, 130.0)
MASS_LAW = 'circle'
MAX_PLACEMENT_ATTEMPTS = 10_000

# Simulation
FRAME_TOLERANCE = 1e-12
SEED = 42
