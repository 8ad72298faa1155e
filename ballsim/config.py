import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import ballsim as B
from ballsim.errors import ConfigurationError

Color = Tuple[int, int, int]


class MassLaw(Enum):
    """How a ball's mass follows from its radius."""
    AREA = 'circle'     # m = r²·π
    VOLUME = 'ball'     # m = 4/3·r³·π

    @classmethod
    def parse(cls, name) -> 'MassLaw':
        if isinstance(name, cls):
            return name
        aliases = {'circle': cls.AREA, 'area': cls.AREA,
                   'ball': cls.VOLUME, 'volume': cls.VOLUME}
        try:
            return aliases[str(name).lower()]
        except KeyError:
            raise ConfigurationError(f"Unknown mass law: {name!r}") from None

    def mass(self, radius: float) -> float:
        if self is MassLaw.AREA:
            return radius * radius * math.pi
        return (radius * radius * radius * math.pi * 4.0) / 3.0


def parse_hex_color(text: str) -> Color:
    """'#ff8800' or 'ff8800' → (255, 136, 0)."""
    digits = text.strip().lstrip('#')
    if len(digits) != 6:
        raise ConfigurationError(f"Invalid hex color: {text!r}")
    try:
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ConfigurationError(f"Invalid hex color: {text!r}") from None


@dataclass
class SimConfig:
    width: int = B.WIDTH
    height: int = B.HEIGHT
    fps: int = B.FPS
    duration: int = B.DURATION
    n_balls: int = B.N_BALLS
    radius_range: Tuple[int, int] = B.RADIUS_RANGE
    speed_range: Tuple[float, float] = B.SPEED_RANGE
    mass_law: MassLaw = MassLaw.parse(B.MASS_LAW)
    background_color: Color = B.BG_COLOR
    ball_color: Color = B.BALL_COLOR
    random_color: bool = False
    exact_placement: bool = False
    max_attempts: int = B.MAX_PLACEMENT_ATTEMPTS

    @property
    def n_frames(self) -> int:
        return self.fps * self.duration

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    def validate(self) -> 'SimConfig':
        """Raise ConfigurationError on the first invalid field; return self."""
        for name in ('width', 'height', 'fps', 'duration', 'n_balls', 'max_attempts'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be greater than 0")

        r_min, r_max = self.radius_range
        if r_max < r_min:
            raise ConfigurationError(
                "Maximum radius must be greater than or equal to minimum radius")
        if r_min <= 0:
            raise ConfigurationError("Minimum radius must be greater than 0")
        if 2 * r_max + 1 >= min(self.width, self.height):
            raise ConfigurationError(
                f"Arena {self.width}x{self.height} is too small for radius {r_max}")

        s_min, s_max = self.speed_range
        if s_max < s_min:
            raise ConfigurationError(
                "Maximum speed must be greater than or equal to minimum speed")
        if s_max <= 0:
            raise ConfigurationError("Maximum speed must be greater than 0")
        if s_min < 0:
            raise ConfigurationError("Minimum speed must not be negative")

        self.mass_law = MassLaw.parse(self.mass_law)
        for name in ('background_color', 'ball_color'):
            color = getattr(self, name)
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                raise ConfigurationError(f"{name} must be an RGB triple in 0..255")
        return self
