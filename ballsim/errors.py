class ConfigurationError(ValueError):
    """Invalid count, dimension, range or colour. Raised before simulation."""


class PlacementError(RuntimeError):
    """The placement sampler ran out of attempts for a ball."""

    def __init__(self, ball_id: int, attempts: int):
        self.ball_id = ball_id
        self.attempts = attempts
        super().__init__(
            f"Can't fit all balls in the given area "
            f"(ball {ball_id} not placed after {attempts} attempts)")
