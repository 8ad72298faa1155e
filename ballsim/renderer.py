import os
from typing import Iterable, Tuple

import numpy as np

import ballsim as B
from ballsim.world import World

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


class Renderer:
    """Maps a World to RGB pixel frames; one world unit is one pixel."""

    def __init__(self, width: int, height: int,
                 background_color: Tuple[int, int, int] = B.BG_COLOR):
        self.width = int(width)
        self.height = int(height)
        self.background_color = tuple(background_color)
        self.surface = pygame.Surface((self.width, self.height))
        self._display_initialized = False

    def _world_to_pixel(self, wx: float, wy: float) -> Tuple[int, int]:
        # y grows upward in the arena, downward in the image
        return int(round(wx)), self.height - 1 - int(round(wy))

    def draw(self, world: World) -> pygame.Surface:
        self.surface.fill(self.background_color)
        for ball in world.balls:
            px, py = self._world_to_pixel(*ball.position)
            pr = max(1, int(round(ball.radius)))
            pygame.draw.circle(self.surface, ball.color, (px, py), pr)
        return self.surface

    def render(self, world: World) -> np.ndarray:
        """Render single frame → (height, width, 3) uint8, row-major RGB."""
        surface = self.draw(world)
        return np.ascontiguousarray(pygame.surfarray.array3d(surface).transpose(1, 0, 2))

    def play(self, frames: Iterable[World], fps: int = B.FPS, scale: float = 0.5):
        """Show frames in a pygame window. Press Q or close the window to stop."""
        if not self._display_initialized:
            pygame.init()
            self._display_initialized = True

        display_size = (max(1, int(self.width * scale)), max(1, int(self.height * scale)))
        screen = pygame.display.set_mode(display_size)
        pygame.display.set_caption('ballsim preview')
        clock = pygame.time.Clock()

        try:
            for world in frames:
                stop = False
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        stop = True
                    if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                        stop = True
                if stop:
                    break

                surf = pygame.transform.scale(self.draw(world), display_size)
                screen.blit(surf, (0, 0))
                pygame.display.flip()
                clock.tick(fps)
        finally:
            pygame.quit()
            self._display_initialized = False
