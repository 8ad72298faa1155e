"""
Frame sinks: where rendered frames go.

FFmpegSink pipes raw rgb24 frames into an ffmpeg process (lossless h264).
PngSequenceSink writes numbered PNG files, for when ffmpeg is unavailable.
"""

import logging
import os
import shutil
import subprocess
import tempfile
from typing import List, Optional

import numpy as np

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame

logger = logging.getLogger(__name__)


class FFmpegSink:
    def __init__(self, path: str, width: int, height: int, fps: int,
                 ffmpeg: Optional[str] = None):
        self.path = path
        self.width = int(width)
        self.height = int(height)
        self.fps = int(fps)
        self.ffmpeg = ffmpeg or shutil.which('ffmpeg')
        if self.ffmpeg is None:
            raise FileNotFoundError("ffmpeg not found in PATH")
        self.frames_written = 0
        self._proc: Optional[subprocess.Popen] = None
        self._log = None

    def command(self) -> List[str]:
        return [
            self.ffmpeg, '-y',
            '-f', 'rawvideo',
            '-pix_fmt', 'rgb24',
            '-s', f'{self.width}x{self.height}',
            '-r', str(self.fps),
            '-an',
            '-i', '-',
            '-c:v', 'libx264',
            '-crf', '0',
            self.path,
        ]

    def open(self) -> 'FFmpegSink':
        logger.info("starting encoder: %s", ' '.join(self.command()))
        # stderr to a file: a full pipe would stall the frame writes
        self._log = tempfile.TemporaryFile()
        self._proc = subprocess.Popen(self.command(), stdin=subprocess.PIPE,
                                      stdout=subprocess.DEVNULL,
                                      stderr=self._log)
        return self

    def _encoder_output(self, limit: int = 2000) -> str:
        if self._log is None:
            return ''
        self._log.seek(0)
        text = self._log.read().decode('utf-8', errors='replace').strip()
        self._log.close()
        self._log = None
        return text[-limit:]

    def _fail(self, returncode) -> RuntimeError:
        output = self._encoder_output()
        message = f"ffmpeg exited with status {returncode}"
        if output:
            message += f":\n{output}"
        return RuntimeError(message)

    def write(self, frame: np.ndarray):
        expected = (self.height, self.width, 3)
        if frame.shape != expected:
            raise ValueError(f"Frame shape {frame.shape} != {expected}")
        if self._proc is None:
            self.open()
        try:
            self._proc.stdin.write(frame.astype(np.uint8, copy=False).tobytes())
        except BrokenPipeError:
            returncode = self._proc.wait()
            self._proc = None
            raise self._fail(returncode) from None
        self.frames_written += 1

    def close(self):
        if self._proc is None:
            return
        try:
            self._proc.stdin.close()
        except BrokenPipeError:
            pass
        returncode = self._proc.wait()
        self._proc = None
        if returncode != 0:
            raise self._fail(returncode)
        output = self._encoder_output()
        if output:
            logger.debug("ffmpeg: %s", output)
        logger.info("wrote %d frames to %s", self.frames_written, self.path)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None and self._proc is not None:
            self._proc.kill()
            self._proc.wait()
            self._proc = None
            self._encoder_output()
            return False
        self.close()
        return False


class PngSequenceSink:
    """Save frames as individual PNGs: directory/frame_00000.png, ..."""

    def __init__(self, directory: str):
        self.directory = directory
        self.frames_written = 0

    def open(self) -> 'PngSequenceSink':
        os.makedirs(self.directory, exist_ok=True)
        return self

    def write(self, frame: np.ndarray):
        if self.frames_written == 0:
            self.open()
        surf = pygame.surfarray.make_surface(frame.transpose(1, 0, 2))
        path = os.path.join(self.directory, f'frame_{self.frames_written:05d}.png')
        pygame.image.save(surf, path)
        self.frames_written += 1

    def close(self):
        logger.info("wrote %d frames to %s", self.frames_written, self.directory)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
