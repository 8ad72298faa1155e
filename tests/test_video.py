import os

import numpy as np
import pytest

from ballsim import video
from ballsim.video import FFmpegSink, PngSequenceSink


def test_ffmpeg_command():
    sink = FFmpegSink('out.mp4', 320, 240, 30, ffmpeg='/opt/bin/ffmpeg')
    assert sink.command() == [
        '/opt/bin/ffmpeg', '-y', '-f', 'rawvideo', '-pix_fmt', 'rgb24',
        '-s', '320x240', '-r', '30', '-an', '-i', '-',
        '-c:v', 'libx264', '-crf', '0', 'out.mp4',
    ]


def test_missing_ffmpeg(monkeypatch):
    monkeypatch.setattr(video.shutil, 'which', lambda name: None)
    with pytest.raises(FileNotFoundError):
        FFmpegSink('out.mp4', 320, 240, 30)


def test_ffmpeg_rejects_wrong_frame_shape():
    sink = FFmpegSink('out.mp4', 320, 240, 30, ffmpeg='/opt/bin/ffmpeg')
    with pytest.raises(ValueError):
        sink.write(np.zeros((320, 240, 3), dtype=np.uint8))
    assert sink.frames_written == 0


class _FakeStdin:
    def __init__(self):
        self.chunks = []
        self.closed = False

    def write(self, data):
        self.chunks.append(data)

    def close(self):
        self.closed = True


class _FakeProc:
    def __init__(self, returncode):
        self.stdin = _FakeStdin()
        self.returncode = returncode

    def wait(self):
        return self.returncode

    def kill(self):
        pass


@pytest.mark.parametrize('returncode', [0, 1])
def test_ffmpeg_pipes_raw_frames(monkeypatch, returncode):
    procs = []

    def fake_popen(cmd, **kwargs):
        procs.append(_FakeProc(returncode))
        return procs[-1]

    monkeypatch.setattr(video.subprocess, 'Popen', fake_popen)
    sink = FFmpegSink('out.mp4', 4, 2, 30, ffmpeg='ffmpeg')
    frame = np.arange(24, dtype=np.uint8).reshape(2, 4, 3)
    sink.open()
    sink.write(frame)
    sink.write(frame)
    stdin = procs[0].stdin
    if returncode == 0:
        sink.close()
    else:
        with pytest.raises(RuntimeError):
            sink.close()
    assert stdin.closed
    assert stdin.chunks == [frame.tobytes()] * 2
    assert sink.frames_written == 2


class _ClosedStdin(_FakeStdin):
    def write(self, data):
        raise BrokenPipeError(32, 'Broken pipe')


def test_encoder_exit_mid_stream_raises_runtime_error(monkeypatch):
    def fake_popen(cmd, **kwargs):
        kwargs['stderr'].write(b'Unable to find a suitable output format for out.xyz\n')
        proc = _FakeProc(1)
        proc.stdin = _ClosedStdin()
        return proc

    monkeypatch.setattr(video.subprocess, 'Popen', fake_popen)
    sink = FFmpegSink('out.xyz', 4, 2, 30, ffmpeg='ffmpeg')
    with pytest.raises(RuntimeError, match='status 1') as excinfo:
        with sink:
            sink.write(np.zeros((2, 4, 3), dtype=np.uint8))
    assert 'suitable output format' in str(excinfo.value)
    assert sink.frames_written == 0


def test_png_sequence(tmp_path):
    out = tmp_path / 'frames'
    frame = np.zeros((20, 30, 3), dtype=np.uint8)
    frame[5, 10] = (255, 0, 0)
    with PngSequenceSink(str(out)) as sink:
        sink.write(frame)
        sink.write(frame)
    assert sorted(os.listdir(out)) == ['frame_00000.png', 'frame_00001.png']
