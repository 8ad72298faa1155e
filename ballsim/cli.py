import argparse
import logging
import sys

import numpy as np

import ballsim as B
from ballsim.config import MassLaw, SimConfig, parse_hex_color
from ballsim.errors import ConfigurationError, PlacementError
from ballsim.placement import place_balls
from ballsim.renderer import Renderer
from ballsim.stepper import Stepper
from ballsim.video import FFmpegSink, PngSequenceSink

logger = logging.getLogger(__name__)


def record_video(config: SimConfig, sink, seed=None) -> Stepper:
    """Place balls, simulate config.n_frames frames and feed each rendered frame to sink."""
    config.validate()
    world = place_balls(config, np.random.RandomState(seed))
    stepper = Stepper(world, fps=config.fps)
    renderer = Renderer(config.width, config.height, config.background_color)

    with sink:
        for frame in range(config.n_frames):
            sink.write(renderer.render(stepper.step()))
            if (frame + 1) % (config.fps * 10) == 0:
                logger.info("frame %d/%d (%d collisions so far)",
                            frame + 1, config.n_frames, len(stepper.collision_log))
    return stepper


def preview(config: SimConfig, seed=None):
    config.validate()
    world = place_balls(config, np.random.RandomState(seed))
    stepper = Stepper(world, fps=config.fps)
    renderer = Renderer(config.width, config.height, config.background_color)
    renderer.play((stepper.step() for _ in range(config.n_frames)), fps=config.fps)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ballsim',
        description="Render a video of balls bouncing elastically in a closed box.")
    parser.add_argument('destination_file', metavar='FILE',
                        help="The file to save the video to")
    parser.add_argument('-l', '--length', type=int, default=B.DURATION, metavar='SECONDS',
                        help="The length of the video in seconds")
    parser.add_argument('-f', '--fps', type=int, default=B.FPS,
                        help="The frames per second of the video")
    parser.add_argument('-w', '--width', type=int, default=B.WIDTH,
                        help="The width of the video")
    parser.add_argument('-y', '--height', type=int, default=B.HEIGHT,
                        help="The height of the video")
    parser.add_argument('-n', '--num_of_balls', type=int, default=B.N_BALLS, metavar='NUM',
                        help="The number of balls to simulate")
    parser.add_argument('-b', '--background_color', type=parse_hex_color, default='#ffffff',
                        metavar='COLOR', help="The background color of the video (HEX)")
    parser.add_argument('-c', '--ball_color', type=parse_hex_color, default='#000000',
                        metavar='COLOR', help="The color of the balls (HEX)")
    parser.add_argument('-C', '--ball_color_random', action='store_true',
                        help="Use random color for the balls")
    parser.add_argument('-r', '--ball_radius_min', type=int, default=B.RADIUS_RANGE[0],
                        metavar='RADIUS', help="The minimum radius of the balls")
    parser.add_argument('-R', '--ball_radius_max', type=int, default=B.RADIUS_RANGE[1],
                        metavar='RADIUS', help="The maximum radius of the balls")
    parser.add_argument('-s', '--ball_speed_min', type=float, default=B.SPEED_RANGE[0],
                        metavar='SPEED', help="The minimum speed of the balls")
    parser.add_argument('-S', '--ball_speed_max', type=float, default=B.SPEED_RANGE[1],
                        metavar='SPEED', help="The maximum speed of the balls")
    parser.add_argument('-m', '--ball_mass', choices=['circle', 'ball'], default=B.MASS_LAW,
                        help="The way of calculating the mass of the balls")
    parser.add_argument('--seed', type=int, default=None,
                        help="Random seed (same seed, same video)")
    parser.add_argument('--exact-placement', action='store_true',
                        help="Use an exact circle test instead of the box test when placing balls")
    parser.add_argument('--frames-dir', default=None, metavar='DIR',
                        help="Write PNG frames to DIR instead of encoding with ffmpeg")
    parser.add_argument('--preview', action='store_true',
                        help="Show the simulation in a window instead of writing a file")
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def config_from_args(args: argparse.Namespace) -> SimConfig:
    return SimConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        duration=args.length,
        n_balls=args.num_of_balls,
        radius_range=(args.ball_radius_min, args.ball_radius_max),
        speed_range=(args.ball_speed_min, args.ball_speed_max),
        mass_law=MassLaw.parse(args.ball_mass),
        background_color=args.background_color,
        ball_color=args.ball_color,
        random_color=args.ball_color_random,
        exact_placement=args.exact_placement,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    try:
        config = config_from_args(args).validate()
        if args.preview:
            preview(config, seed=args.seed)
            return 0
        if args.frames_dir:
            sink = PngSequenceSink(args.frames_dir)
        else:
            sink = FFmpegSink(args.destination_file, config.width, config.height, config.fps)
        stepper = record_video(config, sink, seed=args.seed)
    except (ConfigurationError, PlacementError, FileNotFoundError, RuntimeError) as e:
        print(e, file=sys.stderr)
        return 2

    print(f"Collisions: {len(stepper.collision_log)}")
    print(f"Saved: {args.frames_dir or args.destination_file}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
