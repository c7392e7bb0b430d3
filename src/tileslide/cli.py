"""
command line entry point
"""
import argparse
import sys

from tileslide.board import CHANCE_FOR_2
from tileslide.config import GameConfig, parse_size
from tileslide.logging_config import get_logger, setup_logging


logger = get_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tileslide",
        description="Slide and merge tiles until no move is left.",
    )
    parser.add_argument("--size", default="4x4",
                        help="board size as HEIGHTxWIDTH (default: 4x4)")
    parser.add_argument("--chance-for-2", type=float, default=CHANCE_FOR_2,
                        help="probability that a new tile is a 2 (default: %(default)s)")
    parser.add_argument("--initial-tiles", type=int, default=1,
                        help="tiles placed on a fresh board (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for tile spawning")
    parser.add_argument("--gui", action="store_true",
                        help="play in a pygame window instead of the terminal")
    parser.add_argument("--strict", action="store_true",
                        help="stop on rule invariant violations instead of logging them")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-file", default=None,
                        help="write log records here instead of stderr")
    return parser


def config_from_args(parser, args):
    try:
        height, width = parse_size(args.size)
        return GameConfig(
            height=height,
            width=width,
            chance_for_2=args.chance_for_2,
            initial_tiles=args.initial_tiles,
            seed=args.seed,
            strict=args.strict,
        )
    except ValueError as e:
        parser.error(str(e))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(parser, args)

    setup_logging(args.log_level, args.log_file)
    logger.info("starting %s frontend with %s", "pygame" if args.gui else "curses", config)

    # frontends are imported lazily so the terminal game does not need a display
    if args.gui:
        from tileslide.game_gui import main as run_frontend
    else:
        from tileslide.terminal import main as run_frontend
    return run_frontend(config)


if __name__ == "__main__":
    sys.exit(main())
