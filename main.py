# main.py
"""
Planet Builder - terraform a small planet tile by tile.

Command-line entry point: builds the simulation context and hands it to the
pygame frontend.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from config import DEFAULT_MAP_SIZE, DEFAULT_SAVE_PATH, MAX_MAP_SIZE, MIN_MAP_SIZE
from game_state import LoadWorld, build_initial_state
from logging_config import configure_logging, parse_log_level
from world.assets import default_asset_attributes, load_asset_attributes

logger = logging.getLogger(__name__)


def _map_dimension(value: str) -> int:
    size = int(value)
    if not MIN_MAP_SIZE <= size <= MAX_MAP_SIZE:
        raise argparse.ArgumentTypeError(f"must be between {MIN_MAP_SIZE} and {MAX_MAP_SIZE}")
    return size


def _log_level(value: str) -> str:
    try:
        return parse_log_level(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Planet Builder")
    parser.add_argument("--edit-map", action="store_true",
                        help="Enable the map editor (biome painting, new world)")
    parser.add_argument("--width", type=_map_dimension, default=DEFAULT_MAP_SIZE[0],
                        help="Map width in tiles")
    parser.add_argument("--height", type=_map_dimension, default=DEFAULT_MAP_SIZE[1],
                        help="Map height in tiles")
    parser.add_argument("--assets", metavar="FILE",
                        help="JSON file with biome/structure attributes")
    parser.add_argument("--save-path", default=DEFAULT_SAVE_PATH,
                        help="File used by save (F5) and load (F9)")
    parser.add_argument("--load", action="store_true",
                        help="Load --save-path on startup")
    parser.add_argument("--log-level", type=_log_level, default=None,
                        help="Log level (default: $PLANET_LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse command-line arguments and run the game."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.assets:
        try:
            assets = load_asset_attributes(args.assets)
        except (OSError, ValueError, KeyError) as e:
            logger.error("Cannot load asset attributes from %s: %s", args.assets, e)
            return 1
    else:
        assets = default_asset_attributes()

    ctx = build_initial_state(args.width, args.height, assets=assets, edit_map=args.edit_map)
    if args.load:
        ctx.intents.push(LoadWorld(args.save_path))

    from pygame_runner import run
    try:
        run(ctx, save_path=args.save_path)
    except KeyboardInterrupt:
        ctx.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
