from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from . import __version__
from .config import DungeonGeneratorConfig, load_config
from .dungeon.generator import generate_dungeon, generate_portal_room, generate_portal_room_for
from .dungeon.grid import GeneratedDungeon
from .dungeon.pathfinding import find_path
from .errors import ConfigError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _coord(text: str) -> Tuple[int, int]:
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")
    return x, y


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mempal",
        description="Generate multi-elevation dungeons and walk them with A*",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=None, help="YAML file overriding the packaged defaults")
    common.add_argument("--width", type=int, default=None, help="Grid width in tiles")
    common.add_argument("--height", type=int, default=None, help="Grid height in tiles")
    common.add_argument("--seed", type=int, default=None, help="Generation seed (time based if omitted)")
    portal = common.add_mutually_exclusive_group()
    portal.add_argument("--portal-seed", type=int, default=None, help="Generate the portal room for this seed")
    portal.add_argument("--portal-id", default=None, help="Generate the portal room for this portal id")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")
    common.add_argument(
        "--debug-module",
        action="append",
        default=None,
        metavar="MODULE",
        help="Enable debug logging for one pipeline module, e.g. dungeon.stairs (repeatable)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    gen = sub.add_parser("generate", parents=[common], help="Print a generated dungeon")
    gen.add_argument("--format", choices=("json", "ascii"), default="json")

    path = sub.add_parser("path", parents=[common], help="Print the A* path between two tiles")
    path.add_argument("--start", type=_coord, default=None, help="Start tile X,Y (defaults to spawn)")
    path.add_argument("--goal", type=_coord, required=True, help="Goal tile X,Y")
    return parser.parse_args(argv)


def build_dungeon(args: argparse.Namespace) -> GeneratedDungeon:
    if args.portal_seed is not None:
        return generate_portal_room(args.portal_seed)
    if args.portal_id is not None:
        return generate_portal_room_for(args.portal_id)

    cfg = load_config(args.config)
    overrides = {}
    if args.width is not None:
        overrides["grid_width"] = args.width
    if args.height is not None:
        overrides["grid_height"] = args.height
    if args.seed is not None:
        overrides["seed"] = args.seed
    cfg = dataclasses.replace(cfg, **overrides)
    return generate_dungeon(cfg)


def _generate(args: argparse.Namespace, dungeon: GeneratedDungeon) -> None:
    if args.format == "ascii":
        print("\n".join(dungeon.grid.to_str_lines()))
    else:
        print(json.dumps(dungeon.to_dict(), indent=2, sort_keys=True))


def _path(args: argparse.Namespace, dungeon: GeneratedDungeon) -> None:
    grid = dungeon.grid
    start = args.start or (grid.spawn_point.x, grid.spawn_point.y)
    nodes = find_path(start, args.goal, grid)
    payload = {
        "grid": grid.id,
        "start": list(start),
        "goal": list(args.goal),
        "path": [dataclasses.asdict(n) for n in nodes],
    }
    print(json.dumps(payload, indent=2, sort_keys=True))


def main(argv: Optional[list] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING, args.debug_module)

    try:
        dungeon = build_dungeon(args)
    except ConfigError as exc:
        print(f"mempal: invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.command == "generate":
        _generate(args, dungeon)
    else:
        _path(args, dungeon)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
